"""
Administrative commands run out of band from the API process.

    python -m popaloon.tasks init-db
    python -m popaloon.tasks add-balloon confetti --value 3
    python -m popaloon.tasks set-balloon-value confetti 5
    python -m popaloon.tasks regenerate-token <user id>
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from sqlmodel import Session, SQLModel, select

from . import models  # noqa: F401 - ensure models are registered with SQLModel
from .core import DEFAULT_BALLOON_NAME, ResultCache, engine
from .core.errors import PopaloonError
from .core.logging import setup_logging
from .core.security import create_access_token, decode_access_token
from .models import BalloonType
from .services import create_balloon_type, update_balloon_value

logger = logging.getLogger("popaloon.tasks")

SEED_BALLOONS = ((DEFAULT_BALLOON_NAME, 1), ("confetti", 1))


def init_db(session: Session, cache: ResultCache) -> List[str]:
    """Create tables and the seed balloon types; return the names added."""

    SQLModel.metadata.create_all(session.get_bind())
    added: List[str] = []
    for name, value in SEED_BALLOONS:
        if session.exec(select(BalloonType).where(BalloonType.name == name)).first():
            continue
        create_balloon_type(session, cache, name, value)
        added.append(name)
    return added


def regenerate_token(user_id: str) -> str:
    token = create_access_token(user_id)
    if decode_access_token(token) != user_id:
        raise RuntimeError("Token is invalid")
    return token


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="popaloon.tasks")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("init-db", help="create tables and seed balloon types")

    add = commands.add_parser("add-balloon", help="add a balloon type")
    add.add_argument("name")
    add.add_argument("--value", type=int, default=1)

    value = commands.add_parser("set-balloon-value", help="change a balloon's value")
    value.add_argument("name")
    value.add_argument("value", type=int)

    token = commands.add_parser("regenerate-token", help="issue a token for a user")
    token.add_argument("user_id")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    setup_logging()
    args = build_parser().parse_args(argv)
    cache = ResultCache()

    try:
        if args.command == "regenerate-token":
            print(regenerate_token(args.user_id))
            return 0

        with Session(engine) as session:
            if args.command == "init-db":
                added = init_db(session, cache)
                logger.info("Database initialised, seeded: %s", ", ".join(added) or "nothing")
            elif args.command == "add-balloon":
                info = create_balloon_type(session, cache, args.name, args.value)
                logger.info("Balloon %r added with id %s", info.name, info.id)
            elif args.command == "set-balloon-value":
                info = update_balloon_value(session, cache, args.name, args.value)
                logger.info("Balloon %r is now worth %s", info.name, info.value)
    except (PopaloonError, ValueError) as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
