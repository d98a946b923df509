"""Pop-a-loon scoring and leaderboard backend."""
