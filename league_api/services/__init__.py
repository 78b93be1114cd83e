"""Business rules for users, teams, rosters and fixtures."""
