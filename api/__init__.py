"""HTTP API for the strategy trainer."""
