"""Domain services: aggregation, pacing, submissions and administration."""
