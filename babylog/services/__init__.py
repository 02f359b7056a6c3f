"""Domain services: statistics, event model, matching and analysis."""
