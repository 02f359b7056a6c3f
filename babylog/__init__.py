"""Baby care tracking service with hashtag correlation analysis."""
