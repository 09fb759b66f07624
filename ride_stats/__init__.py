"""Season analysis of a Strava cycling export."""

__version__ = "1.0.0"
