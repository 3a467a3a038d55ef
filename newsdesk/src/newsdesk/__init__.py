"""newsdesk: market news feed aggregation for the analysis dashboard."""

__version__ = "0.1.0"
