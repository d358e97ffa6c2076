"""smogmap - pollution-monitored cities enriched with Wikipedia summaries."""

__version__ = "0.1.0"
