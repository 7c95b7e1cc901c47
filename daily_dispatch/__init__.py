"""Daily Dispatch - recent articles from a configurable set of news sites."""

__version__ = "1.0.0"
