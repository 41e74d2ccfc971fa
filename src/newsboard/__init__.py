"""newsboard: paginated, filterable news source and article browsing."""

__version__ = "0.1.0"
