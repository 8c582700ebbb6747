"""Permission-aware page lookup over a wiki metadata index."""

__version__ = "1.0.0"
