"""Content-addressed cache for large binary dependency trees."""

__version__ = "0.1.0"
