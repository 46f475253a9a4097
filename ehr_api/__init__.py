"""In-memory electronic health record API."""

__version__ = "1.0.0"
