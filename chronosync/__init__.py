"""ChronoSync backend: firms, users and JWT session authentication."""

__version__ = "0.1.0"
