"""Sports court reservations backend."""

__version__ = "0.1.0"
