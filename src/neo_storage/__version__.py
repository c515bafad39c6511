"""Version information for neo-storage."""

__version__ = "1.0.0"
