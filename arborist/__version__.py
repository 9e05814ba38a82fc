"""Version information for arborist."""

__version__ = "0.1.0"
