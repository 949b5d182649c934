"""Stock quote dashboard backed by Yahoo Finance."""

__version__ = "0.1.0"
