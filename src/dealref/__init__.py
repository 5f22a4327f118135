"""dealref — monthly breakdown of closed deals by initial referrer."""

__version__ = "0.1.0"
