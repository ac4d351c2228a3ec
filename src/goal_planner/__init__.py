"""Break a free-text goal into an ordered, trackable task plan."""

__version__ = "0.1.0"
