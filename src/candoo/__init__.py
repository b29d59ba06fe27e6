"""candoo: ticket-tracking domain core."""

__version__ = "0.1.0"
