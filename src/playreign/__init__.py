"""PlayReign - who held #1 in your play history, and for how long."""

__version__ = "0.1.0"
