"""Pushup tracker: shared-secret pushup logging with a public odometer board."""

__version__ = "0.1.0"
