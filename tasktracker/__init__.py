"""Personal task tracker: REST backend and single-page view."""

__version__ = "0.1.0"
