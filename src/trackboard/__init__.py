"""Trackboard - Project tracking with bulk JSON import."""

__version__ = "0.1.0"


def get_version() -> str:
    """Return the current version of Trackboard."""
    return __version__
