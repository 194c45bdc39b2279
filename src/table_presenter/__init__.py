"""Top-level package for Table Presenter."""

from importlib import metadata


def get_version() -> str:
    """Return the installed package version."""
    try:
        return metadata.version("table-presenter")
    except metadata.PackageNotFoundError:
        return "0.1.0"


__all__ = ["get_version"]
