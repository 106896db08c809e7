"""Terminal RSS reader: feed fetching, settings storage and an interactive reader."""

__version__ = "0.1.0"

__all__ = ["__version__"]