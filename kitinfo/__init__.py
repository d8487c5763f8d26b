"""Interactive console tool for managing Typekit kits."""

__version__ = "0.1.0"
