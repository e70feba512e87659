"""AAC board editor core: board IR, validation, workspace and exporters."""

__version__ = "0.3.0"
