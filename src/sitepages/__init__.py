"""sitepages: page collection index for Hugo sites."""

__version__ = "0.1.0"
