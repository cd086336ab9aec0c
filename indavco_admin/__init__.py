"""Administration console for the INDAVCO content API."""

__version__ = "0.1.0"
