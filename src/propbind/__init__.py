"""propbind — bind property files into typed, immutable configuration objects."""

__version__ = "0.3.0"
