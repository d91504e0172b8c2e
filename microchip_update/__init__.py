"""Microchip registration updates derived from two Dog Information Report snapshots."""

__version__ = "0.3.0"
