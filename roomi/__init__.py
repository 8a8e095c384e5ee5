"""Roomi availability service — booking interval reasoning for the channel manager."""

__version__ = "0.1.0"
