"""Garment photo analysis and similar-product search."""

__version__ = "0.1.0"
