"""Sitewright: prompt-to-website builder with a self-correcting build loop."""

__version__ = "0.1.0"
