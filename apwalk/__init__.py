"""Guided tutorials for AP STEM visualizations."""

__version__ = "0.1.0"
