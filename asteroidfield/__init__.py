"""A top-down asteroid shooter with mass-based bouncing and splitting asteroids."""

__version__ = "0.1.0"