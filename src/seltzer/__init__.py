"""Seltzer: a browser automation server driving Selenium sessions over a command protocol."""

__version__ = "0.1.0"
