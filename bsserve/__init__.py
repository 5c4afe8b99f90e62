"""Serve a static site through a supervised Browsersync process."""

__version__ = "0.1.0"
