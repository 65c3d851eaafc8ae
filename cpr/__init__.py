"""Campaign Performance Report — monthly ad performance review builder."""

__version__ = "0.1.0"
