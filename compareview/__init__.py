"""compareview: version and diff cache for reviewing add-on versions side by side."""

__version__ = "0.1.0"
