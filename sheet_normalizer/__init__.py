"""Map arbitrary tabular data onto the fixed 10-column customer purchase schema."""

__version__ = "0.1.0"
