"""CineScape: animation background creator and expander."""

__version__ = "0.1.0"
