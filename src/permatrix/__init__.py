"""permatrix - permission matrix resolution engine for the incentive admin console."""

__version__ = "0.1.0"
