"""ridecalc - daily earnings and maintenance reserve for rideshare drivers."""

__version__ = "0.1.0"
