"""Browser end-to-end suite for the walk-in bath quote request site."""

__version__ = "1.0.0"
