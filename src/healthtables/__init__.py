"""healthtables - map inconsistently headed health-reporting tables onto a fixed schema."""

__version__ = "0.1.0"
