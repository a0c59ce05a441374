"""
Weather Report Service

Builds precipitation and temperature reports for a postal code from two
observation providers and stores them in PostgreSQL.
"""

__version__ = "1.0.0"
