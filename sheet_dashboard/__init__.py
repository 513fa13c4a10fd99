"""
Sheet Dashboard - Liquidity-ranked stock cards from a published Google Sheet

Fetches a Google Sheet published as CSV, parses it into stock records with a
tolerant header-detecting CSV parser, and ranks the records by liquidity for
display as cards.
"""

__version__ = "0.1.0"
__author__ = "Sheet Dashboard Team"
