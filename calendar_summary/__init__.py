"""
Calendar Summary.
Extracts activity blocks from rendered calendar pages and totals the time
spent per activity or per color.
"""

__version__ = "0.1.0"
