"""
Family Finance Tracker - Client Package

Python client core for a household finance tracker: members, bills,
recurring bills, mortgages and financed expenses, with payments split
across the members of a household.

DESIGN PRINCIPLES:
1. Money is always integer cents
2. The server owns persistence; this package shapes requests and parses responses
3. Formatting never raises - bad input degrades to a readable sentinel
4. Transport failures surface immediately, with the status code attached
5. Configuration is resolved once, at startup
"""

__version__ = "1.0.0"
__author__ = "Family Finance Tracker Team"
