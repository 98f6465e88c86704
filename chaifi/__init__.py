"""
Chai-fi counter: point of sale, stock ledger and sales summaries
"""
__version__ = "0.1.0"
