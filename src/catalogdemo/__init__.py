"""
Catalog clone demo: copy catalog objects between two accounts.
"""
__version__ = "0.1.0"
