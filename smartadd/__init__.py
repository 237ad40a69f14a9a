# smartadd/__init__.py
# AI-assisted entry reconciliation for admin collections

__version__ = "0.1.0"
