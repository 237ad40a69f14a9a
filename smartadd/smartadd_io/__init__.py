# smartadd/smartadd_io/__init__.py
# Shared console & file helpers
