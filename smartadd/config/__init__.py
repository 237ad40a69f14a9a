# smartadd/config/__init__.py
# Settings & environment credential registry
