# smartadd/core/__init__.py
# Pure workflow core: session, curator, diff, search & reconciliation controller
