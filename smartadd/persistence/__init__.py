# smartadd/persistence/__init__.py
# Bearer credentials & async REST client for admin collections
