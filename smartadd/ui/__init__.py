# smartadd/ui/__init__.py
# Rich rendering & key handling for previews and search results
