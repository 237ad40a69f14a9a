# smartadd/cli/commands/__init__.py
# CLI command modules (registered on import by cli/app.py)
