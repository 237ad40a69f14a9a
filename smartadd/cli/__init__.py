# smartadd/cli/__init__.py
# Typer CLI entry point & commands
