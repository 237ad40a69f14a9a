# smartadd/__main__.py
# Allow `python -m smartadd`

from .cli.app import app

if __name__ == "__main__":
    app()
