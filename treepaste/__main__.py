"""Allow ``python -m treepaste``."""

from treepaste.cli import app

if __name__ == "__main__":
    app()
