# scaffel/__main__.py
"""Entry point for ``python -m scaffel``."""

from scaffel.cli import app

if __name__ == "__main__":
    app()
