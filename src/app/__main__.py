"""Entry point: python -m src.app"""

from src.app.cli import app

if __name__ == "__main__":
    app()
