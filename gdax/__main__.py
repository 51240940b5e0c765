"""Entry point for ``python -m gdax``."""

from gdax.main import run

if __name__ == "__main__":
    run()
