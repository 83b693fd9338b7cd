"""`python -m stylus_bindgen` runs the CLI."""

from .cli.main import run

if __name__ == "__main__":
    run()
