"""Entry point for ``python -m dirgrep``."""

from .cli import app


if __name__ == "__main__":
    app(prog_name="dirgrep")
