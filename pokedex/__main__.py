"""Allows `python -m pokedex`."""

from pokedex.cli.main import app


def main() -> None:
    app()


if __name__ == "__main__":
    main()
