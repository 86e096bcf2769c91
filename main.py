"""Main entry point for reviewroulette."""

from reviewroulette.cli import app


def main() -> None:
    """Run the reviewroulette CLI."""
    app()


if __name__ == "__main__":
    main()
