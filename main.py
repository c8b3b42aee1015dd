"""Entry point for running the plotplan command line tool."""

from plotplan.cli import run


if __name__ == "__main__":
    run()
