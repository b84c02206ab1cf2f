"""Entry point for running octomate as a module."""

from octomate.cli import cli

if __name__ == "__main__":
    cli()
