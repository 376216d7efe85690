"""
Main entry point for the pbxsync CLI.
"""

from pbxsync.cli import cli


def main() -> None:
    """Main function for the pbxsync CLI."""
    cli()


if __name__ == "__main__":
    main()
