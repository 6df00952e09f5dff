"""Entry point for the aura-launcher CLI."""

import sys


def main() -> int:
    """Main entry point."""
    from aura_launcher.cli.commands import cli_main
    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
