"""Command-line interface for aura-launcher."""
