"""Command modules for the flashsets CLI."""

from .commands import collection

# Registry of all command modules
COMMAND_MODULES = [
    collection,  # Collection naming and storage (save, suggest, list, show, delete)
]


def setup_all_parsers(subparsers):
    """Set up all command parsers by calling each module's setup_parser function."""
    for module in COMMAND_MODULES:
        module.setup_parser(subparsers)
