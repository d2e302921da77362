"""Command handlers for the flashsets CLI."""
