"""Utility functions for flashsets."""

from pathlib import Path
from typing import Any

import yaml

from .config import LOGGER
from .errors import ItemsFileError


def normalize_name(candidate: str) -> str:
    """
    Normalize a collection name into its uniqueness key.

    Surrounding whitespace is trimmed and the result is case-folded, so
    "  Word Capitals" and "word CAPITALS " map to the same key.
    """
    return candidate.strip().casefold()


def is_blank_name(candidate: str) -> bool:
    """Return True when the candidate name is empty after trimming."""
    return not candidate.strip()


def load_items(path: str) -> list[Any]:
    """
    Load an item set from a YAML or JSON file.

    Accepts either a top-level list or a mapping holding the list under
    "items" or "flashcards":

        flashcards:
          - front: Capital of France
            back: Paris

    Returns: the items in file order
    """
    items_path = Path(path)
    if not items_path.exists():
        raise ItemsFileError(path, "file does not exist")

    try:
        with open(items_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ItemsFileError(path, f"invalid YAML/JSON ({e})") from e

    if isinstance(data, dict):
        data = data.get("items", data.get("flashcards"))

    if not isinstance(data, list):
        raise ItemsFileError(path, "expected a list of items")
    if not data:
        raise ItemsFileError(path, "the item list is empty")

    LOGGER.debug(f"Loaded {len(data)} items from {items_path}")
    return data
