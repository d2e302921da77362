"""Helper functions for CLI commands to reduce duplication."""

import json
from typing import Any

from flashsets.config import LOGGER


def format_item(item: Any, width: int = 70) -> str:
    """
    Render one item on a single line for listings.
    Flashcard-shaped items show as "front -> back", anything else as JSON.
    """
    if isinstance(item, dict) and "front" in item and "back" in item:
        text = f"{item['front']} -> {item['back']}"
    else:
        text = json.dumps(item, ensure_ascii=False, default=str)

    if len(text) > width:
        text = text[: width - 3] + "..."
    return text


def confirm(prompt: str) -> bool:
    """Ask a yes/no question on stdin; anything but 'y' means no."""
    response = input(f"{prompt} (y/N): ")
    return response.strip().lower() == "y"


def log_table(headers: list[tuple[str, int]], rows: list[list[Any]]) -> None:
    """Log rows as a fixed-width table."""
    LOGGER.info(" | ".join(f"{title:<{width}}" for title, width in headers))
    LOGGER.info("-" * (sum(width for _, width in headers) + 3 * (len(headers) - 1)))
    for row in rows:
        LOGGER.info(
            " | ".join(
                f"{str(value):<{width}}" for value, (_, width) in zip(row, headers)
            )
        )
