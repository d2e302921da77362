"""Name and save flashcard collections per owner."""

__version__ = "0.1.0"
