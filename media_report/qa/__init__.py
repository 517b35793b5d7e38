"""QA validation package for exported report decks.

Validates a generated PPTX against its report view — checks slide count,
contents rows and page numbers, and module slide titles.
"""

from .validator import (
    DeckValidator,
    Issue,
    QAResult,
    validate_deck,
)

__all__ = [
    "DeckValidator",
    "Issue",
    "QAResult",
    "validate_deck",
]
