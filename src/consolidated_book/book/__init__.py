"""Book storage, ordering and weighted-price engines."""

from consolidated_book.book.view import BookDisplay, BookView

__all__ = ["BookDisplay", "BookView"]
