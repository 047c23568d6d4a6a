"""Quote database: categories, records, storage and the session manager."""

from quotebook.quotes.schemas import (
    ALL_CATEGORIES,
    Category,
    Quote,
    QuoteAction,
    QuoteDraft,
    to_category_set,
    to_selection,
)
from quotebook.quotes.store import (
    PersistenceReadError,
    PersistenceWriteError,
    QuoteStore,
    QuoteStoreError,
    QuoteView,
    SerializationError,
    filter_by_categories,
    search_quotes,
)
from quotebook.quotes.manager import QuoteManager

__all__ = [
    # Manager
    "QuoteManager",
    # Store
    "QuoteStore",
    "QuoteView",
    "filter_by_categories",
    "search_quotes",
    # Errors
    "QuoteStoreError",
    "PersistenceReadError",
    "PersistenceWriteError",
    "SerializationError",
    # Schemas
    "ALL_CATEGORIES",
    "Category",
    "Quote",
    "QuoteAction",
    "QuoteDraft",
    "to_category_set",
    "to_selection",
]
