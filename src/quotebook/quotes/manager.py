"""Manager owning the quote collection for one session."""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Generator, Iterable, Optional, Sequence

from .schemas import Category, Quote, QuoteAction, QuoteDraft, to_category_set
from .store import (
    QuoteStore,
    QuoteView,
    canonical_order,
    filter_by_categories,
    search_quotes,
)

if TYPE_CHECKING:
    from ..export.exporter import ExportFormat, ExportResult

logger = logging.getLogger(__name__)


class QuoteManager:
    """Single owner of the in-memory quote collection."""

    def __init__(self, store: QuoteStore, quotes: Optional[list[Quote]] = None):
        """Initialize the quote manager.

        Args:
            store: Store used for persistence
            quotes: Initial collection. Use ``open`` to load it from the store.
        """
        self.store = store
        self.quotes: list[Quote] = quotes if quotes is not None else []

    @classmethod
    def open(cls, store: QuoteStore) -> "QuoteManager":
        """Create a manager with the collection loaded from ``store``."""
        return cls(store, store.load())

    @contextmanager
    def session(self) -> Generator["QuoteManager", None, None]:
        """Run a session that sorts and saves the collection on exit.

        Nothing is written if the block raises.
        """
        yield self
        self.close()

    def close(self) -> bool:
        """Sort the collection and save it.

        Returns:
            True if the save succeeded
        """
        self.quotes[:] = canonical_order(self.quotes)
        return self.store.save(self.quotes)

    # ========================================================================
    # Editing
    # ========================================================================

    def add_quote(self, draft: QuoteDraft) -> Quote:
        """Add the quote described by ``draft`` and re-sort.

        Args:
            draft: Validated entry form

        Returns:
            The quote that was added
        """
        quote = draft.to_quote()
        self.store.add(quote, self.quotes)
        self.store.sort(self.quotes)
        logger.debug("Added quote %r (%d total)", quote.short_text, self.total)
        return quote

    def remove_quote(self, quote: Quote) -> bool:
        """Remove a quote. Returns False if it was not in the collection."""
        return self.store.remove(quote, self.quotes)

    def edit_quote(self, quote: Quote) -> QuoteDraft:
        """Take a quote out of the collection for editing.

        The quote is removed; adding the returned draft (possibly changed)
        puts it back.
        """
        draft = QuoteDraft.from_quote(quote)
        self.store.remove(quote, self.quotes)
        return draft

    def handle_action(self, action: QuoteAction, quote: Quote) -> Optional[QuoteDraft]:
        """Apply what the user chose for a selected quote.

        Returns:
            A prefilled draft for ``QuoteAction.EDIT``, otherwise None
        """
        if action == QuoteAction.DELETE:
            self.remove_quote(quote)
        elif action == QuoteAction.EDIT:
            return self.edit_quote(quote)
        return None

    def find_by_text(
        self, text: str, categories: Optional[Iterable[Category]] = None
    ) -> Optional[Quote]:
        """Find the first quote with exactly this text.

        Args:
            text: Quote text, surrounding whitespace ignored
            categories: If given, the quote's categories must equal these

        Returns:
            Matching quote or None
        """
        text = text.strip()
        wanted = frozenset(categories) if categories is not None else None
        for quote in self.quotes:
            if quote.text != text:
                continue
            if wanted is None or quote.categories == wanted:
                return quote
        return None

    # ========================================================================
    # Browsing
    # ========================================================================

    def by_categories(self, wanted: Iterable[Category]) -> QuoteView:
        """Quotes tagged with any of ``wanted``."""
        return filter_by_categories(self.quotes, wanted)

    def by_selection(self, selection: Sequence[bool]) -> QuoteView:
        """Quotes matching a checkbox selection."""
        return filter_by_categories(self.quotes, to_category_set(selection))

    def search(self, term: str) -> QuoteView:
        """Quotes containing ``term``."""
        return search_quotes(self.quotes, term)

    @property
    def total(self) -> int:
        """Number of quotes in the collection."""
        return len(self.quotes)

    # ========================================================================
    # Export
    # ========================================================================

    def export(
        self, output_path: Path, format: Optional["ExportFormat"] = None
    ) -> "ExportResult":
        """Export the current collection (CSV unless another format is given)."""
        from ..export.exporter import ExportFormat, QuoteExporter

        format = format or ExportFormat.CSV
        return QuoteExporter().export(self.quotes, output_path, format)
