"""Quote database storage.

The collection is a plain ``list[Quote]`` owned by the caller and passed into
every operation. ``QuoteStore`` only knows where the collection lives on disk.

The file is a JSON array of ``{"text": ..., "categories": [...]}`` records.
Read and write failures are logged and recovered: an unreadable file loads
as an empty collection that is never saved back over the unreadable file,
and a failed write leaves both the data in memory and the previous file.
"""

import json
import logging
import os
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional, Union

from pydantic import ValidationError

from .schemas import Category, Quote

logger = logging.getLogger(__name__)


class QuoteStoreError(Exception):
    """Base error for quote persistence."""


class PersistenceReadError(QuoteStoreError):
    """The database file is missing or cannot be read."""


class PersistenceWriteError(QuoteStoreError):
    """The database file cannot be written."""


class SerializationError(QuoteStoreError):
    """The database file does not contain valid quote records."""


class QuoteView:
    """Lazy, restartable view over the quotes matching a predicate.

    Every iteration walks the live collection again, so the view reflects
    changes made after it was created.
    """

    def __init__(self, quotes: list[Quote], predicate: Callable[[Quote], bool]):
        self._quotes = quotes
        self._predicate = predicate

    def __iter__(self) -> Iterator[Quote]:
        return (quote for quote in self._quotes if self._predicate(quote))

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __bool__(self) -> bool:
        return any(True for _ in self)


def filter_by_categories(quotes: list[Quote], wanted: Iterable[Category]) -> QuoteView:
    """Quotes tagged with at least one of ``wanted``, in collection order.

    An empty ``wanted`` matches nothing.
    """
    wanted = frozenset(wanted)
    return QuoteView(quotes, lambda quote: quote.has_any(wanted))


def search_quotes(quotes: list[Quote], term: str) -> QuoteView:
    """Quotes whose text contains ``term`` (case-sensitive), in collection order.

    An empty term matches every quote.
    """
    return QuoteView(quotes, lambda quote: term in quote.text)


def canonical_order(quotes: Iterable[Quote]) -> list[Quote]:
    """Sort quotes canonically and drop structural duplicates."""
    ordered: list[Quote] = []
    for quote in sorted(quotes, key=Quote.sort_key):
        if ordered and ordered[-1] == quote:
            continue
        ordered.append(quote)
    return ordered


class QuoteStore:
    """Reads and writes the quote database file."""

    def __init__(self, path: Union[str, Path]):
        """Initialize the store.

        Args:
            path: Location of the JSON database file
        """
        self.path = Path(path).expanduser()
        self.read_error: Optional[QuoteStoreError] = None

    # ========================================================================
    # Persistence
    # ========================================================================

    def read(self) -> list[Quote]:
        """Read the database file.

        Raises:
            PersistenceReadError: If the file is missing or unreadable
            SerializationError: If the content is not a list of quote records
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise PersistenceReadError(f"Database file not found: {self.path}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceReadError(f"Cannot read {self.path}: {e}") from e

        try:
            data = json.loads(raw)
        except (ValueError, RecursionError) as e:
            raise SerializationError(f"Invalid JSON in {self.path}: {e}") from e

        if not isinstance(data, list):
            raise SerializationError(
                f"Expected a list of quotes in {self.path}, got {type(data).__name__}"
            )

        try:
            return [Quote.model_validate(record) for record in data]
        except ValidationError as e:
            raise SerializationError(f"Invalid quote record in {self.path}: {e}") from e

    def write(self, quotes: list[Quote]) -> None:
        """Write the collection to the database file.

        The content goes to a sibling ``.tmp`` file which then replaces the
        database, so a failed write leaves the previous save intact.

        Raises:
            PersistenceWriteError: If the collection cannot be encoded or
                the file cannot be written
        """
        try:
            records = [quote.model_dump(mode="json") for quote in quotes]
            payload = (json.dumps(records, indent=2, ensure_ascii=False) + "\n").encode("utf-8")
        except ValueError as e:
            raise PersistenceWriteError(f"Cannot encode quotes for {self.path}: {e}") from e

        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "wb") as f:
                f.write(payload)
            os.replace(tmp_path, self.path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            raise PersistenceWriteError(f"Cannot write {self.path}: {e}") from e
        self.read_error = None

    def load(self) -> list[Quote]:
        """Load the collection, falling back to an empty one.

        If an existing file could not be read, ``read_error`` keeps the
        reason and ``save`` will not replace that file with an empty
        collection.

        Returns:
            Quotes in file order, or an empty list if the file is missing
            or malformed
        """
        self.read_error = None
        try:
            quotes = self.read()
        except QuoteStoreError as e:
            logger.warning("Unable to read quote database: %s", e)
            if self.path.exists():
                self.read_error = e
            return []
        logger.debug("Loaded %d quotes from %s", len(quotes), self.path)
        return quotes

    def save(self, quotes: list[Quote]) -> bool:
        """Save the collection, logging instead of raising on failure.

        An empty collection is not written over a file that failed to load.

        Returns:
            True if the file was written
        """
        if self.read_error is not None and not quotes:
            logger.warning(
                "Not overwriting unreadable quote database %s with an empty one", self.path
            )
            return False
        try:
            self.write(quotes)
        except PersistenceWriteError as e:
            logger.warning("Unable to save quote database: %s", e)
            return False
        logger.debug("Saved %d quotes to %s", len(quotes), self.path)
        return True

    # ========================================================================
    # Collection Operations
    # ========================================================================

    def add(
        self, quote: Quote, quotes: list[Quote], write_through: bool = False
    ) -> list[Quote]:
        """Append a quote to the collection.

        No duplicate check is done here; ``sort`` collapses duplicates.

        Args:
            quote: Quote to append
            quotes: Collection to modify in place
            write_through: Save immediately after appending

        Returns:
            The updated collection

        Raises:
            PersistenceWriteError: If ``write_through`` is set and the save fails
        """
        quotes.append(quote)
        if write_through:
            self.write(quotes)
        return quotes

    def remove(self, quote: Quote, quotes: list[Quote]) -> bool:
        """Remove the first quote structurally equal to ``quote``.

        Returns:
            True if a quote was removed, False if none matched
        """
        try:
            quotes.remove(quote)
        except ValueError:
            logger.debug("Quote not in collection, nothing removed: %r", quote.short_text)
            return False
        return True

    def sort(self, quotes: list[Quote]) -> list[Quote]:
        """Put the collection in canonical order and save it.

        Duplicates are collapsed. The save is best-effort.

        Returns:
            The sorted collection (the same list object)
        """
        quotes[:] = canonical_order(quotes)
        self.save(quotes)
        return quotes
