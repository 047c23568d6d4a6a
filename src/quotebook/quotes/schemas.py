"""Pydantic schemas for quotes and their categories.

The category set is closed and ordered. A user's category checkboxes are
modelled as a selection: one bool per category, in ``ALL_CATEGORIES`` order.
"""

from enum import Enum
from typing import Iterable, Optional, Sequence

from pydantic import BaseModel, Field, field_serializer, field_validator


class Category(str, Enum):
    """Topic tags a quote can carry."""

    WISDOM = "wisdom"
    MOTIVATION = "motivation"
    LOVE = "love"
    LIFE = "life"
    HUMOUR = "humour"
    FRIENDSHIP = "friendship"
    HAPPINESS = "happiness"
    SUCCESS = "success"
    PHILOSOPHY = "philosophy"
    LITERATURE = "literature"


# Declaration order is the display and serialization order
ALL_CATEGORIES: tuple[Category, ...] = tuple(Category)

_CATEGORY_POSITION = {category: index for index, category in enumerate(ALL_CATEGORIES)}


def to_selection(categories: Iterable[Category]) -> list[bool]:
    """Convert a set of categories to a checkbox selection.

    Args:
        categories: Categories to mark as selected

    Returns:
        One bool per entry of ``ALL_CATEGORIES``
    """
    chosen = set(categories)
    return [category in chosen for category in ALL_CATEGORIES]


def to_category_set(selection: Sequence[bool]) -> frozenset[Category]:
    """Convert a checkbox selection back to a set of categories.

    Args:
        selection: One bool per entry of ``ALL_CATEGORIES``

    Returns:
        The categories whose slot is True

    Raises:
        ValueError: If the selection length does not match ``ALL_CATEGORIES``
    """
    if len(selection) != len(ALL_CATEGORIES):
        raise ValueError(
            f"Selection has {len(selection)} entries, expected {len(ALL_CATEGORIES)}"
        )
    return frozenset(
        category for category, checked in zip(ALL_CATEGORIES, selection) if checked
    )


def ordered_categories(categories: Iterable[Category]) -> list[Category]:
    """Return categories sorted into ``ALL_CATEGORIES`` order."""
    return sorted(categories, key=_CATEGORY_POSITION.__getitem__)


class QuoteAction(str, Enum):
    """What the user chose to do with a selected quote."""

    DELETE = "delete"
    EDIT = "edit"
    CANCEL = "cancel"


class Quote(BaseModel):
    """A quote and the categories it is tagged with.

    Quotes have no id; two quotes are the same quote when text and
    categories are equal.
    """

    text: str
    categories: frozenset[Category] = frozenset()

    model_config = {"frozen": True}

    @field_serializer("categories")
    def serialize_categories(self, categories: frozenset[Category]) -> list[str]:
        return [category.value for category in ordered_categories(categories)]

    def sort_key(self) -> tuple[str, tuple[int, ...]]:
        """Key for the canonical order: text, then category positions."""
        positions = tuple(sorted(_CATEGORY_POSITION[c] for c in self.categories))
        return (self.text, positions)

    def has_any(self, wanted: Iterable[Category]) -> bool:
        """Check whether the quote carries at least one of ``wanted``."""
        return not self.categories.isdisjoint(wanted)

    @property
    def category_display(self) -> str:
        """Get categories as a comma-separated string."""
        return ", ".join(c.value for c in ordered_categories(self.categories))

    @property
    def short_text(self) -> str:
        """Get truncated text for display."""
        if len(self.text) <= 100:
            return self.text
        return self.text[:97] + "..."


class QuoteDraft(BaseModel):
    """Quote entry form: free text plus a category selection."""

    text: str = Field(..., min_length=1)
    selection: list[bool] = Field(default_factory=lambda: [False] * len(ALL_CATEGORIES))

    @field_validator("text", mode="before")
    @classmethod
    def strip_text(cls, value: str) -> str:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("selection")
    @classmethod
    def check_selection(cls, value: list[bool]) -> list[bool]:
        if len(value) != len(ALL_CATEGORIES):
            raise ValueError(
                f"Selection has {len(value)} entries, expected {len(ALL_CATEGORIES)}"
            )
        return value

    @classmethod
    def from_quote(cls, quote: Quote) -> "QuoteDraft":
        """Prefill a draft from an existing quote."""
        return cls(text=quote.text, selection=to_selection(quote.categories))

    @classmethod
    def from_categories(
        cls, text: str, categories: Optional[Iterable[Category]] = None
    ) -> "QuoteDraft":
        """Build a draft from text and a category list."""
        return cls(text=text, selection=to_selection(categories or ()))

    @property
    def categories(self) -> frozenset[Category]:
        """Get the selected categories."""
        return to_category_set(self.selection)

    def to_quote(self) -> Quote:
        """Build the quote this draft describes."""
        return Quote(text=self.text, categories=self.categories)
