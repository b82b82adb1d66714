"""Category and product records."""

from __future__ import annotations

from collections.abc import Iterable

from sitesync._constants import UNKNOWN_CATEGORY_NAME
from sitesync.models._base import SiteRecord


class Category(SiteRecord):
    """A product category shown on the products page."""

    name: str = ""
    description: str = ""
    image: str = ""
    """Image URL."""


class Product(SiteRecord):
    """A product listed under a category.

    ``category_id`` is a weak reference: nothing checks that the category
    exists, and a dangling id renders as "unknown category".
    """

    category_id: str = ""
    name: str = ""
    description: str = ""
    specs: str = ""
    price: str = ""
    """Free-form price text as entered in the admin UI."""
    image: str = ""

    def category_name(self, categories: Iterable[Category]) -> str:
        """Resolve the category name, or the unknown-category label."""
        return category_name_for(self.category_id, categories)


def category_name_for(category_id: str, categories: Iterable[Category]) -> str:
    for category in categories:
        if category.id == category_id:
            return category.name
    return UNKNOWN_CATEGORY_NAME
