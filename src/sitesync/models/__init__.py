"""Data models for cached and remote site data."""

from sitesync.models._base import FieldMapModel, SiteBaseModel, SiteRecord
from sitesync.models.catalog import Category, Product, category_name_for
from sitesync.models.content import ContentKey, FooterContent, FooterField, SiteContent
from sitesync.models.slide import Slide

__all__ = [
    "Category",
    "ContentKey",
    "FieldMapModel",
    "FooterContent",
    "FooterField",
    "Product",
    "SiteBaseModel",
    "SiteContent",
    "SiteRecord",
    "Slide",
    "category_name_for",
]
