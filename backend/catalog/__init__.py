"""
Catalog package: load, validate and freeze the tool/category/blog catalog.
"""
from .errors import ConfigValidationError
from .loader import load_catalog, load_catalog_data
from .models import BlogPost, BreadcrumbItem, FaqItem, Tool, ToolCategory
from .store import CatalogStore
from .url_utils import canonical_path, canonical_url, normalize_url

__all__ = [
    "BlogPost",
    "BreadcrumbItem",
    "CatalogStore",
    "ConfigValidationError",
    "FaqItem",
    "Tool",
    "ToolCategory",
    "canonical_path",
    "canonical_url",
    "load_catalog",
    "load_catalog_data",
    "normalize_url",
]
