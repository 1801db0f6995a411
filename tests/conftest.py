from __future__ import annotations

import copy
import logging
from typing import Any

import pytest

from catalog import CatalogStore, load_catalog_data
from generator import SiteConfig

BASE_URL = "https://site.example"

CATALOG: dict[str, Any] = {
    "categories": [
        {
            "id": "dev-tools",
            "name": "Developer Tools",
            "description": "Formatters and encoders for everyday development work.",
            "keywords": ["developer tools", "JSON"],
            "tools": ["/base64", "/json-formatter"],
            "faq": [
                {"question": "Are these tools free?", "answer": "Yes, every tool is free."},
                {"question": "Is my data uploaded?", "answer": "No, it stays in your browser."},
            ],
        },
        {
            "id": "pdf",
            "name": "PDF Tools",
            "description": "Merge, split and compress PDF files.",
            "keywords": ["pdf"],
        },
    ],
    "tools": [
        {
            "title": "JSON Formatter",
            "href": "/json-formatter",
            "description": "Format JSON.",
            "category": "dev-tools",
            "featured": True,
            "keywords": ["json", "formatter"],
            "steps": ["Paste your JSON.", "Press Format.", "Copy the result."],
        },
        {
            "title": "Base64 Encoder",
            "href": "/base64",
            "description": "Encode and decode Base64 text.",
            "category": "dev-tools",
        },
        {
            "title": "PDF Merge",
            "href": "/pdf-merge",
            "description": "Combine several PDF files into one.",
            "category": "pdf",
            "updated": "2026-09-01",
        },
    ],
    "posts": [
        {
            "title": "Why format JSON?",
            "slug": "why-format-json",
            "excerpt": "Readable JSON makes debugging faster.",
            "date": "2026-08-14",
            "author": "Ada Writer",
            "category": "dev-tools",
            "tags": ["json"],
        },
        {
            "title": "Merging PDFs",
            "slug": "merging-pdfs",
            "excerpt": "Three ways to merge PDF files.",
            "date": "2026-05-02",
            "updated": "2026-06-10",
        },
    ],
}


def catalog_data() -> dict[str, Any]:
    return copy.deepcopy(CATALOG)


@pytest.fixture
def site() -> SiteConfig:
    return SiteConfig(
        base_url=BASE_URL,
        site_name="Site Example",
        description="Free online tools.",
        og_image="/og.png",
        twitter_handle="@siteexample",
    )


@pytest.fixture
def store() -> CatalogStore:
    return load_catalog_data(catalog_data())


@pytest.fixture(autouse=True)
def _reset_warning_capture():
    # The app's startup handler enables logging.captureWarnings process-wide;
    # undo it so later tests start from a clean warnings/logging state.
    yield
    logging.captureWarnings(False)
