"""
schema.org JSON-LD generators.

One pure function per node type. Each returns a StructuredDataNode or None;
a node missing any field its type requires is never emitted, a
SchemaIncompleteWarning is issued instead.
"""
import json
import re
import warnings
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from bs4 import BeautifulSoup

from catalog import BlogPost, BreadcrumbItem, CatalogStore, Tool, ToolCategory, canonical_url

from .site import SiteConfig

SCHEMA_CONTEXT = "https://schema.org"


class SchemaIncompleteWarning(UserWarning):
    """An optional structured-data node was skipped for lack of source data."""


class SchemaType(str, Enum):
    WEB_APPLICATION = "WebApplication"
    HOW_TO = "HowTo"
    BREADCRUMB_LIST = "BreadcrumbList"
    FAQ_PAGE = "FAQPage"
    COLLECTION_PAGE = "CollectionPage"
    ARTICLE = "Article"


REQUIRED_FIELDS: dict[SchemaType, tuple[str, ...]] = {
    SchemaType.WEB_APPLICATION: ("name", "url", "description", "applicationCategory", "offers"),
    SchemaType.HOW_TO: ("name", "url", "step"),
    SchemaType.BREADCRUMB_LIST: ("itemListElement",),
    SchemaType.FAQ_PAGE: ("mainEntity",),
    SchemaType.COLLECTION_PAGE: ("name", "url", "description", "mainEntity"),
    SchemaType.ARTICLE: ("headline", "url", "datePublished", "author", "publisher"),
}


@dataclass(frozen=True)
class StructuredDataNode:
    schema_type: SchemaType
    properties: dict[str, Any] = field(default_factory=dict)

    def missing_fields(self) -> list[str]:
        return [f for f in REQUIRED_FIELDS[self.schema_type] if self.properties.get(f) in (None, "", [], {})]

    def to_json_ld(self) -> dict[str, Any]:
        return {"@context": SCHEMA_CONTEXT, "@type": self.schema_type.value, **self.properties}


def serialize_nodes(nodes: Iterable[StructuredDataNode | None]) -> list[dict[str, Any]]:
    """JSON-LD objects for every emitted node; skipped (None) nodes are dropped."""
    return [n.to_json_ld() for n in nodes if n is not None]


def json_ld_script(nodes: Iterable[StructuredDataNode | None]) -> str:
    """Body for a <script type="application/ld+json"> tag: always a JSON array, even for one node."""
    payload = serialize_nodes(nodes)
    # "</" would close the surrounding script element early
    return json.dumps(payload, ensure_ascii=False).replace("</", "<\\/")


def clean_text(raw: str | None) -> str:
    """Plain text from catalog copy: markup stripped, whitespace collapsed."""
    if not raw:
        return ""
    if "<" in raw:
        raw = BeautifulSoup(raw, "html.parser").get_text(" ", strip=True)
        raw = re.sub(r"\s+([.,!?;:])", r"\1", raw)
    return re.sub(r"\s+", " ", raw).strip()


def _emit(schema_type: SchemaType, subject: str, properties: dict[str, Any]) -> StructuredDataNode | None:
    node = StructuredDataNode(schema_type, properties)
    missing = node.missing_fields()
    if missing:
        msg = f"{schema_type.value} node skipped for {subject}: missing {', '.join(missing)}"
        warnings.warn(msg, SchemaIncompleteWarning, stacklevel=3)
        return None
    return node


def _organization(site: SiteConfig) -> dict[str, Any]:
    org: dict[str, Any] = {"@type": "Organization", "name": site.site_name, "url": site.base_url}
    logo = site.absolute(site.og_image)
    if logo:
        org["logo"] = {"@type": "ImageObject", "url": logo}
    return org


def _item_list(urls_and_names: Sequence[tuple[str, str]]) -> dict[str, Any] | None:
    if not urls_and_names:
        return None
    return {
        "@type": "ItemList",
        "numberOfItems": len(urls_and_names),
        "itemListElement": [
            {"@type": "ListItem", "position": i, "name": name, "url": url}
            for i, (url, name) in enumerate(urls_and_names, start=1)
        ],
    }


def web_application_node(tool: Tool, site: SiteConfig, store: CatalogStore | None = None) -> StructuredDataNode | None:
    props: dict[str, Any] = {
        "name": clean_text(tool.title),
        "url": canonical_url(site.base_url, tool.href),
        "description": clean_text(tool.description),
        "applicationCategory": site.application_category,
        "operatingSystem": "Any",
        "browserRequirements": "Requires JavaScript",
        "offers": {"@type": "Offer", "price": "0", "priceCurrency": site.currency},
        "publisher": _organization(site),
    }
    image = site.absolute(tool.image)
    if image:
        props["image"] = image
    if store is not None:
        category = store.get_category(tool.category)
        if category is not None:
            props["applicationSubCategory"] = category.name
    keywords = list(tool.keywords)
    if keywords:
        props["keywords"] = ", ".join(keywords)
    return _emit(SchemaType.WEB_APPLICATION, f"tool {tool.href!r}", props)


def how_to_node(tool: Tool, site: SiteConfig) -> StructuredDataNode | None:
    url = canonical_url(site.base_url, tool.href)
    # blank steps are dropped before numbering so positions stay contiguous
    texts = [t for t in (clean_text(s) for s in tool.steps) if t]
    steps = [
        {"@type": "HowToStep", "position": i, "name": f"Step {i}", "text": text, "url": f"{url}#step-{i}"}
        for i, text in enumerate(texts, start=1)
    ]
    props = {
        "name": f"How to use {clean_text(tool.title)}",
        "description": clean_text(tool.description),
        "url": url,
        "step": steps,
    }
    return _emit(SchemaType.HOW_TO, f"tool {tool.href!r}", props)


def breadcrumb_node(items: Sequence[BreadcrumbItem], site: SiteConfig) -> StructuredDataNode | None:
    """
    BreadcrumbList for a root-to-leaf trail. Positions follow input order;
    the trail is not reordered or checked for hierarchy.
    """
    elements = [
        {
            "@type": "ListItem",
            "position": position,
            "name": clean_text(item.name),
            "item": canonical_url(site.base_url, item.url),
        }
        for position, item in enumerate(items, start=1)
    ]
    return _emit(SchemaType.BREADCRUMB_LIST, "breadcrumb trail", {"itemListElement": elements})


def faq_node(category: ToolCategory, site: SiteConfig) -> StructuredDataNode | None:
    questions = [
        {
            "@type": "Question",
            "name": clean_text(faq.question),
            "acceptedAnswer": {"@type": "Answer", "text": clean_text(faq.answer)},
        }
        for faq in category.faqs
    ]
    return _emit(SchemaType.FAQ_PAGE, f"category {category.id!r}", {"mainEntity": questions})


def collection_page_node(category: ToolCategory, site: SiteConfig, store: CatalogStore) -> StructuredDataNode | None:
    tools = store.tools_in_category(category)
    props: dict[str, Any] = {
        "name": clean_text(category.name),
        "url": canonical_url(site.base_url, store.category_path(category)),
        "description": clean_text(category.description),
        "mainEntity": _item_list([
            (canonical_url(site.base_url, t.href), clean_text(t.title)) for t in tools
        ]),
        "isPartOf": {"@type": "WebSite", "name": site.site_name, "url": site.base_url},
    }
    if category.keywords:
        props["keywords"] = ", ".join(category.keywords)
    return _emit(SchemaType.COLLECTION_PAGE, f"category {category.id!r}", props)


def blog_collection_node(site: SiteConfig, store: CatalogStore) -> StructuredDataNode | None:
    posts = store.posts_newest_first()
    props = {
        "name": site.blog_title,
        "url": canonical_url(site.base_url, store.blog_index_path),
        "description": site.blog_description or site.description,
        "mainEntity": _item_list([
            (canonical_url(site.base_url, store.post_path(p)), clean_text(p.title)) for p in posts
        ]),
        "isPartOf": {"@type": "WebSite", "name": site.site_name, "url": site.base_url},
    }
    return _emit(SchemaType.COLLECTION_PAGE, "blog index", props)


def article_node(post: BlogPost, site: SiteConfig, store: CatalogStore) -> StructuredDataNode | None:
    url = canonical_url(site.base_url, store.post_path(post))
    if post.author:
        author: dict[str, Any] = {"@type": "Person", "name": post.author}
    else:
        author = {"@type": "Organization", "name": site.site_name}
    props: dict[str, Any] = {
        "headline": clean_text(post.title),
        "description": clean_text(post.excerpt),
        "url": url,
        "mainEntityOfPage": {"@type": "WebPage", "@id": url},
        "datePublished": post.date.isoformat(),
        "dateModified": (post.updated or post.date).isoformat(),
        "author": author,
        "publisher": _organization(site),
    }
    image = site.absolute(post.image) or site.absolute(site.og_image)
    if image:
        props["image"] = image
    if post.tags:
        props["keywords"] = ", ".join(post.tags)
    return _emit(SchemaType.ARTICLE, f"blog post {post.slug!r}", props)


def featured_tools_node(site: SiteConfig, store: CatalogStore) -> StructuredDataNode | None:
    """Home page CollectionPage over the featured tools."""
    featured = [t for t in store.tools if t.featured]
    props = {
        "name": site.home_title,
        "url": site.base_url,
        "description": clean_text(site.description),
        "mainEntity": _item_list([
            (canonical_url(site.base_url, t.href), clean_text(t.title)) for t in featured
        ]),
    }
    return _emit(SchemaType.COLLECTION_PAGE, "home page", props)
