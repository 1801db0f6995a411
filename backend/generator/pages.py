"""
Per-page bundles: the metadata plus every structured-data node a page embeds.

Generators stay independent of each other; this module is the caller that
picks which ones a page type needs and in what order.
"""
from dataclasses import dataclass, field
from typing import Any

from catalog import BlogPost, BreadcrumbItem, CatalogStore, Tool, ToolCategory

from .metadata import (
    PageMetadata,
    blog_index_metadata,
    blog_post_metadata,
    category_metadata,
    home_metadata,
    static_metadata,
    tool_metadata,
)
from .schema import (
    StructuredDataNode,
    article_node,
    blog_collection_node,
    breadcrumb_node,
    collection_page_node,
    faq_node,
    featured_tools_node,
    how_to_node,
    serialize_nodes,
    web_application_node,
)
from .site import SiteConfig, StaticRoute


@dataclass
class PageBundle:
    metadata: PageMetadata
    nodes: list[StructuredDataNode] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"metadata": self.metadata.to_dict(), "structuredData": serialize_nodes(self.nodes)}


def _bundle(metadata: PageMetadata, *nodes: StructuredDataNode | None) -> PageBundle:
    return PageBundle(metadata=metadata, nodes=[n for n in nodes if n is not None])


HOME_CRUMB = BreadcrumbItem(name="Home", url="/")


def home_page(site: SiteConfig, store: CatalogStore) -> PageBundle:
    featured = featured_tools_node(site, store) if any(t.featured for t in store.tools) else None
    return _bundle(home_metadata(site), featured)


def tool_page(tool: Tool, site: SiteConfig, store: CatalogStore) -> PageBundle:
    trail = [HOME_CRUMB]
    category = store.get_category(tool.category)
    if category is not None:
        trail.append(BreadcrumbItem(name=category.name, url=store.category_path(category)))
    trail.append(BreadcrumbItem(name=tool.title, url=store.tool_path(tool)))
    return _bundle(
        tool_metadata(tool, site, store),
        web_application_node(tool, site, store),
        how_to_node(tool, site) if tool.steps else None,
        breadcrumb_node(trail, site),
    )


def category_page(category: ToolCategory, site: SiteConfig, store: CatalogStore) -> PageBundle:
    trail = [
        HOME_CRUMB,
        BreadcrumbItem(name=category.name, url=store.category_path(category)),
    ]
    return _bundle(
        category_metadata(category, site, store),
        collection_page_node(category, site, store),
        faq_node(category, site) if category.faqs else None,
        breadcrumb_node(trail, site),
    )


def blog_index_page(site: SiteConfig, store: CatalogStore) -> PageBundle:
    trail = [HOME_CRUMB, BreadcrumbItem(name=site.blog_title, url=store.blog_index_path)]
    return _bundle(
        blog_index_metadata(site, store),
        blog_collection_node(site, store) if store.posts else None,
        breadcrumb_node(trail, site),
    )


def blog_post_page(post: BlogPost, site: SiteConfig, store: CatalogStore) -> PageBundle:
    trail = [
        HOME_CRUMB,
        BreadcrumbItem(name=site.blog_title, url=store.blog_index_path),
        BreadcrumbItem(name=post.title, url=store.post_path(post)),
    ]
    return _bundle(
        blog_post_metadata(post, site, store),
        article_node(post, site, store),
        breadcrumb_node(trail, site),
    )


def static_page(route: StaticRoute, site: SiteConfig) -> PageBundle:
    trail = [HOME_CRUMB, BreadcrumbItem(name=route.name, url=route.path)]
    return _bundle(static_metadata(route, site), breadcrumb_node(trail, site))
