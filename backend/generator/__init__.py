"""
SEO generator: page metadata, JSON-LD structured data, sitemap and robots
artifacts derived from a validated CatalogStore.
"""
from .metadata import MetadataAdvisory, PageInput, PageMetadata, compose_metadata
from .pages import PageBundle
from .robots import RobotsPolicy, RobotsRule, build_robots_policy
from .schema import SchemaIncompleteWarning, SchemaType, StructuredDataNode, json_ld_script, serialize_nodes
from .site import SiteConfig, StaticRoute, load_site_config
from .sitemap import SitemapEntry, build_sitemap, render_sitemap_xml

__all__ = [
    "MetadataAdvisory",
    "PageBundle",
    "PageInput",
    "PageMetadata",
    "RobotsPolicy",
    "RobotsRule",
    "SchemaIncompleteWarning",
    "SchemaType",
    "SiteConfig",
    "SitemapEntry",
    "StaticRoute",
    "StructuredDataNode",
    "build_robots_policy",
    "build_sitemap",
    "compose_metadata",
    "json_ld_script",
    "load_site_config",
    "render_sitemap_xml",
    "serialize_nodes",
]
