import datetime
import logging
from dataclasses import dataclass
from xml.etree import ElementTree as ET

from catalog import CatalogStore, canonical_url

from .site import SiteConfig

logger = logging.getLogger(__name__)

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"

HOME_PRIORITY = 1.0
TOOL_PRIORITY = 0.9
CATEGORY_PRIORITY = 0.85
BLOG_INDEX_PRIORITY = 0.8
BLOG_POST_PRIORITY = 0.8


@dataclass(frozen=True)
class SitemapEntry:
    url: str
    last_modified: str
    change_frequency: str
    priority: float

    def to_dict(self) -> dict:
        return {
            "url": self.url,
            "lastModified": self.last_modified,
            "changeFrequency": self.change_frequency,
            "priority": self.priority,
        }


def build_sitemap(
    store: CatalogStore,
    site: SiteConfig,
    generated_at: datetime.datetime | None = None,
) -> list[SitemapEntry]:
    """
    One entry per unique canonical URL, in route-class order: home, tools,
    categories, blog index, blog posts, static routes. Within a class entries
    are sorted by URL. When two sources produce the same URL the first one
    wins, so catalog pages take precedence over static route descriptors.
    """
    generated_at = generated_at or datetime.datetime.now(datetime.timezone.utc)
    today = generated_at.date().isoformat()
    base = site.base_url

    entries: list[SitemapEntry] = []
    owners: dict[str, str] = {}

    def add(batch: list[tuple[str, SitemapEntry]]) -> None:
        for owner, entry in sorted(batch, key=lambda pair: pair[1].url):
            if entry.url in owners:
                logger.warning(
                    "Sitemap: %s dropped, %s already listed by %s", owner, entry.url, owners[entry.url]
                )
                continue
            owners[entry.url] = owner
            entries.append(entry)

    add([("home", SitemapEntry(canonical_url(base, "/"), today, "weekly", HOME_PRIORITY))])
    add([
        (
            f"tool {t.href!r}",
            SitemapEntry(
                canonical_url(base, store.tool_path(t)),
                t.updated.isoformat() if t.updated else today,
                "monthly",
                TOOL_PRIORITY,
            ),
        )
        for t in store.tools
    ])
    add([
        (
            f"category {c.id!r}",
            SitemapEntry(canonical_url(base, store.category_path(c)), today, "monthly", CATEGORY_PRIORITY),
        )
        for c in store.categories
    ])
    posts = store.posts_newest_first()
    blog_modified = max(((p.updated or p.date) for p in posts), default=None)
    add([(
        "blog index",
        SitemapEntry(
            canonical_url(base, store.blog_index_path),
            blog_modified.isoformat() if blog_modified else today,
            "weekly",
            BLOG_INDEX_PRIORITY,
        ),
    )])
    add([
        (
            f"blog post {p.slug!r}",
            SitemapEntry(
                canonical_url(base, store.post_path(p)),
                (p.updated or p.date).isoformat(),
                "monthly",
                BLOG_POST_PRIORITY,
            ),
        )
        for p in posts
    ])
    add([
        (
            f"static route {r.path!r}",
            SitemapEntry(
                canonical_url(base, r.path),
                r.last_modified.isoformat() if r.last_modified else today,
                r.change_frequency,
                r.priority,
            ),
        )
        for r in site.static_routes
    ])
    logger.info("Sitemap built: %d entries", len(entries))
    return entries


def render_sitemap_xml(entries: list[SitemapEntry]) -> str:
    urlset = ET.Element("urlset", xmlns=SITEMAP_NS)
    for entry in entries:
        url = ET.SubElement(urlset, "url")
        ET.SubElement(url, "loc").text = entry.url
        ET.SubElement(url, "lastmod").text = entry.last_modified
        ET.SubElement(url, "changefreq").text = entry.change_frequency
        ET.SubElement(url, "priority").text = str(entry.priority)
    body = ET.tostring(urlset, encoding="unicode")
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + body + "\n"
