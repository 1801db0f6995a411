"""
Page metadata: title, description, canonical, keywords, Open Graph, Twitter.

Page-specific values fall back to the site defaults. Length checks are
advisories attached to the result, never errors.
"""
import logging
from dataclasses import asdict, dataclass, field
from typing import Any

from catalog import BlogPost, CatalogStore, Tool, ToolCategory, canonical_url

from .schema import clean_text
from .site import SiteConfig, StaticRoute

logger = logging.getLogger(__name__)

TITLE_MAX_CHARS = 60
DESCRIPTION_MAX_CHARS = 160


@dataclass(frozen=True)
class MetadataAdvisory:
    field: str
    message: str
    length: int = 0
    limit: int = 0


@dataclass
class PageInput:
    """What a page knows about itself; None means use the site default."""
    path: str
    title: str | None = None
    description: str | None = None
    image: str | None = None
    keywords: list[str] = field(default_factory=list)
    og_type: str = "website"
    published_time: str | None = None
    modified_time: str | None = None
    author: str | None = None
    apply_title_template: bool = True


@dataclass
class OpenGraph:
    title: str
    description: str
    url: str
    site_name: str
    type: str = "website"
    locale: str = "en_US"
    images: list[str] = field(default_factory=list)
    published_time: str | None = None
    modified_time: str | None = None


@dataclass
class TwitterCard:
    card: str
    title: str
    description: str
    images: list[str] = field(default_factory=list)
    site: str | None = None
    creator: str | None = None


@dataclass
class PageMetadata:
    title: str
    description: str
    canonical: str
    open_graph: OpenGraph
    twitter: TwitterCard
    keywords: list[str] = field(default_factory=list)
    advisories: list[MetadataAdvisory] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        def camel(d: dict) -> dict:
            out = {}
            for k, v in d.items():
                head, *rest = k.split("_")
                out[head + "".join(w.title() for w in rest)] = camel(v) if isinstance(v, dict) else v
            return out

        data = camel(asdict(self))
        data["advisories"] = [asdict(a) for a in self.advisories]
        return data


def _dedupe_keywords(words: list[str]) -> list[str]:
    seen = set()
    out = []
    for w in words:
        w = w.strip()
        if w and w.lower() not in seen:
            seen.add(w.lower())
            out.append(w)
    return out


def check_lengths(title: str, description: str) -> list[MetadataAdvisory]:
    advisories = []
    if len(title) > TITLE_MAX_CHARS:
        advisories.append(MetadataAdvisory(
            "title", f"title is {len(title)} chars; search results truncate past ~{TITLE_MAX_CHARS}",
            len(title), TITLE_MAX_CHARS,
        ))
    if not description:
        advisories.append(MetadataAdvisory("description", "description is empty", 0, DESCRIPTION_MAX_CHARS))
    elif len(description) > DESCRIPTION_MAX_CHARS:
        advisories.append(MetadataAdvisory(
            "description",
            f"description is {len(description)} chars; search results truncate past ~{DESCRIPTION_MAX_CHARS}",
            len(description), DESCRIPTION_MAX_CHARS,
        ))
    return advisories


def compose_metadata(site: SiteConfig, page: PageInput) -> PageMetadata:
    raw_title = clean_text(page.title)
    if raw_title:
        title = site.format_title(raw_title) if page.apply_title_template else raw_title
    else:
        title = site.home_title
    description = clean_text(page.description) or clean_text(site.description)
    canonical = canonical_url(site.base_url, page.path)
    image = site.absolute(page.image) or site.absolute(site.og_image)
    images = [image] if image else []

    og = OpenGraph(
        title=raw_title or site.home_title,
        description=description,
        url=canonical,
        site_name=site.site_name,
        type=page.og_type,
        locale=site.locale,
        images=images,
        published_time=page.published_time,
        modified_time=page.modified_time,
    )
    twitter = TwitterCard(
        card="summary_large_image" if images else "summary",
        title=og.title,
        description=description,
        images=list(images),
        site=site.twitter_handle,
        creator=page.author if page.author and page.author.startswith("@") else site.twitter_handle,
    )
    advisories = check_lengths(title, description)
    for a in advisories:
        logger.debug("Metadata advisory for %s: %s", canonical, a.message)
    return PageMetadata(
        title=title,
        description=description,
        canonical=canonical,
        open_graph=og,
        twitter=twitter,
        keywords=_dedupe_keywords(page.keywords),
        advisories=advisories,
    )


def home_metadata(site: SiteConfig) -> PageMetadata:
    return compose_metadata(site, PageInput(path="/"))


def tool_metadata(tool: Tool, site: SiteConfig, store: CatalogStore) -> PageMetadata:
    category = store.get_category(tool.category)
    keywords = list(tool.keywords) + (list(category.keywords) if category else [])
    return compose_metadata(site, PageInput(
        path=store.tool_path(tool),
        title=tool.title,
        description=tool.description,
        image=tool.image,
        keywords=keywords,
    ))


def category_metadata(category: ToolCategory, site: SiteConfig, store: CatalogStore) -> PageMetadata:
    return compose_metadata(site, PageInput(
        path=store.category_path(category),
        title=category.name,
        description=category.description,
        keywords=list(category.keywords),
    ))


def blog_index_metadata(site: SiteConfig, store: CatalogStore) -> PageMetadata:
    return compose_metadata(site, PageInput(
        path=store.blog_index_path,
        title=site.blog_title,
        description=site.blog_description,
    ))


def blog_post_metadata(post: BlogPost, site: SiteConfig, store: CatalogStore) -> PageMetadata:
    keywords = list(post.tags)
    category = store.get_category(post.category) if post.category else None
    if category:
        keywords.extend(category.keywords)
    return compose_metadata(site, PageInput(
        path=store.post_path(post),
        title=post.title,
        description=post.excerpt,
        image=post.image,
        keywords=keywords,
        og_type="article",
        published_time=post.date.isoformat(),
        modified_time=(post.updated or post.date).isoformat(),
        author=post.author,
    ))


def static_metadata(route: StaticRoute, site: SiteConfig) -> PageMetadata:
    return compose_metadata(site, PageInput(
        path=route.path,
        title=route.name,
        description=route.description,
    ))
