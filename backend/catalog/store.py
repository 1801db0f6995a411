"""
Immutable catalog for one generation pass.

Build it once with CatalogStore.build(); every invariant is checked there and
a ConfigValidationError lists all violations at once. Generators and
composers receive the store as an argument and only read from it.
"""
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from .errors import ConfigValidationError
from .models import BlogPost, Tool, ToolCategory
from .url_utils import canonical_path

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY_PREFIX = "/category"
DEFAULT_BLOG_PREFIX = "/blog"


@dataclass(frozen=True)
class CatalogStore:
    tools: tuple[Tool, ...]
    categories: tuple[ToolCategory, ...]
    posts: tuple[BlogPost, ...]
    category_prefix: str = DEFAULT_CATEGORY_PREFIX
    blog_prefix: str = DEFAULT_BLOG_PREFIX
    _tools_by_path: Mapping[str, Tool] = field(default_factory=lambda: MappingProxyType({}), repr=False, compare=False)
    _categories_by_id: Mapping[str, ToolCategory] = field(default_factory=lambda: MappingProxyType({}), repr=False, compare=False)
    _posts_by_slug: Mapping[str, BlogPost] = field(default_factory=lambda: MappingProxyType({}), repr=False, compare=False)

    @classmethod
    def build(
        cls,
        tools: Iterable[Tool] = (),
        categories: Iterable[ToolCategory] = (),
        posts: Iterable[BlogPost] = (),
        category_prefix: str = DEFAULT_CATEGORY_PREFIX,
        blog_prefix: str = DEFAULT_BLOG_PREFIX,
    ) -> "CatalogStore":
        tools = tuple(tools)
        categories = tuple(categories)
        posts = tuple(posts)
        category_prefix = canonical_path(category_prefix)
        blog_prefix = canonical_path(blog_prefix)

        problems: list[str] = []
        categories_by_id: dict[str, ToolCategory] = {}
        for cat in categories:
            if cat.id in categories_by_id:
                problems.append(f"duplicate category id {cat.id!r}")
                continue
            categories_by_id[cat.id] = cat

        tools_by_path: dict[str, Tool] = {}
        for tool in tools:
            path = canonical_path(tool.href)
            if path in tools_by_path:
                problems.append(
                    f"duplicate tool href {tool.href!r} (collides with {tools_by_path[path].href!r})"
                )
                continue
            tools_by_path[path] = tool
            if tool.category not in categories_by_id:
                problems.append(
                    f"tool {tool.href!r} references unknown category {tool.category!r}"
                )

        posts_by_slug: dict[str, BlogPost] = {}
        for post in posts:
            key = post.slug.lower()
            if key in posts_by_slug:
                problems.append(f"duplicate blog post slug {post.slug!r}")
                continue
            posts_by_slug[key] = post
            if post.category is not None and post.category not in categories_by_id:
                problems.append(
                    f"blog post {post.slug!r} references unknown category {post.category!r}"
                )

        for cat in categories_by_id.values():
            for ref in cat.tools:
                if canonical_path(ref) not in tools_by_path:
                    problems.append(f"category {cat.id!r} lists unknown tool {ref!r}")

        store = cls(
            tools=tools,
            categories=categories,
            posts=posts,
            category_prefix=category_prefix,
            blog_prefix=blog_prefix,
            _tools_by_path=MappingProxyType(tools_by_path),
            _categories_by_id=MappingProxyType(categories_by_id),
            _posts_by_slug=MappingProxyType(posts_by_slug),
        )
        problems.extend(store._route_collisions())
        if problems:
            raise ConfigValidationError(problems)
        logger.info(
            "Catalog loaded: %d tools, %d categories, %d posts",
            len(tools), len(categories), len(posts),
        )
        return store

    def _route_collisions(self) -> list[str]:
        seen: dict[str, str] = {"/": "home page", self.blog_index_path: "blog index"}
        problems = []
        for path, owner in self.routes():
            if path in seen and seen[path] != owner:
                problems.append(f"{owner} path {path!r} collides with {seen[path]}")
            seen.setdefault(path, owner)
        return problems

    # Routing

    @property
    def blog_index_path(self) -> str:
        return self.blog_prefix

    def tool_path(self, tool: Tool) -> str:
        return canonical_path(tool.href)

    def category_path(self, category: ToolCategory) -> str:
        return canonical_path(f"{self.category_prefix.rstrip('/')}/{category.id}")

    def post_path(self, post: BlogPost) -> str:
        return canonical_path(f"{self.blog_prefix.rstrip('/')}/{post.slug}")

    def routes(self) -> Iterator[tuple[str, str]]:
        """(canonical path, owner label) for every entity-backed page."""
        for tool in self._tools_by_path.values():
            yield self.tool_path(tool), f"tool {tool.href!r}"
        for cat in self._categories_by_id.values():
            yield self.category_path(cat), f"category {cat.id!r}"
        for post in self._posts_by_slug.values():
            yield self.post_path(post), f"blog post {post.slug!r}"

    def published_paths(self) -> set[str]:
        paths = {path for path, _ in self.routes()}
        paths.update({"/", self.blog_index_path})
        return paths

    # Lookups

    def get_tool(self, href: str) -> Tool | None:
        return self._tools_by_path.get(canonical_path(href))

    def get_category(self, category_id: str) -> ToolCategory | None:
        return self._categories_by_id.get(category_id)

    def get_post(self, slug: str) -> BlogPost | None:
        return self._posts_by_slug.get(slug.strip("/").lower())

    def tools_in_category(self, category: ToolCategory) -> list[Tool]:
        """Tools in the category's declared order, then unlisted members in catalog order."""
        listed = [self._tools_by_path[canonical_path(ref)] for ref in category.tools]
        listed_paths = {self.tool_path(t) for t in listed}
        rest = [
            t for t in self.tools
            if t.category == category.id and self.tool_path(t) not in listed_paths
        ]
        return listed + rest

    def posts_newest_first(self) -> list[BlogPost]:
        return sorted(self.posts, key=lambda p: (p.date, p.slug), reverse=True)
