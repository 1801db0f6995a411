import logging
import re
from dataclasses import dataclass

from catalog import CatalogStore, ConfigValidationError, canonical_path

from .site import SiteConfig

logger = logging.getLogger(__name__)


def _prefix_pattern(prefix: str) -> str:
    """robots.txt path rule -> regex: '*' matches anything, trailing '$' anchors."""
    anchored = prefix.endswith("$")
    if anchored:
        prefix = prefix[:-1]
    pattern = re.escape(prefix).replace(r"\*", ".*")
    return pattern + ("$" if anchored else "")


def path_matches(path: str, prefix: str) -> bool:
    if not path:
        path = "/"
    if not path.startswith("/"):
        path = "/" + path
    return re.match(_prefix_pattern(prefix), path) is not None


@dataclass(frozen=True)
class RobotsRule:
    user_agent: str = "*"
    allow: tuple[str, ...] = ("/",)
    disallow: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {"userAgent": self.user_agent, "allow": list(self.allow), "disallow": list(self.disallow)}


@dataclass(frozen=True)
class RobotsPolicy:
    rules: tuple[RobotsRule, ...]
    sitemap_url: str

    def is_path_allowed(self, path: str, user_agent: str = "*") -> bool:
        """Longest matching rule wins; allow wins a tie, as crawlers resolve it."""
        rule = next((r for r in self.rules if r.user_agent == user_agent), None)
        if rule is None:
            rule = next((r for r in self.rules if r.user_agent == "*"), None)
        if rule is None:
            return True
        best_len, allowed = -1, True
        for prefix in rule.allow:
            if path_matches(path, prefix) and len(prefix) >= best_len:
                best_len, allowed = len(prefix), True
        for prefix in rule.disallow:
            if path_matches(path, prefix) and len(prefix) > best_len:
                best_len, allowed = len(prefix), False
        return allowed

    def validate_against(self, store: CatalogStore, site: SiteConfig) -> None:
        """
        Fail fast when a disallow rule would hide a published page: every
        catalog route, the home page, the blog index and each static route.
        """
        owners = {"/": "home page", store.blog_index_path: "blog index"}
        for path, owner in store.routes():
            owners.setdefault(path, owner)
        for route in site.static_routes:
            owners.setdefault(canonical_path(route.path), f"static route {route.path!r}")

        problems = []
        for rule in self.rules:
            for prefix in rule.disallow:
                for path, owner in owners.items():
                    if path_matches(path, prefix):
                        problems.append(
                            f"robots disallow {prefix!r} for {rule.user_agent!r} blocks {owner} at {path!r}"
                        )
        if problems:
            raise ConfigValidationError(problems)
        logger.info("Robots policy checked against %d published paths", len(owners))

    def to_dict(self) -> dict:
        return {"rules": [r.to_dict() for r in self.rules], "sitemapUrl": self.sitemap_url}

    def render(self) -> str:
        lines: list[str] = []
        for rule in self.rules:
            lines.append(f"User-agent: {rule.user_agent}")
            for path in rule.allow:
                lines.append(f"Allow: {path}")
            for path in rule.disallow:
                lines.append(f"Disallow: {path}")
            lines.append("")
        lines.append(f"Sitemap: {self.sitemap_url}")
        return "\n".join(lines) + "\n"


def build_robots_policy(site: SiteConfig) -> RobotsPolicy:
    rule = RobotsRule(user_agent="*", allow=("/",), disallow=tuple(site.robots_disallow))
    return RobotsPolicy(rules=(rule,), sitemap_url=site.sitemap_url)
