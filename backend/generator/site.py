"""Site-wide context shared by every generator: base URL, defaults, static routes."""
import datetime
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from catalog.url_utils import get_sitemap_url, normalize_url

_backend_dir = Path(__file__).resolve().parents[1]

CHANGE_FREQUENCIES = ("always", "hourly", "daily", "weekly", "monthly", "yearly", "never")


class StaticRoute(BaseModel):
    """A page that exists outside the catalog (about, contact, legal)."""
    model_config = ConfigDict(frozen=True)

    path: str
    name: str
    priority: float = Field(default=0.5, ge=0.0, le=1.0)
    change_frequency: str = "monthly"
    description: str | None = None
    last_modified: datetime.date | None = None

    @field_validator("change_frequency")
    @classmethod
    def known_frequency(cls, v: str) -> str:
        v = v.lower()
        if v not in CHANGE_FREQUENCIES:
            raise ValueError(f"change_frequency must be one of {', '.join(CHANGE_FREQUENCIES)}")
        return v


DEFAULT_STATIC_ROUTES = (
    StaticRoute(path="/about", name="About", priority=0.5, change_frequency="monthly"),
    StaticRoute(path="/contact", name="Contact", priority=0.4, change_frequency="monthly"),
    StaticRoute(path="/privacy", name="Privacy Policy", priority=0.3, change_frequency="yearly"),
    StaticRoute(path="/terms", name="Terms of Service", priority=0.3, change_frequency="yearly"),
)

DEFAULT_DISALLOW = ("/api/", "/admin/", "/_next/", "/private/")


class SiteConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    base_url: str
    site_name: str
    description: str
    default_title: str | None = None
    title_template: str = "{title} | {site_name}"
    og_image: str | None = None
    twitter_handle: str | None = None
    locale: str = "en_US"
    currency: str = "USD"
    application_category: str = "UtilitiesApplication"
    category_prefix: str = "/category"
    blog_prefix: str = "/blog"
    blog_title: str = "Blog"
    blog_description: str | None = None
    static_routes: tuple[StaticRoute, ...] = DEFAULT_STATIC_ROUTES
    robots_disallow: tuple[str, ...] = DEFAULT_DISALLOW
    catalog_path: Path = _backend_dir / "catalog.json"

    @field_validator("base_url")
    @classmethod
    def absolute_base(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must be an absolute http(s) URL")
        return normalize_url(v)

    @property
    def home_title(self) -> str:
        return self.default_title or self.site_name

    @property
    def sitemap_url(self) -> str:
        return get_sitemap_url(self.base_url)

    def format_title(self, title: str) -> str:
        return self.title_template.format(title=title, site_name=self.site_name)

    def absolute(self, url: str | None) -> str | None:
        """Resolve a site-relative asset URL (images) against the base URL."""
        if not url:
            return None
        if url.startswith(("http://", "https://")):
            return url
        return self.base_url + "/" + url.lstrip("/")


def _env_list(name: str) -> tuple[str, ...] | None:
    raw = os.getenv(name)
    if raw is None:
        return None
    return tuple(p.strip() for p in raw.split(",") if p.strip())


def load_site_config() -> SiteConfig:
    """Read site settings from the environment (.env files honoured)."""
    load_dotenv(_backend_dir / ".env")
    load_dotenv(_backend_dir.parent / ".env")
    values = {
        "base_url": os.getenv("SITE_BASE_URL", "http://localhost:8000"),
        "site_name": os.getenv("SITE_NAME", "Tools"),
        "description": os.getenv("SITE_DESCRIPTION", "Free online tools."),
        "default_title": os.getenv("SITE_TITLE"),
        "og_image": os.getenv("SITE_OG_IMAGE"),
        "twitter_handle": os.getenv("SITE_TWITTER_HANDLE"),
        "locale": os.getenv("SITE_LOCALE", "en_US"),
    }
    if os.getenv("CATALOG_PATH"):
        values["catalog_path"] = Path(os.getenv("CATALOG_PATH"))
    disallow = _env_list("ROBOTS_DISALLOW")
    if disallow is not None:
        values["robots_disallow"] = disallow
    return SiteConfig(**values)
