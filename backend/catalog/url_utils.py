from urllib.parse import urlparse, urlunparse


def normalize_url(url: str) -> str:
    """Canonical form of an absolute URL.

    Drops query string and fragment, strips trailing slashes and default
    ports, and lowercases scheme, host and path. Idempotent.
    """
    parsed = urlparse(url.strip())
    scheme = (parsed.scheme or "https").lower()
    netloc = parsed.netloc.lower()
    if netloc and ":" in netloc and netloc.endswith((":80", ":443")):
        host, port = netloc.rsplit(":", 1)
        if (scheme == "https" and port == "443") or (scheme == "http" and port == "80"):
            netloc = host
    path = parsed.path.lower().rstrip("/")
    return urlunparse((scheme, netloc, path, "", "", ""))


def canonical_url(base_url: str, href: str) -> str:
    """normalize(base_url + href); absolute hrefs are normalized as-is."""
    if urlparse(href).scheme in ("http", "https"):
        return normalize_url(href)
    if href and not href.startswith("/"):
        href = "/" + href
    return normalize_url(base_url.rstrip("/") + href)


def canonical_path(href: str) -> str:
    """Path component of the canonical form, "/" for the site root."""
    path = urlparse(canonical_url("https://localhost", href)).path
    return path or "/"


def get_sitemap_url(base_url: str) -> str:
    return normalize_url(base_url) + "/sitemap.xml"
