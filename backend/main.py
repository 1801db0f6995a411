import logging
import os
from datetime import datetime, timezone

from fastapi import FastAPI, HTTPException, Path as PathParam, Query
from fastapi.responses import PlainTextResponse, Response

from catalog import CatalogStore, load_catalog
from generator import SiteConfig, build_robots_policy, build_sitemap, load_site_config, render_sitemap_xml
from generator import pages
from generator.schema import json_ld_script

logger = logging.getLogger(__name__)


def create_app(site: SiteConfig | None = None, store: CatalogStore | None = None) -> FastAPI:
    """
    Build the app. Site config and catalog are loaded from the environment at
    startup unless given; the robots policy is checked against the catalog
    before any request is served.
    """
    app = FastAPI(
        title="Catalog SEO Generator",
        description="Metadata, structured data, sitemap and robots.txt for a tool catalog",
        version="1.0.0",
    )

    @app.on_event("startup")
    def startup():
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
        logging.captureWarnings(True)
        cfg = site or load_site_config()
        catalog = store or load_catalog(
            cfg.catalog_path, category_prefix=cfg.category_prefix, blog_prefix=cfg.blog_prefix
        )
        robots = build_robots_policy(cfg)
        robots.validate_against(catalog, cfg)
        app.state.site = cfg
        app.state.store = catalog
        app.state.robots = robots
        logger.info("Serving %s with %d tools", cfg.base_url, len(catalog.tools))

    def _state() -> tuple[SiteConfig, CatalogStore]:
        return app.state.site, app.state.store

    @app.get("/api/health")
    def health():
        """Liveness probe with environment and current UTC timestamp."""
        return {
            "ok": True,
            "service": "catalog-seo-generator",
            "env": os.getenv("ENV", "development"),
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        }

    @app.get("/sitemap.xml")
    def sitemap_xml():
        site_cfg, catalog = _state()
        return Response(content=render_sitemap_xml(build_sitemap(catalog, site_cfg)), media_type="application/xml")

    @app.get("/api/sitemap")
    def sitemap_json():
        site_cfg, catalog = _state()
        return [e.to_dict() for e in build_sitemap(catalog, site_cfg)]

    @app.get("/robots.txt", response_class=PlainTextResponse)
    def robots_txt():
        return app.state.robots.render()

    @app.get("/api/robots")
    def robots_json():
        return app.state.robots.to_dict()

    @app.get("/api/pages/home")
    def page_home():
        site_cfg, catalog = _state()
        return pages.home_page(site_cfg, catalog).to_dict()

    @app.get("/api/pages/tool")
    def page_tool(href: str = Query(..., min_length=2)):
        """Bundle for one tool page, looked up by its href (e.g. /json-formatter)."""
        site_cfg, catalog = _state()
        tool = catalog.get_tool(href)
        if tool is None:
            raise HTTPException(status_code=404, detail="Tool not found")
        return pages.tool_page(tool, site_cfg, catalog).to_dict()

    @app.get("/api/pages/tool/json-ld", response_class=PlainTextResponse)
    def page_tool_json_ld(href: str = Query(..., min_length=2)):
        """Script body ready to embed in <script type="application/ld+json">."""
        site_cfg, catalog = _state()
        tool = catalog.get_tool(href)
        if tool is None:
            raise HTTPException(status_code=404, detail="Tool not found")
        return json_ld_script(pages.tool_page(tool, site_cfg, catalog).nodes)

    @app.get("/api/pages/categories/{category_id}")
    def page_category(category_id: str = PathParam(..., min_length=1)):
        site_cfg, catalog = _state()
        category = catalog.get_category(category_id)
        if category is None:
            raise HTTPException(status_code=404, detail="Category not found")
        return pages.category_page(category, site_cfg, catalog).to_dict()

    @app.get("/api/pages/blog")
    def page_blog_index():
        site_cfg, catalog = _state()
        return pages.blog_index_page(site_cfg, catalog).to_dict()

    @app.get("/api/pages/blog/{slug}")
    def page_blog_post(slug: str = PathParam(..., min_length=1)):
        site_cfg, catalog = _state()
        post = catalog.get_post(slug)
        if post is None:
            raise HTTPException(status_code=404, detail="Blog post not found")
        return pages.blog_post_page(post, site_cfg, catalog).to_dict()

    @app.get("/api/pages/static")
    def page_static(path: str = Query(..., min_length=1)):
        site_cfg, _ = _state()
        wanted = "/" + path.strip("/").lower()
        route = next((r for r in site_cfg.static_routes if "/" + r.path.strip("/").lower() == wanted), None)
        if route is None:
            raise HTTPException(status_code=404, detail="Page not found")
        return pages.static_page(route, site_cfg).to_dict()

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", "8000"))
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=port,
        reload=os.getenv("ENV", "development") == "development",
    )
