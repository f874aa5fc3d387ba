"""Live server: every request re-reads content from disk."""

from __future__ import annotations

import sys

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse, Response
from fastapi.staticfiles import StaticFiles

from .config import SiteConfig
from .feeds import render_rss, render_sitemap, sort_posts
from .github import get_contributions
from .pages import build_blog_index, build_blog_post, build_books, build_home
from .posts import find_post, highlight_css, load_posts
from .profile import PROFILE, load_ascii_art
from .render import read_template
from .site import load_stats_or_empty


def create_app(config: SiteConfig) -> FastAPI:
    base_path = config.templates_dir / "base.html"
    if not base_path.exists():
        print(f"Base template not found: {base_path}", file=sys.stderr)
        sys.exit(1)

    app = FastAPI(title=config.site_title, docs_url=None, redoc_url=None, openapi_url=None)

    def base_template() -> str:
        return read_template(base_path)

    @app.get("/", response_class=HTMLResponse)
    def home() -> str:
        stats = load_stats_or_empty(config)
        contributions = get_contributions(config)
        ascii_art = load_ascii_art(config.assets_dir / "logo.ascii")
        return build_home(base_template(), config, PROFILE, stats, contributions, ascii_art)

    @app.get("/books", response_class=HTMLResponse)
    def books() -> str:
        return build_books(base_template(), config, load_stats_or_empty(config))

    @app.get("/blog", response_class=HTMLResponse)
    def blog_index() -> str:
        posts = sort_posts(load_posts(config.blog_dir))
        return build_blog_index(base_template(), config, posts)

    @app.get("/blog/{slug}", response_class=HTMLResponse)
    def blog_post(slug: str) -> str:
        post = find_post(load_posts(config.blog_dir), slug)
        if post is None:
            raise HTTPException(status_code=404, detail="Post not found")
        return build_blog_post(base_template(), config, post)

    @app.get("/rss.xml")
    def rss() -> Response:
        posts = sort_posts(load_posts(config.blog_dir))
        return Response(
            content=render_rss(posts, config), media_type="application/rss+xml; charset=utf-8"
        )

    @app.get("/sitemap.xml")
    def sitemap() -> Response:
        posts = sort_posts(load_posts(config.blog_dir))
        return Response(
            content=render_sitemap(posts, config.site_url), media_type="application/xml; charset=utf-8"
        )

    @app.get("/static/css/highlight.css")
    def highlight_stylesheet() -> Response:
        return Response(content=highlight_css(), media_type="text/css; charset=utf-8")

    if config.static_dir.exists():
        app.mount("/static", StaticFiles(directory=config.static_dir), name="static")

    return app
