from __future__ import annotations

import shutil
import sys
from pathlib import Path
from typing import Optional

from .books import ReadingStats, load_reading_stats
from .config import SiteConfig
from .feeds import render_rss, render_sitemap, sort_posts
from .github import get_contributions
from .pages import build_blog_index, build_blog_post, build_books, build_home
from .posts import highlight_css, load_posts
from .profile import PROFILE, load_ascii_art
from .render import clean_output_dir, copy_static, read_template, write_text

HEADERS_FILE = """/*
  X-Frame-Options: DENY
  X-Content-Type-Options: nosniff
  X-XSS-Protection: 1; mode=block
  Referrer-Policy: strict-origin-when-cross-origin

/static/*
  Cache-Control: public, max-age=31536000, immutable

/*.webmanifest
  Content-Type: application/manifest+json
  Cache-Control: public, max-age=86400

/static/fonts/*
  Cache-Control: public, max-age=31536000, immutable
  Access-Control-Allow-Origin: *

/robots.txt
  Content-Type: text/plain
  Cache-Control: public, max-age=3600
"""


def load_stats_or_empty(config: SiteConfig) -> ReadingStats:
    try:
        return load_reading_stats(config.books_dir)
    except OSError as exc:
        print(f"Warning: Failed to load books: {exc}", file=sys.stderr)
        return ReadingStats.empty()


def build_site(config: SiteConfig, project_root: Optional[Path] = None) -> None:
    output_dir = config.output_dir
    base_path = config.templates_dir / "base.html"
    if not base_path.exists():
        print(f"Base template not found: {base_path}", file=sys.stderr)
        sys.exit(1)
    base_template = read_template(base_path)

    clean_output_dir(output_dir, project_root or Path.cwd())
    output_dir.mkdir(parents=True, exist_ok=True)

    print("Loading books from markdown files...")
    stats = load_stats_or_empty(config)
    print(f"Loaded {stats.total_books} books")

    contributions = get_contributions(config)
    ascii_art = load_ascii_art(config.assets_dir / "logo.ascii")
    write_text(
        output_dir / "index.html",
        build_home(base_template, config, PROFILE, stats, contributions, ascii_art),
    )
    write_text(output_dir / "books" / "index.html", build_books(base_template, config, stats))

    print("Building blog pages...")
    posts = sort_posts(load_posts(config.blog_dir))
    write_text(output_dir / "blog" / "index.html", build_blog_index(base_template, config, posts))
    for post in posts:
        write_text(output_dir / "blog" / post.slug / "index.html", build_blog_post(base_template, config, post))
    print(f"Built {len(posts)} blog posts")

    write_text(output_dir / "rss.xml", render_rss(posts, config))
    write_text(output_dir / "sitemap.xml", render_sitemap(posts, config.site_url))

    if config.static_dir.exists():
        copy_static(config.static_dir, output_dir / "static")
        robots = config.static_dir / "robots.txt"
        if robots.exists():
            shutil.copy2(robots, output_dir / "robots.txt")
    else:
        print(f"Static directory not found: {config.static_dir}", file=sys.stderr)
    write_text(output_dir / "static" / "css" / "highlight.css", highlight_css())
    write_text(output_dir / "_headers", HEADERS_FILE)

    print(f"Static site built successfully in {output_dir}")
