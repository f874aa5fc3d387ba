from __future__ import annotations

import datetime as dt
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import markdown
from pygments.formatters import HtmlFormatter

from .content import MalformedDocument, list_markdown, parse_date, parse_front_matter, reading_time
from .markdown_ext import GithubFlavorExtension

HIGHLIGHT_THEME = "monokai"
HIGHLIGHT_CLASS = "highlight"

POST_FIELDS = {
    "title": str,
    "date": str,
    "excerpt": str,
}


@dataclass(frozen=True)
class BlogPost:
    title: str
    slug: str
    date: str = ""
    raw_date: Optional[dt.date] = None
    excerpt: str = ""
    content: str = ""
    reading_time: str = "1 min read"


def build_markdown() -> markdown.Markdown:
    # Raw HTML is passed through untouched; posts are written by the site owner.
    return markdown.Markdown(
        extensions=["tables", "fenced_code", "codehilite", "toc", "nl2br", GithubFlavorExtension()],
        extension_configs={
            "codehilite": {
                "css_class": HIGHLIGHT_CLASS,
                "pygments_style": HIGHLIGHT_THEME,
                "noclasses": False,
                "guess_lang": False,
            },
        },
        output_format="xhtml",
    )


def render_markdown(text: str) -> str:
    md = build_markdown()
    html_content = md.convert(text)
    md.reset()
    return html_content


def highlight_css() -> str:
    return HtmlFormatter(style=HIGHLIGHT_THEME).get_style_defs(f".{HIGHLIGHT_CLASS}")


def parse_post(text: str, slug: str) -> BlogPost:
    meta, body = parse_front_matter(text, POST_FIELDS)
    date_value = meta.get("date", "")
    return BlogPost(
        title=meta.get("title", ""),
        slug=slug,
        date=date_value,
        raw_date=parse_date(date_value),
        excerpt=meta.get("excerpt", ""),
        content=render_markdown(body),
        reading_time=reading_time(body),
    )


def load_posts(directory: Path) -> list[BlogPost]:
    if not directory.exists():
        print(f"Blog directory not found: {directory}", file=sys.stderr)
        return []
    try:
        files = list_markdown(directory)
    except OSError as exc:
        print(f"Failed to list blog directory {directory}: {exc}", file=sys.stderr)
        return []
    posts = []
    for md_file in files:
        try:
            text = md_file.read_text(encoding="utf-8")
            posts.append(parse_post(text, md_file.stem))
        except (MalformedDocument, OSError, UnicodeDecodeError) as exc:
            print(f"Error parsing blog post {md_file.name}: {exc}", file=sys.stderr)
        except Exception as exc:
            print(f"Error rendering blog post {md_file.name}: {exc}", file=sys.stderr)
    return posts


def find_post(posts: list[BlogPost], slug: str) -> Optional[BlogPost]:
    for post in posts:
        if post.slug == slug:
            return post
    return None
