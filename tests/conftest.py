from __future__ import annotations

from pathlib import Path

import pytest

from homesite.config import SiteConfig

from .helpers import BASE_TEMPLATE, book_text, post_text, write


@pytest.fixture
def site_config(tmp_path: Path) -> SiteConfig:
    content = tmp_path / "content"
    write(tmp_path / "templates" / "base.html", BASE_TEMPLATE)
    write(tmp_path / "static" / "css" / "site.css", "body { color: #ddd; }\n")
    write(tmp_path / "static" / "robots.txt", "User-agent: *\n")
    write(
        content / "blog" / "first-post.md",
        post_text("First Post", "2024-01-01", "the first one", "Some *markdown* here."),
    )
    write(
        content / "blog" / "second-post.md",
        post_text("Second Post", "2024-06-01", "the second one", "## Intro\n\nMore words."),
    )
    write(
        content / "books" / "reading" / "dune.md",
        book_text("Dune", author='"Frank Herbert"', pages=400, current_page=100, last_updated="2024-05-01"),
    )
    write(
        content / "books" / "finished" / "neuromancer.md",
        book_text("Neuromancer", author="William Gibson", pages=271, current_page=271, finished="2024-03-10"),
    )
    return SiteConfig(
        content_dir=content,
        static_dir=tmp_path / "static",
        templates_dir=tmp_path / "templates",
        assets_dir=tmp_path / "assets",
        output_dir=tmp_path / "dist",
        site_url="https://example.com",
        site_title="Example Site",
        site_description="Notes & books",
    )
