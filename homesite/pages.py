from __future__ import annotations

import datetime as dt
import html
from typing import Optional

from .books import Book, ReadingStats
from .config import SiteConfig
from .github import ContributionData
from .posts import BlogPost
from .profile import Profile
from .render import render_template
from .utils import join_url

DISPLAY_DATE_FMT = "%b %d, %Y"


def render_page(
    base_template: str,
    config: SiteConfig,
    title: str,
    content: str,
    path: str = "",
    description: str = "",
    extra_head: str = "",
) -> str:
    return render_template(
        base_template,
        title=html.escape(title),
        description=html.escape(description or config.site_description),
        site_name=html.escape(config.site_title),
        language=html.escape(config.language.split("-")[0]),
        canonical=html.escape(join_url(config.site_url, path) if path else f"{config.site_url}/"),
        extra_head=extra_head,
        year=str(dt.date.today().year),
        content=content,
    )


def format_date(value: Optional[dt.date]) -> str:
    return value.strftime(DISPLAY_DATE_FMT).lower() if value else ""


def format_minutes(minutes: int) -> str:
    hours, rest = divmod(minutes, 60)
    if hours:
        return f"{hours}h {rest}m"
    return f"{rest}m"


def build_contribution_graph(data: ContributionData) -> str:
    columns = []
    for week in data.weeks:
        cells = "".join(
            f'<span class="day level-{day.level}" '
            f'title="{html.escape(day.date)}: {day.count} contributions"></span>'
            for day in week.days
        )
        columns.append(f'<div class="week">{cells}</div>')
    return (
        '<section class="contributions">'
        f"<h2>{data.total_contributions} contributions in the last year</h2>"
        f'<div class="graph">{"".join(columns)}</div>'
        "</section>"
    )


def build_work(profile: Profile) -> str:
    rows = []
    for item in profile.work:
        rows.append(
            '<li class="work-item">'
            f'<a href="{html.escape(item.url)}">{html.escape(item.company)}</a>'
            f'<span class="work-title">{html.escape(item.title)}</span>'
            f'<span class="work-period">{html.escape(item.period)}</span>'
            f"<p>{html.escape(item.description)}</p>"
            "</li>"
        )
    return f'<section class="work"><h2>work</h2><ul>{"".join(rows)}</ul></section>'


def build_projects(profile: Profile) -> str:
    rows = []
    for item in profile.projects:
        rows.append(
            '<li class="project">'
            f'<a href="{html.escape(item.url)}">{html.escape(item.name)}</a>'
            f"<p>{html.escape(item.description)}</p>"
            "</li>"
        )
    return f'<section class="projects"><h2>projects</h2><ul>{"".join(rows)}</ul></section>'


def build_reading_summary(stats: ReadingStats) -> str:
    return (
        '<ul class="reading-summary">'
        f"<li><strong>{stats.total_books}</strong> books</li>"
        f"<li><strong>{stats.total_pages_read}</strong> pages read</li>"
        f"<li><strong>{format_minutes(stats.total_reading_time)}</strong> reading</li>"
        f"<li><strong>{stats.books_this_year}</strong> finished this year</li>"
        "</ul>"
    )


def build_home(
    base_template: str,
    config: SiteConfig,
    profile: Profile,
    stats: ReadingStats,
    contributions: Optional[ContributionData] = None,
    ascii_art: str = "",
) -> str:
    parts = []
    if ascii_art:
        parts.append(f'<pre class="ascii-art" aria-hidden="true">{html.escape(ascii_art)}</pre>')
    parts.append(
        '<header class="profile">'
        f"<h1>{html.escape(profile.name)}</h1>"
        f'<p class="nickname">{html.escape(profile.nickname)}</p>'
        '<dl class="facts">'
        f"<dt>location</dt><dd>{html.escape(profile.location)}</dd>"
        f"<dt>role</dt><dd>{html.escape(profile.role)}</dd>"
        f"<dt>status</dt><dd>{html.escape(profile.status)}</dd>"
    )
    if stats.currently_reading:
        parts.append(f'<dt>reading</dt><dd><a href="/books">{html.escape(stats.currently_reading)}</a></dd>')
    parts.append(f'</dl><p class="bio">{html.escape(profile.bio)}</p></header>')
    if contributions is not None:
        parts.append(build_contribution_graph(contributions))
    parts.append(build_work(profile))
    parts.append(build_projects(profile))
    parts.append(
        '<section class="reading"><h2>reading</h2>'
        f"{build_reading_summary(stats)}"
        '<a href="/books">all books</a></section>'
    )
    return render_page(base_template, config, config.site_title, "".join(parts))


def build_book_row(book: Book) -> str:
    meta = [html.escape(book.author)] if book.author else []
    if book.status == "finished":
        if book.finished:
            meta.append(f"finished {format_date(book.finished)}")
    else:
        meta.append(f"page {book.current_page} of {book.pages}")
        if book.last_read:
            meta.append(f"last read {format_date(book.last_read)}")
    return (
        f'<li class="book book-{book.status}">'
        f'<span class="book-title">{html.escape(book.title)}</span>'
        f'<span class="book-meta">{" · ".join(meta)}</span>'
        f'<div class="progress" role="progressbar" aria-valuenow="{book.progress:.0f}" '
        f'aria-valuemin="0" aria-valuemax="100">'
        f'<div class="progress-bar" style="width: {book.progress:.1f}%"></div></div>'
        "</li>"
    )


def build_books(base_template: str, config: SiteConfig, stats: ReadingStats) -> str:
    current = "".join(build_book_row(book) for book in stats.current_books)
    finished = "".join(build_book_row(book) for book in stats.finished_books)
    content = (
        "<h1>books</h1>"
        f"{build_reading_summary(stats)}"
        '<section class="current-books"><h2>currently reading</h2>'
        f'<ul class="book-list">{current or "<li>nothing right now.</li>"}</ul></section>'
        '<section class="finished-books"><h2>finished</h2>'
        f'<ul class="book-list">{finished or "<li>nothing yet.</li>"}</ul></section>'
    )
    return render_page(base_template, config, f"books | {config.site_title}", content, path="books")


def build_blog_index(base_template: str, config: SiteConfig, posts: list[BlogPost]) -> str:
    rows = []
    for post in posts:
        url = f"/blog/{post.slug}"
        rows.append(
            '<article class="post-card">'
            f'<h2><a href="{url}">{html.escape(post.title)}</a></h2>'
            '<div class="post-meta">'
            f'<time datetime="{html.escape(post.date)}">{html.escape(post.date)}</time>'
            f'<span class="reading-time">{post.reading_time}</span>'
            "</div>"
            f'<p class="excerpt">{html.escape(post.excerpt)}</p>'
            "</article>"
        )
    content = (
        "<h1>blog</h1>"
        f'<div class="post-list">{"".join(rows) or "<p>no posts yet.</p>"}</div>'
    )
    extra_head = (
        f'<link rel="alternate" type="application/rss+xml" title="{html.escape(config.site_title)}" '
        'href="/rss.xml">'
    )
    return render_page(
        base_template, config, f"blog | {config.site_title}", content, path="blog", extra_head=extra_head
    )


def build_blog_post(base_template: str, config: SiteConfig, post: BlogPost) -> str:
    content = (
        '<article class="post">'
        f'<h1 class="post-title">{html.escape(post.title)}</h1>'
        '<div class="post-meta">'
        f'<time datetime="{html.escape(post.date)}">{html.escape(post.date)}</time>'
        f'<span class="reading-time">{post.reading_time}</span>'
        "</div>"
        f'<div class="post-body">{post.content}</div>'
        '<div class="post-footer"><a href="/blog">back to blog</a></div>'
        "</article>"
    )
    return render_page(
        base_template,
        config,
        f"{post.title} | {config.site_title}",
        content,
        path=f"blog/{post.slug}",
        description=post.excerpt,
        extra_head='<link rel="stylesheet" href="/static/css/highlight.css">',
    )
