from __future__ import annotations

import datetime as dt
import html
from dataclasses import dataclass
from typing import Optional

from .config import SiteConfig
from .posts import BlogPost
from .utils import join_url, rfc1123_date, utc_now

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
ATOM_NS = "http://www.w3.org/2005/Atom"
SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
SITEMAP_DATE_FMT = "%Y-%m-%d"


@dataclass(frozen=True)
class FeedItem:
    title: str
    link: str
    description: str
    pub_date: str
    guid: str


@dataclass(frozen=True)
class SitemapUrl:
    loc: str
    changefreq: str
    priority: float
    lastmod: str = ""


def sort_posts(posts: list[BlogPost]) -> list[BlogPost]:
    return sorted(posts, key=lambda p: p.raw_date or dt.date.min, reverse=True)


def post_url(site_url: str, slug: str) -> str:
    return join_url(site_url, f"blog/{slug}")


def rss_items(posts: list[BlogPost], site_url: str) -> list[FeedItem]:
    items = []
    for post in posts:
        link = post_url(site_url, post.slug)
        items.append(
            FeedItem(
                title=post.title,
                link=link,
                description=post.excerpt,
                pub_date=rfc1123_date(post.raw_date) if post.raw_date else "",
                guid=link,
            )
        )
    return items


def last_build_date(posts: list[BlogPost], now: Optional[dt.datetime] = None) -> str:
    if posts and posts[0].raw_date:
        return rfc1123_date(posts[0].raw_date)
    return rfc1123_date(now or utc_now())


def render_rss(posts: list[BlogPost], config: SiteConfig, now: Optional[dt.datetime] = None) -> str:
    site_url = config.site_url.rstrip("/")
    items = []
    for item in rss_items(posts, site_url):
        lines = [
            "    <item>",
            f"      <title>{html.escape(item.title)}</title>",
            f"      <link>{html.escape(item.link)}</link>",
            f"      <description>{html.escape(item.description)}</description>",
        ]
        if item.pub_date:
            lines.append(f"      <pubDate>{item.pub_date}</pubDate>")
        lines.append(f"      <guid>{html.escape(item.guid)}</guid>")
        lines.append("    </item>")
        items.append("\n".join(lines))
    self_link = html.escape(join_url(site_url, "rss.xml"))
    parts = [
        XML_DECLARATION,
        f'<rss version="2.0" xmlns:atom="{ATOM_NS}">',
        "  <channel>",
        f"    <title>{html.escape(config.site_title)}</title>",
        f"    <link>{html.escape(site_url)}</link>",
        f"    <description>{html.escape(config.site_description)}</description>",
        f"    <language>{html.escape(config.language)}</language>",
        f'    <atom:link href="{self_link}" rel="self" type="application/rss+xml"></atom:link>',
        f"    <lastBuildDate>{last_build_date(posts, now)}</lastBuildDate>",
    ]
    parts.extend(items)
    parts.extend(["  </channel>", "</rss>"])
    return "\n".join(parts) + "\n"


def sitemap_urls(posts: list[BlogPost], site_url: str) -> list[SitemapUrl]:
    site_url = site_url.rstrip("/")
    urls = [
        SitemapUrl(loc=f"{site_url}/", changefreq="weekly", priority=1.0),
        SitemapUrl(loc=join_url(site_url, "blog"), changefreq="weekly", priority=0.9),
        SitemapUrl(loc=join_url(site_url, "books"), changefreq="monthly", priority=0.8),
    ]
    for post in posts:
        urls.append(
            SitemapUrl(
                loc=post_url(site_url, post.slug),
                lastmod=post.raw_date.strftime(SITEMAP_DATE_FMT) if post.raw_date else "",
                changefreq="monthly",
                priority=0.7,
            )
        )
    return urls


def render_sitemap(posts: list[BlogPost], site_url: str) -> str:
    items = []
    for url in sitemap_urls(posts, site_url):
        lines = ["  <url>", f"    <loc>{html.escape(url.loc)}</loc>"]
        if url.lastmod:
            lines.append(f"    <lastmod>{url.lastmod}</lastmod>")
        lines.append(f"    <changefreq>{url.changefreq}</changefreq>")
        lines.append(f"    <priority>{url.priority:.1f}</priority>")
        lines.append("  </url>")
        items.append("\n".join(lines))
    parts = [XML_DECLARATION, f'<urlset xmlns="{SITEMAP_NS}">']
    parts.extend(items)
    parts.append("</urlset>")
    return "\n".join(parts) + "\n"
