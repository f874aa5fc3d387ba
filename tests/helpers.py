from __future__ import annotations

from pathlib import Path

BASE_TEMPLATE = """<!DOCTYPE html>
<html lang="{{language}}">
<head><title>{{title}}</title><meta name="description" content="{{description}}">
<link rel="canonical" href="{{canonical}}">{{extra_head}}</head>
<body><main>{{content}}</main><footer>{{year}} {{site_name}}</footer></body>
</html>
"""


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def post_text(title: str, date: str, excerpt: str = "", body: str = "Hello there.") -> str:
    return f'---\ntitle: "{title}"\ndate: {date}\nexcerpt: "{excerpt}"\n---\n\n{body}\n'


def book_text(title: str, **fields: object) -> str:
    lines = [f'title: "{title}"']
    lines.extend(f"{key}: {value}" for key, value in fields.items())
    return "---\n" + "\n".join(lines) + "\n---\n\nNotes.\n"
