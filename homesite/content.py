from __future__ import annotations

import datetime as dt
import re
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, Optional

DELIMITER = "---"
DATE_FMT = "%Y-%m-%d"
WORDS_PER_MINUTE = 200
LEADING_INT_RE = re.compile(r"^[+-]?\d+")

Coercer = Callable[[str], Any]


class MalformedDocument(ValueError):
    pass


def split_front_matter(text: str) -> tuple[str, str]:
    clean_text = text.lstrip("\ufeff")
    parts = clean_text.split(DELIMITER, 2)
    if len(parts) < 3:
        raise MalformedDocument("invalid frontmatter format")
    return parts[1], parts[2].strip()


def strip_quotes(value: str) -> str:
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value[1:-1]
    return value


def parse_fields(block: str, fields: Mapping[str, Coercer]) -> dict[str, Any]:
    meta: dict[str, Any] = {}
    for line in block.splitlines():
        line = line.strip()
        if not line or ":" not in line:
            continue
        key, value = line.split(":", 1)
        key = key.strip()
        coerce = fields.get(key)
        if coerce is None:
            continue
        parsed = coerce(strip_quotes(value.strip()))
        if parsed is not None:
            meta[key] = parsed
    return meta


def parse_front_matter(text: str, fields: Mapping[str, Coercer]) -> tuple[dict[str, Any], str]:
    block, body = split_front_matter(text)
    return parse_fields(block, fields), body


def parse_date(value: str) -> Optional[dt.date]:
    try:
        return dt.datetime.strptime(value, DATE_FMT).date()
    except ValueError:
        return None


def scan_int(value: str) -> Optional[int]:
    match = LEADING_INT_RE.match(value.strip())
    if not match:
        return None
    return int(match.group(0))


def count_words(text: str) -> int:
    return len(text.split())


def reading_minutes(text: str) -> int:
    return max(count_words(text) // WORDS_PER_MINUTE, 1)


def reading_time(text: str) -> str:
    return f"{reading_minutes(text)} min read"


def list_markdown(directory: Path) -> list[Path]:
    return sorted(
        (path for path in directory.iterdir() if path.is_file() and path.suffix == ".md"),
        key=lambda p: p.name,
    )
