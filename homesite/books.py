from __future__ import annotations

import datetime as dt
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .content import MalformedDocument, list_markdown, parse_date, parse_front_matter, scan_int

MINUTES_PER_PAGE = 1.25
STATUS_READING = "reading"
STATUS_FINISHED = "finished"

BOOK_FIELDS = {
    "title": str,
    "author": str,
    "pages": scan_int,
    "current_page": scan_int,
    "started": parse_date,
    "last_updated": parse_date,
    "finished": parse_date,
}


@dataclass(frozen=True)
class Book:
    title: str = ""
    author: str = ""
    pages: int = 0
    current_page: int = 0
    progress: float = 0.0
    status: str = STATUS_READING
    started: Optional[dt.date] = None
    last_read: Optional[dt.date] = None
    finished: Optional[dt.date] = None
    total_reading_time: int = 0


@dataclass
class ReadingStats:
    current_books: list[Book] = field(default_factory=list)
    finished_books: list[Book] = field(default_factory=list)
    total_books: int = 0
    total_pages_read: int = 0
    total_reading_time: int = 0
    books_this_year: int = 0

    @classmethod
    def empty(cls) -> ReadingStats:
        return cls()

    @property
    def currently_reading(self) -> str:
        if not self.current_books:
            return ""
        return self.current_books[0].title


def compute_progress(current_page: int, pages: int) -> float:
    if pages <= 0:
        return 0.0
    return min(current_page / pages * 100, 100.0)


def parse_book(text: str, status: str) -> Book:
    meta, _ = parse_front_matter(text, BOOK_FIELDS)
    pages = max(meta.get("pages", 0), 0)
    current_page = max(meta.get("current_page", 0), 0)
    if status == STATUS_FINISHED:
        progress = 100.0
    else:
        progress = compute_progress(current_page, pages)
    return Book(
        title=meta.get("title", ""),
        author=meta.get("author", ""),
        pages=pages,
        current_page=current_page,
        progress=progress,
        status=status,
        started=meta.get("started"),
        last_read=meta.get("last_updated"),
        finished=meta.get("finished"),
        total_reading_time=int(current_page * MINUTES_PER_PAGE),
    )


def load_books(directory: Path, status: str) -> list[Book]:
    if not directory.exists():
        return []
    books = []
    for md_file in list_markdown(directory):
        try:
            books.append(parse_book(md_file.read_text(encoding="utf-8"), status))
        except (MalformedDocument, OSError, UnicodeDecodeError) as exc:
            print(f"Skipping book {md_file}: {exc}", file=sys.stderr)
    return books


def date_key(value: Optional[dt.date]) -> dt.date:
    return value or dt.date.min


def aggregate(current: list[Book], finished: list[Book], today: dt.date) -> ReadingStats:
    everything = current + finished
    return ReadingStats(
        current_books=sorted(current, key=lambda b: date_key(b.last_read), reverse=True),
        finished_books=sorted(finished, key=lambda b: date_key(b.finished), reverse=True),
        total_books=len(everything),
        total_pages_read=sum(book.current_page for book in everything),
        total_reading_time=sum(book.total_reading_time for book in everything),
        books_this_year=sum(
            1 for book in finished if book.finished is not None and book.finished.year == today.year
        ),
    )


def load_reading_stats(books_dir: Path, today: Optional[dt.date] = None) -> ReadingStats:
    if today is None:
        today = dt.date.today()
    current = load_books(books_dir / STATUS_READING, STATUS_READING)
    finished = load_books(books_dir / STATUS_FINISHED, STATUS_FINISHED)
    return aggregate(current, finished, today)
