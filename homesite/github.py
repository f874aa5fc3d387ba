from __future__ import annotations

import datetime as dt
import sys
from dataclasses import dataclass, field
from typing import Optional

import requests

from .config import SiteConfig
from .utils import utc_now

GRAPHQL_URL = "https://api.github.com/graphql"
REQUEST_TIMEOUT = 10

CONTRIBUTIONS_QUERY = """
query($userName:String!, $from:DateTime!) {
  user(login: $userName) {
    contributionsCollection(from: $from) {
      contributionCalendar {
        totalContributions
        weeks {
          contributionDays {
            date
            contributionCount
            contributionLevel
          }
        }
      }
    }
  }
}
"""

CONTRIBUTION_LEVELS = {
    "NONE": 0,
    "FIRST_QUARTILE": 1,
    "SECOND_QUARTILE": 2,
    "THIRD_QUARTILE": 3,
    "FOURTH_QUARTILE": 4,
}


class GitHubError(RuntimeError):
    pass


@dataclass(frozen=True)
class ContributionDay:
    date: str
    count: int
    level: int


@dataclass
class ContributionWeek:
    days: list[ContributionDay] = field(default_factory=list)


@dataclass
class ContributionData:
    weeks: list[ContributionWeek] = field(default_factory=list)
    total_contributions: int = 0


def contribution_level(level: str) -> int:
    return CONTRIBUTION_LEVELS.get(level, 0)


def one_year_before(now: dt.datetime) -> dt.datetime:
    try:
        return now.replace(year=now.year - 1)
    except ValueError:
        # Feb 29 has no counterpart a year earlier.
        return now.replace(year=now.year - 1, month=3, day=1)


def parse_calendar(payload: dict) -> ContributionData:
    # GraphQL returns null for absent objects; treat those as empty.
    user = (payload.get("data") or {}).get("user") or {}
    collection = user.get("contributionsCollection") or {}
    calendar = collection.get("contributionCalendar") or {}
    weeks = []
    for week in calendar.get("weeks") or []:
        days = [
            ContributionDay(
                date=day.get("date") or "",
                count=int(day.get("contributionCount") or 0),
                level=contribution_level(day.get("contributionLevel") or ""),
            )
            for day in (week or {}).get("contributionDays") or []
            if day
        ]
        weeks.append(ContributionWeek(days=days))
    return ContributionData(weeks=weeks, total_contributions=int(calendar.get("totalContributions") or 0))


def fetch_contributions(
    username: str, token: str, now: Optional[dt.datetime] = None
) -> ContributionData:
    since = one_year_before(now or utc_now())
    payload = {
        "query": CONTRIBUTIONS_QUERY,
        "variables": {
            "userName": username,
            "from": since.replace(microsecond=0).isoformat(),
        },
    }
    headers = {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
    }
    try:
        resp = requests.post(GRAPHQL_URL, json=payload, headers=headers, timeout=REQUEST_TIMEOUT)
    except requests.exceptions.RequestException as exc:
        raise GitHubError(f"request failed: {exc}") from exc

    try:
        body = resp.json()
    except ValueError as exc:
        raise GitHubError(f"failed to parse response: {exc}") from exc
    if not isinstance(body, dict):
        raise GitHubError("failed to parse response: expected a JSON object")

    errors = body.get("errors") or []
    if errors:
        messages = ", ".join(
            str(err.get("message", err)) if isinstance(err, dict) else str(err) for err in errors
        )
        raise GitHubError(f"GraphQL errors: {messages}")

    if resp.status_code != 200:
        raise GitHubError(f"API returned status {resp.status_code}: {resp.text}")

    try:
        return parse_calendar(body)
    except (AttributeError, TypeError, ValueError) as exc:
        raise GitHubError(f"unexpected response shape: {exc}") from exc


def get_contributions(config: SiteConfig) -> Optional[ContributionData]:
    if not config.has_github_credentials:
        print("GitHub credentials not provided, skipping contribution graph", file=sys.stderr)
        return None
    try:
        data = fetch_contributions(config.github_username, config.github_token)
    except GitHubError as exc:
        print(f"Failed to fetch GitHub contributions: {exc}", file=sys.stderr)
        return None
    print(f"Fetched GitHub contributions: {data.total_contributions} total")
    return data
