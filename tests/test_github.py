from __future__ import annotations

import datetime as dt
from unittest.mock import MagicMock, patch

import pytest
import requests

from homesite.config import SiteConfig
from homesite.github import (
    GRAPHQL_URL,
    REQUEST_TIMEOUT,
    GitHubError,
    contribution_level,
    fetch_contributions,
    get_contributions,
    one_year_before,
)

NOW = dt.datetime(2025, 6, 1, 12, 0, 0, tzinfo=dt.timezone.utc)


def _payload() -> dict:
    return {
        "data": {
            "user": {
                "contributionsCollection": {
                    "contributionCalendar": {
                        "totalContributions": 7,
                        "weeks": [
                            {
                                "contributionDays": [
                                    {"date": "2025-05-25", "contributionCount": 0, "contributionLevel": "NONE"},
                                    {"date": "2025-05-26", "contributionCount": 2, "contributionLevel": "FIRST_QUARTILE"},
                                ]
                            },
                            {
                                "contributionDays": [
                                    {"date": "2025-06-01", "contributionCount": 5, "contributionLevel": "FOURTH_QUARTILE"},
                                ]
                            },
                        ],
                    }
                }
            }
        }
    }


def _response(status_code: int = 200, payload: object = None) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = _payload() if payload is None else payload
    resp.text = "body"
    return resp


@pytest.mark.parametrize(
    "level, expected",
    [
        ("NONE", 0),
        ("FIRST_QUARTILE", 1),
        ("SECOND_QUARTILE", 2),
        ("THIRD_QUARTILE", 3),
        ("FOURTH_QUARTILE", 4),
        ("SOMETHING_NEW", 0),
    ],
)
def test_contribution_level_mapping(level, expected):
    assert contribution_level(level) == expected


def test_one_year_before_handles_leap_day():
    assert one_year_before(dt.datetime(2024, 2, 29)) == dt.datetime(2023, 3, 1)
    assert one_year_before(dt.datetime(2025, 6, 1)) == dt.datetime(2024, 6, 1)


def test_fetch_contributions_parses_calendar():
    with patch("homesite.github.requests.post", return_value=_response()) as mock_post:
        data = fetch_contributions("octocat", "secret", now=NOW)

    assert data.total_contributions == 7
    assert len(data.weeks) == 2
    assert [day.level for day in data.weeks[0].days] == [0, 1]
    assert data.weeks[1].days[0].date == "2025-06-01"
    assert data.weeks[1].days[0].count == 5

    args, kwargs = mock_post.call_args
    assert args[0] == GRAPHQL_URL
    assert kwargs["timeout"] == REQUEST_TIMEOUT == 10
    assert kwargs["headers"]["Authorization"] == "Bearer secret"
    assert kwargs["json"]["variables"] == {"userName": "octocat", "from": "2024-06-01T12:00:00+00:00"}
    assert "contributionCalendar" in kwargs["json"]["query"]


def test_fetch_contributions_raises_on_graphql_errors():
    resp = _response(payload={"errors": [{"message": "Bad credentials"}]})
    with patch("homesite.github.requests.post", return_value=resp):
        with pytest.raises(GitHubError, match="Bad credentials"):
            fetch_contributions("octocat", "secret", now=NOW)


def test_fetch_contributions_raises_on_bad_status():
    with patch("homesite.github.requests.post", return_value=_response(status_code=502, payload={})):
        with pytest.raises(GitHubError, match="502"):
            fetch_contributions("octocat", "secret", now=NOW)


def test_fetch_contributions_raises_on_invalid_json():
    resp = _response()
    resp.json.side_effect = ValueError("not json")
    with patch("homesite.github.requests.post", return_value=resp):
        with pytest.raises(GitHubError, match="failed to parse"):
            fetch_contributions("octocat", "secret", now=NOW)


def test_fetch_contributions_wraps_transport_errors():
    with patch("homesite.github.requests.post", side_effect=requests.exceptions.Timeout("slow")):
        with pytest.raises(GitHubError, match="slow"):
            fetch_contributions("octocat", "secret", now=NOW)


def test_get_contributions_skips_without_credentials(capsys):
    with patch("homesite.github.requests.post") as mock_post:
        assert get_contributions(SiteConfig(github_username="octocat")) is None
    mock_post.assert_not_called()
    assert "skipping" in capsys.readouterr().err


def test_get_contributions_degrades_on_failure(capsys):
    config = SiteConfig(github_username="octocat", github_token="secret")
    with patch("homesite.github.requests.post", side_effect=requests.exceptions.ConnectionError("down")):
        assert get_contributions(config) is None
    assert "Failed to fetch GitHub contributions" in capsys.readouterr().err


def test_get_contributions_returns_data():
    config = SiteConfig(github_username="octocat", github_token="secret")
    with patch("homesite.github.requests.post", return_value=_response()):
        data = get_contributions(config)
    assert data.total_contributions == 7


def test_fetch_contributions_treats_null_collection_as_empty():
    payload = {"data": {"user": {"contributionsCollection": None}}}
    with patch("homesite.github.requests.post", return_value=_response(payload=payload)):
        data = fetch_contributions("octocat", "secret", now=NOW)
    assert data.total_contributions == 0
    assert data.weeks == []


def test_fetch_contributions_treats_null_counts_as_zero():
    payload = _payload()
    calendar = payload["data"]["user"]["contributionsCollection"]["contributionCalendar"]
    calendar["totalContributions"] = None
    calendar["weeks"][0]["contributionDays"][1]["contributionCount"] = None
    with patch("homesite.github.requests.post", return_value=_response(payload=payload)):
        data = fetch_contributions("octocat", "secret", now=NOW)
    assert data.total_contributions == 0
    assert data.weeks[0].days[1].count == 0
    assert data.weeks[1].days[0].count == 5


def test_get_contributions_omits_graph_on_unexpected_shape(capsys):
    payload = {"data": {"user": {"contributionsCollection": {"contributionCalendar": {"weeks": ["oops"]}}}}}
    config = SiteConfig(github_username="octocat", github_token="secret")
    with patch("homesite.github.requests.post", return_value=_response(payload=payload)):
        assert get_contributions(config) is None
    assert "unexpected response shape" in capsys.readouterr().err
