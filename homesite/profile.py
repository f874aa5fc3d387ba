from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class WorkItem:
    company: str
    title: str
    period: str
    description: str
    url: str


@dataclass(frozen=True)
class ProjectItem:
    name: str
    description: str
    url: str


@dataclass(frozen=True)
class Profile:
    name: str
    nickname: str
    location: str
    role: str
    status: str
    bio: str
    work: list[WorkItem] = field(default_factory=list)
    projects: list[ProjectItem] = field(default_factory=list)


PROFILE = Profile(
    name="Andrej Acevski",
    nickname="andrej's shell",
    location="skopje, mk",
    role="product engineer @ tolt",
    status="breaking code",
    bio=(
        "software engineer, open source advocate. fcse graduate. building kaneo and tools "
        "that make developers' lives easier."
    ),
    work=[
        WorkItem(
            company="Tolt",
            title="product engineer",
            period="'25 - present",
            description=(
                "building all-in-one affiliate marketing software for saas startups. helping "
                "companies grow with stripe, paddle, and chargebee integrations. shipping "
                "features that scale."
            ),
            url="https://tolt.com",
        ),
        WorkItem(
            company="CodeChem",
            title="software engineer",
            period="'20 - '25",
            description=(
                "building software solutions and working on interesting problems. go, "
                "typescript, and whatever gets the job done."
            ),
            url="https://codechem.com",
        ),
        WorkItem(
            company="Kaneo",
            title="founder & engineer",
            period="'25 - present",
            description=(
                "building an open source project management platform focused on simplicity "
                "and efficiency. go, typescript, postgres. making pm tools that don't suck."
            ),
            url="https://kaneo.app",
        ),
    ],
    projects=[
        ProjectItem(
            name="kaneo",
            description=(
                "open source project management platform. self-host it, customize it, make it "
                "yours. built with typescript and a lot of coffee."
            ),
            url="https://github.com/usekaneo/kaneo",
        ),
        ProjectItem(
            name="drim",
            description=(
                "cli tool to easily deploy your kaneo instance. because deployment should be "
                "simple. written in go."
            ),
            url="https://github.com/usekaneo/drim",
        ),
        ProjectItem(
            name="andrej.sh",
            description="this website. minimal portfolio built from markdown. fast and clean.",
            url="https://github.com/aacevski/andrej.sh",
        ),
    ],
)


def load_ascii_art(path: Path) -> str:
    if not path.exists():
        return ""
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        print(f"Failed to load ASCII art {path}: {exc}", file=sys.stderr)
        return ""
