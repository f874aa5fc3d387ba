from __future__ import annotations

import json
import os
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml
from dotenv import dotenv_values


DEFAULT_SITE_URL = "https://andrej.sh"
DEFAULT_TITLE = "Andrej Acevski"
DEFAULT_DESCRIPTION = (
    "breaking code, building tools. software engineer writing about go, typescript, "
    "and making things that work."
)


@dataclass
class SiteConfig:
    content_dir: Path = Path("content")
    static_dir: Path = Path("static")
    templates_dir: Path = Path("templates")
    assets_dir: Path = Path("assets")
    output_dir: Path = Path("dist")
    site_url: str = DEFAULT_SITE_URL
    site_title: str = DEFAULT_TITLE
    site_description: str = DEFAULT_DESCRIPTION
    language: str = "en-us"
    github_token: str = ""
    github_username: str = ""
    host: str = "127.0.0.1"
    port: int = 8080

    @property
    def blog_dir(self) -> Path:
        return self.content_dir / "blog"

    @property
    def books_dir(self) -> Path:
        return self.content_dir / "books"

    @property
    def has_github_credentials(self) -> bool:
        return bool(self.github_token and self.github_username)


def load_config(path: Path) -> dict:
    if not path.exists():
        return {}
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix == ".toml":
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            print(f"Invalid TOML in config file {path}: {exc}", file=sys.stderr)
            sys.exit(1)
        return data
    if suffix in {".yml", ".yaml"}:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            print(f"Invalid YAML in config file {path}: {exc}", file=sys.stderr)
            sys.exit(1)
        if data is None:
            return {}
        if not isinstance(data, dict):
            print(f"YAML config must be a mapping: {path}", file=sys.stderr)
            sys.exit(1)
        return data
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        print(f"Invalid JSON in config file {path}: {exc}", file=sys.stderr)
        sys.exit(1)
    if not isinstance(data, dict):
        print(f"JSON config must be an object: {path}", file=sys.stderr)
        sys.exit(1)
    return data


def resolve_secret(key: str, config_value: object, env_file: Path) -> str:
    value = str(config_value or "").strip()
    if value:
        return value
    value = os.environ.get(key, "").strip()
    if value:
        return value
    if env_file.exists():
        return (dotenv_values(env_file).get(key) or "").strip()
    return ""


def load_site_config(path: Path, env_file: Optional[Path] = None) -> SiteConfig:
    data = load_config(path)
    base = path.resolve().parent if path.exists() else Path.cwd()
    if env_file is None:
        env_file = base / ".env"

    def cfg_path(key: str, default: Path) -> Path:
        value = data.get(key)
        if value is None:
            return default
        value_path = Path(str(value))
        return value_path if value_path.is_absolute() else base / value_path

    def cfg_str(key: str, default: str) -> str:
        value = data.get(key)
        return default if value is None else str(value)

    def cfg_int(key: str, default: int) -> int:
        value = data.get(key)
        if value is None:
            return default
        try:
            return int(str(value).strip())
        except ValueError:
            print(f"Ignoring non-integer {key} in {path}: {value!r}", file=sys.stderr)
            return default

    defaults = SiteConfig()
    return SiteConfig(
        content_dir=cfg_path("content", defaults.content_dir),
        static_dir=cfg_path("static", defaults.static_dir),
        templates_dir=cfg_path("templates", defaults.templates_dir),
        assets_dir=cfg_path("assets", defaults.assets_dir),
        output_dir=cfg_path("output", defaults.output_dir),
        site_url=cfg_str("site_url", defaults.site_url).rstrip("/"),
        site_title=cfg_str("site_title", defaults.site_title),
        site_description=cfg_str("site_description", defaults.site_description),
        language=cfg_str("language", defaults.language),
        github_token=resolve_secret("GITHUB_TOKEN", data.get("github_token"), env_file),
        github_username=resolve_secret("GITHUB_USERNAME", data.get("github_username"), env_file),
        host=cfg_str("host", defaults.host),
        port=cfg_int("port", defaults.port),
    )
