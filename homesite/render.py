from __future__ import annotations

import re
import shutil
import sys
from pathlib import Path

PLACEHOLDER_RE = re.compile(r"\{\{(\w+)\}\}")
BUILD_MARKERS = ("_headers", "sitemap.xml")


def render_template(template: str, **context: str) -> str:
    # One pass over the template: substituted values are never rescanned.
    def fill(match: re.Match) -> str:
        return context.get(match.group(1), match.group(0))

    return PLACEHOLDER_RE.sub(fill, template)


def read_template(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def copy_static(static_dir: Path, dest_dir: Path) -> None:
    shutil.copytree(static_dir, dest_dir, dirs_exist_ok=True)


def is_previous_build(path: Path) -> bool:
    return all((path / name).is_file() for name in BUILD_MARKERS)


def clean_output_dir(output_dir: Path, project_root: Path) -> None:
    if not output_dir.exists():
        return
    output_resolved = output_dir.resolve()
    root_resolved = project_root.resolve()
    if output_resolved == root_resolved or output_resolved in root_resolved.parents:
        print(f"Refusing to clean {output_dir}: it contains the project.", file=sys.stderr)
        sys.exit(1)
    # Outside the project only an earlier build output may be replaced.
    if not output_resolved.is_relative_to(root_resolved) and not is_previous_build(output_resolved):
        print(
            f"Refusing to clean {output_dir}: it is outside the project and not a previous build.",
            file=sys.stderr,
        )
        sys.exit(1)
    shutil.rmtree(output_dir)
