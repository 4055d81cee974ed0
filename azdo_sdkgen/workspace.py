"""
workspace.py

Responsibility: decide where generated packages land when `--out` is relative.
"""

from __future__ import annotations

import json
from pathlib import Path


def _declares_workspaces(package_json: Path) -> bool:
    try:
        data = json.loads(package_json.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return False
    return isinstance(data, dict) and bool(data.get("workspaces"))


def workspace_root(start: str | Path) -> Path:
    """
    Walk up from `start` to the nearest pnpm/npm workspace root; fall back to `start`.
    """
    origin = Path(start).resolve()
    for directory in (origin, *origin.parents):
        if (directory / "pnpm-workspace.yaml").exists():
            return directory
        package_json = directory / "package.json"
        if package_json.exists() and _declares_workspaces(package_json):
            return directory
    return origin


def resolve_output_root(out: str | Path, start: str | Path) -> Path:
    out_path = Path(out).expanduser()
    if out_path.is_absolute():
        return out_path
    return workspace_root(start) / out_path
