"""Project files: program source saved together with the screen size.

A project is a JSON (or YAML) document of the form::

    {"code": "...", "width": 240, "height": 320, "timestamp": "..."}
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

DEFAULT_WIDTH = 240
DEFAULT_HEIGHT = 320
MIN_DIMENSION = 1
MAX_DIMENSION = 1920

PROJECT_SUFFIXES = {".json": "json", ".yaml": "yaml", ".yml": "yaml"}


class ProjectError(ValueError):
    """Raised for unreadable project files or invalid screen sizes."""


def validate_dimensions(width: Any, height: Any) -> tuple[int, int]:
    """Check that a screen size is a pair of integers in [1, 1920]."""
    try:
        w, h = int(width), int(height)
    except (TypeError, ValueError):
        raise ProjectError(f"Invalid dimensions: {width!r} x {height!r}")
    if w != width or h != height:
        raise ProjectError(f"Invalid dimensions: {width!r} x {height!r}")
    if not (MIN_DIMENSION <= w <= MAX_DIMENSION and MIN_DIMENSION <= h <= MAX_DIMENSION):
        raise ProjectError(
            f"Invalid dimensions. Width and height must be between "
            f"{MIN_DIMENSION} and {MAX_DIMENSION}."
        )
    return w, h


@dataclass
class Project:
    code: str = ""
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    timestamp: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = dict(self.extra)
        data.update({
            "code": self.code,
            "width": self.width,
            "height": self.height,
            "timestamp": self.timestamp or datetime.now(timezone.utc).isoformat(),
        })
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Project":
        if not isinstance(data, dict):
            raise ProjectError("Project file must contain a mapping")
        extra = {k: v for k, v in data.items()
                 if k not in ("code", "width", "height", "timestamp")}
        width = data.get("width") or DEFAULT_WIDTH
        height = data.get("height") or DEFAULT_HEIGHT
        width, height = validate_dimensions(width, height)
        code = data.get("code") or ""
        if not isinstance(code, str):
            raise ProjectError("Project 'code' must be a string")
        return cls(code=code, width=width, height=height,
                   timestamp=data.get("timestamp"), extra=extra)


def is_project_file(path: Path | str) -> bool:
    return Path(path).suffix.lower() in PROJECT_SUFFIXES


def load_project(path: Path | str) -> Project:
    """Read a JSON or YAML project file."""
    path = Path(path)
    kind = PROJECT_SUFFIXES.get(path.suffix.lower())
    if kind is None:
        raise ProjectError(f"Unsupported project file type: {path.suffix}")
    text = path.read_text(encoding="utf-8")
    if kind == "yaml":
        import yaml  # local import to avoid hard dependency if unused

        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ProjectError(f"Error loading file: Invalid YAML ({exc})") from exc
    else:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ProjectError(f"Error loading file: Invalid JSON ({exc})") from exc
    return Project.from_dict(data)


def save_project(project: Project, path: Path | str) -> Path:
    """Write a project file; the format follows the file suffix."""
    path = Path(path)
    kind = PROJECT_SUFFIXES.get(path.suffix.lower())
    if kind is None:
        raise ProjectError(f"Unsupported project file type: {path.suffix}")
    data = project.to_dict()
    if kind == "yaml":
        import yaml

        text = yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    else:
        text = json.dumps(data, indent=2)
    path.write_text(text, encoding="utf-8")
    return path
