from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict

import yaml


def read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def read_yaml(path: Path) -> Any:
    return yaml.safe_load(read_text(path))


def read_json(path: Path) -> Any:
    return json.loads(read_text(path))


def dump_yaml(data: Any) -> str:
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True, width=120)


def dump_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def _stage_temp(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            handle.write(content)
    except BaseException:
        os.unlink(temp_name)
        raise
    return Path(temp_name)


def write_artifacts(contents: Dict[Path, str]) -> None:
    """Write several files so that no target is replaced unless every one was staged."""
    staged: Dict[Path, Path] = {}
    try:
        for path, content in contents.items():
            staged[path] = _stage_temp(path, content)
    except BaseException:
        for temp in staged.values():
            temp.unlink(missing_ok=True)
        raise
    for path, temp in staged.items():
        os.replace(temp, path)


def write_text(path: Path, content: str) -> None:
    write_artifacts({path: content})


def write_yaml(path: Path, data: Any) -> None:
    write_text(path, dump_yaml(data))


def write_json(path: Path, data: Any) -> None:
    write_text(path, dump_json(data))
