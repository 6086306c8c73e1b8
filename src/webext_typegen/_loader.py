"""Reading schema documents from disk."""

from __future__ import annotations

import json
import warnings
from pathlib import Path
from typing import Iterable, List

import rich

from ._exceptions import MissingDirectoryWarning, ParseError
from ._schema import SchemaPart, parse_document


def find_schema_files(directory: Path) -> List[Path]:
    """List the `.json` files directly inside a directory, sorted by name.

    A missing directory contributes no files; we warn instead of failing, since
    either of the two schema roots may legitimately be absent."""
    rich.print(f"[bold](webext-typegen)[/bold] Reading schema directory: {directory}")
    if not directory.is_dir():
        warnings.warn(
            f"Directory not found: {directory}", MissingDirectoryWarning, stacklevel=2
        )
        return []
    return sorted(
        path
        for path in directory.iterdir()
        if path.is_file() and path.suffix.lower() == ".json"
    )


def strip_json_comments(text: str) -> str:
    """Remove `//` comment lines and a leading `/* ... */` license block."""
    lines = [line for line in text.split("\n") if not line.lstrip().startswith("//")]
    stripped = "\n".join(lines)
    if stripped.lstrip().startswith("/*"):
        end = stripped.find("*/")
        if end >= 0:
            stripped = stripped[end + 2 :]
    return stripped


def read_schema_file(path: Path) -> List[SchemaPart]:
    try:
        text = strip_json_comments(path.read_text(encoding="utf-8"))
        parts = parse_document(json.loads(text))
    except UnicodeDecodeError as e:
        raise ParseError(f"not valid UTF-8 ({e})", path) from e
    except json.JSONDecodeError as e:
        raise ParseError(f"invalid JSON ({e})", path) from e
    except ParseError as e:
        raise ParseError(e.message, path) from e

    for part in parts:
        rich.print(f"  ...processing namespace: {part.namespace}")
    return parts


def read_schema_files(paths: Iterable[Path]) -> List[SchemaPart]:
    """Read every file in order. The first malformed file aborts the whole run."""
    parts: List[SchemaPart] = []
    for path in paths:
        parts.extend(read_schema_file(path))
    return parts
