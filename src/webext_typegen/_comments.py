from __future__ import annotations

from typing import Iterable, List, Optional, Union


def deprecation_lines(deprecated: Union[bool, str]) -> List[str]:
    if deprecated is False:
        return []
    if isinstance(deprecated, str):
        return [f"@deprecated {deprecated}"]
    return ["@deprecated"]


def doc_comment(paragraphs: Iterable[Optional[str]], indent: str = "") -> List[str]:
    """Format text as a JSDoc block. Returns no lines if there is no text."""
    lines: List[str] = []
    for paragraph in paragraphs:
        if not paragraph:
            continue
        # A `*/` in schema text would close the comment early.
        for line in paragraph.replace("*/", "*\\/").split("\n"):
            lines.append(line.strip())
    if not lines:
        return []
    return (
        [f"{indent}/**"]
        + [f"{indent} * {line}".rstrip() for line in lines]
        + [f"{indent} */"]
    )
