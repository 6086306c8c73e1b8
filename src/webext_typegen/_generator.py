from __future__ import annotations

from pathlib import Path

import rich

from ._config import GeneratorConfig
from ._emitter import emit_declarations
from ._loader import find_schema_files, read_schema_files
from ._merge import build_namespace_table


def generate_typings(config: GeneratorConfig) -> Path:
    """Read both schema directories, merge and write the declaration file.

    All input is read and merged before anything is emitted, since references can
    point into any namespace. The output is written once, at the end; a malformed
    schema file raises `ParseError` before anything is written."""
    paths = find_schema_files(config.schema_directory) + find_schema_files(
        config.browser_schema_directory
    )
    parts = read_schema_files(paths)

    ignored = config.ignore_list()
    if ignored:
        rich.print(
            f"[bold](webext-typegen)[/bold] Ignoring namespaces: {', '.join(ignored)}"
        )
    namespaces = build_namespace_table(parts, ignored)

    text = emit_declarations(
        namespaces,
        root_namespace=config.root_namespace,
        global_alias=config.global_alias,
    )

    target_path = config.output_path
    target_path.write_text(text, encoding="utf-8")
    rich.print(
        f"[bold](webext-typegen)[/bold] Wrote {len(namespaces)} namespaces to"
        f" {target_path}"
    )
    return target_path
