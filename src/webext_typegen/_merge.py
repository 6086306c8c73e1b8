"""Combining per-file namespace records into one record per namespace."""

from __future__ import annotations

import dataclasses
from typing import Collection, Dict, Hashable, Iterable, List, Set, Tuple

from ._schema import FunctionDef, NamespaceTable, SchemaNode, SchemaPart

UNSUPPORTED_FUNCTION_NAMES = ("delete",)
"""Functions dropped after merging. `delete` can't be declared in a namespace."""


def _function_key(func: FunctionDef) -> Hashable:
    return (func.name, func.async_, func.parameters)


def _merge_functions(
    new: Tuple[FunctionDef, ...], existing: Tuple[FunctionDef, ...]
) -> Tuple[FunctionDef, ...]:
    # Two functions are duplicates when name, async convention and parameters all
    # match, regardless of which file they came from.
    seen: Set[Hashable] = set()
    out: List[FunctionDef] = []
    for func in new + existing:
        key = _function_key(func)
        if key not in seen:
            seen.add(key)
            out.append(func)
    return tuple(out)


def _merge_types(
    new: Tuple[SchemaNode, ...], existing: Tuple[SchemaNode, ...]
) -> Tuple[SchemaNode, ...]:
    # Anonymous types (e.g. `$extend` records) have no identity and are all kept.
    seen: Set[str] = set()
    out: List[SchemaNode] = []
    for node in existing + new:
        if node.id is None:
            out.append(node)
        elif node.id not in seen:
            seen.add(node.id)
            out.append(node)
    return tuple(out)


def _merge_events(
    new: Tuple[FunctionDef, ...], existing: Tuple[FunctionDef, ...]
) -> Tuple[FunctionDef, ...]:
    taken = {(event.async_, event.name) for event in new}
    return new + tuple(e for e in existing if (e.async_, e.name) not in taken)


def _merge_parts(existing: SchemaPart, new: SchemaPart) -> SchemaPart:
    properties: Dict[str, SchemaNode] = dict(existing.properties)
    properties.update(new.properties)
    return SchemaPart(
        namespace=existing.namespace,
        description=existing.description or new.description,
        functions=_merge_functions(new.functions, existing.functions),
        events=_merge_events(new.events, existing.events),
        types=_merge_types(new.types, existing.types),
        properties=properties,
    )


def merge_schema_parts(parts: Iterable[SchemaPart]) -> NamespaceTable:
    """Merge namespace records in source order, one table entry per namespace.

    Types are deduplicated by `id` with the first declaration winning. Functions
    are listed newest file first. For events sharing a name, the newer file wins.
    Top-level properties are unioned by key, later files overriding earlier ones.
    """
    namespaces: NamespaceTable = {}
    for part in parts:
        existing = namespaces.get(part.namespace)
        namespaces[part.namespace] = (
            part if existing is None else _merge_parts(existing, part)
        )
    return namespaces


def remove_unsupported_functions(
    namespaces: NamespaceTable,
    names: Collection[str] = UNSUPPORTED_FUNCTION_NAMES,
) -> NamespaceTable:
    return {
        namespace: dataclasses.replace(
            part, functions=tuple(f for f in part.functions if f.name not in names)
        )
        for namespace, part in namespaces.items()
    }


def filter_namespaces(
    namespaces: NamespaceTable, ignored: Collection[str]
) -> NamespaceTable:
    """Drop ignored namespaces entirely.

    References into a dropped namespace are not rewritten; they will be emitted
    unqualified and reported as unresolved."""
    return {
        namespace: part
        for namespace, part in namespaces.items()
        if namespace not in ignored
    }


def build_namespace_table(
    parts: Iterable[SchemaPart], ignored: Collection[str] = ()
) -> NamespaceTable:
    """Merge, post-process and filter. The result is not modified afterwards."""
    return filter_namespaces(
        remove_unsupported_functions(merge_schema_parts(parts)), ignored
    )
