from __future__ import annotations

from typing import List, Optional

from ._schema import NamespaceTable


def find_declaring_namespaces(type_id: str, namespaces: NamespaceTable) -> List[str]:
    """Names of all namespaces declaring a type with this id, in table order."""
    return [
        name
        for name, part in namespaces.items()
        if any(node.id == type_id for node in part.types)
    ]


def resolve_namespace(
    type_id: str, current_namespace: str, namespaces: NamespaceTable
) -> Optional[str]:
    """Pick the namespace an unqualified reference points to.

    The current namespace wins if it declares the type. Otherwise the first
    declaring namespace in table order (i.e. source order) wins. Returns `None`
    when no namespace declares it."""
    found = find_declaring_namespaces(type_id, namespaces)
    if not found:
        return None
    if current_namespace in found:
        return current_namespace
    return found[0]
