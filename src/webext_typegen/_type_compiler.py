"""Compile schema nodes to TypeScript type expressions."""

from __future__ import annotations

import json
import re
import warnings
from typing import List

from typing_extensions import assert_never

from ._exceptions import MissingArrayItemsWarning, UnresolvedReferenceWarning
from ._resolver import resolve_namespace
from ._schema import (
    AnyType,
    ArrayType,
    BooleanType,
    ChoiceType,
    ConstantType,
    FunctionType,
    NamespaceTable,
    NumberType,
    ObjectType,
    RefType,
    SchemaNode,
    StringType,
    UnknownType,
)

UNKNOWN_TYPE = "unknown"
"""Emitted for nodes we can't determine a type for."""

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def qualify_reference(ref: str, namespace: str, namespaces: NamespaceTable) -> str:
    """Turn a `$ref` into a type name that is valid inside `namespace`."""
    if "." in ref:
        return ref
    resolved = resolve_namespace(ref, namespace, namespaces)
    if resolved is None:
        warnings.warn(
            f"Unresolved reference '{ref}' in namespace '{namespace}'",
            UnresolvedReferenceWarning,
            stacklevel=2,
        )
        return ref
    if resolved == namespace:
        return ref
    return f"{resolved}.{ref}"


def parenthesize_function(expr: str) -> str:
    """Wrap arrow function types, which would otherwise swallow a following `|`."""
    if "=>" in expr and not expr.startswith("{"):
        return f"({expr})"
    return expr


def render_property_key(name: str) -> str:
    return name if _IDENTIFIER_RE.match(name) else json.dumps(name)


def render_property_member(
    name: str, node: SchemaNode, namespace: str, namespaces: NamespaceTable
) -> str:
    """Render `name?: type` for one object member, without a delimiter."""
    optional = "?" if node.optional else ""
    typ = compile_type(node, namespace, namespaces)
    return f"{render_property_key(name)}{optional}: {typ}"


def render_index_signature(
    node: SchemaNode, namespace: str, namespaces: NamespaceTable
) -> str:
    return f"[key: string]: {compile_type(node, namespace, namespaces)}"


def _compile_array(node: ArrayType, namespace: str, namespaces: NamespaceTable) -> str:
    if node.items is None:
        warnings.warn(
            f"Array type without `items` in namespace '{namespace}'"
            + (f" (type '{node.id}')" if node.id else ""),
            MissingArrayItemsWarning,
            stacklevel=3,
        )
        return f"{UNKNOWN_TYPE}[]"

    element = compile_type(node.items, namespace, namespaces)
    if " | " in element or "=>" in element:
        element = f"({element})"
    return f"{element}[]"


def _compile_object(
    node: ObjectType, namespace: str, namespaces: NamespaceTable
) -> str:
    if node.properties is None and node.additional_properties is None:
        return "object"

    members: List[str] = [
        render_property_member(name, prop, namespace, namespaces)
        for name, prop in node.properties or ()
        if not prop.unsupported
    ]
    if node.additional_properties is not None:
        members.append(
            render_index_signature(node.additional_properties, namespace, namespaces)
        )
    if not members:
        return "{}"
    return "{ " + "; ".join(members) + " }"


def compile_type(node: SchemaNode, namespace: str, namespaces: NamespaceTable) -> str:
    """Compile one schema node to a TypeScript type expression.

    Args:
        node: The node to compile.
        namespace: Namespace the expression will be emitted in. References to types
            in this namespace are left unqualified.
        namespaces: The merged namespace table, used to resolve references.

    Returns:
        A type expression, e.g. `string`, `tabs.Tab[]` or `{ a?: number }`.
    """
    if isinstance(node, RefType):
        return qualify_reference(node.ref, namespace, namespaces)
    elif isinstance(node, NumberType):
        return "number"
    elif isinstance(node, StringType):
        if node.enum:
            return " | ".join(json.dumps(member) for member in node.enum)
        return "string"
    elif isinstance(node, ArrayType):
        return _compile_array(node, namespace, namespaces)
    elif isinstance(node, BooleanType):
        return "boolean"
    elif isinstance(node, ChoiceType):
        # We're using dictionary as an ordered set.
        return " | ".join(
            {
                parenthesize_function(compile_type(c, namespace, namespaces)): None
                for c in node.choices
            }.keys()
        )
    elif isinstance(node, FunctionType):
        return _signatures.compile_function_type(node, namespace, namespaces)
    elif isinstance(node, AnyType):
        return "any"
    elif isinstance(node, ObjectType):
        return _compile_object(node, namespace, namespaces)
    elif isinstance(node, ConstantType):
        return json.dumps(node.value)
    elif isinstance(node, UnknownType):
        return UNKNOWN_TYPE
    else:
        assert_never(node)


# `_signatures` imports this module at load time, so it is bound last and looked up
# as a module attribute.
from . import _signatures  # noqa: E402
