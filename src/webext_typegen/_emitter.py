"""Emit a TypeScript declaration file for a merged namespace table."""

from __future__ import annotations

from typing import List, Optional

from ._comments import deprecation_lines, doc_comment
from ._schema import FunctionDef, NamespaceTable, ObjectType, SchemaNode, SchemaPart
from ._signatures import (
    DECLARATION_STYLE,
    METHOD_STYLE,
    compile_listener_type,
    synthesize_signatures,
)
from ._type_compiler import (
    compile_type,
    render_index_signature,
    render_property_key,
    render_property_member,
)

EVENT_INTERFACE = "WebExtEvent"

FILE_HEADER = [
    "// AUTOMATICALLY GENERATED from WebExtension API schema files.",
    "// This file should not be manually modified.",
    "",
    f"interface {EVENT_INTERFACE}<TCallback extends (...args: any[]) => any> {{",
    "  addListener(cb: TCallback, ...params: any[]): void;",
    "  removeListener(cb: TCallback): void;",
    "  hasListener(cb: TCallback): boolean;",
    "}",
    "",
]


def _node_doc(node: SchemaNode, indent: str) -> List[str]:
    return doc_comment([node.description, *deprecation_lines(node.deprecated)], indent)


def _event_lines(
    event: FunctionDef,
    namespace: str,
    namespaces: NamespaceTable,
    indent: str,
    member: bool,
) -> List[str]:
    lines = doc_comment(
        [event.description, *deprecation_lines(event.deprecated)], indent
    )
    listener = compile_listener_type(event, namespace, namespaces)
    target = render_property_key(event.name) if member else f"const {event.name}"
    lines.append(f"{indent}{target}: {EVENT_INTERFACE}<{listener}>;")
    return lines


def _interface_lines(
    name: str, node: ObjectType, namespace: str, namespaces: NamespaceTable
) -> List[str]:
    lines = [f"  interface {name} {{"]
    for prop_name, prop in node.properties or ():
        if prop.unsupported:
            continue
        lines.extend(_node_doc(prop, "    "))
        lines.append(
            f"    {render_property_member(prop_name, prop, namespace, namespaces)};"
        )
    if node.additional_properties is not None:
        index = render_index_signature(node.additional_properties, namespace, namespaces)
        lines.append(f"    {index};")
    for func in node.functions:
        if not func.unsupported:
            lines.extend(synthesize_signatures(func, namespace, namespaces, METHOD_STYLE))
    for event in node.events:
        if not event.unsupported:
            lines.extend(_event_lines(event, namespace, namespaces, "    ", member=True))
    lines.append("  }")
    return lines


def emit_types(namespace: str, namespaces: NamespaceTable) -> List[str]:
    part = namespaces[namespace]
    lines: List[str] = []
    for node in part.types:
        if node.unsupported:
            continue

        if node.id is None:
            # `$extend` records add members to an existing type. Interfaces merge,
            # so object extensions of a local interface can be declared directly.
            target = part.find_type(node.extend) if node.extend else None
            if (
                node.extend
                and isinstance(node, ObjectType)
                and isinstance(target, ObjectType)
            ):
                lines.extend(_node_doc(node, "  "))
                lines.extend(_interface_lines(node.extend, node, namespace, namespaces))
            else:
                lines.append(f"  /* skipped: $extend {node.extend} */")
            continue

        lines.extend(_node_doc(node, "  "))
        if isinstance(node, ObjectType):
            lines.extend(_interface_lines(node.id, node, namespace, namespaces))
        else:
            lines.append(
                f"  type {node.id} = {compile_type(node, namespace, namespaces)};"
            )
    return lines


def emit_functions(namespace: str, namespaces: NamespaceTable) -> List[str]:
    lines: List[str] = []
    for func in namespaces[namespace].functions:
        if not func.unsupported:
            lines.extend(
                synthesize_signatures(func, namespace, namespaces, DECLARATION_STYLE)
            )
    return lines


def emit_events(namespace: str, namespaces: NamespaceTable) -> List[str]:
    lines: List[str] = []
    for event in namespaces[namespace].events:
        if not event.unsupported:
            lines.extend(_event_lines(event, namespace, namespaces, "  ", member=False))
    return lines


def emit_properties(namespace: str, namespaces: NamespaceTable) -> List[str]:
    lines: List[str] = []
    for name, node in namespaces[namespace].properties.items():
        if node.unsupported:
            continue
        lines.extend(_node_doc(node, "  "))
        lines.append(f"  const {name}: {compile_type(node, namespace, namespaces)};")
    return lines


def emit_namespace(
    part: SchemaPart, namespaces: NamespaceTable, root_namespace: str = "browser"
) -> List[str]:
    namespace = part.namespace
    lines = doc_comment([part.description])
    lines.append(f"declare namespace {root_namespace}.{namespace} {{")
    lines.extend(emit_types(namespace, namespaces))
    lines.extend(emit_functions(namespace, namespaces))
    lines.extend(emit_events(namespace, namespaces))
    lines.extend(emit_properties(namespace, namespaces))
    lines.append("}")
    return lines


def emit_declarations(
    namespaces: NamespaceTable,
    root_namespace: str = "browser",
    global_alias: Optional[str] = "messenger",
) -> str:
    """Generate the full declaration file, namespaces in table order.

    Args:
        namespaces: Merged (and possibly filtered) namespace table.
        root_namespace: Global symbol every namespace is declared under.
        global_alias: Optional second global typed as the root namespace.
    """
    out_lines = list(FILE_HEADER)
    for part in namespaces.values():
        out_lines.extend(emit_namespace(part, namespaces, root_namespace))
        out_lines.append("")

    if global_alias is not None and len(namespaces) > 0:
        out_lines.append(f"declare const {global_alias}: typeof {root_namespace};")

    return "\n".join(out_lines) + "\n"
