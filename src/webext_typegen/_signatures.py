"""Function signature synthesis.

Schema functions signal asynchronous results in one of several ways. All of them
are normalized to a `Promise<...>` return type here, so generated declarations only
ever describe the promise-based calling convention.
"""

from __future__ import annotations

import dataclasses
import warnings
from typing import List, Optional, Sequence, Tuple

from ._comments import deprecation_lines, doc_comment
from ._exceptions import UnknownAsyncConventionWarning
from ._schema import (
    ArrayType,
    FunctionDef,
    FunctionType,
    NamespaceTable,
    Parameter,
)
from ._type_compiler import compile_type, parenthesize_function

RESERVED_WORDS = frozenset(
    """
    break case catch class const continue debugger default delete do else enum
    export extends false finally for function if implements import in instanceof
    interface let new null package private protected public return static super
    switch this throw true try typeof var void while with yield
    """.split()
)

RESERVED_PREFIX = "_"
"""Prefix for declarations whose schema name is a reserved word."""

UNTYPED_PROMISE = "Promise<any>"


@dataclasses.dataclass(frozen=True)
class SignatureStyle:
    """Controls how a signature is rendered."""

    keyword: bool = True
    """Prefix with `function `."""
    name: bool = True
    description: bool = True
    """Emit a JSDoc block before the first signature."""
    arrow: bool = False
    """Use `(...) => T` instead of `(...): T`."""
    delimiter: str = ";"
    parenthesize: bool = False
    indent: str = ""


DECLARATION_STYLE = SignatureStyle(indent="  ")
METHOD_STYLE = SignatureStyle(keyword=False, indent="    ")
INLINE_STYLE = SignatureStyle(
    keyword=False, name=False, description=False, arrow=True, delimiter=""
)


@dataclasses.dataclass(frozen=True)
class CallShape:
    """What a caller sees once the async convention has been normalized."""

    return_type: str
    parameters: Tuple[Parameter, ...]


def _sync_return_type(
    func: FunctionDef, namespace: str, namespaces: NamespaceTable
) -> str:
    if func.returns is None:
        return "void"
    if isinstance(func.returns, ArrayType):
        return "any[]"
    return compile_type(func.returns, namespace, namespaces)


def _resolved_value_type(
    callback: Parameter, namespace: str, namespaces: NamespaceTable
) -> str:
    # The callback's first parameter describes the value the promise resolves to.
    node = callback.node
    nested = node.parameters if isinstance(node, FunctionType) else ()
    if not nested:
        return "any"
    resolved = compile_type(nested[0].node, namespace, namespaces)
    if callback.optional:
        resolved = f"{parenthesize_function(resolved)} | undefined"
    return resolved


def normalize_async(
    func: FunctionDef, namespace: str, namespaces: NamespaceTable
) -> CallShape:
    """Determine the return type and the caller-visible parameters of a function.

    - `async: false`: synchronous, return type from `returns`.
    - `async: true`: returns an untyped promise.
    - `async: "<param>"`: `<param>` is a result callback. It is removed from the
      parameter list, and its first argument becomes the promise's value type.
    Anything else is reported and falls back to an untyped promise with no
    parameters.
    """
    convention = func.async_
    if convention is False:
        return CallShape(_sync_return_type(func, namespace, namespaces), func.parameters)
    if convention is True:
        return CallShape(UNTYPED_PROMISE, func.parameters)
    if isinstance(convention, str):
        callback = func.find_parameter(convention)
        if callback is not None:
            resolved = _resolved_value_type(callback, namespace, namespaces)
            return CallShape(
                f"Promise<{resolved}>",
                tuple(p for p in func.parameters if p.name != convention),
            )

    warnings.warn(
        f"Unknown async type, namespace '{namespace}', function '{func.name}':"
        f" {convention!r}",
        UnknownAsyncConventionWarning,
        stacklevel=2,
    )
    return CallShape(UNTYPED_PROMISE, ())


def _first_droppable(parameters: Sequence[Parameter]) -> Optional[int]:
    """Index of the first optional parameter that is followed by a required one."""
    last_required = max(
        (i for i, p in enumerate(parameters) if not p.optional), default=-1
    )
    for i, param in enumerate(parameters[:last_required]):
        if param.optional:
            return i
    return None


def overload_parameter_lists(
    parameters: Tuple[Parameter, ...],
) -> List[Tuple[Parameter, ...]]:
    """Parameter lists for every overload needed to call a function.

    Optional parameters that precede a required one can't be expressed with `?`, so
    each of them is dropped in turn, producing one overload per dropped parameter.
    The full parameter list always comes last."""
    lists: List[Tuple[Parameter, ...]] = []
    remaining = list(parameters)
    while True:
        index = _first_droppable(remaining)
        if index is None:
            break
        del remaining[index]
        lists.append(tuple(remaining))
    lists.append(parameters)
    return lists


def render_parameter(
    param: Parameter,
    namespace: str,
    namespaces: NamespaceTable,
    trailing: bool = False,
) -> str:
    # Only a trailing callback keeps its `?`; other optional parameters are covered
    # by overloads.
    name = param.name
    if name in RESERVED_WORDS:
        name = RESERVED_PREFIX + name
    optional = "?" if param.optional and param.is_callback and trailing else ""
    return f"{name}{optional}: {compile_type(param.node, namespace, namespaces)}"


def _render_one(
    name: str,
    parameters: Tuple[Parameter, ...],
    return_type: str,
    style: SignatureStyle,
    namespace: str,
    namespaces: NamespaceTable,
) -> str:
    args = ", ".join(
        render_parameter(p, namespace, namespaces, trailing=i == len(parameters) - 1)
        for i, p in enumerate(parameters)
    )
    head = ("function " if style.keyword else "") + (name if style.name else "")
    if style.arrow:
        signature = f"{head}({args}) => {return_type}"
    else:
        signature = f"{head}({args}): {return_type}"
    if style.parenthesize:
        signature = f"({signature})"
    return style.indent + signature + style.delimiter


def _description_lines(func: FunctionDef, shape: CallShape) -> List[Optional[str]]:
    paragraphs: List[Optional[str]] = [func.description]
    for param in shape.parameters:
        if param.description:
            paragraphs.append(f"@param {param.name} {param.description}")
    paragraphs.extend(deprecation_lines(func.deprecated))
    return paragraphs


def synthesize_signatures(
    func: FunctionDef,
    namespace: str,
    namespaces: NamespaceTable,
    style: SignatureStyle = DECLARATION_STYLE,
) -> List[str]:
    """Render all lines declaring one function: doc comment, overloads and, for
    reserved names, an alias export.

    Args:
        func: The function to declare.
        namespace: Namespace the declaration is emitted in.
        namespaces: The merged namespace table.
        style: Rendering options.

    Returns:
        One string per output line.
    """
    shape = normalize_async(func, namespace, namespaces)

    name = func.name
    renamed = style.keyword and style.name and name in RESERVED_WORDS
    if renamed:
        name = RESERVED_PREFIX + name

    lines: List[str] = []
    if style.description:
        lines.extend(doc_comment(_description_lines(func, shape), style.indent))
    for parameters in overload_parameter_lists(shape.parameters):
        lines.append(
            _render_one(
                name, parameters, shape.return_type, style, namespace, namespaces
            )
        )
    if renamed:
        # Export aliases are only legal at module scope, so this line type-checks
        # only when the output file is loaded as a module.
        lines.append(f"{style.indent}export {{ {name} as {func.name} }};")
    return lines


def compile_listener_type(
    func: FunctionDef, namespace: str, namespaces: NamespaceTable
) -> str:
    """Type expression for a callable, as a union when overloads are needed."""
    signatures = synthesize_signatures(func, namespace, namespaces, INLINE_STYLE)
    if len(signatures) == 1:
        return signatures[0]
    return " | ".join(f"({signature})" for signature in signatures)


def compile_function_type(
    node: FunctionType, namespace: str, namespaces: NamespaceTable
) -> str:
    return compile_listener_type(node.as_function(), namespace, namespaces)
