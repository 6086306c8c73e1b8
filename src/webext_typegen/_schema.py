"""Typed model for WebExtension API schema documents.

Raw JSON nodes are classified once, at load time, into one dataclass per
discriminator (`$ref`, `type`, `choices`, ...). Everything downstream matches on
these classes instead of probing dictionary keys.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from ._exceptions import ParseError

AsyncConvention = Union[bool, str]
"""`False` for synchronous functions, `True` for promise-returning ones, or the name
of the parameter that receives the result callback."""

CALLBACK_PARAMETER_NAMES = ("callback", "responseCallback")


@dataclasses.dataclass(frozen=True, kw_only=True)
class _SchemaNode:
    id: Optional[str] = None
    """Identifier for named types; `None` for inline and anonymous nodes."""
    description: Optional[str] = None
    optional: bool = False
    deprecated: Union[bool, str] = False
    unsupported: bool = False
    extend: Optional[str] = None
    """Target of a `$extend` record, which adds members to an existing type."""


@dataclasses.dataclass(frozen=True, kw_only=True)
class RefType(_SchemaNode):
    ref: str


@dataclasses.dataclass(frozen=True, kw_only=True)
class NumberType(_SchemaNode):
    integer: bool = False


@dataclasses.dataclass(frozen=True, kw_only=True)
class StringType(_SchemaNode):
    enum: Optional[Tuple[str, ...]] = None


@dataclasses.dataclass(frozen=True, kw_only=True)
class ArrayType(_SchemaNode):
    items: Optional[SchemaNode] = None


@dataclasses.dataclass(frozen=True, kw_only=True)
class BooleanType(_SchemaNode):
    pass


@dataclasses.dataclass(frozen=True, kw_only=True)
class ChoiceType(_SchemaNode):
    choices: Tuple[SchemaNode, ...]


@dataclasses.dataclass(frozen=True, kw_only=True)
class FunctionType(_SchemaNode):
    parameters: Tuple[Parameter, ...] = ()
    returns: Optional[SchemaNode] = None
    async_: AsyncConvention = False

    def as_function(self, name: str = "") -> FunctionDef:
        """View this node as a function definition, e.g. for signature synthesis."""
        return FunctionDef(
            name=name,
            async_=self.async_,
            description=self.description,
            parameters=self.parameters,
            returns=self.returns,
            deprecated=self.deprecated,
        )


@dataclasses.dataclass(frozen=True, kw_only=True)
class AnyType(_SchemaNode):
    pass


@dataclasses.dataclass(frozen=True, kw_only=True)
class ObjectType(_SchemaNode):
    properties: Optional[Tuple[Tuple[str, SchemaNode], ...]] = None
    """Ordered (name, node) pairs, or `None` when the schema lists no properties."""
    functions: Tuple[FunctionDef, ...] = ()
    events: Tuple[FunctionDef, ...] = ()
    additional_properties: Optional[SchemaNode] = None


@dataclasses.dataclass(frozen=True, kw_only=True)
class ConstantType(_SchemaNode):
    value: Union[str, int, float, bool, None]


@dataclasses.dataclass(frozen=True, kw_only=True)
class UnknownType(_SchemaNode):
    raw_type: Optional[str] = None


SchemaNode = Union[
    RefType,
    NumberType,
    StringType,
    ArrayType,
    BooleanType,
    ChoiceType,
    FunctionType,
    AnyType,
    ObjectType,
    ConstantType,
    UnknownType,
]


@dataclasses.dataclass(frozen=True)
class Parameter:
    name: str
    node: SchemaNode

    @property
    def optional(self) -> bool:
        return self.node.optional

    @property
    def description(self) -> Optional[str]:
        return self.node.description

    @property
    def is_callback(self) -> bool:
        return self.name in CALLBACK_PARAMETER_NAMES


@dataclasses.dataclass(frozen=True)
class FunctionDef:
    """A namespace function, a member function of an object type, or an event."""

    name: str
    async_: AsyncConvention = False
    description: Optional[str] = None
    parameters: Tuple[Parameter, ...] = ()
    returns: Optional[SchemaNode] = None
    deprecated: Union[bool, str] = False
    unsupported: bool = False

    def find_parameter(self, name: str) -> Optional[Parameter]:
        for param in self.parameters:
            if param.name == name:
                return param
        return None


@dataclasses.dataclass(frozen=True)
class SchemaPart:
    """Everything one source file says about one namespace."""

    namespace: str
    description: Optional[str] = None
    functions: Tuple[FunctionDef, ...] = ()
    events: Tuple[FunctionDef, ...] = ()
    types: Tuple[SchemaNode, ...] = ()
    properties: Dict[str, SchemaNode] = dataclasses.field(default_factory=dict)

    def find_type(self, type_id: str) -> Optional[SchemaNode]:
        for node in self.types:
            if node.id == type_id:
                return node
        return None


NamespaceTable = Dict[str, SchemaPart]


def _metadata(raw: Mapping[str, Any]) -> Dict[str, Any]:
    return dict(
        id=raw.get("id"),
        description=raw.get("description"),
        optional=bool(raw.get("optional", False)),
        deprecated=raw.get("deprecated", False),
        unsupported=bool(raw.get("unsupported", False)),
        extend=raw.get("$extend"),
    )


def _enum_members(raw_enum: Any) -> Tuple[str, ...]:
    # Members are either plain strings or {"name": ..., "description": ...}.
    members = []
    for member in raw_enum:
        if isinstance(member, Mapping):
            if "name" not in member:
                raise ParseError("enum member without a name")
            members.append(str(member["name"]))
        else:
            members.append(str(member))
    return tuple(members)


def _expect_mapping(raw: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(raw, Mapping):
        raise ParseError(f"expected {what} to be an object, got {type(raw).__name__}")
    return raw


def _expect_list(raw: Any, what: str) -> List[Any]:
    # A missing or null list counts as empty.
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ParseError(f"expected `{what}` to be a list, got {type(raw).__name__}")
    return raw


def parse_type(raw: Any) -> SchemaNode:
    """Classify one raw schema node. Checks run in a fixed order; first match wins."""
    raw = _expect_mapping(raw, "a type")
    meta = _metadata(raw)
    typ = raw.get("type")

    if "$ref" in raw:
        return RefType(ref=raw["$ref"], **meta)
    if typ in ("integer", "number"):
        return NumberType(integer=typ == "integer", **meta)
    if typ in ("string", "url"):
        enum = _enum_members(raw["enum"]) if isinstance(raw.get("enum"), list) else None
        return StringType(enum=enum, **meta)
    if typ == "array":
        items = parse_type(raw["items"]) if "items" in raw else None
        return ArrayType(items=items, **meta)
    if typ == "boolean":
        return BooleanType(**meta)
    if raw.get("choices"):
        return ChoiceType(choices=tuple(parse_type(c) for c in raw["choices"]), **meta)
    if typ == "function":
        return FunctionType(
            parameters=_parse_parameters(raw.get("parameters")),
            returns=parse_type(raw["returns"]) if "returns" in raw else None,
            async_=raw.get("async", False),
            **meta,
        )
    if typ == "any":
        return AnyType(**meta)
    if typ == "object" or (
        typ is None and any(k in raw for k in ("properties", "functions", "events"))
    ):
        return _parse_object(raw, meta)
    if typ is None and "value" in raw:
        value = raw["value"]
        if value is None or isinstance(value, (str, int, float, bool)):
            return ConstantType(value=value, **meta)
        return AnyType(**meta)
    return UnknownType(raw_type=typ, **meta)


def _parse_object(raw: Mapping[str, Any], meta: Dict[str, Any]) -> ObjectType:
    properties = None
    if "properties" in raw:
        properties = tuple(
            (name, parse_type(prop))
            for name, prop in _expect_mapping(raw["properties"], "properties").items()
        )

    additional = raw.get("additionalProperties")
    if additional is True:
        additional_properties: Optional[SchemaNode] = AnyType()
    elif isinstance(additional, Mapping):
        additional_properties = parse_type(additional)
    else:
        additional_properties = None

    return ObjectType(
        properties=properties,
        functions=tuple(
            parse_function(f) for f in _expect_list(raw.get("functions"), "functions")
        ),
        events=tuple(
            parse_function(e) for e in _expect_list(raw.get("events"), "events")
        ),
        additional_properties=additional_properties,
        **meta,
    )


def _parse_parameters(raw_parameters: Any) -> Tuple[Parameter, ...]:
    if raw_parameters is None:
        return ()
    if not isinstance(raw_parameters, list):
        raise ParseError("expected `parameters` to be a list")
    params = []
    for raw in raw_parameters:
        raw = _expect_mapping(raw, "a parameter")
        if "name" not in raw:
            raise ParseError("parameter without a name")
        params.append(Parameter(name=raw["name"], node=parse_type(raw)))
    return tuple(params)


def parse_function(raw: Any) -> FunctionDef:
    raw = _expect_mapping(raw, "a function")
    if "name" not in raw:
        raise ParseError("function without a name")
    return FunctionDef(
        name=raw["name"],
        async_=raw.get("async", False),
        description=raw.get("description"),
        parameters=_parse_parameters(raw.get("parameters")),
        returns=parse_type(raw["returns"]) if "returns" in raw else None,
        deprecated=raw.get("deprecated", False),
        unsupported=bool(raw.get("unsupported", False)),
    )


def parse_schema_part(raw: Any) -> SchemaPart:
    raw = _expect_mapping(raw, "a namespace record")
    namespace = raw.get("namespace")
    if not isinstance(namespace, str):
        raise ParseError("namespace record without a `namespace` name")

    try:
        properties = {
            name: parse_type(prop)
            for name, prop in _expect_mapping(
                raw.get("properties", {}), "properties"
            ).items()
        }
        return SchemaPart(
            namespace=namespace,
            description=raw.get("description"),
            functions=tuple(
                parse_function(f)
                for f in _expect_list(raw.get("functions"), "functions")
            ),
            events=tuple(
                parse_function(e) for e in _expect_list(raw.get("events"), "events")
            ),
            types=tuple(
                parse_type(t) for t in _expect_list(raw.get("types"), "types")
            ),
            properties=properties,
        )
    except ParseError as e:
        raise ParseError(f"in namespace '{namespace}': {e.message}") from e


def parse_document(raw: Any) -> List[SchemaPart]:
    """Parse the decoded JSON of one schema file: a list of namespace records."""
    if not isinstance(raw, list):
        raise ParseError(
            f"expected a list of namespace records, got {type(raw).__name__}"
        )
    return [parse_schema_part(part) for part in raw]
