from typing import List

from hypothesis import given
from hypothesis import strategies as st

from webext_typegen import merge_schema_parts
from webext_typegen._merge import filter_namespaces
from webext_typegen._schema import ObjectType, SchemaPart, StringType

from .utils import make_table, parse_documents

SEND = {
    "name": "send",
    "async": "callback",
    "parameters": [
        {"name": "a", "type": "string"},
        {"name": "callback", "type": "function"},
    ],
}


def test_first_type_declaration_wins() -> None:
    table = make_table(
        [
            {
                "namespace": "mail",
                "types": [
                    {
                        "id": "Foo",
                        "type": "object",
                        "properties": {"a": {"type": "string"}},
                    }
                ],
            }
        ],
        [
            {
                "namespace": "mail",
                "types": [
                    {
                        "id": "Foo",
                        "type": "object",
                        "properties": {"b": {"type": "number"}},
                    }
                ],
                "functions": [SEND],
            }
        ],
    )
    assert list(table.keys()) == ["mail"]
    (foo,) = table["mail"].types
    assert isinstance(foo, ObjectType)
    assert foo.properties is not None
    assert [name for name, _ in foo.properties] == ["a"]
    assert [f.name for f in table["mail"].functions] == ["send"]


def test_anonymous_types_are_never_deduplicated() -> None:
    extension = {"$extend": "WebExtensionManifest", "properties": {}}
    table = make_table(
        [{"namespace": "manifest", "types": [extension]}],
        [{"namespace": "manifest", "types": [extension]}],
    )
    assert len(table["manifest"].types) == 2


def test_identical_functions_from_different_files_are_merged() -> None:
    table = make_table(
        [{"namespace": "mail", "functions": [SEND]}],
        [{"namespace": "mail", "functions": [SEND]}],
    )
    assert len(table["mail"].functions) == 1


def test_functions_with_same_name_but_different_parameters_are_kept() -> None:
    other = dict(SEND, parameters=[{"name": "callback", "type": "function"}])
    table = make_table(
        [{"namespace": "mail", "functions": [SEND]}],
        [{"namespace": "mail", "functions": [other]}],
    )
    functions = table["mail"].functions
    assert len(functions) == 2
    # Newer file first.
    assert [p.name for p in functions[0].parameters] == ["callback"]


def test_newer_events_win() -> None:
    table = make_table(
        [
            {
                "namespace": "mail",
                "events": [
                    {"name": "onSent", "parameters": [{"name": "a", "type": "any"}]},
                    {"name": "onDeleted"},
                ],
            }
        ],
        [
            {
                "namespace": "mail",
                "events": [
                    {"name": "onSent", "parameters": [{"name": "b", "type": "any"}]}
                ],
            }
        ],
    )
    events = table["mail"].events
    assert [e.name for e in events] == ["onSent", "onDeleted"]
    assert [p.name for p in events[0].parameters] == ["b"]


def test_properties_are_unioned() -> None:
    table = make_table(
        [{"namespace": "tabs", "properties": {"A": {"value": 1}, "B": {"value": 2}}}],
        [{"namespace": "tabs", "properties": {"B": {"value": 3}, "C": {"value": 4}}}],
    )
    properties = table["tabs"].properties
    assert list(properties.keys()) == ["A", "B", "C"]
    assert getattr(properties["B"], "value") == 3


def test_description_comes_from_first_file_that_has_one() -> None:
    table = make_table(
        [{"namespace": "mail"}],
        [{"namespace": "mail", "description": "Mail."}],
        [{"namespace": "mail", "description": "Ignored."}],
    )
    assert table["mail"].description == "Mail."


def test_delete_functions_are_removed() -> None:
    table = make_table(
        [{"namespace": "mail", "functions": [{"name": "delete"}, {"name": "get"}]}]
    )
    assert [f.name for f in table["mail"].functions] == ["get"]


def test_ignored_namespaces_are_removed() -> None:
    documents = [{"namespace": "mail"}, {"namespace": "compose"}]
    assert list(make_table(documents, ignored=["compose"]).keys()) == ["mail"]
    table = merge_schema_parts(parse_documents(documents))
    assert list(filter_namespaces(table, ["mail"]).keys()) == ["compose"]


def _part(ids: List[str]) -> SchemaPart:
    return SchemaPart(namespace="ns", types=tuple(StringType(id=i) for i in ids))


_type_ids = st.lists(st.sampled_from(["Foo", "Bar", "Baz", "Qux"]), max_size=5)


@given(a=_type_ids, b=_type_ids, c=_type_ids)
def test_type_merge_is_associative(a: List[str], b: List[str], c: List[str]) -> None:
    left = merge_schema_parts(
        [merge_schema_parts([_part(a), _part(b)])["ns"], _part(c)]
    )
    right = merge_schema_parts(
        [_part(a), merge_schema_parts([_part(b), _part(c)])["ns"]]
    )
    assert [t.id for t in left["ns"].types] == [t.id for t in right["ns"].types]
    assert {t.id for t in left["ns"].types} == set(a) | set(b) | set(c)
