from typing import Any, Collection, List, Sequence

from webext_typegen import NamespaceTable, SchemaPart, parse_document
from webext_typegen._merge import build_namespace_table


def parse_documents(*documents: Sequence[Any]) -> List[SchemaPart]:
    """Parse raw JSON documents, as if each had been read from its own file."""
    return [part for document in documents for part in parse_document(document)]


def make_table(
    *documents: Sequence[Any], ignored: Collection[str] = ()
) -> NamespaceTable:
    """Build a merged namespace table from raw JSON documents."""
    return build_namespace_table(parse_documents(*documents), ignored)


COMPOSE_AND_MAIL = [
    {
        "namespace": "compose",
        "types": [
            {"id": "Foo", "type": "object", "properties": {"a": {"type": "string"}}}
        ],
    },
    {
        "namespace": "mail",
        "types": [{"id": "Local", "type": "string"}],
    },
]
