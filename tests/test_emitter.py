from webext_typegen import emit_declarations
from webext_typegen._emitter import FILE_HEADER, emit_namespace, emit_types

from .utils import make_table

MAIL = [
    {
        "namespace": "mail",
        "description": "Mail API.",
        "types": [
            {
                "id": "Foo",
                "type": "object",
                "properties": {
                    "a": {"type": "string", "description": "The a."},
                    "b": {"type": "integer", "optional": True},
                },
            },
            {"id": "Color", "type": "string", "enum": ["red", "blue"]},
        ],
        "functions": [
            {
                "name": "send",
                "async": "callback",
                "parameters": [
                    {"name": "foo", "$ref": "Foo"},
                    {
                        "name": "callback",
                        "type": "function",
                        "parameters": [{"name": "ok", "type": "boolean"}],
                    },
                ],
            }
        ],
        "events": [
            {
                "name": "onSent",
                "type": "function",
                "parameters": [{"name": "foo", "$ref": "Foo"}],
            }
        ],
        "properties": {"MAX": {"value": 5}},
    }
]


def test_namespace_block() -> None:
    table = make_table(MAIL)
    assert emit_namespace(table["mail"], table) == [
        "/**",
        " * Mail API.",
        " */",
        "declare namespace browser.mail {",
        "  interface Foo {",
        "    /**",
        "     * The a.",
        "     */",
        "    a: string;",
        "    b?: number;",
        "  }",
        '  type Color = "red" | "blue";',
        "  function send(foo: Foo): Promise<boolean>;",
        "  const onSent: WebExtEvent<(foo: Foo) => void>;",
        "  const MAX: 5;",
        "}",
    ]


def test_file_header_and_alias() -> None:
    text = emit_declarations(make_table(MAIL))
    assert text.startswith("\n".join(FILE_HEADER))
    assert "interface WebExtEvent<" in text
    assert text.endswith("declare const messenger: typeof browser;\n")


def test_root_namespace_and_no_alias() -> None:
    text = emit_declarations(make_table(MAIL), root_namespace="api", global_alias=None)
    assert "declare namespace api.mail {" in text
    assert "typeof" not in text


def test_empty_table_has_no_alias() -> None:
    assert "messenger" not in emit_declarations({})


def test_object_members() -> None:
    table = make_table(
        [
            {
                "namespace": "runtime",
                "types": [
                    {
                        "id": "Port",
                        "type": "object",
                        "properties": {"name": {"type": "string"}},
                        "additionalProperties": {"type": "any"},
                        "functions": [
                            {
                                "name": "postMessage",
                                "parameters": [{"name": "message", "type": "any"}],
                            }
                        ],
                        "events": [{"name": "onDisconnect", "type": "function"}],
                    }
                ],
            }
        ]
    )
    assert emit_types("runtime", table) == [
        "  interface Port {",
        "    name: string;",
        "    [key: string]: any;",
        "    postMessage(message: any): void;",
        "    onDisconnect: WebExtEvent<() => void>;",
        "  }",
    ]


def test_extend() -> None:
    table = make_table(
        [
            {
                "namespace": "manifest",
                "types": [
                    {
                        "id": "WebExtensionManifest",
                        "type": "object",
                        "properties": {"name": {"type": "string"}},
                    },
                    {
                        "$extend": "WebExtensionManifest",
                        "properties": {"extra": {"type": "string", "optional": True}},
                    },
                    {
                        "$extend": "Permission",
                        "choices": [{"type": "string", "enum": ["compose"]}],
                    },
                ],
            }
        ]
    )
    assert emit_types("manifest", table) == [
        "  interface WebExtensionManifest {",
        "    name: string;",
        "  }",
        "  interface WebExtensionManifest {",
        "    extra?: string;",
        "  }",
        "  /* skipped: $extend Permission */",
    ]


def test_unsupported_nodes_are_skipped() -> None:
    table = make_table(
        [
            {
                "namespace": "mail",
                "types": [{"id": "Old", "type": "string", "unsupported": True}],
                "functions": [{"name": "old", "unsupported": True}],
            }
        ]
    )
    assert emit_namespace(table["mail"], table) == [
        "declare namespace browser.mail {",
        "}",
    ]


def test_reserved_function_name() -> None:
    table = make_table([{"namespace": "mail", "functions": [{"name": "import"}]}])
    lines = emit_namespace(table["mail"], table)
    assert "  function _import(): void;" in lines
    assert "  export { _import as import };" in lines


def test_cross_namespace_event_listener() -> None:
    table = make_table(
        MAIL,
        [
            {
                "namespace": "compose",
                "events": [
                    {"name": "onSent", "parameters": [{"name": "foo", "$ref": "Foo"}]}
                ],
            }
        ],
    )
    lines = emit_namespace(table["compose"], table)
    assert "  const onSent: WebExtEvent<(foo: mail.Foo) => void>;" in lines
