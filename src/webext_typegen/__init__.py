""":mod:`webext_typegen` generates TypeScript declarations from WebExtension API schemas.

Schema files describe the scripting surface of an application (namespaces,
functions, events, types and properties) as JSON. We:
- Merge records for the same namespace spread across several files.
- Resolve type references across namespaces.
- Compile schema types to TypeScript type expressions.
- Normalize callback-based async functions to promise-returning signatures.
"""

from ._config import GeneratorConfig as GeneratorConfig
from ._emitter import emit_declarations as emit_declarations
from ._exceptions import MissingArrayItemsWarning as MissingArrayItemsWarning
from ._exceptions import MissingDirectoryWarning as MissingDirectoryWarning
from ._exceptions import ParseError as ParseError
from ._exceptions import TypegenWarning as TypegenWarning
from ._exceptions import UnknownAsyncConventionWarning as UnknownAsyncConventionWarning
from ._exceptions import UnresolvedReferenceWarning as UnresolvedReferenceWarning
from ._generator import generate_typings as generate_typings
from ._loader import read_schema_file as read_schema_file
from ._loader import read_schema_files as read_schema_files
from ._merge import build_namespace_table as build_namespace_table
from ._merge import merge_schema_parts as merge_schema_parts
from ._schema import FunctionDef as FunctionDef
from ._schema import NamespaceTable as NamespaceTable
from ._schema import SchemaPart as SchemaPart
from ._schema import parse_document as parse_document
from ._schema import parse_type as parse_type
from ._signatures import synthesize_signatures as synthesize_signatures
from ._type_compiler import compile_type as compile_type

__version__ = "0.1.0"
