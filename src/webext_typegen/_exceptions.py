from __future__ import annotations

from pathlib import Path
from typing import Optional


class ParseError(Exception):
    """Raised when a schema document can't be turned into namespace records."""

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        self.message = message
        self.path = path
        super().__init__(message if path is None else f"{path}: {message}")


class TypegenWarning(UserWarning):
    """Base class for recoverable problems found while generating typings."""


class MissingDirectoryWarning(TypegenWarning):
    """A configured schema directory does not exist."""


class UnresolvedReferenceWarning(TypegenWarning):
    """A `$ref` did not match a type in any namespace."""


class UnknownAsyncConventionWarning(TypegenWarning):
    """A function's `async` field doesn't name a known convention or parameter."""


class MissingArrayItemsWarning(TypegenWarning):
    """An array-typed node has no `items` descriptor."""
