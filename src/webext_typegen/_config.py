from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Optional, Tuple


@dataclasses.dataclass(frozen=True)
class GeneratorConfig:
    """Generate a TypeScript declaration file from WebExtension API schemas."""

    schema_directory: Path
    """Directory with the application's .json schema files, e.g.
    comm/mail/components/extensions/schemas in a Thunderbird source tree."""

    browser_schema_directory: Path
    """Directory with the browser's .json schema files, e.g.
    toolkit/components/extensions/schemas."""

    output_directory: Path
    """Directory the declaration file is written to."""

    ignored_namespaces: str = ""
    """Comma-separated namespaces to leave out. References into an ignored
    namespace are not rewritten and will be reported as unresolved."""

    root_namespace: str = "browser"
    """Global symbol every namespace is declared under."""

    global_alias: Optional[str] = "messenger"
    """Second global declared as `typeof <root_namespace>`. None to skip."""

    output_filename: str = "index.d.ts"

    def ignore_list(self) -> Tuple[str, ...]:
        return tuple(
            name.strip() for name in self.ignored_namespaces.split(",") if name.strip()
        )

    @property
    def output_path(self) -> Path:
        return self.output_directory / self.output_filename
