import sys

import tyro
from rich import console
from rich.markup import escape

from ._config import GeneratorConfig
from ._exceptions import ParseError
from ._generator import generate_typings

CONSOLE = console.Console(stderr=True)


def main(config: GeneratorConfig) -> int:
    """Run the generator, returning a process exit code."""
    try:
        generate_typings(config)
    except ParseError as e:
        CONSOLE.print(
            f"[bold red]Error reading schema file:[/bold red] {escape(str(e))}"
        )
        return 1
    except OSError as e:
        CONSOLE.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        return 1
    return 0


def entrypoint() -> None:
    """Entrypoint for use with pyproject scripts."""
    sys.exit(main(tyro.cli(GeneratorConfig)))


if __name__ == "__main__":
    entrypoint()
