from pathlib import Path
from typing import Sequence

from repolint.io import read_template, write_text_file
from repolint.messages import info

TEMPLATE_PATH = Path(__file__).parent.parent / "templates" / "golangci.yml.j2"

DEFAULT_DEADLINE = "10m"

DEFAULT_LINTERS: Sequence[str] = (
    "bodyclose",
    "deadcode",
    "dogsled",
    "errcheck",
    "errorlint",
    "exportloopref",
    "gocritic",
    "godot",
    "gofmt",
    "goimports",
    "govet",
    "ineffassign",
    "misspell",
    "nakedret",
    "staticcheck",
    "unconvert",
    "unused",
)


def render_config(linters: Sequence[str] = DEFAULT_LINTERS, deadline: str = DEFAULT_DEADLINE) -> str:
    return read_template(TEMPLATE_PATH).render(linters=linters, deadline=deadline)


def init_config(path: Path = Path(".golangci.yml")) -> None:
    """Write the default golangci-lint descriptor."""
    if not write_text_file(path, render_config()):
        info(f"{path} is up to date")
