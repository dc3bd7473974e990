'''
Checks implemented by external tools. Each one is a command that exits with a
non-zero status when the tree does not pass.
'''

from __future__ import annotations

import subprocess
from typing import List, Sequence

from repolint.checks.base import Checker, CheckContext, CheckFailed


class CommandCheck(Checker):
    """Runs `command` followed by the checker's own arguments."""

    def __init__(self, name: str, command: Sequence[str] | None = None, failure: str | None = None):
        self.name = name
        self.command = list(command) if command is not None else [name]
        self.failure = failure or f"{name} is failed"

    def invocation(self, ctx: CheckContext) -> List[str]:
        return self.command + ctx.args

    def run(self, ctx: CheckContext) -> None:
        invocation = self.invocation(ctx)
        try:
            result = subprocess.run(invocation, cwd=ctx.root)
        except FileNotFoundError:
            raise CheckFailed(f"'{invocation[0]}' is not installed")
        if result.returncode != 0:
            raise CheckFailed(self.failure)


class GolangciLintCheck(CommandCheck):
    """
    golangci-lint reads its own command line, so it always gets `run` and
    nothing that was meant for the other checks.
    """

    def __init__(self, executable: str = "golangci-lint"):
        super().__init__("golangci-lint", [executable], "there are reported golangci-lint failures")

    def adjust_arguments(self, argv: Sequence[str]) -> List[str]:
        return [argv[0], "run"]
