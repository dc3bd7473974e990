import abc
from typing import Any, List, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
import uuid

from repolint.messages import error


###############################################################################
# Errors
###############################################################################

class LintError(Exception):
    """
    Base class for failures that end a command with a non-zero exit status.
    """


class CheckFailed(LintError):
    """
    Raised by a checker when the tree does not pass the check.
    """
    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


@dataclass(frozen=True)
class CheckResult:
    name: str
    reason: str | None = None

    @property
    def passed(self) -> bool:
        return self.reason is None


class ChecksFailed(LintError):
    """
    Raised after a batch run when one or more checkers failed.
    """
    def __init__(self, results: Sequence[CheckResult]) -> None:
        super().__init__("One or more checks failed")
        self.results = list(results)

    @property
    def failed(self) -> List[CheckResult]:
        return [r for r in self.results if not r.passed]


###############################################################################
# Issues
###############################################################################

@dataclass(frozen=True)
class IssueType:
    """
    Represents a type of issue.
    """
    id: str
    message: str

    def __post_init__(self):
        # Verify that the ID is a valid UUID
        if not isinstance(self.id, str):
            raise ValueError(f"Invalid ID: {self.id}")
        try:
            uuid.UUID(self.id)
        except ValueError:
            raise ValueError(f"Invalid UUID: {self.id}")

    def make(self, **kwargs) -> 'Issue':
        return Issue(self, data=kwargs)

    def at(self, path: Path) -> 'Issue':
        return Issue(self).at(path)


@dataclass
class Issue:
    """
    Represents an issue found during a check.
    """
    issue_type: IssueType
    data: Mapping[str, Any] | None = None
    path: Path | None = None

    def at(self, path: Path) -> 'Issue':
        if self.path is not None and self.path != path:
            raise ValueError("Cannot change the path of an existing issue.")
        self.path = path
        return self

    def __str__(self) -> str:
        msg = f"{self.path} > " if self.path is not None else "> "
        return msg + self.issue_type.message.format(**(self.data or {}))


def report(issue: Issue) -> None:
    error(str(issue))


###############################################################################
# Checkers
###############################################################################

@dataclass(frozen=True)
class CheckContext:
    """
    Everything a single checker invocation may look at.

    `argv` follows the process convention: the program name first, then the
    arguments meant for this checker.
    """
    root: Path = Path(".")
    argv: List[str] = field(default_factory=lambda: ["repolint"])

    @property
    def args(self) -> List[str]:
        return self.argv[1:]


def default_arguments(argv: Sequence[str]) -> List[str]:
    """
    Strips the subcommand token: `prog lint -v x` becomes `prog -v x`.
    """
    if len(argv) > 2:
        return [argv[0], *argv[2:]]
    return [argv[0]]


class Checker(abc.ABC):
    name: str

    @abc.abstractmethod
    def run(self, ctx: CheckContext) -> None:
        """
        Returns when the check passes, raises CheckFailed otherwise.
        """
        raise NotImplementedError()

    def adjust_arguments(self, argv: Sequence[str]) -> List[str]:
        return default_arguments(argv)

    def context(self, argv: Sequence[str], root: Path = Path(".")) -> CheckContext:
        return CheckContext(root=root, argv=self.adjust_arguments(list(argv)))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"
