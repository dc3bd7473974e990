from __future__ import annotations
from pathlib import Path
from typing import List, Sequence, Tuple
import logging

from repolint.checks.base import Checker, CheckFailed, CheckResult, ChecksFailed
from repolint import messages


def all_checkers() -> Tuple[Checker, ...]:
    """
    The registry. The order is also the execution and reporting order.
    """
    from repolint.checks.copyright import CopyrightCheck
    from repolint.checks.external import CommandCheck, GolangciLintCheck

    return (
        CopyrightCheck(),
        CommandCheck("check-imports", failure="import check is failed"),
        CommandCheck("check-peer-constraints"),
        CommandCheck("check-monitoring"),
        CommandCheck("check-large-files"),
        CommandCheck("check-atomic-align", failure="align check is failed"),
        GolangciLintCheck(),
    )


def find_checker(name: str, checkers: Sequence[Checker] | None = None) -> Checker:
    for checker in (checkers if checkers is not None else all_checkers()):
        if checker.name == name:
            return checker
    raise ValueError(f"Unknown check: {name}")


def run_check(checker: Checker, argv: Sequence[str], root: Path = Path(".")) -> CheckResult:
    ctx = checker.context(argv, root)
    try:
        checker.run(ctx)
    except CheckFailed as e:
        return CheckResult(checker.name, e.reason)
    except Exception as e:
        logging.exception(f"{checker.name} crashed")
        return CheckResult(checker.name, f"{type(e).__name__}: {e}")
    return CheckResult(checker.name)


def run_checks(checkers: Sequence[Checker], argv: Sequence[str], root: Path = Path(".")) -> List[CheckResult]:
    """
    Runs every checker in order, even after a failure, and reports each one.
    Each checker sees its own view of `argv`; `argv` itself is never changed.

    Raises ChecksFailed if any of them failed.
    """
    argv = tuple(argv)
    results: List[CheckResult] = []
    for checker in checkers:
        messages.separator()
        messages.running(checker.name)
        result = run_check(checker, argv, root)
        if result.passed:
            messages.passed()
        else:
            messages.failed(result.reason)
        results.append(result)

    if any(not r.passed for r in results):
        raise ChecksFailed(results)
    return results


def check_single(name: str, argv: Sequence[str], root: Path = Path(".")) -> None:
    """
    Runs one checker. Its CheckFailed propagates as is.
    """
    checker = find_checker(name)
    checker.run(checker.context(argv, root))


def lint_main(argv: Sequence[str], root: Path = Path(".")) -> None:
    run_checks(all_checkers(), argv, root)
    messages.success("All checks passed")
