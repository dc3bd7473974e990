from typing import Any, List
import sys
import os
import argparse
from pathlib import Path
import logging

import repolint
from repolint.checks.base import LintError
from repolint.messages import error

##################################################################################################
# Main
##################################################################################################

ArgParser = argparse.ArgumentParser

class Commands:
    def __init__(self, parser: ArgParser) -> None:
        self.root_parser = parser
        self.parsers = {}
        self.subparsers = {}

    class Command:
        def __init__(self, commands: 'Commands', name: str, **kwargs: Any) -> None:
            path = name.split('/')
            parsers = commands.parsers
            subparsers = commands.subparsers

            def subcommand(i: int) -> str:
                if i == 0: return 'command'
                return ('sub' * i) + 'command'

            if '' not in parsers:
                parsers[''] = commands.root_parser

            if '' not in subparsers:
                subparsers[''] = commands.root_parser.add_subparsers(dest='command', metavar='<subcheck>')

            for i in range(1, len(path) + 1):
                p = '/'.join(path[:i])
                p0 = '/'.join(path[:i-1])
                if p not in parsers:
                    parsers[p] = subparsers[p0].add_parser(path[i-1], **(kwargs if i == len(path) else {}))
                if p not in subparsers and i != len(path):
                    subparsers[p] = parsers[p].add_subparsers(dest=subcommand(i))

            self.parser = parsers[name]

        def __enter__(self) -> ArgParser:
            return self.parser

        def __exit__(self, exc_type: Any, exc_value: Any, traceback: Any) -> None:
            pass

    def __call__(self, name: str, **kwargs: Any) -> 'Commands.Command':
        return Commands.Command(self, name, **kwargs)


def version_string() -> str:
    return f"%(prog)s {repolint.__version__} (commit {repolint.__commit__}, built {repolint.__date__ or 'unknown'})"


def build_parser(check_names: List[str]) -> ArgParser:
    parser = argparse.ArgumentParser(prog='repolint', usage='%(prog)s <subcheck>')
    parser.add_argument('--version', action='version', version=version_string())
    commands = Commands(parser)

    with commands('lint', help='RUN ALL LINTING CHECKS') as cmd:
        pass

    with commands('init', help='Write the default .golangci.yml descriptor') as cmd:
        cmd.add_argument('--output', type=str, default='.golangci.yml')

    # Help is not intercepted here: `-h` is handed to the check like any other argument.
    for name in check_names:
        with commands(name, help=f"Execute only the '{name}' with parameters", add_help=False) as cmd:
            pass

    return parser


def main(argv: List[str] | None = None) -> None:
    argv = list(sys.argv if argv is None else argv)

    logging.basicConfig(level=logging.INFO, format='%(message)s')

    from repolint.tasks.lint import all_checkers
    check_names = [checker.name for checker in all_checkers()]

    parser = build_parser(check_names)
    args, _ = parser.parse_known_args(argv[1:])
    if args.command is None:
        parser.print_help()
        return

    # Anything left over belongs to a check, so it may only follow the command.
    leading = argv[1:argv.index(args.command, 1)]
    if leading:
        parser.error(f"unrecognized arguments: {' '.join(leading)}")

    root = Path('.')

    try:
        match args.command:
            case 'lint':
                from repolint.tasks.lint import lint_main
                lint_main(argv, root)

            case 'init':
                from repolint.tasks.init import init_config
                init_config(Path(args.output))

            case name if name in check_names:
                from repolint.tasks.lint import check_single
                check_single(name, argv, root)

            case _:
                raise ValueError(f"Unknown command: {args.command}")

    except LintError as e:
        error(str(e))
        sys.exit(1)


def run() -> None:
    if sys.platform.lower() == "win32":
        os.system('color')
        sys.stdout.reconfigure(encoding='utf-8') # type: ignore
        sys.stderr.reconfigure(encoding='utf-8') # type: ignore
    main()
