'''
* [x] Check for Missing Copyright Headers: every Go, TypeScript, JavaScript and Vue source
      file carries a "Copyright " notice near the top. Only the first 256 bytes are read.
* [x] Generated files (AUTOGENERATED, Code generated, Autogenerated) are exempt.
'''

import enum
from pathlib import Path
from typing import AbstractSet, Generator, Sequence

from repolint.checks.base import Checker, CheckContext, CheckFailed, IssueType, report
from repolint.io import walk_files

# --- Configuration Defaults ---

HEADER_SIZE = 256

CHECKED_EXTENSIONS: AbstractSet[str] = frozenset({".go", ".ts", ".js", ".vue"})

# Matched against the directory name, at any depth
IGNORED_DIRECTORIES: AbstractSet[str] = frozenset({".git", "node_modules", "coverage", "dist"})

GENERATED_MARKERS: Sequence[bytes] = (b"AUTOGENERATED", b"Code generated", b"Autogenerated")

COPYRIGHT_MARKER = b"Copyright "

# --- Issue Types ---

E_MISSING_COPYRIGHT = IssueType("0f6a5a57-3c2e-4b52-9a0e-5d1c8f7e2b41", "missing copyright")
E_UNREADABLE_FILE   = IssueType("9d3b7c1e-6a24-4f8e-b0d5-2e7a41c9f863", "failed to read: {error}")


class HeaderClass(enum.Enum):
    GENERATED = "generated"
    HAS_COPYRIGHT = "copyright"
    MISSING_COPYRIGHT = "missing"
    UNREADABLE = "unreadable"

    @property
    def failed(self) -> bool:
        return self in (HeaderClass.MISSING_COPYRIGHT, HeaderClass.UNREADABLE)


def classify_header(header: bytes) -> HeaderClass:
    # A generated marker wins even when the copyright is absent.
    if any(marker in header for marker in GENERATED_MARKERS):
        return HeaderClass.GENERATED
    if COPYRIGHT_MARKER in header:
        return HeaderClass.HAS_COPYRIGHT
    return HeaderClass.MISSING_COPYRIGHT


def read_header(path: Path, size: int = HEADER_SIZE) -> bytes:
    """Reads at most `size` bytes from the start of `path`."""
    with open(path, 'rb') as f:
        return f.read(size)


def classify_file(path: Path, size: int = HEADER_SIZE) -> HeaderClass:
    try:
        header = read_header(path, size)
    except OSError as e:
        report(E_UNREADABLE_FILE.make(error=e.strerror or e).at(path))
        return HeaderClass.UNREADABLE
    return classify_header(header)


def extension(path: Path) -> str:
    """
    The name from its last dot on, so a file called `.go` has extension `.go`.
    """
    name = path.name
    return name[name.rfind('.'):] if '.' in name else ''


def source_files(root: Path,
                 extensions: AbstractSet[str] = CHECKED_EXTENSIONS,
                 ignored_directories: AbstractSet[str] = IGNORED_DIRECTORIES) -> Generator[Path, None, None]:
    """Files below `root` whose header must be checked."""
    for path in walk_files(root, skip_dir=lambda p: p.name in ignored_directories):
        if extension(path) in extensions:
            yield path


class CopyrightCheck(Checker):
    """Fails when any source file lacks a copyright header."""
    name = "check-copyright"

    def __init__(self,
                 extensions: AbstractSet[str] = CHECKED_EXTENSIONS,
                 ignored_directories: AbstractSet[str] = IGNORED_DIRECTORIES,
                 header_size: int = HEADER_SIZE):
        self.extensions = extensions
        self.ignored_directories = ignored_directories
        self.header_size = header_size

    def run(self, ctx: CheckContext) -> None:
        failed = 0
        for path in source_files(ctx.root, self.extensions, self.ignored_directories):
            header_class = classify_file(path, self.header_size)
            if header_class == HeaderClass.MISSING_COPYRIGHT:
                report(E_MISSING_COPYRIGHT.at(path))
            if header_class.failed:
                failed += 1

        if failed > 0:
            raise CheckFailed("One or more file has wrong copyright")
