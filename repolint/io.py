from typing import Callable, Generator

import os
import stat
import logging
import hashlib
from pathlib import Path

import jinja2

from repolint.messages import info

##################################################################################################
# Directory walking
##################################################################################################

def walk_files(path: Path, skip_dir: Callable[[Path], bool] | None = None) -> Generator[Path, None, None]:
    """
    Yields every regular file below `path` in lexical order.

    Directories for which `skip_dir` returns True are not descended into.
    Symbolic links are never followed. Entries that cannot be inspected are
    logged and skipped.
    """
    assert isinstance(path, Path), f"Expected Path, got {type(path)}"

    try:
        mode = path.lstat().st_mode
    except OSError as e:
        logging.warning(f"Cannot access {path}: {e}")
        return

    if stat.S_ISREG(mode):
        yield path

    elif stat.S_ISDIR(mode):
        if skip_dir is not None and skip_dir(path):
            return

        try:
            subfiles = sorted(os.listdir(path))
        except OSError as e:
            logging.warning(f"Cannot list {path}: {e}")
            return

        for subfile in subfiles:
            yield from walk_files(path / subfile, skip_dir=skip_dir)


##################################################################################################
# File Reading/Writing
##################################################################################################

def read_text_file(path: Path) -> str:
    assert isinstance(path, Path), f"Expected Path, got {type(path)}"
    assert path.exists(), f"File {path} does not exist"
    with open(path, 'rt', encoding='utf-8') as f:
        return f.read()


def read_template(path: Path) -> jinja2.Template:
    assert isinstance(path, Path), f"Expected Path, got {type(path)}"
    return jinja2.Template(read_text_file(path), keep_trailing_newline=True)


def write_text_file(path: Path, content: str) -> bool:
    """
    Writes `content` to `path`. Returns False when the file already holds
    exactly that content and nothing was written.
    """
    assert isinstance(path, Path), f"Expected Path, got {type(path)}"

    if not path.parent.exists():
        info(f"Creating directory {path.parent}")
        path.parent.mkdir(parents=True)

    content_bytes = content.encode('utf-8')

    if path.exists():
        old_content_hash = hashlib.sha256(path.read_bytes()).hexdigest()
        new_content_hash = hashlib.sha256(content_bytes).hexdigest()

        if old_content_hash == new_content_hash:
            return False

        info(f'Overwriting {path}')
    else:
        info(f'Writing to {path}')

    with open(path, 'wb+') as f:
        f.write(content_bytes)
    return True
