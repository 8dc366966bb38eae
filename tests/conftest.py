# -*- encoding: utf-8 -*-
# @File   : conftest.py
# @Time   : 2024/11/04 20:31:02
# @Author : pycfgparser contributors

import posixpath
from io import StringIO, TextIOBase
from pathlib import Path
from typing import Callable

import pytest

from pycfgparser import FileSystem


class MemoryFileSystem(FileSystem):
    """Files kept in a dict, POSIX paths only."""

    def __init__(self, files: dict[str, str] | None = None) -> None:
        self.files = dict(files or {})
        self.opened: list[str] = []

    def open(self, path: str) -> TextIOBase:
        self.opened.append(path)
        if path not in self.files:
            raise FileNotFoundError(2, 'No such file or directory', path)
        return StringIO(self.files[path])

    def resolve(self, path: str, relative_to: str | None = None) -> str:
        if posixpath.isabs(path):
            return posixpath.normpath(path)
        return posixpath.normpath(posixpath.join(relative_to or '/', path))

    def parent(self, path: str) -> str:
        return posixpath.dirname(path)


@pytest.fixture
def memfs() -> MemoryFileSystem:
    return MemoryFileSystem()


@pytest.fixture
def write_cfg(tmp_path: Path) -> Callable[[str, str], Path]:
    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding='utf-8')
        return path
    return _write
