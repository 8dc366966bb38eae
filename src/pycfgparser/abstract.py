# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2024/11/02 15:40:51
# @Author : pycfgparser contributors

import logging
from abc import ABCMeta, abstractmethod
from codecs import lookup
from io import StringIO, TextIOBase
from os import PathLike, fspath
from os.path import abspath, dirname, isabs, join, normpath
from typing import Generic, TypeVar

import chardet

logger = logging.getLogger(__name__)

T = TypeVar('T')


class FileHandler(Generic[T], metaclass=ABCMeta):
    def __init__(self, filename: str | PathLike[str]) -> None:
        self._fn = fspath(filename)

    @abstractmethod
    def read(self) -> T:
        raise NotImplementedError

    @abstractmethod
    def write(self, instance: T) -> None:
        raise NotImplementedError

    def __str__(self) -> str:
        return self._fn


class FileSystem(metaclass=ABCMeta):
    """The only file access the loader needs.

    Paths are plain strings. `open()` should return a readable text stream
    and raise `OSError` when the file can't be read.
    """

    @abstractmethod
    def open(self, path: str) -> TextIOBase:
        raise NotImplementedError

    @abstractmethod
    def resolve(self, path: str, relative_to: str | None = None) -> str:
        """Absolute form of `path`, relative ones joined onto `relative_to`
        (a directory), or onto the working directory if not given."""
        raise NotImplementedError

    @abstractmethod
    def parent(self, path: str) -> str:
        raise NotImplementedError


class LocalFileSystem(FileSystem):
    def __init__(self, encoding: str | None = 'utf-8') -> None:
        self._codec = encoding

    def _decode_file(self, filename: str) -> StringIO:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        encoding = codec['encoding']
        if not encoding or (codec['confidence'] or 0) < 0.8:
            encoding = 'latin-1'

        # fallbacks
        try:
            buf = raw.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            encoding = 'latin-1'
            buf = raw.decode(encoding)
        logger.warning(
            "'%s' is not readable as %s, decoded as %s instead",
            filename, self._codec, encoding)
        return StringIO(buf)

    def open(self, path: str) -> TextIOBase:
        # the whole file is read up front, so no handle stays open
        # while nested includes are being parsed.
        encoding = self._codec
        # drop the BOM that Windows editors put in front.
        if encoding is not None and lookup(encoding).name == 'utf-8':
            encoding = 'utf-8-sig'
        try:
            with open(path, 'r', encoding=encoding, newline='') as fp:
                return StringIO(fp.read())
        except UnicodeDecodeError:
            return self._decode_file(path)

    def resolve(self, path: str, relative_to: str | None = None) -> str:
        if isabs(path):
            return normpath(path)
        if relative_to is None:
            return abspath(path)
        return abspath(join(relative_to, path))

    def parent(self, path: str) -> str:
        return dirname(path)
