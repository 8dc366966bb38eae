# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2024/11/03 01:12:45
# @Author : pycfgparser contributors

"""Config tree loader.

Each file, including every `! include`d one, is read into its own buffers
first and merged into the store only when it has been read completely:

- `[unordered]` sections merge key by key, so later files add and override
  single keys;
- `<ordered>` and `{list}` sections are replaced as a whole by the last file
  declaring them. Repeated headers inside *one* file keep appending.

An included file finishes (and merges) before the file including it does,
which means the includer's own `[section]` keys win over its includes'.
"""

import logging
from os import PathLike, fspath
from typing import NamedTuple, Sequence, TypeAlias
from warnings import warn

from .abstract import FileHandler, FileSystem, LocalFileSystem
from .consts import (
    COMMAND_MARK,
    COMMENT_MARK,
    DEFAULT_DELIMITER,
    MAX_INCLUDE_DEPTH,
    SectionKind
)
from .errors import (
    CfgParseError,
    FileOpenError,
    IncludeCycle,
    IncludeTooDeep,
    MalformedLine,
    MalformedSection,
    StackFrame,
    UnknownCommand
)
from .model import (
    CfgStore,
    CfgValue,
    ListSection,
    OrderedSection,
    UnorderedSection
)
from .strutils import (
    concat,
    ends_with,
    split,
    starts_with,
    trim,
    trim_left,
    trim_right
)

__all__ = ['CfgParser', 'LoadResult', 'load', 'load_argv', 'try_load']

logger = logging.getLogger(__name__)

CfgPath: TypeAlias = str | PathLike[str]


class LoadResult(NamedTuple):
    store: CfgStore | None
    error: CfgParseError | None

    @property
    def ok(self) -> bool:
        return self.error is None


class _FileBuffers:
    """Sections read from a single file, not yet merged."""

    def __init__(self) -> None:
        self.unordered: dict[str, UnorderedSection] = {}
        self.ordered: dict[str, OrderedSection] = {}
        self.lists: dict[str, ListSection] = {}

    def declare(self, kind: SectionKind, name: str) -> None:
        match kind:
            case SectionKind.UNORDERED:
                if name not in self.unordered:
                    self.unordered[name] = UnorderedSection(name)
            case SectionKind.ORDERED:
                if name not in self.ordered:
                    self.ordered[name] = OrderedSection(name)
            case SectionKind.LIST:
                if name not in self.lists:
                    self.lists[name] = ListSection(name)

    def merge_into(self, store: CfgStore) -> None:
        for name, sect in self.unordered.items():
            store._merge_unordered(name, sect)
        for name, ordsect in self.ordered.items():
            store._replace_ordered(name, ordsect)
        for name, lst in self.lists.items():
            store._replace_list(name, lst)


class CfgParser(FileHandler[CfgStore]):
    def __init__(
        self,
        filename: CfgPath,
        *more_files: CfgPath,
        delimiter: str = DEFAULT_DELIMITER,
        encoding: str | None = 'utf-8',
        fs: FileSystem | None = None,
        max_depth: int = MAX_INCLUDE_DEPTH
    ) -> None:
        """`filename` and `more_files` are read in order into one store.

        `filename` is also where `write()` saves to.
        """
        super().__init__(filename)
        if not delimiter:
            raise ValueError('delimiter must not be empty')
        self._files = [self._fn, *(fspath(i) for i in more_files)]
        self._delimiter = delimiter
        self._codec = encoding
        self._fs = fs if fs is not None else LocalFileSystem(encoding)
        self._max_depth = max_depth

    @classmethod
    def from_argv(cls, argv: Sequence[str], **kwargs) -> 'CfgParser':
        """Take config paths from a process argument list,
        skipping the program name."""
        if len(argv) < 2:
            raise ValueError('no config file given in argv')
        return cls(*argv[1:], **kwargs)

    @property
    def filenames(self) -> list[str]:
        return list(self._files)

    def read(self) -> CfgStore:
        """Read all files given to the parser, in order.

        Raises some `CfgParseError` on the first broken file,
        in which case no store is returned at all.
        """
        ret = CfgStore(delimiter=self._delimiter)
        for i in self._files:
            self._parse(i, [], ret)
            ret._add_filename(i)
            logger.info("Loaded config '%s'", i)
        for name in ret.collisions():
            warn(f"Section '{name}' is declared in more than one "
                 'namespace (unordered/ordered/list).', stacklevel=2)
        return ret

    def try_read(self) -> LoadResult:
        """Like `read()`, but returns parse errors instead of raising."""
        try:
            return LoadResult(self.read(), None)
        except CfgParseError as e:
            return LoadResult(None, e)

    def write(self, instance: CfgStore) -> None:
        """Save a store as *one* config file.

        Note: the include tree it was loaded from is not restored,
        and comments are lost.
        """
        with open(self._fn, 'w', encoding=self._codec or 'utf-8') as fp:
            fp.write(instance.dump())

    def _parse(
        self, filename: str, stack: list[StackFrame], store: CfgStore
    ) -> None:
        relative_to = self._fs.parent(stack[-1].file) if stack else None
        path = self._fs.resolve(filename, relative_to)
        if any(i.file == path for i in stack):
            raise IncludeCycle(path)
        if len(stack) >= self._max_depth:
            raise IncludeTooDeep(path, self._max_depth)

        try:
            with self._fs.open(path) as fp:
                text = fp.read()
        except OSError as e:
            raise FileOpenError(path, e.strerror or str(e)) from e
        logger.debug("Reading '%s' (depth %d)", path, len(stack) + 1)

        buffers = _FileBuffers()
        stack.append(StackFrame(path))
        try:
            self._parse_lines(text, stack, store, buffers)
        except CfgParseError as e:
            # innermost handler gets here first.
            if not e.trace:
                e.trace = list(reversed(stack))
            raise
        finally:
            stack.pop()

        buffers.merge_into(store)
        logger.debug(
            "Merged '%s': %d unordered, %d ordered, %d list sections",
            path, len(buffers.unordered),
            len(buffers.ordered), len(buffers.lists))

    def _parse_lines(
        self,
        text: str,
        stack: list[StackFrame],
        store: CfgStore,
        buffers: _FileBuffers
    ) -> None:
        kind, name = SectionKind.UNORDERED, ''
        for lineno, line in enumerate(text.split('\n'), 1):
            stack[-1] = stack[-1]._replace(line_number=lineno)
            line = trim_left(trim(line, '\r'))
            if not line:
                continue

            if starts_with(line, COMMAND_MARK):
                self._handle_command(
                    trim_left(line, COMMAND_MARK), stack, store)
                continue

            if starts_with(line, COMMENT_MARK):
                continue

            if (header := self._section_header(line)) is not None:
                kind, name = header
                buffers.declare(kind, name)
                continue

            if kind is SectionKind.LIST:
                buffers.declare(kind, name)
                buffers.lists[name]._append(CfgValue(trim(line)))
                continue

            tokens = split(line, self._delimiter)
            if len(tokens) < 2:
                raise MalformedLine(f"Incorrect line format: '{line}'")
            key = trim(tokens[0])
            value = CfgValue(trim(concat(tokens[1:], self._delimiter)))
            buffers.declare(kind, name)
            if kind is SectionKind.UNORDERED:
                buffers.unordered[name]._set(key, value)
            else:
                buffers.ordered[name]._append(key, value)

    @staticmethod
    def _section_header(line: str) -> tuple[SectionKind, str] | None:
        for kind in SectionKind:
            opening, closing = kind.brackets
            if not starts_with(line, opening):
                continue
            line = trim_right(line)
            if len(line) < 2 or not ends_with(line, closing):
                raise MalformedSection(f"Incorrect section format: '{line}'")
            name = line[1:-1]
            if kind is SectionKind.LIST:
                name = trim(name)
            # only `[]` may stay anonymous, being the main section.
            if not name and kind is not SectionKind.UNORDERED:
                raise MalformedSection(
                    f"Empty {kind.value} section name: '{line}'")
            return kind, name
        return None

    def _handle_command(
        self, line: str, stack: list[StackFrame], store: CfgStore
    ) -> None:
        line = trim(line)
        if not line:
            raise UnknownCommand('')
        # arguments are kept verbatim, runs of spaces included.
        cmd, _, args = line.partition(' ')
        args = trim(args)

        if cmd == 'include':
            if not args:
                raise MalformedLine("File path expected after 'include'")
            logger.debug("Including '%s' from %s:%d",
                         args, stack[-1].file, stack[-1].line_number)
            self._parse(args, stack, store)
            return
        raise UnknownCommand(cmd)

    def __str__(self) -> str:
        return 'Config files: ' + ', '.join(self._files)


def _as_paths(paths: CfgPath | Sequence[CfgPath]) -> list[str]:
    if isinstance(paths, (str, PathLike)):
        return [fspath(paths)]
    return [fspath(i) for i in paths]


def load(
    paths: CfgPath | Sequence[CfgPath],
    delimiter: str = DEFAULT_DELIMITER,
    **kwargs
) -> CfgStore:
    """Load one path, or several in order, into a new store."""
    files = _as_paths(paths)
    if not files:
        raise ValueError('no config file given')
    return CfgParser(*files, delimiter=delimiter, **kwargs).read()


def load_argv(
    argv: Sequence[str],
    delimiter: str = DEFAULT_DELIMITER,
    **kwargs
) -> CfgStore:
    return CfgParser.from_argv(argv, delimiter=delimiter, **kwargs).read()


def try_load(
    paths: CfgPath | Sequence[CfgPath],
    delimiter: str = DEFAULT_DELIMITER,
    **kwargs
) -> LoadResult:
    files = _as_paths(paths)
    if not files:
        raise ValueError('no config file given')
    return CfgParser(*files, delimiter=delimiter, **kwargs).try_read()
