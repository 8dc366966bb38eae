# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/11/02 16:18:30
# @Author : pycfgparser contributors

"""In-memory form of a loaded config tree.

```
top_key = value   ; main section, i.e. `[]`

[unordered]       ; key -> value, last write wins
key = value

<ordered>         ; (key, value) pairs in file order, duplicates kept
key = value

{list}            ; raw lines
value
```

Sections are only filled by `CfgParser`. Everything handed out to callers
is read-only.
"""

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterator, overload

from .consts import DEFAULT_DELIMITER, SectionKind
from .errors import ConversionError, KeyNotFound, SectionNotFound
from .strutils import concat

_INT_PATTERN = re.compile(r'[+-]?[0-9]+')
_FLOAT_PATTERN = re.compile(
    r'[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?'
    r'|[+-]?(?:inf|infinity|nan)', re.IGNORECASE)

_INT_BITS = {'int': 32, 'long long': 64}


@dataclass(frozen=True, eq=False)
class CfgValue:
    value: str

    def _as_integer(self, target: str) -> int:
        if not _INT_PATTERN.fullmatch(self.value):
            raise ConversionError(target, self.value)
        ret = int(self.value)
        bound = 1 << (_INT_BITS[target] - 1)
        if not -bound <= ret < bound:
            raise ConversionError(target, self.value)
        return ret

    def as_int(self) -> int:
        return self._as_integer('int')

    def as_long_long(self) -> int:
        return self._as_integer('long long')

    def as_double(self) -> float:
        if not _FLOAT_PATTERN.fullmatch(self.value):
            raise ConversionError('double', self.value)
        ret = float(self.value)
        # finite literals beyond double range.
        if ret in (float('inf'), float('-inf')) \
                and 'inf' not in self.value.lower():
            raise ConversionError('double', self.value)
        return ret

    def as_bool(self) -> bool:
        # deliberately case-sensitive.
        if self.value == 'true':
            return True
        if self.value == 'false':
            return False
        raise ConversionError('bool', self.value)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CfgValue):
            return self.value == other.value
        if isinstance(other, str):
            return self.value == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.value)

    def __str__(self) -> str:
        return self.value


class UnorderedSection(Mapping[str, CfgValue]):
    """Key-value section. Iteration follows first insertion,
    though nothing should rely on that."""

    def __init__(self, name: str = '') -> None:
        self.name = name
        self.__raw: dict[str, CfgValue] = {}

    def __getitem__(self, key: str) -> CfgValue:
        return self.__raw[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.__raw)

    def __len__(self) -> int:
        return len(self.__raw)

    def __repr__(self) -> str:
        return '[%s] { .cnt = %d }' % (self.name, len(self))

    def _set(self, key: str, value: CfgValue) -> None:
        self.__raw[key] = value

    def _update(self, another: 'UnorderedSection') -> None:
        self.__raw.update(another.__raw)


class OrderedSection(Sequence[tuple[str, CfgValue]]):
    def __init__(self, name: str) -> None:
        self.name = name
        self.__pairs: list[tuple[str, CfgValue]] = []

    @overload
    def __getitem__(self, index: int) -> tuple[str, CfgValue]: ...
    @overload
    def __getitem__(
        self, index: slice) -> Sequence[tuple[str, CfgValue]]: ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return tuple(self.__pairs[index])
        return self.__pairs[index]

    def __len__(self) -> int:
        return len(self.__pairs)

    def __repr__(self) -> str:
        return '<%s> { .cnt = %d }' % (self.name, len(self))

    def find(self, key: str) -> CfgValue | None:
        """First value declared for `key`, or `None`."""
        for k, v in self.__pairs:
            if k == key:
                return v
        return None

    def keys(self) -> list[str]:
        return [k for k, _ in self.__pairs]

    def values(self) -> list[CfgValue]:
        return [v for _, v in self.__pairs]

    def _append(self, key: str, value: CfgValue) -> None:
        self.__pairs.append((key, value))


class ListSection(Sequence[CfgValue]):
    def __init__(self, name: str) -> None:
        self.name = name
        self.__items: list[CfgValue] = []

    @overload
    def __getitem__(self, index: int) -> CfgValue: ...
    @overload
    def __getitem__(self, index: slice) -> Sequence[CfgValue]: ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return tuple(self.__items[index])
        return self.__items[index]

    def __len__(self) -> int:
        return len(self.__items)

    def __repr__(self) -> str:
        return '{%s} { .cnt = %d }' % (self.name, len(self))

    def _append(self, value: CfgValue) -> None:
        self.__items.append(value)


class CfgStore:
    """Three independent namespaces of sections, filled once by a loader.

    A name may exist in more than one namespace; lookups never fall through
    from one namespace into another.
    """

    def __init__(
        self,
        filenames: Sequence[str] = (),
        delimiter: str = DEFAULT_DELIMITER
    ) -> None:
        self._filenames = list(filenames)
        self._delimiter = delimiter
        self._unordered: dict[str, UnorderedSection] = {
            '': UnorderedSection('')}
        self._ordered: dict[str, OrderedSection] = {}
        self._lists: dict[str, ListSection] = {}

    @property
    def delimiter(self) -> str:
        return self._delimiter

    @property
    def filenames(self) -> list[str]:
        """Top-level files this store was loaded from, in load order."""
        return list(self._filenames)

    @property
    def filename(self) -> str | None:
        return self._filenames[-1] if self._filenames else None

    @property
    def main_section(self) -> UnorderedSection:
        return self._unordered['']

    @property
    def all_unordered(self) -> Mapping[str, UnorderedSection]:
        return MappingProxyType(self._unordered)

    @property
    def all_ordered(self) -> Mapping[str, OrderedSection]:
        return MappingProxyType(self._ordered)

    @property
    def all_lists(self) -> Mapping[str, ListSection]:
        return MappingProxyType(self._lists)

    # only the unordered namespace, like `get()`.
    def contains(self, section: str, key: str | None = None) -> bool:
        if key is None:
            section, key = '', section
        sect = self._unordered.get(section)
        return sect is not None and key in sect

    def opt_section(self, section: str) -> UnorderedSection | None:
        return self._unordered.get(section)

    def opt(self, section: str, key: str | None = None) -> CfgValue | None:
        if key is None:
            section, key = '', section
        if (sect := self.opt_section(section)) is None:
            return None
        return sect.get(key)

    def opt_ordered_section(self, section: str) -> OrderedSection | None:
        return self._ordered.get(section)

    def opt_ordered(self, section: str, key: str) -> CfgValue | None:
        if (sect := self.opt_ordered_section(section)) is None:
            return None
        return sect.find(key)

    def opt_list(self, name: str) -> ListSection | None:
        return self._lists.get(name)

    def get_section(self, section: str) -> UnorderedSection:
        if (sect := self.opt_section(section)) is None:
            raise SectionNotFound(SectionKind.UNORDERED.value, section)
        return sect

    def get(self, section: str, key: str | None = None) -> CfgValue:
        """`get(key)` reads the main section, `get(section, key)` any
        unordered one."""
        if key is None:
            section, key = '', section
        sect = self.get_section(section)
        if key not in sect:
            raise KeyNotFound(SectionKind.UNORDERED.value, section, key)
        return sect[key]

    def get_ordered_section(self, section: str) -> OrderedSection:
        if (sect := self.opt_ordered_section(section)) is None:
            raise SectionNotFound(SectionKind.ORDERED.value, section)
        return sect

    def get_ordered(self, section: str, key: str) -> CfgValue:
        ret = self.get_ordered_section(section).find(key)
        if ret is None:
            raise KeyNotFound(SectionKind.ORDERED.value, section, key)
        return ret

    def get_list(self, name: str) -> ListSection:
        if (sect := self.opt_list(name)) is None:
            raise SectionNotFound(SectionKind.LIST.value, name)
        return sect

    def collisions(self) -> list[str]:
        """Section names living in more than one namespace."""
        names = [*self._unordered, *self._ordered, *self._lists]
        return sorted({i for i in names if names.count(i) > 1})

    def dump(self) -> str:
        """Render back into config text that `CfgParser` reads to
        the same store."""
        lines: list[str] = []
        lines.extend(self.__pairs_to_lines(self.main_section.items()))
        for name, sect in self._unordered.items():
            if name == '':
                continue
            lines.append(f'[{name}]')
            lines.extend(self.__pairs_to_lines(sect.items()))
        for name, ordsect in self._ordered.items():
            lines.append(f'<{name}>')
            lines.extend(self.__pairs_to_lines(ordsect))
        for name, lst in self._lists.items():
            lines.append(f'{{{name}}}')
            lines.extend(i.value for i in lst)
        return ''.join(f'{i}\n' for i in lines)

    def __pairs_to_lines(self, pairs) -> list[str]:
        return [concat([k, v.value], self._delimiter) for k, v in pairs]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CfgStore):
            return NotImplemented
        return self._snapshot() == other._snapshot()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f'CfgStore(files={self._filenames!r}, '
            f'unordered={len(self._unordered)}, '
            f'ordered={len(self._ordered)}, lists={len(self._lists)})'
        )

    def _snapshot(self) -> tuple[dict, dict, dict]:
        return (
            {k: dict(v) for k, v in self._unordered.items()},
            {k: list(v) for k, v in self._ordered.items()},
            {k: list(v) for k, v in self._lists.items()},
        )

    # population, for loaders only.
    def _merge_unordered(self, name: str, sect: UnorderedSection) -> None:
        self._unordered.setdefault(name, UnorderedSection(name))._update(sect)

    def _replace_ordered(self, name: str, sect: OrderedSection) -> None:
        self._ordered[name] = sect

    def _replace_list(self, name: str, sect: ListSection) -> None:
        self._lists[name] = sect

    def _add_filename(self, filename: str) -> None:
        self._filenames.append(filename)
