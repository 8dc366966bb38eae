# -*- encoding: utf-8 -*-
# @File   : export.py
# @Time   : 2024/11/05 22:47:19
# @Author : pycfgparser contributors

"""Store <-> JSON / YAML documents.

Both formats share one layout:

```yaml
delimiter: ' = '
unordered:
  '': {top_key: value}
  section: {key: value}
ordered:
  table: [[id, int], [name, text]]
lists:
  servers: [a, b, c]
```
"""

import json
from os import PathLike
from typing import Any, TypedDict

import yaml

from .abstract import FileHandler
from .consts import DEFAULT_DELIMITER
from .errors import CfgParseError
from .model import (
    CfgStore,
    CfgValue,
    ListSection,
    OrderedSection,
    UnorderedSection
)


class _CfgDocument(TypedDict, total=False):
    delimiter: str
    unordered: dict[str, dict[str, str]]
    ordered: dict[str, list[list[str]]]
    lists: dict[str, list[str]]


def _as_str(val: Any) -> str:
    # YAML may hand back numbers or bools for unquoted scalars.
    if val is None:
        return ''
    if isinstance(val, bool):
        return 'true' if val else 'false'
    return str(val)


class CfgDocParser(FileHandler[CfgStore]):
    """Base of the structured exporters. Subclasses only do the
    actual (de)serialization."""

    def __init__(
        self, filename: str | PathLike[str], encoding: str = 'utf-8'
    ) -> None:
        super().__init__(filename)
        self._codec = encoding

    @staticmethod
    def to_document(store: CfgStore) -> _CfgDocument:
        return _CfgDocument(
            delimiter=store.delimiter,
            unordered={
                name: {k: v.value for k, v in sect.items()}
                for name, sect in store.all_unordered.items()
            },
            ordered={
                name: [[k, v.value] for k, v in sect]
                for name, sect in store.all_ordered.items()
            },
            lists={
                name: [i.value for i in sect]
                for name, sect in store.all_lists.items()
            },
        )

    def _sections(self, doc: _CfgDocument, kind: str, body_type: type,
                  named: bool) -> list[tuple[str, Any]]:
        sections = doc.get(kind) or {}
        if not isinstance(sections, dict):
            raise CfgParseError(
                f"'{kind}' in '{self._fn}' should map names to sections")
        ret = []
        for name, body in sections.items():
            if not isinstance(name, str) or (named and not name):
                raise CfgParseError(
                    f"Incorrect {kind} section name in '{self._fn}': "
                    f'{name!r}')
            body = body_type() if body is None else body
            if not isinstance(body, body_type):
                raise CfgParseError(
                    f"Incorrect body of {kind} section '{name}': {body!r}")
            ret.append((name, body))
        return ret

    def from_document(self, doc: _CfgDocument) -> CfgStore:
        if not isinstance(doc, dict):
            raise CfgParseError(
                f"'{self._fn}' does not hold a config document")
        ret = CfgStore([self._fn], doc.get('delimiter') or DEFAULT_DELIMITER)
        for name, pairs in self._sections(doc, 'unordered', dict, False):
            sect = UnorderedSection(name)
            for k, v in pairs.items():
                sect._set(str(k), CfgValue(_as_str(v)))
            ret._merge_unordered(name, sect)
        # `<>` and `{}` wouldn't read back from a dump.
        for name, pairs in self._sections(doc, 'ordered', list, True):
            ordsect = OrderedSection(name)
            for pair in pairs:
                if not isinstance(pair, list) or len(pair) != 2:
                    raise CfgParseError(
                        f"Incorrect pair in ordered section '{name}': {pair}")
                ordsect._append(str(pair[0]), CfgValue(_as_str(pair[1])))
            ret._replace_ordered(name, ordsect)
        for name, items in self._sections(doc, 'lists', list, True):
            lst = ListSection(name)
            for i in items:
                if isinstance(i, (dict, list)):
                    raise CfgParseError(
                        f"Incorrect entry in list section '{name}': {i!r}")
                lst._append(CfgValue(_as_str(i)))
            ret._replace_list(name, lst)
        return ret


class CfgJsonParser(CfgDocParser):
    def read(self) -> CfgStore:
        with open(self._fn, 'r', encoding=self._codec) as fp:
            src: _CfgDocument = json.load(fp)
        return self.from_document(src)

    def write(self, instance: CfgStore, indent: int = 2) -> None:
        with open(self._fn, 'w', encoding=self._codec) as fp:
            json.dump(self.to_document(instance), fp,
                      ensure_ascii=False, indent=indent)


class CfgYamlParser(CfgDocParser):
    def read(self) -> CfgStore:
        with open(self._fn, 'r', encoding=self._codec) as fp:
            src: _CfgDocument = yaml.safe_load(fp)
        return self.from_document(src)

    def write(self, instance: CfgStore) -> None:
        with open(self._fn, 'w', encoding=self._codec) as fp:
            yaml.safe_dump(
                dict(self.to_document(instance)), fp,
                allow_unicode=True, sort_keys=False)
