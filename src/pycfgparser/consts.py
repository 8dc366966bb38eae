# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2024/11/02 14:21:07
# @Author : pycfgparser contributors

from enum import Enum

DEFAULT_DELIMITER = ' = '

# nested `! include` levels before giving up.
MAX_INCLUDE_DEPTH = 64

COMMAND_MARK = '!'
COMMENT_MARK = '#'


class SectionKind(str, Enum):
    UNORDERED = 'unordered'
    ORDERED = 'ordered'
    LIST = 'list'

    @property
    def brackets(self) -> tuple[str, str]:
        return _BRACKETS[self]


_BRACKETS = {
    SectionKind.UNORDERED: ('[', ']'),
    SectionKind.ORDERED: ('<', '>'),
    SectionKind.LIST: ('{', '}'),
}
