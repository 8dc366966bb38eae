# -*- encoding: utf-8 -*-
# @File   : strutils.py
# @Time   : 2024/11/02 14:35:40
# @Author : pycfgparser contributors

"""Plain string helpers shared by the parser and the store dumper.

Unlike `str.split()`, `split()` here keeps the empty token produced by a
trailing delimiter, which is how `key = ` ends up with an empty value.
"""

from typing import Iterable


def split(text: str, delimiter: str, drop_empty: bool = False) -> list[str]:
    if not delimiter:
        raise ValueError('empty delimiter')
    ret: list[str] = []
    if not text:
        return ret
    buf: list[str] = []
    i, dlen = 0, len(delimiter)
    while i < len(text):
        if text.startswith(delimiter, i):
            token = ''.join(buf)
            if token or not drop_empty:
                ret.append(token)
            buf.clear()
            i += dlen
            continue
        # partial matches just fall through as literal chars.
        buf.append(text[i])
        i += 1
    # an empty tail only exists when text ends exactly on a delimiter.
    if buf or not drop_empty:
        ret.append(''.join(buf))
    return ret


def concat(tokens: Iterable[str], delimiter: str = ' ') -> str:
    return delimiter.join(tokens)


def trim_left(text: str, symbol: str = ' ') -> str:
    i = 0
    while i < len(text) and text[i] == symbol:
        i += 1
    return text[i:]


def trim_right(text: str, symbol: str = ' ') -> str:
    i = len(text)
    while i > 0 and text[i - 1] == symbol:
        i -= 1
    return text[:i]


def trim(text: str, symbol: str = ' ') -> str:
    return trim_right(trim_left(text, symbol), symbol)


def starts_with(text: str, token: str) -> bool:
    """Literal prefix check. `token` may be a single char or a string."""
    return len(text) >= len(token) and text[:len(token)] == token


def ends_with(text: str, token: str) -> bool:
    if len(text) < len(token):
        return False
    return not token or text[-len(token):] == token
