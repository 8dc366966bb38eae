# -*- encoding: utf-8 -*-
# @File   : errors.py
# @Time   : 2024/11/02 15:02:13
# @Author : pycfgparser contributors

from typing import NamedTuple, Sequence


class StackFrame(NamedTuple):
    """One open config file, and the line being read in it."""
    file: str
    line_number: int = 0


class CfgError(Exception):
    """Root of everything raised by this package."""
    pass


class CfgParseError(CfgError):
    """Errors raised while loading files.

    `trace` lists the include chain active when the error occurred,
    innermost file first. It stays empty for errors that happened before
    any file was opened (e.g. a missing top-level file).
    """

    def __init__(
        self, description: str, trace: Sequence[StackFrame] | None = None
    ) -> None:
        super().__init__(description)
        self.description = description
        self.trace: list[StackFrame] = list(trace or [])

    def __str__(self) -> str:
        message = f'Config parser: {self.description}'
        if self.trace:
            message += '\nStack trace: '
            for frame in self.trace:
                message += f'\n{frame.file}:{frame.line_number}'
        return message


class FileOpenError(CfgParseError):
    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"can not open file '{path}': {reason}")
        self.path = path
        self.reason = reason


class MalformedSection(CfgParseError):
    pass


class MalformedLine(CfgParseError):
    pass


class UnknownCommand(CfgParseError):
    def __init__(self, command: str) -> None:
        super().__init__(
            f"Unknown command '{command}'" if command
            else "Command expected after '!'")
        self.command = command


class IncludeCycle(CfgParseError):
    def __init__(self, path: str) -> None:
        super().__init__(f"file loop found: '{path}' is already being read")
        self.path = path


class IncludeTooDeep(CfgParseError):
    def __init__(self, path: str, limit: int) -> None:
        super().__init__(
            f"include depth limit ({limit}) exceeded when including '{path}'")
        self.path = path
        self.limit = limit


# lookup misses are LookupError too, so `except KeyError`-less callers
# can still catch them in a generic way.
class SectionNotFound(CfgError, LookupError):
    def __init__(self, kind: str, section: str) -> None:
        super().__init__(f"No such {kind} section '{section}'")
        self.kind = kind
        self.section = section


class KeyNotFound(CfgError, LookupError):
    def __init__(self, kind: str, section: str, key: str) -> None:
        super().__init__(f"'{key}' not found in {kind} section '{section}'")
        self.kind = kind
        self.section = section
        self.key = key


class ConversionError(CfgError, ValueError):
    def __init__(self, target_type: str, raw_value: str) -> None:
        super().__init__(f"Can not cast to {target_type}: '{raw_value}'")
        self.target_type = target_type
        self.raw_value = raw_value


class NotInitialized(CfgError):
    pass
