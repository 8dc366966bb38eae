# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/11/02 14:10:26
# @Author : pycfgparser contributors

import logging

from .abstract import FileHandler, FileSystem, LocalFileSystem
from .consts import DEFAULT_DELIMITER, MAX_INCLUDE_DEPTH, SectionKind
from .errors import (
    CfgError,
    CfgParseError,
    ConversionError,
    FileOpenError,
    IncludeCycle,
    IncludeTooDeep,
    KeyNotFound,
    MalformedLine,
    MalformedSection,
    NotInitialized,
    SectionNotFound,
    StackFrame,
    UnknownCommand
)
from .export import CfgJsonParser, CfgYamlParser
from .globalcfg import get_config, init_config
from .model import (
    CfgStore,
    CfgValue,
    ListSection,
    OrderedSection,
    UnorderedSection
)
from .parser import CfgParser, LoadResult, load, load_argv, try_load

__all__ = [
    'CfgParser', 'LoadResult', 'load', 'load_argv', 'try_load',
    'CfgStore', 'CfgValue', 'UnorderedSection', 'OrderedSection',
    'ListSection',
    'CfgJsonParser', 'CfgYamlParser',
    'init_config', 'get_config',
    'FileHandler', 'FileSystem', 'LocalFileSystem',
    'DEFAULT_DELIMITER', 'MAX_INCLUDE_DEPTH', 'SectionKind',
    'CfgError', 'CfgParseError', 'FileOpenError', 'MalformedSection',
    'MalformedLine', 'UnknownCommand', 'IncludeCycle', 'IncludeTooDeep',
    'SectionNotFound', 'KeyNotFound', 'ConversionError', 'NotInitialized',
    'StackFrame',
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
