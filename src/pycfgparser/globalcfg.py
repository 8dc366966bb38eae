# -*- encoding: utf-8 -*-
# @File   : globalcfg.py
# @Time   : 2024/11/03 23:05:52
# @Author : pycfgparser contributors

"""Process-wide config handle, for scripts that don't want to pass a
store around.

It is assigned exactly once by `init_config()` and never re-initialized:
a second call raises. Prefer a store from `pycfgparser.load()` handed to
whatever needs it.
"""

import logging
from typing import Sequence

from .consts import DEFAULT_DELIMITER
from .errors import CfgError, NotInitialized
from .model import CfgStore
from .parser import CfgPath, load

__all__ = ['init_config', 'get_config']

logger = logging.getLogger(__name__)

_global_config: CfgStore | None = None


def init_config(
    paths: CfgPath | Sequence[CfgPath],
    delimiter: str = DEFAULT_DELIMITER,
    **kwargs
) -> CfgStore:
    global _global_config
    if _global_config is not None:
        raise CfgError('Global config parser is already initialized')
    # only assigned once loading succeeded.
    _global_config = load(paths, delimiter, **kwargs)
    logger.debug('Global config set from %s', _global_config.filenames)
    return _global_config


def get_config() -> CfgStore:
    if _global_config is None:
        raise NotInitialized('Global config parser is not initialized')
    return _global_config
