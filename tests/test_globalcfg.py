# -*- encoding: utf-8 -*-
# @File   : test_globalcfg.py
# @Time   : 2024/11/05 00:12:40
# @Author : pycfgparser contributors

import pytest

from pycfgparser import (
    CfgError,
    MalformedLine,
    NotInitialized,
    get_config,
    init_config
)
from pycfgparser import globalcfg


@pytest.fixture(autouse=True)
def fresh_global(monkeypatch):
    monkeypatch.setattr(globalcfg, '_global_config', None)


def test_get_before_init():
    with pytest.raises(NotInitialized):
        get_config()


def test_init_once(write_cfg):
    path = write_cfg('a.cfg', 'k = v\n')
    store = init_config(path)
    assert get_config() is store
    assert get_config().get('k') == 'v'

    with pytest.raises(CfgError, match='already initialized'):
        init_config(path)
    assert get_config() is store


def test_failed_init_leaves_it_unset(write_cfg):
    with pytest.raises(MalformedLine):
        init_config(write_cfg('bad.cfg', 'oops\n'))
    with pytest.raises(NotInitialized):
        get_config()
