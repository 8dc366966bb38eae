# -*- encoding: utf-8 -*-
# @File   : test_include.py
# @Time   : 2024/11/04 22:03:17
# @Author : pycfgparser contributors

import pytest

from pycfgparser import (
    FileOpenError,
    IncludeCycle,
    IncludeTooDeep,
    MalformedLine,
    StackFrame,
    load
)


def test_include_is_relative_to_including_file(write_cfg):
    write_cfg('sub/b.cfg', '[b]\nfrom_b = 1\n! include c.cfg\n')
    write_cfg('sub/c.cfg', '[c]\nfrom_c = 2\n')
    root = write_cfg('a.cfg', '! include sub/b.cfg\n[a]\nfrom_a = 0\n')

    store = load(root)
    assert store.get('a', 'from_a') == '0'
    assert store.get('b', 'from_b') == '1'
    assert store.get('c', 'from_c') == '2'
    # only top-level files are recorded.
    assert store.filenames == [str(root)]


def test_absolute_include(write_cfg):
    other = write_cfg('elsewhere/x.cfg', '[x]\nk = v\n')
    root = write_cfg('deep/dir/a.cfg', f'! include {other}\n')
    assert load(root).get('x', 'k') == 'v'


def test_bang_without_space(write_cfg):
    write_cfg('b.cfg', 'k = v\n')
    assert load(write_cfg('a.cfg', '!include b.cfg\n')).get('k') == 'v'


def test_include_path_keeps_inner_spaces(memfs):
    memfs.files['/cfg/a.cfg'] = '!  include   my  file.cfg  \n'
    memfs.files['/cfg/my  file.cfg'] = 'k = v\n'
    memfs.files['/cfg/my file.cfg'] = 'k = wrong\n'
    assert load('/cfg/a.cfg', fs=memfs).get('k') == 'v'
    assert memfs.opened == ['/cfg/a.cfg', '/cfg/my  file.cfg']


def test_includer_keys_win_over_included(write_cfg):
    write_cfg('b.cfg', '[s]\nk = from_b\nonly_b = 1\n')
    root = write_cfg('a.cfg', '[s]\nk = from_a\n! include b.cfg\n')
    store = load(root)
    assert store.get('s', 'k') == 'from_a'
    assert store.get('s', 'only_b') == '1'


def test_include_keeps_current_section(write_cfg):
    write_cfg('b.cfg', '[other]\nx = 1\n')
    root = write_cfg('a.cfg', '[s]\na = 1\n! include b.cfg\nb = 2\n')
    store = load(root)
    assert dict(store.get_section('s')) == {'a': '1', 'b': '2'}
    assert dict(store.get_section('other')) == {'x': '1'}


def test_included_ordered_section_is_replaced_by_includer(write_cfg):
    write_cfg('b.cfg', '<t>\nfrom_b = 1\n')
    root = write_cfg('a.cfg', '! include b.cfg\n<t>\nfrom_a = 1\n')
    assert load(root).get_ordered_section('t').keys() == ['from_a']


def test_self_include_is_a_cycle(write_cfg):
    root = write_cfg('a.cfg', 'k = v\n! include a.cfg\n')
    with pytest.raises(IncludeCycle) as info:
        load(root)
    assert info.value.path == str(root)
    assert info.value.trace == [StackFrame(str(root), 2)]


def test_transitive_cycle(memfs):
    memfs.files.update({
        '/a.cfg': '! include b.cfg\n',
        '/b.cfg': '\n! include sub/../c.cfg\n',
        '/c.cfg': '# loop\n\n! include a.cfg\n',
    })
    with pytest.raises(IncludeCycle) as info:
        load('/a.cfg', fs=memfs)
    assert info.value.trace == [
        StackFrame('/c.cfg', 3),
        StackFrame('/b.cfg', 2),
        StackFrame('/a.cfg', 1),
    ]


def test_same_file_twice_on_top_level_is_fine(write_cfg):
    path = write_cfg('a.cfg', 'k = v\n')
    store = load([path, path])
    assert store.get('k') == 'v'


def test_diamond_include_is_not_a_cycle(memfs):
    memfs.files.update({
        '/a.cfg': '! include b.cfg\n! include c.cfg\n',
        '/b.cfg': '! include d.cfg\n',
        '/c.cfg': '! include d.cfg\n',
        '/d.cfg': 'k = d\n',
    })
    assert load('/a.cfg', fs=memfs).get('k') == 'd'


def test_include_depth_limit(memfs):
    for i in range(10):
        memfs.files[f'/f{i}.cfg'] = f'! include f{i + 1}.cfg\n'
    memfs.files['/f10.cfg'] = 'k = v\n'

    with pytest.raises(IncludeTooDeep) as info:
        load('/f0.cfg', fs=memfs, max_depth=5)
    assert info.value.limit == 5
    assert len(info.value.trace) == 5

    assert load('/f0.cfg', fs=memfs, max_depth=11).get('k') == 'v'


def test_error_trace_in_nested_include(write_cfg):
    inner = write_cfg('sub/b.cfg', '[s]\nok = 1\nbroken line\n')
    root = write_cfg('a.cfg', '# head\n! include sub/b.cfg\n')

    with pytest.raises(MalformedLine) as info:
        load(root)
    err = info.value
    assert err.trace == [StackFrame(str(inner), 3), StackFrame(str(root), 2)]
    assert str(err) == (
        "Config parser: Incorrect line format: 'broken line'\n"
        'Stack trace: '
        f'\n{inner}:3'
        f'\n{root}:2'
    )
    assert err.description == "Incorrect line format: 'broken line'"


def test_missing_include(write_cfg, tmp_path):
    root = write_cfg('a.cfg', 'k = v\n! include missing.cfg\n')
    with pytest.raises(FileOpenError) as info:
        load(root)
    assert info.value.path == str(tmp_path / 'missing.cfg')
    assert info.value.trace == [StackFrame(str(root), 2)]
