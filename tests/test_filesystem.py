# -*- encoding: utf-8 -*-
# @File   : test_filesystem.py
# @Time   : 2024/11/05 00:31:18
# @Author : pycfgparser contributors

import os

from pycfgparser import LocalFileSystem, abstract, load


def test_resolve(tmp_path):
    fs = LocalFileSystem()
    base = str(tmp_path)
    assert fs.resolve('a.cfg', base) == os.path.join(base, 'a.cfg')
    assert fs.resolve('x/../a.cfg', base) == os.path.join(base, 'a.cfg')
    assert fs.resolve(os.path.join(base, 'b.cfg'), '/elsewhere') \
        == os.path.join(base, 'b.cfg')
    assert fs.resolve('a.cfg') == os.path.abspath('a.cfg')
    assert fs.parent(os.path.join(base, 'a.cfg')) == base


def test_relative_top_level_path(write_cfg, tmp_path, monkeypatch):
    write_cfg('inc.cfg', 'k = v\n')
    write_cfg('main.cfg', '! include inc.cfg\n')
    monkeypatch.chdir(tmp_path)
    assert load('main.cfg').get('k') == 'v'


def test_undecodable_file_falls_back(tmp_path, caplog):
    path = tmp_path / 'latin.cfg'
    path.write_bytes('[s]\nname = caf\xe9 cr\xe8me br\xfbl\xe9e\n'
                     .encode('latin-1'))
    store = load(path)
    # whatever the guessed codec, the ascii parts survive.
    assert store.get('s', 'name').value.startswith('caf')
    assert 'decoded as' in caplog.text


def test_explicit_encoding(tmp_path):
    path = tmp_path / 'utf16.cfg'
    path.write_text('[s]\nk = v\n', encoding='utf-16')
    assert load(path, encoding='utf-16').get('s', 'k') == 'v'


def test_utf8_bom_is_dropped(tmp_path):
    path = tmp_path / 'bom.cfg'
    path.write_bytes(b'\xef\xbb\xbf[s]\nk = v\n')
    assert load(path).get('s', 'k') == 'v'

    path = tmp_path / 'bom_main.cfg'
    path.write_bytes(b'\xef\xbb\xbfk = v\n')
    assert load(path).get('k') == 'v'


def test_unsure_guess_falls_back_to_latin1(
        tmp_path, caplog, monkeypatch):
    monkeypatch.setattr(
        abstract.chardet, 'detect',
        lambda raw: {'encoding': 'utf-8', 'confidence': 0.3})
    path = tmp_path / 'guess.cfg'
    path.write_bytes(b'k = caf\xe9\n')
    assert load(path).get('k') == 'caf\xe9'
    assert 'decoded as latin-1' in caplog.text
