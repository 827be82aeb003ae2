"""Tests for the command line reader (python -m yamlite)."""

import io
import json
import sys

import pytest
from yamlite.__main__ import main


@pytest.fixture
def config(tmp_path):
    path = tmp_path / 'config.yaml'
    path.write_text('a: 1\nb: [x, 2]\n')
    return path


def test_events_by_default(config, capsys):
    assert main([str(config)]) == 0
    out = capsys.readouterr().out
    assert out.splitlines() == [
        '+DOC', '=KEY a', '=VAL 1', '=KEY b', '+SEQ', '=VAL x', '=VAL 2', '-SEQ', '-DOC']


def test_json(config, capsys):
    assert main(['--json', str(config)]) == 0
    assert json.loads(capsys.readouterr().out) == {'a': 1, 'b': ['x', 2]}


def test_json_no_resolve(config, capsys):
    assert main(['--json', '--no-resolve', str(config)]) == 0
    assert json.loads(capsys.readouterr().out) == {'a': '1', 'b': ['x', '2']}


def test_yaml(config, capsys):
    assert main(['--yaml', str(config)]) == 0
    assert capsys.readouterr().out == 'a: 1\nb: [x, 2]\n'


def test_stdin(monkeypatch, capsys):
    monkeypatch.setattr(sys, 'stdin', io.TextIOWrapper(io.BytesIO(b'k: v\n')))
    assert main(['--json']) == 0
    assert json.loads(capsys.readouterr().out) == {'k': 'v'}


def test_invalid_input(tmp_path, capsys):
    path = tmp_path / 'bad.yaml'
    path.write_text('a: 1\n\tb: 2\n')
    assert main([str(path)]) == 1
    err = capsys.readouterr().err
    assert 'tab characters are not allowed' in err
    assert 'line 2, column 1' in err


def test_max_depth(tmp_path, capsys):
    path = tmp_path / 'deep.yaml'
    path.write_text('a: [[[1]]]\n')
    assert main(['--max-depth', '3', str(path)]) == 1
    assert 'nesting too deep' in capsys.readouterr().err


def test_unwritable_document(tmp_path, capsys):
    path = tmp_path / 'list.yaml'
    path.write_text('- a\n- b\n')
    assert main(['--yaml', str(path)]) == 1
    assert 'expected a mapping' in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / 'missing.yaml')]) == 1
    assert capsys.readouterr().err.startswith('Error:')
