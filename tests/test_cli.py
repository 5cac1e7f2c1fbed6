"""
Tests for hivescout.cli
=======================

Runs the CLI entry point in-process and checks JSON output, exit
codes and written files.
"""

import json

import polars as pl
import pytest

from hivescout.cli import main
from hivescout.config.loader import dump_rules
from hivescout.selector import RuleConfig


EX = 'http://example.org/'


@pytest.fixture
def window_csv(tmp_path):
    path = tmp_path / 'window.csv'
    pl.DataFrame({
        'subject': [EX + 's1', EX + 's2', EX + 's3'],
        'predicate': [EX + 'p1'] * 3,
        'object': ['5', '5', '5'],
    }).write_csv(path)
    return path


@pytest.fixture
def batch_csv(tmp_path):
    path = tmp_path / 'triples.csv'
    pl.DataFrame({
        'window_id': ['a', 'a', 'b', 'b', 'b'],
        'subject': [EX + f's{i}' for i in range(5)],
        'predicate': [EX + 'p1'] * 5,
        'object': ['1', '2', '10', '20', '30'],
    }).write_csv(path)
    return path


class TestSignatureCommand:

    def test_prints_signature(self, window_csv, capsys):
        assert main(['signature', str(window_csv)]) == 0
        result = json.loads(capsys.readouterr().out)
        assert result['triple_count'] == 3
        assert result['variance'] == 0

    def test_missing_file_exit_code(self, tmp_path, capsys):
        assert main(['signature', str(tmp_path / 'missing.csv')]) == 1
        error = json.loads(capsys.readouterr().err)
        assert 'error_id' in error


class TestChooseCommand:

    def test_default_preset(self, window_csv, capsys):
        assert main(['choose', str(window_csv)]) == 0
        result = json.loads(capsys.readouterr().out)
        assert result['recommended_approach'] == 'low-complexity-approach'
        assert 'periodic-pattern-approach' in result['matching_approaches']

    def test_rules_file(self, window_csv, tmp_path, capsys):
        rules = dump_rules(
            [RuleConfig('needs-many', min_thresholds={'triple_count': 1000})],
            tmp_path / 'rules.yaml',
        )
        assert main(['choose', str(window_csv), '--rules', str(rules)]) == 0
        result = json.loads(capsys.readouterr().out)
        assert result['recommended_approach'] == 'default'
        assert result['confidence'] == 0

    def test_unknown_preset(self, window_csv, capsys):
        assert main(['choose', str(window_csv), '--preset', 'nope']) == 1
        assert 'nope' in json.loads(capsys.readouterr().err)['error']


class TestBatchCommand:

    def test_writes_parquet(self, batch_csv, tmp_path):
        out = tmp_path / 'signatures.parquet'
        assert main(['-q', 'batch', str(batch_csv), '-o', str(out)]) == 0
        result = pl.read_parquet(out)
        assert result['window_id'].to_list() == ['a', 'b']
        assert result.filter(pl.col('window_id') == 'b')['variance'][0] == pytest.approx(100.0)


class TestPresetsCommand:

    def test_lists_presets(self, capsys):
        assert main(['presets']) == 0
        assert 'default' in json.loads(capsys.readouterr().out)['presets']
