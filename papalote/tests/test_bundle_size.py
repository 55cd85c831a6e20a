# -*- coding: utf-8 -*-
"""
Tests de la herramienta de presupuesto de bundles.
"""
import pytest

from papalote.tools.bundle_size import analyze, format_size, main, scan_chunks

KB = 1024


@pytest.fixture
def build_dir(tmp_path):
    chunks = tmp_path / '.next' / 'static' / 'chunks'
    (chunks / 'pages').mkdir(parents=True)
    (chunks / 'framework-abc.js').write_bytes(b'x' * 800 * KB)
    (chunks / 'pages' / 'index-123.js').write_bytes(b'x' * 20 * KB)
    (chunks / 'pages' / 'index-123.js.map').write_bytes(b'x' * 5000 * KB)
    return tmp_path / '.next'


def test_format_size():
    assert format_size(2048) == '2.00 KB'
    assert format_size(3 * KB * KB) == '3.00 MB'


def test_scan_chunks(build_dir):
    chunks = scan_chunks(str(build_dir))
    assert [c.name for c in chunks] == ['framework-abc.js', 'pages/index-123.js']
    assert chunks[0].is_shared
    assert not chunks[1].is_shared
    assert scan_chunks(str(build_dir / 'nope')) == []


def test_warnings_do_not_fail(build_dir, capsys):
    report = analyze(str(build_dir))
    assert report.passed
    assert len(report.warnings) == 2
    assert report.shared_size == 800 * KB

    assert main(['--build-dir', str(build_dir)]) == 0
    out = capsys.readouterr().out
    assert 'Build aprobado con 2 advertencia(s).' in out
    assert 'framework-abc.js' in out


def test_error_budget_fails(build_dir, capsys):
    (build_dir / 'static' / 'chunks' / 'pages' / 'huge.js').write_bytes(b'x' * 1100 * KB)
    assert main(['--build-dir', str(build_dir), '--top', '1']) == 1
    out = capsys.readouterr().out
    assert 'Build fallido: 1 presupuesto(s) excedido(s).' in out
    assert 'index-123.js' not in out


def test_missing_build_dir(tmp_path, capsys):
    assert main(['--build-dir', str(tmp_path / 'missing')]) == 1
    assert 'no se encontró la carpeta' in capsys.readouterr().err
