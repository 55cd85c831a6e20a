# -*- coding: utf-8 -*-
"""
Tests de la persistencia en archivos JSON.
"""
import json
import os

import pytest

from papalote.errors import StorageError
from papalote.repositories import OrderRepository, PreferencesRepository


def test_missing_file_reads_empty(tmp_path):
    repo = OrderRepository(str(tmp_path))
    assert repo.get_orders() == []
    assert not repo.exists()


def test_corrupt_file_reads_empty(tmp_path):
    (tmp_path / 'papalote-orders.json').write_text('{no json', encoding='utf-8')
    assert OrderRepository(str(tmp_path)).get_orders() == []

    # Formato inesperado (dict en vez de lista)
    (tmp_path / 'papalote-orders.json').write_text('{"a": 1}', encoding='utf-8')
    assert OrderRepository(str(tmp_path)).get_orders() == []


def test_atomic_write_leaves_no_temp_file(tmp_path):
    folder = tmp_path / 'datos'
    folder.mkdir()
    repo = OrderRepository(str(folder))
    repo.add_order({'id': 'ORD-1', 'status': 'pending'})
    assert os.listdir(folder) == ['papalote-orders.json']
    with open(repo.file_path, encoding='utf-8') as f:
        assert json.load(f) == [{'id': 'ORD-1', 'status': 'pending'}]


def test_update_order(tmp_path):
    repo = OrderRepository(str(tmp_path))
    repo.add_order({'id': 'ORD-1', 'status': 'pending'})
    assert repo.update_order('ORD-1', {'status': 'confirmed'})['status'] == 'confirmed'
    assert repo.update_order('ORD-2', {'status': 'confirmed'}) is None
    assert repo.get_order('ORD-1')['status'] == 'confirmed'


def test_write_failure_raises_storage_error(tmp_path):
    repo = OrderRepository(str(tmp_path / 'no-existe'))
    with pytest.raises(StorageError):
        repo.add_order({'id': 'ORD-1'})


def test_preferences_keep_other_keys(tmp_path):
    repo = PreferencesRepository(str(tmp_path))
    repo.set_setting('u1', 'language', 'es')
    repo.set_theme('u1', 'system')
    assert repo.get_user_settings('u1') == {'language': 'es', 'theme': 'system'}
