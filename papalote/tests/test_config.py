# -*- coding: utf-8 -*-
"""
Tests de configuración y del contenedor de dependencias.
"""
import os

from papalote import config
from papalote.app_container import AppContainer


def test_get_data_dir_does_not_create_folder(tmp_path, monkeypatch):
    target = tmp_path / 'datos'
    monkeypatch.setenv('PAPALOTE_DATA_DIR', str(target))
    assert config.get_data_dir() == str(target)
    assert not target.exists()


def test_container_creates_data_dir(tmp_path, monkeypatch):
    target = tmp_path / 'nuevo' / 'datos'
    monkeypatch.setenv('PAPALOTE_DATA_DIR', str(target))
    AppContainer.reset_instance()
    container = AppContainer.get_instance()
    assert os.path.isdir(target)
    assert container.data_dir == str(target)
