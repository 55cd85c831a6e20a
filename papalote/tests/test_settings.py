# -*- coding: utf-8 -*-
"""
Tests de configuración de la plataforma y tema del usuario.
"""
import pytest

from papalote.services.settings_service import (
    SETTINGS_VERSION,
    default_settings,
    validate_settings,
)


@pytest.fixture
def settings(container):
    return container.settings_service


def test_defaults_when_nothing_saved(settings):
    current = settings.get_settings()
    assert current['general']['site_name'] == 'Papalote Market'
    assert current['payments']['min_order_amount'] == 100
    assert current['version'] == SETTINGS_VERSION
    assert settings.is_maintenance_mode() is False


def test_stored_settings_merge_over_defaults(container, settings):
    container.settings_repo.save({
        'general': {'site_name': 'Papalote'},
        'legacy': {'foo': 1},
        'version': 0,
    })
    current = settings.get_settings()
    assert current['general']['site_name'] == 'Papalote'
    assert current['general']['allow_registrations'] is True
    assert current['security']['session_timeout'] == 24
    assert 'legacy' not in current
    assert current['version'] == SETTINGS_VERSION


def test_validate_settings():
    assert validate_settings(default_settings()) == {'valid': True, 'errors': {}}

    broken = default_settings()
    broken['general']['site_name'] = '  '
    broken['payments']['platform_commission'] = 150
    broken['email']['smtp_port'] = 'abc'
    broken['security']['max_login_attempts'] = True
    errors = validate_settings(broken)['errors']
    assert errors == {
        'general.site_name': 'El nombre del sitio es requerido',
        'payments.platform_commission': 'La comisión debe estar entre 0 y 100%',
        'email.smtp_port': 'Puerto SMTP inválido',
        'security.max_login_attempts': 'Los intentos máximos deben estar entre 1 y 20',
    }

    missing = {'general': {}}
    assert validate_settings(missing)['errors']['payments'] == 'Sección faltante o inválida'


def test_save_settings(settings):
    new = default_settings()
    new['general']['maintenance_mode'] = True
    result = settings.save_settings(new, user_id='admin-7')
    assert result['ok']

    stored = settings.get_settings()
    assert stored['general']['maintenance_mode'] is True
    assert stored['updated_by'] == 'admin-7'
    assert stored['updated_at']
    assert settings.is_maintenance_mode()


def test_save_settings_rejects_invalid(settings):
    new = default_settings()
    new['security']['session_timeout'] = 0
    result = settings.save_settings(new)
    assert not result['ok']
    assert 'security.session_timeout' in result['errors']
    assert settings.get_settings()['security']['session_timeout'] == 24
    assert not settings.save_settings('nope')['ok']


def test_save_section(settings):
    result = settings.save_section('payments', {'platform_commission': 10})
    assert result['ok']
    current = settings.get_settings()
    assert current['payments']['platform_commission'] == 10
    assert current['payments']['min_order_amount'] == 100
    assert current['updated_by'] == 'admin'

    assert settings.save_section('billing', {})['error'] == 'Sección desconocida: billing'
    invalid = settings.save_section('email', {'smtp_port': 70000})
    assert invalid['errors'] == {'email.smtp_port': 'Puerto SMTP inválido'}


def test_reset_settings(settings):
    settings.save_section('general', {'site_name': 'Otro'})
    result = settings.reset_settings()
    assert result['ok']
    assert settings.get_settings()['general']['site_name'] == 'Papalote Market'


def test_test_email(settings):
    assert settings.test_email()['ok']
    result = settings.test_email({'smtp_host': '', 'sender_email': 'a@b.mx'})
    assert result == {'ok': False, 'error': 'Configuración SMTP incompleta'}


def test_theme_preferences(settings):
    assert settings.get_theme('buyer-1') == 'light'
    assert settings.set_theme('buyer-1', 'dark') == {'ok': True, 'theme': 'dark'}
    assert settings.get_theme('buyer-1') == 'dark'
    assert settings.set_theme('buyer-2', 'neon')['theme'] == 'light'
    assert settings.get_theme('buyer-1') == 'dark'
