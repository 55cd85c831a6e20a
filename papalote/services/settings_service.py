# ==============================================================================
# SERVICIO DE CONFIGURACIÓN DE LA PLATAFORMA
# ==============================================================================
# Lectura, validación y guardado de la configuración del panel de
# administración, más la preferencia de tema de cada usuario.
# ==============================================================================

import copy
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from papalote.errors import ERROR_MESSAGES, StorageError, log_error
from papalote.repositories.interfaces import IPreferencesRepository, ISettingsRepository

logger = logging.getLogger(__name__)

SETTINGS_VERSION = 1

SECTIONS = ('general', 'payments', 'notifications', 'security', 'email', 'appearance')

DEFAULT_SETTINGS: Dict[str, Dict[str, Any]] = {
    'general': {
        'site_name': 'Papalote Market',
        'site_description': 'Marketplace de artesanías mexicanas auténticas',
        'maintenance_mode': False,
        'allow_registrations': True,
        'require_email_verification': True,
    },
    'payments': {
        'stripe_enabled': True,
        'paypal_enabled': True,
        'mercado_pago_enabled': True,
        'min_order_amount': 100,
        'platform_commission': 8,
    },
    'notifications': {
        'email_notifications': True,
        'new_order_notifications': True,
        'new_seller_notifications': True,
        'low_stock_alerts': True,
        'weekly_reports': True,
    },
    'security': {
        'two_factor_required': False,
        'session_timeout': 24,
        'max_login_attempts': 5,
        'require_strong_passwords': True,
    },
    'email': {
        'smtp_host': 'smtp.papalote.com',
        'smtp_port': 587,
        'sender_email': 'no-reply@papalote.com',
        'sender_name': 'Papalote Market',
    },
    'appearance': {
        'primary_color': '#dc2626',
        'dark_mode_enabled': False,
        'show_announcements': True,
    },
}

# (sección, campo, mínimo, máximo, mensaje)
NUMERIC_RULES = (
    ('payments', 'min_order_amount', 0, 100000,
     'El monto mínimo debe estar entre 0 y 100,000'),
    ('payments', 'platform_commission', 0, 100,
     'La comisión debe estar entre 0 y 100%'),
    ('security', 'session_timeout', 1, 720,
     'El tiempo de sesión debe estar entre 1 y 720 horas'),
    ('security', 'max_login_attempts', 1, 20,
     'Los intentos máximos deben estar entre 1 y 20'),
    ('email', 'smtp_port', 1, 65535,
     'Puerto SMTP inválido'),
)


def default_settings() -> Dict[str, Any]:
    settings = copy.deepcopy(DEFAULT_SETTINGS)
    settings['version'] = SETTINGS_VERSION
    return settings


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_settings(settings: Dict[str, Any]) -> Dict[str, Any]:
    """
    Valida la configuración completa antes de guardarla.

    Returns:
        {'valid': bool, 'errors': {'seccion.campo': mensaje}}
    """
    errors: Dict[str, str] = {}

    for section in SECTIONS:
        if not isinstance(settings.get(section), dict):
            errors[section] = 'Sección faltante o inválida'
    if errors:
        return {'valid': False, 'errors': errors}

    site_name = settings['general'].get('site_name')
    if not isinstance(site_name, str) or not site_name.strip():
        errors['general.site_name'] = 'El nombre del sitio es requerido'
    elif len(site_name) > 100:
        errors['general.site_name'] = 'El nombre del sitio no puede exceder 100 caracteres'

    description = settings['general'].get('site_description') or ''
    if not isinstance(description, str) or len(description) > 500:
        errors['general.site_description'] = 'La descripción no puede exceder 500 caracteres'

    for section, field_name, minimum, maximum, message in NUMERIC_RULES:
        value = settings[section].get(field_name)
        if not _is_number(value) or value < minimum or value > maximum:
            errors[f'{section}.{field_name}'] = message

    return {'valid': not errors, 'errors': errors}


class SettingsService:
    """
    Servicio de configuración.

    La configuración guardada se combina sobre los valores por defecto, de
    modo que campos nuevos aparecen aunque el archivo sea antiguo.
    """

    def __init__(self, settings_repo: ISettingsRepository, preferences_repo: IPreferencesRepository):
        self.settings_repo = settings_repo
        self.preferences_repo = preferences_repo

    # =========================================================================
    # Lectura
    # =========================================================================

    def get_settings(self) -> Dict[str, Any]:
        """
        Configuración vigente (defaults si no hay nada guardado).
        """
        stored = self.settings_repo.load()
        if stored is None:
            return default_settings()
        if stored.get('version') != SETTINGS_VERSION:
            logger.info("[settings] Migrando configuración versión %s → %s",
                        stored.get('version'), SETTINGS_VERSION)
        return self._merge(stored)

    @staticmethod
    def _merge(stored: Dict[str, Any]) -> Dict[str, Any]:
        """Combina lo guardado sobre los defaults; descarta secciones desconocidas."""
        settings = default_settings()
        for section in SECTIONS:
            values = stored.get(section)
            if isinstance(values, dict):
                settings[section].update(values)
        for meta in ('updated_at', 'updated_by'):
            if stored.get(meta):
                settings[meta] = stored[meta]
        settings['version'] = SETTINGS_VERSION
        return settings

    def is_maintenance_mode(self) -> bool:
        return bool(self.get_settings()['general'].get('maintenance_mode'))

    def get_min_order_amount(self) -> float:
        return self.get_settings()['payments'].get('min_order_amount', 0)

    # =========================================================================
    # Escritura
    # =========================================================================

    def _persist(self, settings: Dict[str, Any], user_id: Optional[str]) -> None:
        settings['updated_at'] = datetime.now(timezone.utc).isoformat()
        settings['updated_by'] = user_id or 'admin'
        settings['version'] = SETTINGS_VERSION
        self.settings_repo.save(settings)

    def save_settings(self, settings: Dict[str, Any], user_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Valida y guarda la configuración completa.

        Args:
            settings: Configuración con todas las secciones
            user_id: Quién guarda (por defecto 'admin')

        Returns:
            Dict con ok, message/error y errors de validación
        """
        if not isinstance(settings, dict):
            return {'ok': False, 'error': ERROR_MESSAGES['INVALID_REQUEST']}

        merged = self._merge(settings)
        validation = validate_settings(merged)
        if not validation['valid']:
            return {'ok': False, 'error': 'Revisa los campos marcados', 'errors': validation['errors']}

        try:
            self._persist(merged, user_id)
        except StorageError as e:
            log_error('settings', e, op='Error al guardar configuración')
            return {'ok': False, 'error': ERROR_MESSAGES['SETTINGS_SAVE_FAILED']}

        return {'ok': True, 'message': 'Configuración guardada exitosamente', 'settings': merged}

    def save_section(self, section: str, values: Dict[str, Any], user_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Reemplaza una sola sección y guarda.

        Returns:
            Dict con ok y message/error
        """
        if section not in SECTIONS:
            return {'ok': False, 'error': f'Sección desconocida: {section}'}
        if not isinstance(values, dict):
            return {'ok': False, 'error': ERROR_MESSAGES['INVALID_REQUEST']}

        settings = self.get_settings()
        settings[section] = dict(DEFAULT_SETTINGS[section], **values)
        validation = validate_settings(settings)
        section_errors = {k: v for k, v in validation['errors'].items() if k.startswith(section + '.')}
        if section_errors:
            return {'ok': False, 'error': 'Revisa los campos marcados', 'errors': section_errors}

        try:
            self._persist(settings, user_id)
        except StorageError as e:
            log_error('settings', e, op='Error al guardar sección', section=section)
            return {'ok': False, 'error': 'Error al actualizar la sección'}

        return {'ok': True, 'message': 'Sección actualizada exitosamente', 'settings': settings}

    def reset_settings(self) -> Dict[str, Any]:
        try:
            self.settings_repo.reset()
        except StorageError as e:
            log_error('settings', e, op='Error al restablecer configuración')
            return {'ok': False, 'error': 'Error al restablecer la configuración'}
        return {
            'ok': True,
            'message': 'Configuración restablecida a valores por defecto',
            'settings': default_settings(),
        }

    def test_email(self, email_settings: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Verifica que la configuración SMTP esté completa.
        No se envía ningún correo.
        """
        if email_settings is None:
            email_settings = self.get_settings()['email']
        if not email_settings.get('smtp_host') or not email_settings.get('sender_email'):
            return {'ok': False, 'error': 'Configuración SMTP incompleta'}
        logger.info("[settings] Prueba de email para %s vía %s",
                    email_settings.get('sender_email'), email_settings.get('smtp_host'))
        return {'ok': True, 'message': 'Email de prueba enviado correctamente'}

    # =========================================================================
    # Tema del usuario
    # =========================================================================

    def get_theme(self, user_id: str) -> str:
        return self.preferences_repo.get_theme(user_id)

    def set_theme(self, user_id: str, theme: str) -> Dict[str, Any]:
        try:
            saved = self.preferences_repo.set_theme(user_id, theme)
        except StorageError as e:
            log_error('settings', e, op='Error al guardar tema', user_id=user_id)
            return {'ok': False, 'error': ERROR_MESSAGES['SAVE_FAILED']}
        return {'ok': True, 'theme': saved}
