# ==============================================================================
# CONFIGURACIÓN DE LA APLICACIÓN
# ==============================================================================
# Todos los valores se leen de variables de entorno con un default seguro
# para desarrollo local.
#
#   PAPALOTE_SECRET_KEY   → clave de sesión de Flask
#   PAPALOTE_DATA_DIR     → carpeta donde viven los JSON persistidos
#   PAPALOTE_PRODUCTION   → '1' activa cookies seguras y advertencias
#   PAPALOTE_PROFILING    → '0' desactiva el profiling de rutas
#   PAPALOTE_LOG_LEVEL    → nivel de logging (INFO por defecto)
# ==============================================================================

import logging
import os

BASE_DIR = os.path.dirname(os.path.abspath(__file__))

# Catálogo estático empaquetado con la aplicación (solo lectura)
CATALOG_DIR = os.path.join(BASE_DIR, 'data')

_DEFAULT_SECRET = "papalote_dev_secret_key_change_in_production"


def _env_flag(name: str, default: bool) -> bool:
    """Interpreta una variable de entorno como booleano ('1', 'true', 'si')."""
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'si', 'sí', 'on')


PRODUCTION_MODE = _env_flag('PAPALOTE_PRODUCTION', False)
ENABLE_PROFILING = _env_flag('PAPALOTE_PROFILING', True)
LOG_LEVEL = os.environ.get('PAPALOTE_LOG_LEVEL', 'INFO').upper()


def get_secret_key() -> str:
    """
    Obtiene la clave secreta de sesión.

    Returns:
        Clave definida en PAPALOTE_SECRET_KEY o la clave de desarrollo
    """
    return os.environ.get('PAPALOTE_SECRET_KEY') or _DEFAULT_SECRET


def get_data_dir() -> str:
    """
    Resuelve la carpeta de datos persistidos.

    Se lee en cada llamada para que los tests puedan redirigirla con
    monkeypatch antes de construir el contenedor, que es quien la crea.

    Returns:
        Ruta absoluta a la carpeta de datos
    """
    path = os.environ.get('PAPALOTE_DATA_DIR') or os.path.join(os.getcwd(), 'papalote_data')
    return os.path.abspath(path)


def get_logs_dir() -> str:
    """Carpeta de logs de rendimiento (dentro de la carpeta de datos)."""
    path = os.path.join(get_data_dir(), 'logs')
    os.makedirs(path, exist_ok=True)
    return path


def configure_logging() -> None:
    """Configura el logging raíz con el nivel de PAPALOTE_LOG_LEVEL."""
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    )
