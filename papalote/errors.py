# ==============================================================================
# MANEJO DE ERRORES - Mensajes para el usuario y respuestas uniformes
# ==============================================================================
# Los servicios devuelven dicts {'ok': bool, ...}. Este módulo centraliza
# los mensajes en español y la forma de esos dicts.
# ==============================================================================

import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


ERROR_MESSAGES: Dict[str, str] = {
    # Servidor
    'SERVER_ERROR': 'Error del servidor. Por favor, intenta de nuevo más tarde.',
    'NOT_FOUND': 'Recurso no encontrado.',
    'METHOD_NOT_ALLOWED': 'Método no permitido.',
    'INVALID_REQUEST': 'Datos no recibidos o formato inválido.',
    'MAINTENANCE': 'El sitio está en mantenimiento. Vuelve más tarde.',

    # Datos
    'LOAD_FAILED': 'No pudimos cargar los datos. Por favor, intenta de nuevo.',
    'SAVE_FAILED': 'No pudimos guardar los cambios. Por favor, intenta de nuevo.',
    'DELETE_FAILED': 'No pudimos eliminar el elemento. Por favor, intenta de nuevo.',

    # Almacenamiento
    'STORAGE_LOAD_FAILED': 'Error al cargar datos guardados.',
    'STORAGE_SAVE_FAILED': 'Error al guardar datos localmente.',

    # Carrito
    'CART_LOAD_FAILED': 'No pudimos cargar tu carrito. Tus productos podrían no aparecer.',
    'CART_SAVE_FAILED': 'Error al actualizar el carrito.',

    # Pedidos
    'ORDERS_LOAD_FAILED': 'No pudimos cargar tus pedidos.',
    'ORDER_CREATE_FAILED': 'Error al crear el pedido. Por favor, intenta de nuevo.',

    # Configuración
    'SETTINGS_LOAD_FAILED': 'No pudimos cargar la configuración.',
    'SETTINGS_SAVE_FAILED': 'Error al guardar la configuración.',

    # Genérico
    'UNKNOWN_ERROR': 'Ocurrió un error inesperado. Por favor, intenta de nuevo.',
}


class StorageError(Exception):
    """Fallo al leer o escribir un archivo de datos."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


def get_error_message(error: Any, fallback_key: str = 'UNKNOWN_ERROR') -> str:
    """
    Obtiene un mensaje legible para el usuario a partir de una excepción.

    Si el mensaje de la excepción ya parece pensado para el usuario
    (empieza con mayúscula y es corto) se devuelve tal cual.

    Args:
        error: Excepción o valor capturado
        fallback_key: Clave de ERROR_MESSAGES a usar si no hay mensaje útil

    Returns:
        Mensaje en español
    """
    if isinstance(error, TimeoutError):
        return 'La solicitud tardó demasiado. Por favor, intenta de nuevo.'
    if isinstance(error, Exception):
        text = str(error)
        if text and text[0].isupper() and len(text) < 200:
            return text
    return ERROR_MESSAGES.get(fallback_key, ERROR_MESSAGES['UNKNOWN_ERROR'])


def log_error(context: str, error: Any, **extra: Any) -> None:
    """Registra un error con su contexto ('[modulo] operación')."""
    if extra:
        logger.error("[%s] %s | %s", context, error, extra)
    else:
        logger.error("[%s] %s", context, error)


def error_response(error: Any, fallback_key: str = 'UNKNOWN_ERROR', **extra: Any) -> Dict[str, Any]:
    """
    Construye un resultado de error uniforme.

    Args:
        error: Mensaje o excepción
        fallback_key: Clave usada si el error no trae mensaje legible

    Returns:
        {'ok': False, 'error': str, ...extra}
    """
    if isinstance(error, str):
        message = error
    else:
        message = get_error_message(error, fallback_key)
    result = {'ok': False, 'error': message}
    result.update(extra)
    return result
