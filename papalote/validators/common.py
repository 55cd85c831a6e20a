# ==============================================================================
# UTILIDADES DE VALIDACIÓN
# ==============================================================================

from typing import Any, Dict, Optional, Type

from pydantic import BaseModel, ValidationError

# Mensajes para errores que pydantic genera por su cuenta
_TYPE_MESSAGES = {
    'missing': 'Este campo es requerido',
    'string_type': 'Debe ser texto',
    'bool_type': 'Debe ser verdadero o falso',
    'bool_parsing': 'Debe ser verdadero o falso',
    'int_parsing': 'Debe ser un número entero',
    'float_parsing': 'Debe ser un número',
    'float_type': 'Debe ser un número',
    'list_type': 'Debe ser una lista',
    'model_type': 'Formato inválido',
    'dict_type': 'Formato inválido',
    'enum': 'Valor no permitido',
    'literal_error': 'Valor no permitido',
    'int_type': 'Debe ser un número entero',
    'greater_than_equal': 'El valor es menor al mínimo permitido',
}


def _message(error: Dict[str, Any]) -> str:
    ctx = error.get('ctx') or {}
    if error.get('type') == 'value_error' and 'error' in ctx:
        return str(ctx['error'])
    return _TYPE_MESSAGES.get(error.get('type'), error.get('msg', 'Valor inválido'))


def format_errors(exc: ValidationError) -> Dict[str, str]:
    """
    Convierte un ValidationError en {'ruta.del.campo': 'mensaje'}.

    Solo se conserva el primer error de cada campo.
    """
    errors: Dict[str, str] = {}
    for error in exc.errors():
        field = '.'.join(str(part) for part in error.get('loc', ())) or '__root__'
        errors.setdefault(field, _message(error))
    return errors


def validate_model(model: Type[BaseModel], data: Any) -> Dict[str, Any]:
    """
    Valida datos contra un modelo.

    Returns:
        {'ok': True, 'data': instancia} o {'ok': False, 'errors': {...}}
    """
    try:
        return {'ok': True, 'data': model.model_validate(data or {})}
    except ValidationError as e:
        return {'ok': False, 'errors': format_errors(e)}


def strip_or_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None
