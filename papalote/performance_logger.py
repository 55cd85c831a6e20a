# ==============================================================================
# SISTEMA DE PROFILING INTERNO
# ==============================================================================
# Mide el rendimiento de rutas y funciones sin afectar la respuesta.
# Guarda logs legibles en <carpeta de datos>/logs/ para análisis humano.
#
# ACTIVAR/DESACTIVAR: variable de entorno PAPALOTE_PROFILING ('0' lo apaga)
# ==============================================================================

import logging
import os
import threading
import time
from collections import defaultdict
from datetime import datetime
from functools import wraps

from papalote import config

logger = logging.getLogger(__name__)

# ═══════════════════════════════════════════════════════════════════════════
# CONFIGURACIÓN
# ═══════════════════════════════════════════════════════════════════════════

ENABLE_PROFILING = config.ENABLE_PROFILING

# Umbrales de tiempo (en milisegundos)
THRESHOLD_WARNING = 300
THRESHOLD_CRITICAL = 700

PERFORMANCE_LOG = 'performance.log'
SLOW_ROUTES_LOG = 'slow_routes.log'
SLOW_FUNCTIONS_LOG = 'slow_functions.log'

# Nombres legibles de las rutas más usadas
ROUTE_NAMES = {
    # Catálogo
    'GET /api/products': 'Explorar catálogo',
    'GET /api/products/<product_id>': 'Ver producto',
    'GET /api/products/<product_id>/recommendations': 'Ver recomendaciones',
    'GET /api/search': 'Buscar productos',
    'GET /api/search/suggestions': 'Sugerencias de búsqueda',
    'POST /api/products/<product_id>/reviews': 'Publicar reseña',
    'GET /api/artisan-stories': 'Ver historias de artesanos',
    'POST /api/compare/<action>': 'Modificar comparación',

    # Carrito y checkout
    'GET /api/cart': 'Ver carrito',
    'POST /api/cart/add': 'Agregar al carrito',
    'POST /api/cart/remove': 'Eliminar del carrito',
    'POST /api/cart/update': 'Cambiar cantidad',
    'POST /api/cart/clear': 'Vaciar carrito',
    'POST /api/coupons/validate': 'Validar cupón',
    'POST /api/checkout/summary': 'Resumen de compra',
    'POST /api/checkout': 'Confirmar pedido',

    # Pedidos
    'GET /api/orders': 'Ver pedidos',
    'POST /api/orders/<order_id>/status': 'Cambiar estado de pedido',

    # Vendedor
    'GET /api/seller/products': 'Ver productos de vendedor',
    'POST /api/seller/products': 'Guardar producto',
    'POST /api/seller/products/<product_id>/publish': 'Publicar producto',
    'GET /api/seller/orders': 'Ver pedidos de vendedor',
    'GET /api/seller/achievements': 'Ver logros de vendedor',
    'POST /api/artisan-stories': 'Guardar historia',
    'POST /api/seller/verification': 'Solicitar verificación',

    # Administración
    'GET /api/admin/settings': 'Ver configuración',
    'PUT /api/admin/settings': 'Guardar configuración',
    'POST /api/admin/settings/reset': 'Restablecer configuración',
}


# ═══════════════════════════════════════════════════════════════════════════
# ESTADÍSTICAS DE FUNCIONES (en memoria)
# ═══════════════════════════════════════════════════════════════════════════

# {nombre_funcion: {calls: int, total_time: float, max_time: float}}
_function_stats = defaultdict(lambda: {'calls': 0, 'total_time': 0.0, 'max_time': 0.0})
_stats_lock = threading.Lock()
_write_lock = threading.Lock()


# ═══════════════════════════════════════════════════════════════════════════
# FUNCIONES DE LOGGING
# ═══════════════════════════════════════════════════════════════════════════

def _get_timestamp():
    return datetime.now().strftime('%Y-%m-%d %H:%M:%S')


def _log_path(filename):
    return os.path.join(config.get_logs_dir(), filename)


def _write_log(filename, content):
    """Agrega contenido a un archivo de log. Un fallo se reporta al logger estándar."""
    try:
        with _write_lock:
            with open(_log_path(filename), 'a', encoding='utf-8') as f:
                f.write(content)
    except OSError as e:
        logger.warning("[profiling] no se pudo escribir %s: %s", filename, e)


def _get_route_name(method, path, rule=None):
    """
    Nombre legible de una ruta.
    Busca primero la ruta exacta, luego la regla de Flask y al final
    devuelve 'MÉTODO /ruta'.
    """
    key = f"{method} {path}"
    if key in ROUTE_NAMES:
        return ROUTE_NAMES[key]

    if rule:
        rule_key = f"{method} {rule}"
        if rule_key in ROUTE_NAMES:
            return ROUTE_NAMES[rule_key]

    return f"{method} {path}"


# ═══════════════════════════════════════════════════════════════════════════
# 1️⃣ PROFILING DE RUTAS
# ═══════════════════════════════════════════════════════════════════════════

def log_route_performance(method, path, rule, time_ms, user=None):
    """
    Registra el rendimiento de una ruta en performance.log

    Args:
        method: GET, POST, etc.
        path: Ruta solicitada (/api/cart/add)
        rule: Regla de Flask (/api/products/<product_id>)
        time_ms: Tiempo en milisegundos
        user: Usuario que hizo la petición (opcional)
    """
    if not ENABLE_PROFILING:
        return

    log_entry = f"""
════════════════════════════════════════
[PERFORMANCE] {_get_timestamp()}
────────────────────────────────────────
Acción: {_get_route_name(method, path, rule)}
Usuario: {user or 'anónimo'}
Ruta: {method} {path}
Tiempo: {time_ms:.0f} ms
"""
    _write_log(PERFORMANCE_LOG, log_entry)


def log_slow_route(method, path, rule, time_ms, user=None, level='WARNING'):
    """
    Registra una ruta lenta en slow_routes.log

    Args:
        level: 'WARNING' (>300ms) o 'CRITICAL' (>700ms)
    """
    if not ENABLE_PROFILING:
        return

    emoji = '⚠️' if level == 'WARNING' else '🔴'
    severity = 'LENTA' if level == 'WARNING' else 'MUY LENTA'
    threshold = THRESHOLD_WARNING if level == 'WARNING' else THRESHOLD_CRITICAL

    log_entry = f"""
{emoji} [{level}] {_get_timestamp()}
────────────────────────────────────────
Ruta {severity}: {_get_route_name(method, path, rule)}
Usuario: {user or 'anónimo'}
Detalle: {method} {path}
Tiempo: {time_ms:.0f} ms (umbral: {threshold} ms)
────────────────────────────────────────
"""
    _write_log(SLOW_ROUTES_LOG, log_entry)
    logger.warning("[profiling] ruta %s %s: %s %s (%.0f ms)", severity.lower(), level, method, path, time_ms)


# ═══════════════════════════════════════════════════════════════════════════
# 2️⃣ HOOKS PARA FLASK (before/after request)
# ═══════════════════════════════════════════════════════════════════════════

def init_profiling(app):
    """
    Registra hooks before_request y after_request que miden cada petición.

    Uso:
        from papalote.performance_logger import init_profiling
        init_profiling(app)
    """
    if not ENABLE_PROFILING:
        return

    @app.before_request
    def _start_timer():
        from flask import g
        g.start_time = time.perf_counter()

    @app.after_request
    def _log_request(response):
        from flask import g, request, session

        if not hasattr(g, 'start_time'):
            return response

        elapsed = (time.perf_counter() - g.start_time) * 1000

        method = request.method
        path = request.path
        rule = str(request.url_rule) if request.url_rule else path
        user = session.get('user_id')

        if path.startswith('/static'):
            return response

        log_route_performance(method, path, rule, elapsed, user)

        if elapsed >= THRESHOLD_CRITICAL:
            log_slow_route(method, path, rule, elapsed, user, 'CRITICAL')
        elif elapsed >= THRESHOLD_WARNING:
            log_slow_route(method, path, rule, elapsed, user, 'WARNING')

        return response


# ═══════════════════════════════════════════════════════════════════════════
# 3️⃣ DECORADOR PARA FUNCIONES CLAVE
# ═══════════════════════════════════════════════════════════════════════════

def profile_function(func=None, name=None):
    """
    Decorador para medir funciones críticas (llamadas, promedio y máximo).

    Uso:
        @profile_function
        def mi_funcion():
            ...

        @profile_function(name="Confirmar pedido")
        def place_order():
            ...
    """
    def decorator(fn):
        if not ENABLE_PROFILING:
            return fn

        func_name = name or fn.__name__

        @wraps(fn)
        def wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                return fn(*args, **kwargs)
            finally:
                elapsed_ms = (time.perf_counter() - start) * 1000

                with _stats_lock:
                    stats = _function_stats[func_name]
                    stats['calls'] += 1
                    stats['total_time'] += elapsed_ms
                    if elapsed_ms > stats['max_time']:
                        stats['max_time'] = elapsed_ms

                if elapsed_ms >= THRESHOLD_WARNING:
                    _log_slow_function_call(func_name, elapsed_ms)

        return wrapper

    if func is not None:
        return decorator(func)
    return decorator


def _log_slow_function_call(func_name, time_ms):
    severity = 'CRÍTICO' if time_ms >= THRESHOLD_CRITICAL else 'LENTO'
    emoji = '🔴' if time_ms >= THRESHOLD_CRITICAL else '⚠️'

    log_entry = f"""
{emoji} [{severity}] {_get_timestamp()}
Función: {func_name}
Tiempo: {time_ms:.0f} ms
────────────────────────────────────────
"""
    _write_log(SLOW_FUNCTIONS_LOG, log_entry)


# ═══════════════════════════════════════════════════════════════════════════
# 4️⃣ REPORTE DE ESTADÍSTICAS
# ═══════════════════════════════════════════════════════════════════════════

def get_function_stats():
    """
    Estadísticas de todas las funciones perfiladas.

    Returns:
        dict: {nombre: {calls, avg_time, max_time}}
    """
    with _stats_lock:
        result = {}
        for func_name, stats in _function_stats.items():
            calls = stats['calls']
            avg = stats['total_time'] / calls if calls > 0 else 0
            result[func_name] = {
                'calls': calls,
                'avg_time': round(avg, 2),
                'max_time': round(stats['max_time'], 2),
            }
        return result


def write_function_stats_report():
    """Escribe en slow_functions.log un reporte ordenado por tiempo promedio."""
    if not ENABLE_PROFILING:
        return

    stats = get_function_stats()
    if not stats:
        return

    sorted_stats = sorted(stats.items(), key=lambda x: x[1]['avg_time'], reverse=True)

    report = f"""
╔══════════════════════════════════════════════════════════════════════════════╗
║  REPORTE DE RENDIMIENTO DE FUNCIONES                                         ║
║  Generado: {_get_timestamp()}                                               ║
╚══════════════════════════════════════════════════════════════════════════════╝

"""
    for func_name, data in sorted_stats:
        status = ''
        if data['avg_time'] >= THRESHOLD_CRITICAL:
            status = ' 🔴 CRÍTICO'
        elif data['avg_time'] >= THRESHOLD_WARNING:
            status = ' ⚠️ LENTO'
        elif data['max_time'] >= THRESHOLD_CRITICAL:
            status = ' ⚡ PICOS ALTOS'

        report += f"""┌──────────────────────────────────────────────────────────────────────────────┐
│ FUNCIÓN: {func_name}{status}
├──────────────────────────────────────────────────────────────────────────────┤
│ Llamadas totales: {data['calls']}
│ Tiempo promedio:  {data['avg_time']:.0f} ms
│ Tiempo máximo:    {data['max_time']:.0f} ms
└──────────────────────────────────────────────────────────────────────────────┘

"""
    _write_log(SLOW_FUNCTIONS_LOG, report)


def reset_stats():
    """Reinicia todas las estadísticas (útil para testing)."""
    with _stats_lock:
        _function_stats.clear()


def get_log_summary():
    """
    Resumen del estado actual de los logs.

    Returns:
        dict: {archivo: {exists, size_kb, lines}}
    """
    summary = {}
    for name, filename in [('performance', PERFORMANCE_LOG),
                           ('slow_routes', SLOW_ROUTES_LOG),
                           ('slow_functions', SLOW_FUNCTIONS_LOG)]:
        path = _log_path(filename)
        if os.path.exists(path):
            size = os.path.getsize(path) / 1024
            with open(path, 'r', encoding='utf-8') as f:
                lines = sum(1 for _ in f)
            summary[name] = {'exists': True, 'size_kb': round(size, 2), 'lines': lines}
        else:
            summary[name] = {'exists': False, 'size_kb': 0, 'lines': 0}
    return summary


__all__ = [
    'ENABLE_PROFILING',
    'init_profiling',
    'profile_function',
    'get_function_stats',
    'write_function_stats_report',
    'reset_stats',
    'get_log_summary',
]
