from flask import Flask, request, session
from werkzeug.exceptions import HTTPException

from papalote import config

# Sistema de profiling interno
from papalote.performance_logger import (
    ENABLE_PROFILING,
    get_function_stats,
    get_log_summary,
    init_profiling,
)

# ═══════════════════════════════════════════════════════════════════════════
# CONTENEDOR DE DEPENDENCIAS - Servicios y Repositorios
# ═══════════════════════════════════════════════════════════════════════════
# Las rutas solo leen la petición, llaman a un servicio y traducen el dict
# {'ok': ...} a (payload, status). La lógica de negocio vive en services/.
# ═══════════════════════════════════════════════════════════════════════════
from papalote.app_container import get_container
from papalote.cache import CACHE_HEADERS
from papalote.constants.achievements import LOWER_IS_BETTER, get_achievement_by_id
from papalote.errors import ERROR_MESSAGES, error_response, log_error
from papalote.services import coupon_service
from papalote.services.achievement_service import VALID_USER_TYPES
from papalote.services.artisan_story_service import artisan_id_from_email
from papalote.services.checkout_service import calculate_shipping_cost
from papalote.services.search_service import get_search_suggestions, search_products

config.configure_logging()

app = Flask(__name__)

# ═══════════════════════════════════════════════════════════════════════════
# INICIALIZAR SISTEMA DE PROFILING
# ═══════════════════════════════════════════════════════════════════════════
# Mide rendimiento de rutas y funciones. Logs en <PAPALOTE_DATA_DIR>/logs/
# Para desactivar: PAPALOTE_PROFILING=0
init_profiling(app)

# ═══════════════════════════════════════════════════════════════════════════════
# CONFIGURACIÓN DE SESIONES
# ═══════════════════════════════════════════════════════════════════════════════
# SECRET_KEY: En producción DEBE definirse via variable de entorno
# Comando: export PAPALOTE_SECRET_KEY="tu_clave_secreta_muy_larga_y_aleatoria"
if config.PRODUCTION_MODE and config.get_secret_key() == config._DEFAULT_SECRET:
    app.logger.warning("[config] PAPALOTE_PRODUCTION activo sin PAPALOTE_SECRET_KEY definida")

app.secret_key = config.get_secret_key()

app.config.update(
    SESSION_COOKIE_HTTPONLY=True,                     # Protege contra XSS
    SESSION_COOKIE_SECURE=config.PRODUCTION_MODE,     # True solo detrás de HTTPS
    SESSION_COOKIE_SAMESITE='Lax',
    PERMANENT_SESSION_LIFETIME=86400,                 # 24 horas
    MAX_CONTENT_LENGTH=1 * 1024 * 1024,               # 1 MB por petición JSON
)
app.json.ensure_ascii = False

DEFAULT_SEARCH_LIMIT = 10
DEFAULT_RECOMMENDATION_LIMIT = 4


# ═══════════════════════════════════════════════════════════════════════════════
# UTILIDADES DE PETICIÓN / RESPUESTA
# ═══════════════════════════════════════════════════════════════════════════════

def _json_body():
    """Cuerpo JSON como dict ({} si no llegó o no es un objeto)."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _param(name, default=None):
    """Busca un parámetro en query string, luego en el cuerpo JSON."""
    value = request.args.get(name)
    if value is None:
        value = _json_body().get(name)
    return value if value not in (None, '') else default


def _current_user_id(name='user_id'):
    """Usuario de la petición: parámetro explícito o el guardado en sesión."""
    user_id = _param(name) or session.get(name)
    if user_id:
        session[name] = user_id
    return user_id


def _to_int(value, default):
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _status(result, ok_status=200):
    """HTTP status para un dict de servicio."""
    if result.get('ok'):
        return ok_status
    if result.get('not_found'):
        return 404
    return 400


def _result(result, ok_status=200):
    return result, _status(result, ok_status)


def _require_user_type(user_type):
    if user_type not in VALID_USER_TYPES:
        return error_response(f'Tipo de usuario inválido: {user_type}'), 400
    return None


# ═══════════════════════════════════════════════════════════════════════════════
# HOOKS GLOBALES
# ═══════════════════════════════════════════════════════════════════════════════

@app.before_request
def check_maintenance_mode():
    """En mantenimiento la tienda responde 503; /api/admin sigue disponible."""
    path = request.path
    if not path.startswith('/api/') or path.startswith('/api/admin'):
        return None
    if get_container().settings_service.is_maintenance_mode():
        return error_response(ERROR_MESSAGES['MAINTENANCE'], maintenance=True), 503
    return None


@app.after_request
def set_security_headers(response):
    response.headers['X-Frame-Options'] = 'DENY'
    response.headers['X-Content-Type-Options'] = 'nosniff'
    response.headers['Referrer-Policy'] = 'no-referrer-when-downgrade'
    response.headers['Permissions-Policy'] = 'geolocation=(), microphone=()'
    # NOTA: HSTS solo en producción con HTTPS real
    if request.is_secure:
        response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'
    return response


@app.errorhandler(404)
def not_found(_error):
    return error_response(ERROR_MESSAGES['NOT_FOUND']), 404


@app.errorhandler(405)
def method_not_allowed(_error):
    return error_response(ERROR_MESSAGES['METHOD_NOT_ALLOWED']), 405


@app.errorhandler(HTTPException)
def http_error(error):
    """Cualquier otro error HTTP (400, 413, ...) también responde JSON."""
    return error_response(error.description or ERROR_MESSAGES['INVALID_REQUEST']), error.code


@app.errorhandler(500)
def server_error(error):
    log_error('app', error, path=request.path)
    return error_response(ERROR_MESSAGES['SERVER_ERROR']), 500


# ═══════════════════════════════════════════════════════════════════════════════
# CATÁLOGO
# ═══════════════════════════════════════════════════════════════════════════════

@app.route('/api/products', methods=['GET'])
def api_products():
    """
    Catálogo filtrado, ordenado y paginado.

    Parámetros: categoria, subcategoria, estado, q, ordenar, pagina,
    por_pagina, precio_min, precio_max, calificacion, disponible,
    destacado, verificado.
    """
    result = get_container().catalog_service.browse(request.args)
    return result, 200, CACHE_HEADERS['PUBLIC_LISTINGS']


@app.route('/api/products/<product_id>', methods=['GET'])
def api_product_detail(product_id):
    """Detalle de un producto; queda registrado como visto recientemente."""
    container = get_container()
    product = container.catalog_service.get_product(product_id)
    if not product:
        return error_response('Producto no encontrado'), 404
    container.recommendation_service.record_view(product['id'])
    return {'ok': True, 'product': product}


@app.route('/api/products/<product_id>/recommendations', methods=['GET'])
def api_product_recommendations(product_id):
    limit = _to_int(request.args.get('limite'), DEFAULT_RECOMMENDATION_LIMIT)
    result = get_container().recommendation_service.get_combined(product_id, max(1, limit))
    if not result['ok']:
        return error_response(result['error']), 404
    return result


@app.route('/api/products/<product_id>/reviews', methods=['GET', 'POST'])
def api_product_reviews(product_id):
    """
    GET  → reseñas del producto y calificación promedio
    POST {user_id?, rating, comment, title?} → publica una reseña
    """
    service = get_container().review_service
    if request.method == 'GET':
        return _result(service.get_reviews(product_id))
    result = service.add_review(product_id, _current_user_id(), _json_body())
    return _result(result, ok_status=201)


# ═══════════════════════════════════════════════════════════════════════════════
# HISTORIAS DE ARTESANOS
# ═══════════════════════════════════════════════════════════════════════════════

@app.route('/api/artisan-stories', methods=['GET', 'POST'])
def api_artisan_stories():
    """
    GET  ?estado=...                                  → historias publicadas
    POST {artisan_id | email, seller_id?, ...campos}  → crea o actualiza
    """
    service = get_container().artisan_story_service
    if request.method == 'GET':
        stories = service.get_stories(request.args.get('estado'))
        return {'ok': True, 'stories': stories}, 200, CACHE_HEADERS['REFERENCE_DATA']

    data = _json_body()
    artisan_id = data.get('artisan_id') or artisan_id_from_email(data.get('email') or '')
    result = service.save_story(artisan_id, data, seller_id=_param('seller_id'))
    if not result['ok']:
        return _result(result)
    return result, 201 if result['created'] else 200


@app.route('/api/artisan-stories/<story_id>', methods=['GET'])
def api_artisan_story(story_id):
    story = get_container().artisan_story_service.get_story(story_id)
    if not story:
        return error_response('Historia no encontrada'), 404
    return {'ok': True, 'story': story}


# ═══════════════════════════════════════════════════════════════════════════════
# COMPARACIÓN DE PRODUCTOS
# ═══════════════════════════════════════════════════════════════════════════════

@app.route('/api/compare', methods=['GET', 'DELETE'])
def api_compare():
    service = get_container().comparison_service
    if request.method == 'DELETE':
        return _result(service.clear())
    return dict(service.get_comparison(), ok=True), 200, CACHE_HEADERS['USER_DATA']


@app.route('/api/compare/<action>', methods=['POST'])
def api_compare_action(action):
    """Espera JSON con product_id; action es add, remove o toggle."""
    service = get_container().comparison_service
    handlers = {'add': service.add, 'remove': service.remove, 'toggle': service.toggle}
    if action not in handlers:
        return error_response(ERROR_MESSAGES['NOT_FOUND']), 404
    product_id = _json_body().get('product_id')
    if not product_id:
        return error_response('ID de producto inválido'), 400
    return _result(handlers[action](str(product_id)))


# ═══════════════════════════════════════════════════════════════════════════════
# BÚSQUEDA
# ═══════════════════════════════════════════════════════════════════════════════

@app.route('/api/search', methods=['GET'])
def api_search():
    """Búsqueda difusa; las consultas no vacías se guardan en el historial."""
    container = get_container()
    query = (request.args.get('q') or '').strip()
    limit = max(1, min(50, _to_int(request.args.get('limite'), DEFAULT_SEARCH_LIMIT)))
    results = search_products(container.catalog_service.get_all_products(), query, limit)
    if query:
        container.search_history_service.add(query)
    return {'ok': True, 'query': query, 'results': results, 'total': len(results)}


@app.route('/api/search/suggestions', methods=['GET'])
def api_search_suggestions():
    query = request.args.get('q') or ''
    limit = _to_int(request.args.get('limite'), 5)
    products = get_container().catalog_service.get_all_products()
    return {'ok': True, 'suggestions': get_search_suggestions(products, query, limit)}


@app.route('/api/search/history', methods=['GET', 'DELETE'])
def api_search_history():
    history_service = get_container().search_history_service
    if request.method == 'DELETE':
        query = request.args.get('q')
        if query:
            return {'ok': True, 'history': history_service.remove(query)}
        history_service.clear()
        return {'ok': True, 'history': []}
    return {'ok': True, 'history': history_service.get_history()}, 200, CACHE_HEADERS['USER_DATA']


# ═══════════════════════════════════════════════════════════════════════════════
# CARRITO
# ═══════════════════════════════════════════════════════════════════════════════

@app.route('/api/cart', methods=['GET'])
def api_cart():
    cart = get_container().cart_service.get_cart()
    return dict(cart, ok=True), 200, CACHE_HEADERS['USER_DATA']


@app.route('/api/cart/add', methods=['POST'])
def api_cart_add():
    """
    Agrega un producto al carrito (almacenado en session).
    Espera JSON con: product_id, quantity (opcional, 1 por defecto)
    """
    data = _json_body()
    if not data:
        return error_response(ERROR_MESSAGES['INVALID_REQUEST']), 400
    result = get_container().cart_service.add_item(data.get('product_id'), data.get('quantity', 1))
    return _result(result)


@app.route('/api/cart/remove', methods=['POST'])
def api_cart_remove():
    data = _json_body()
    if not data.get('product_id'):
        return error_response('ID de producto inválido'), 400
    return _result(get_container().cart_service.remove_item(str(data['product_id'])))


@app.route('/api/cart/update', methods=['POST'])
def api_cart_update():
    data = _json_body()
    if not data.get('product_id'):
        return error_response('ID de producto inválido'), 400
    result = get_container().cart_service.update_quantity(str(data['product_id']), data.get('quantity'))
    return _result(result)


@app.route('/api/cart/clear', methods=['POST'])
def api_cart_clear():
    return _result(get_container().cart_service.clear_cart())


# ═══════════════════════════════════════════════════════════════════════════════
# CUPONES Y CHECKOUT
# ═══════════════════════════════════════════════════════════════════════════════

@app.route('/api/coupons/validate', methods=['POST'])
def api_coupon_validate():
    """
    Vista previa de un cupón.

    Si no se envían subtotal / shipping_cost se usan los del carrito actual.
    """
    data = _json_body()
    code = data.get('code')
    if 'subtotal' in data:
        try:
            subtotal = float(data['subtotal'])
        except (TypeError, ValueError):
            return error_response('Subtotal inválido'), 400
    else:
        subtotal = get_container().cart_service.get_cart()['total_monto']

    if 'shipping_cost' in data:
        try:
            shipping_cost = float(data['shipping_cost'])
        except (TypeError, ValueError):
            return error_response('Costo de envío inválido'), 400
    else:
        shipping_cost = calculate_shipping_cost(subtotal, data.get('state'))

    return _result(coupon_service.apply_coupon(code, subtotal, shipping_cost))


@app.route('/api/checkout/summary', methods=['POST'])
def api_checkout_summary():
    data = _json_body()
    result = get_container().checkout_service.get_summary(
        state=data.get('state'),
        coupon_code=data.get('coupon_code'),
        gift_wrap=bool(data.get('gift_wrap', False)),
    )
    return result, 200, CACHE_HEADERS['USER_DATA']


@app.route('/api/checkout', methods=['POST'])
def api_checkout():
    """Crea el pedido con el carrito de la sesión."""
    data = _json_body()
    if not data:
        return error_response(ERROR_MESSAGES['INVALID_REQUEST']), 400
    buyer_id = _current_user_id()
    return _result(get_container().checkout_service.place_order(data, buyer_id), ok_status=201)


# ═══════════════════════════════════════════════════════════════════════════════
# PEDIDOS Y DIRECCIONES
# ═══════════════════════════════════════════════════════════════════════════════

@app.route('/api/orders', methods=['GET'])
def api_orders():
    orders = get_container().order_service.get_orders(request.args.get('buyer_id'))
    return {'ok': True, 'orders': orders, 'total': len(orders)}, 200, CACHE_HEADERS['USER_DATA']


@app.route('/api/orders/<order_id>', methods=['GET'])
def api_order_detail(order_id):
    """Pedido por ID (ORD-...) o por número (PM...)."""
    order_service = get_container().order_service
    order = order_service.get_order(order_id) or order_service.get_order_by_number(order_id)
    if not order:
        return error_response('Pedido no encontrado'), 404
    return {'ok': True, 'order': order}


@app.route('/api/orders/<order_id>/status', methods=['POST'])
def api_order_status(order_id):
    data = _json_body()
    if not data.get('status'):
        return error_response('El estado es requerido'), 400
    result = get_container().order_service.update_status(
        order_id, data['status'], data.get('tracking_number')
    )
    return _result(result)


@app.route('/api/addresses', methods=['GET', 'POST'])
def api_addresses():
    order_service = get_container().order_service
    if request.method == 'POST':
        return _result(order_service.save_address_from_form(_json_body()), ok_status=201)
    return {
        'ok': True,
        'addresses': order_service.get_addresses(),
        'default': order_service.get_default_address(),
    }


@app.route('/api/addresses/<address_id>', methods=['DELETE'])
def api_address_delete(address_id):
    return _result(get_container().order_service.delete_address(address_id))


# ═══════════════════════════════════════════════════════════════════════════════
# VENDEDORES
# ═══════════════════════════════════════════════════════════════════════════════

@app.route('/api/seller/products', methods=['GET', 'POST', 'PUT', 'DELETE'])
def api_seller_products():
    """
    GET    ?seller_id=...                     → borradores y publicados
    POST   {seller_id, seller_name, product}  → guarda borrador
    PUT    {seller_id, seller_name, product}  → actualiza (borrador o publicado)
    DELETE ?seller_id=...&id=...              → elimina
    """
    service = get_container().seller_product_service
    seller_id = _param('seller_id')

    if request.method == 'GET':
        if not seller_id:
            return error_response('seller_id es requerido'), 400
        status = request.args.get('status')
        if status == 'draft':
            products = service.get_drafts(seller_id)
        elif status == 'published':
            products = service.get_published(seller_id)
        else:
            products = service.get_all_seller_products(seller_id)
        return {'ok': True, 'products': products, 'counts': service.get_counts(seller_id)}

    if request.method == 'DELETE':
        product_id = _param('id')
        if not seller_id or not product_id:
            return error_response('seller_id e id son requeridos'), 400
        return _result(service.delete_product(product_id, seller_id))

    data = _json_body()
    product = data.get('product')
    if not isinstance(product, dict):
        return error_response(ERROR_MESSAGES['INVALID_REQUEST']), 400

    if request.method == 'PUT':
        product_id = product.get('id')
        if not product_id:
            return error_response('ID de producto inválido'), 400
        if service.get_draft(product_id) is None:
            return _result(service.save_published(product))
        return _result(service.save_draft(product, seller_id, data.get('seller_name'), existing_id=product_id))

    return _result(service.save_draft(product, seller_id, data.get('seller_name')), ok_status=201)


@app.route('/api/seller/products/<product_id>/publish', methods=['POST'])
def api_seller_product_publish(product_id):
    return _result(get_container().seller_product_service.publish(product_id))


@app.route('/api/seller/products/<product_id>/unpublish', methods=['POST'])
def api_seller_product_unpublish(product_id):
    seller_id = _param('seller_id')
    if not seller_id:
        return error_response('seller_id es requerido'), 400
    return _result(get_container().seller_product_service.unpublish(product_id, seller_id))


@app.route('/api/seller/orders', methods=['GET'])
def api_seller_orders():
    seller_name = request.args.get('seller_name')
    if not seller_name:
        return error_response('seller_name es requerido'), 400
    dashboard = get_container().order_service.get_seller_dashboard(seller_name)
    return dict(dashboard, ok=True), 200, CACHE_HEADERS['USER_DATA']


@app.route('/api/seller/orders/seen', methods=['POST'])
def api_seller_orders_seen():
    """Marca como vistos los pedidos indicados (o todos si no se envían IDs)."""
    data = _json_body()
    seller_name = data.get('seller_name')
    if not seller_name:
        return error_response('seller_name es requerido'), 400
    order_service = get_container().order_service
    order_ids = data.get('order_ids')
    if order_ids:
        order_service.mark_orders_seen(seller_name, [str(i) for i in order_ids])
    else:
        order_service.mark_all_seen(seller_name)
    return {'ok': True, 'nuevos': len(order_service.get_new_orders_for_seller(seller_name))}


@app.route('/api/seller/achievements', methods=['GET'])
def api_seller_achievements():
    """Resumen de logros del vendedor a partir del progreso guardado."""
    seller_id = _current_user_id('seller_id')
    if not seller_id:
        return error_response('seller_id es requerido'), 400
    summary = get_container().achievement_service.get_summary(seller_id, 'seller')
    return {'ok': True, 'summary': summary}, 200, CACHE_HEADERS['USER_DATA']


@app.route('/api/seller/verification', methods=['GET', 'POST', 'PATCH'])
def api_seller_verification():
    """
    Solicitudes de verificación de vendedores.

    GET   ?email=...                                  → solicitud actual (o null)
    POST  {seller_id, seller_name, seller_email, seller_type, requested_level, questionnaire?}
    PATCH {id, status, review_notes?, rejection_reason?}
    """
    service = get_container().verification_service
    if request.method == 'GET':
        email = request.args.get('email')
        if not email:
            return error_response('Email requerido'), 400
        return {'ok': True, 'request': service.get_request(email)}, 200, CACHE_HEADERS['USER_DATA']

    data = _json_body()
    if request.method == 'POST':
        return _result(service.submit_request(data), ok_status=201)
    if not data.get('id') or not data.get('status'):
        return error_response('id y status son requeridos'), 400
    return _result(service.update_request(data['id'], data['status'], data))


# ═══════════════════════════════════════════════════════════════════════════════
# LOGROS
# ═══════════════════════════════════════════════════════════════════════════════

@app.route('/api/achievements/<user_type>/<user_id>', methods=['GET'])
def api_achievements(user_type, user_id):
    invalid = _require_user_type(user_type)
    if invalid:
        return invalid
    summary = get_container().achievement_service.get_summary(user_id, user_type)
    return {'ok': True, 'summary': summary}, 200, CACHE_HEADERS['USER_DATA']


@app.route('/api/achievements/<user_type>/<user_id>/progress', methods=['POST'])
def api_achievements_progress(user_type, user_id):
    """
    Actualiza progreso.

    {metric, value}              → todos los logros de esa métrica
    {achievement_id, current_value} → un solo logro
    """
    invalid = _require_user_type(user_type)
    if invalid:
        return invalid
    data = _json_body()
    service = get_container().achievement_service

    if data.get('metric'):
        try:
            value = float(data.get('value'))
        except (TypeError, ValueError):
            return error_response('El valor debe ser numérico'), 400
        events = service.track_metric(user_id, user_type, data['metric'], value)
        return {'ok': True, 'unlocked': events}

    definition = get_achievement_by_id(data.get('achievement_id') or '')
    if definition is None or definition.user_type.value != user_type:
        return error_response('Logro no encontrado'), 404
    if not definition.criteria.is_numeric:
        return error_response('Este logro no se mide con un valor numérico'), 400
    if not service.conditions_met(user_id, user_type, definition):
        return error_response('Aún no cumples los requisitos de este logro',
                              conditions=definition.criteria.conditions), 400
    try:
        current = float(data.get('current_value'))
    except (TypeError, ValueError):
        return error_response('El valor debe ser numérico'), 400
    record = service.update_progress(
        user_id, user_type, definition.id, current, definition.criteria.target_value,
        lower_is_better=definition.criteria.metric in LOWER_IS_BETTER,
    )
    return {'ok': True, 'achievement': record}


@app.route('/api/achievements/<user_type>/<user_id>/seen', methods=['POST'])
def api_achievements_seen(user_type, user_id):
    invalid = _require_user_type(user_type)
    if invalid:
        return invalid
    service = get_container().achievement_service
    achievement_id = _json_body().get('achievement_id')
    if achievement_id:
        service.mark_as_seen(user_id, user_type, achievement_id)
    else:
        service.mark_all_as_seen(user_id, user_type)
    return {'ok': True, 'unseen_count': service.get_unseen_count(user_id, user_type)}


@app.route('/api/achievements/<user_type>/<user_id>/share', methods=['POST'])
def api_achievements_share(user_type, user_id):
    invalid = _require_user_type(user_type)
    if invalid:
        return invalid
    achievement_id = _json_body().get('achievement_id')
    if not achievement_id:
        return error_response('achievement_id es requerido'), 400
    record = get_container().achievement_service.record_share(user_id, user_type, achievement_id)
    return {'ok': True, 'achievement': record}


@app.route('/api/achievements/<user_type>/<user_id>/export', methods=['GET'])
def api_achievements_export(user_type, user_id):
    invalid = _require_user_type(user_type)
    if invalid:
        return invalid
    exported = get_container().achievement_service.export_data(user_id, user_type)
    if exported is None:
        return error_response('No hay logros guardados'), 404
    return {'ok': True, 'data': exported}, 200, CACHE_HEADERS['USER_DATA']


@app.route('/api/achievements/<user_type>/<user_id>/import', methods=['POST'])
def api_achievements_import(user_type, user_id):
    invalid = _require_user_type(user_type)
    if invalid:
        return invalid
    payload = _json_body().get('data')
    if not isinstance(payload, str):
        return error_response('data debe ser el JSON exportado'), 400
    if not get_container().achievement_service.import_data(user_id, user_type, payload):
        return error_response('No se pudieron importar los logros'), 400
    return {'ok': True, 'message': 'Logros importados'}


# ═══════════════════════════════════════════════════════════════════════════════
# ADMINISTRACIÓN Y PREFERENCIAS
# ═══════════════════════════════════════════════════════════════════════════════

@app.route('/api/admin/settings', methods=['GET', 'PUT'])
def api_admin_settings():
    settings_service = get_container().settings_service
    if request.method == 'PUT':
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return error_response(ERROR_MESSAGES['INVALID_REQUEST']), 400
        return _result(settings_service.save_settings(data, request.args.get('user_id')))
    return {'ok': True, 'settings': settings_service.get_settings()}, 200, CACHE_HEADERS['USER_DATA']


@app.route('/api/admin/settings/<section>', methods=['PATCH'])
def api_admin_settings_section(section):
    data = request.get_json(silent=True)
    result = get_container().settings_service.save_section(section, data, request.args.get('user_id'))
    return _result(result)


@app.route('/api/admin/settings/reset', methods=['POST'])
def api_admin_settings_reset():
    return _result(get_container().settings_service.reset_settings())


@app.route('/api/admin/settings/test-email', methods=['POST'])
def api_admin_settings_test_email():
    data = request.get_json(silent=True)
    email_settings = data if isinstance(data, dict) and data else None
    return _result(get_container().settings_service.test_email(email_settings))


@app.route('/api/admin/performance', methods=['GET'])
def api_admin_performance():
    return {
        'ok': True,
        'profiling': ENABLE_PROFILING,
        'functions': get_function_stats(),
        'logs': get_log_summary(),
    }, 200, CACHE_HEADERS['USER_DATA']


@app.route('/api/preferences/theme', methods=['GET', 'POST'])
def api_theme():
    user_id = _current_user_id()
    if not user_id:
        return error_response('user_id es requerido'), 400
    settings_service = get_container().settings_service
    if request.method == 'POST':
        theme = _json_body().get('theme')
        return _result(settings_service.set_theme(user_id, theme))
    return {'ok': True, 'theme': settings_service.get_theme(user_id)}


if __name__ == "__main__":
    import os
    # Servidor de desarrollo. En producción usar WSGI (gunicorn wsgi:app)
    DEBUG = os.environ.get('FLASK_DEBUG', '0') == '1'
    HOST = os.environ.get('FLASK_HOST', '0.0.0.0')
    PORT = int(os.environ.get('FLASK_PORT', 5000))

    if not DEBUG:
        print(f"\n{'='*50}")
        print(f"  Papalote Market API en http://{HOST}:{PORT}")
        print(f"  Datos en {config.get_data_dir()}")
        print(f"{'='*50}\n")

    app.run(host=HOST, port=PORT, debug=DEBUG)
