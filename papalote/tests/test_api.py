# -*- coding: utf-8 -*-
"""
Tests de las rutas HTTP con el cliente de pruebas de Flask.
"""
import pytest


def test_products_listing(client):
    response = client.get('/api/products')
    assert response.status_code == 200
    data = response.get_json()
    assert data['ok']
    assert data['pagination']['total'] == 12
    assert data['price_bounds'] == {'min': 100, 'max': 3200}
    assert response.headers['Cache-Control'] == 'public, max-age=60, s-maxage=60, stale-while-revalidate=300'


def test_products_filters_from_query(client):
    data = client.get('/api/products', query_string={'categoria': 'Joyería', 'ordenar': 'price-asc'}).get_json()
    assert [p['id'] for p in data['products']] == ['4', '12']
    assert data['active_filter_count'] == 1

    page = client.get('/api/products?por_pagina=5&pagina=3').get_json()
    assert len(page['products']) == 2
    assert page['pagination']['page'] == 3


def test_security_headers(client):
    response = client.get('/api/products')
    assert response.headers['X-Frame-Options'] == 'DENY'
    assert response.headers['X-Content-Type-Options'] == 'nosniff'
    assert 'Strict-Transport-Security' not in response.headers


def test_product_detail_and_recommendations(client):
    data = client.get('/api/products/3').get_json()
    assert data['product']['name'] == 'Alebrije Jaguar'

    client.get('/api/products/7')
    recommendations = client.get('/api/products/3/recommendations?limite=2').get_json()
    assert len(recommendations['similar']) == 2
    assert [p['id'] for p in recommendations['recently_viewed']] == ['7']

    missing = client.get('/api/products/999')
    assert missing.status_code == 404
    assert missing.get_json() == {'ok': False, 'error': 'Producto no encontrado'}
    assert client.get('/api/products/999/recommendations').status_code == 404


def test_artisan_stories(client):
    response = client.get('/api/artisan-stories?estado=Oaxaca')
    stories = response.get_json()['stories']
    assert len(stories) == 2
    assert all(s['state'] == 'Oaxaca' for s in stories)
    assert 'max-age=3600' in response.headers['Cache-Control']


def test_search_and_history(client):
    data = client.get('/api/search?q=jaguar').get_json()
    assert data['query'] == 'jaguar'
    assert data['total'] == len(data['results'])
    assert data['results'][0]['product']['id'] == '3'

    client.get('/api/search?q=rebozo')
    history = client.get('/api/search/history').get_json()['history']
    assert [h['query'] for h in history] == ['rebozo', 'jaguar']

    remaining = client.delete('/api/search/history?q=rebozo').get_json()['history']
    assert [h['query'] for h in remaining] == ['jaguar']
    client.delete('/api/search/history')
    assert client.get('/api/search/history').get_json()['history'] == []

    # Consultas vacías no se guardan
    client.get('/api/search?q=')
    assert client.get('/api/search/history').get_json()['history'] == []


def test_search_suggestions(client):
    data = client.get('/api/search/suggestions?q=ja&limite=2').get_json()
    assert data['suggestions'] == ['Jalisco', 'hojalata']


def test_cart_flow(client):
    assert client.post('/api/cart/add', json={}).status_code == 400
    assert client.post('/api/cart/add', json={'product_id': '999'}).status_code == 404
    assert client.post('/api/cart/add', json={'product_id': '5'}).status_code == 400

    added = client.post('/api/cart/add', json={'product_id': '2', 'quantity': 2})
    assert added.status_code == 200
    assert added.get_json()['carrito']['total_monto'] == 1700

    client.post('/api/cart/update', json={'product_id': '2', 'quantity': 1})
    cart = client.get('/api/cart')
    assert cart.get_json()['total_monto'] == 850
    assert cart.headers['Cache-Control'] == 'no-store, no-cache, must-revalidate'

    client.post('/api/cart/remove', json={'product_id': '2'})
    assert client.get('/api/cart').get_json()['items'] == []


def test_coupon_preview_uses_cart(client):
    client.post('/api/cart/add', json={'product_id': '2'})
    data = client.post('/api/coupons/validate', json={'code': 'primera10'}).get_json()
    assert data['coupon']['discount_amount'] == 85

    shipping = client.post('/api/coupons/validate', json={'code': 'ENVIOGRATIS', 'state': 'Chiapas'})
    assert shipping.get_json()['coupon']['discount_amount'] == 200

    invalid = client.post('/api/coupons/validate', json={'code': 'PRIMERA10', 'subtotal': 100})
    assert invalid.status_code == 400
    assert client.post('/api/coupons/validate', json={'code': 'X', 'subtotal': 'abc'}).status_code == 400


def test_checkout_and_orders(client, checkout_data):
    client.post('/api/cart/add', json={'product_id': '2'})
    summary = client.post('/api/checkout/summary', json={'state': 'Ciudad de México'}).get_json()
    assert summary['summary']['total'] == 1000

    assert client.post('/api/checkout', json={}).status_code == 400

    response = client.post('/api/checkout', json=dict(checkout_data, user_id='buyer-9'))
    assert response.status_code == 201
    order = response.get_json()['order']
    assert order['buyer_id'] == 'buyer-9'

    orders = client.get('/api/orders?buyer_id=buyer-9').get_json()
    assert orders['total'] == 1

    by_number = client.get(f"/api/orders/{order['order_number']}").get_json()
    assert by_number['order']['id'] == order['id']
    assert client.get('/api/orders/ORD-NOPE').status_code == 404

    assert client.post(f"/api/orders/{order['id']}/status", json={}).status_code == 400
    confirmed = client.post(f"/api/orders/{order['id']}/status", json={'status': 'confirmed'})
    assert confirmed.get_json()['order']['status'] == 'confirmed'
    assert client.post(f"/api/orders/{order['id']}/status", json={'status': 'delivered'}).status_code == 400
    assert client.post('/api/orders/ORD-NOPE/status', json={'status': 'confirmed'}).status_code == 404

    achievements = client.get('/api/achievements/buyer/buyer-9').get_json()['summary']
    assert achievements['total_unlocked'] == 1


def test_checkout_validation_errors(client, checkout_data):
    client.post('/api/cart/add', json={'product_id': '2'})
    response = client.post('/api/checkout', json=dict(checkout_data, payment_method='bitcoin'))
    assert response.status_code == 400
    assert response.get_json()['errors']['payment_method'] == 'Selecciona un método de pago válido'


def test_addresses(client, address_data):
    created = client.post('/api/addresses', json=address_data)
    assert created.status_code == 201
    address_id = created.get_json()['address']['id']

    data = client.get('/api/addresses').get_json()
    assert len(data['addresses']) == 1
    assert data['default']['id'] == address_id

    assert client.post('/api/addresses', json={}).status_code == 400
    assert client.delete(f'/api/addresses/{address_id}').status_code == 200
    assert client.delete(f'/api/addresses/{address_id}').status_code == 404


def test_seller_products_flow(client, product_data):
    assert client.get('/api/seller/products').status_code == 400

    created = client.post('/api/seller/products', json={
        'seller_id': 'seller-1', 'seller_name': 'Taller Tzintzuntzan', 'product': {'name': 'Jarrón'},
    })
    assert created.status_code == 201
    product_id = created.get_json()['product']['id']

    incomplete = client.post(f'/api/seller/products/{product_id}/publish')
    assert incomplete.status_code == 400
    assert 'images' in incomplete.get_json()['errors']

    updated = client.put('/api/seller/products', json={
        'seller_id': 'seller-1', 'seller_name': 'Taller Tzintzuntzan',
        'product': dict(product_data, id=product_id),
    })
    assert updated.status_code == 200

    assert client.post(f'/api/seller/products/{product_id}/publish').status_code == 200
    listing = client.get('/api/seller/products?seller_id=seller-1&status=published').get_json()
    assert [p['id'] for p in listing['products']] == [product_id]
    assert listing['counts'] == {'drafts': 0, 'published': 1}

    catalog = client.get('/api/products', query_string={'estado': 'Michoacán'}).get_json()
    assert [p['id'] for p in catalog['products']] == [product_id]

    # PUT sobre un publicado revalida y guarda
    repriced = client.put('/api/seller/products', json={'product': {'id': product_id, 'price': 820}})
    assert repriced.get_json()['product']['price'] == 820

    assert client.post(f'/api/seller/products/{product_id}/unpublish').status_code == 400
    assert client.post(f'/api/seller/products/{product_id}/unpublish?seller_id=seller-1').status_code == 200
    deleted = client.delete(f'/api/seller/products?seller_id=seller-1&id={product_id}')
    assert deleted.status_code == 200


def test_seller_orders(client, checkout_data):
    client.post('/api/cart/add', json={'product_id': '1'})
    order = client.post('/api/checkout', json=checkout_data).get_json()['order']

    assert client.get('/api/seller/orders').status_code == 400
    dashboard = client.get('/api/seller/orders', query_string={'seller_name': 'Taller Mendoza'}).get_json()
    assert dashboard['nuevos'] == 1
    assert dashboard['orders'][0]['id'] == order['id']

    seen = client.post('/api/seller/orders/seen', json={'seller_name': 'Taller Mendoza'})
    assert seen.get_json() == {'ok': True, 'nuevos': 0}


def test_achievement_routes(client):
    assert client.get('/api/achievements/admin/u1').status_code == 400
    assert client.get('/api/achievements/seller/s1/export').status_code == 404

    progress = client.post('/api/achievements/seller/s1/progress', json={'metric': 'sales_count', 'value': 1})
    assert [e['achievement']['id'] for e in progress.get_json()['unlocked']] == ['s-first-sale']

    single = client.post('/api/achievements/seller/s1/progress',
                         json={'achievement_id': 's-revenue-5k', 'current_value': 2500})
    assert single.get_json()['achievement']['progress'] == 50

    wrong_type = client.post('/api/achievements/buyer/s1/progress',
                             json={'achievement_id': 's-revenue-5k', 'current_value': 1})
    assert wrong_type.status_code == 404
    not_numeric = client.post('/api/achievements/seller/s1/progress',
                              json={'achievement_id': 's-story', 'current_value': 1})
    assert not_numeric.status_code == 400
    few_sales = client.post('/api/achievements/seller/s1/progress',
                            json={'achievement_id': 's-zero-returns', 'current_value': 0})
    assert few_sales.status_code == 400
    assert few_sales.get_json()['conditions'] == {'min_sales': 50}

    assert client.post('/api/achievements/seller/s1/seen', json={}).get_json()['unseen_count'] == 0
    assert client.post('/api/achievements/seller/s1/share', json={}).status_code == 400
    shared = client.post('/api/achievements/seller/s1/share', json={'achievement_id': 's-first-sale'})
    assert shared.get_json()['achievement']['share_count'] == 1

    exported = client.get('/api/achievements/seller/s1/export').get_json()['data']
    imported = client.post('/api/achievements/seller/s2/import', json={'data': exported})
    assert imported.status_code == 200
    assert client.post('/api/achievements/seller/s2/import', json={'data': 5}).status_code == 400

    summary = client.get('/api/seller/achievements?seller_id=s2').get_json()['summary']
    assert summary['total_unlocked'] == 1


def test_admin_settings_and_maintenance(client):
    settings = client.get('/api/admin/settings').get_json()['settings']
    assert settings['general']['site_name'] == 'Papalote Market'

    bad = client.patch('/api/admin/settings/payments', json={'platform_commission': 200})
    assert bad.status_code == 400

    saved = client.put('/api/admin/settings?user_id=admin-1', json={'general': {'maintenance_mode': True}})
    assert saved.status_code == 200

    blocked = client.get('/api/products')
    assert blocked.status_code == 503
    assert blocked.get_json()['maintenance'] is True
    # El panel de administración sigue disponible
    assert client.get('/api/admin/settings').status_code == 200

    assert client.post('/api/admin/settings/reset').status_code == 200
    assert client.get('/api/products').status_code == 200


def test_admin_test_email_and_performance(client):
    assert client.post('/api/admin/settings/test-email').status_code == 200
    assert client.post('/api/admin/settings/test-email', json={'smtp_host': ''}).status_code == 400

    data = client.get('/api/admin/performance').get_json()
    assert data['ok']
    assert set(data['logs']) == {'performance', 'slow_routes', 'slow_functions'}


def test_theme_preference(client):
    assert client.get('/api/preferences/theme').status_code == 400
    saved = client.post('/api/preferences/theme', json={'user_id': 'u1', 'theme': 'dark'})
    assert saved.get_json() == {'ok': True, 'theme': 'dark'}
    # El user_id queda en la sesión
    assert client.get('/api/preferences/theme').get_json()['theme'] == 'dark'


@pytest.mark.parametrize('method, path, status', [
    ('get', '/api/no-existe', 404),
    ('delete', '/api/cart', 405),
])
def test_json_errors(client, method, path, status):
    response = getattr(client, method)(path)
    assert response.status_code == status
    assert response.get_json()['ok'] is False


def test_review_routes(client):
    assert client.get('/api/products/999/reviews').status_code == 404

    created = client.post('/api/products/3/reviews',
                          json={'user_id': 'buyer-7', 'rating': 5, 'comment': 'Hermoso trabajo de talla.'})
    assert created.status_code == 201
    assert created.get_json()['review']['user_id'] == 'buyer-7'

    # El usuario queda en sesión para la siguiente reseña
    second = client.post('/api/products/3/reviews', json={'rating': 3, 'comment': 'Bonito pero pequeño.'})
    assert second.get_json()['review']['user_id'] == 'buyer-7'

    data = client.get('/api/products/3/reviews').get_json()
    assert data['count'] == 2
    assert data['average_rating'] == 4.0

    invalid = client.post('/api/products/3/reviews', json={'rating': 9, 'comment': 'x'})
    assert invalid.status_code == 400
    assert 'rating' in invalid.get_json()['errors']


def test_artisan_story_routes(client):
    payload = {
        'email': 'rosa@barro.mx',
        'seller_id': 's-rosa',
        'artisan_name': 'Rosa Pérez',
        'specialty': 'Barro negro',
        'city': 'San Bartolo Coyotepec',
        'state': 'Oaxaca',
        'personal_story': 'Aprendí a bruñir el barro con mi abuela.',
    }
    created = client.post('/api/artisan-stories', json=payload)
    assert created.status_code == 201
    body = created.get_json()
    assert body['story']['id'] == 'story-rosa'
    assert [e['achievement']['id'] for e in body['unlocked']] == ['s-story']

    updated = client.post('/api/artisan-stories', json=dict(payload, title='Manos de barro'))
    assert updated.status_code == 200
    assert not updated.get_json()['created']

    assert client.get('/api/artisan-stories/story-rosa').get_json()['story']['title'] == 'Manos de barro'
    assert client.get('/api/artisan-stories/nope').status_code == 404
    assert len(client.get('/api/artisan-stories?estado=Oaxaca').get_json()['stories']) == 3

    invalid = client.post('/api/artisan-stories', json={'email': 'rosa@barro.mx'})
    assert invalid.status_code == 400
    assert invalid.get_json()['errors']['specialty'] == 'Este campo es requerido'
    assert client.post('/api/artisan-stories', json=dict(payload, email='')).status_code == 400


def test_compare_routes(client):
    assert client.get('/api/compare').get_json()['is_empty']

    client.post('/api/compare/add', json={'product_id': '1'})
    added = client.post('/api/compare/add', json={'product_id': '3'}).get_json()
    assert added['can_compare']

    assert client.post('/api/compare/add', json={'product_id': '999'}).status_code == 404
    assert client.post('/api/compare/add', json={'product_id': '1'}).status_code == 400
    assert client.post('/api/compare/add', json={}).status_code == 400
    assert client.post('/api/compare/swap', json={'product_id': '1'}).status_code == 404

    toggled = client.post('/api/compare/toggle', json={'product_id': '3'}).get_json()
    assert [p['id'] for p in toggled['products']] == ['1']
    removed = client.post('/api/compare/remove', json={'product_id': '1'}).get_json()
    assert removed['is_empty']

    client.post('/api/compare/add', json={'product_id': '2'})
    assert client.delete('/api/compare').get_json()['count'] == 0


def test_verification_routes(client):
    assert client.get('/api/seller/verification').status_code == 400
    assert client.get('/api/seller/verification?email=x@y.mx').get_json() == {'ok': True, 'request': None}

    submitted = client.post('/api/seller/verification', json={
        'seller_id': 's-mendoza',
        'seller_name': 'Taller Mendoza',
        'seller_email': 'taller@mendoza.mx',
        'seller_type': 'company',
        'requested_level': 'certified_workshop',
    })
    assert submitted.status_code == 201
    request_id = submitted.get_json()['request']['id']

    current = client.get('/api/seller/verification?email=taller@mendoza.mx').get_json()['request']
    assert current['status'] == 'submitted'

    assert client.post('/api/seller/verification', json={}).status_code == 400
    assert client.patch('/api/seller/verification', json={'status': 'approved'}).status_code == 400
    missing = client.patch('/api/seller/verification', json={'id': 'VER-X', 'status': 'approved'})
    assert missing.status_code == 404

    reviewed = client.patch('/api/seller/verification',
                            json={'id': request_id, 'status': 'under_review', 'review_notes': 'En revisión'})
    assert reviewed.status_code == 200
    assert reviewed.get_json()['request']['review_notes'] == 'En revisión'
