# -*- coding: utf-8 -*-
"""
Tests de checkout: envío, fechas de entrega, resumen y creación de pedidos.
"""
import re
from datetime import date

import pytest

from papalote.models.entities import CartItem
from papalote.services.checkout_service import (
    calculate_estimated_delivery,
    calculate_order_summary,
    calculate_shipping_cost,
    format_date_es,
    generate_order_id,
    generate_order_number,
)


@pytest.fixture
def checkout(container, request_ctx):
    return container.checkout_service


@pytest.mark.parametrize('subtotal, state, expected', [
    (999, 'Oaxaca', 150),
    (999, 'Chiapas', 200),
    (999, None, 150),
    (1000, 'Chiapas', 0),
    (2500, 'Ciudad de México', 0),
])
def test_shipping_cost(subtotal, state, expected):
    assert calculate_shipping_cost(subtotal, state) == expected


def test_format_date_es():
    assert format_date_es(date(2025, 1, 6)) == 'lunes, 6 de enero'
    assert format_date_es(date(2024, 12, 25)) == 'miércoles, 25 de diciembre'


def test_estimated_delivery():
    today = date(2025, 1, 6)
    assert calculate_estimated_delivery('Oaxaca', today) == 'sábado, 11 de enero - martes, 14 de enero'
    assert calculate_estimated_delivery('Yucatán', today) == 'lunes, 13 de enero - jueves, 16 de enero'


def test_order_summary():
    items = [CartItem(product_id='2', name='Plato', price=850, quantity=1)]
    summary = calculate_order_summary(items, 'Oaxaca', gift_wrap=True)
    assert summary['subtotal'] == 850
    assert summary['shipping_cost'] == 150
    assert summary['gift_wrap_fee'] == 50
    assert summary['total'] == 1050
    assert summary['amount_to_free_shipping'] == 150
    assert summary['item_count'] == 1

    free = calculate_order_summary(items * 2, 'Chiapas', discount=100)
    assert free['shipping_cost'] == 0
    assert free['total'] == 1600
    assert free['amount_to_free_shipping'] == 0


def test_summary_total_never_negative():
    items = [CartItem(product_id='8', name='Papel', price=180, quantity=1)]
    assert calculate_order_summary(items, 'Oaxaca', discount=1000)['total'] == 0


def test_identifiers():
    order_id = generate_order_id()
    assert order_id.startswith('ORD-')
    assert order_id == order_id.upper()
    assert re.match(r'^PM\d{4}-\d{4}$', generate_order_number())


def test_summary_with_coupon(container, checkout):
    container.cart_service.add_item('2', 1)
    result = checkout.get_summary(state='Chiapas', coupon_code='ENVIOGRATIS')
    assert result['coupon']['code'] == 'ENVIOGRATIS'
    assert result['summary']['shipping_cost'] == 200
    assert result['summary']['discount'] == 200
    assert result['summary']['total'] == 850

    invalid = checkout.get_summary(state='Chiapas', coupon_code='NOPE')
    assert invalid['coupon'] is None
    assert invalid['coupon_error'] == 'Cupón no válido o expirado'
    assert invalid['summary']['total'] == 1050


def test_place_order(container, checkout, checkout_data):
    container.cart_service.add_item('2', 1)
    result = checkout.place_order(checkout_data, buyer_id='buyer-1')

    assert result['ok']
    order = result['order']
    assert order['id'].startswith('ORD-')
    assert order['order_number'].startswith('PM')
    assert order['status'] == 'pending'
    assert order['payment_status'] == 'pending'
    assert order['subtotal'] == 850
    assert order['shipping_cost'] == 150
    assert order['total'] == 1000
    assert order['items'][0]['product_id'] == '2'
    assert order['shipping_address']['postal_code'] == '06000'
    assert order['estimated_delivery']

    assert container.order_repo.get_order(order['id']) == order
    assert container.cart_service.get_cart()['items'] == []

    unlocked = [e['achievement']['id'] for e in result['achievements']]
    assert unlocked == ['b-first-purchase']
    assert result['achievements'][0]['celebration_type'] == 'toast'


def test_place_order_with_coupon_and_gift(container, checkout, checkout_data):
    container.cart_service.add_item('2', 1)
    checkout_data.update(coupon_code='primera10', gift_wrap=True, gift_message='Para mamá')
    order = checkout.place_order(checkout_data)['order']
    assert order['coupon']['code'] == 'PRIMERA10'
    assert order['discount'] == 85
    assert order['gift_wrap_fee'] == 50
    assert order['is_gift'] is True
    assert order['total'] == 850 + 150 - 85 + 50
    assert order['buyer_id'] is None


def test_place_order_errors(container, checkout, checkout_data):
    assert checkout.place_order(checkout_data)['error'] == 'El carrito está vacío'

    container.cart_service.add_item('8', 1)
    invalid_coupon = checkout.place_order(dict(checkout_data, coupon_code='PRIMERA10'))
    assert invalid_coupon['errors'] == {
        'coupon_code': 'Este cupón requiere una compra mínima de $500 MXN'
    }

    no_terms = checkout.place_order(dict(checkout_data, accept_terms=False))
    assert no_terms['errors']['accept_terms'] == 'Debes aceptar los términos y condiciones'

    # El carrito sigue intacto tras un error
    assert container.cart_service.get_cart()['total_items'] == 1


def test_place_order_minimum_amount(container, checkout, checkout_data):
    container.settings_service.save_section('payments', {'min_order_amount': 1000})
    container.cart_service.add_item('2', 1)
    result = checkout.place_order(checkout_data)
    assert result == {'ok': False, 'error': 'El pedido mínimo es de $1000 MXN'}


def test_place_order_saves_address(container, checkout, checkout_data):
    container.cart_service.add_item('2', 1)
    checkout.place_order(dict(checkout_data, save_address=True))
    addresses = container.order_service.get_addresses()
    assert len(addresses) == 1
    assert addresses[0]['street'] == 'Av. Reforma'
