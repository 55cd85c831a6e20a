# -*- coding: utf-8 -*-
"""
Tests del carrito en sesión.
"""
import pytest
from flask import session


@pytest.fixture
def cart(container, request_ctx):
    return container.cart_service


def test_empty_cart(cart):
    result = cart.get_cart()
    assert result == {'items': [], 'total_items': 0, 'total_monto': 0, 'items_count': 0}


def test_add_item_and_merge(cart):
    result = cart.add_item('1', 2)
    assert result['ok']
    assert result['producto']['subtotal'] == 5000
    assert result['carrito'] == {'total_items': 2, 'total_monto': 5000, 'items_count': 1}

    cart.add_item('1', 1)
    cart.add_item('2')
    state = cart.get_cart()
    assert state['items_count'] == 2
    assert state['total_items'] == 4
    assert state['total_monto'] == 2500 * 3 + 850
    assert cart.is_in_cart('1')
    assert state['items'][0]['image'] == '/images/productos/rebozo-seda.jpg'


def test_add_item_respects_stock(cart):
    result = cart.add_item('1', 6)
    assert not result['ok']
    assert result['error'] == 'Stock insuficiente. Disponible: 5'

    cart.add_item('1', 5)
    result = cart.add_item('1', 1)
    assert result['error'] == 'Stock insuficiente. Ya tienes 5 en carrito. Disponible: 5'
    assert result['disponible'] == 5


@pytest.mark.parametrize('product_id, quantity, error', [
    ('5', 1, 'Producto agotado'),
    ('999', 1, 'Producto no encontrado'),
    ('1', 0, 'Cantidad debe ser mayor a 0'),
    ('1', 'dos', 'Cantidad inválida'),
    ('', 1, 'ID de producto inválido'),
])
def test_add_item_errors(cart, product_id, quantity, error):
    result = cart.add_item(product_id, quantity)
    assert not result['ok']
    assert result['error'] == error
    assert cart.get_cart()['items'] == []


def test_update_quantity(cart):
    cart.add_item('2', 1)
    assert cart.update_quantity('2', 3)['carrito']['total_items'] == 3

    too_many = cart.update_quantity('2', 13)
    assert not too_many['ok']
    assert too_many['disponible'] == 12

    assert cart.update_quantity('3', 1)['error'] == 'El producto no está en el carrito'

    removed = cart.update_quantity('2', 0)
    assert removed['ok']
    assert not cart.is_in_cart('2')


def test_remove_and_clear(cart):
    cart.add_item('1')
    cart.add_item('2')
    cart.remove_item('1')
    assert [i['product_id'] for i in cart.get_cart()['items']] == ['2']

    result = cart.clear_cart()
    assert result['carrito']['total_items'] == 0
    assert cart.get_cart()['items'] == []


def test_corrupt_cart_is_reset(cart):
    session['carrito'] = 'no-es-lista'
    assert cart.get_cart()['items'] == []
    assert 'carrito' not in session
