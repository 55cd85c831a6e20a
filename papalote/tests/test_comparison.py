# -*- coding: utf-8 -*-
"""
Tests de la comparación de productos en sesión.
"""
import pytest
from flask import session


@pytest.fixture
def compare(container, request_ctx):
    return container.comparison_service


def test_empty_comparison(compare):
    state = compare.get_comparison()
    assert state['products'] == []
    assert state['is_empty']
    assert state['can_add']
    assert not state['can_compare']


def test_add_and_flags(compare):
    result = compare.add('1')
    assert result['ok']
    assert result['count'] == 1
    assert not result['can_compare']

    result = compare.add('3')
    assert [p['id'] for p in result['products']] == ['1', '3']
    assert result['can_compare']
    assert compare.is_comparing('3')
    assert session['comparar'] == ['1', '3']


def test_add_errors(compare):
    missing = compare.add('999')
    assert missing == {'ok': False, 'error': 'Producto no encontrado', 'not_found': True}

    compare.add('1')
    assert compare.add('1')['error'] == 'El producto ya está en la comparación'


def test_max_products(compare):
    for product_id in ('1', '2', '3', '4'):
        compare.add(product_id)
    assert compare.get_comparison()['is_full']

    result = compare.add('6')
    assert not result['ok']
    assert result['limit_reached']
    assert result['error'] == 'Solo puedes comparar hasta 4 productos'


def test_toggle_remove_clear(compare):
    assert compare.toggle('2')['count'] == 1
    assert compare.toggle('2')['count'] == 0

    compare.add('1')
    compare.add('2')
    assert [p['id'] for p in compare.remove('1')['products']] == ['2']
    assert compare.clear()['is_empty']
    assert 'comparar' not in session


def test_unknown_ids_are_dropped(compare):
    session['comparar'] = ['1', 'borrado']
    assert [p['id'] for p in compare.get_comparison()['products']] == ['1']

    session['comparar'] = 'roto'
    assert compare.get_comparison()['is_empty']
