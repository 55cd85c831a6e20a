# -*- coding: utf-8 -*-
"""
Tests de búsqueda difusa, sugerencias e historial de búsquedas.
"""
import pytest
from flask import session

from papalote.services.search_service import (
    MAX_HISTORY_ITEMS,
    SearchHistoryService,
    fuzzy_match,
    get_search_suggestions,
    levenshtein_distance,
    search_products,
)


@pytest.fixture
def products(container):
    return container.catalog_service.get_all_products()


def test_levenshtein_distance():
    assert levenshtein_distance('kitten', 'sitting') == 3
    assert levenshtein_distance('', 'abc') == 3
    assert levenshtein_distance('barro', 'barro') == 0
    assert levenshtein_distance('rebozo', 'rebzo') == 1


def test_fuzzy_match_tiers():
    assert fuzzy_match('Alebrije Jaguar', 'alebrije jaguar') == 1
    # Subcadena: 0.8 más un bono por posición
    assert fuzzy_match('Alebrije Jaguar', 'jaguar') == pytest.approx(0.8 + (1 - 9 / 15) * 0.1)
    assert fuzzy_match('Jaguar', 'jag') == pytest.approx(0.9)
    # Cada palabra es prefijo
    assert fuzzy_match('Rebozo de Seda', 'reb sed') == 0.7
    # Error de escritura
    assert fuzzy_match('Rebozo', 'rebzo') == pytest.approx((1 - 1 / 6) * 0.5)


def test_fuzzy_match_no_match():
    assert fuzzy_match('', 'barro') == 0
    assert fuzzy_match('Barro', '') == 0
    assert fuzzy_match('Huipil', 'zz') == 0
    assert fuzzy_match('Huipil', 'xqwzkvbnmty') == 0


def test_search_products_ranks_by_score(products):
    results = search_products(products, 'jaguar')
    ids = [r['product']['id'] for r in results]
    assert ids[0] == '3'
    assert '11' in ids
    first = results[0]
    assert set(first) == {'product', 'score', 'matched_fields'}
    assert 'name' in first['matched_fields']
    assert 'tags' in first['matched_fields']
    scores = [r['score'] for r in results]
    assert scores == sorted(scores, reverse=True)


def test_search_products_tolerates_typos(products):
    results = search_products(products, 'alebrje', min_score=0.1)
    assert results[0]['product']['id'] == '3'


def test_search_products_empty_query_and_limit(products):
    assert search_products(products, '   ') == []
    assert len(search_products(products, 'a', limit=3, min_score=0)) <= 3


def test_search_list_fields_count_once():
    products = [{
        'id': 'x', 'name': 'Canasta', 'category': '', 'maker': '', 'state': '',
        'description': '', 'materials': ['palma', 'palma teñida'], 'tags': [],
        'verified': False, 'featured': False, 'in_stock': False,
    }]
    result = search_products(products, 'palma', min_score=0)
    assert result[0]['matched_fields'] == ['materials']
    assert result[0]['score'] == pytest.approx(0.1)


def test_search_suggestions(products):
    suggestions = get_search_suggestions(products, 'ja')
    assert suggestions[:2] == ['Jalisco', 'Jarra de Vidrio Soplado']
    assert len(suggestions) == 5
    assert len(suggestions) == len(set(suggestions))
    assert get_search_suggestions(products, 'j') == []
    assert get_search_suggestions(products, '  ') == []


def test_search_history(request_ctx):
    history = SearchHistoryService()
    assert history.get_history() == []

    history.add('Rebozo')
    history.add('  barro negro ')
    history.add('rebozo')
    entries = history.get_history()
    assert [h['query'] for h in entries] == ['rebozo', 'barro negro']
    assert all('timestamp' in h for h in entries)

    history.add('')
    assert len(history.get_history()) == 2

    history.remove('BARRO NEGRO')
    assert [h['query'] for h in history.get_history()] == ['rebozo']

    history.clear()
    assert history.get_history() == []
    assert 'busquedas' not in session


def test_search_history_is_bounded(request_ctx):
    history = SearchHistoryService()
    for i in range(MAX_HISTORY_ITEMS + 5):
        history.add(f'busqueda {i}')
    entries = history.get_history()
    assert len(entries) == MAX_HISTORY_ITEMS
    assert entries[0]['query'] == f'busqueda {MAX_HISTORY_ITEMS + 4}'
