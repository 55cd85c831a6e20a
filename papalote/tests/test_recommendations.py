# -*- coding: utf-8 -*-
"""
Tests de recomendaciones y productos vistos recientemente.
"""
import pytest

from papalote.services.recommendation_service import (
    MAX_RECENTLY_VIEWED,
    get_cross_category_recommendations,
    get_recommended_products,
)


@pytest.fixture
def products(container):
    return container.catalog_service.get_all_products()


def by_id(products, product_id):
    return next(p for p in products if p['id'] == product_id)


def test_recommended_excludes_self_and_out_of_stock(products):
    current = by_id(products, '3')
    result = get_recommended_products(current, products, limit=20)
    ids = [p['id'] for p in result]
    assert '3' not in ids
    assert '5' not in ids
    assert len(ids) == 10


def test_recommended_prefers_shared_attributes(products):
    # Misma categoría, material compartido y precio similar
    result = get_recommended_products(by_id(products, '3'), products)
    assert result[0]['id'] == '11'
    assert len(result) == 4


def test_cross_category_requires_positive_score(products):
    current = by_id(products, '3')
    result = get_cross_category_recommendations(current, products, limit=20)
    ids = [p['id'] for p in result]
    assert '11' not in ids
    assert '5' not in ids
    # Sin atributos en común con el alebrije
    assert '8' not in ids
    assert '4' not in ids
    assert ids[0] == '1'
    assert all(p['category'] != current['category'] for p in result)


def test_recently_viewed(container, request_ctx):
    service = container.recommendation_service
    for product_id in ('1', '5', '2', '1'):
        service.record_view(product_id)
    assert service.get_recently_viewed_ids() == ['1', '2', '5']

    products = container.catalog_service.get_all_products()
    viewed = service.get_recently_viewed('2', products)
    # El agotado (5) no se muestra
    assert [p['id'] for p in viewed] == ['1']

    service.clear_recently_viewed()
    assert service.get_recently_viewed_ids() == []


def test_recently_viewed_is_bounded(container, request_ctx):
    service = container.recommendation_service
    for i in range(1, 13):
        service.record_view(str(i))
    ids = service.get_recently_viewed_ids()
    assert len(ids) == MAX_RECENTLY_VIEWED
    assert ids[0] == '12'


def test_combined_recommendations(container, request_ctx):
    service = container.recommendation_service
    service.record_view('7')
    result = service.get_combined('3')
    assert result['ok']
    assert [p['id'] for p in result['similar']][0] == '11'
    assert [p['id'] for p in result['recently_viewed']] == ['7']

    missing = service.get_combined('no-existe')
    assert missing['ok'] is False
