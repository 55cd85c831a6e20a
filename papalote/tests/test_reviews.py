# -*- coding: utf-8 -*-
"""
Tests de reseñas de productos.
"""
import re

import pytest

from papalote.services.review_service import generate_review_id


@pytest.fixture
def reviews(container):
    return container.review_service


def test_generate_review_id():
    assert re.match(r'^REV-[0-9A-Z]+-[0-9A-Z]{4}$', generate_review_id())


def test_no_reviews_yet(reviews):
    assert reviews.get_reviews('3') == {'ok': True, 'reviews': [], 'count': 0, 'average_rating': None}
    assert reviews.get_reviews('999')['not_found']


def test_add_review_and_average(container, reviews):
    first = reviews.add_review('3', 'buyer-1', {'rating': 5, 'comment': 'Precioso, llegó muy bien empacado.'})
    assert first['ok']
    assert first['review']['product_id'] == '3'
    assert [e['achievement']['id'] for e in first['unlocked']] == ['b-first-review']

    reviews.add_review('3', 'buyer-2', {'rating': 4, 'comment': 'Muy bonito aunque tardó en llegar.', 'title': 'Bien'})
    result = reviews.get_reviews('3')
    assert result['count'] == 2
    assert result['average_rating'] == 4.5
    assert result['reviews'][0]['user_id'] == 'buyer-2'

    assert container.achievement_service.is_unlocked('buyer-1', 'buyer', 'b-first-review')


def test_add_review_errors(reviews):
    assert reviews.add_review('3', '', {})['error'] == 'user_id es requerido'
    assert reviews.add_review('999', 'buyer-1', {})['not_found']

    invalid = reviews.add_review('3', 'buyer-1', {'rating': 7, 'comment': 'corto'})
    assert invalid['error'] == 'Revisa los campos de la reseña'
    assert invalid['errors']['rating'] == 'Calificación máxima es 5'
    assert reviews.get_reviews('3')['count'] == 0
