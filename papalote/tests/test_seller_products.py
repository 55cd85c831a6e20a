# -*- coding: utf-8 -*-
"""
Tests de productos de vendedor: borradores, publicación y retiro.
"""
import pytest


@pytest.fixture
def seller(container):
    return container.seller_product_service


def test_save_draft_requires_seller(seller, product_data):
    assert seller.save_draft(product_data, '', 'Taller')['error'] == 'seller_id es requerido'


def test_draft_can_be_incomplete(seller):
    result = seller.save_draft({'name': 'ab'}, 'seller-1', 'Taller')
    assert result['ok']
    draft = result['product']
    assert draft['id'].startswith('PROD-')
    assert draft['id'] == draft['id'].upper()
    assert draft['status'] == 'draft'
    assert draft['seller_name'] == 'Taller'
    assert seller.get_counts('seller-1') == {'drafts': 1, 'published': 0}


def test_publish_validates_product(seller):
    draft = seller.save_draft({'name': 'ab'}, 'seller-1', 'Taller')['product']
    result = seller.publish(draft['id'])
    assert not result['ok']
    errors = result['errors']
    assert errors['name'] == 'El nombre debe tener al menos 3 caracteres'
    assert errors['description'] == 'Este campo es requerido'
    assert errors['images'] == 'Al menos una imagen es requerida'
    assert 'price' in errors
    # Sigue como borrador
    assert seller.get_draft(draft['id']) is not None

    assert seller.publish('PROD-NOPE')['not_found'] is True


def test_update_draft_keeps_created_at(seller, product_data):
    draft = seller.save_draft({'name': 'Jarrón'}, 'seller-1', 'Taller')['product']
    updated = seller.save_draft(product_data, 'seller-1', 'Taller', existing_id=draft['id'])['product']
    assert updated['id'] == draft['id']
    assert updated['created_at'] == draft['created_at']
    assert updated['name'] == 'Jarrón de Barro Rojo'
    assert len(seller.get_drafts('seller-1')) == 1


def test_publish_and_unpublish(container, seller, product_data):
    draft = seller.save_draft(product_data, 'seller-1', 'Taller Tzintzuntzan')['product']
    result = seller.publish(draft['id'])
    assert result['ok']
    published = result['product']
    assert published['status'] == 'published'
    assert published['published_at']
    assert result['achievements'] == []
    assert seller.get_counts('seller-1') == {'drafts': 0, 'published': 1}
    assert container.catalog_service.get_product(draft['id'])['price'] == 780

    assert seller.unpublish(draft['id'], 'otro')['not_found'] is True
    back = seller.unpublish(draft['id'], 'seller-1')
    assert back['ok']
    assert back['product']['status'] == 'draft'
    assert back['product']['created_at'] == draft['created_at']
    assert seller.get_counts('seller-1') == {'drafts': 1, 'published': 0}
    assert container.catalog_service.get_product(draft['id']) is None


def test_save_published_revalidates(seller, product_data):
    draft = seller.save_draft(product_data, 'seller-1', 'Taller')['product']
    seller.publish(draft['id'])

    invalid = seller.save_published({'id': draft['id'], 'price': -1})
    assert invalid['errors'] == {'price': 'El precio debe ser mayor a 0'}

    updated = seller.save_published({'id': draft['id'], 'price': 900, 'seller_id': 'intruso'})
    assert updated['ok']
    assert updated['product']['price'] == 900
    assert updated['product']['seller_id'] == 'seller-1'

    assert seller.save_published({'id': 'PROD-NOPE', 'price': 1})['not_found'] is True


def test_delete_product(seller, product_data):
    draft = seller.save_draft(product_data, 'seller-1', 'Taller')['product']
    other = seller.save_draft(product_data, 'seller-1', 'Taller')['product']
    seller.publish(other['id'])

    assert seller.delete_product(draft['id'], 'seller-2')['not_found'] is True
    assert seller.delete_product(draft['id'], 'seller-1')['ok']
    assert seller.delete_product(other['id'], 'seller-1')['ok']
    assert seller.get_all_seller_products('seller-1') == []


def test_publishing_tracks_catalog_achievement(container, seller, product_data):
    for _ in range(10):
        draft = seller.save_draft(product_data, 'seller-1', 'Taller')['product']
        result = seller.publish(draft['id'])
    assert [e['achievement']['id'] for e in result['achievements']] == ['s-products-10']
    assert container.achievement_service.is_unlocked('seller-1', 'seller', 's-products-10')
