# -*- coding: utf-8 -*-
"""
Tests de historias de artesanos (catálogo + editadas por vendedores).
"""
import pytest

from papalote.services.artisan_story_service import artisan_id_from_email


@pytest.fixture
def stories(container):
    return container.artisan_story_service


@pytest.fixture
def story_data():
    return {
        'artisan_name': 'Rosa Pérez',
        'specialty': 'Barro negro',
        'city': 'San Bartolo Coyotepec',
        'state': 'Oaxaca',
        'personal_story': 'Aprendí a bruñir el barro con mi abuela cuando tenía ocho años.',
        'workshop_photos': ['/images/talleres/rosa-1.jpg', '/images/talleres/rosa-2.jpg'],
        'product_ids': ['3'],
    }


def test_artisan_id_from_email():
    assert artisan_id_from_email(' Rosa.Perez@Correo.MX ') == 'rosa.perez'
    assert artisan_id_from_email('') == ''


def test_catalog_stories(stories):
    assert [s['id'] for s in stories.get_stories()] == ['story-1', 'story-2', 'story-3']
    assert [s['id'] for s in stories.get_stories('Chiapas')] == ['story-2']
    assert stories.get_story('story-1')['artisan_name'] == 'Familia Jiménez'
    assert stories.get_story('nope') is None


def test_create_story(container, stories, story_data):
    result = stories.save_story('rosa', story_data, seller_id='s-rosa')
    assert result['ok']
    assert result['created']
    assert result['message'] == 'Historia guardada exitosamente'

    story = result['story']
    assert story['id'] == 'story-rosa'
    assert story['craft'] == 'Barro negro'
    assert story['title'] == 'Barro negro de San Bartolo Coyotepec'
    assert story['image'] == '/images/talleres/rosa-1.jpg'
    assert story['product_ids'] == ['3']
    assert [e['achievement']['id'] for e in result['unlocked']] == ['s-story']

    assert [s['id'] for s in stories.get_stories('Oaxaca')] == ['story-1', 'story-3', 'story-rosa']
    assert stories.get_story('story-rosa')['artisan_name'] == 'Rosa Pérez'


def test_update_story(stories, story_data):
    stories.save_story('rosa', story_data, seller_id='s-rosa')
    result = stories.save_story('Rosa', dict(story_data, title='Manos de barro'), seller_id='s-rosa')
    assert result['ok']
    assert not result['created']
    assert result['unlocked'] == []
    assert stories.get_story('story-rosa')['title'] == 'Manos de barro'
    assert len(stories.get_stories()) == 4


def test_saved_story_replaces_catalog_story(stories, story_data):
    stories.save_story('1', dict(story_data, title='Nueva versión'))
    all_stories = stories.get_stories()
    assert len(all_stories) == 3
    assert all_stories[0]['title'] == 'Nueva versión'


def test_save_story_errors(stories, story_data):
    assert stories.save_story('', story_data)['error'] == 'artisan_id es requerido'

    result = stories.save_story('rosa', dict(story_data, personal_story='  '))
    assert result['error'] == 'Por favor completa los campos requeridos'
    assert result['errors'] == {'personal_story': 'Por favor escribe tu historia'}
    assert stories.get_story('story-rosa') is None
