# -*- coding: utf-8 -*-
"""
Fixtures compartidas.

Cada test corre con PAPALOTE_DATA_DIR apuntando a un tmp_path propio y un
contenedor de dependencias nuevo, así ningún test ve datos de otro.
"""
import pytest

from papalote.app_container import AppContainer, get_container
from papalote.main import app as flask_app


@pytest.fixture(autouse=True)
def data_dir(tmp_path, monkeypatch):
    monkeypatch.setenv('PAPALOTE_DATA_DIR', str(tmp_path))
    AppContainer.reset_instance()
    yield tmp_path
    AppContainer.reset_instance()


@pytest.fixture
def app():
    flask_app.config.update(TESTING=True)
    return flask_app


@pytest.fixture
def client(app):
    with app.test_client() as c:
        yield c


@pytest.fixture
def container(data_dir):
    return get_container()


@pytest.fixture
def request_ctx(app):
    """Contexto de petición para servicios que usan la sesión de Flask."""
    with app.test_request_context():
        yield


@pytest.fixture
def address_data():
    return {
        'first_name': 'María',
        'last_name': 'López García',
        'email': 'maria@example.com',
        'phone': '5512345678',
        'street': 'Av. Reforma',
        'street_number': '123',
        'apartment': '4B',
        'neighborhood': 'Centro',
        'city': 'Ciudad de México',
        'state': 'Ciudad de México',
        'postal_code': '06000',
        'references': 'Entre Juárez y Morelos',
    }


@pytest.fixture
def checkout_data(address_data):
    return {
        'shipping_address': address_data,
        'payment_method': 'card',
        'accept_terms': True,
        'save_address': False,
        'gift_wrap': False,
    }


@pytest.fixture
def product_data():
    return {
        'name': 'Jarrón de Barro Rojo',
        'description': 'Jarrón moldeado a mano y bruñido con piedra de río.',
        'price': 780,
        'category': 'Cerámica y Alfarería',
        'subcategory': 'Barro Rojo',
        'state': 'Michoacán',
        'maker': 'Taller Tzintzuntzan',
        'images': ['/images/productos/jarron-rojo.jpg'],
        'stock': 4,
        'materials': ['barro'],
        'tags': ['jarrón'],
    }
