# -*- coding: utf-8 -*-
"""
Tests de solicitudes de verificación de vendedores.
"""
import pytest


@pytest.fixture
def verification(container):
    return container.verification_service


@pytest.fixture
def request_data():
    return {
        'seller_id': 's-mendoza',
        'seller_name': 'Taller Mendoza',
        'seller_email': 'Taller@Mendoza.mx',
        'seller_type': 'individual',
        'requested_level': 'verified_artisan',
    }


def test_no_request(verification):
    assert verification.get_request('nadie@correo.mx') is None


def test_submit_request(verification, request_data):
    result = verification.submit_request(request_data)
    assert result['ok']
    request = result['request']
    assert request['id'].startswith('VER-')
    assert request['status'] == 'submitted'
    assert request['seller_email'] == 'taller@mendoza.mx'
    assert request['submitted_at'] == request['created_at']
    assert request['documents']['craft_photos'] == []

    assert verification.get_request('TALLER@mendoza.mx')['id'] == request['id']


def test_submit_invalid(verification, request_data):
    result = verification.submit_request(dict(request_data, seller_type='gobierno'))
    assert not result['ok']
    assert result['error'] == 'Revisa los datos de la solicitud'
    assert result['errors']['seller_type'] == 'Valor no permitido'


def test_update_request(container, verification, request_data):
    request_id = verification.submit_request(request_data)['request']['id']

    result = verification.update_request(request_id, 'rejected', {
        'rejection_reason': 'Faltan fotos del taller',
        'status': 'approved',
        'seller_id': 'otro',
    })
    assert result['ok']
    assert result['message'] == 'Solicitud de verificación actualizada'
    assert result['request']['status'] == 'rejected'
    assert result['request']['rejection_reason'] == 'Faltan fotos del taller'
    assert result['request']['seller_id'] == 's-mendoza'
    assert result['unlocked'] == []

    approved = verification.update_request(request_id, 'approved', {'review_notes': 'Todo en orden'})
    assert [e['achievement']['id'] for e in approved['unlocked']] == ['s-verified']
    assert verification.get_request('taller@mendoza.mx')['status'] == 'approved'
    assert container.achievement_service.is_unlocked('s-mendoza', 'seller', 's-verified')


def test_master_artisan_approval(verification, request_data):
    data = dict(request_data, requested_level='master_artisan')
    request_id = verification.submit_request(data)['request']['id']
    result = verification.update_request(request_id, 'approved')
    assert [e['achievement']['id'] for e in result['unlocked']] == ['s-verified', 's-master']


def test_update_errors(verification, request_data):
    missing = verification.update_request('VER-NOPE', 'approved')
    assert missing == {'ok': False, 'error': 'Solicitud de verificación no encontrada', 'not_found': True}

    request_id = verification.submit_request(request_data)['request']['id']
    assert verification.update_request(request_id, 'perdida')['error'] == 'Estado inválido: perdida'
