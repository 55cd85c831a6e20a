# ==============================================================================
# SERVICIO DE VERIFICACIÓN DE VENDEDORES
# ==============================================================================
# Solicitudes para obtener el distintivo de artesano verificado. Un vendedor
# envía su solicitud (queda 'submitted') y el equipo de revisión cambia su
# estado. Al aprobarse se desbloquean los logros de verificación.
# ==============================================================================

import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from papalote.errors import StorageError, log_error
from papalote.models.entities import (
    UserType,
    VerificationLevel,
    VerificationRequest,
    VerificationStatus,
)
from papalote.repositories.interfaces import IVerificationRepository
from papalote.services.order_service import random_base36, to_base36
from papalote.validators import validate_verification_request

logger = logging.getLogger(__name__)

# Campos que el revisor puede modificar junto con el estado
_REVIEW_FIELDS = ('review_notes', 'rejection_reason')

_EMPTY_DOCUMENTS = {
    'craft_photos': [],
    'craft_videos': [],
    'workshop_photos': [],
    'certifications': [],
    'references': [],
    'awards': [],
}

_EMPTY_QUESTIONNAIRE = {
    'craft_type': [],
    'techniques': [],
    'years_of_experience': 0,
    'production_capacity': 'small',
    'location': {'state': '', 'city': '', 'has_physical_workshop': False},
}


def generate_verification_id() -> str:
    return f"VER-{to_base36(int(time.time() * 1000))}-{random_base36(4)}".upper()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class VerificationService:
    """Alta, consulta y revisión de solicitudes de verificación."""

    def __init__(self, verification_repo: IVerificationRepository, achievement_service=None):
        self.repo = verification_repo
        self.achievement_service = achievement_service

    def get_request(self, email: str) -> Optional[Dict[str, Any]]:
        return self.repo.get_by_email(email)

    def submit_request(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Registra una solicitud nueva (reemplaza la anterior del mismo correo).

        Returns:
            Dict con ok y la solicitud creada
        """
        validation = validate_verification_request(data)
        if not validation['ok']:
            return {'ok': False, 'error': 'Revisa los datos de la solicitud', 'errors': validation['errors']}
        form = validation['data']

        now = _now()
        request = VerificationRequest(
            id=generate_verification_id(),
            seller_id=form.seller_id,
            seller_name=form.seller_name,
            seller_email=form.seller_email,
            seller_type=form.seller_type,
            requested_level=form.requested_level,
            status=VerificationStatus.SUBMITTED,
            questionnaire=form.questionnaire or dict(_EMPTY_QUESTIONNAIRE),
            documents={k: list(v) for k, v in _EMPTY_DOCUMENTS.items()},
            created_at=now,
            submitted_at=now,
            updated_at=now,
        ).to_dict()

        try:
            self.repo.save_request(request)
        except StorageError as e:
            log_error('verificacion', e, op='submit', email=form.seller_email)
            return {'ok': False, 'error': 'No se pudo enviar la solicitud'}
        logger.info("[verificacion] solicitud %s de %s", request['id'], form.seller_email)
        return {'ok': True, 'request': request}

    def update_request(self, request_id: str, status: Any, updates: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Cambia el estado de una solicitud.

        Args:
            request_id: ID de la solicitud
            status: Nuevo estado (VerificationStatus)
            updates: review_notes / rejection_reason opcionales

        Returns:
            Dict con ok, message, la solicitud y los logros desbloqueados
        """
        existing = self.repo.find_request(request_id or '')
        if existing is None:
            return {'ok': False, 'error': 'Solicitud de verificación no encontrada', 'not_found': True}
        try:
            new_status = VerificationStatus(status)
        except ValueError:
            return {'ok': False, 'error': f'Estado inválido: {status}'}

        request = dict(existing)
        request.update({k: v for k, v in (updates or {}).items() if k in _REVIEW_FIELDS})
        request['status'] = new_status.value
        request['updated_at'] = _now()

        try:
            self.repo.save_request(request)
        except StorageError as e:
            log_error('verificacion', e, op='update', request_id=request_id)
            return {'ok': False, 'error': 'No se pudo actualizar la solicitud'}

        unlocked = []
        if new_status == VerificationStatus.APPROVED:
            unlocked = self._award_verification(request)
        return {
            'ok': True,
            'message': 'Solicitud de verificación actualizada',
            'request': request,
            'unlocked': unlocked,
        }

    def _award_verification(self, request: Dict[str, Any]) -> List[Dict[str, Any]]:
        if self.achievement_service is None or not request.get('seller_id'):
            return []
        seller_id = request['seller_id']
        events = self.achievement_service.award(seller_id, UserType.SELLER.value, 's-verified')
        if request.get('requested_level') == VerificationLevel.MASTER_ARTISAN.value:
            events += self.achievement_service.award(seller_id, UserType.SELLER.value, 's-master')
        return events
