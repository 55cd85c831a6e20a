# ==============================================================================
# REPOSITORIO DE SOLICITUDES DE VERIFICACIÓN
# ==============================================================================
# Encapsula el acceso a papalote-verification-requests.json
# Formato: {"correo@ejemplo.com": {id, seller_id, status, ...}}
# Una solicitud por correo; enviar otra reemplaza la anterior.
# ==============================================================================

from typing import Any, Dict, Optional

from .base import DictRepository

VERIFICATION_KEY = 'papalote-verification-requests'


class VerificationRepository(DictRepository):
    """Solicitudes de verificación indexadas por correo del vendedor."""

    def __init__(self, base_path: str):
        super().__init__(base_path, VERIFICATION_KEY)

    @staticmethod
    def _email_key(email: str) -> str:
        return (email or '').strip().lower()

    def get_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        return self.get_by_id(self._email_key(email))

    def find_request(self, request_id: str) -> Optional[Dict[str, Any]]:
        """Busca una solicitud por su id en todos los correos."""
        for request in self.get_all().values():
            if isinstance(request, dict) and request.get('id') == request_id:
                return request
        return None

    def save_request(self, request: Dict[str, Any]) -> None:
        self.update(self._email_key(request.get('seller_email')), request)
