# ==============================================================================
# REPOSITORIO DE LOGROS
# ==============================================================================
# Encapsula el acceso a papalote_achievements.json
# Cada usuario ocupa una clave con espacio de nombres:
#   papalote_achievements_<tipo>_<userId>
# ==============================================================================

from typing import Any, Dict, List, Optional

from papalote.constants.achievements import STORAGE_PREFIX

from .base import DictRepository


def storage_key(user_type: str, user_id: str) -> str:
    """Clave namespaced de un usuario: papalote_achievements_buyer_u1."""
    return f"{STORAGE_PREFIX}{user_type}_{user_id}"


class AchievementRepository(DictRepository):
    """Datos de logros por usuario, guardados como blobs independientes."""

    def __init__(self, base_path: str):
        super().__init__(base_path, 'papalote_achievements')

    def load(self, user_type: str, user_id: str) -> Optional[Dict[str, Any]]:
        data = self.get_by_id(storage_key(user_type, user_id))
        return data if isinstance(data, dict) else None

    def save(self, user_type: str, user_id: str, data: Dict[str, Any]) -> None:
        self.update(storage_key(user_type, user_id), data)

    def remove(self, user_type: str, user_id: str) -> bool:
        return self.delete(storage_key(user_type, user_id)) is not None

    def keys(self) -> List[str]:
        return list(self.get_all().keys())
