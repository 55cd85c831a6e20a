# ==============================================================================
# REPOSITORIO DE CONFIGURACIÓN DE LA PLATAFORMA
# ==============================================================================
# Encapsula el acceso a papalote_platform_settings.json
# El archivo guarda un único objeto con secciones (general, payments, ...)
# más metadatos updated_at / updated_by / version.
# ==============================================================================

from typing import Any, Dict, Optional

from .base import DictRepository

SETTINGS_KEY = 'papalote_platform_settings'


class SettingsRepository(DictRepository):
    """
    Blob de configuración de la plataforma.

    load() devuelve None si nunca se guardó, para que el servicio aplique
    los valores por defecto.
    """

    def __init__(self, base_path: str):
        super().__init__(base_path, SETTINGS_KEY)

    def load(self) -> Optional[Dict[str, Any]]:
        if not self.exists():
            return None
        data = self.get_all()
        return data or None

    def save(self, settings: Dict[str, Any]) -> None:
        self.save_all(settings)

    def reset(self) -> bool:
        """Elimina la configuración guardada (vuelve a los defaults)."""
        return self.clear()
