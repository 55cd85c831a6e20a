# ==============================================================================
# REPOSITORIO DE PREFERENCIAS DE USUARIO
# ==============================================================================
# Encapsula todo el acceso a user_settings.json
# Almacena preferencias por usuario como el tema visual.
# ==============================================================================

from typing import Any, Dict

from .base import DictRepository

VALID_THEMES = ('light', 'dark', 'system')
DEFAULT_THEME = 'light'


class PreferencesRepository(DictRepository):
    """
    Repositorio para preferencias de usuario.

    Formato de datos en user_settings.json:
    {
        "buyer-1": {"theme": "dark"},
        "seller-7": {"theme": "system"}
    }
    """

    def __init__(self, base_path: str):
        super().__init__(base_path, 'user_settings')

    def get_user_settings(self, user_id: str) -> Dict[str, Any]:
        """
        Obtiene las preferencias de un usuario.

        Returns:
            Diccionario de preferencias (vacío si no existe)
        """
        settings = self.get_by_id(user_id)
        return settings if isinstance(settings, dict) else {}

    def get_setting(self, user_id: str, key: str, default: Any = None) -> Any:
        return self.get_user_settings(user_id).get(key, default)

    def set_setting(self, user_id: str, key: str, value: Any) -> None:
        with self._file_lock:
            user_settings = self.get_user_settings(user_id)
            user_settings[key] = value
            self.update(user_id, user_settings)

    # =========================================================================
    # Tema visual
    # =========================================================================

    def get_theme(self, user_id: str) -> str:
        """
        Obtiene el tema preferido del usuario.

        Returns:
            'light', 'dark' o 'system'
        """
        theme = self.get_setting(user_id, 'theme', DEFAULT_THEME)
        return theme if theme in VALID_THEMES else DEFAULT_THEME

    def set_theme(self, user_id: str, theme: str) -> str:
        """
        Establece el tema preferido (valores desconocidos → 'light').

        Returns:
            Tema efectivamente guardado
        """
        if theme not in VALID_THEMES:
            theme = DEFAULT_THEME
        self.set_setting(user_id, 'theme', theme)
        return theme
