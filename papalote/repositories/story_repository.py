# ==============================================================================
# REPOSITORIO DE HISTORIAS EDITADAS POR ARTESANOS
# ==============================================================================
# Encapsula el acceso a papalote-artisan-stories.json
# Las historias de ejemplo del catálogo (artisan_stories.json) son de solo
# lectura; las que guardan los vendedores viven aquí y las reemplazan por id.
# ==============================================================================

from typing import Any, Dict, List, Optional

from .base import ListRepository

STORIES_KEY = 'papalote-artisan-stories'


class SellerStoryRepository(ListRepository):
    """Historias guardadas desde el panel de vendedor."""

    def __init__(self, base_path: str):
        super().__init__(base_path, STORIES_KEY)

    def get_stories(self) -> List[Dict[str, Any]]:
        return self.get_all()

    def get_story(self, story_id: str) -> Optional[Dict[str, Any]]:
        return self.find_by('id', story_id)

    def save_story(self, story: Dict[str, Any]) -> bool:
        """Inserta o reemplaza la historia. True si era nueva."""
        return self.upsert(story)
