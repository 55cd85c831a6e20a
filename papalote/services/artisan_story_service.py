# ==============================================================================
# SERVICIO DE HISTORIAS DE ARTESANOS
# ==============================================================================
# Combina las historias de ejemplo del catálogo (solo lectura) con las que
# los vendedores escriben desde su panel. Una historia guardada reemplaza a
# la de catálogo con el mismo id.
# ==============================================================================

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from papalote.errors import StorageError, log_error
from papalote.models.entities import ArtisanStory, UserType
from papalote.repositories.interfaces import ISellerStoryRepository, IStoryRepository
from papalote.validators import validate_artisan_story

logger = logging.getLogger(__name__)


def artisan_id_from_email(email: str) -> str:
    """El id de artesano es la parte local del correo ('sofia@x.com' → 'sofia')."""
    return (email or '').strip().lower().split('@')[0]


def story_id_for(artisan_id: str) -> str:
    return f"story-{artisan_id}"


class ArtisanStoryService:
    """Consulta y edición de historias de artesanos."""

    def __init__(
        self,
        catalog_story_repo: IStoryRepository,
        seller_story_repo: ISellerStoryRepository,
        achievement_service=None,
    ):
        self.catalog_story_repo = catalog_story_repo
        self.seller_story_repo = seller_story_repo
        self.achievement_service = achievement_service

    def get_stories(self, state: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Historias publicadas, las de catálogo primero.

        Args:
            state: Filtra por estado de la República (exacto)
        """
        saved = {s['id']: s for s in self.seller_story_repo.get_stories() if s.get('id')}
        stories = []
        for story in self.catalog_story_repo.get_stories():
            stories.append(saved.pop(story.get('id'), story))
        stories.extend(saved.values())
        stories = [s for s in stories if s.get('is_published', True)]
        if state:
            stories = [s for s in stories if s.get('state') == state]
        return stories

    def get_story(self, story_id: str) -> Optional[Dict[str, Any]]:
        return self.seller_story_repo.get_story(story_id) or self.catalog_story_repo.get_story(story_id)

    def save_story(
        self,
        artisan_id: str,
        data: Dict[str, Any],
        seller_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Crea o actualiza la historia de un artesano.

        Args:
            artisan_id: Identificador del artesano (parte local de su correo)
            data: Campos del formulario de historia
            seller_id: Vendedor dueño, para el logro de historia publicada

        Returns:
            Dict con ok, story, created y los logros desbloqueados
        """
        artisan_id = (artisan_id or '').strip().lower()
        if not artisan_id:
            return {'ok': False, 'error': 'artisan_id es requerido'}

        validation = validate_artisan_story(data)
        if not validation['ok']:
            return {
                'ok': False,
                'error': 'Por favor completa los campos requeridos',
                'errors': validation['errors'],
            }
        form = validation['data']

        story = ArtisanStory(
            id=story_id_for(artisan_id),
            artisan_id=artisan_id,
            artisan_name=form.artisan_name,
            craft=form.specialty,
            state=form.state,
            city=form.city,
            story=form.personal_story,
            title=form.title or f"{form.specialty} de {form.city}",
            summary=form.summary or '',
            heritage_story=form.heritage_story or '',
            image=(form.workshop_photos or [''])[0],
            years_of_experience=form.years_of_experience,
            generations_of_craft=form.generations_of_craft,
            traditional_techniques=form.traditional_techniques,
            workshop_photos=form.workshop_photos,
            social_media=form.social_media,
            product_ids=[str(p) for p in form.product_ids],
            last_updated=datetime.now(timezone.utc).isoformat(),
        ).to_dict()

        try:
            created = self.seller_story_repo.save_story(story)
        except StorageError as e:
            log_error('historias', e, op='save', artisan_id=artisan_id)
            return {'ok': False, 'error': 'Error al guardar la historia'}

        unlocked = []
        if seller_id and self.achievement_service is not None:
            unlocked = self.achievement_service.award(seller_id, UserType.SELLER.value, 's-story')
        logger.info("[historias] %s %s", 'creada' if created else 'actualizada', story['id'])
        return {
            'ok': True,
            'message': 'Historia guardada exitosamente',
            'story': story,
            'created': created,
            'unlocked': unlocked,
        }
