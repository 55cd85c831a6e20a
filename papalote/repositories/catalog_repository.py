# ==============================================================================
# REPOSITORIO DE CATÁLOGO - Productos e historias de artesanos (solo lectura)
# ==============================================================================
# Lee los JSON estáticos empaquetados en papalote/data/. La aplicación nunca
# escribe en estos archivos: los productos de vendedores viven en
# SellerProductRepository y se combinan en CatalogService.
# ==============================================================================

from typing import Any, Dict, List, Optional

from .base import ListRepository


class CatalogRepository(ListRepository):
    """
    Catálogo estático de productos.

    Formato de products.json:
    [
        {"id": "1", "name": "Rebozo de Seda", "price": 2500, ...},
        ...
    ]
    """

    def __init__(self, catalog_dir: str):
        super().__init__(catalog_dir, 'products')

    def get_products(self) -> List[Dict[str, Any]]:
        """Todos los productos del catálogo, en el orden del archivo."""
        return self.get_all()

    def get_product(self, product_id: str) -> Optional[Dict[str, Any]]:
        if not product_id:
            return None
        return self.find_by('id', str(product_id))


class ArtisanStoryRepository(ListRepository):
    """Historias de artesanos (artisan_stories.json)."""

    def __init__(self, catalog_dir: str):
        super().__init__(catalog_dir, 'artisan_stories')

    def get_stories(self) -> List[Dict[str, Any]]:
        return self.get_all()

    def get_story(self, story_id: str) -> Optional[Dict[str, Any]]:
        return self.find_by('id', story_id)
