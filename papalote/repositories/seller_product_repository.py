# ==============================================================================
# REPOSITORIOS DE PRODUCTOS DE VENDEDOR
# ==============================================================================
# Borradores → papalote-draft-products.json
# Publicados → papalote-seller-products.json
# Ambos archivos son listas; los registros nuevos van al inicio.
# ==============================================================================

from typing import Any, Dict, List, Optional

from .base import ListRepository

DRAFT_PRODUCTS_KEY = 'papalote-draft-products'
SELLER_PRODUCTS_KEY = 'papalote-seller-products'


class _SellerProductList(ListRepository):

    def get_by_seller(self, seller_id: str) -> List[Dict[str, Any]]:
        return self.find_all_by('seller_id', seller_id)

    def get_product(self, product_id: str) -> Optional[Dict[str, Any]]:
        return self.find_by('id', product_id)

    def save_product(self, product: Dict[str, Any]) -> bool:
        """Inserta o reemplaza. Returns: True si era nuevo."""
        return self.upsert(product, key='id', at_front=True)

    def delete_product(self, product_id: str) -> bool:
        return self.remove_where('id', product_id) > 0


class DraftProductRepository(_SellerProductList):
    """Borradores de productos."""

    def __init__(self, base_path: str):
        super().__init__(base_path, DRAFT_PRODUCTS_KEY)


class PublishedProductRepository(_SellerProductList):
    """Productos publicados por vendedores."""

    def __init__(self, base_path: str):
        super().__init__(base_path, SELLER_PRODUCTS_KEY)
