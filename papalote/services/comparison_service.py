# ==============================================================================
# SERVICIO DE COMPARACIÓN DE PRODUCTOS
# ==============================================================================
# Lista de productos a comparar lado a lado, guardada en la sesión de Flask
# como IDs en session['comparar']. Máximo 4 productos, sin duplicados.
# ==============================================================================

import logging
from typing import Any, Dict, List

from flask import session

from papalote.services.catalog_service import CatalogService

logger = logging.getLogger(__name__)

MAX_COMPARE_PRODUCTS = 4
MIN_COMPARE_PRODUCTS = 2


class ComparisonService:
    """
    Servicio de comparación.

    Responsabilidades:
    - Agregar, quitar y alternar productos en la comparación
    - Respetar el máximo de productos
    - Resolver los IDs guardados contra el catálogo actual
    """

    def __init__(self, catalog_service: CatalogService, max_products: int = MAX_COMPARE_PRODUCTS):
        self.catalog_service = catalog_service
        self.max_products = max_products

    def _get_ids(self) -> List[str]:
        ids = session.get('comparar', [])
        if not isinstance(ids, list):
            logger.warning("[comparar] Lista corrupta en sesión, se reinicia")
            session.pop('comparar', None)
            return []
        return [str(i) for i in ids]

    def _save_ids(self, ids: List[str]) -> None:
        session['comparar'] = ids
        session.modified = True

    def get_comparison(self) -> Dict[str, Any]:
        """
        Productos en comparación con los indicadores de estado.

        Los IDs que ya no existen en el catálogo se descartan.

        Returns:
            Dict con products, count, can_add, is_full, is_empty, can_compare
        """
        products = []
        for product_id in self._get_ids():
            product = self.catalog_service.get_product(product_id)
            if product:
                products.append(product)
        count = len(products)
        return {
            'products': products,
            'count': count,
            'max_products': self.max_products,
            'can_add': count < self.max_products,
            'is_full': count >= self.max_products,
            'is_empty': count == 0,
            'can_compare': count >= MIN_COMPARE_PRODUCTS,
        }

    def is_comparing(self, product_id: str) -> bool:
        return str(product_id) in self._get_ids()

    def add(self, product_id: str) -> Dict[str, Any]:
        """
        Agrega un producto a la comparación.

        Returns:
            Dict con ok y la comparación actualizada
        """
        product = self.catalog_service.get_product(str(product_id or ''))
        if not product:
            return {'ok': False, 'error': 'Producto no encontrado', 'not_found': True}

        ids = self._get_ids()
        if product['id'] in ids:
            return {'ok': False, 'error': 'El producto ya está en la comparación'}
        if len(ids) >= self.max_products:
            return {
                'ok': False,
                'error': f'Solo puedes comparar hasta {self.max_products} productos',
                'limit_reached': True,
            }

        ids.append(product['id'])
        self._save_ids(ids)
        return dict(self.get_comparison(), ok=True)

    def remove(self, product_id: str) -> Dict[str, Any]:
        ids = self._get_ids()
        self._save_ids([i for i in ids if i != str(product_id)])
        return dict(self.get_comparison(), ok=True)

    def toggle(self, product_id: str) -> Dict[str, Any]:
        """Quita el producto si ya está; si no, lo agrega."""
        if self.is_comparing(product_id):
            return self.remove(product_id)
        return self.add(product_id)

    def clear(self) -> Dict[str, Any]:
        session.pop('comparar', None)
        return dict(self.get_comparison(), ok=True)
