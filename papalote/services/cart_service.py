# ==============================================================================
# SERVICIO DE CARRITO
# ==============================================================================
# Centraliza toda la lógica de negocio relacionada con el carrito de compras.
# El carrito se almacena en la sesión de Flask.
# ==============================================================================

import logging
from typing import Any, Dict, List

from flask import session

from papalote.models.entities import CartItem
from papalote.services.catalog_service import CatalogService

logger = logging.getLogger(__name__)


class CartService:
    """
    Servicio para gestión del carrito de compras.

    Responsabilidades:
    - Agregar/eliminar items del carrito
    - Validar existencias del producto
    - Calcular totales
    - Limpiar carrito

    El carrito se almacena en session['carrito'] como lista de CartItem.to_dict().
    """

    def __init__(self, catalog_service: CatalogService):
        """
        Inicializa el servicio de carrito.

        Args:
            catalog_service: Servicio de catálogo para resolver productos
        """
        self.catalog_service = catalog_service

    def _get_cart(self) -> List[Dict[str, Any]]:
        """
        Obtiene el carrito actual de la sesión.

        Un carrito corrupto (no es lista) se descarta y se empieza vacío.
        """
        cart = session.get('carrito', [])
        if not isinstance(cart, list):
            logger.warning("[carrito] Carrito corrupto en sesión, se reinicia")
            session.pop('carrito', None)
            return []
        return cart

    def _save_cart(self, cart: List[Dict[str, Any]]) -> None:
        session['carrito'] = cart
        session.modified = True

    @staticmethod
    def _totals(cart: List[Dict[str, Any]]) -> Dict[str, Any]:
        items = [CartItem.from_dict(i) for i in cart]
        return {
            'total_items': sum(i.quantity for i in items),
            'total_monto': round(sum(i.price * i.quantity for i in items), 2),
            'items_count': len(items),
        }

    def get_cart(self) -> Dict[str, Any]:
        """
        Obtiene el carrito con totales calculados.

        Returns:
            Dict con items, total_items, total_monto, items_count
        """
        cart = self._get_cart()
        result = {'items': cart}
        result.update(self._totals(cart))
        return result

    def get_cart_items(self) -> List[CartItem]:
        return [CartItem.from_dict(i) for i in self._get_cart()]

    def is_in_cart(self, product_id: str) -> bool:
        return any(i.get('product_id') == str(product_id) for i in self._get_cart())

    def add_item(self, product_id: str, quantity: int = 1) -> Dict[str, Any]:
        """
        Agrega un producto al carrito. Si ya existe, suma la cantidad.

        Args:
            product_id: ID del producto
            quantity: Cantidad a agregar

        Returns:
            Dict con resultado (ok, error, producto, carrito)
        """
        if not product_id:
            return {'ok': False, 'error': 'ID de producto inválido'}

        try:
            quantity = int(quantity)
        except (TypeError, ValueError):
            return {'ok': False, 'error': 'Cantidad inválida'}
        if quantity <= 0:
            return {'ok': False, 'error': 'Cantidad debe ser mayor a 0'}

        product = self.catalog_service.get_product(str(product_id))
        if not product:
            return {'ok': False, 'error': 'Producto no encontrado', 'not_found': True}

        if not product.get('in_stock'):
            return {'ok': False, 'error': 'Producto agotado'}

        stock = product.get('stock')
        cart = self._get_cart()
        existing = next((i for i in cart if i.get('product_id') == product['id']), None)
        in_cart = existing['quantity'] if existing else 0

        if stock is not None and in_cart + quantity > stock:
            if existing:
                error = f"Stock insuficiente. Ya tienes {in_cart} en carrito. Disponible: {stock}"
            else:
                error = f"Stock insuficiente. Disponible: {stock}"
            return {'ok': False, 'error': error, 'disponible': stock}

        if existing:
            existing['quantity'] = in_cart + quantity
        else:
            item = CartItem(
                product_id=product['id'],
                name=product['name'],
                price=product['price'],
                quantity=quantity,
                image=(product.get('images') or [''])[0],
                maker=product.get('maker', ''),
                state=product.get('state', ''),
                category=product.get('category', ''),
            )
            cart.append(item.to_dict())

        self._save_cart(cart)

        return {
            'ok': True,
            'message': 'Producto agregado al carrito',
            'producto': {
                'id': product['id'],
                'name': product['name'],
                'cantidad_agregada': quantity,
                'price': product['price'],
                'subtotal': round(quantity * product['price'], 2),
            },
            'carrito': self._totals(cart),
        }

    def remove_item(self, product_id: str) -> Dict[str, Any]:
        """
        Elimina un producto del carrito.

        Returns:
            Dict con resultado
        """
        if not product_id:
            return {'ok': False, 'error': 'ID de producto inválido'}

        cart = [i for i in self._get_cart() if i.get('product_id') != str(product_id)]
        self._save_cart(cart)
        return {
            'ok': True,
            'message': 'Producto eliminado del carrito',
            'carrito': self._totals(cart),
        }

    def update_quantity(self, product_id: str, quantity: int) -> Dict[str, Any]:
        """
        Actualiza la cantidad de un producto. Cantidad <= 0 lo elimina.

        Args:
            product_id: ID del producto
            quantity: Nueva cantidad

        Returns:
            Dict con resultado
        """
        try:
            quantity = int(quantity)
        except (TypeError, ValueError):
            return {'ok': False, 'error': 'Cantidad inválida'}

        if quantity <= 0:
            return self.remove_item(product_id)

        cart = self._get_cart()
        existing = next((i for i in cart if i.get('product_id') == str(product_id)), None)
        if existing is None:
            return {'ok': False, 'error': 'El producto no está en el carrito'}

        product = self.catalog_service.get_product(str(product_id))
        stock = product.get('stock') if product else None
        if stock is not None and quantity > stock:
            return {
                'ok': False,
                'error': f'Stock insuficiente. Disponible: {stock}',
                'disponible': stock,
            }

        existing['quantity'] = quantity
        self._save_cart(cart)
        return {
            'ok': True,
            'message': 'Cantidad actualizada',
            'carrito': self._totals(cart),
        }

    def clear_cart(self) -> Dict[str, Any]:
        """Vacía el carrito completamente."""
        self._save_cart([])
        return {
            'ok': True,
            'message': 'Carrito vaciado',
            'carrito': {'total_items': 0, 'total_monto': 0, 'items_count': 0},
        }
