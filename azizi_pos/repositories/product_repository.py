# ==============================================================================
# REPOSITORIO DE PRODUCTOS
# ==============================================================================
# Encapsula todo el acceso a la colección "products".
# Los productos se almacenan como lista: [{producto1}, {producto2}, ...]
#
# REGLAS:
# - SKU único sin distinguir mayúsculas ni espacios en los extremos
# - SKU vacío = "sin SKU" (nunca se verifica unicidad entre vacíos)
# - createdAt se fija al crear y NUNCA cambia; updatedAt en cada guardado
# ==============================================================================

import math
from datetime import datetime
from typing import Any, Dict, List, Optional

from azizi_pos.exceptions import DuplicateSKUError, ProductValidationError
from azizi_pos.models.entities import normalize_sku
from azizi_pos.repositories.record_collections import PRODUCTS, RecordCollections
from azizi_pos.utils import Clock, ts, uid


def _to_number(value: Any, field_name: str, default: float = 0) -> float:
    """
    Convierte un valor de formulario/JSON a número.
    None y '' se consideran "sin valor" y retornan `default`.

    Raises:
        ProductValidationError: si el valor no es numérico
    """
    if value is None or (isinstance(value, str) and value.strip() == ''):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ProductValidationError(f"{field_name} inválido: {value!r}")
    if math.isnan(number) or math.isinf(number):
        raise ProductValidationError(f"{field_name} inválido: {value!r}")
    return int(number) if number.is_integer() else number


def _to_price(value: Any, default: float = 0) -> float:
    price = _to_number(value, 'price', default)
    if price < 0:
        raise ProductValidationError(f"price no puede ser negativo: {value!r}")
    return price


def _to_stock(value: Any, default: int = 0) -> int:
    stock = _to_number(value, 'stock', default)
    if not float(stock).is_integer():
        raise ProductValidationError(f"stock debe ser entero: {value!r}")
    return int(stock)


class ProductRepository:
    """
    Repositorio para gestión del catálogo de productos.

    Formato de cada producto:
    {
        "id": "3f2b...",
        "sku": "SKU001",
        "name": "Kartu Perdana",
        "price": 15000,
        "stock": 20,
        "createdAt": "2025-09-01 10:00:00",
        "updatedAt": "2025-09-01 10:00:00"
    }

    Los campos adicionales que envíe el llamador se guardan tal cual.
    """

    def __init__(self, collections: RecordCollections, clock: Clock = datetime.now):
        """
        Inicializa el repositorio de productos.

        Args:
            collections: Colecciones persistidas
            clock: Fuente de hora local para createdAt/updatedAt
        """
        self.collections = collections
        self.clock = clock

    # =========================================================================
    # CONSULTAS
    # =========================================================================

    def list_products(self) -> List[Dict[str, Any]]:
        """Obtiene todos los productos (copia)."""
        return self.collections.get_products()

    def find_by_id(self, product_id: str) -> Optional[Dict[str, Any]]:
        """
        Busca un producto por su ID.

        Returns:
            Producto o None si no existe
        """
        for product in self.collections.get_products():
            if product.get('id') == product_id:
                return product
        return None

    def find_by_sku(self, sku: str) -> Optional[Dict[str, Any]]:
        """
        Busca un producto por SKU (sin distinguir mayúsculas/espacios).
        Un SKU vacío no identifica a ningún producto.

        Returns:
            Producto o None
        """
        wanted = normalize_sku(sku)
        if not wanted:
            return None
        for product in self.collections.get_products():
            if normalize_sku(product.get('sku')) == wanted:
                return product
        return None

    # =========================================================================
    # ESCRITURA
    # =========================================================================

    def save(self, candidate: Dict[str, Any]) -> Dict[str, Any]:
        """
        Crea o actualiza un producto.

        Si existe un producto con el mismo `id`, los campos enviados se
        mezclan sobre los anteriores. Si no, se crea uno nuevo con ID
        generado cuando no se envía.

        Args:
            candidate: Datos del producto (parciales en actualizaciones)

        Returns:
            Producto tal como quedó guardado

        Raises:
            DuplicateSKUError: si otro producto ya usa el SKU
            ProductValidationError: si price/stock no son válidos
        """
        candidate = dict(candidate or {})
        candidate_id = candidate.get('id') or None
        saved: Dict[str, Any] = {}

        def apply(products: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
            self._check_unique_sku(products, candidate.get('sku'), candidate_id)

            now = ts(self.clock())
            index = self._index_of(products, candidate_id)

            if index is not None:
                prev = products[index]
                record = {**prev, **candidate}
                stock = candidate.get('stock')
                if stock is None:
                    stock = prev.get('stock')
                record['stock'] = _to_stock(stock, 0)
                if 'price' in candidate:
                    record['price'] = _to_price(candidate['price'])
                record['createdAt'] = prev.get('createdAt') or now
                record['updatedAt'] = now
                products[index] = record
            else:
                record = dict(candidate)
                record.update({
                    'id': candidate_id or uid(p.get('id') for p in products),
                    'sku': candidate.get('sku') or '',
                    'name': candidate.get('name') or '',
                    'price': _to_price(candidate.get('price')),
                    'stock': _to_stock(candidate.get('stock')),
                    'createdAt': now,
                    'updatedAt': now,
                })
                products.append(record)

            saved.update(record)
            return products

        self.collections.update(PRODUCTS, apply)
        return saved

    def delete(self, product_id: str) -> int:
        """
        Elimina (definitivamente) todos los productos con ese ID.

        Returns:
            Cantidad de productos eliminados
        """
        removed = []

        def apply(products: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
            kept = [p for p in products if p.get('id') != product_id]
            removed.append(len(products) - len(kept))
            return kept

        self.collections.update(PRODUCTS, apply)
        return removed[0]

    # =========================================================================
    # HELPERS
    # =========================================================================

    @staticmethod
    def _index_of(products: List[Dict[str, Any]], product_id: Optional[str]) -> Optional[int]:
        if product_id is None:
            return None
        for i, product in enumerate(products):
            if product.get('id') == product_id:
                return i
        return None

    @staticmethod
    def _check_unique_sku(
        products: List[Dict[str, Any]],
        sku: Any,
        product_id: Optional[str]
    ) -> None:
        wanted = normalize_sku(sku)
        if not wanted:
            return
        for product in products:
            if product.get('id') != product_id and normalize_sku(product.get('sku')) == wanted:
                raise DuplicateSKUError(str(sku), product.get('id'))
