# ==============================================================================
# SERVICIO DE CARGA INICIAL (SEEDING)
# ==============================================================================
# Carga el catálogo por defecto SOLO si no existe ningún producto.
# Idempotente: si hay al menos un producto, no hace nada.
# ==============================================================================

import logging
from datetime import datetime
from typing import Any, Dict, List

from azizi_pos.models.entities import DEFAULT_CATALOG, Product
from azizi_pos.repositories.record_collections import PRODUCTS, RecordCollections
from azizi_pos.utils import Clock, ts, uid

logger = logging.getLogger(__name__)


class Seeder:
    """Pobla la colección de productos en el primer arranque."""

    def __init__(self, collections: RecordCollections, clock: Clock = datetime.now):
        self.collections = collections
        self.clock = clock

    def default_products(self) -> List[Dict[str, Any]]:
        """Catálogo inicial con IDs nuevos y una misma marca de tiempo."""
        now = ts(self.clock())
        products = []
        for item in DEFAULT_CATALOG:
            product = Product(
                id=uid(p.id for p in products),
                sku=item['sku'],
                name=item['name'],
                price=item['price'],
                stock=item['stock'],
                created_at=now,
                updated_at=now,
            )
            products.append(product)
        return [p.to_dict() for p in products]

    def seed(self) -> int:
        """
        Carga el catálogo inicial si la colección está vacía.

        Returns:
            Cantidad de productos creados (0 si ya había productos)
        """
        if self.collections.get_products():
            return 0

        created = []

        def apply(products):
            # Otro hilo pudo cargar el catálogo entre la verificación y el lock
            if products:
                return products
            defaults = self.default_products()
            created.extend(defaults)
            return defaults

        self.collections.update(PRODUCTS, apply)
        if created:
            logger.info("[SEED] Catálogo inicial cargado: %d productos", len(created))
        return len(created)
