# ==============================================================================
# CAPA DE REPOSITORIOS - Acceso a datos
# ==============================================================================
# Esta capa encapsula todo el acceso a la persistencia local.
#
# ESTRUCTURA:
# ├── interfaces.py          → Protocolos (puerto de persistencia)
# ├── storage.py             → Backends: MemoryStorage, JsonFileStorage
# ├── base.py                → KeyValueStore (JSON tolerante a fallos)
# ├── record_collections.py  → products, sales, stockMoves, settings, ...
# └── product_repository.py  → CRUD de productos con SKU único
# ==============================================================================

# Interfaces
from .interfaces import (
    IStorageBackend,
    IKeyValueStore,
    IProductRepository,
)

# Implementaciones concretas
from .storage import BaseStorage, MemoryStorage, JsonFileStorage
from .base import KeyValueStore
from .record_collections import RecordCollections, COLLECTION_NAMES
from .product_repository import ProductRepository

__all__ = [
    # Interfaces
    'IStorageBackend',
    'IKeyValueStore',
    'IProductRepository',

    # Backends
    'BaseStorage',
    'MemoryStorage',
    'JsonFileStorage',

    # Repositorios
    'KeyValueStore',
    'RecordCollections',
    'COLLECTION_NAMES',
    'ProductRepository',
]
