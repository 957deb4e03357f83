# ==============================================================================
# CAPA DE MODELOS - Estructuras de datos del sistema
# ==============================================================================
# Entidades del dominio con conversión a/desde el formato JSON persistido.
# Los repositorios trabajan con diccionarios; estas clases se usan donde la
# lógica necesita estructura (catálogo inicial, contador, configuración).
# ==============================================================================

from .entities import (
    # Catálogo
    Product,
    DEFAULT_CATALOG,
    normalize_sku,

    # Facturación
    InvoiceCounter,
    normalize_prefix,
    DEFAULT_INVOICE_PREFIX,

    # Configuración
    StoreSettings,
)

__all__ = [
    'Product',
    'DEFAULT_CATALOG',
    'normalize_sku',
    'InvoiceCounter',
    'normalize_prefix',
    'DEFAULT_INVOICE_PREFIX',
    'StoreSettings',
]
