# ==============================================================================
# EXCEPCIONES DEL DOMINIO
# ==============================================================================
# Todas las excepciones propias del sistema heredan de AziziPOSError.
# Las fallas de almacenamiento NO llegan al llamador: KeyValueStore las
# registra en el log y degrada a valores por defecto.
# ==============================================================================


class AziziPOSError(Exception):
    """Excepción base del sistema."""
    pass


class StorageError(AziziPOSError):
    """El medio de persistencia rechazó una operación."""
    pass


class StorageQuotaError(StorageError):
    """Se excedió la capacidad configurada del almacenamiento."""

    def __init__(self, key: str, required: int, quota: int):
        self.key = key
        self.required = required
        self.quota = quota
        super().__init__(
            f"Cuota excedida al escribir '{key}': {required} bytes > {quota} bytes"
        )


class DuplicateSKUError(AziziPOSError):
    """Excepción lanzada cuando otro producto ya usa el mismo SKU."""

    MESSAGE = "SKU sudah digunakan oleh produk lain."

    def __init__(self, sku: str, existing_id: str = None):
        self.sku = sku
        self.existing_id = existing_id
        super().__init__(self.MESSAGE)


class ProductValidationError(AziziPOSError, ValueError):
    """Datos de producto inválidos (precio/stock no numéricos o negativos)."""
    pass
