# ==============================================================================
# INTERFACES DE REPOSITORIOS - PUERTO DE PERSISTENCIA
# ==============================================================================
#
# Este archivo define los protocolos que separan la lógica del POS del medio
# de almacenamiento. Esto permite:
#
# 1. INDEPENDENCIA DE ALMACENAMIENTO
#    - KeyValueStore depende de IStorageBackend, NO de archivos concretos
#    - Cambiar JSON en disco → memoria → otro medio solo requiere un backend
#
# 2. TESTING
#    - MemoryStorage (o cualquier doble) cumple el mismo contrato
#    - Tests unitarios sin tocar archivos reales
#
# 3. DOCUMENTACIÓN
#    - Contratos claros de qué hace cada capa
#
# ==============================================================================

from typing import Any, Callable, Dict, List, Optional, Protocol, runtime_checkable


# ==============================================================================
# PUERTO DE PERSISTENCIA (nivel más bajo: cadenas crudas)
# ==============================================================================

@runtime_checkable
class IStorageBackend(Protocol):
    """
    Medio clave-valor de cadenas, equivalente a localStorage.
    Implementado por: MemoryStorage, JsonFileStorage.

    set_item puede lanzar StorageError (p. ej. StorageQuotaError) u OSError.
    """

    def get_item(self, key: str) -> Optional[str]:
        """Retorna el valor crudo o None si no existe."""
        ...

    def set_item(self, key: str, raw: str) -> None:
        """Escribe el valor crudo."""
        ...

    def remove_item(self, key: str) -> None:
        """Elimina la entrada (no falla si no existe)."""
        ...

    def keys(self) -> List[str]:
        """Lista las claves almacenadas."""
        ...

    def clear(self) -> None:
        """Elimina todas las entradas."""
        ...


# ==============================================================================
# INTERFACES ESPECÍFICAS
# ==============================================================================

@runtime_checkable
class IKeyValueStore(Protocol):
    """
    Almacén JSON tolerante a fallos.
    Nunca lanza excepciones por datos corruptos o escrituras rechazadas.
    """

    def get(self, key: str, default: Any = None) -> Any:
        """Lee y deserializa, o retorna default."""
        ...

    def set(self, key: str, value: Any) -> Optional[Exception]:
        """Serializa y escribe; retorna la falla o None."""
        ...

    def update(self, key: str, updater: Callable[[Any], Any], default: Any = None) -> Any:
        """Lee, transforma y escribe; retorna el nuevo valor."""
        ...


@runtime_checkable
class IProductRepository(Protocol):
    """
    Interfaz para el repositorio de productos.
    """

    def list_products(self) -> List[Dict[str, Any]]:
        """Obtiene todos los productos."""
        ...

    def find_by_id(self, product_id: str) -> Optional[Dict[str, Any]]:
        """Obtiene un producto por ID."""
        ...

    def find_by_sku(self, sku: str) -> Optional[Dict[str, Any]]:
        """Obtiene un producto por SKU (sin distinguir mayúsculas)."""
        ...

    def save(self, candidate: Dict[str, Any]) -> Dict[str, Any]:
        """Crea o actualiza un producto."""
        ...

    def delete(self, product_id: str) -> int:
        """Elimina un producto."""
        ...
