# ==============================================================================
# CONTENEDOR DE DEPENDENCIAS - Inyección de servicios
# ==============================================================================
# Este módulo proporciona una forma centralizada de obtener instancias
# del almacenamiento, repositorios y servicios. Facilita:
#   - Inyección de dependencias (el backend se pasa explícitamente)
#   - Testing (se puede usar MemoryStorage o cualquier doble)
#   - Cambiar de medio sin tocar servicios
# ==============================================================================

from datetime import datetime
from typing import Optional

from azizi_pos import config
from azizi_pos.repositories import (
    IStorageBackend,
    JsonFileStorage,
    KeyValueStore,
    MemoryStorage,
    ProductRepository,
    RecordCollections,
)
from azizi_pos.services import InvoiceSequencer, Seeder
from azizi_pos.utils import Clock


def build_storage(
    backend: str = None,
    data_dir: str = None,
    quota_bytes: int = None
) -> IStorageBackend:
    """
    Crea el backend de almacenamiento según la configuración.

    Args:
        backend: 'file' o 'memory' (por defecto config.STORAGE_BACKEND)
        data_dir: Carpeta de datos para 'file'
        quota_bytes: Capacidad máxima (0 = sin límite)
    """
    backend = backend or config.STORAGE_BACKEND
    quota = config.quota_or_none(config.QUOTA_BYTES if quota_bytes is None else quota_bytes)
    if backend == 'memory':
        return MemoryStorage(quota_bytes=quota)
    if backend != 'file':
        print(f"[ADVERTENCIA] AZIZI_POS_STORAGE={backend!r} desconocido, usando 'file'")
    return JsonFileStorage(data_dir or config.DATA_DIR, quota_bytes=quota)


class AppContainer:
    """
    Contenedor de dependencias de la aplicación.

    Implementa el patrón Singleton para asegurar una única instancia
    de cada repositorio y servicio.

    Uso:
        container = AppContainer(storage=MemoryStorage())
        number = container.invoice_sequencer.generate()
    """

    _instance: Optional['AppContainer'] = None

    def __init__(
        self,
        storage: IStorageBackend = None,
        key_prefix: str = None,
        clock: Clock = datetime.now
    ):
        """
        Inicializa el contenedor.

        Args:
            storage: Backend de persistencia (por defecto según config)
            key_prefix: Espacio de nombres de claves
            clock: Fuente de hora local para todos los servicios
        """
        self._storage = storage
        self._key_prefix = key_prefix if key_prefix is not None else config.KEY_PREFIX
        self._clock = clock

        # Inicialización perezosa
        self._store: Optional[KeyValueStore] = None
        self._collections: Optional[RecordCollections] = None
        self._product_repo: Optional[ProductRepository] = None
        self._invoice_sequencer: Optional[InvoiceSequencer] = None
        self._seeder: Optional[Seeder] = None
        self._bootstrapped = False

    # =========================================================================
    # PERSISTENCIA
    # =========================================================================

    @property
    def storage(self) -> IStorageBackend:
        """Backend de almacenamiento (singleton)."""
        if self._storage is None:
            self._storage = build_storage()
        return self._storage

    @property
    def store(self) -> KeyValueStore:
        """Almacén clave/valor (singleton)."""
        if self._store is None:
            self._store = KeyValueStore(self.storage)
        return self._store

    @property
    def collections(self) -> RecordCollections:
        """Colecciones persistidas (singleton)."""
        if self._collections is None:
            self._collections = RecordCollections(
                self.store,
                key_prefix=self._key_prefix,
                clock=self._clock
            )
        return self._collections

    # =========================================================================
    # REPOSITORIOS Y SERVICIOS
    # =========================================================================

    @property
    def product_repo(self) -> ProductRepository:
        """Repositorio de productos (singleton)."""
        if self._product_repo is None:
            self._product_repo = ProductRepository(self.collections, clock=self._clock)
        return self._product_repo

    @property
    def invoice_sequencer(self) -> InvoiceSequencer:
        """Generador de facturas (singleton)."""
        if self._invoice_sequencer is None:
            self._invoice_sequencer = InvoiceSequencer(self.collections, clock=self._clock)
        return self._invoice_sequencer

    @property
    def seeder(self) -> Seeder:
        """Servicio de carga inicial (singleton)."""
        if self._seeder is None:
            self._seeder = Seeder(self.collections, clock=self._clock)
        return self._seeder

    # =========================================================================
    # UTILIDADES
    # =========================================================================

    def bootstrap(self) -> 'AppContainer':
        """
        Arranque del proceso: carga el catálogo inicial una sola vez.
        """
        if not self._bootstrapped:
            self.seeder.seed()
            self._bootstrapped = True
        return self

    def reset(self) -> None:
        """
        Reinicia todas las instancias (el backend se conserva).
        Útil para testing o para recargar datos.
        """
        self._store = None
        self._collections = None
        self._product_repo = None
        self._invoice_sequencer = None
        self._seeder = None
        self._bootstrapped = False

    @classmethod
    def get_instance(cls, storage: IStorageBackend = None) -> 'AppContainer':
        """
        Obtiene la instancia singleton del contenedor.

        Args:
            storage: Backend (solo se usa en primera llamada)
        """
        if cls._instance is None:
            cls._instance = cls(storage=storage)
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Elimina la instancia singleton (útil para tests)."""
        if cls._instance is not None:
            cls._instance.reset()
            cls._instance = None


# Función helper para obtener el contenedor global
def get_container(storage: IStorageBackend = None) -> AppContainer:
    """
    Obtiene el contenedor de dependencias global (ya inicializado).
    """
    return AppContainer.get_instance(storage).bootstrap()
