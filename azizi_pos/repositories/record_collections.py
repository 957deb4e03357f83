# ==============================================================================
# COLECCIONES DE REGISTROS - Accesores tipados sobre KeyValueStore
# ==============================================================================
# Seis colecciones con clave fija y valor por defecto:
#   products, sales, stockMoves, settings, invoiceCounter, cashSessions
#
# Cada get_* retorna una copia nueva; cada set_* sobrescribe la entrada
# completa (sin mezcla parcial en esta capa).
# ==============================================================================

import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from azizi_pos.models.entities import InvoiceCounter, StoreSettings
from azizi_pos.repositories.base import KeyValueStore
from azizi_pos.utils import Clock

logger = logging.getLogger(__name__)

PRODUCTS = 'products'
SALES = 'sales'
STOCK_MOVES = 'stockMoves'
SETTINGS = 'settings'
INVOICE_COUNTER = 'invoiceCounter'
CASH_SESSIONS = 'cashSessions'

COLLECTION_NAMES = (PRODUCTS, SALES, STOCK_MOVES, SETTINGS, INVOICE_COUNTER, CASH_SESSIONS)

DEFAULT_KEY_PREFIX = 'az_pos_'


class RecordCollections:
    """
    Acceso a las colecciones persistidas del POS.

    Formato de claves: <prefijo><nombre>, p. ej. "az_pos_products".

    Uso:
        collections = RecordCollections(store)
        products = collections.get_products()
        products.append({...})
        collections.set_products(products)
    """

    def __init__(
        self,
        store: KeyValueStore,
        key_prefix: str = DEFAULT_KEY_PREFIX,
        clock: Clock = datetime.now
    ):
        """
        Args:
            store: Almacén clave/valor
            key_prefix: Espacio de nombres de las claves
            clock: Fuente de hora local (para el año del contador por defecto)
        """
        self.store = store
        self.key_prefix = key_prefix
        self.clock = clock
        self._defaults: Dict[str, Callable[[], Any]] = {
            PRODUCTS: list,
            SALES: list,
            STOCK_MOVES: list,
            SETTINGS: lambda: StoreSettings().to_dict(),
            INVOICE_COUNTER: lambda: InvoiceCounter(year=self.clock().year).to_dict(),
            CASH_SESSIONS: lambda: {'open': None, 'history': []},
        }

    # =========================================================================
    # ACCESO GENÉRICO
    # =========================================================================

    def key_for(self, name: str) -> str:
        """Clave persistida de una colección."""
        if name not in self._defaults:
            raise KeyError(f"Colección desconocida: {name}")
        return self.key_prefix + name

    def default_for(self, name: str) -> Any:
        """Valor por defecto (instancia nueva en cada llamada)."""
        self.key_for(name)
        return self._defaults[name]()

    def get(self, name: str) -> Any:
        """
        Lee una colección. Si el valor guardado no es del tipo del default
        (p. ej. null donde se espera una lista) se retorna el default.
        """
        default = self.default_for(name)
        value = self.store.get(self.key_for(name), default)
        if not isinstance(value, type(default)):
            logger.warning("Tipo inesperado en %s: %s", self.key_for(name), type(value).__name__)
            return default
        return value

    def set(self, name: str, value: Any) -> Optional[Exception]:
        """Sobrescribe la colección; retorna la falla de escritura o None."""
        return self.store.set(self.key_for(name), value)

    def update(self, name: str, updater: Callable[[Any], Any]) -> Any:
        """Lectura-modificación-escritura bajo el lock del almacén."""
        default = self.default_for(name)

        def guarded(current: Any) -> Any:
            if not isinstance(current, type(default)):
                current = default
            return updater(current)

        return self.store.update(self.key_for(name), guarded, default)

    # =========================================================================
    # ACCESORES TIPADOS
    # =========================================================================

    def get_products(self) -> List[Dict[str, Any]]:
        return self.get(PRODUCTS)

    def set_products(self, products: List[Dict[str, Any]]) -> Optional[Exception]:
        return self.set(PRODUCTS, products)

    def get_sales(self) -> List[Any]:
        return self.get(SALES)

    def set_sales(self, sales: List[Any]) -> Optional[Exception]:
        return self.set(SALES, sales)

    def get_stock_moves(self) -> List[Any]:
        return self.get(STOCK_MOVES)

    def set_stock_moves(self, moves: List[Any]) -> Optional[Exception]:
        return self.set(STOCK_MOVES, moves)

    def get_settings(self) -> Dict[str, Any]:
        return self.get(SETTINGS)

    def set_settings(self, settings: Dict[str, Any]) -> Optional[Exception]:
        return self.set(SETTINGS, settings)

    def get_invoice_counter(self) -> Dict[str, Any]:
        return self.get(INVOICE_COUNTER)

    def set_invoice_counter(self, counter: Dict[str, Any]) -> Optional[Exception]:
        return self.set(INVOICE_COUNTER, counter)

    def get_cash_sessions(self) -> Dict[str, Any]:
        return self.get(CASH_SESSIONS)

    def set_cash_sessions(self, sessions: Dict[str, Any]) -> Optional[Exception]:
        return self.set(CASH_SESSIONS, sessions)
