# ==============================================================================
# SERVICIO DE NUMERACIÓN DE FACTURAS
# ==============================================================================
# Formato: PREFIJO-YYYYMM-#### (ejemplo: INV-202509-0001)
#
# - El correlativo es ANUAL: se reinicia a 0001 cuando cambia el año
# - El mes solo aparece en el número; NO reinicia el correlativo
# - Más de 9999 facturas en el año: el número simplemente se ensancha
# ==============================================================================

import logging
from datetime import datetime
from typing import Any, Dict

from azizi_pos.models.entities import InvoiceCounter, StoreSettings
from azizi_pos.repositories.record_collections import INVOICE_COUNTER, RecordCollections
from azizi_pos.utils import Clock, pad

logger = logging.getLogger(__name__)

SEQ_WIDTH = 4


def format_invoice_number(prefix: str, year: int, month: int, seq: int) -> str:
    """Compone PREFIJO-YYYYMM-####."""
    return f"{prefix}-{year}{pad(month, 2)}-{pad(seq, SEQ_WIDTH)}"


class InvoiceSequencer:
    """
    Generador de números de factura únicos y correlativos.

    El contador {year, seq} se persiste después de cada emisión. La lectura,
    el incremento y la escritura ocurren bajo el lock del almacén, por lo que
    dos hilos del mismo proceso nunca obtienen el mismo número.
    """

    def __init__(self, collections: RecordCollections, clock: Clock = datetime.now):
        """
        Args:
            collections: Colecciones persistidas (settings + invoiceCounter)
            clock: Fuente de hora local
        """
        self.collections = collections
        self.clock = clock

    def current_prefix(self) -> str:
        """Prefijo normalizado según la configuración de la tienda."""
        return StoreSettings.from_dict(self.collections.get_settings()).invoice_prefix

    def generate(self) -> str:
        """
        Emite el siguiente número de factura y persiste el contador.

        Returns:
            Número de factura, p. ej. "INV-202509-0001"
        """
        prefix = self.current_prefix()
        now = self.clock()
        issued = {}

        def advance(stored: Dict[str, Any]) -> Dict[str, Any]:
            counter = InvoiceCounter.from_dict(stored, fallback_year=now.year)
            if counter.year != now.year:
                logger.info("Nuevo año %s: correlativo de facturas reiniciado", now.year)
            nxt = counter.next_for_year(now.year)
            issued['seq'] = nxt.seq
            return nxt.to_dict()

        self.collections.update(INVOICE_COUNTER, advance)
        return format_invoice_number(prefix, now.year, now.month, issued['seq'])

    def peek_counter(self) -> Dict[str, Any]:
        """Estado actual del contador (copia, sin modificarlo)."""
        return self.collections.get_invoice_counter()
