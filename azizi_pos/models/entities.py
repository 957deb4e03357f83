# ==============================================================================
# ENTIDADES DEL DOMINIO - Definiciones de dataclasses
# ==============================================================================
# Cada entidad representa un concepto del negocio.
# Diseñadas para ser independientes del mecanismo de persistencia.
# Los nombres de campo en to_dict() son los del formato JSON persistido
# (createdAt, invPrefix, ...) y NO deben cambiar.
# ==============================================================================

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


DEFAULT_INVOICE_PREFIX = 'INV'

_PREFIX_STRIP_RE = re.compile(r'[^A-Z0-9_-]')


def normalize_prefix(raw: Any) -> str:
    """
    Normaliza el prefijo de factura: mayúsculas, solo [A-Z0-9_-].
    Retorna 'INV' si queda vacío.
    """
    text = str(raw or DEFAULT_INVOICE_PREFIX).upper()
    cleaned = _PREFIX_STRIP_RE.sub('', text)
    return cleaned or DEFAULT_INVOICE_PREFIX


def normalize_sku(sku: Any) -> str:
    """SKU para comparación: sin espacios en los extremos y en minúsculas."""
    if sku is None:
        return ''
    return str(sku).strip().casefold()


# ==============================================================================
# ENTIDADES DE CATÁLOGO
# ==============================================================================

@dataclass
class Product:
    """
    Representa un producto del catálogo.

    Attributes:
        id: Identificador opaco único
        sku: Código del producto ('' = sin SKU)
        name: Nombre visible
        price: Precio de venta (no negativo)
        stock: Unidades disponibles
        created_at: Marca de creación (hora local)
        updated_at: Marca de última modificación (hora local)
    """
    id: str
    sku: str = ''
    name: str = ''
    price: float = 0
    stock: int = 0
    created_at: str = ''
    updated_at: str = ''

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para persistencia."""
        return {
            'id': self.id,
            'sku': self.sku,
            'name': self.name,
            'price': self.price,
            'stock': self.stock,
            'createdAt': self.created_at,
            'updatedAt': self.updated_at,
        }


# ==============================================================================
# ENTIDADES DE FACTURACIÓN
# ==============================================================================

@dataclass
class InvoiceCounter:
    """
    Contador anual de facturas.

    Attributes:
        year: Año calendario al que pertenece `seq`
        seq: Último número emitido en ese año (0 = ninguno)
    """
    year: int
    seq: int = 0

    def next_for_year(self, year: int) -> 'InvoiceCounter':
        """Siguiente estado: reinicia a 1 si cambió el año."""
        if self.year != year:
            return InvoiceCounter(year=year, seq=1)
        return InvoiceCounter(year=year, seq=self.seq + 1)

    def to_dict(self) -> Dict[str, Any]:
        return {'year': self.year, 'seq': self.seq}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]], fallback_year: int) -> 'InvoiceCounter':
        """Tolera datos incompletos o de tipo inesperado."""
        if not isinstance(data, dict):
            return cls(year=fallback_year, seq=0)
        try:
            year = int(data.get('year', fallback_year))
        except (TypeError, ValueError):
            year = fallback_year
        try:
            seq = max(0, int(data.get('seq') or 0))
        except (TypeError, ValueError):
            seq = 0
        return cls(year=year, seq=seq)


# ==============================================================================
# CONFIGURACIÓN DE TIENDA
# ==============================================================================

@dataclass
class StoreSettings:
    """Configuración de la tienda (datos del recibo e impuestos)."""
    store_name: str = 'Azizi Cell'
    store_addr: str = ''
    store_footer: str = 'Terima kasih!'
    inv_prefix: str = DEFAULT_INVOICE_PREFIX
    tax_default: float = 0
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def invoice_prefix(self) -> str:
        """Prefijo listo para usar en números de factura."""
        return normalize_prefix(self.inv_prefix)

    def to_dict(self) -> Dict[str, Any]:
        data = dict(self.extra)
        data.update({
            'storeName': self.store_name,
            'storeAddr': self.store_addr,
            'storeFooter': self.store_footer,
            'invPrefix': self.inv_prefix,
            'taxDefault': self.tax_default,
        })
        return data

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'StoreSettings':
        if not isinstance(data, dict):
            return cls()
        known = ('storeName', 'storeAddr', 'storeFooter', 'invPrefix', 'taxDefault')
        defaults = cls()
        return cls(
            store_name=data.get('storeName', defaults.store_name),
            store_addr=data.get('storeAddr', defaults.store_addr),
            store_footer=data.get('storeFooter', defaults.store_footer),
            inv_prefix=data.get('invPrefix', defaults.inv_prefix),
            tax_default=data.get('taxDefault', defaults.tax_default),
            extra={k: v for k, v in data.items() if k not in known},
        )


# Catálogo inicial (se carga una sola vez con la base vacía)
DEFAULT_CATALOG: List[Dict[str, Any]] = [
    {'sku': 'SKU001', 'name': 'Kartu Perdana', 'price': 15000, 'stock': 20},
    {'sku': 'SKU002', 'name': 'Charger Type-C', 'price': 75000, 'stock': 10},
    {'sku': 'SKU003', 'name': 'Headset', 'price': 50000, 'stock': 12},
    {'sku': 'SKU004', 'name': 'Tempered Glass', 'price': 20000, 'stock': 30},
]
