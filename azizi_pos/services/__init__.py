# ==============================================================================
# CAPA DE SERVICIOS - Lógica de negocio
# ==============================================================================
# PRINCIPIOS:
# 1. Los servicios orquestan operaciones sobre las colecciones
# 2. Aplican reglas de negocio (correlativos, carga inicial)
# 3. Las rutas (controllers) solo llaman a servicios y repositorios
# 4. Los servicios NO conocen el medio de almacenamiento
#
# ESTRUCTURA:
# ├── invoice_service.py → Números de factura PREFIJO-YYYYMM-####
# └── seed_service.py    → Catálogo inicial
# ==============================================================================

from azizi_pos.services.invoice_service import InvoiceSequencer, format_invoice_number
from azizi_pos.services.seed_service import Seeder

__all__ = [
    'InvoiceSequencer',
    'format_invoice_number',
    'Seeder',
]
