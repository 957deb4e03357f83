# ==============================================================================
# AZIZI POS - Capa de datos del punto de venta
# ==============================================================================
# Persistencia local clave/valor, catálogo de productos con SKU único,
# numeración de facturas PREFIJO-YYYYMM-#### y catálogo inicial.
# ==============================================================================

__version__ = '1.0.0'
