# ==============================================================================
# API HTTP - Superficie JSON para la interfaz del POS
# ==============================================================================
# Expone las operaciones públicas de la capa de datos:
#   productos (consulta, guardado, borrado), número de factura,
#   configuración y colecciones opacas (ventas, movimientos, caja).
#
# Todas las respuestas usan el formato {"success": bool, ...}
# ==============================================================================

import logging

from flask import Blueprint, Flask, current_app, request
from werkzeug.exceptions import HTTPException

from azizi_pos import config
from azizi_pos.app_container import AppContainer, get_container
from azizi_pos.exceptions import DuplicateSKUError, ProductValidationError
from azizi_pos.repositories.record_collections import (
    CASH_SESSIONS,
    SALES,
    SETTINGS,
    STOCK_MOVES,
)

logger = logging.getLogger(__name__)

api = Blueprint('api', __name__)

# Rutas de colecciones opacas → nombre de colección
PASSTHROUGH_COLLECTIONS = {
    'settings': SETTINGS,
    'sales': SALES,
    'stock-moves': STOCK_MOVES,
    'cash-sessions': CASH_SESSIONS,
}


def _container() -> AppContainer:
    return current_app.extensions['azizi_pos']


# ═══════════════════════════════════════════════════════════════════════════════
# PRODUCTOS
# ═══════════════════════════════════════════════════════════════════════════════

@api.route("/api/products", methods=["GET"])
def api_list_products():
    """Listar todos los productos"""
    return {"success": True, "products": _container().product_repo.list_products()}


@api.route("/api/products/<product_id>", methods=["GET"])
def api_get_product(product_id):
    """Obtener un producto por ID"""
    product = _container().product_repo.find_by_id(product_id)
    if product is None:
        return {"success": False, "error": "Producto no encontrado"}, 404
    return {"success": True, "product": product}


@api.route("/api/products/sku/<sku>", methods=["GET"])
def api_get_product_by_sku(sku):
    """Obtener un producto por SKU (sin distinguir mayúsculas)"""
    product = _container().product_repo.find_by_sku(sku)
    if product is None:
        return {"success": False, "error": "Producto no encontrado"}, 404
    return {"success": True, "product": product}


@api.route("/api/products", methods=["POST"])
def api_save_product():
    """Crear o actualizar un producto"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return {"success": False, "error": "Datos no recibidos"}, 400

    try:
        product = _container().product_repo.save(data)
    except DuplicateSKUError as e:
        return {"success": False, "error": str(e), "sku": e.sku}, 409
    except ProductValidationError as e:
        return {"success": False, "error": str(e)}, 400

    return {"success": True, "product": product}


@api.route("/api/products/<product_id>", methods=["DELETE"])
def api_delete_product(product_id):
    """Eliminar un producto (borrado definitivo)"""
    removed = _container().product_repo.delete(product_id)
    if not removed:
        return {"success": False, "error": "Producto no encontrado"}, 404
    return {"success": True, "removed": removed}


# ═══════════════════════════════════════════════════════════════════════════════
# FACTURAS
# ═══════════════════════════════════════════════════════════════════════════════

@api.route("/api/invoices/next", methods=["POST"])
def api_next_invoice():
    """Emitir el siguiente número de factura"""
    number = _container().invoice_sequencer.generate()
    return {"success": True, "invoice": number}


# ═══════════════════════════════════════════════════════════════════════════════
# COLECCIONES OPACAS (sin validación en esta capa)
# ═══════════════════════════════════════════════════════════════════════════════

@api.route("/api/<collection>", methods=["GET"])
def api_get_collection(collection):
    name = PASSTHROUGH_COLLECTIONS.get(collection)
    if name is None:
        return {"success": False, "error": "Colección desconocida"}, 404
    return {"success": True, "data": _container().collections.get(name)}


@api.route("/api/<collection>", methods=["PUT"])
def api_put_collection(collection):
    name = PASSTHROUGH_COLLECTIONS.get(collection)
    if name is None:
        return {"success": False, "error": "Colección desconocida"}, 404

    payload = request.get_json(silent=True)
    if not isinstance(payload, dict) or 'data' not in payload:
        return {"success": False, "error": "Se espera {\"data\": ...}"}, 400

    failure = _container().collections.set(name, payload['data'])
    if failure is not None:
        return {"success": False, "error": "No se pudo guardar"}, 507
    return {"success": True, "data": payload['data']}


@api.app_errorhandler(HTTPException)
def handle_http_error(e):
    """Errores HTTP (404, 405, ...) en formato JSON"""
    return {"success": False, "error": e.description}, e.code


@api.route("/health", methods=["GET"])
def health():
    return {"success": True, "status": "ok"}


# ═══════════════════════════════════════════════════════════════════════════════
# FÁBRICA DE APLICACIÓN
# ═══════════════════════════════════════════════════════════════════════════════

def create_app(container: AppContainer = None) -> Flask:
    """
    Crea la aplicación Flask.

    Args:
        container: Contenedor de dependencias (por defecto el global)
    """
    app = Flask(__name__)
    app.json.sort_keys = False
    app.extensions['azizi_pos'] = (container.bootstrap() if container else get_container())
    app.register_blueprint(api)
    return app


if __name__ == '__main__':
    config.configure_logging()
    logger.info("Iniciando API en %s:%s", config.HOST, config.PORT)
    create_app().run(debug=config.DEBUG, host=config.HOST, port=config.PORT)
