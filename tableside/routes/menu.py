"""
Project: Tableside
Description:
Menu categories and products. Responses are wrapped as
{"success": bool, "data": ...} so the menu screen can tell an empty menu
from a failed request.
"""

from flask import Blueprint, jsonify, request

from ..store import get_store

bp = Blueprint("menu", __name__)

INVENTORY_KEYS = ("current", "minimum", "maximum")


def ok(data, status=200):
    return jsonify({"success": True, "data": data}), status


def fail(message, status):
    return jsonify({"success": False, "error": message}), status


@bp.get("/categories")
def list_categories():
    categories = sorted(get_store().categories.list(), key=lambda c: c.get("displayOrder", 0))
    return ok(categories)


@bp.get("/categories/<category_id>")
def get_category(category_id):
    category = get_store().categories.get(category_id)
    if not category:
        return fail("Category not found", 404)
    return ok(category)


@bp.patch("/categories/<category_id>")
def update_category(category_id):
    store = get_store()
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return fail("Request body must be a JSON object", 400)
    with store.lock:
        category = store.categories.get(category_id)
        if not category:
            return fail("Category not found", 404)
        data.pop("id", None)
        category.update(data)
        store.categories.save(category)
    return ok(category)


@bp.get("/categories/<category_id>/products")
def list_category_products(category_id):
    products = get_store().products.filter(lambda p: p.get("category") == category_id)
    return ok(products)


@bp.get("/products")
def list_products():
    store = get_store()
    category = request.args.get("category")
    section = request.args.get("section")
    products = store.products.list()
    if category:
        products = [p for p in products if p.get("category") == category]
    if section:
        products = [p for p in products if p.get("section") == section]
    return ok(products)


@bp.get("/products/<product_id>")
def get_product(product_id):
    product = get_store().products.get(product_id)
    if not product:
        return fail("Product not found", 404)
    return ok(product)


@bp.route("/products/<product_id>", methods=["PUT", "PATCH"])
def update_product(product_id):
    store = get_store()
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return fail("Request body must be a JSON object", 400)
    data.pop("id", None)
    with store.lock:
        product = store.products.get(product_id)
        if not product:
            return fail("Product not found", 404)
        product.update(data)
        store.products.save(product)
    return ok(product)


@bp.patch("/products/<product_id>/inventory")
def update_inventory(product_id):
    store = get_store()
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return fail("Request body must be a JSON object", 400)
    changes = {}
    for key in INVENTORY_KEYS:
        if key in data:
            try:
                changes[key] = int(data[key])
            except (TypeError, ValueError):
                return fail(f"inventory.{key} must be an integer", 400)
            if changes[key] < 0:
                return fail(f"inventory.{key} cannot be negative", 400)
    with store.lock:
        product = store.products.get(product_id)
        if not product:
            return fail("Product not found", 404)
        inventory = dict(product.get("inventory") or {})
        inventory.update(changes)
        product["inventory"] = inventory
        if "current" in changes:
            product["status"] = "available" if inventory["current"] > 0 else "out_of_stock"
        store.products.save(product)
    return ok(product)
