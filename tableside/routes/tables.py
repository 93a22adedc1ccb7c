"""
Project: Tableside
Description:
Table routes: status changes, reservations and service requests
("call a server", "more ice", ...) raised from the table screen.
"""

import logging

from flask import Blueprint, abort, jsonify, request

from ..models import TableStatus, new_id, now_iso
from ..store import get_store
from . import get_or_404, json_object

log = logging.getLogger(__name__)

bp = Blueprint("tables", __name__)

SERVICE_REQUEST_STATUSES = ("pending", "completed", "cancelled")


@bp.get("")
def list_tables():
    tables = get_store().tables.list()
    status = request.args.get("status")
    if status:
        tables = [t for t in tables if t.get("status") == status]
    return jsonify(tables)


@bp.get("/venue/<venue_id>")
def list_venue_tables(venue_id):
    return jsonify(get_store().tables.filter(lambda t: t.get("venueId") == venue_id))


@bp.get("/<table_id>")
def get_table(table_id):
    return jsonify(get_or_404(get_store().tables, table_id, "Table not found"))


@bp.patch("/<table_id>/status")
def update_status(table_id):
    store = get_store()
    data = json_object()
    try:
        status = TableStatus(data.get("status"))
    except ValueError:
        abort(400, description=f"Unknown table status {data.get('status')!r}")
    if status == TableStatus.RESERVED:
        abort(400, description="Use POST /tables/<id>/reservations to reserve a table")
    with store.lock:
        table = get_or_404(store.tables, table_id, "Table not found")
        table["status"] = status.value
        store.tables.save(table)
    return jsonify(table)


@bp.post("/<table_id>/reservations")
def create_reservation(table_id):
    store = get_store()
    reservation = json_object()
    with store.lock:
        table = get_or_404(store.tables, table_id, "Table not found")
        if table.get("status") != TableStatus.AVAILABLE.value:
            abort(400, description="Table is not available")
        reservation["id"] = str(reservation.get("id") or new_id())
        table["reservation"] = reservation
        table["status"] = TableStatus.RESERVED.value
        store.tables.save(table)
    log.info("Table %s reserved (%s)", table_id, reservation["id"])
    return jsonify(table)


@bp.delete("/<table_id>/reservations/<reservation_id>")
def cancel_reservation(table_id, reservation_id):
    store = get_store()
    with store.lock:
        table = get_or_404(store.tables, table_id, "Table not found")
        current = table.get("reservation")
        if not current or str(current.get("id")) != reservation_id:
            abort(404, description="Reservation not found")
        table["reservation"] = None
        table["status"] = TableStatus.AVAILABLE.value
        store.tables.save(table)
    log.info("Reservation %s on table %s cancelled", reservation_id, table_id)
    return jsonify(table)


@bp.get("/<table_id>/service-requests")
def list_service_requests(table_id):
    store = get_store()
    get_or_404(store.tables, table_id, "Table not found")
    return jsonify(store.service_requests.filter(lambda r: r.get("tableId") == table_id))


@bp.post("/<table_id>/service-requests")
def create_service_request(table_id):
    store = get_store()
    data = json_object()
    if not data.get("type"):
        abort(400, description="type is required")
    get_or_404(store.tables, table_id, "Table not found")
    service_request = {
        "id": new_id(),
        "tableId": table_id,
        "type": data["type"],
        "note": data.get("note"),
        "status": "pending",
        "createdAt": now_iso(),
    }
    store.service_requests.add(service_request)
    log.info("Service request %s (%s) from table %s", service_request["id"], data["type"], table_id)
    return jsonify(service_request), 201


@bp.patch("/<table_id>/service-requests/<request_id>")
def update_service_request(table_id, request_id):
    store = get_store()
    data = json_object()
    status = data.get("status")
    if status not in SERVICE_REQUEST_STATUSES:
        abort(400, description=f"Unknown service request status {status!r}")
    with store.lock:
        service_request = get_or_404(store.service_requests, request_id, "Service request not found")
        if service_request.get("tableId") != table_id:
            abort(404, description="Service request not found")
        service_request["status"] = status
        service_request["updatedAt"] = now_iso()
        store.service_requests.save(service_request)
    return jsonify(service_request)
