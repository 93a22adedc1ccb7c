"""Staff records: roster, per-member metrics and activation."""

from flask import Blueprint, abort, jsonify, request

from ..models import new_id
from ..store import get_store
from . import get_or_404, json_object

bp = Blueprint("staff", __name__)

ROLES = ("manager", "server", "bartender")
METRIC_KEYS = ("averageRating", "ordersServed", "salesVolume")


def _check_role(data):
    if "role" in data and data["role"] not in ROLES:
        abort(400, description=f"Unknown staff role {data['role']!r}")


@bp.get("")
def list_staff():
    members = get_store().staff.list()
    if request.args.get("active") == "true":
        members = [m for m in members if m.get("isActive")]
    return jsonify(members)


@bp.get("/<staff_id>")
def get_staff(staff_id):
    return jsonify(get_or_404(get_store().staff, staff_id, "Staff member not found"))


@bp.post("")
def create_staff():
    data = json_object()
    _check_role(data)
    member = {
        "metrics": {"averageRating": 0, "ordersServed": 0, "salesVolume": 0},
        "sections": [],
        "isActive": True,
        "status": "active",
    }
    member.update(data)
    member["id"] = new_id()
    get_store().staff.add(member)
    return jsonify(member), 201


@bp.put("/<staff_id>")
def update_staff(staff_id):
    store = get_store()
    data = json_object()
    data.pop("id", None)
    _check_role(data)
    with store.lock:
        member = get_or_404(store.staff, staff_id, "Staff member not found")
        member.update(data)
        store.staff.save(member)
    return jsonify(member)


@bp.patch("/<staff_id>/metrics")
def update_metrics(staff_id):
    store = get_store()
    data = json_object()
    unknown = [k for k in data if k not in METRIC_KEYS]
    if unknown:
        abort(400, description=f"Unknown metrics: {', '.join(sorted(unknown))}")
    with store.lock:
        member = get_or_404(store.staff, staff_id, "Staff member not found")
        metrics = dict(member.get("metrics") or {})
        metrics.update(data)
        member["metrics"] = metrics
        store.staff.save(member)
    return jsonify(member)


def _set_active(staff_id, active):
    store = get_store()
    with store.lock:
        member = get_or_404(store.staff, staff_id, "Staff member not found")
        member["isActive"] = active
        member["status"] = "active" if active else "inactive"
        store.staff.save(member)
    return member


@bp.patch("/<staff_id>/status")
def update_status(staff_id):
    data = json_object()
    if data.get("status") not in ("active", "inactive"):
        abort(400, description="status must be 'active' or 'inactive'")
    return jsonify(_set_active(staff_id, data["status"] == "active"))


@bp.post("/<staff_id>/deactivate")
def deactivate(staff_id):
    return jsonify(_set_active(staff_id, False))
