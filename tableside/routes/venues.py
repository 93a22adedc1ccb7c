from flask import Blueprint, jsonify

from ..store import get_store
from . import get_or_404, json_object

bp = Blueprint("venues", __name__)


@bp.get("")
def list_venues():
    return jsonify(get_store().venues.list())


@bp.get("/<venue_id>")
def get_venue(venue_id):
    return jsonify(get_or_404(get_store().venues, venue_id, "Venue not found"))


@bp.put("/<venue_id>")
def update_venue(venue_id):
    store = get_store()
    data = json_object()
    data.pop("id", None)
    with store.lock:
        venue = get_or_404(store.venues, venue_id, "Venue not found")
        venue.update(data)
        store.venues.save(venue)
    return jsonify(venue)
