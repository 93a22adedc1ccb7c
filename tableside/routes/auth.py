"""
Project: Tableside
Description:
Guest authentication. Logging in sets the Flask session and also hands
back a signed bearer token for clients that do not keep cookies.
"""

import logging

from flask import Blueprint, abort, current_app, jsonify, request, session
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from werkzeug.security import check_password_hash, generate_password_hash

from ..models import new_id, now_iso
from ..store import get_store
from . import json_object

log = logging.getLogger(__name__)

bp = Blueprint("auth", __name__)

TOKEN_SALT = "tableside-auth"


def _serializer():
    return URLSafeTimedSerializer(current_app.config["SECRET_KEY"], salt=TOKEN_SALT)


def issue_token(user_id):
    return _serializer().dumps({"uid": user_id})


def public_user(user):
    return {k: v for k, v in user.items() if k != "passwordHash"}


def current_user():
    """User for the bearer token or session, or None."""
    store = get_store()
    header = request.headers.get("Authorization", "")
    if header.startswith("Bearer "):
        try:
            data = _serializer().loads(header[7:], max_age=current_app.config["TOKEN_MAX_AGE"])
        except SignatureExpired:
            abort(401, description="Token expired")
        except BadSignature:
            abort(401, description="Invalid token")
        return store.users.get(data.get("uid"))
    user_id = session.get("user_id")
    if user_id:
        return store.users.get(user_id)
    return None


@bp.post("/login")
def login():
    data = json_object()
    email = (data.get("email") or "").strip().lower()
    password = data.get("password") or ""
    store = get_store()
    user = store.users.find(lambda u: (u.get("email") or "").lower() == email)
    if not user or not user.get("passwordHash") or not check_password_hash(user["passwordHash"], password):
        log.info("Failed login for %s", email or "<blank>")
        return jsonify({"message": "Invalid credentials"}), 401

    user["lastLoginAt"] = now_iso()
    store.users.save(user)
    session["user_id"] = user["id"]
    return jsonify({"user": public_user(user), "token": issue_token(user["id"])})


@bp.post("/register")
def register():
    data = json_object()
    email = (data.get("email") or "").strip().lower()
    password = data.get("password") or ""
    if not email or not password:
        abort(400, description="Email and password are required")

    store = get_store()
    with store.lock:
        if store.users.find(lambda u: (u.get("email") or "").lower() == email):
            abort(400, description="Email already registered")
        user = {k: v for k, v in data.items() if k not in ("password", "passwordHash", "id")}
        first, last = data.get("firstName", ""), data.get("lastName", "")
        user.update({
            "id": new_id(),
            "email": email,
            "name": data.get("name") or f"{first} {last}".strip(),
            "role": "customer",
            "passwordHash": generate_password_hash(password),
            "paymentMethods": data.get("paymentMethods") or [],
            "favorites": data.get("favorites") or [],
            "createdAt": now_iso(),
            "updatedAt": now_iso(),
            "lastLoginAt": now_iso(),
        })
        store.users.add(user)

    log.info("Registered user %s", user["id"])
    return jsonify(public_user(user)), 201


@bp.get("/me")
def me():
    user = current_user()
    if not user:
        return jsonify({"message": "login_required"}), 401
    return jsonify(public_user(user))


@bp.post("/logout")
def logout():
    session.clear()
    return jsonify({"ok": True})
