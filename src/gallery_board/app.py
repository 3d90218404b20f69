"""Flask presentation layer for the gallery board.

The page is rendered server-side; editing, deleting, renaming and drag &
drop go through small JSON-aware POST endpoints (``Accept:
application/json`` or ``X-Requested-With`` gets JSON, anything else gets a
flash message and a redirect).
"""

from __future__ import annotations

from flask import (
    Blueprint, Flask, current_app, flash, jsonify, redirect,
    render_template_string, request, url_for,
)
from loguru import logger
from markupsafe import Markup

from .config import load_settings
from .drag import DragReorderEngine
from .errors import NotFoundError
from .storage import FileStorage
from .store import ItemStore
from .templates import BASE, INDEX, PLACEHOLDER_URL
from .validation import is_valid_url
from .workflow import EditWorkflow, confirm_delete, rename_header

bp = Blueprint("gallery", __name__)
# only whitelisted schemes become clickable links, whatever the URL policy
bp.add_app_template_test(is_valid_url, "safe_url")


def create_app(settings=None, storage=None) -> Flask:
    settings = settings or load_settings()
    app = Flask(__name__)
    app.secret_key = settings.secret_key
    app.config["GALLERY_SETTINGS"] = settings
    if storage is None:
        storage = FileStorage(settings.data_dir)
    store = ItemStore(storage, require_valid_url=settings.strict_urls).load()
    app.extensions["gallery_store"] = store
    app.register_blueprint(bp)
    return app


def get_store() -> ItemStore:
    return current_app.extensions["gallery_store"]


def wants_json():
    return request.headers.get("Accept", "").find("application/json") >= 0 or bool(request.headers.get("X-Requested-With"))


def item_payload(item):
    return {"id": item.id, "title": item.title, "imageUrl": item.image_url, "createdAt": item.created_at}


def page(tpl, **ctx):
    store = get_store()
    ctx.setdefault("header_title", store.header_title)
    ctx.setdefault("placeholder_url", PLACEHOLDER_URL)
    return render_template_string(BASE, content=Markup(render_template_string(tpl, **ctx)), **ctx)


# ----------------------------
# Routes
# ----------------------------
@bp.route("/", methods=["GET"])
def index():
    return page(INDEX, items=get_store().items)


@bp.route("/api/items")
def api_items():
    return jsonify(get_store().snapshot())


def _commit(workflow):
    item = workflow.submit()
    if item is not None:
        if wants_json():
            return jsonify({"ok": True, "item": item_payload(item)})
        flash("Image saved.", "success")
        return redirect(url_for("gallery.index"))
    if workflow.draft is None:
        # edited item vanished between open and submit
        if wants_json():
            return jsonify({"ok": False, "error": "not_found"}), 404
        return redirect(url_for("gallery.index"))
    error = workflow.draft.error
    workflow.cancel()
    if wants_json():
        return jsonify({"ok": False, "error": error}), 400
    flash(error, "danger")
    return redirect(url_for("gallery.index"))


@bp.route("/items", methods=["POST"])
def add_item():
    workflow = EditWorkflow(get_store())
    workflow.open_add()
    workflow.set_title(request.form.get("title", ""))
    workflow.set_image_url(request.form.get("url", ""))
    return _commit(workflow)


@bp.route("/items/<iid>/edit", methods=["POST"])
def edit_item(iid):
    store = get_store()
    workflow = EditWorkflow(store)
    try:
        draft = workflow.open_edit(iid)
    except NotFoundError as e:
        logger.warning("Edit requested for unknown item: {}", e)
        if wants_json():
            return jsonify({"ok": False, "error": "not_found"}), 404
        return redirect(url_for("gallery.index"))
    workflow.set_title(request.form.get("title", draft.title))
    workflow.set_image_url(request.form.get("url", draft.image_url))
    return _commit(workflow)


@bp.route("/items/<iid>/delete", methods=["POST"])
def delete_item(iid):
    store = get_store()
    confirmed = (request.form.get("confirm") or "").lower() in ("yes", "true", "1")
    if store.get(iid) is None:
        logger.warning("Delete requested for unknown item {}", iid)
        if wants_json():
            return jsonify({"ok": False, "error": "not_found"}), 404
        return redirect(url_for("gallery.index"))
    removed = confirm_delete(store, iid, lambda item: confirmed)
    if wants_json():
        if not removed:
            return jsonify({"ok": False, "error": "not_confirmed"}), 400
        return jsonify({"ok": True})
    if removed:
        flash("Image deleted.", "info")
    return redirect(url_for("gallery.index"))


@bp.route("/title", methods=["POST"])
def rename_title():
    store = get_store()
    answer = request.form.get("title")
    changed = rename_header(store, lambda current: answer)
    if wants_json():
        return jsonify({"ok": True, "changed": changed, "title": store.header_title})
    return redirect(url_for("gallery.index"))


@bp.route("/reorder", methods=["POST"])
def reorder():
    """Apply one drag: ``{"active": id, "from": i, "to": j}``."""
    payload = request.get_json(force=True, silent=True)
    if not isinstance(payload, dict):
        payload = {}
    store = get_store()
    src, dst = payload.get("from"), payload.get("to")
    if not all(isinstance(v, int) and not isinstance(v, bool) for v in (src, dst)):
        return jsonify({"ok": False, "error": "bad_request"}), 400
    items = store.items
    active = payload.get("active")
    if not (0 <= src < len(items) and 0 <= dst < len(items)) or (active and items[src].id != active):
        logger.warning("Stale reorder request {} -> {} for {}", src, dst, active)
        return jsonify({"ok": False, "error": "stale"}), 409
    instruction = DragReorderEngine(store).drop(items[src].id, items[dst].id)
    return jsonify({"ok": True, "moved": instruction is not None,
                    "order": [it.id for it in store.items]})
