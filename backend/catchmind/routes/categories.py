from __future__ import annotations

from flask import Blueprint, current_app, jsonify

bp = Blueprint("categories", __name__)


@bp.get("/categories")
def get_categories():
    words = current_app.extensions["catchmind"].words
    return jsonify({"categories": words.categories(), "default": words.default_category})
