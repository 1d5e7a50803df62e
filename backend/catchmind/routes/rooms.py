from __future__ import annotations

from flask import Blueprint, current_app, jsonify

bp = Blueprint("rooms", __name__)


@bp.get("/rooms/<room_id>")
def get_room(room_id: str):
    game = current_app.extensions["catchmind"]
    room = game.get_room(room_id)
    if not room:
        return jsonify({"error": "room_not_found"}), 404
    return jsonify(game.room_state(room))
