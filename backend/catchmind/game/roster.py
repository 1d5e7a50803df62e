from __future__ import annotations

from dataclasses import asdict

from .models import Player, Room


def add_player(room: Room, player_id: str, nickname: str) -> Player:
    player = Player(id=player_id, nickname=nickname, score=0)
    room.players[player_id] = player
    return player


def remove_player(room: Room, player_id: str) -> Player | None:
    return room.players.pop(player_id, None)


def list_players(room: Room) -> list[dict]:
    return [asdict(p) for p in room.players.values()]


def next_drawer_id(room: Room) -> str | None:
    """Rotate the drawer through players in join order, wrapping at the end."""
    player_ids = list(room.players.keys())
    if not player_ids:
        return None
    if room.drawer_id not in player_ids:
        return player_ids[0]
    idx = player_ids.index(room.drawer_id)
    return player_ids[(idx + 1) % len(player_ids)]
