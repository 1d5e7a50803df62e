from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Mapping, Optional


RoomPhase = Literal["idle", "active", "game_over"]
RoundOutcome = Literal["timed_out", "guessed_correctly", "drawer_left"]


@dataclass
class Player:
    id: str
    nickname: str
    score: int = 0


@dataclass
class Room:
    room_id: str
    max_rounds: int = 5
    category: str = "food"
    phase: RoomPhase = "idle"
    round: int = 0
    drawer_id: str | None = None
    current_word: str | None = None
    # Insertion order is the drawer rotation order.
    players: dict[str, Player] = field(default_factory=dict)
    # Bumped on every round start; scheduled callbacks compare against it.
    epoch: int = 0
    timeout_handle: Optional[Any] = None
    hint_handle: Optional[Any] = None
    next_round_handle: Optional[Any] = None

    @property
    def round_active(self) -> bool:
        return self.phase == "active"

    def pending_handles(self) -> list[Any]:
        return [
            h
            for h in (self.timeout_handle, self.hint_handle, self.next_round_handle)
            if h is not None
        ]


@dataclass(frozen=True)
class GameSettings:
    round_duration_sec: float = 40
    max_rounds: int = 5
    score_reward: int = 10
    cooldown_sec: float = 3
    default_category: str = "food"
    nickname_max_length: int = 16

    @property
    def hint_delay_sec(self) -> float:
        return self.round_duration_sec / 2

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "GameSettings":
        return cls(
            round_duration_sec=config.get("ROUND_DURATION_SEC", 40),
            max_rounds=config.get("MAX_ROUNDS", 5),
            score_reward=config.get("SCORE_REWARD", 10),
            cooldown_sec=config.get("ROUND_COOLDOWN_SEC", 3),
            default_category=config.get("DEFAULT_CATEGORY", "food"),
            nickname_max_length=config.get("NICKNAME_MAX_LENGTH", 16),
        )
