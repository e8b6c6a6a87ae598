from __future__ import annotations

from dataclasses import asdict

from spider_engine.cards import RANKS, SUIT_COUNT_ORDER, SUITS, Card
from spider_engine.game import DEFAULT_SETTINGS, SETTING_NAMES, GameSettings, GameState


class SnapshotError(ValueError):
    pass


def card_to_dict(card: Card) -> dict:
    return {"id": card.id, "suit": card.suit, "rank": card.rank, "face_up": card.face_up}


def card_from_dict(data) -> Card:
    if not isinstance(data, dict):
        raise SnapshotError(f"card must be an object, got {type(data).__name__}")
    suit = data.get("suit")
    rank = data.get("rank")
    if suit not in SUITS:
        raise SnapshotError(f"bad suit: {suit!r}")
    if rank not in RANKS:
        raise SnapshotError(f"bad rank: {rank!r}")
    return Card(id=str(data.get("id", "")), suit=suit, rank=rank, face_up=bool(data.get("face_up", False)))


def _cards_from_list(data, what: str) -> tuple[Card, ...]:
    if not isinstance(data, list):
        raise SnapshotError(f"{what} must be a list")
    return tuple(card_from_dict(item) for item in data)


def settings_to_dict(settings: GameSettings) -> dict:
    return asdict(settings)


def settings_from_dict(data) -> GameSettings:
    """Unknown keys are dropped and missing ones take defaults."""
    if not isinstance(data, dict):
        return DEFAULT_SETTINGS
    values = asdict(DEFAULT_SETTINGS)
    for name in SETTING_NAMES:
        if name in data:
            values[name] = data[name]
    try:
        suit_count = int(values["suit_count"])
    except (TypeError, ValueError):
        suit_count = DEFAULT_SETTINGS.suit_count
    if suit_count not in SUIT_COUNT_ORDER:
        suit_count = DEFAULT_SETTINGS.suit_count
    values["suit_count"] = suit_count
    for name in SETTING_NAMES:
        if name != "suit_count":
            values[name] = bool(values[name])
    return GameSettings(**values)


def state_to_dict(state: GameState) -> dict:
    return {
        "tableau": [[card_to_dict(c) for c in col] for col in state.tableau],
        "stock": [card_to_dict(c) for c in state.stock],
        "completed": [[card_to_dict(c) for c in pile] for pile in state.completed],
        "moves": state.moves,
        "start_time": state.start_time,
        "is_won": state.is_won,
        "settings": settings_to_dict(state.settings),
    }


def state_from_dict(data) -> GameState:
    """
    Rebuild a snapshot from `state_to_dict` output.

    Only the structure is checked; column counts and card multiplicities are
    left to the caller.
    """
    if not isinstance(data, dict):
        raise SnapshotError("snapshot must be an object")
    tableau = data.get("tableau")
    if not isinstance(tableau, list):
        raise SnapshotError("tableau must be a list")
    completed = data.get("completed", [])
    if not isinstance(completed, list):
        raise SnapshotError("completed must be a list")
    try:
        moves = int(data.get("moves", 0))
        start_time = data.get("start_time")
        start_time = None if start_time is None else int(start_time)
    except (TypeError, ValueError) as e:
        raise SnapshotError(f"bad scalar field: {e}") from e

    return GameState(
        tableau=tuple(_cards_from_list(col, "column") for col in tableau),
        stock=_cards_from_list(data.get("stock", []), "stock"),
        completed=tuple(_cards_from_list(pile, "completed pile") for pile in completed),
        moves=moves,
        start_time=start_time,
        is_won=bool(data.get("is_won", False)),
        settings=settings_from_dict(data.get("settings")),
    )
