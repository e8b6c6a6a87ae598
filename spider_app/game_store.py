import json
from pathlib import Path

from spider_engine.codec import state_from_dict, state_to_dict
from spider_engine.game import GameState

SLOT_COUNT = 3
SAVE_PREFIX = "savegame_slot"
SAVE_SUFFIX = ".json"


def _slot_path(slot: int) -> Path:
    return Path(__file__).with_name(f"{SAVE_PREFIX}{slot}{SAVE_SUFFIX}")


def _valid_slot(slot: int) -> int:
    try:
        slot_int = int(slot)
    except Exception:
        slot_int = 1
    if slot_int < 1:
        slot_int = 1
    if slot_int > SLOT_COUNT:
        slot_int = SLOT_COUNT
    return slot_int


def has_saved_game(slot: int = 1) -> bool:
    path = _slot_path(_valid_slot(slot))
    return path.exists() and path.is_file()


def save_game(state: GameState, slot: int = 1) -> bool:
    path = _slot_path(_valid_slot(slot))
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(state_to_dict(state), ensure_ascii=False), encoding="utf-8")
        return True
    except Exception:
        return False


def load_game(slot: int = 1) -> GameState | None:
    """Return the saved snapshot, or None when the slot is empty or corrupt."""
    path = _slot_path(_valid_slot(slot))
    if not path.exists() or not path.is_file():
        return None
    try:
        return state_from_dict(json.loads(path.read_text(encoding="utf-8")))
    except Exception:
        return None


def clear_game(slot: int = 1) -> bool:
    path = _slot_path(_valid_slot(slot))
    try:
        path.unlink(missing_ok=True)
        return True
    except OSError:
        return False


def list_slot_status() -> list[dict]:
    rows = []
    for slot in range(1, SLOT_COUNT + 1):
        path = _slot_path(slot)
        exists = path.exists() and path.is_file()
        rows.append({"slot": slot, "exists": exists, "path": str(path.name)})
    return rows
