import configparser
from dataclasses import asdict
from pathlib import Path

from spider_engine.cards import SUIT_COUNT_ORDER
from spider_engine.game import DEFAULT_SETTINGS, SETTING_NAMES, GameSettings

SETTINGS_PATH = Path(__file__).with_name("settings.ini")
SECTION = "game"

BOOLEAN_STATES = configparser.ConfigParser.BOOLEAN_STATES


def _as_bool(raw, default: bool) -> bool:
    if isinstance(raw, bool):
        return raw
    return BOOLEAN_STATES.get(str(raw).strip().lower(), default)


def _sanitize(raw: dict) -> GameSettings:
    defaults = asdict(DEFAULT_SETTINGS)
    data = {}
    try:
        suit_count = int(raw.get("suit_count", defaults["suit_count"]))
    except Exception:
        suit_count = defaults["suit_count"]
    if suit_count not in SUIT_COUNT_ORDER:
        suit_count = defaults["suit_count"]
    data["suit_count"] = suit_count

    for name in SETTING_NAMES:
        if name == "suit_count":
            continue
        data[name] = _as_bool(raw.get(name, defaults[name]), defaults[name])
    return GameSettings(**data)


def load_settings() -> GameSettings:
    parser = configparser.ConfigParser()
    if not SETTINGS_PATH.exists():
        return DEFAULT_SETTINGS
    try:
        parser.read(SETTINGS_PATH, encoding="utf-8")
    except Exception:
        return DEFAULT_SETTINGS
    if SECTION not in parser:
        return DEFAULT_SETTINGS
    return _sanitize(dict(parser[SECTION]))


def save_settings(settings: GameSettings) -> bool:
    data = _sanitize(asdict(settings))
    parser = configparser.ConfigParser()
    parser[SECTION] = {k: str(v).lower() if isinstance(v, bool) else str(v) for k, v in asdict(data).items()}
    try:
        SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
        with SETTINGS_PATH.open("w", encoding="utf-8") as f:
            parser.write(f)
        return True
    except OSError:
        return False
