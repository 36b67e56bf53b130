"""Engine configuration for Descent."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

_BASE_DIR = Path(__file__).resolve().parent.parent
SETTINGS_PATH = _BASE_DIR / "settings.json"

SAN_MIN = 0
SAN_MAX = 100
INITIAL_SANITY = 100
DEFAULT_SCENES_PATH = "world/scenes.json"


def _clamp(value: int, minimum: int, maximum: int) -> int:
    return max(minimum, min(maximum, value))


@dataclass(frozen=True)
class Settings:
    """Immutable session configuration shared by the catalog and the session loop."""

    san_min: int = SAN_MIN
    san_max: int = SAN_MAX
    initial_sanity: int = INITIAL_SANITY
    scenes_path: str = DEFAULT_SCENES_PATH

    def clamp(self) -> "Settings":
        san_min, san_max = int(self.san_min), int(self.san_max)
        if san_min > san_max:
            san_min, san_max = san_max, san_min
        return replace(
            self,
            san_min=san_min,
            san_max=san_max,
            initial_sanity=_clamp(int(self.initial_sanity), san_min, san_max),
            scenes_path=str(self.scenes_path) or DEFAULT_SCENES_PATH,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any] | None) -> "Settings":
        if not isinstance(data, dict):
            return cls()

        def _as_int(key: str, default: int) -> int:
            value = data.get(key, default)
            if isinstance(value, bool):
                return default
            try:
                return int(value)
            except (TypeError, ValueError):
                return default

        settings = cls(
            san_min=_as_int("san_min", SAN_MIN),
            san_max=_as_int("san_max", SAN_MAX),
            initial_sanity=_as_int("initial_sanity", INITIAL_SANITY),
            scenes_path=str(data.get("scenes_path") or DEFAULT_SCENES_PATH),
        )
        return settings.clamp()


def load_settings(path: Path | str = SETTINGS_PATH) -> Settings:
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except FileNotFoundError:
        return Settings()
    except (OSError, ValueError, TypeError) as exc:
        logger.warning(f"Ignoring unreadable settings file {path}: {exc}")
        return Settings()
    return Settings.from_dict(data)
