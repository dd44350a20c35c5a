# ABOUTME: User reading preferences (three sliders plus genre picks) and their JSON storage.
# ABOUTME: Missing fields are back-filled with defaults on load; a corrupt file yields defaults.

import json
import logging
from dataclasses import asdict, dataclass, field, replace
from pathlib import Path
from typing import Any

from readdit.text.labels import KNOWN_GENRES

logger = logging.getLogger(__name__)

DEFAULT_PREFS_PATH = Path.home() / ".readdit" / "prefs.json"

SLIDERS = ("style", "pace", "complexity")
_SLIDER_MIN = 0
_SLIDER_MAX = 100
_SLIDER_DEFAULT = 50


@dataclass(frozen=True)
class Preferences:
    """What the user told us about their taste.

    Sliders run 0-100 with 50 as the neutral midpoint. ``genres`` is an
    ordered, duplicate-free list of genre tokens (see KNOWN_GENRES).
    """

    style: int = _SLIDER_DEFAULT
    pace: int = _SLIDER_DEFAULT
    complexity: int = _SLIDER_DEFAULT
    genres: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        for name in SLIDERS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                msg = f"{name} must be an integer, got {value!r}"
                raise ValueError(msg)
            if not _SLIDER_MIN <= value <= _SLIDER_MAX:
                msg = f"{name} must be between {_SLIDER_MIN} and {_SLIDER_MAX}, got {value}"
                raise ValueError(msg)
        # Frozen: normalize genres through object.__setattr__.
        object.__setattr__(self, "genres", tuple(dict.fromkeys(self.genres)))

    def with_slider(self, name: str, value: int) -> "Preferences":
        if name not in SLIDERS:
            msg = f"unknown slider {name!r}"
            raise ValueError(msg)
        return replace(self, **{name: value})

    def toggle_genre(self, genre: str) -> "Preferences":
        """Select the genre if it is not selected, otherwise deselect it."""
        if genre in self.genres:
            return replace(self, genres=tuple(g for g in self.genres if g != genre))
        return replace(self, genres=(*self.genres, genre))

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["genres"] = list(self.genres)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Preferences":
        """Build from stored data, back-filling any missing field with its default."""
        defaults = cls()
        values: dict[str, Any] = {
            name: data.get(name, getattr(defaults, name)) for name in SLIDERS
        }
        genres = data.get("genres", [])
        if not isinstance(genres, list):
            msg = f"genres must be a list, got {type(genres).__name__}"
            raise ValueError(msg)
        values["genres"] = tuple(str(g) for g in genres)
        return cls(**values)


def load_preferences(path: Path | None = None) -> Preferences:
    """Read preferences from ``path``; defaults when the file is missing or unusable."""
    path = path or DEFAULT_PREFS_PATH
    if not path.exists():
        return Preferences()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            msg = "preferences file does not hold an object"
            raise ValueError(msg)
        prefs = Preferences.from_dict(data)
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable preferences at %s: %s", path, exc)
        return Preferences()

    unknown = [g for g in prefs.genres if g not in KNOWN_GENRES]
    if unknown:
        logger.debug("Preferences contain unknown genres: %s", ", ".join(unknown))
    return prefs


def save_preferences(prefs: Preferences, path: Path | None = None) -> Path:
    """Write preferences as JSON, creating parent directories. Returns the path written."""
    path = path or DEFAULT_PREFS_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(prefs.to_dict(), indent=2) + "\n", encoding="utf-8")
    return path
