"""
Player configuration data model
"""

from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Optional
import re


_INT_RE = re.compile(r"^-?\d+$")
_FLOAT_RE = re.compile(r"^-?\d*\.\d+$")


def serialize_value(value: Any) -> Any:
    """
    Convert string config values to their natural type

    "true"/"false" become booleans and numeric strings become numbers.
    Anything else is returned unchanged.
    """
    if not isinstance(value, str):
        return value

    text = value.strip()
    lowered = text.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if _INT_RE.match(text):
        return int(text)
    if _FLOAT_RE.match(text):
        return float(text)
    return value


def _default_components() -> Dict[str, dict]:
    return {'controlbar': {}, 'display': {}}


@dataclass(frozen=True)
class PlayerConfig:
    """
    Flat player settings

    Attributes:
        id: Player identifier, handed to every provider constructor
        primary: Preferred provider name, tried first by the registry
        volume: Initial volume (0 - 100)
        mute: Initial mute flag
        components: Per-component configuration (controlbar, display)
    """
    id: str = "player"
    autostart: bool = False
    controls: bool = True
    fullscreen: bool = False
    height: int = 320
    width: int = 480
    mobilecontrols: bool = False
    mute: bool = False
    playlistposition: str = "none"
    playlistsize: int = 180
    playlistlayout: str = "extended"
    repeat: bool = False
    stretching: str = "uniform"
    volume: int = 90
    primary: str = "html5"
    androidhls: bool = False
    components: Dict[str, dict] = field(default_factory=_default_components)

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def with_overrides(self, overrides: Optional[Dict[str, Any]]) -> 'PlayerConfig':
        """Return a copy with known keys replaced (unknown keys are ignored)"""
        if not overrides:
            return self
        known = {f.name for f in fields(self)}
        changes = {
            key: serialize_value(value)
            for key, value in overrides.items()
            if key in known
        }
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'PlayerConfig':
        """Create PlayerConfig object from dictionary"""
        return cls().with_overrides(data)
