"""Tag predicates, capacity settings and the two scheduled scaling modes."""
from dataclasses import dataclass
from enum import Enum
from typing import Dict


@dataclass(frozen=True)
class TagPredicate:
    """Single key/value equality test used to opt a cluster into an action."""
    key: str
    value: str

    def matches(self, tags: Dict[str, str]) -> bool:
        return tags.get(self.key) == self.value

    def __str__(self) -> str:
        return f"{self.key}={self.value}"


@dataclass(frozen=True)
class CapacitySetting:
    """Aurora Serverless v2 capacity bounds in ACUs."""
    min_capacity: int
    max_capacity: int

    def to_dict(self) -> Dict[str, int]:
        return {'min_capacity': self.min_capacity, 'max_capacity': self.max_capacity}


class ScalingMode(Enum):
    """Scheduled scaling modes and the tag each one acts on."""
    PREWARM = "prewarm"
    COOLDOWN = "cooldown"

    @property
    def predicate(self) -> TagPredicate:
        return TagPredicate(key=self.value, value="yes")

    @property
    def default_setting(self) -> CapacitySetting:
        return _DEFAULT_SETTINGS[self]

    @classmethod
    def from_name(cls, name: str) -> "ScalingMode":
        """Look up a mode by name, accepting activate/deactivate as aliases."""
        normalized = (name or "").strip().lower()
        aliases = {
            "activate": cls.PREWARM,
            "deactivate": cls.COOLDOWN,
        }
        if normalized in aliases:
            return aliases[normalized]
        try:
            return cls(normalized)
        except ValueError:
            valid = [mode.value for mode in cls] + list(aliases)
            raise ValueError(f"Unknown scaling mode: {name!r}. Must be one of {valid}") from None


_DEFAULT_SETTINGS = {
    ScalingMode.PREWARM: CapacitySetting(min_capacity=8, max_capacity=64),
    ScalingMode.COOLDOWN: CapacitySetting(min_capacity=2, max_capacity=32),
}
