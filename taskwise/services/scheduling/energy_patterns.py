"""Hour-of-day energy tables per chronotype."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet

from taskwise.api.schemas.preferences import EnergyType
from taskwise.api.schemas.task import EnergyLevel


@dataclass(frozen=True)
class EnergyPattern:
    peak: int
    good: FrozenSet[int]
    medium: FrozenSet[int]

    def level_for(self, hour: int) -> EnergyLevel:
        """Label an hour: peak or good hours are High, medium hours Medium, the rest Low."""
        if hour == self.peak or hour in self.good:
            return "High"
        if hour in self.medium:
            return "Medium"
        return "Low"


ENERGY_PATTERNS: Dict[EnergyType, EnergyPattern] = {
    "morning": EnergyPattern(peak=9, good=frozenset({8, 10, 11}), medium=frozenset({7, 12, 13})),
    "afternoon": EnergyPattern(peak=14, good=frozenset({13, 15, 16}), medium=frozenset({11, 12, 17})),
    "evening": EnergyPattern(peak=19, good=frozenset({18, 20}), medium=frozenset({17, 21})),
    "flexible": EnergyPattern(peak=10, good=frozenset({9, 11, 14, 15}), medium=frozenset({8, 12, 13, 16, 17})),
}


def energy_pattern_for(energy_type: EnergyType) -> EnergyPattern:
    return ENERGY_PATTERNS[energy_type]
