"""Deterministic label-to-color lookup over a configured palette."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence


@dataclass(frozen=True)
class ColorPalette:
    colors: tuple
    noise_color: str = "#808080"

    def __post_init__(self) -> None:
        if not self.colors:
            raise ValueError("A palette needs at least one color.")
        object.__setattr__(self, "colors", tuple(self.colors))

    def color_index(self, label: int) -> int:
        """Palette slot for a label; -1 for noise."""

        return -1 if label < 0 else int(label) % len(self.colors)

    def color_for(self, label: int) -> str:
        idx = self.color_index(label)
        return self.noise_color if idx < 0 else self.colors[idx]

    def colors_for(self, labels: Sequence[int]) -> List[str]:
        return [self.color_for(int(label)) for label in labels]
