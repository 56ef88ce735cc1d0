"""Justified row layout for variable-aspect thumbnails.

Items are packed greedily into rows at a nominal height, then each row is
scaled so it spans the available width exactly, unless that would make the
row taller than ``max_height_factor`` times the nominal height.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from core.settings import LayoutSettings
from world_model.window_state import Frame


@dataclass(frozen=True)
class LayoutItem:
    """One input: caller index plus width/height ratio."""

    index: int
    aspect_ratio: float


@dataclass(frozen=True)
class LayoutRow:
    indices: tuple[int, ...]
    item_widths: tuple[float, ...]
    height: float

    @property
    def width(self) -> float:
        return sum(self.item_widths)


@dataclass(frozen=True)
class LayoutResult:
    rows: tuple[LayoutRow, ...]
    total_height: float


@dataclass(frozen=True)
class Placement:
    """Absolute rectangle for one item."""

    index: int
    x: float
    y: float
    width: float
    height: float


EMPTY_LAYOUT = LayoutResult(rows=(), total_height=0.0)


def aspect_ratio_for(frame: Frame, settings: LayoutSettings | None = None) -> float:
    """Width/height of a window frame, with a fallback for flat frames."""
    settings = settings or LayoutSettings()
    if frame.height <= 0:
        return settings.default_aspect_ratio
    return max(frame.width / frame.height, settings.min_aspect_ratio)


class JustifiedLayout:
    """Pure row-packing engine; holds only its constants."""

    def __init__(self, settings: LayoutSettings | None = None) -> None:
        self.settings = settings or LayoutSettings()

    def compute(self, items: Sequence[LayoutItem], available_width: float) -> LayoutResult:
        if not items:
            return EMPTY_LAYOUT
        ratios = {item.index: max(item.aspect_ratio, self.settings.min_aspect_ratio) for item in items}
        rows = self._partition(items, ratios, available_width)
        justified = tuple(self._justify(row, ratios, available_width) for row in rows)
        total = sum(row.height for row in justified) + (len(justified) - 1) * self.settings.v_spacing
        return LayoutResult(rows=justified, total_height=total)

    def _uncompressed_width(self, row: list[int], ratios: dict[int, float]) -> float:
        return (
            sum(ratios[i] for i in row) * self.settings.target_row_height
            + (len(row) - 1) * self.settings.h_spacing
        )

    def _partition(
        self, items: Sequence[LayoutItem], ratios: dict[int, float], available_width: float
    ) -> list[list[int]]:
        rows: list[list[int]] = []
        current: list[int] = []
        for item in items:
            current.append(item.index)
            # A lone item may overflow; a second one starts a new row instead.
            if len(current) > 1 and self._uncompressed_width(current, ratios) > available_width:
                rows.append(current[:-1])
                current = [item.index]
        if current:
            rows.append(current)
        return rows

    def _justify(self, row: list[int], ratios: dict[int, float], available_width: float) -> LayoutRow:
        sum_ratio = sum(ratios[i] for i in row)
        spacing = (len(row) - 1) * self.settings.h_spacing
        cap = self.settings.target_row_height * self.settings.max_height_factor
        height = max(0.0, min((available_width - spacing) / sum_ratio, cap))
        return LayoutRow(
            indices=tuple(row),
            item_widths=tuple(ratios[i] * height for i in row),
            height=height,
        )

    def place(self, result: LayoutResult, origin_x: float = 0.0, origin_y: float = 0.0) -> list[Placement]:
        """Absolute rectangles for every item, row by row."""
        placements: list[Placement] = []
        y = origin_y
        for row in result.rows:
            x = origin_x
            for index, width in zip(row.indices, row.item_widths):
                placements.append(Placement(index=index, x=x, y=y, width=width, height=row.height))
                x += width + self.settings.h_spacing
            y += row.height + self.settings.v_spacing
        return placements
