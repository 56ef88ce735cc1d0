"""Justified row layout tests."""

from __future__ import annotations

import pytest

from core.settings import LayoutSettings
from layout.justified_layout import JustifiedLayout, LayoutItem, aspect_ratio_for
from world_model.window_state import Frame


def _items(ratios: list[float]) -> list[LayoutItem]:
    return [LayoutItem(i, r) for i, r in enumerate(ratios)]


def test_five_window_scenario_rows_and_widths() -> None:
    engine = JustifiedLayout(LayoutSettings(h_spacing=12, target_row_height=220))
    result = engine.compute(_items([1.0, 1.78, 0.5, 2.0, 1.33]), 1000)

    # 1.0+1.78+0.5+2.0 at 220 plus 3 gaps is 1197.6 > 1000, so index 3 opens row two
    assert [row.indices for row in result.rows] == [(0, 1, 2), (3, 4)]
    for row in result.rows:
        spacing = (len(row.indices) - 1) * 12
        assert row.width + spacing == pytest.approx(1000)
    assert result.rows[0].height == pytest.approx(976 / 3.28)
    assert result.rows[1].height == pytest.approx(988 / 3.33)
    assert result.total_height == pytest.approx(976 / 3.28 + 988 / 3.33 + 12)


def test_empty_input_gives_no_rows() -> None:
    result = JustifiedLayout().compute([], 1000)
    assert result.rows == ()
    assert result.total_height == 0


def test_every_index_appears_once_in_input_order() -> None:
    ratios = [0.6, 1.5, 2.4, 1.0, 0.8, 3.1, 1.2, 1.78, 0.4, 1.33, 2.0]
    result = JustifiedLayout().compute(_items(ratios), 1400)

    flattened = [i for row in result.rows for i in row.indices]
    assert flattened == list(range(len(ratios)))
    assert len(result.rows) >= 1


@pytest.mark.parametrize(
    ("ratios", "width"),
    [
        ([1.0, 1.78, 0.5, 2.0, 1.33], 1000),
        ([0.6, 1.5, 2.4, 1.0, 0.8, 3.1, 1.2, 1.78, 0.4, 1.33, 2.0], 1400),
        ([1.78] * 9, 1920),
        ([0.5, 0.5, 0.5, 4.0, 0.3, 1.0, 1.0], 800),
        ([2.2, 1.1, 0.9, 1.6], 3000),
    ],
)
def test_rows_fill_width_unless_capped(ratios: list[float], width: float) -> None:
    settings = LayoutSettings()
    cap = settings.target_row_height * settings.max_height_factor
    result = JustifiedLayout(settings).compute(_items(ratios), width)

    for row in result.rows:
        assert row.height <= cap + 1e-9
        for index, item_width in zip(row.indices, row.item_widths):
            assert item_width == pytest.approx(ratios[index] * row.height)
        if len(row.indices) > 1 and row.height < cap:
            spacing = (len(row.indices) - 1) * settings.h_spacing
            assert row.width + spacing == pytest.approx(width)
        elif len(row.indices) > 1:
            assert row.height == pytest.approx(cap)


def test_single_wide_item_gets_its_own_row() -> None:
    engine = JustifiedLayout()
    result = engine.compute(_items([1.0, 8.0, 1.0]), 1000)

    assert [row.indices for row in result.rows] == [(0,), (1,), (2,)]
    assert result.rows[1].item_widths[0] == pytest.approx(1000)


def test_short_row_is_capped_at_max_height() -> None:
    settings = LayoutSettings()
    result = JustifiedLayout(settings).compute(_items([1.0]), 2000)

    cap = settings.target_row_height * settings.max_height_factor
    assert result.rows[0].height == pytest.approx(cap)
    assert result.rows[0].item_widths[0] == pytest.approx(cap)


def test_compute_is_pure() -> None:
    engine = JustifiedLayout()
    items = _items([1.2, 0.7, 1.9, 1.0, 2.5])
    assert engine.compute(items, 900) == engine.compute(items, 900)


def test_degenerate_ratio_is_clamped() -> None:
    result = JustifiedLayout().compute(_items([0.0, 0.0]), 500)
    assert all(h > 0 for h in (row.height for row in result.rows))


def test_place_offsets_rows_and_items() -> None:
    engine = JustifiedLayout(LayoutSettings(h_spacing=10, v_spacing=20))
    result = engine.compute(_items([1.0, 1.0, 4.0]), 500)
    placements = engine.place(result, origin_x=5, origin_y=7)

    first, second, third = placements
    assert (first.x, first.y) == (5, 7)
    assert second.x == pytest.approx(5 + first.width + 10)
    assert second.y == first.y
    assert third.x == 5
    assert third.y == pytest.approx(7 + result.rows[0].height + 20)


def test_aspect_ratio_for_frames() -> None:
    assert aspect_ratio_for(Frame(0, 0, 1600, 900)) == pytest.approx(16 / 9)
    assert aspect_ratio_for(Frame(0, 0, 500, 0)) == pytest.approx(16 / 9)
    assert aspect_ratio_for(Frame(0, 0, 10, 1000)) == pytest.approx(0.1)
