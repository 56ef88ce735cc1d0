"""Thumbnail capture and downscale tests."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from PIL import Image

from core.settings import CaptureSettings
from os_controller.screen_capture import ThumbnailCapturer, thumbnail_size
from world_model.window_state import Frame, WindowDescriptor


def _descriptor(window_id: int = 1) -> WindowDescriptor:
    return WindowDescriptor(
        id=window_id, title="", owner_app_name="Safari", owner_pid=1, frame=Frame(0, 0, 800, 600)
    )


def test_large_capture_is_downscaled_to_max_width(backend) -> None:
    backend.images[1] = Image.new("RGBA", (2880, 1800), (255, 0, 0, 255))
    thumb = ThumbnailCapturer(backend).capture(_descriptor())

    assert thumb is not None
    assert thumb.size == (800, 500)
    assert thumb.getpixel((400, 250)) == (255, 0, 0, 255)


def test_small_capture_is_never_upscaled(backend) -> None:
    source = Image.new("RGBA", (640, 480))
    backend.images[1] = source
    thumb = ThumbnailCapturer(backend).capture(_descriptor())

    assert thumb is source
    assert thumb.size == (640, 480)


@pytest.mark.parametrize("size", [(801, 333), (5000, 7), (1000, 1), (799, 2000)])
def test_result_width_is_bounded(size: tuple[int, int]) -> None:
    width, height = thumbnail_size(*size, max_width=800)
    assert width <= min(size[0], 800)
    assert height <= size[1]


def test_flat_result_is_dropped(backend) -> None:
    backend.images[1] = Image.new("RGBA", (4000, 1))
    assert ThumbnailCapturer(backend).capture(_descriptor()) is None


def test_missing_or_failed_capture_gives_no_thumbnail(backend) -> None:
    capturer = ThumbnailCapturer(backend)
    assert capturer.capture(_descriptor(7)) is None

    failing = MagicMock()
    failing.create_window_image.side_effect = RuntimeError("screen recording denied")
    assert ThumbnailCapturer(failing).capture(_descriptor()) is None


def test_configured_width_and_filter(backend) -> None:
    backend.images[1] = Image.new("RGB", (1000, 1000))
    capturer = ThumbnailCapturer(backend, CaptureSettings(max_thumbnail_width=250, resample="nearest"))

    thumb = capturer.capture(_descriptor())
    assert thumb.size == (250, 250)
    assert capturer.resample == Image.Resampling.NEAREST
