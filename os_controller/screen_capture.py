"""Window thumbnail capture and downscaling."""

from __future__ import annotations

import logging

from PIL import Image

from core.settings import CaptureSettings
from os_controller.base_backend import WindowSystemBackend
from world_model.window_state import WindowDescriptor

RESAMPLE_FILTERS = {
    "nearest": Image.Resampling.NEAREST,
    "bilinear": Image.Resampling.BILINEAR,
    "bicubic": Image.Resampling.BICUBIC,
    "lanczos": Image.Resampling.LANCZOS,
}


def thumbnail_size(src_width: int, src_height: int, max_width: int) -> tuple[int, int]:
    """Destination size for a source image; never upscales.

    Equivalent to flooring ``src * min(max_width / src_width, 1)`` but done in
    integer arithmetic so an exact fit is not lost to float rounding.
    """
    if src_width <= max_width:
        return src_width, src_height
    return max_width, src_height * max_width // src_width


class ThumbnailCapturer:
    """Captures a window's pixels and shrinks them before they are kept.

    A full-resolution Retina capture can run to tens of megabytes, so the
    source image is dropped as soon as the downscaled copy exists.
    """

    def __init__(self, backend: WindowSystemBackend, settings: CaptureSettings | None = None) -> None:
        self.backend = backend
        self.settings = settings or CaptureSettings()
        self.resample = RESAMPLE_FILTERS[self.settings.resample]
        self.logger = logging.getLogger("windeck.capture")

    def capture(self, descriptor: WindowDescriptor) -> Image.Image | None:
        """Return a thumbnail for ``descriptor`` or ``None`` if capture fails."""
        try:
            source = self.backend.create_window_image(descriptor.id)
            if source is None:
                return None
            return self.downscale(source)
        except Exception as e:
            self.logger.debug("Capture of window %s failed: %s", descriptor.id, e)
            return None

    def downscale(self, source: Image.Image) -> Image.Image | None:
        src_w, src_h = source.size
        if src_w <= 0 or src_h <= 0:
            return None
        dst_w, dst_h = thumbnail_size(src_w, src_h, self.settings.max_thumbnail_width)
        if dst_w <= 0 or dst_h <= 0:
            return None
        if (dst_w, dst_h) == (src_w, src_h):
            return source
        return source.resize((dst_w, dst_h), self.resample)
