"""Typed settings models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class EnumeratorSettings(BaseModel):
    """Window list filtering."""

    min_window_size: float = 100
    normal_layer: int = 0
    own_app_name: str | None = None
    icon_size: int = Field(default=64, gt=0)


class CaptureSettings(BaseModel):
    """Thumbnail capture and downscaling."""

    max_thumbnail_width: int = Field(default=800, gt=0)
    resample: Literal["nearest", "bilinear", "bicubic", "lanczos"] = "bilinear"


class LayoutSettings(BaseModel):
    """Justified row layout constants."""

    target_row_height: float = Field(default=220, gt=0)
    h_spacing: float = Field(default=12, ge=0)
    v_spacing: float = Field(default=12, ge=0)
    max_height_factor: float = Field(default=1.6, gt=0)
    default_aspect_ratio: float = Field(default=16.0 / 9.0, gt=0)
    min_aspect_ratio: float = Field(default=0.1, gt=0)


class RefreshSettings(BaseModel):
    """Worker pool used by a refresh."""

    max_workers: int = Field(default=8, ge=1)


class SwitcherSettings(BaseModel):
    """Effective configuration for one process."""

    enumerator: EnumeratorSettings = Field(default_factory=EnumeratorSettings)
    capture: CaptureSettings = Field(default_factory=CaptureSettings)
    layout: LayoutSettings = Field(default_factory=LayoutSettings)
    refresh: RefreshSettings = Field(default_factory=RefreshSettings)
