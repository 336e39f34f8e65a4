from __future__ import annotations

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from . import canon
from .types import TariffWindow


class WindowSettings(BaseSettings):
    """Tariff window read from METERSERIES_PEAK_START, METERSERIES_OFF_PEAK_START
    and METERSERIES_WEEKEND_OFF_PEAK."""

    model_config = SettingsConfigDict(env_prefix="METERSERIES_", env_ignore_empty=True)

    peak_start: int = Field(default=canon.DEFAULT_PEAK_START_HOUR, ge=0, le=23)
    off_peak_start: int = Field(default=canon.DEFAULT_OFF_PEAK_START_HOUR, ge=0, le=23)
    weekend_off_peak: bool = canon.DEFAULT_WEEKEND_IS_OFF_PEAK

    def to_window(self) -> TariffWindow:
        return TariffWindow(
            peak_start_hour=self.peak_start,
            off_peak_start_hour=self.off_peak_start,
            weekend_is_off_peak=self.weekend_off_peak,
        )


def _window_from_env() -> TariffWindow:
    return WindowSettings().to_window()


class SeriesConfig(BaseSettings):
    """
    Provider access read from ENELOGIC_ACCESS_TOKEN, ENELOGIC_MEASURING_POINT_ID,
    ENELOGIC_HOST and ENELOGIC_TIMEOUT; keyword arguments take precedence.
    """

    model_config = SettingsConfigDict(env_prefix="ENELOGIC_", env_ignore_empty=True)

    # Provider access
    access_token: str = ""
    measuring_point_id: Optional[int] = None  # electricity measuring point
    host: str = canon.DEFAULT_HOST
    timeout: Optional[float] = None  # seconds; None waits indefinitely

    # Peak / off-peak classification of quarter-hour data
    window: TariffWindow = Field(default_factory=_window_from_env)


def default_config() -> SeriesConfig:
    """Defaults, overridden by whatever the environment sets."""
    return SeriesConfig()
