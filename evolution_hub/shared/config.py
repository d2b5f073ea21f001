from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def _flag(name: str) -> bool:
    value = _env(name)
    if value is None:
        return True
    return value.strip().lower() not in {"0", "false", "off", "no"}


@dataclass(frozen=True)
class Settings:
    voice_enabled: bool
    webscraper_enabled: bool
    video_enabled: bool
    usage_rolling_window_seconds: int

    def is_feature_enabled(self, feature: str) -> bool:
        if feature == "voice":
            return self.voice_enabled
        if feature == "webscraper":
            return self.webscraper_enabled
        if feature == "video":
            return self.video_enabled
        return False


def get_settings() -> Settings:
    return Settings(
        voice_enabled=_flag("PUBLIC_TOOL_VOICE_VISUALIZER"),
        webscraper_enabled=_flag("PUBLIC_WEBSCRAPER_V1"),
        video_enabled=_flag("PUBLIC_AI_VIDEO"),
        usage_rolling_window_seconds=int(_env("USAGE_ROLLING_WINDOW_SECONDS", "86400")),
    )
