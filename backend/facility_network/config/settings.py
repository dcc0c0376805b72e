from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from facility_network.config.profiles import (
    DEFAULT_COUNTRY_CODE,
    CountryProfile,
    load_country_profile,
)

logger = logging.getLogger(__name__)
_logged = False


class OptimizerSettings(BaseModel):
    profile_path: Optional[Path] = None
    country_code: str = DEFAULT_COUNTRY_CODE
    log_level: str = "INFO"


def _log_settings_once(settings: OptimizerSettings) -> None:
    global _logged
    if _logged:
        return
    _logged = True
    logger.info(
        "Optimizer settings: country=%s profile_path_set=%s",
        settings.country_code,
        "true" if settings.profile_path else "false",
    )


def resolve_log_level() -> str:
    return os.getenv("OPTIMIZER_LOG_LEVEL", "INFO").strip().upper() or "INFO"


def get_settings() -> OptimizerSettings:
    profile_path = os.getenv("OPTIMIZER_PROFILE_PATH", "").strip()
    settings = OptimizerSettings(
        profile_path=Path(profile_path) if profile_path else None,
        country_code=os.getenv("OPTIMIZER_COUNTRY", DEFAULT_COUNTRY_CODE).strip() or DEFAULT_COUNTRY_CODE,
        log_level=resolve_log_level(),
    )
    _log_settings_once(settings)
    return settings


def resolve_country_profile(settings: Optional[OptimizerSettings] = None) -> CountryProfile:
    settings = settings or get_settings()
    return load_country_profile(settings.profile_path, code=settings.country_code)
