from __future__ import annotations

import os

# BaseSettings is provided by the `pydantic-settings` package in Pydantic v2

# Mode selector: use MODE env var if set, else fall back to APP_ENV, then 'local'
MODE = os.environ.get("MODE") or os.environ.get("APP_ENV") or "local"
MODE = MODE.lower()


# Import per-environment settings classes
from .local import LocalSettings
from .stage import StageSettings
from .prod import ProdSettings
from .dev import DevSettings
from .test import TestSettings


_MAPPING = {
    "local": LocalSettings,
    "stage": StageSettings,
    "staging": StageSettings,
    "prod": ProdSettings,
    "production": ProdSettings,
    "dev": DevSettings,
    "test": TestSettings,
}


def _choose_settings_class(mode: str):
    return _MAPPING.get(mode, LocalSettings)


# Each settings class reads its own env/.env.<mode> file via model_config
SettingsClass = _choose_settings_class(MODE)
settings = SettingsClass()

__all__ = ["settings", "SettingsClass", "MODE"]
