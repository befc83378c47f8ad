#  Copyright (c) 2025 SRI International.
#  This work is licensed under CC BY-NC-ND 4.0 license.
#  To view a copy of this license, visit https://creativecommons.org/licenses/by-nc-nd/4.0/

from dataclasses import dataclass, fields, replace
import logging
import os
from typing import *

LOG_FORMATS = ("console", "json")


def env_to_mapping(prefix: str, sep: str = "__") -> dict[str, str]:
    """
    ENVF__LOGGING_LEVEL=DEBUG -> {"logging_level": "DEBUG"}
    ENVF__LOG_FORMAT=json     -> {"log_format": "json"}
    """
    n = len(prefix)
    out: dict[str, str] = {}
    for k, v in os.environ.items():
        if not k.startswith(prefix):
            continue
        key = k[n:].split(sep)[-1].strip().lower()
        out[key] = v.strip()
    return out


def _level_name(level: str | int) -> str:
    # numeric levels ("10") are accepted and normalized to their names
    text = str(level).strip().upper()
    name = logging.getLevelName(int(text)) if text.isdecimal() else text
    if not isinstance(logging.getLevelName(name), int):
        raise ValueError(f"unknown logging level: {level}")
    return name


# ----- EnvfConfiguration -----
@dataclass(frozen=True)
class EnvfConfiguration:
    """Settings of the launcher itself (never of the launched command)."""
    logging_level: str = "WARNING"
    log_format: str = "console"

    def __post_init__(self):
        object.__setattr__(self, "logging_level", _level_name(self.logging_level))
        if self.log_format not in LOG_FORMATS:
            raise ValueError(f"log_format must be one of {LOG_FORMATS}: {self.log_format}")

    @classmethod
    def _known(cls, overrides: Mapping[str, Any]) -> dict[str, Any]:
        names = {f.name for f in fields(cls)}
        return {k: v for k, v in overrides.items() if k in names}

    @classmethod
    def load(cls,
             env_prefix: str = "ENVF__",
             runtime_overrides: Optional[Mapping[str, Any]] = None,
    ) -> "EnvfConfiguration":
        # 1) Python defaults
        conf = cls()

        # 2) ENV overrides
        env = cls._known(env_to_mapping(env_prefix))
        if env:
            conf = replace(conf, **env)

        # 3) runtime overrides
        if runtime_overrides:
            ro = cls._known(runtime_overrides)
            if ro:
                conf = replace(conf, **ro)
        return conf
