"""Process-wide configuration, overridable per task through a context variable."""

import os
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import BaseModel

from src.brewery.runtime.config.config_data import ConfigData
from src.brewery.runtime.config.config_template import load_templated_yaml


@dataclass(frozen=True)
class AppContext:
    config: ConfigData


def load_default_config() -> ConfigData:
    """Load config.yaml (or ``APP_CONFIG_FILE``), falling back to built-in defaults."""
    path = Path(os.getenv("APP_CONFIG_FILE", "config.yaml"))
    if not path.exists():
        logger.warning("Configuration file {} not found; using defaults", path)
        return ConfigData()
    return load_templated_yaml(path)


_app_context: ContextVar[AppContext] = ContextVar(
    "app_context", default=AppContext(config=load_default_config())
)


def get_context() -> AppContext:
    return _app_context.get()


def set_context(context: AppContext) -> Token[AppContext]:
    return _app_context.set(context)


def _explicit_values(model: BaseModel) -> dict[str, Any]:
    """Fields of ``model`` that were set explicitly, at any depth.

    A nested model is included whole as soon as one of its own fields was set.
    """
    values: dict[str, Any] = {}
    for name in type(model).model_fields:
        value = getattr(model, name)
        if isinstance(value, BaseModel):
            if name in model.model_fields_set or _explicit_values(value):
                values[name] = _explicit_values(value) or value.model_dump()
        elif name in model.model_fields_set:
            if isinstance(value, dict):
                value = {
                    k: v.model_dump() if isinstance(v, BaseModel) else v
                    for k, v in value.items()
                }
            values[name] = value
    return values


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def merge_configs(base: ConfigData, override: ConfigData) -> ConfigData:
    """Overlay the explicitly set fields of ``override`` onto ``base``."""
    merged = _deep_merge(base.model_dump(), _explicit_values(override))
    return ConfigData.model_validate(merged)


@contextmanager
def with_context(config_override: ConfigData | None = None) -> Iterator[None]:
    """Run a block with ``config_override`` layered over the current configuration.

    Example:
        override = ConfigData()
        override.jwt.clock_skew = 0
        with with_context(override):
            assert get_config().jwt.clock_skew == 0
    """
    if config_override is None:
        yield
        return
    if not isinstance(config_override, ConfigData):
        raise ValueError(
            f"config_override must be ConfigData or None, got {type(config_override)}"
        )

    current = get_context()
    token = set_context(replace(current, config=merge_configs(current.config, config_override)))
    try:
        yield
    finally:
        _app_context.reset(token)


def get_config() -> ConfigData:
    return get_context().config
