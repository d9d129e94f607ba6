"""Loading of config.yaml with ``${VAR}`` placeholders resolved from the environment."""

import os
import re
from pathlib import Path

import yaml
from loguru import logger
from pydantic import ValidationError

from src.brewery.runtime.config.config_data import ConfigData

# ${NAME}, ${NAME:-default} or ${NAME:?message}
_PLACEHOLDER = re.compile(r"\$\{(?P<name>[^}:]+)(?:(?P<op>:[-?])(?P<arg>[^}]*))?\}")


def _resolve(match: re.Match[str]) -> str:
    name, op, arg = match.group("name", "op", "arg")
    value = os.getenv(name)
    if op == ":-":
        return arg if value is None else value
    if value is None:
        reason = arg if op == ":?" else "not set"
        raise ValueError(f"Required environment variable {name}: {reason}")
    return value


def substitute_env_vars(text: str) -> str:
    """Replace every placeholder in ``text``.

    ``${VAR}`` and ``${VAR:?message}`` raise ValueError when VAR is unset;
    ``${VAR:-default}`` falls back to ``default``.
    """
    return _PLACEHOLDER.sub(_resolve, text)


def apply_environment_overrides(env_mode: str) -> None:
    """Copy ``<ENV>_``-prefixed variables over their unprefixed names.

    With ``APP_ENVIRONMENT=production``, ``PRODUCTION_DATABASE_URL`` replaces
    ``DATABASE_URL`` before placeholders are substituted.
    """
    prefix = f"{env_mode.upper()}_"
    for name in [n for n in os.environ if n.startswith(prefix)]:
        target = name.removeprefix(prefix)
        os.environ[target] = os.environ[name]
        logger.debug("Environment override {} -> {}", name, target)


def load_templated_yaml(file_path: Path) -> ConfigData:
    """Read, substitute and validate a config file.

    Placeholders on comment lines are left alone.

    Raises:
        ValueError: on a missing required variable, unparsable YAML or
            values that fail validation
        FileNotFoundError: if ``file_path`` does not exist
    """
    env_mode = os.getenv("APP_ENVIRONMENT", "development")
    logger.info("Loading configuration from {} for {}", file_path, env_mode)
    apply_environment_overrides(env_mode)

    text = "\n".join(
        line if line.lstrip().startswith("#") else substitute_env_vars(line)
        for line in Path(file_path).read_text().splitlines()
    )
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ValueError(f"Error parsing YAML: {exc}") from exc
    if not isinstance(document, dict):
        raise ValueError(f"{file_path} does not contain a mapping")

    try:
        config = ConfigData.model_validate(document.get("config") or {})
    except ValidationError as exc:
        raise ValueError(f"Invalid configuration: {exc}") from exc

    return filter_providers(config, env_mode)


def filter_providers(config: ConfigData, env_mode: str) -> ConfigData:
    """Drop disabled issuers, and dev-only issuers outside development/test."""
    kept = {}
    for name, provider in config.oidc.providers.items():
        if not provider.enabled:
            logger.info("Token issuer '{}' is disabled", name)
        elif provider.dev_only and env_mode not in ("development", "test"):
            logger.info("Token issuer '{}' is dev-only; skipped in {}", name, env_mode)
        else:
            kept[name] = provider

    if config.oidc.providers and not kept:
        logger.warning("Every configured token issuer was filtered out")

    config.oidc.providers = kept
    return config
