"""JSON configuration for the advisor."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .ai import PolicyConfig
from .errors import ValidationError

LOGGER = logging.getLogger(__name__)

DATA_PATH = Path(__file__).resolve().parent.parent / "data"
DEFAULT_CONFIG = "advisor.json"


@dataclass
class AdvisorConfig:
    iterations: int = 1000
    workers: int = 1
    seed: Optional[int] = None
    default_cash: float = 1000
    policy: PolicyConfig = field(default_factory=PolicyConfig)


def load_json(path: Path, default: Any) -> Any:
    if not path.exists():
        return default
    try:
        return json.loads(path.read_text())
    except json.JSONDecodeError as exc:
        raise ValidationError(f"Malformed configuration in {path}: {exc}") from exc


def _number(payload: Dict[str, Any], key: str, default: Any, kind: type) -> Any:
    value = payload.get(key, default)
    if value is None and default is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{key} must be numeric, got {value!r}")
    if kind is int and value != int(value):
        raise ValidationError(f"{key} must be an integer, got {value!r}")
    return kind(value)


def _policy_from_dict(payload: Dict[str, Any]) -> PolicyConfig:
    if not isinstance(payload, dict):
        raise ValidationError("policy must be a JSON object")
    defaults = PolicyConfig()
    values = {
        item.name: _number(payload, item.name, getattr(defaults, item.name), float)
        for item in fields(PolicyConfig)
    }
    return PolicyConfig(**values)


def config_from_dict(payload: Dict[str, Any]) -> AdvisorConfig:
    """Build an :class:`AdvisorConfig`; unknown keys are ignored."""

    if not isinstance(payload, dict):
        raise ValidationError("configuration must be a JSON object")
    defaults = AdvisorConfig()
    config = AdvisorConfig(
        iterations=_number(payload, "iterations", defaults.iterations, int),
        workers=_number(payload, "workers", defaults.workers, int),
        seed=_number(payload, "seed", defaults.seed, int),
        default_cash=_number(payload, "default_cash", defaults.default_cash, float),
        policy=_policy_from_dict(payload.get("policy", {})),
    )
    if config.iterations <= 0:
        raise ValidationError("iterations must be positive")
    if config.workers <= 0:
        raise ValidationError("workers must be positive")
    if config.default_cash < 0:
        raise ValidationError("default_cash must not be negative")
    return config


def load_advisor_config(path: Union[str, Path, None] = None) -> AdvisorConfig:
    config_path = Path(path) if path is not None else DATA_PATH / DEFAULT_CONFIG
    payload = load_json(config_path, None)
    if payload is None:
        LOGGER.warning("No advisor configuration at %s, using defaults", config_path)
        return AdvisorConfig()
    LOGGER.debug("Loaded advisor configuration from %s", config_path)
    return config_from_dict(payload)


__all__ = ["AdvisorConfig", "config_from_dict", "load_advisor_config", "load_json", "DATA_PATH"]
