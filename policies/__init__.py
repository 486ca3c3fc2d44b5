"""Auto-discovery of PoolPolicy subclasses in this package."""

from __future__ import annotations

import importlib
import pkgutil
from pathlib import Path

from pool_policy import PoolPolicy
from wordle_env import ConfigurationError

_PKG_DIR = Path(__file__).resolve().parent

DEFAULT_POLICY = "threshold"


def _subclasses_in_module(mod) -> list[type[PoolPolicy]]:
    found: list[type[PoolPolicy]] = []
    for attr_name in dir(mod):
        obj = getattr(mod, attr_name)
        if (
            isinstance(obj, type)
            and issubclass(obj, PoolPolicy)
            and obj is not PoolPolicy
            and obj.__module__ == mod.__name__
        ):
            found.append(obj)
    return found


def discover_policies() -> dict[str, type[PoolPolicy]]:
    """Return every built-in policy class keyed by its name."""
    found: dict[str, type[PoolPolicy]] = {}
    for info in pkgutil.iter_modules([str(_PKG_DIR)]):
        mod = importlib.import_module(f"policies.{info.name}")
        for cls in _subclasses_in_module(mod):
            found[cls().name] = cls
    return found


def get_policy(name: str = DEFAULT_POLICY, **options) -> PoolPolicy:
    """Build the policy called *name*, passing *options* to its constructor."""
    policies = discover_policies()
    try:
        cls = policies[name.lower()]
    except KeyError:
        raise ConfigurationError(
            f"unknown guess-pool policy {name!r}; available: {sorted(policies)}"
        ) from None
    try:
        return cls(**options)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"bad options for policy {name!r}: {exc}") from None
