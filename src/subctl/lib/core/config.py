# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Global YAML configuration and derived settings."""

import os
import sys
from pathlib import Path
from typing import Any

import yaml  # pip install pyyaml

from .paths import config_root as _config_root_base, state_root as _state_root_base

MISSING_USER_DATA_POLICIES = ("ephemeral", "error")

USER_DATA_FILENAME = "user-data.properties"


class InvalidConfigError(ValueError):
    """A global config value is present but not one of the accepted values."""


# ---------- Global config file ----------


def global_config_search_paths() -> list[Path]:
    """Return the ordered list of paths that will be checked for global config.

    Behavior matches global_config_path():
    - If SUBCTL_CONFIG_FILE is set, only that single path is considered.
    - Otherwise, check in order:
        1) ${XDG_CONFIG_HOME:-~/.config}/subctl/config.yml
        2) sys.prefix/etc/subctl/config.yml
        3) /etc/subctl/config.yml
    """
    env_file = os.environ.get("SUBCTL_CONFIG_FILE")
    if env_file:
        return [Path(env_file).expanduser().resolve()]

    xdg_home = os.environ.get("XDG_CONFIG_HOME")
    user_cfg = (Path(xdg_home) if xdg_home else Path.home() / ".config") / "subctl" / "config.yml"
    sp_cfg = Path(sys.prefix) / "etc" / "subctl" / "config.yml"
    etc_cfg = Path("/etc/subctl/config.yml")
    return [user_cfg, sp_cfg, etc_cfg]


def global_config_path() -> Path:
    """Global config file path (resolved based on search paths).

    The explicit SUBCTL_CONFIG_FILE override is returned even if missing so
    the intent stays visible. Otherwise the first existing candidate wins,
    falling back to the last one (/etc/subctl/config.yml).
    """
    candidates = global_config_search_paths()
    if len(candidates) == 1:
        return candidates[0]

    for c in candidates:
        if c.is_file():
            return c.resolve()
    return candidates[-1]


def load_global_config() -> dict[str, Any]:
    cfg_path = global_config_path()
    if not cfg_path.is_file():
        return {}
    data = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        return {}
    return data


def get_global_section(key: str) -> dict[str, Any]:
    """Return a top-level section from the global config, defaulting to ``{}``.

    If the value under *key* is not a dict (e.g. the user wrote ``output: "oops"``),
    returns ``{}`` so callers can always use ``.get()``.
    """
    cfg = load_global_config()
    value = cfg.get(key, {})
    if not isinstance(value, dict):
        return {}
    return value or {}


# ---------- Paths ----------


def config_root() -> Path:
    """Base config directory; per-program user data files live below it."""
    return _config_root_base().resolve()


def state_root() -> Path:
    """Writable state directory (debug log).

    Precedence:
    - Environment variable SUBCTL_STATE_DIR
    - Global config ``paths.state_root``
    - Platform default from subctl.lib.core.paths
    """
    env = os.environ.get("SUBCTL_STATE_DIR")
    if env:
        return Path(env).expanduser().resolve()
    try:
        val = get_global_section("paths").get("state_root")
    except (OSError, yaml.YAMLError):
        val = None
    if val:
        return Path(val).expanduser().resolve()
    return _state_root_base().resolve()


def default_user_data_path(program: str) -> Path:
    """Conventional backing file for *program*: ``config_root()/<program>/user-data.properties``."""
    return config_root() / program / USER_DATA_FILENAME


# ---------- Settings ----------


def get_noisy() -> bool:
    """Return ``output.noisy`` (announce user data file creation and saves), default True."""
    return bool(get_global_section("output").get("noisy", True))


def get_verbose() -> bool:
    """Return ``output.verbose`` (enables Command.verbose output), default True."""
    return bool(get_global_section("output").get("verbose", True))


def get_missing_user_data_policy() -> str:
    """Return ``user_data.missing``: what to do when a program has no backing file.

    ``ephemeral`` (default) runs with an in-memory store that is never
    flushed; ``error`` refuses to run the command.
    """
    value = str(get_global_section("user_data").get("missing", "ephemeral")).lower()
    if value not in MISSING_USER_DATA_POLICIES:
        raise InvalidConfigError(
            f"Invalid user_data.missing value {value!r} in {global_config_path()} "
            f"(expected one of: {', '.join(MISSING_USER_DATA_POLICIES)})"
        )
    return value
