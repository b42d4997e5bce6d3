# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Platform-aware path resolution for config and state directories."""

import getpass
import os
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir

APP_NAME = "subctl"


def _is_root() -> bool:
    """Return True if the current process is running as root."""
    try:
        return os.geteuid() == 0  # type: ignore[attr-defined]
    except AttributeError:
        return getpass.getuser() == "root"


def config_root(app_name: str = APP_NAME) -> Path:
    """
    Base directory for configuration (config.yml, per-program user data).

    Priority:
      1. SUBCTL_CONFIG_DIR
      2. if root   → /etc/<app>
         else      → platformdirs user config dir (~/.config/<app>)
    """
    env = os.getenv("SUBCTL_CONFIG_DIR")
    if env:
        return Path(env).expanduser()

    if _is_root():
        return Path("/etc") / app_name

    return Path(user_config_dir(app_name))


def state_root(app_name: str = APP_NAME) -> Path:
    """
    Writable state (debug log).

    Priority:
      1. SUBCTL_STATE_DIR
      2. if root   → /var/lib/<app>
         else      → platformdirs user data dir (~/.local/share/<app>)
    """
    env = os.getenv("SUBCTL_STATE_DIR")
    if env:
        return Path(env).expanduser()

    if _is_root():
        return Path("/var/lib") / app_name

    return Path(user_data_dir(app_name))
