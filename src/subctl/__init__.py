"""subctl package.

Modules:
- subctl.dispatcher: Dispatcher (name → command → parse → run → persist)
- subctl.command: Command base class and its abort exceptions
- subctl.registry: CommandRegistry (name → command factory)
- subctl.lib.store: PropertyStore and namespaced UserData
- subctl.lib.core: Global config and platform paths
- subctl.cli: The bundled ``subctl`` inspection CLI
"""

from .command import (
    Command,
    CommandAbort,
    CommandFailed,
    CommandNotBound,
    OptionParseError,
    UsageRequested,
)
from .dispatcher import Dispatcher, UserDataUnavailable
from .lib.core.config import default_user_data_path
from .lib.store.properties import PropertiesFormatError, PropertyStore
from .lib.store.user_data import UserData, UserDataComponent
from .registry import CommandRegistry

__all__ = [
    "Command",
    "CommandAbort",
    "CommandFailed",
    "CommandNotBound",
    "CommandRegistry",
    "Dispatcher",
    "OptionParseError",
    "PropertiesFormatError",
    "PropertyStore",
    "UsageRequested",
    "UserData",
    "UserDataComponent",
    "UserDataUnavailable",
    "default_user_data_path",
]

# Version information - single source of truth using importlib.metadata
try:
    from importlib.metadata import version

    __version__ = version("subctl")
except Exception:
    # Fallback for development mode when package is not installed
    try:
        import tomllib
        from pathlib import Path

        pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
        if pyproject_path.exists():
            with open(pyproject_path, "rb") as f:
                pyproject_data = tomllib.load(f)
                __version__ = pyproject_data["tool"]["poetry"]["version"]
        else:
            __version__ = "unknown"
    except Exception:
        __version__ = "unknown"
