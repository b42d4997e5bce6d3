# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Property store and namespaced user data."""

from .properties import PropertiesFormatError, PropertyStore
from .user_data import UserData, UserDataComponent

__all__ = ["PropertiesFormatError", "PropertyStore", "UserData", "UserDataComponent"]
