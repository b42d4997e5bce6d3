# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Per-component views over a :class:`PropertyStore`.

Component ``c`` and field ``f`` live under the flat key ``c.f``.  Storing
only ever writes fields that have a value, so re-storing a component never
removes a field it did not mention.

Components whose keys are prefixes of one another (``a`` and ``a.b``) see
each other's fields: ``fetch("a")`` also returns ``b.<field>`` entries.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import ClassVar, TypeVar

from .properties import PropertyStore

C = TypeVar("C", bound="UserDataComponent")


class UserDataComponent:
    """A typed section of user data.

    Subclasses set ``component_key`` and translate to and from the flat
    field mapping::

        class Profile(UserDataComponent):
            component_key = "profile"

            def __init__(self, name=None):
                self.name = name

            def values(self):
                return {"name": self.name}

            @classmethod
            def from_values(cls, values):
                return cls(name=values.get("name"))
    """

    component_key: ClassVar[str] = ""

    def values(self) -> dict[str, str | None]:
        raise NotImplementedError

    @classmethod
    def from_values(cls: type[C], values: Mapping[str, str]) -> C:
        raise NotImplementedError


def _prefix(component_key: str) -> str:
    return component_key + "."


class UserData:
    """Namespaced access to the settings of a subctl program."""

    def __init__(self, properties: PropertyStore | None = None) -> None:
        self._properties = properties if properties is not None else PropertyStore()

    @property
    def properties(self) -> PropertyStore:
        """The underlying flat store (what gets flushed to disk)."""
        return self._properties

    @property
    def is_dirty(self) -> bool:
        return self._properties.dirty

    def store(
        self,
        component_key: str | None,
        fields: Mapping[str, str | None] | UserDataComponent,
    ) -> None:
        """Write the non-``None`` *fields* under *component_key* and mark the store dirty.

        *fields* may be a plain mapping or a :class:`UserDataComponent`; for a
        component, *component_key* may be ``None`` to use its own key.
        """
        if isinstance(fields, UserDataComponent):
            component_key = component_key or fields.component_key
            fields = fields.values()
        if not component_key:
            raise ValueError("component key must be a non-empty string")
        prefix = _prefix(component_key)
        for name, value in fields.items():
            if value is None:
                continue
            self._properties[prefix + name] = value
        self._properties.mark_dirty()

    def fetch(self, component_key: str) -> dict[str, str]:
        """Return the fields stored under *component_key*, prefix stripped (``{}`` if none)."""
        prefix = _prefix(component_key)
        return {
            key[len(prefix) :]: value
            for key, value in self._properties.items()
            if key.startswith(prefix) and len(key) > len(prefix)
        }

    def load_component(self, cls: type[C], component_key: str | None = None) -> C:
        """Rebuild a :class:`UserDataComponent` of type *cls* from its stored fields."""
        return cls.from_values(self.fetch(component_key or cls.component_key))

    def components(self) -> list[str]:
        """Sorted component keys present in the store (text before the last dot)."""
        return sorted({key.rpartition(".")[0] for key in self._properties if "." in key})
