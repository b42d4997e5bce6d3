# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

import unittest

from test_utils import GreetCommand, ShowCommand

from subctl.registry import CommandRegistry


class CommandRegistryTests(unittest.TestCase):
    def setUp(self) -> None:
        self.registry = CommandRegistry()
        self.registry.register("Greet", GreetCommand)
        self.registry.register("show", ShowCommand)

    def test_lookup_is_case_insensitive(self) -> None:
        for name in self.registry.names():
            for variant in (name, name.upper(), name.title()):
                self.assertIs(self.registry.get(variant), self.registry.get(name))
        self.assertIs(self.registry.get("GREET"), GreetCommand)
        self.assertIn("SHOW", self.registry)

    def test_names_are_sorted_and_lowercase(self) -> None:
        self.registry.register("apply", ShowCommand)
        self.assertEqual(self.registry.names(), ["apply", "greet", "show"])
        self.assertEqual([n for n, _ in self.registry.items()], ["apply", "greet", "show"])
        self.assertEqual(len(self.registry), 3)

    def test_unknown_name(self) -> None:
        self.assertIsNone(self.registry.get("nope"))
        self.assertIsNone(self.registry.create("nope"))
        self.assertNotIn("nope", self.registry)

    def test_create_returns_fresh_instances(self) -> None:
        first = self.registry.create("greet")
        second = self.registry.create("greet")
        self.assertIsInstance(first, GreetCommand)
        self.assertIsNot(first, second)

    def test_duplicate_registration_rejected(self) -> None:
        with self.assertRaises(ValueError):
            self.registry.register("GREET", ShowCommand)

    def test_invalid_registrations(self) -> None:
        with self.assertRaises(ValueError):
            self.registry.register("  ", GreetCommand)
        with self.assertRaises(TypeError):
            self.registry.register("broken", "not callable")  # type: ignore[arg-type]

    def test_factory_must_return_a_command(self) -> None:
        self.registry.register("weird", lambda: object())  # type: ignore[arg-type, return-value]
        with self.assertRaises(TypeError):
            self.registry.create("weird")

    def test_closure_factories(self) -> None:
        def make_greet() -> GreetCommand:
            return GreetCommand()

        self.registry.register("hello", make_greet)
        self.assertIsInstance(self.registry.create("HELLO"), GreetCommand)


if __name__ == "__main__":
    unittest.main()
