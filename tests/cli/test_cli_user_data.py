# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

import unittest
from io import StringIO

from test_utils import subctl_env

from subctl.cli.main import SubctlCli
from subctl.lib.core.config import default_user_data_path
from subctl.lib.store.properties import PropertyStore


class CliUserDataTests(unittest.TestCase):
    def setUp(self) -> None:
        self.out = StringIO()
        self.err = StringIO()

    def run_cli(self, *argv: str) -> int:
        return SubctlCli(out=self.out, err=self.err).run(list(argv))

    def test_set_then_show_component(self) -> None:
        with subctl_env():
            path = default_user_data_path("greeter")
            status = self.run_cli("user-data", "greeter", "profile", "--set", "name=Ada",
                                  "--set", "motto=a=b")
            self.assertEqual(status, 0)
            self.assertEqual(
                dict(PropertyStore.load(path)),
                {"profile.name": "Ada", "profile.motto": "a=b"},
            )
            self.assertIn("Saved 2 field(s) of 'profile'", self.out.getvalue())

            self.out = StringIO()
            self.assertEqual(self.run_cli("user-data", "greeter", "profile"), 0)
            self.assertEqual(self.out.getvalue(), "motto=a=b\nname=Ada\n")

    def test_show_all_components(self) -> None:
        with subctl_env() as env:
            path = env.base / "custom.properties"
            PropertyStore({"profile.name": "Ada", "editor.theme": "dark"}).flush(path)
            status = self.run_cli("user-data", "greeter", "--file", str(path))
        self.assertEqual(status, 0)
        self.assertEqual(
            self.out.getvalue(),
            f"User data for 'greeter' ({path}):\n"
            "[editor]\n"
            "  theme = dark\n"
            "[profile]\n"
            "  name = Ada\n",
        )

    def test_show_missing_file(self) -> None:
        with subctl_env():
            status = self.run_cli("user-data", "ghost")
        self.assertEqual(status, 1)
        self.assertIn("No user data for 'ghost'", self.err.getvalue())

    def test_empty_component(self) -> None:
        with subctl_env() as env:
            path = env.base / "custom.properties"
            PropertyStore({"profile.name": "Ada"}).flush(path)
            status = self.run_cli("user-data", "greeter", "editor", "--file", str(path))
        self.assertEqual(status, 0)
        self.assertEqual(self.out.getvalue(), "No fields stored for component 'editor'\n")

    def test_set_requires_component(self) -> None:
        with subctl_env():
            status = self.run_cli("user-data", "greeter", "--set", "name=Ada")
        self.assertEqual(status, 1)
        err = self.err.getvalue()
        self.assertTrue(err.startswith("--set requires a component\nusage: subctl user-data <program>"))

    def test_invalid_assignment(self) -> None:
        with subctl_env():
            status = self.run_cli("user-data", "greeter", "profile", "--set", "nameAda")
            self.assertFalse(default_user_data_path("greeter").exists())
        self.assertEqual(status, 1)
        self.assertIn("Invalid assignment 'nameAda'", self.err.getvalue())


if __name__ == "__main__":
    unittest.main()
