from __future__ import annotations

import os
import tempfile
import unittest
import unittest.mock
from pathlib import Path

from test_utils import subctl_env

from subctl.lib.core import config as cfg


class ConfigTests(unittest.TestCase):
    def test_global_config_search_paths_env_override(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            cfg_path = Path(td) / "config.yml"
            with unittest.mock.patch.dict(os.environ, {"SUBCTL_CONFIG_FILE": str(cfg_path)}):
                paths = cfg.global_config_search_paths()
                self.assertEqual(paths, [cfg_path.expanduser().resolve()])
                self.assertEqual(cfg.global_config_path(), cfg_path.resolve())

    def test_global_config_path_prefers_xdg(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            xdg = Path(td)
            config_file = xdg / "subctl" / "config.yml"
            config_file.parent.mkdir(parents=True, exist_ok=True)
            config_file.write_text("output:\n  noisy: false\n", encoding="utf-8")
            env = {k: v for k, v in os.environ.items() if k != "SUBCTL_CONFIG_FILE"}
            env["XDG_CONFIG_HOME"] = str(xdg)
            with unittest.mock.patch.dict(os.environ, env, clear=True):
                self.assertEqual(cfg.global_config_path(), config_file.resolve())
                self.assertFalse(cfg.get_noisy())

    def test_defaults_without_config_file(self) -> None:
        with subctl_env():
            self.assertEqual(cfg.load_global_config(), {})
            self.assertTrue(cfg.get_noisy())
            self.assertTrue(cfg.get_verbose())
            self.assertEqual(cfg.get_missing_user_data_policy(), "ephemeral")

    def test_settings_from_config(self) -> None:
        yaml_text = "output:\n  noisy: false\n  verbose: false\nuser_data:\n  missing: error\n"
        with subctl_env(yaml_text):
            self.assertFalse(cfg.get_noisy())
            self.assertFalse(cfg.get_verbose())
            self.assertEqual(cfg.get_missing_user_data_policy(), "error")

    def test_non_dict_section_is_ignored(self) -> None:
        with subctl_env('output: "oops"\n'):
            self.assertEqual(cfg.get_global_section("output"), {})
            self.assertTrue(cfg.get_noisy())

    def test_invalid_missing_policy_raises(self) -> None:
        with subctl_env("user_data:\n  missing: explode\n"):
            with self.assertRaises(cfg.InvalidConfigError) as ctx:
                cfg.get_missing_user_data_policy()
            self.assertIn("explode", str(ctx.exception))

    def test_state_root_env_override(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            with unittest.mock.patch.dict(os.environ, {"SUBCTL_STATE_DIR": td}):
                self.assertEqual(cfg.state_root(), Path(td).resolve())

    def test_state_root_config_override(self) -> None:
        with subctl_env() as env:
            state_dir = env.base / "from-config"
            env.config_file.write_text(f"paths:\n  state_root: {state_dir}\n", encoding="utf-8")
            with unittest.mock.patch.dict(os.environ):
                del os.environ["SUBCTL_STATE_DIR"]
                self.assertEqual(cfg.state_root(), state_dir.resolve())

    def test_default_user_data_path(self) -> None:
        with subctl_env() as env:
            self.assertEqual(
                cfg.default_user_data_path("greeter"),
                env.config_dir.resolve() / "greeter" / "user-data.properties",
            )


if __name__ == "__main__":
    unittest.main()
