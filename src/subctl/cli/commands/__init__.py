# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Commands of the bundled ``subctl`` tool.

Each module exposes :class:`subctl.command.Command` subclasses; they are
registered by name in :mod:`subctl.cli.main`.
"""
