# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Flat key/value property store backed by a ``.properties`` text file.

File format
-----------
UTF-8 text, one ``key=value`` entry per logical line:

* ``#`` and ``!`` start comment lines; blank lines are ignored.
* The key ends at the first unescaped ``=``, ``:`` or whitespace.
  Whitespace around the separator is dropped.
* A line ending in an odd number of backslashes continues on the next
  line (leading whitespace of the continuation is dropped).
* Escapes: ``\\t \\n \\r \\f \\uXXXX``; any other escaped character
  stands for itself.

The store is flushed as a whole: the file is rewritten from the in-memory
mapping, never merged with what is on disk.
"""

from __future__ import annotations

import re
import time
from collections.abc import Iterable, Iterator, MutableMapping
from pathlib import Path

from .._util.fs import write_text_atomic

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_WHITESPACE = " \t\f"
_SEPARATORS = "=:"
_UNESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_ESCAPES = {
    "\\": "\\\\",
    "\t": "\\t",
    "\n": "\\n",
    "\r": "\\r",
    "\f": "\\f",
    "=": "\\=",
    ":": "\\:",
    "#": "\\#",
    "!": "\\!",
}


class PropertiesFormatError(ValueError):
    """Raised when a properties file contains a malformed escape sequence."""


# ---------------------------------------------------------------------------
# Codec
# ---------------------------------------------------------------------------


def _logical_lines(text: str) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, logical_line)`` with comments and blanks removed."""
    pending: list[str] = []
    start = 0
    for number, raw in enumerate(_LINE_BREAK.split(text), start=1):
        line = raw.lstrip(_WHITESPACE)
        if not pending:
            if not line or line[0] in "#!":
                continue
            start = number
        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2 == 1:
            pending.append(line[:-1])
            continue
        pending.append(line)
        yield start, "".join(pending)
        pending = []
    if pending:
        yield start, "".join(pending)


def _unicode_escape(text: str, u_index: int, line_number: int) -> int:
    """Return the code unit of the ``\\uXXXX`` escape whose ``u`` is at *u_index*."""
    digits = text[u_index + 1 : u_index + 5]
    if len(digits) != 4 or not all(c in "0123456789abcdefABCDEF" for c in digits):
        raise PropertiesFormatError(f"line {line_number}: malformed \\uXXXX escape: \\u{digits}")
    return int(digits, 16)


def _unescape(text: str, line_number: int) -> str:
    out: list[str] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch != "\\":
            out.append(ch)
            i += 1
            continue
        i += 1
        if i >= len(text):
            break
        ch = text[i]
        if ch == "u":
            code = _unicode_escape(text, i, line_number)
            i += 5
            # a high surrogate escape followed by a low one is one non-BMP character
            if 0xD800 <= code <= 0xDBFF and text[i : i + 2] == "\\u":
                low = _unicode_escape(text, i + 1, line_number)
                if 0xDC00 <= low <= 0xDFFF:
                    code = 0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00)
                    i += 6
            out.append(chr(code))
            continue
        out.append(_UNESCAPES.get(ch, ch))
        i += 1
    return "".join(out)


def _split_entry(line: str) -> tuple[str, str]:
    """Split a logical line into its raw (still escaped) key and value."""
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == "\\":
            i += 2
            continue
        if ch in _SEPARATORS or ch in _WHITESPACE:
            break
        i += 1
    key = line[:i]
    rest = line[i:].lstrip(_WHITESPACE)
    if rest and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip(_WHITESPACE)
    return key, rest


def parse_properties(text: str) -> dict[str, str]:
    """Parse properties *text* into a dict (later duplicates win)."""
    result: dict[str, str] = {}
    for number, line in _logical_lines(text):
        raw_key, raw_value = _split_entry(line)
        result[_unescape(raw_key, number)] = _unescape(raw_value, number)
    return result


def _escape(text: str, *, is_key: bool) -> str:
    out: list[str] = []
    for index, ch in enumerate(text):
        if ch == " " and (is_key or index == 0):
            out.append("\\ ")
        elif ch in _ESCAPES:
            out.append(_ESCAPES[ch])
        elif ord(ch) < 0x20 or ord(ch) == 0x7F or 0xD800 <= ord(ch) <= 0xDFFF:
            # lone surrogates cannot be encoded as UTF-8
            out.append(f"\\u{ord(ch):04x}")
        else:
            out.append(ch)
    return "".join(out)


def format_properties(values: dict[str, str], header: str | None = None) -> str:
    """Serialize *values* as properties text, keys sorted, with a timestamp comment."""
    lines: list[str] = []
    if header:
        lines.extend(f"# {part}" for part in _LINE_BREAK.split(header))
    lines.append("#" + time.strftime("%a %b %d %H:%M:%S %Z %Y", time.localtime()))
    for key in sorted(values):
        lines.append(f"{_escape(key, is_key=True)}={_escape(values[key], is_key=False)}")
    return "\n".join(lines) + "\n"


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class PropertyStore(MutableMapping[str, str]):
    """In-memory string→string mapping that remembers whether it changed.

    Usage::

        store = PropertyStore.load(path)
        store["profile.name"] = "Ada"
        if store.dirty:
            store.flush(path)
    """

    def __init__(self, values: dict[str, str] | Iterable[tuple[str, str]] | None = None) -> None:
        self._values: dict[str, str] = {}
        if values is not None:
            for key, value in dict(values).items():
                self._check(key, value)
                self._values[key] = value
        self._dirty = False

    @classmethod
    def load(cls, path: Path) -> PropertyStore:
        """Read *path* into a clean store; a missing file gives an empty store."""
        path = Path(path)
        if not path.exists():
            return cls()
        return cls(parse_properties(path.read_text(encoding="utf-8")))

    def flush(self, path: Path, header: str | None = None) -> None:
        """Overwrite *path* with the full mapping and mark the store clean."""
        write_text_atomic(Path(path), format_properties(self._values, header))
        self._dirty = False

    @property
    def dirty(self) -> bool:
        """True once any mutation happened since load or the last flush."""
        return self._dirty

    def mark_dirty(self) -> None:
        self._dirty = True

    def set(self, key: str, value: str) -> None:
        self[key] = value

    def remove(self, key: str) -> str | None:
        """Delete *key* if present and return its old value; a missing key is a no-op."""
        if key not in self._values:
            return None
        value = self._values.pop(key)
        self._dirty = True
        return value

    @staticmethod
    def _check(key: object, value: object) -> None:
        if not isinstance(key, str) or not isinstance(value, str):
            raise TypeError(
                f"property keys and values must be str, got {type(key).__name__}"
                f"={type(value).__name__}"
            )

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __setitem__(self, key: str, value: str) -> None:
        self._check(key, value)
        self._values[key] = value
        self._dirty = True

    def __delitem__(self, key: str) -> None:
        del self._values[key]
        self._dirty = True

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._values!r}, dirty={self._dirty})"
