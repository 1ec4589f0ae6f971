# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Message catalogs — flat code-to-text tables and their ordered merge.

A *catalog* is a plain ``Mapping[str, str]`` for one locale.  Several
catalogs are consulted in declared order by :class:`MultiMessageCatalog`;
the first one that contains a code supplies its text.
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from specfly.kernel.exceptions import ConfigurationException

CATALOG_EXTENSIONS = (".yaml", ".yml", ".json", ".properties")


def lookup(code: str, tables: Sequence[Mapping[str, str] | None]) -> str | None:
    """Return the text for *code* from the first table containing it, else ``None``."""
    for table in tables:
        if table is not None and code in table:
            return table[code]
    return None


class MultiMessageCatalog:
    """Read-only, ordered set of catalogs with first-match-wins lookup.

    Enumerating :meth:`keys` unions every table in order and keeps
    duplicates when a code appears in more than one table.
    """

    __slots__ = ("_tables",)

    def __init__(self, tables: Sequence[Mapping[str, str] | None] | None) -> None:
        if not tables:
            raise ConfigurationException("MultiMessageCatalog requires at least one catalog", code="I18N_EMPTY_CATALOGS")
        self._tables: tuple[Mapping[str, str] | None, ...] = tuple(tables)

    def get(self, code: str, default: str | None = None) -> str | None:
        text = lookup(code, self._tables)
        return default if text is None else text

    def keys(self) -> list[str]:
        return [key for table in self._tables if table is not None for key in table]

    def __contains__(self, code: object) -> bool:
        return any(table is not None and code in table for table in self._tables)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self.keys())


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def load_catalog(path: str | Path) -> dict[str, str]:
    """Load one catalog file into a flat ``{code: text}`` dict.

    Supported formats: YAML (``.yaml``/``.yml``, nested keys flattened with
    dots), JSON (same flattening) and Java-style ``.properties``.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        with path.open(encoding="utf-8") as fh:
            return _flatten(yaml.safe_load(fh) or {})
    if suffix == ".json":
        with path.open(encoding="utf-8") as fh:
            return _flatten(json.load(fh) or {})
    if suffix == ".properties":
        return parse_properties(path.read_text(encoding="utf-8"))
    raise ConfigurationException(f"Unsupported message catalog format: {path}", code="I18N_CATALOG_FORMAT")


def _flatten(data: dict[str, Any], prefix: str = "") -> dict[str, str]:
    """Flatten a nested dict into dot-separated keys with string values."""
    items: dict[str, str] = {}
    for key, value in data.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, dict):
            items.update(_flatten(value, full_key))
        else:
            items[full_key] = "" if value is None else str(value)
    return items


_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


def parse_properties(text: str) -> dict[str, str]:
    """Parse ``.properties`` content.

    Handles ``key=value``, ``key: value`` and ``key value`` entries, ``#``
    and ``!`` comment lines, backslash line continuations and the
    ``\\t \\n \\r \\f \\uXXXX`` escapes.  Later duplicates override earlier ones.
    """
    entries: dict[str, str] = {}
    lines = iter(text.splitlines())
    for raw in lines:
        line = raw.lstrip()
        if not line or line[0] in "#!":
            continue
        while _continues(line):
            line = line[:-1] + next(lines, "").lstrip()
        key, value = _split_entry(line)
        entries[_unescape(key)] = _unescape(value)
    return entries


def _continues(line: str) -> bool:
    """An odd number of trailing backslashes continues onto the next line."""
    trailing = len(line) - len(line.rstrip("\\"))
    return trailing % 2 == 1


def _split_entry(line: str) -> tuple[str, str]:
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == "\\":
            i += 2
            continue
        if ch in "=: \t\f":
            break
        i += 1
    key = line[:i]
    rest = line[i:].lstrip(" \t\f")
    if rest[:1] in ("=", ":"):
        rest = rest[1:].lstrip(" \t\f")
    return key, rest


def _unescape(value: str) -> str:
    out: list[str] = []
    i = 0
    while i < len(value):
        ch = value[i]
        if ch != "\\" or i + 1 >= len(value):
            out.append(ch)
            i += 1
            continue
        nxt = value[i + 1]
        if nxt == "u" and i + 6 <= len(value):
            try:
                out.append(chr(int(value[i + 2 : i + 6], 16)))
                i += 6
                continue
            except ValueError:
                pass
        out.append(_ESCAPES.get(nxt, nxt))
        i += 2
    return "".join(out)
