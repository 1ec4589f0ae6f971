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
"""Resource-bundle message source — loads per-locale catalogs from files.

File naming convention, for each base name in declared order::

    {base_path}/{base_name}_{locale}.{yaml|yml|json|properties}
    {base_path}/{base_name}.{yaml|yml|json|properties}   (locale-neutral)

For a base name, the table used for ``en_US`` merges the files for
``en_US``, ``en`` and finally the locale-neutral file, more specific entries
winning.  When neither ``en_US`` nor ``en`` has a file, the default locale's
files take their place.  Tables of different
base names are not merged key by key: the first base name that has a code
supplies it.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import structlog

from specfly.i18n.catalog import CATALOG_EXTENSIONS, MultiMessageCatalog, load_catalog
from specfly.i18n.locale import candidate_locales, normalize_locale
from specfly.kernel.exceptions import ConfigurationException, MessageFormatException, NoSuchMessageException

logger = structlog.get_logger("specfly.i18n")


class ResourceBundleMessageSource:
    """Resolves messages from an ordered set of locale-specific catalog files.

    Catalogs are loaded lazily, once per locale, and are read-only afterwards.
    """

    def __init__(
        self,
        base_path: str | Path = "i18n/",
        base_names: str | Iterable[str] = ("messages",),
        default_locale: str = "en",
    ) -> None:
        if isinstance(base_names, str):
            base_names = [base_names]
        names = [name.strip() for name in base_names or () if name and name.strip()]
        if not names:
            raise ConfigurationException(
                "ResourceBundleMessageSource requires at least one non-blank base name",
                code="I18N_EMPTY_BASE_NAMES",
            )
        self._base_path = Path(base_path)
        self._base_names: tuple[str, ...] = tuple(names)
        self._default_locale = normalize_locale(default_locale)
        self._cache: dict[str, MultiMessageCatalog] = {}

    @property
    def base_names(self) -> tuple[str, ...]:
        return self._base_names

    @property
    def default_locale(self) -> str:
        return self._default_locale

    # ------------------------------------------------------------------
    # Public API (MessageSource protocol)
    # ------------------------------------------------------------------

    def get_message(
        self,
        code: str,
        args: tuple[Any, ...] = (),
        locale: str = "en",
    ) -> str:
        """Resolve *code* for *locale*, applying printf-style positional *args*.

        Raises ``NoSuchMessageException`` when no catalog has *code* and
        ``MessageFormatException`` when *args* do not match the template.
        """
        template = self.catalog(locale).get(code)
        if template is None:
            raise NoSuchMessageException(
                f"No message found for code '{code}' in locale '{locale}'",
                code="I18N_NO_SUCH_MESSAGE",
                context={"message_code": code, "locale": locale},
            )
        return format_message(template, args)

    def get_message_or_default(
        self,
        code: str,
        default: str,
        args: tuple[Any, ...] = (),
        locale: str = "en",
    ) -> str:
        try:
            return self.get_message(code, args, locale)
        except NoSuchMessageException:
            return format_message(default, args)

    def catalog(self, locale: str) -> MultiMessageCatalog:
        """Return the merged catalog for *locale*, loading it on first use."""
        key = normalize_locale(locale)
        cached = self._cache.get(key)
        if cached is None:
            cached = MultiMessageCatalog([self._load_table(name, key) for name in self._base_names])
            self._cache[key] = cached
        return cached

    def keys(self, locale: str) -> list[str]:
        """Every code available for *locale*, duplicates across base names included."""
        return self.catalog(locale).keys()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _candidates(self, base_name: str, locale: str) -> list[str]:
        """Locales to merge for *base_name*, most specific first.

        The default locale's chain stands in only when no file exists for
        any of *locale*'s own candidates.
        """
        chain = candidate_locales(locale)
        if not any(self._find_file(base_name, c) for c in chain):
            chain = candidate_locales(self._default_locale)
        return [*chain, ""]

    def _load_table(self, base_name: str, locale: str) -> dict[str, str] | None:
        """Merge the candidate files of *base_name*; ``None`` when none exist."""
        table: dict[str, str] = {}
        found = False
        for candidate in reversed(self._candidates(base_name, locale)):
            path = self._find_file(base_name, candidate)
            if path is None:
                continue
            found = True
            table.update(load_catalog(path))
            logger.debug("message_catalog_loaded", path=str(path), locale=locale)
        return table if found else None

    def _find_file(self, base_name: str, locale: str) -> Path | None:
        stem = f"{base_name}_{locale}" if locale else base_name
        for ext in CATALOG_EXTENSIONS:
            path = self._base_path / f"{stem}{ext}"
            if path.is_file():
                return path
        return None


_CONVERSION = re.compile(r"%(?:\([^)]*\))?[#0\- +]*(\*|\d+)?(?:\.(\*|\d+))?[hlL]?([diouxXeEfFgGcrsa%])")


def format_message(template: str, args: tuple[Any, ...] | list[Any] = ()) -> str:
    """Apply printf-style positional *args* (``"Hello, %s!"``) to *template*.

    The template is returned untouched when there are no arguments.
    Arguments beyond those the template consumes are ignored; too few
    arguments, or ones of the wrong type, raise ``MessageFormatException``.
    """
    if not args:
        return template
    try:
        return template % tuple(args[: _consumed_args(template)])
    except (TypeError, ValueError, KeyError) as exc:
        raise MessageFormatException(
            f"Cannot format message template {template!r} with {len(args)} argument(s): {exc}",
            code="I18N_FORMAT_ERROR",
            context={"template": template, "args": tuple(args)},
        ) from exc


def _consumed_args(template: str) -> int:
    """Number of positional arguments the conversions in *template* consume."""
    count = 0
    for match in _CONVERSION.finditer(template):
        width, precision, conversion = match.groups()
        if conversion == "%":
            continue
        count += 1 + (width == "*") + (precision == "*")
    return count
