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
"""Locale handling — normalisation, the ambient locale, and request resolvers."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Protocol, runtime_checkable

_locale_var: ContextVar[str | None] = ContextVar("specfly_locale", default=None)


def normalize_locale(locale: str | None) -> str:
    """Normalise a locale tag to ``language[_REGION[_variant]]``.

    ``"en-us"`` -> ``"en_US"``, ``"pt_br"`` -> ``"pt_BR"``, ``"DE"`` -> ``"de"``.
    Blank input gives ``""``.
    """
    if not locale or not locale.strip():
        return ""
    parts = [p for p in locale.strip().replace("-", "_").split("_") if p]
    language = parts[0].lower()
    if len(parts) == 1:
        return language
    return "_".join([language, parts[1].upper(), *parts[2:]])


def candidate_locales(locale: str | None) -> list[str]:
    """Most to least specific: ``"en_US_POSIX"`` -> ``["en_US_POSIX", "en_US", "en"]``."""
    normalized = normalize_locale(locale)
    if not normalized:
        return []
    parts = normalized.split("_")
    return ["_".join(parts[:n]) for n in range(len(parts), 0, -1)]


class LocaleContext:
    """Ambient locale for the current thread or async task, backed by contextvars."""

    @staticmethod
    def set(locale: str) -> None:
        _locale_var.set(normalize_locale(locale) or None)

    @staticmethod
    def current() -> str | None:
        return _locale_var.get()

    @staticmethod
    def clear() -> None:
        _locale_var.set(None)

    @staticmethod
    @contextmanager
    def using(locale: str) -> Iterator[str]:
        """Make *locale* current inside the ``with`` block."""
        token = _locale_var.set(normalize_locale(locale) or None)
        try:
            yield normalize_locale(locale)
        finally:
            _locale_var.reset(token)


@runtime_checkable
class LocaleResolver(Protocol):
    """Port for determining the locale from an incoming request."""

    def resolve_locale(self, request: Any) -> str: ...


class AcceptHeaderLocaleResolver:
    """Picks the ``Accept-Language`` tag with the highest quality value.

    Works with any request object exposing ``accept_language`` or a
    ``headers`` mapping.  Falls back to *default_locale* when the header is
    missing or unusable.
    """

    def __init__(self, default_locale: str = "en") -> None:
        self._default = normalize_locale(default_locale)

    def resolve_locale(self, request: Any) -> str:
        header: str = getattr(request, "accept_language", "") or ""
        if not header:
            headers = getattr(request, "headers", None)
            if headers is not None:
                header = headers.get("accept-language", "") or headers.get("Accept-Language", "")

        if not header:
            return self._default

        return _parse_accept_language(header, self._default)


class FixedLocaleResolver:
    """Always returns a pre-configured locale, ignoring the request."""

    def __init__(self, locale: str = "en") -> None:
        self._locale = normalize_locale(locale)

    def resolve_locale(self, request: Any) -> str:  # noqa: ARG002
        return self._locale


def _parse_accept_language(header: str, default: str) -> str:
    """Return the normalised tag with the highest *q* value, e.g. from ``en-US,en;q=0.9``."""
    best_locale = default
    best_quality = 0.0

    for part in header.split(","):
        tag, _, params = part.strip().partition(";")
        tag = tag.strip()
        if not tag or tag == "*":
            continue

        quality = 1.0
        params = params.strip()
        if params[:2].lower() == "q=":
            try:
                quality = float(params[2:].strip())
            except ValueError:
                continue

        if quality > best_quality:
            best_quality = quality
            best_locale = normalize_locale(tag)

    return best_locale
