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
"""Translator — user-facing message lookup that never fails the caller.

Example::

    translator = Translator.from_config(config)

    translator.get_message("user.not_found")                    # active locale
    translator.get_localized_message("greeting", "World")       # "Hello, World!"
    translator.get_localized_message("greeting", "Welt", locale="de")
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Protocol, Union, runtime_checkable

import structlog

from specfly.core.config import Config
from specfly.i18n.config import message_source_from_config
from specfly.i18n.locale import LocaleContext, normalize_locale
from specfly.i18n.ports.outbound import MessageSource
from specfly.kernel.exceptions import MessageFormatException

logger = structlog.get_logger("specfly.i18n")


@runtime_checkable
class I18nCode(Protocol):
    """Anything that carries a message code, typically an application enum."""

    @property
    def code(self) -> str: ...


MessageCode = Union[str, I18nCode, Enum]


def message_code(code: MessageCode) -> str:
    """Extract the symbolic code from a ``str``, an ``I18nCode`` or an ``Enum`` member."""
    carried = getattr(code, "code", None)
    if isinstance(carried, str):
        return carried
    if isinstance(code, Enum):
        return str(code.value)
    if isinstance(code, str):
        return code
    raise TypeError(f"Unsupported message code: {code!r}")


class Translator:
    """Resolves message codes to trimmed, localised text.

    The locale is taken from the explicit ``locale`` argument, then from
    :class:`~specfly.i18n.locale.LocaleContext`, then *default_locale*.
    A code that cannot be resolved, or a template that does not accept the
    given arguments, is logged as a warning and the raw code is returned.
    """

    def __init__(self, message_source: MessageSource, default_locale: str = "en") -> None:
        self._source = message_source
        self._default_locale = normalize_locale(default_locale)

    @classmethod
    def from_config(cls, config: Config) -> Translator:
        source = message_source_from_config(config)
        return cls(source, default_locale=source.default_locale)

    @property
    def message_source(self) -> MessageSource:
        return self._source

    def resolve_locale(self, locale: str | None = None) -> str:
        return normalize_locale(locale) or LocaleContext.current() or self._default_locale

    def get_message(self, code: MessageCode, locale: str | None = None) -> str:
        return self.get_localized_message(code, locale=locale)

    def get_localized_message(self, code: MessageCode, *args: Any, locale: str | None = None) -> str:
        key = message_code(code)
        active = self.resolve_locale(locale)
        try:
            text = self._source.get_message(key, args, active)
        except MessageFormatException:
            logger.warning("message_format_error", code=key, locale=active, args=args, exc_info=True)
            return key
        except KeyError:
            logger.warning("message_code_not_found", code=key, locale=active)
            return key
        return text.strip()
