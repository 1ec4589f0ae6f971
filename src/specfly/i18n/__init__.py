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
"""specfly I18n — localised messages from ordered, merged catalogs.

Import concrete adapter types from the adapter package::

    from specfly.i18n.adapters.resource_bundle import ResourceBundleMessageSource
"""

from specfly.i18n.catalog import MultiMessageCatalog, load_catalog, lookup
from specfly.i18n.locale import (
    AcceptHeaderLocaleResolver,
    FixedLocaleResolver,
    LocaleContext,
    LocaleResolver,
    normalize_locale,
)
from specfly.i18n.ports.outbound import MessageSource
from specfly.i18n.translator import I18nCode, Translator

__all__ = [
    "AcceptHeaderLocaleResolver",
    "FixedLocaleResolver",
    "I18nCode",
    "LocaleContext",
    "LocaleResolver",
    "MessageSource",
    "MultiMessageCatalog",
    "Translator",
    "load_catalog",
    "lookup",
    "normalize_locale",
]
