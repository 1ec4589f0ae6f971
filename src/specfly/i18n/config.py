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
"""I18n configuration binding (``specfly.i18n.*``)."""

from __future__ import annotations

from dataclasses import dataclass, field

from specfly.core.config import Config, config_properties
from specfly.i18n.adapters.resource_bundle import ResourceBundleMessageSource


@config_properties(prefix="specfly.i18n")
@dataclass
class I18nProperties:
    base_path: str = "i18n/"
    base_names: list[str] = field(default_factory=lambda: ["messages"])
    default_locale: str = "en"


def message_source_from_config(config: Config) -> ResourceBundleMessageSource:
    """Build the resource-bundle message source described by *config*.

    ``SPECFLY_I18N_DEFAULT_LOCALE`` and ``SPECFLY_I18N_BASE_PATH`` override
    the file values; ``base-names`` may also be a comma-separated string.
    """
    props = config.bind(I18nProperties)
    base_names = props.base_names
    if isinstance(base_names, str):
        base_names = [name.strip() for name in base_names.split(",")]
    return ResourceBundleMessageSource(
        base_path=str(config.get("specfly.i18n.base-path", props.base_path)),
        base_names=base_names,
        default_locale=str(config.get("specfly.i18n.default-locale", props.default_locale)),
    )
