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
"""SpecflyApplication — loads configuration, configures logging and wires the translator.

Usage::

    app = SpecflyApplication("path/to/project")
    app.translator.get_localized_message("greeting", "World")
"""

from __future__ import annotations

import os
from pathlib import Path

import yaml  # type: ignore[import-untyped]

from specfly.core.config import Config
from specfly.i18n.config import message_source_from_config
from specfly.i18n.ports.outbound import MessageSource
from specfly.i18n.translator import Translator
from specfly.logging.port import LoggingPort
from specfly.logging.structlog_adapter import StructlogAdapter


class SpecflyApplication:
    """Bootstrap for applications using specfly.

    Startup sequence:
    1. Resolve active profiles (``SPECFLY_PROFILES_ACTIVE`` or ``specfly.profiles.active``)
    2. Load configuration from *config_path* (a directory or a single file)
    3. Configure logging through the given :class:`LoggingPort`
    4. Build the message source and translator from ``specfly.i18n``
    """

    def __init__(
        self,
        config_path: str | Path | None = None,
        config: Config | None = None,
        logging_port: LoggingPort | None = None,
    ) -> None:
        if config is not None:
            self.config = config
        else:
            self.config = self._load_config(config_path)

        self._logging: LoggingPort = logging_port or StructlogAdapter()
        self._logging.configure(self.config)
        self._logger = self._logging.get_logger("specfly.core")

        self._message_source = message_source_from_config(self.config)
        self._translator = Translator(self._message_source, default_locale=self._message_source.default_locale)

        self._logger.info(
            "specfly_started",
            sources=self.config.loaded_sources,
            base_names=list(self._message_source.base_names),
            default_locale=self._message_source.default_locale,
        )

    @property
    def logging(self) -> LoggingPort:
        return self._logging

    @property
    def message_source(self) -> MessageSource:
        return self._message_source

    @property
    def translator(self) -> Translator:
        return self._translator

    # ------------------------------------------------------------------
    # Configuration loading
    # ------------------------------------------------------------------

    @classmethod
    def _load_config(cls, config_path: str | Path | None) -> Config:
        if config_path is None:
            return Config.from_sources(Path("."), active_profiles=cls._resolve_profiles_early(Path(".")))
        path = Path(config_path)
        if path.is_file():
            return Config.from_file(path, active_profiles=cls._resolve_profiles_early(path))
        return Config.from_sources(path, active_profiles=cls._resolve_profiles_early(path))

    @staticmethod
    def _resolve_profiles_early(location: Path) -> list[str]:
        """Resolve active profiles before the full configuration is merged."""
        env_profiles = os.environ.get("SPECFLY_PROFILES_ACTIVE", "")
        if env_profiles:
            return [p.strip() for p in env_profiles.split(",") if p.strip()]

        if location.is_file():
            candidates = [location] if location.suffix in (".yaml", ".yml") else []
        else:
            candidates = [location / "config" / "specfly.yaml", location / "specfly.yaml"]

        for candidate in candidates:
            if candidate.is_file():
                with open(candidate, encoding="utf-8") as f:
                    data = yaml.safe_load(f) or {}
                profiles = (data.get("specfly") or {}).get("profiles") or {}
                active = profiles.get("active", "") if isinstance(profiles, dict) else ""
                if active:
                    return [p.strip() for p in str(active).split(",") if p.strip()]
        return []
