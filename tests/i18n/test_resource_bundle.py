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
"""Tests for ResourceBundleMessageSource — file-backed, multi-catalog message resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

from specfly.i18n.adapters.resource_bundle import ResourceBundleMessageSource, format_message
from specfly.i18n.ports.outbound import MessageSource
from specfly.kernel.exceptions import ConfigurationException, MessageFormatException, NoSuchMessageException

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def bundle_dir(tmp_path: Path) -> Path:
    """Two base names (messages, errors) across several locales."""
    (tmp_path / "messages.properties").write_text(
        "app.title=Catalogue\nonly.neutral=neutral\n", encoding="utf-8"
    )
    (tmp_path / "messages_en.yaml").write_text(
        "greeting: 'Hello, %s!'\nfarewell: Goodbye\npair: '%s and %s'\nshared: from messages\n", encoding="utf-8"
    )
    (tmp_path / "messages_en_GB.yaml").write_text("farewell: Cheerio\n", encoding="utf-8")
    (tmp_path / "messages_vi.json").write_text('{"greeting": "Xin chào, %s!"}', encoding="utf-8")
    (tmp_path / "errors_en.properties").write_text(
        "error.not_found=%s was not found\nshared=from errors\n", encoding="utf-8"
    )
    return tmp_path


@pytest.fixture
def source(bundle_dir: Path) -> ResourceBundleMessageSource:
    return ResourceBundleMessageSource(base_path=bundle_dir, base_names=["messages", "errors"], default_locale="en")


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_conforms_to_protocol(self, source: ResourceBundleMessageSource):
        assert isinstance(source, MessageSource)

    @pytest.mark.parametrize("base_names", [[], ["", "   "], None])
    def test_empty_base_names_fail_fast(self, base_names):
        with pytest.raises(ConfigurationException):
            ResourceBundleMessageSource(base_names=base_names)

    def test_blank_base_names_are_dropped(self):
        source = ResourceBundleMessageSource(base_names=["messages", " ", "errors"])
        assert source.base_names == ("messages", "errors")

    def test_single_string_base_name(self):
        assert ResourceBundleMessageSource(base_names="messages").base_names == ("messages",)


class TestResolution:
    def test_formats_positional_args(self, source: ResourceBundleMessageSource):
        assert source.get_message("greeting", ("World",), "en") == "Hello, World!"

    def test_more_specific_locale_wins(self, source: ResourceBundleMessageSource):
        assert source.get_message("farewell", locale="en_GB") == "Cheerio"
        assert source.get_message("farewell", locale="en-gb") == "Cheerio"

    def test_falls_back_to_language(self, source: ResourceBundleMessageSource):
        assert source.get_message("greeting", ("you",), "en_GB") == "Hello, you!"

    def test_locale_with_own_file_does_not_borrow_default_entries(self, source: ResourceBundleMessageSource):
        assert source.get_message("greeting", ("bạn",), "vi") == "Xin chào, bạn!"
        with pytest.raises(NoSuchMessageException):
            source.get_message("farewell", locale="vi")

    def test_base_name_without_locale_file_uses_default_locale(self, source: ResourceBundleMessageSource):
        assert source.get_message("error.not_found", ("Đơn 7",), "vi") == "Đơn 7 was not found"

    def test_falls_back_to_locale_neutral_file(self, source: ResourceBundleMessageSource):
        assert source.get_message("only.neutral", locale="vi") == "neutral"

    def test_second_base_name_supplies_missing_code(self, source: ResourceBundleMessageSource):
        assert source.get_message("error.not_found", ("Order 7",), "en") == "Order 7 was not found"

    def test_first_base_name_wins_on_duplicates(self, source: ResourceBundleMessageSource):
        assert source.get_message("shared", locale="en") == "from messages"

    def test_unknown_locale_uses_default_chain(self, source: ResourceBundleMessageSource):
        assert source.get_message("farewell", locale="xx") == "Goodbye"

    def test_missing_code_raises_key_error(self, source: ResourceBundleMessageSource):
        with pytest.raises(KeyError):
            source.get_message("nope", locale="en")
        with pytest.raises(NoSuchMessageException, match="nope"):
            source.get_message("nope", locale="en")

    def test_missing_bundle_files_behave_as_misses(self, tmp_path: Path):
        source = ResourceBundleMessageSource(base_path=tmp_path / "absent")
        with pytest.raises(NoSuchMessageException):
            source.get_message("anything")

    def test_too_few_args_raise(self, source: ResourceBundleMessageSource):
        with pytest.raises(MessageFormatException):
            source.get_message("pair", ("one",), "en")

    def test_surplus_args_are_ignored(self, source: ResourceBundleMessageSource):
        assert source.get_message("greeting", ("a", "b"), "en") == "Hello, a!"
        assert source.get_message("farewell", ("unused",), "en") == "Goodbye"

    def test_template_without_args_is_not_formatted(self, bundle_dir: Path):
        (bundle_dir / "percent_en.properties").write_text("rate=100%\n", encoding="utf-8")
        source = ResourceBundleMessageSource(base_path=bundle_dir, base_names=["percent"])
        assert source.get_message("rate") == "100%"


class TestDefaultsAndKeys:
    def test_get_message_or_default_hit(self, source: ResourceBundleMessageSource):
        assert source.get_message_or_default("farewell", "Bye", locale="en") == "Goodbye"

    def test_get_message_or_default_miss_formats_default(self, source: ResourceBundleMessageSource):
        assert source.get_message_or_default("nope", "Hi %s", ("Ann",), "en") == "Hi Ann"

    def test_keys_union_across_base_names(self, source: ResourceBundleMessageSource):
        keys = source.keys("en")
        assert keys.count("shared") == 2
        assert {"app.title", "greeting", "farewell", "error.not_found", "only.neutral"} <= set(keys)

    def test_catalog_is_cached_per_locale(self, source: ResourceBundleMessageSource):
        assert source.catalog("en") is source.catalog("en")
        assert source.catalog("en_GB") is not source.catalog("en")


class TestFormatMessage:
    def test_no_args_returns_template(self):
        assert format_message("%d items") == "%d items"

    def test_positional(self):
        assert format_message("%s has %d items", ("cart", 3)) == "cart has 3 items"

    @pytest.mark.parametrize(
        ("template", "args"),
        [("%s and %s", ("one",)), ("%d", ("NaN",)), ("100%", ("x",))],
    )
    def test_mismatch_raises(self, template, args):
        with pytest.raises(MessageFormatException) as exc_info:
            format_message(template, args)
        assert exc_info.value.code == "I18N_FORMAT_ERROR"

    def test_surplus_args_are_ignored(self):
        assert format_message("plain", ("extra",)) == "plain"
        assert format_message("%s wins", ("Ann", "Bob")) == "Ann wins"

    def test_escaped_percent_consumes_nothing(self):
        assert format_message("%d%% of %s", (40, "quota", "unused")) == "40% of quota"

    def test_star_width_consumes_an_argument(self):
        assert format_message("[%*d]", (4, 7, "unused")) == "[   7]"
