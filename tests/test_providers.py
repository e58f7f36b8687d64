"""Tests for message source providers and file loading.

Python 3.13+.
"""

import json
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from msgsimple import (
    DefaultLocale,
    InvalidArgumentError,
    LoadStatus,
    MapMessageSource,
    MessageBundle,
    SourceFormat,
)
from msgsimple.constants import ROOT_LOCALE
from msgsimple.provider import (
    LoadingMessageSourceProvider,
    LoadSummary,
    MessageSourceProvider,
    PathSourceLoader,
    SourceLoadResult,
    StaticMessageSourceProvider,
)
from msgsimple.source import MessageSource


class CountingLoader:
    """Loader serving in-memory tables and counting load calls."""

    def __init__(
        self, tables: dict[str, dict[str, str]], broken: frozenset[str] = frozenset()
    ) -> None:
        self.tables = tables
        self.broken = broken
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def load(self, locale: str) -> MessageSource:
        with self._lock:
            self.calls.append(locale)
        if locale in self.broken:
            raise ValueError(f"broken table for {locale!r}")
        try:
            return MapMessageSource(self.tables[locale])
        except KeyError:
            raise FileNotFoundError(locale) from None

    def describe_path(self, locale: str) -> str:
        return f"memory:{locale}"


def _write_json(path: Path, messages: dict[str, object]) -> None:
    path.write_text(json.dumps(messages), encoding="utf-8")


class TestStaticProvider:
    """Test StaticMessageSourceProvider."""

    def test_locale_keys_canonicalized(self) -> None:
        """Locale keys in any spelling resolve by canonical code."""
        source = MapMessageSource({"a": "A"})
        provider = StaticMessageSourceProvider({"en-us": source})
        assert provider.get_message_source("en_US") is source
        assert provider.locales == ("en_US",)

    def test_unmapped_locale_without_default(self) -> None:
        """Unmapped locales give None without a default source."""
        provider = StaticMessageSourceProvider({"en": MapMessageSource()})
        assert provider.get_message_source("fr") is None

    def test_default_source(self) -> None:
        """The default source serves every unmapped locale."""
        default = MapMessageSource()
        provider = StaticMessageSourceProvider({"en": MapMessageSource()}, default)
        assert provider.get_message_source("fr") is default
        assert provider.get_message_source(ROOT_LOCALE) is default

    def test_with_single_source_everywhere(self) -> None:
        """Without a locale, the single source serves all locales."""
        source = MapMessageSource()
        provider = StaticMessageSourceProvider.with_single_source(source)
        assert provider.get_message_source("ja_JP") is source
        assert provider.get_message_source(ROOT_LOCALE) is source

    def test_with_single_source_for_locale(self) -> None:
        """With a locale, the single source serves that locale only."""
        source = MapMessageSource()
        provider = StaticMessageSourceProvider.with_single_source(source, "de")
        assert provider.get_message_source("de") is source
        assert provider.get_message_source("de_AT") is None

    def test_none_entries_rejected(self) -> None:
        """None locales and sources are rejected."""
        with pytest.raises(InvalidArgumentError, match="source cannot be null"):
            StaticMessageSourceProvider({"en": None})  # type: ignore[dict-item]
        with pytest.raises(InvalidArgumentError, match="locale cannot be null"):
            StaticMessageSourceProvider({None: MapMessageSource()})  # type: ignore[dict-item]
        with pytest.raises(InvalidArgumentError, match="source cannot be null"):
            StaticMessageSourceProvider.with_single_source(None)  # type: ignore[arg-type]

    def test_input_mapping_snapshotted(self) -> None:
        """Later changes to the input mapping are not visible."""
        sources = {"en": MapMessageSource()}
        provider = StaticMessageSourceProvider(sources)
        sources["de"] = MapMessageSource()
        assert provider.get_message_source("de") is None

    def test_satisfies_protocol(self) -> None:
        """Static providers are MessageSourceProviders."""
        assert isinstance(StaticMessageSourceProvider(), MessageSourceProvider)


class TestPathSourceLoader:
    """Test file naming and path safety."""

    def test_describe_path(self, tmp_path: Path) -> None:
        """Locale files carry a '_locale' suffix; root has none."""
        loader = PathSourceLoader(str(tmp_path / "messages"))
        assert loader.describe_path("de_AT") == f"{tmp_path / 'messages'}_de_AT.json"
        assert loader.describe_path(ROOT_LOCALE) == f"{tmp_path / 'messages'}.json"

    def test_describe_path_po(self, tmp_path: Path) -> None:
        """PO loaders use the .po suffix."""
        loader = PathSourceLoader(str(tmp_path / "messages"), SourceFormat.PO)
        assert loader.describe_path("de").endswith("messages_de.po")

    def test_load(self, tmp_path: Path) -> None:
        """Existing files load into sources."""
        _write_json(tmp_path / "messages_de.json", {"greeting": "Hallo"})
        loader = PathSourceLoader(str(tmp_path / "messages"))
        assert loader.load("de").get_key("greeting") == "Hallo"

    def test_missing_file(self, tmp_path: Path) -> None:
        """Missing files raise FileNotFoundError."""
        loader = PathSourceLoader(str(tmp_path / "messages"))
        with pytest.raises(FileNotFoundError):
            loader.load("fr")

    @pytest.mark.parametrize("locale", ["../etc", "de/AT", "de\\AT", ".."])
    def test_unsafe_locale_rejected(self, tmp_path: Path, locale: str) -> None:
        """Locale codes with path components are rejected."""
        loader = PathSourceLoader(str(tmp_path / "messages"))
        with pytest.raises(ValueError, match="unsafe locale code"):
            loader.load(locale)

    def test_base_path_outside_root_rejected(self, tmp_path: Path) -> None:
        """Resolved paths must stay inside root_dir."""
        (tmp_path / "other").mkdir()
        _write_json(tmp_path / "messages_de.json", {"greeting": "Hallo"})
        loader = PathSourceLoader(str(tmp_path / "messages"), root_dir=str(tmp_path / "other"))
        with pytest.raises(ValueError, match="escapes root directory"):
            loader.load("de")

    def test_empty_base_path_rejected(self) -> None:
        """An empty base path is a configuration error."""
        with pytest.raises(InvalidArgumentError, match="base path cannot be empty"):
            PathSourceLoader("")


class TestLoadingProvider:
    """Test LoadingMessageSourceProvider."""

    def test_loads_once_per_locale(self) -> None:
        """Each locale is loaded at most once."""
        loader = CountingLoader({"de": {"a": "A"}})
        provider = LoadingMessageSourceProvider(loader)

        first = provider.get_message_source("de")
        second = provider.get_message_source("de")
        provider.get_message_source("fr")
        provider.get_message_source("fr")

        assert first is second
        assert loader.calls == ["de", "fr"]

    def test_not_found_uses_default_source(self) -> None:
        """Locales without a source fall back to the default source."""
        default = MapMessageSource({"a": "default"})
        provider = LoadingMessageSourceProvider(CountingLoader({}), default_source=default)
        assert provider.get_message_source("fr") is default

    def test_error_recorded_and_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Broken sources are recorded as errors and logged as warnings."""
        provider = LoadingMessageSourceProvider(CountingLoader({}, broken=frozenset({"de"})))

        with caplog.at_level(logging.WARNING, logger="msgsimple.provider.loading"):
            assert provider.get_message_source("de") is None

        assert any("memory:de" in r.getMessage() for r in caplog.records)
        summary = provider.get_load_summary()
        assert summary.has_errors
        (result,) = summary.get_errors()
        assert result.locale == "de"
        assert isinstance(result.error, ValueError)

    def test_load_summary(self) -> None:
        """The summary counts every attempt by status."""
        provider = LoadingMessageSourceProvider(
            CountingLoader({"de": {}, ROOT_LOCALE: {}}, broken=frozenset({"fr"}))
        )
        for locale in ("de", ROOT_LOCALE, "it", "fr"):
            provider.get_message_source(locale)

        summary = provider.get_load_summary()

        assert summary.total_attempted == 4
        assert summary.successful == 2
        assert summary.not_found == 1
        assert summary.errors == 1
        assert repr(summary) == "LoadSummary(total=4, ok=2, not_found=1, errors=1)"
        it_result = summary.get_by_locale("it")
        assert it_result is not None
        assert it_result.status is LoadStatus.NOT_FOUND
        assert it_result.source_path == "memory:it"
        assert summary.get_by_locale("es") is None

    def test_concurrent_first_requests_load_once(self) -> None:
        """Concurrent first requests for a locale trigger a single load."""
        loader = CountingLoader({"de": {"a": "A"}})
        provider = LoadingMessageSourceProvider(loader)
        barrier = threading.Barrier(8)

        def request() -> MessageSource | None:
            barrier.wait()
            return provider.get_message_source("de")

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: request(), range(8)))

        assert loader.calls == ["de"]
        assert all(r is results[0] for r in results)

    def test_none_loader_rejected(self) -> None:
        """A None loader is a configuration error."""
        with pytest.raises(InvalidArgumentError, match="loader cannot be null"):
            LoadingMessageSourceProvider(None)  # type: ignore[arg-type]


class TestLoadResultTypes:
    """Test SourceLoadResult and LoadSummary."""

    def test_status_properties(self) -> None:
        """Status predicates reflect the status."""
        result = SourceLoadResult("de", LoadStatus.SUCCESS)
        assert result.is_success
        assert not result.is_not_found
        assert not result.is_error

    def test_empty_summary(self) -> None:
        """An empty summary has no errors."""
        summary = LoadSummary(results=())
        assert summary.total_attempted == 0
        assert not summary.has_errors


class TestBundleForPath:
    """Test MessageBundle.for_path end to end."""

    @pytest.fixture
    def base_path(self, tmp_path: Path) -> str:
        _write_json(
            tmp_path / "messages.json",
            {"greeting": "Hello", "farewell": "Bye", "only": {"root": "Root"}},
        )
        _write_json(tmp_path / "messages_de.json", {"farewell": "Tschüss"})
        _write_json(tmp_path / "messages_de_AT.json", {"greeting": "Servus"})
        return str(tmp_path / "messages")

    def test_fallback_through_files(self, base_path: str) -> None:
        """Keys resolve through de_AT, de and root files."""
        bundle = MessageBundle.for_path(base_path, default_locale=DefaultLocale("de_AT"))
        assert bundle.get_message("greeting") == "Servus"
        assert bundle.get_message("farewell") == "Tschüss"
        assert bundle.get_message("only.root") == "Root"
        assert bundle.get_message("greeting", locale="en") == "Hello"
        assert bundle.get_message("missing") == "missing"

    def test_deeply_nested_file_recorded_as_error(self, tmp_path: Path) -> None:
        """An overly nested file is a failed load, not an exception from lookup."""
        nested = '{"a": ' * 5000 + '"x"' + "}" * 5000
        (tmp_path / "messages_en.json").write_text(nested, encoding="utf-8")
        provider = LoadingMessageSourceProvider(PathSourceLoader(str(tmp_path / "messages")))
        bundle = MessageBundle.new_builder().append_provider(provider).freeze()

        assert bundle.get_message("k", locale="en") == "k"
        assert bundle.get_message("k", locale="en") == "k"

        summary = provider.get_load_summary()
        assert summary.errors == 1
        result = summary.get_by_locale("en")
        assert result is not None
        assert result.status is LoadStatus.ERROR

    def test_po_files(self, tmp_path: Path) -> None:
        """PO catalogs work the same way."""
        (tmp_path / "app_de.po").write_text('msgid "greeting"\nmsgstr "Hallo"\n', encoding="utf-8")
        bundle = MessageBundle.for_path(str(tmp_path / "app"), SourceFormat.PO)
        assert bundle.get_message("greeting", locale="de_CH") == "Hallo"
        assert bundle.get_message("greeting", locale="fr") == "greeting"
