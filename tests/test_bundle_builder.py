"""Tests for MessageBundleBuilder and the freeze()/thaw() lifecycle."""

import dataclasses

import pytest

from msgsimple import (
    DEFAULT_LOCALE,
    DefaultLocale,
    InvalidArgumentError,
    MapMessageSource,
    MessageBundle,
    MessageBundleBuilder,
    StaticMessageSourceProvider,
)


def _source(**messages: str) -> MapMessageSource:
    return MapMessageSource(messages)


class TestBuilderMutators:
    """Test append/prepend/remove."""

    def test_new_builder_is_empty(self) -> None:
        """new_builder() starts without providers and with the process-wide cell."""
        builder = MessageBundle.new_builder()
        assert isinstance(builder, MessageBundleBuilder)
        assert builder.providers == ()
        assert builder.freeze().default_locale is DEFAULT_LOCALE

    def test_chaining(self) -> None:
        """Mutators return the builder."""
        builder = MessageBundle.new_builder()
        assert builder.append_source(_source(a="A")) is builder
        assert builder.prepend_source(_source(b="B")) is builder
        assert builder.set_default_locale(DefaultLocale("en")) is builder

    def test_append_is_lowest_priority(self) -> None:
        """Appended sources are consulted after existing ones."""
        bundle = (
            MessageBundle.new_builder()
            .append_source(_source(x="first"))
            .append_source(_source(x="second"))
            .freeze()
        )
        assert bundle.get_message("x", locale="en") == "first"

    def test_prepend_is_highest_priority(self) -> None:
        """Prepended sources are consulted before existing ones."""
        bundle = (
            MessageBundle.new_builder()
            .append_source(_source(x="first"))
            .prepend_source(_source(x="override"))
            .freeze()
        )
        assert bundle.get_message("x", locale="en") == "override"

    def test_append_source_for_locale(self) -> None:
        """A locale-bound source only serves that locale and its children."""
        bundle = (
            MessageBundle.new_builder()
            .append_source(_source(x="Servus"), locale="de-AT")
            .freeze()
        )
        assert bundle.get_message("x", locale="de_AT") == "Servus"
        assert bundle.get_message("x", locale="de_AT_VIENNA") == "Servus"
        assert bundle.get_message("x", locale="de") == "x"

    def test_remove_provider(self) -> None:
        """remove_provider() drops a registered provider."""
        provider = StaticMessageSourceProvider.with_single_source(_source(x="X"))
        builder = MessageBundle.new_builder().append_provider(provider)
        builder.remove_provider(provider)
        assert builder.providers == ()

    def test_remove_unknown_provider(self) -> None:
        """Removing an unregistered provider raises."""
        provider = StaticMessageSourceProvider()
        with pytest.raises(InvalidArgumentError, match="not registered"):
            MessageBundle.new_builder().remove_provider(provider)

    def test_none_arguments_rejected(self) -> None:
        """None providers, sources and cells are rejected."""
        builder = MessageBundle.new_builder()
        with pytest.raises(InvalidArgumentError, match="provider cannot be null"):
            builder.append_provider(None)  # type: ignore[arg-type]
        with pytest.raises(InvalidArgumentError, match="provider cannot be null"):
            builder.prepend_provider(None)  # type: ignore[arg-type]
        with pytest.raises(InvalidArgumentError, match="source cannot be null"):
            builder.append_source(None)  # type: ignore[arg-type]
        with pytest.raises(InvalidArgumentError, match="default locale"):
            builder.set_default_locale(None)  # type: ignore[arg-type]
        assert builder.providers == ()


class TestFreezeThaw:
    """Test independence of builders and bundles."""

    def test_freeze_snapshots(self) -> None:
        """Later builder changes do not affect a frozen bundle."""
        builder = MessageBundle.new_builder().append_source(_source(x="old"))
        bundle = builder.freeze()

        builder.prepend_source(_source(x="new"))

        assert len(bundle.providers) == 1
        assert bundle.get_message("x", locale="en") == "old"
        assert builder.freeze().get_message("x", locale="en") == "new"

    def test_thaw_copies(self) -> None:
        """Changes to a thawed builder do not affect the original bundle."""
        bundle = MessageBundle.new_builder().append_source(_source(x="old")).freeze()

        builder = bundle.thaw()
        builder.prepend_source(_source(x="new"))

        assert bundle.get_message("x", locale="en") == "old"
        assert builder.freeze().get_message("x", locale="en") == "new"

    def test_thaw_freeze_round_trip(self) -> None:
        """thaw().freeze() yields an equal bundle with the same cell."""
        cell = DefaultLocale("de")
        bundle = (
            MessageBundle.new_builder()
            .append_source(_source(x="X"))
            .set_default_locale(cell)
            .freeze()
        )

        copy = bundle.thaw().freeze()

        assert copy == bundle
        assert copy is not bundle
        assert copy.default_locale is cell

    def test_bundle_immutable(self) -> None:
        """Bundle fields cannot be reassigned."""
        bundle = MessageBundle.new_builder().freeze()
        with pytest.raises(dataclasses.FrozenInstanceError):
            bundle.providers = ()  # type: ignore[misc]

    def test_repr(self) -> None:
        """__repr__ reports the provider count."""
        builder = MessageBundle.new_builder().append_source(_source())
        assert repr(builder) == "MessageBundleBuilder(providers=1)"
