"""MessageBundle Example - Locale Fallback with Message Files.

Demonstrates lazily loaded JSON message files with partial translations,
provider priority, and load diagnostics.

Scenarios covered:
1. Partial translations on disk (de_AT -> de -> root)
2. Application overrides layered over shipped messages
3. Inspecting load results

Python 3.13+.
"""

from __future__ import annotations

import json
import tempfile
from pathlib import Path

from msgsimple import (
    LoadingMessageSourceProvider,
    MapMessageSource,
    MessageBundle,
    PathSourceLoader,
)


def _write(directory: Path, name: str, messages: dict[str, object]) -> None:
    (directory / name).write_text(json.dumps(messages, ensure_ascii=False), encoding="utf-8")


def example_1_file_fallback(directory: Path) -> None:
    """Example 1: Partial translations on disk."""
    print("=" * 60)
    print("Example 1: File Fallback (de_AT -> de -> root)")
    print("=" * 60)

    bundle = MessageBundle.for_path(str(directory / "messages"))

    for key in ("greeting", "cart.title", "cart.checkout"):
        print(f"  {key}: {bundle.get_message(key, locale='de-AT')}")
    # greeting: Servus!         (messages_de_AT.json)
    # cart.title: Warenkorb     (messages_de.json)
    # cart.checkout: Checkout   (messages.json)


def example_2_overrides(directory: Path) -> None:
    """Example 2: Overrides take priority at the same locale."""
    print("\n" + "=" * 60)
    print("Example 2: Application Overrides")
    print("=" * 60)

    shipped = MessageBundle.for_path(str(directory / "messages"))
    bundle = (
        shipped.thaw()
        .prepend_source(MapMessageSource({"cart.title": "Einkaufswagen"}), locale="de")
        .freeze()
    )

    print(f"  shipped:    {shipped.get_message('cart.title', locale='de')}")
    print(f"  overridden: {bundle.get_message('cart.title', locale='de')}")
    # Keys the override lacks still resolve through the files
    print(f"  greeting:   {bundle.get_message('greeting', locale='de')}")


def example_3_load_summary(directory: Path) -> None:
    """Example 3: Which files were found."""
    print("\n" + "=" * 60)
    print("Example 3: Load Summary")
    print("=" * 60)

    provider = LoadingMessageSourceProvider(PathSourceLoader(str(directory / "messages")))
    bundle = MessageBundle.new_builder().append_provider(provider).freeze()
    bundle.get_message("greeting", locale="de_CH")
    bundle.get_message("cart.title", locale="lv_LV")

    summary = provider.get_load_summary()
    print(f"  {summary!r}")
    for result in summary.results:
        print(f"  {result.locale or '(root)':8} {result.status:10} {result.source_path}")


if __name__ == "__main__":
    with tempfile.TemporaryDirectory() as tmp:
        root = Path(tmp)
        _write(
            root,
            "messages.json",
            {"greeting": "Hello!", "cart": {"title": "Cart", "checkout": "Checkout"}},
        )
        _write(root, "messages_de.json", {"greeting": "Hallo!", "cart": {"title": "Warenkorb"}})
        _write(root, "messages_de_AT.json", {"greeting": "Servus!"})

        example_1_file_fallback(root)
        example_2_overrides(root)
        example_3_load_summary(root)
