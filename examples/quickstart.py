"""Quickstart example for msgsimple.

This example demonstrates message lookup, locale fallback and locale-aware
formatting with in-memory message sources.
"""

from msgsimple import DefaultLocale, MapMessageSource, MessageBundle, printf
from msgsimple.constants import ROOT_LOCALE

# Example 1: Simple lookup
print("=" * 50)
print("Example 1: Simple Lookup")
print("=" * 50)

bundle = (
    MessageBundle.new_builder()
    .append_source(MapMessageSource({"hello": "Hello, World!", "welcome": "Welcome!"}))
    .freeze()
)

print(bundle.get_message("hello", locale="en"))
# Output: Hello, World!

print(bundle.get_message("no.such.key", locale="en"))
# Output: no.such.key

# Example 2: Per-locale sources
print("\n" + "=" * 50)
print("Example 2: Per-Locale Sources")
print("=" * 50)

bundle = (
    MessageBundle.new_builder()
    .append_source(MapMessageSource({"greeting": "Hello, %s!", "bye": "Bye!"}), ROOT_LOCALE)
    .append_source(MapMessageSource({"greeting": "Hallo, %s!"}), "de")
    .append_source(MapMessageSource({"greeting": "Servus, %s!"}), "de_AT")
    .freeze()
)

for locale in ("de-AT", "de-DE", "fr"):
    print(f"{locale}: {bundle.format_message('greeting', 'Anna', locale=locale)}")
# Output:
# de-AT: Servus, Anna!
# de-DE: Hallo, Anna!
# fr: Hello, Anna!

print(bundle.get_message("bye", locale="de_AT"))
# Output: Bye!

# Example 3: Locale-aware numbers
print("\n" + "=" * 50)
print("Example 3: Locale-Aware Numbers")
print("=" * 50)

print(printf("Total: %,.2f EUR", 1234567.891, locale="de_DE"))
# Output: Total: 1.234.567,89 EUR

print(printf("Total: %,.2f USD", 1234567.891, locale="en_US"))
# Output: Total: 1,234,567.89 USD

print(printf("%2$s, %1$s", "World", "Hello"))
# Output: Hello, World

# Example 4: Missing arguments
print("\n" + "=" * 50)
print("Example 4: Missing Arguments")
print("=" * 50)

# format_message() returns the unformatted template instead of failing
print(bundle.format_message("greeting", locale="de"))
# Output: Hallo, %s!

# Example 5: Injected default locale
print("\n" + "=" * 50)
print("Example 5: Injected Default Locale")
print("=" * 50)

cell = DefaultLocale("de_AT")
bundle = bundle.thaw().set_default_locale(cell).freeze()
print(bundle.format_message("greeting", "Anna"))
# Output: Servus, Anna!

with cell.override("en"):
    print(bundle.format_message("greeting", "Anna"))
# Output: Hello, Anna!
