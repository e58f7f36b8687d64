"""Locale-aware printf engine.

Implements the positional printf dialect that message templates use, with
locale-specific number symbols from Babel/CLDR.

Specifier grammar:
    %[argument_index$][flags][width][.precision]conversion

    argument_index  1-based explicit argument ("%2$s")
    flags           '-' left-justify   '#' alternate form   '+' always sign
                    ' ' leading space  '0' zero-pad         ',' grouping
                    '(' negatives in parentheses            '<' reuse previous argument
    conversions     b B h H s S c C   general and character
                    d o x X           integral
                    e E f g G         floating point
                    %  n              literal percent, newline

    %h renders a 32-bit hash code in hexadecimal: CRC-32 of the UTF-8 bytes
    for str, CRC-32 for bytes, and hash() for other objects. Objects whose
    hash() is salted per process (tuples of strings, for example) format
    differently between runs.

Error model:
    A specifier whose argument was not supplied raises
    MissingFormatArgumentError; every other problem raises a different
    IllegalFormatError subclass, so callers can recover from the former
    alone. Surplus arguments are ignored.

Locale handling:
    Decimal separators (e f g) and grouping separators and sizes (',' flag)
    come from CLDR via Babel. The root locale and locales Babel does not
    know use '.' and ',' with groups of three. Digits are always ASCII.
    Floating conversions round half-up on the exact decimal value.

Python 3.13+. Uses Babel for i18n.
"""

from __future__ import annotations

import functools
import logging
import math
import re
import zlib
from dataclasses import dataclass
from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, ROUND_HALF_UP, Decimal, localcontext
from typing import TYPE_CHECKING, Final

from babel import UnknownLocaleError
from babel import numbers as babel_numbers

from msgsimple.constants import MAX_TEMPLATE_CACHE_SIZE, NULL_STRING, ROOT_LOCALE
from msgsimple.errors import (
    IllegalFormatConversionError,
    IllegalFormatFlagsError,
    IllegalFormatPrecisionError,
    MissingFormatArgumentError,
    MissingFormatWidthError,
    UnknownFormatConversionError,
)
from msgsimple.locale_utils import get_babel_locale, to_locale_code
from msgsimple.messages import library_message

if TYPE_CHECKING:
    from msgsimple.types import LocaleCode, LocaleLike

__all__ = ["FormatSpecifier", "NumberSymbols", "get_number_symbols", "parse_format", "printf"]

logger = logging.getLogger(__name__)

_SPECIFIER_RE: Final = re.compile(
    r"%(?:(?P<index>\d+)\$)?"
    r"(?P<flags>[-#+ 0,(<]*)"
    r"(?P<width>\d+)?"
    r"(?:\.(?P<precision>\d+))?"
    r"(?P<conversion>[a-zA-Z%])"
)

# Flags each conversion accepts, keyed by lowercase conversion
_ALLOWED_FLAGS: Final[dict[str, str]] = {
    "b": "-<",
    "h": "-<",
    "s": "-<",
    "c": "-<",
    "d": "-+ 0,(<",
    "o": "-#+ 0(<",
    "x": "-#+ 0(<",
    "e": "-#+ 0(<",
    "f": "-#+ 0,(<",
    "g": "-+ 0,(<",
    "%": "-",
    "n": "",
}
_NO_PRECISION: Final = frozenset("cdox%n")
_NO_ARGUMENT: Final = frozenset("%n")
_UPPERCASE_VARIANTS: Final = frozenset("BHSCXEG")

_DEFAULT_PRECISION: Final = 6


@dataclass(frozen=True, slots=True)
class FormatSpecifier:
    """One parsed '%...' specifier of a template.

    Attributes:
        text: Specifier as written (e.g., '%1$-8.3f')
        index: Explicit 1-based argument index, or None
        flags: Flag characters as written
        width: Minimum field width, or None
        precision: Precision, or None
        conversion: Conversion character (case preserved)
    """

    text: str
    index: int | None
    flags: str
    width: int | None
    precision: int | None
    conversion: str

    @property
    def kind(self) -> str:
        """Lowercase conversion character."""
        return self.conversion.lower()

    @property
    def uppercase(self) -> bool:
        """True for the uppercase conversion variants (B H S C X E G)."""
        return self.conversion.isupper()

    @property
    def consumes_argument(self) -> bool:
        """False for '%%' and '%n'."""
        return self.conversion not in _NO_ARGUMENT


@dataclass(frozen=True, slots=True)
class NumberSymbols:
    """Locale number symbols used by the printf engine.

    Attributes:
        decimal: Decimal separator
        group: Grouping separator
        grouping: (primary, secondary) group sizes, e.g. (3, 2) for Hindi
    """

    decimal: str = "."
    group: str = ","
    grouping: tuple[int, int] = (3, 3)


_DEFAULT_SYMBOLS: Final = NumberSymbols()


@functools.lru_cache(maxsize=128)
def get_number_symbols(locale_code: LocaleCode) -> NumberSymbols:
    """Get decimal and grouping symbols for a locale from CLDR.

    Unknown locales fall back to root symbols with a warning logged once
    per locale (results are cached).

    Args:
        locale_code: Canonical locale code

    Returns:
        NumberSymbols for the locale

    Example:
        >>> get_number_symbols("de_DE")
        NumberSymbols(decimal=',', group='.', grouping=(3, 3))
    """
    if locale_code == ROOT_LOCALE:
        return _DEFAULT_SYMBOLS
    try:
        babel_locale = get_babel_locale(locale_code)
    except (UnknownLocaleError, ValueError, TypeError) as e:
        logger.warning("Unknown locale '%s' for number formatting: %s", locale_code, e)
        return _DEFAULT_SYMBOLS

    pattern = babel_locale.decimal_formats.get(None)
    grouping: tuple[int, int] = _DEFAULT_SYMBOLS.grouping
    if pattern is not None and pattern.grouping[0] > 0:
        grouping = (pattern.grouping[0], pattern.grouping[1] or pattern.grouping[0])
    return NumberSymbols(
        decimal=babel_numbers.get_decimal_symbol(babel_locale),
        group=babel_numbers.get_group_symbol(babel_locale),
        grouping=grouping,
    )


def _check_specifier(spec: FormatSpecifier) -> None:
    """Validate flag, width and precision combinations for a specifier."""
    kind = spec.kind
    allowed = _ALLOWED_FLAGS.get(kind)
    if allowed is None or (spec.uppercase and spec.conversion not in _UPPERCASE_VARIANTS):
        raise UnknownFormatConversionError(
            library_message("format.unknownConversion", spec.conversion), specifier=spec.text
        )
    if spec.index == 0:
        raise IllegalFormatFlagsError(
            library_message("format.illegalIndex", spec.text), specifier=spec.text
        )

    duplicated = "".join(sorted({flag for flag in spec.flags if spec.flags.count(flag) > 1}))
    if duplicated:
        raise IllegalFormatFlagsError(
            library_message("format.duplicateFlags", duplicated, spec.text), specifier=spec.text
        )

    illegal = [flag for flag in spec.flags if flag not in allowed]
    exclusive = ("-" in spec.flags and "0" in spec.flags) or (
        "+" in spec.flags and " " in spec.flags
    )
    if illegal or exclusive or (kind == "n" and spec.width is not None):
        raise IllegalFormatFlagsError(
            library_message("format.illegalFlags", spec.flags, spec.text), specifier=spec.text
        )

    if spec.precision is not None and kind in _NO_PRECISION:
        raise IllegalFormatPrecisionError(
            library_message("format.illegalPrecision", spec.text), specifier=spec.text
        )
    if spec.width is None and ("-" in spec.flags or "0" in spec.flags):
        raise MissingFormatWidthError(
            library_message("format.missingWidth", spec.text), specifier=spec.text
        )


@functools.lru_cache(maxsize=MAX_TEMPLATE_CACHE_SIZE)
def parse_format(template: str) -> tuple[str | FormatSpecifier, ...]:
    """Split a template into literal text and validated specifiers.

    Args:
        template: printf template

    Returns:
        Tuple of literal strings and FormatSpecifier objects, in order

    Raises:
        IllegalFormatError: For any malformed specifier (never
            MissingFormatArgumentError: arguments are not known here)

    Example:
        >>> parse_format("Hello, %s!")
        ('Hello, ', FormatSpecifier(text='%s', ...), '!')
    """
    segments: list[str | FormatSpecifier] = []
    pos = 0
    while pos < len(template):
        percent = template.find("%", pos)
        if percent < 0:
            segments.append(template[pos:])
            break
        if percent > pos:
            segments.append(template[pos:percent])

        match = _SPECIFIER_RE.match(template, percent)
        if match is None:
            conversion = template[percent + 1 : percent + 2] or "%"
            raise UnknownFormatConversionError(
                library_message("format.unknownConversion", conversion),
                specifier=template[percent:],
            )

        index, width, precision = match.group("index", "width", "precision")
        spec = FormatSpecifier(
            text=match.group(0),
            index=int(index) if index is not None else None,
            flags=match.group("flags"),
            width=int(width) if width is not None else None,
            precision=int(precision) if precision is not None else None,
            conversion=match.group("conversion"),
        )
        _check_specifier(spec)
        segments.append(spec)
        pos = match.end()
    return tuple(segments)


def _justify(text: str, spec: FormatSpecifier) -> str:
    if spec.width is None:
        return text
    if "-" in spec.flags:
        return text.ljust(spec.width)
    return text.rjust(spec.width)


def _illegal_conversion(spec: FormatSpecifier, arg: object) -> IllegalFormatConversionError:
    return IllegalFormatConversionError(
        library_message("format.illegalConversion", spec.conversion, type(arg).__name__),
        specifier=spec.text,
    )


def _assemble(
    spec: FormatSpecifier,
    negative: bool,
    body: str,
    *,
    radix_prefix: str = "",
    zero_pad: bool = True,
) -> str:
    """Attach sign, radix prefix and zero padding, then case and justify."""
    flags = spec.flags
    suffix = ""
    if negative:
        if "(" in flags:
            sign, suffix = "(", ")"
        else:
            sign = "-"
    elif "+" in flags:
        sign = "+"
    elif " " in flags:
        sign = " "
    else:
        sign = ""

    prefix = sign + radix_prefix
    if zero_pad and "0" in flags and spec.width is not None:
        body = body.rjust(spec.width - len(prefix) - len(suffix), "0")
    text = prefix + body + suffix
    if spec.uppercase:
        text = text.upper()
    return _justify(text, spec)


def _group_digits(digits: str, symbols: NumberSymbols) -> str:
    primary, secondary = symbols.grouping
    if len(digits) <= primary:
        return digits
    head, groups = digits[:-primary], [digits[-primary:]]
    while len(head) > secondary:
        groups.insert(0, head[-secondary:])
        head = head[:-secondary]
    if head:
        groups.insert(0, head)
    return symbols.group.join(groups)


def _hash_code(spec: FormatSpecifier, arg: object) -> int:
    """Return a 32-bit hash code; str and bytes use CRC-32 so output is stable across runs."""
    match arg:
        case str():
            return zlib.crc32(arg.encode("utf-8"))
        case bytes():
            return zlib.crc32(arg)
    try:
        return hash(arg) & 0xFFFFFFFF
    except TypeError:
        raise _illegal_conversion(spec, arg) from None


def _format_general(spec: FormatSpecifier, arg: object) -> str:
    match spec.kind:
        case "b":
            text = "false" if arg is None or arg is False else "true"
        case "h":
            if arg is None:
                text = NULL_STRING
            else:
                text = format(_hash_code(spec, arg), "x")
        case _:
            text = NULL_STRING if arg is None else str(arg)

    if spec.precision is not None:
        text = text[: spec.precision]
    if spec.uppercase:
        text = text.upper()
    return _justify(text, spec)


def _format_character(spec: FormatSpecifier, arg: object) -> str:
    match arg:
        case None:
            text = NULL_STRING
        case str() if len(arg) == 1:
            text = arg
        case bool():
            raise _illegal_conversion(spec, arg)
        case int():
            try:
                text = chr(arg)
            except (ValueError, OverflowError):
                raise IllegalFormatConversionError(
                    library_message("format.illegalCodePoint", arg, spec.conversion),
                    specifier=spec.text,
                ) from None
        case _:
            raise _illegal_conversion(spec, arg)
    if spec.uppercase:
        text = text.upper()
    return _justify(text, spec)


def _format_integral(spec: FormatSpecifier, arg: object, symbols: NumberSymbols) -> str:
    if arg is None:
        return _justify(NULL_STRING, spec)
    if not isinstance(arg, int) or isinstance(arg, bool):
        raise _illegal_conversion(spec, arg)

    negative = arg < 0
    magnitude = -arg if negative else arg
    radix_prefix = ""
    match spec.kind:
        case "d":
            digits = str(magnitude)
            if "," in spec.flags:
                digits = _group_digits(digits, symbols)
        case "o":
            digits = format(magnitude, "o")
            if "#" in spec.flags:
                radix_prefix = "0"
        case _:
            digits = format(magnitude, "x")
            if "#" in spec.flags:
                radix_prefix = "0x"
    return _assemble(spec, negative, digits, radix_prefix=radix_prefix)


def _round_fixed(value: Decimal, places: int) -> str:
    """Format a non-negative Decimal with a fixed number of places, half-up."""
    with localcontext() as ctx:
        ctx.prec = MAX_PREC
        ctx.Emax = MAX_EMAX
        ctx.Emin = MIN_EMIN
        ctx.rounding = ROUND_HALF_UP
        quantized = value.quantize(Decimal(1).scaleb(-places))
    return format(quantized, "f")


def _round_significant(value: Decimal, digits: int) -> Decimal:
    """Round a non-negative Decimal to a number of significant digits, half-up."""
    with localcontext() as ctx:
        ctx.prec = digits
        ctx.Emax = MAX_EMAX
        ctx.Emin = MIN_EMIN
        ctx.rounding = ROUND_HALF_UP
        return +value


def _localize_fixed(
    text: str, spec: FormatSpecifier, symbols: NumberSymbols, *, grouping: bool
) -> str:
    integer, _, fraction = text.partition(".")
    if grouping:
        integer = _group_digits(integer, symbols)
    if fraction:
        return f"{integer}{symbols.decimal}{fraction}"
    if "#" in spec.flags:
        return f"{integer}{symbols.decimal}"
    return integer


def _scientific(
    value: Decimal, precision: int, spec: FormatSpecifier, symbols: NumberSymbols
) -> str:
    if value:
        rounded = _round_significant(value, precision + 1)
        exponent = rounded.adjusted()
        coefficient = "".join(map(str, rounded.as_tuple().digits)).ljust(precision + 1, "0")
    else:
        exponent = 0
        coefficient = "0" * (precision + 1)

    mantissa = coefficient[0]
    if precision:
        mantissa = f"{mantissa}{symbols.decimal}{coefficient[1 : precision + 1]}"
    elif "#" in spec.flags:
        mantissa = f"{mantissa}{symbols.decimal}"
    exponent_sign = "-" if exponent < 0 else "+"
    return f"{mantissa}e{exponent_sign}{abs(exponent):02d}"


def _format_floating(spec: FormatSpecifier, arg: object, symbols: NumberSymbols) -> str:
    if arg is None:
        return _justify(NULL_STRING, spec)

    match arg:
        case bool():
            raise _illegal_conversion(spec, arg)
        case float():
            if math.isnan(arg):
                return _justify("NAN" if spec.uppercase else "NaN", spec)
            negative = math.copysign(1.0, arg) < 0
            if math.isinf(arg):
                return _assemble(spec, negative, "Infinity", zero_pad=False)
            value = Decimal(abs(arg))
        case Decimal():
            if arg.is_nan():
                return _justify("NAN" if spec.uppercase else "NaN", spec)
            negative = arg.is_signed()
            if arg.is_infinite():
                return _assemble(spec, negative, "Infinity", zero_pad=False)
            value = abs(arg)
        case int():
            negative = arg < 0
            value = Decimal(abs(arg))
        case _:
            raise _illegal_conversion(spec, arg)

    precision = _DEFAULT_PRECISION if spec.precision is None else spec.precision
    match spec.kind:
        case "f":
            body = _localize_fixed(
                _round_fixed(value, precision), spec, symbols, grouping="," in spec.flags
            )
        case "e":
            body = _scientific(value, precision, spec, symbols)
        case _:
            significant = max(precision, 1)
            if not value:
                body = _localize_fixed(
                    _round_fixed(value, significant - 1), spec, symbols, grouping=False
                )
            else:
                exponent = _round_significant(value, significant).adjusted()
                if -4 <= exponent < significant:
                    body = _localize_fixed(
                        _round_fixed(value, significant - 1 - exponent),
                        spec,
                        symbols,
                        grouping="," in spec.flags,
                    )
                else:
                    body = _scientific(value, significant - 1, spec, symbols)
    return _assemble(spec, negative, body)


def _format_one(spec: FormatSpecifier, arg: object, locale_code: LocaleCode) -> str:
    match spec.kind:
        case "b" | "h" | "s":
            return _format_general(spec, arg)
        case "c":
            return _format_character(spec, arg)
        case "d" | "o" | "x":
            return _format_integral(spec, arg, get_number_symbols(locale_code))
        case _:
            return _format_floating(spec, arg, get_number_symbols(locale_code))


def printf(template: str, *args: object, locale: LocaleLike = ROOT_LOCALE) -> str:
    """Format a template with positional arguments.

    Args:
        template: printf template (see module docstring for syntax)
        *args: Positional arguments; surplus arguments are ignored
        locale: Locale for number symbols (default: root)

    Returns:
        Formatted string

    Raises:
        MissingFormatArgumentError: A specifier references a missing argument
        IllegalFormatError: Any other malformed specifier or argument mismatch

    Example:
        >>> printf("%s has %,d items", "Anna", 12345, locale="de_DE")
        'Anna has 12.345 items'
        >>> printf("%.2f", 3.14159, locale="de-DE")
        '3,14'
        >>> printf("%2$s %1$s", "world", "hello")
        'hello world'
    """
    locale_code = to_locale_code(locale)
    parts: list[str] = []
    ordinary = 0
    previous: int | None = None

    for segment in parse_format(template):
        if isinstance(segment, str):
            parts.append(segment)
            continue
        if not segment.consumes_argument:
            parts.append(_justify("%", segment) if segment.conversion == "%" else "\n")
            continue

        if "<" in segment.flags:
            position = previous
        elif segment.index is not None:
            position = segment.index - 1
        else:
            position = ordinary
            ordinary += 1

        if position is None or position >= len(args):
            raise MissingFormatArgumentError(
                library_message("format.missingArgument", segment.text),
                specifier=segment.text,
            )
        previous = position
        parts.append(_format_one(segment, args[position], locale_code))

    return "".join(parts)
