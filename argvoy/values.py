r"""
Argvoy value adapters.

Overview
- A value adapter owns one typed destination slot (its `value` attribute) and
  knows how to fill it from a raw command-line string and how to render it back.
- Definitions keep a handle to the adapter; the mapper converts and commits,
  and the executing command reads `adapter.value` afterwards.

Contract (shared by every adapter)
- parse(raw) -> object: convert without touching the slot; ValueError on bad input.
- set(raw): parse and store in place (the adapter object itself is never replaced).
- str(adapter): canonical textual form of the current value, such that
  adapter.set(str(adapter)) reproduces an equal value.

Capabilities
- SupportsFlagValue: adapters exposing flagvalue() provide the implicit raw value
  used when an option appears bare (e.g. "--verbose" → "true"). The capability is
  checked at binding time with isinstance(); it is not part of the base class.

Variants
- BoolValue, IntValue, FloatValue, DurationValue, IPValue, URLValue, StringValue.

Quick example:
    >>> port = IntValue(8080)
    >>> port.set("0x1F90")
    >>> port.value, str(port)
    (8080, '8080')
    >>> timeout = DurationValue()
    >>> timeout.set("1h33m2s")
    >>> str(timeout)
    '1h33m2s'
"""
import ipaddress
import math
import re
from abc import ABC, abstractmethod
from datetime import timedelta
from fractions import Fraction
from typing import Protocol, runtime_checkable
from urllib.parse import urlsplit

from .utils import Unset, coalesce


@runtime_checkable
class SupportsFlagValue(Protocol):
    """
    Optional capability: the raw value substituted for a bare option.
    """

    def flagvalue(self): ...


class ParameterValue(ABC):
    """
    Base class for typed value adapters.

    Subclasses implement parse() and render(); the base class wires the
    owned slot, set(), str() and a stable repr().

    Class attributes
    - __default__: value held when the adapter is built without one.
    - __typename__: short label used in messages ("int", "duration", ...).
    """
    __default__ = None
    __typename__ = "value"

    def __init__(self, value=Unset, /):
        self.value = coalesce(value, self.__default__)

    @abstractmethod
    def parse(self, raw, /):
        """
        Convert a raw string into this adapter's type without storing it.
        """

    @abstractmethod
    def render(self, value, /):
        """
        Render a held value in the type's canonical textual form.
        """

    def set(self, raw, /):
        if not isinstance(raw, str):
            raise TypeError(f"{type(self).__name__}.set() argument must be a string")
        self.value = self.parse(raw)

    def __str__(self):
        return self.render(self.value)

    def __repr__(self):
        return f"{type(self).__name__}({self.value!r})"


class BoolValue(ParameterValue):
    """
    Boolean adapter; also a flag (a bare option means "true").

    Accepted literals: 1 t T TRUE true True / 0 f F FALSE false False.
    """
    __default__ = False
    __typename__ = "bool"

    _literals = {
        "1": True, "t": True, "T": True, "TRUE": True, "true": True, "True": True,
        "0": False, "f": False, "F": False, "FALSE": False, "false": False, "False": False,
    }

    def parse(self, raw, /):
        try:
            return self._literals[raw]
        except KeyError:
            raise ValueError(f"invalid boolean {raw!r}") from None

    def render(self, value, /):
        return "true" if value else "false"

    def flagvalue(self):
        return "true"


class IntValue(ParameterValue):
    """
    Signed 64-bit integer adapter.

    Literals may carry a base prefix (0x, 0o, 0b), use the legacy leading-zero
    octal form ("017" == 15) and separate digits with underscores.
    """
    __default__ = 0
    __typename__ = "int"

    _minimum = -(2 ** 63)
    _maximum = 2 ** 63 - 1

    def parse(self, raw, /):
        if not raw.isascii() or raw != raw.strip():
            raise ValueError(f"invalid integer {raw!r}")

        try:
            if octal := re.fullmatch(r"([+-]?)0((?:_?[0-7])+)", raw):
                value = int(f"{octal[1]}0o{octal[2]}", 0)
            else:
                value = int(raw, 0)
        except ValueError:
            raise ValueError(f"invalid integer {raw!r}") from None

        if not self._minimum <= value <= self._maximum:
            raise ValueError(f"integer {raw!r} is out of range")
        return value

    def render(self, value, /):
        return str(value)


class FloatValue(ParameterValue):
    """
    Double-precision floating point adapter.

    Accepts decimal and scientific notation, hexadecimal floats ("0x1p-2"),
    and the special values inf/infinity/nan (any case, optionally signed).
    Finite literals that overflow (e.g. "1e400") are rejected.
    """
    __default__ = 0.0
    __typename__ = "float"

    _decimal = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
    _hexadecimal = re.compile(r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)(?:[pP][+-]?\d+)?", re.ASCII)
    _special = re.compile(r"[+-]?(?:inf|infinity|nan)", re.IGNORECASE)

    def parse(self, raw, /):
        if self._special.fullmatch(raw):
            return float(raw)
        if self._decimal.fullmatch(raw):
            value = float(raw)
        elif self._hexadecimal.fullmatch(raw):
            try:
                value = float.fromhex(raw)
            except OverflowError:
                raise ValueError(f"float {raw!r} is out of range") from None
        else:
            raise ValueError(f"invalid float {raw!r}")

        if math.isinf(value):
            raise ValueError(f"float {raw!r} is out of range")
        return value

    def render(self, value, /):
        return repr(float(value))


class DurationValue(ParameterValue):
    r"""
    Duration adapter holding a datetime.timedelta.

    Grammar
    - an optional sign followed by one or more <number><unit> segments, where
      number is a decimal (fractions allowed: "1.5h") and unit is one of
      ns, us, µs, μs, ms, s, m, h; the bare literal "0" is also accepted.
    - examples: "300ms", "-1.5h", "2h45m", "1h33m2s".

    Rendering
    - canonical compound form: "1h0m0s", "1m30s", "1.5s", "500ms", "20µs", "0s".
    - timedelta has microsecond resolution: nanosecond parts are rounded, which
      is the only lossy step of a parse/render round trip.
    """
    __default__ = timedelta(0)
    __typename__ = "duration"

    # Unit sizes in microseconds.
    _units = {
        "ns": Fraction(1, 1000),
        "us": Fraction(1),
        "µs": Fraction(1),  # U+00B5 micro sign
        "μs": Fraction(1),  # U+03BC greek mu
        "ms": Fraction(1000),
        "s": Fraction(1000 * 1000),
        "m": Fraction(60 * 1000 * 1000),
        "h": Fraction(60 * 60 * 1000 * 1000),
    }
    _segment = re.compile(r"(?P<number>\d+(?:\.\d*)?|\.\d+)(?P<unit>[^\d.]*)", re.ASCII)

    def parse(self, raw, /):
        sign, body = (raw[0], raw[1:]) if raw[:1] in ("-", "+") else ("", raw)

        if body == "0":
            return timedelta(0)
        if not body:
            raise ValueError(f"invalid duration {raw!r}")

        total = Fraction(0)
        position = 0
        while position < len(body):
            if not (match := self._segment.match(body, position)):
                raise ValueError(f"invalid duration {raw!r}")
            if not (unit := match["unit"]):
                raise ValueError(f"missing unit in duration {raw!r}")
            try:
                total += Fraction(match["number"]) * self._units[unit]
            except KeyError:
                raise ValueError(f"unknown unit {unit!r} in duration {raw!r}") from None
            position = match.end()

        try:
            return timedelta(microseconds=round(-total if sign == "-" else total))
        except OverflowError:
            raise ValueError(f"duration {raw!r} is out of range") from None

    def render(self, value, /):
        micros = (value.days * 86400 + value.seconds) * 1000000 + value.microseconds
        if not micros:
            return "0s"

        sign = "-" if micros < 0 else ""
        micros = abs(micros)

        if micros < 1000:
            return f"{sign}{micros}µs"
        if micros < 1000000:
            return f"{sign}{_decimal(micros, 1000)}ms"

        hours, rest = divmod(micros, 3600 * 1000000)
        minutes, rest = divmod(rest, 60 * 1000000)

        text = sign
        if hours:
            text += f"{hours}h"
        if hours or minutes:
            text += f"{minutes}m"
        return f"{text}{_decimal(rest, 1000000)}s"


class IPValue(ParameterValue):
    """
    IP address adapter (IPv4 dotted quad or IPv6 literal).

    The empty string stands for no address (None), the value of a fresh adapter.
    Scoped IPv6 literals ("fe80::1%eth0") are rejected.
    """
    __typename__ = "ip"

    def parse(self, raw, /):
        if not raw:
            return None
        if "%" in raw:
            raise ValueError(f"invalid IP address format {raw!r}")
        try:
            return ipaddress.ip_address(raw)
        except ValueError:
            raise ValueError(f"invalid IP address format {raw!r}") from None

    def render(self, value, /):
        return "" if value is None else str(value)


class URLValue(ParameterValue):
    """
    URL adapter holding a urllib.parse.SplitResult.

    Rejected inputs
    - ASCII control characters anywhere in the string.
    - '%' not followed by two hexadecimal digits.
    - non-numeric or out of range ports, unbalanced IPv6 brackets.
    - a scheme-less reference whose first path segment contains a colon
      (":foo", "://host"), since it cannot be told apart from a scheme.

    The empty string stands for no URL (None), the value of a fresh adapter.
    """
    __typename__ = "url"

    def parse(self, raw, /):
        if not raw:
            return None
        if any(ord(char) < 0x20 or ord(char) == 0x7F for char in raw):
            raise ValueError(f"invalid control character in URL {raw!r}")
        if re.search(r"%(?![0-9A-Fa-f]{2})", raw):
            raise ValueError(f"invalid escape in URL {raw!r}")

        try:
            result = urlsplit(raw)
            result.port  # validates the port
        except ValueError as error:
            raise ValueError(f"invalid URL {raw!r}: {str(error).lower()}") from None

        if not result.scheme and not result.netloc and ":" in result.path.partition("/")[0]:
            raise ValueError(f"invalid URL {raw!r}: first path segment cannot contain a colon")
        return result

    def render(self, value, /):
        return "" if value is None else value.geturl()


class StringValue(ParameterValue):
    """
    Transparent string adapter.
    """
    __default__ = ""
    __typename__ = "string"

    def parse(self, raw, /):
        return raw

    def render(self, value, /):
        return value


def _decimal(amount, scale, /):
    """
    Render amount/scale as a decimal without trailing zeros (1500, 1000 → "1.5").
    """
    whole, part = divmod(amount, scale)
    if not part:
        return str(whole)
    digits = str(part).rjust(len(str(scale)) - 1, "0").rstrip("0")
    return f"{whole}.{digits}"


__all__ = (
    # Capabilities
    "SupportsFlagValue",

    # Base
    "ParameterValue",

    # Variants
    "BoolValue",
    "IntValue",
    "FloatValue",
    "DurationValue",
    "IPValue",
    "URLValue",
    "StringValue",
)
