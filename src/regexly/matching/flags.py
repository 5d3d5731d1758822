"""Regex flag set: canonical serialisation and mapping onto ``re`` flags.

The flag letters follow the ECMAScript convention the tester UI presents
(``g``, ``i``, ``m``, ``s``, ``u``).  ``g`` has no compile-time meaning in
Python; it tells the extractor to keep searching after the first hit.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, fields, replace
from typing import Literal

FlagName = Literal["global_", "ignore_case", "multiline", "dot_all", "unicode"]


@dataclass(frozen=True)
class FlagDetail:
    """Display metadata for a single flag checkbox."""

    letter: str
    name: FlagName
    label: str


# Canonical order: serialisation and UI both follow this tuple.
FLAG_DETAILS: tuple[FlagDetail, ...] = (
    FlagDetail("g", "global_", "Global"),
    FlagDetail("i", "ignore_case", "Ignore Case"),
    FlagDetail("m", "multiline", "Multiline"),
    FlagDetail("s", "dot_all", "Dot All"),
    FlagDetail("u", "unicode", "Unicode"),
)

_BY_LETTER: dict[str, FlagDetail] = {d.letter: d for d in FLAG_DETAILS}


@dataclass(frozen=True)
class FlagSet:
    """Immutable set of regex modifiers.

    Attributes:
        global_: Collect every match instead of only the first.
        ignore_case: Case-insensitive matching (``re.IGNORECASE``).
        multiline: ``^``/``$`` match at line boundaries (``re.MULTILINE``).
        dot_all: ``.`` also matches newlines (``re.DOTALL``).
        unicode: Unicode-aware character classes; when off, ``\\w``, ``\\d``,
            ``\\s`` and ``\\b`` are ASCII-only (``re.ASCII``).
    """

    global_: bool = True
    ignore_case: bool = False
    multiline: bool = False
    dot_all: bool = False
    unicode: bool = False

    @classmethod
    def from_flag_string(cls, flag_string: str) -> FlagSet:
        """Parse a flag string such as ``"gi"``.

        Duplicate letters collapse.  Letters are case-sensitive.

        Raises:
            ValueError: If the string contains a letter outside ``gimsu``.
        """
        values = dict.fromkeys((d.name for d in FLAG_DETAILS), False)
        for letter in flag_string:
            detail = _BY_LETTER.get(letter)
            if detail is None:
                msg = f"Unknown regex flag {letter!r} (expected one of 'gimsu')"
                raise ValueError(msg)
            values[detail.name] = True
        return cls(**values)

    def to_flag_string(self) -> str:
        """Serialise enabled flags in canonical ``gimsu`` order."""
        return "".join(d.letter for d in FLAG_DETAILS if getattr(self, d.name))

    def with_flag(self, name: FlagName, enabled: bool) -> FlagSet:
        """Return a copy with flag *name* set to *enabled*."""
        if name not in {f.name for f in fields(self)}:
            msg = f"Unknown flag name: {name!r}"
            raise ValueError(msg)
        return replace(self, **{name: enabled})

    def toggled(self, name: FlagName) -> FlagSet:
        """Return a copy with flag *name* flipped."""
        return self.with_flag(name, not getattr(self, name, False))

    def to_re_flags(self) -> re.RegexFlag:
        """Compile-time flags for :func:`re.compile`."""
        result = re.RegexFlag(0)
        if self.ignore_case:
            result |= re.IGNORECASE
        if self.multiline:
            result |= re.MULTILINE
        if self.dot_all:
            result |= re.DOTALL
        if not self.unicode:
            result |= re.ASCII
        return result

    def __str__(self) -> str:
        return self.to_flag_string()
