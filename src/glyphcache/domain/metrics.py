"""Font-wide metrics and style classification.

Metrics are stored once per font in font design units and scaled on demand
for a requested size. Only lengths scale; style flags, weight class and
width class are classifications and pass through unchanged.
"""

import math
from dataclasses import dataclass, replace
from enum import Flag


class FontFlags(Flag):
    """Style classification bits."""

    NONE = 0
    REGULAR = 0x1
    ITALIC = 0x2
    BOLD = 0x4
    OBLIQUE = 0x8
    VARIABLE = 0x10

    @classmethod
    def from_booleans(
        cls,
        regular: bool,
        italic: bool,
        bold: bool,
        oblique: bool,
        variable: bool,
    ) -> "FontFlags":
        """Build a flag set from individual style booleans."""
        flags = cls.NONE
        if regular:
            flags |= cls.REGULAR
        if italic:
            flags |= cls.ITALIC
        if bold:
            flags |= cls.BOLD
        if oblique:
            flags |= cls.OBLIQUE
        if variable:
            flags |= cls.VARIABLE
        return flags


def _round_half_away(value: float) -> float:
    return float(math.copysign(math.floor(abs(value) + 0.5), value))


@dataclass(frozen=True, slots=True)
class FontMetrics:
    """Information about a font.

    Attributes:
        ascender: Distance from the baseline to the top of the highest glyph
        descender: Signed distance from the baseline to the lowest descender
            (negative below the baseline)
        line_height: Unrounded line height
        flags: Style classification
        weight: Weight class (1-1000)
        width: Width class (1-9)
    """

    ascender: float = 0.0
    descender: float = 0.0
    line_height: float = 0.0
    flags: FontFlags = FontFlags.NONE
    weight: int = 400
    width: int = 5

    def scaled(self, factor: float) -> "FontMetrics":
        """Return a copy with the length fields multiplied by factor."""
        return replace(
            self,
            ascender=self.ascender * factor,
            descender=self.descender * factor,
            line_height=self.line_height * factor,
        )

    @property
    def height(self) -> float:
        """Line height rounded to the nearest whole unit, never negative."""
        return max(0.0, _round_half_away(self.line_height))

    @property
    def regular(self) -> bool:
        return FontFlags.REGULAR in self.flags

    @property
    def italic(self) -> bool:
        return FontFlags.ITALIC in self.flags

    @property
    def bold(self) -> bool:
        return FontFlags.BOLD in self.flags

    @property
    def oblique(self) -> bool:
        return FontFlags.OBLIQUE in self.flags

    @property
    def variable(self) -> bool:
        return FontFlags.VARIABLE in self.flags
