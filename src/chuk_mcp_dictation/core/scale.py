"""
Scale primitives - Mode, Scale and the supported key table.

A scale is a root pitch class plus a mode. The mode is a fixed pattern of
semitone offsets from the root; tones are those offsets reduced modulo 12.
Only the keys listed in SUPPORTED_KEYS can be used for exercises.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

from chuk_mcp_dictation.core.pitch import PitchClass
from chuk_mcp_dictation.exceptions import UnknownScaleError


class Mode(str, Enum):
    """
    Scale modes, each defined by 7 semitone offsets from the root.

    Offsets are cumulative (distance from the root), not step sizes.
    """

    MAJOR = "major"
    NATURAL_MINOR = "minor"

    @property
    def offsets(self) -> tuple[int, ...]:
        """Semitone offsets of the 7 scale degrees from the root."""
        return _MODE_OFFSETS[self]

    @property
    def display_name(self) -> str:
        """Display name used in key names ('Major', 'Minor')."""
        return self.value.capitalize()

    @classmethod
    def parse(cls, name: str) -> Mode:
        """Parse 'major', 'minor', 'natural minor' or 'natural_minor'."""
        normalized = name.strip().lower().replace("_", " ")
        if normalized in ("major", "maj"):
            return cls.MAJOR
        if normalized in ("minor", "min", "natural minor", "aeolian"):
            return cls.NATURAL_MINOR
        raise ValueError(f"Unknown mode: {name}")


_MODE_OFFSETS: dict[Mode, tuple[int, ...]] = {
    Mode.MAJOR: (0, 2, 4, 5, 7, 9, 11),
    Mode.NATURAL_MINOR: (0, 2, 3, 5, 7, 8, 10),
}

# 'C Major', 'Bb major', 'F#_minor', 'a natural minor'
_KEY_RE = re.compile(r"^\s*([A-Ga-g][#b]?)[\s_]+([A-Za-z_ ]+?)\s*$")


@dataclass(frozen=True)
class Scale:
    """
    A diatonic scale: root pitch class plus mode.

    Immutable and hashable, so it can key the supported-key table.

    Examples:
        Scale(PitchClass.C, Mode.MAJOR) = C Major
        Scale(PitchClass.A, Mode.NATURAL_MINOR) = A Minor
    """

    root: PitchClass
    mode: Mode
    prefer_flats: bool = field(default=False, compare=False)  # Spelling only

    @property
    def tones(self) -> list[PitchClass]:
        """The 7 pitch classes of the scale, starting from the root."""
        return [self.root.transpose(offset) for offset in self.mode.offsets]

    @property
    def name(self) -> str:
        """Conventional key name, e.g. 'Bb Major'."""
        return f"{self.root.spell(self.prefer_flats)} {self.mode.display_name}"

    @property
    def accidentals(self) -> list[str]:
        """Spelled sharps or flats of the key signature, e.g. ['F#', 'C#']."""
        return [t.spell(self.prefer_flats) for t in self.tones if not t.is_natural]

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Scale({self.root!r}, {self.mode!r})"

    @classmethod
    def parse(cls, name: str) -> Scale:
        """
        Resolve a key name to one of the supported scales.

        Accepts 'C Major', 'a minor' and the underscore form 'C_major'.

        Raises:
            UnknownScaleError: If the name is malformed or not supported
        """
        match = _KEY_RE.match(name)
        if match is None:
            raise UnknownScaleError(name)

        root_str, mode_str = match.groups()
        root_name = root_str[0].upper() + root_str[1:]
        try:
            root = PitchClass.parse(root_name)
            mode = Mode.parse(mode_str)
        except ValueError:
            raise UnknownScaleError(name) from None

        for scale in SUPPORTED_KEYS.values():
            # Spelling must match too: A# Major is not Bb Major
            if (
                scale.root == root
                and scale.mode == mode
                and scale.root.spell(scale.prefer_flats) == root_name
            ):
                return scale
        raise UnknownScaleError(name)


def _key(root: str, mode: Mode, flats: bool = False) -> tuple[str, Scale]:
    scale = Scale(PitchClass.parse(root), mode, prefer_flats=flats)
    return scale.name, scale


# The closed table of keys offered for dictation, in menu order.
SUPPORTED_KEYS: dict[str, Scale] = dict(
    [
        _key("C", Mode.MAJOR),
        _key("G", Mode.MAJOR),
        _key("F", Mode.MAJOR, flats=True),
        _key("D", Mode.MAJOR),
        _key("Bb", Mode.MAJOR, flats=True),
        _key("A", Mode.NATURAL_MINOR),
        _key("E", Mode.NATURAL_MINOR),
        _key("D", Mode.NATURAL_MINOR, flats=True),
    ]
)


def tones_of(scale: Scale | str) -> list[PitchClass]:
    """
    Get the 7 pitch classes of a supported key.

    Args:
        scale: A Scale or a key name such as 'C Major'

    Returns:
        Ordered pitch classes, root first

    Raises:
        UnknownScaleError: If the key is not in SUPPORTED_KEYS
    """
    if isinstance(scale, str):
        scale = Scale.parse(scale)
    elif scale not in SUPPORTED_KEYS.values():
        raise UnknownScaleError(str(scale))
    return scale.tones
