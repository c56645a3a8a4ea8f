# gl2d/canvas/color.py
"""
CSS colour strings -> normalised RGBA tuples.
"""

from __future__ import annotations
import re
from typing import Sequence, Tuple, Union

RGBA = Tuple[float, float, float, float]

# Everything that is not part of a number or a separator
_STRIP = re.compile(r"[^\d.,]")


class ColorParseError(ValueError):
    """Raised when a fill/stroke style cannot be turned into RGBA."""


def parse_color(value: Union[str, Sequence[float]]) -> RGBA:
    """
    Parse "rgb(r, g, b)" / "rgba(r, g, b, a)" into (r, g, b, a).

    r, g, b are 0-255 and divided by 255; alpha is taken as given and
    defaults to 1.0. A 3/4-sequence of floats is treated as already
    normalised.
    """
    if isinstance(value, str):
        parts = _STRIP.sub("", value).split(",")
        try:
            comps = [float(p) for p in parts]
        except ValueError:
            raise ColorParseError(f"unparseable colour: {value!r}") from None
        if len(comps) not in (3, 4):
            raise ColorParseError(f"expected 3 or 4 components in {value!r}, got {len(comps)}")
        comps[0] /= 255.0
        comps[1] /= 255.0
        comps[2] /= 255.0
    else:
        try:
            comps = [float(c) for c in value]
        except (TypeError, ValueError):
            raise ColorParseError(f"unparseable colour: {value!r}") from None
        if len(comps) not in (3, 4):
            raise ColorParseError(f"expected 3 or 4 components, got {len(comps)}")

    if len(comps) == 3:
        comps.append(1.0)
    return (comps[0], comps[1], comps[2], comps[3])
