from collections import namedtuple
from enum import Enum

import constants


class Theme(Enum):
    LIGHT = 'light'
    DARK = 'dark'

    @classmethod
    def parse(cls, value):
        """Accept a Theme or its name ('dark', 'Light', ...)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"unknown theme {value!r}, expected one of {[t.value for t in cls]}") from None

    def toggled(self):
        return Theme.LIGHT if self is Theme.DARK else Theme.DARK


# stars: 5-entry particle palette; connection: RGB of the link stroke,
# scaled by connection_opacity
Palette = namedtuple('Palette', ['stars', 'connection', 'connection_opacity', 'background'])

PALETTES = {
    Theme.DARK: Palette(
        stars=tuple(constants.DARK_STAR_COLORS),
        connection=constants.DARK_CONNECTION_COLOR,
        connection_opacity=constants.DARK_CONNECTION_OPACITY,
        background=constants.DARK_BACKGROUND,
    ),
    Theme.LIGHT: Palette(
        stars=tuple(constants.LIGHT_STAR_COLORS),
        connection=constants.LIGHT_CONNECTION_COLOR,
        connection_opacity=constants.LIGHT_CONNECTION_OPACITY,
        background=constants.LIGHT_BACKGROUND,
    ),
}


def palette_for(theme):
    return PALETTES[Theme.parse(theme)]
