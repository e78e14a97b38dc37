"""RGBA colours with channels in the 0.0 to 1.0 range."""

from __future__ import annotations

from dataclasses import dataclass, replace


def _clamp(value: float) -> float:
    return min(max(value, 0.0), 1.0)


@dataclass(frozen=True)
class Color:
    """An RGBA colour; every channel is a float from 0.0 to 1.0."""

    r: float
    g: float
    b: float
    a: float = 1.0

    @classmethod
    def from_rgb(cls, r: float, g: float, b: float) -> Color:
        """Opaque colour from float channels."""
        return cls(r, g, b, 1.0)

    @classmethod
    def from_rgba(cls, r: float, g: float, b: float, a: float) -> Color:
        """Colour from float channels including alpha."""
        return cls(r, g, b, a)

    @classmethod
    def from_rgb8(cls, r: int, g: int, b: int) -> Color:
        """Opaque colour from 8-bit channels."""
        return cls(r / 255.0, g / 255.0, b / 255.0, 1.0)

    def with_alpha(self, a: float) -> Color:
        """The same colour with a different alpha."""
        return replace(self, a=a)

    def brightened(self, amount: float) -> Color:
        """Shift every RGB channel by ``amount``, clamped to [0, 1]; alpha is kept."""
        return Color(
            _clamp(self.r + amount),
            _clamp(self.g + amount),
            _clamp(self.b + amount),
            self.a,
        )

    def luminance(self) -> float:
        """Perceived brightness using the Rec. 601 weights."""
        return 0.299 * self.r + 0.587 * self.g + 0.114 * self.b


TRANSPARENT = Color(0.0, 0.0, 0.0, 0.0)
BLACK = Color(0.0, 0.0, 0.0, 1.0)
WHITE = Color(1.0, 1.0, 1.0, 1.0)