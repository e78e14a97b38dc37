"""Themed message box descriptions: icons, button layouts and resolved styling."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from typing import Callable, Generic, Optional, Tuple, TypeVar

from .color import TRANSPARENT, Color

M = TypeVar("M")


class MessageBoxIcon(enum.Enum):
    """Icon shown in the message box header."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    QUESTION = "question"

    def index(self) -> int:
        """Numeric index: Info=0, Success=1, Warning=2, Error=3, Question=4."""
        return _ICON_ORDER.index(self)

    def glyph(self) -> str:
        """Default Unicode glyph for the icon."""
        return _ICON_GLYPHS[self]

    def default_color(self) -> Color:
        """Semantic accent colour used when no override is set."""
        return _ICON_COLORS[self]


_ICON_ORDER = (
    MessageBoxIcon.INFO,
    MessageBoxIcon.SUCCESS,
    MessageBoxIcon.WARNING,
    MessageBoxIcon.ERROR,
    MessageBoxIcon.QUESTION,
)

_ICON_GLYPHS = {
    MessageBoxIcon.INFO: "i",
    MessageBoxIcon.SUCCESS: "\u2713",
    MessageBoxIcon.WARNING: "!",
    MessageBoxIcon.ERROR: "\u2717",
    MessageBoxIcon.QUESTION: "?",
}

_ICON_COLORS = {
    MessageBoxIcon.INFO: Color.from_rgb(0.23, 0.56, 0.82),
    MessageBoxIcon.SUCCESS: Color.from_rgb(0.18, 0.70, 0.40),
    MessageBoxIcon.WARNING: Color.from_rgb(0.90, 0.72, 0.15),
    MessageBoxIcon.ERROR: Color.from_rgb(0.85, 0.22, 0.22),
    MessageBoxIcon.QUESTION: Color.from_rgb(0.55, 0.36, 0.80),
}


class MessageBoxButtons(enum.Enum):
    """Which buttons the box shows."""

    OK = "ok"
    YES_NO = "yes_no"
    YES_NO_CANCEL = "yes_no_cancel"
    OK_CANCEL = "ok_cancel"


class MessageBoxResult(enum.Enum):
    """The answer produced when a button is clicked."""

    OK = "ok"
    YES = "yes"
    NO = "no"
    CANCEL = "cancel"


class ButtonStatus(enum.Enum):
    """Interaction state of a button, used to pick its background."""

    ACTIVE = "active"
    HOVERED = "hovered"
    PRESSED = "pressed"
    DISABLED = "disabled"


@dataclass(frozen=True)
class MessageBoxColors:
    """Optional styling overrides; ``None`` means derive from icon and theme."""

    card_background: Optional[Color] = None
    card_border: Optional[Color] = None
    title_color: Optional[Color] = None
    body_color: Optional[Color] = None
    accent: Optional[Color] = None
    corner_radius: Optional[float] = None
    border_width: Optional[float] = None


def _mix(base: Color, target: Color, t: float) -> Color:
    return Color(
        base.r + (target.r - base.r) * t,
        base.g + (target.g - base.g) * t,
        base.b + (target.b - base.b) * t,
        1.0,
    )


@dataclass(frozen=True)
class ResolvedColors:
    """Every colour and size the renderer needs, with overrides applied."""

    card_bg: Color
    card_border: Color
    title_color: Color
    body_color: Color
    icon_accent: Color
    icon_text: Color
    icon_shadow: Color
    accent_btn_text: Color
    subtle_btn_border: Color
    subtle_btn_text: Color
    corner_radius: float
    border_width: float

    @classmethod
    def resolve(
        cls, icon: MessageBoxIcon, overrides: MessageBoxColors, is_dark: bool
    ) -> ResolvedColors:
        """Combine the icon's defaults, the theme and any overrides."""
        if is_dark:
            default_bg = Color.from_rgb(0.12, 0.12, 0.14)
            default_fg = Color.from_rgb(0.92, 0.92, 0.92)
        else:
            default_bg = Color.from_rgb(0.96, 0.96, 0.97)
            default_fg = Color.from_rgb(0.10, 0.10, 0.10)

        accent = overrides.accent or icon.default_color()
        card_bg = overrides.card_background or _mix(default_bg, default_fg, 0.08)
        card_border = overrides.card_border or _mix(default_bg, default_fg, 0.18)
        title_color = overrides.title_color or default_fg
        body_color = overrides.body_color or _mix(default_bg, default_fg, 0.75)

        if accent.luminance() > 0.5:
            icon_text = Color(accent.r * 0.15, accent.g * 0.15, accent.b * 0.15, 1.0)
            icon_shadow = Color(1.0, 1.0, 1.0, 0.5)
        else:
            icon_text = Color(
                accent.r * 0.3 + 0.7, accent.g * 0.3 + 0.7, accent.b * 0.3 + 0.7, 1.0
            )
            icon_shadow = Color(0.0, 0.0, 0.0, 0.5)

        corner_radius = (
            12.0 if overrides.corner_radius is None else overrides.corner_radius
        )
        border_width = 1.0 if overrides.border_width is None else overrides.border_width

        return cls(
            card_bg=card_bg,
            card_border=card_border,
            title_color=title_color,
            body_color=body_color,
            icon_accent=accent,
            icon_text=icon_text,
            icon_shadow=icon_shadow,
            accent_btn_text=icon_text,
            subtle_btn_border=card_border,
            subtle_btn_text=body_color,
            corner_radius=corner_radius,
            border_width=border_width,
        )


@dataclass(frozen=True)
class ButtonSpec(Generic[M]):
    """One dialog button: its label, the message it emits and its styling."""

    label: str
    result: MessageBoxResult
    message: M
    is_accent: bool
    fill: Color
    text_color: Color
    border_color: Color
    border_width: float
    corner_radius: float
    width: float = 100.0
    padding: Tuple[float, float] = (9.0, 18.0)

    def background(self, status: ButtonStatus = ButtonStatus.ACTIVE) -> Color:
        """Background colour for the given interaction state."""
        if self.is_accent:
            if status is ButtonStatus.HOVERED:
                return self.fill.brightened(0.12)
            if status is ButtonStatus.PRESSED:
                return self.fill.brightened(-0.08)
            return self.fill
        if status is ButtonStatus.HOVERED:
            return self.fill.brightened(0.06).with_alpha(1.0)
        if status is ButtonStatus.PRESSED:
            return self.fill.brightened(-0.03).with_alpha(1.0)
        return TRANSPARENT


@dataclass(frozen=True)
class Card(Generic[M]):
    """The dialog card: icon badge, title, body and a row of buttons."""

    glyph: str
    title: str
    body: str
    colors: ResolvedColors
    buttons: Tuple[ButtonSpec[M], ...]
    width: float = 360.0
    padding: Tuple[float, float] = (24.0, 28.0)
    badge_size: float = 52.0
    title_size: float = 17.0
    body_size: float = 13.0

    @property
    def badge_border(self) -> Color:
        """Brightened accent used for the icon badge outline."""
        accent = self.colors.icon_accent
        return Color(
            min(accent.r * 0.7 + 0.3, 1.0),
            min(accent.g * 0.7 + 0.3, 1.0),
            min(accent.b * 0.7 + 0.3, 1.0),
            0.6,
        )

    @property
    def badge_shadow(self) -> Color:
        """Glow colour drawn around the icon badge."""
        return self.colors.icon_accent.with_alpha(0.5)


@dataclass(frozen=True)
class Overlay(Generic[M]):
    """A card centred over a semi-transparent full-window backdrop."""

    card: Card[M]
    backdrop: Color


_LAYOUTS = {
    MessageBoxButtons.OK: ((MessageBoxResult.OK, "OK", True),),
    MessageBoxButtons.YES_NO: (
        (MessageBoxResult.NO, "No", False),
        (MessageBoxResult.YES, "Yes", True),
    ),
    MessageBoxButtons.YES_NO_CANCEL: (
        (MessageBoxResult.CANCEL, "Cancel", False),
        (MessageBoxResult.NO, "No", False),
        (MessageBoxResult.YES, "Yes", True),
    ),
    MessageBoxButtons.OK_CANCEL: (
        (MessageBoxResult.CANCEL, "Cancel", False),
        (MessageBoxResult.OK, "OK", True),
    ),
}


@dataclass(frozen=True)
class MessageBox:
    """A message box configuration; builder methods return modified copies."""

    title: str
    message: str
    icon: MessageBoxIcon
    buttons: MessageBoxButtons
    is_dark: bool = True
    colors: MessageBoxColors = field(default_factory=MessageBoxColors)
    custom_glyph: Optional[str] = None

    @classmethod
    def info(cls, title: str, message: str) -> MessageBox:
        """Informational message with an OK button."""
        return cls(title, message, MessageBoxIcon.INFO, MessageBoxButtons.OK)

    @classmethod
    def success(cls, title: str, message: str) -> MessageBox:
        """Success message with an OK button."""
        return cls(title, message, MessageBoxIcon.SUCCESS, MessageBoxButtons.OK)

    @classmethod
    def warning(cls, title: str, message: str) -> MessageBox:
        """Warning message with an OK button."""
        return cls(title, message, MessageBoxIcon.WARNING, MessageBoxButtons.OK)

    @classmethod
    def error(cls, title: str, message: str) -> MessageBox:
        """Error message with an OK button."""
        return cls(title, message, MessageBoxIcon.ERROR, MessageBoxButtons.OK)

    @classmethod
    def ask_yes_no(cls, title: str, message: str) -> MessageBox:
        """Yes/No question."""
        return cls(title, message, MessageBoxIcon.QUESTION, MessageBoxButtons.YES_NO)

    @classmethod
    def ask_yes_no_cancel(cls, title: str, message: str) -> MessageBox:
        """Yes/No/Cancel question."""
        return cls(
            title, message, MessageBoxIcon.QUESTION, MessageBoxButtons.YES_NO_CANCEL
        )

    @classmethod
    def ask_ok_cancel(cls, title: str, message: str) -> MessageBox:
        """OK/Cancel question."""
        return cls(title, message, MessageBoxIcon.QUESTION, MessageBoxButtons.OK_CANCEL)

    def dark(self) -> MessageBox:
        """Use dark-mode defaults."""
        return replace(self, is_dark=True)

    def light(self) -> MessageBox:
        """Use light-mode defaults."""
        return replace(self, is_dark=False)

    def with_colors(self, colors: MessageBoxColors) -> MessageBox:
        """Replace all colour overrides."""
        return replace(self, colors=colors)

    def with_accent(self, accent: Color) -> MessageBox:
        """Set the accent colour of the icon circle and primary button."""
        return replace(self, colors=replace(self.colors, accent=accent))

    def with_corner_radius(self, radius: float) -> MessageBox:
        """Set the corner radius of the card and buttons."""
        return replace(self, colors=replace(self.colors, corner_radius=radius))

    def with_border_width(self, width: float) -> MessageBox:
        """Set the border width of the card and buttons."""
        return replace(self, colors=replace(self.colors, border_width=width))

    def with_glyph(self, glyph: str) -> MessageBox:
        """Replace the icon's default glyph."""
        return replace(self, custom_glyph=glyph)

    def effective_glyph(self) -> str:
        """The glyph that will be drawn in the icon badge."""
        return self.custom_glyph if self.custom_glyph is not None else self.icon.glyph()

    def resolved_colors(self) -> ResolvedColors:
        """Colours after applying theme and overrides."""
        return ResolvedColors.resolve(self.icon, self.colors, self.is_dark)

    def card(self, on_result: Callable[[MessageBoxResult], M]) -> Card[M]:
        """Build just the card; ``on_result`` maps each answer to a message."""
        colors = self.resolved_colors()
        buttons = tuple(
            _make_button(label, result, on_result(result), accent, colors)
            for result, label, accent in _LAYOUTS[self.buttons]
        )
        return Card(
            glyph=self.effective_glyph(),
            title=self.title,
            body=self.message,
            colors=colors,
            buttons=buttons,
        )

    def overlay(self, on_result: Callable[[MessageBoxResult], M]) -> Overlay[M]:
        """Build the card centred over a dimming backdrop."""
        alpha = 0.55 if self.is_dark else 0.35
        return Overlay(
            card=self.card(on_result), backdrop=Color.from_rgba(0.0, 0.0, 0.0, alpha)
        )


def _make_button(
    label: str, result: MessageBoxResult, message: M, accent: bool, colors: ResolvedColors
) -> ButtonSpec[M]:
    if accent:
        return ButtonSpec(
            label=label,
            result=result,
            message=message,
            is_accent=True,
            fill=colors.icon_accent,
            text_color=colors.accent_btn_text,
            border_color=colors.card_border,
            border_width=colors.border_width,
            corner_radius=colors.corner_radius,
        )
    return ButtonSpec(
        label=label,
        result=result,
        message=message,
        is_accent=False,
        fill=colors.card_bg,
        text_color=colors.subtle_btn_text,
        border_color=colors.subtle_btn_border,
        border_width=max(colors.border_width, 1.0),
        corner_radius=colors.corner_radius,
    )