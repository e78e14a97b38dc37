"""A horizontal tab bar with click-to-select and reordering."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List, MutableSequence, Optional, Sequence, Tuple, TypeVar, Union

from .color import WHITE, Color

S = TypeVar("S")


@dataclass(frozen=True)
class TabBarConfig:
    """Drag behaviour and appearance of a tab bar."""

    drag_threshold: float = 6.0
    ghost_opacity: float = 0.8
    active_bg: Color = field(default_factory=lambda: Color.from_rgb8(0x4A, 0x90, 0xD9))
    inactive_bg: Color = field(
        default_factory=lambda: Color.from_rgb8(0x2D, 0x3A, 0x5A)
    )
    ghost_bg: Color = field(default_factory=lambda: Color.from_rgb8(0x1F, 0x6A, 0xA5))
    text_color: Color = WHITE
    dimmed_text_color: Color = field(
        default_factory=lambda: Color.from_rgb8(0x72, 0x72, 0x72)
    )
    rounding: float = 6.0
    spacing: float = 4.0


@dataclass(frozen=True)
class TabClicked:
    """A tab was clicked."""

    index: int


@dataclass(frozen=True)
class TabMoved:
    """A tab should move from one position to another."""

    from_index: int
    to_index: int


TabBarMsg = Union[TabClicked, TabMoved]


@dataclass(frozen=True)
class Selected:
    """A tab was selected by clicking; ``index`` is the new selection."""

    index: int


@dataclass(frozen=True)
class Reordered:
    """Tabs were reordered; ``selected`` is where the selected tab now sits."""

    selected: int


TabBarAction = Union[Selected, Reordered]


@dataclass(frozen=True)
class TabSpec:
    """Rendering description of one tab and the messages its controls emit."""

    label: str
    index: int
    is_selected: bool
    background: Color
    hover_background: Color
    text_color: Color
    rounding: float
    on_press: TabClicked
    move_left: Optional[TabMoved] = None
    move_right: Optional[TabMoved] = None
    padding: Tuple[float, float] = (6.0, 16.0)


@dataclass(frozen=True)
class TabBar:
    """Tab bar state; builder methods return modified copies."""

    config: TabBarConfig = field(default_factory=TabBarConfig)

    def with_drag_threshold(self, px: float) -> TabBar:
        """Minimum pointer movement before a drag begins."""
        return replace(self, config=replace(self.config, drag_threshold=px))

    def with_ghost_opacity(self, alpha: float) -> TabBar:
        """Opacity of the ghost tab, clamped to [0, 1]."""
        clamped = min(max(alpha, 0.0), 1.0)
        return replace(self, config=replace(self.config, ghost_opacity=clamped))

    def with_active_bg(self, color: Color) -> TabBar:
        """Background of the selected tab."""
        return replace(self, config=replace(self.config, active_bg=color))

    def with_inactive_bg(self, color: Color) -> TabBar:
        """Background of unselected tabs."""
        return replace(self, config=replace(self.config, inactive_bg=color))

    def with_ghost_bg(self, color: Color) -> TabBar:
        """Background of the ghost tab."""
        return replace(self, config=replace(self.config, ghost_bg=color))

    def update(
        self, msg: TabBarMsg, labels: MutableSequence[S], selected: int
    ) -> Optional[TabBarAction]:
        """Apply ``msg``; ``labels`` is reordered in place.

        Returns the action for the caller, carrying the new selected index,
        or None when the message was out of range or had no effect.
        """
        count = len(labels)
        if isinstance(msg, TabClicked):
            if 0 <= msg.index < count:
                return Selected(msg.index)
            return None

        source, target = msg.from_index, msg.to_index
        if not (0 <= source < count and 0 <= target < count) or source == target:
            return None
        item = labels.pop(source)
        labels.insert(target, item)

        if selected == source:
            selected = target
        elif source < selected <= target:
            selected -= 1
        elif target <= selected < source:
            selected += 1
        return Reordered(selected)

    def _tab(self, label: object, index: int, selected: int, hover: bool) -> TabSpec:
        config = self.config
        is_selected = index == selected
        background = config.active_bg if is_selected else config.inactive_bg
        return TabSpec(
            label=str(label),
            index=index,
            is_selected=is_selected,
            background=background,
            hover_background=background.brightened(0.08) if hover else background,
            text_color=config.text_color,
            rounding=config.rounding,
            on_press=TabClicked(index),
        )

    def view(self, labels: Sequence[object], selected: int) -> List[TabSpec]:
        """Describe the tabs as a row of styled buttons."""
        return [
            self._tab(label, index, selected, hover=True)
            for index, label in enumerate(labels)
        ]

    def view_with_move_buttons(
        self, labels: Sequence[object], selected: int
    ) -> List[TabSpec]:
        """Describe the tabs, each with left/right move controls where possible."""
        last = len(labels) - 1
        specs = []
        for index, label in enumerate(labels):
            spec = self._tab(label, index, selected, hover=False)
            specs.append(
                replace(
                    spec,
                    move_left=TabMoved(index, index - 1) if index > 0 else None,
                    move_right=TabMoved(index, index + 1) if index < last else None,
                    padding=(6.0, 12.0),
                )
            )
        return specs