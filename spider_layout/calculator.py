"""
Board geometry for a measured container.

Everything here is a pure function of its arguments. Degenerate inputs
(zero or negative space) clamp to the smallest sensible output instead of raising.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from spider_engine.cards import Card
from spider_layout.layout_config import (
    ABSOLUTE_MIN_PEEK,
    CARD_ASPECT_RATIO,
    GAP_SIZE,
    IDEAL_FACEDOWN_PEEK,
    IDEAL_FACEUP_PEEK,
    LANDSCAPE_MIN_WIDTH,
    LANDSCAPE_ROW_CONFIG,
    MAX_CARD_WIDTH,
    MIN_CARD_WIDTH,
    MIN_FACEDOWN_PEEK,
    MIN_FACEUP_PEEK,
    PORTRAIT_ROW_CONFIG,
    PORTRAIT_ROW_WEIGHTS,
)


@dataclass(frozen=True, slots=True)
class SafeAreaInsets:
    top: float = 0.0
    bottom: float = 0.0
    left: float = 0.0
    right: float = 0.0


@dataclass(frozen=True, slots=True)
class LayoutConfig:
    container_width: float
    container_height: float
    safe_area_insets: Optional[SafeAreaInsets] = None


@dataclass(frozen=True, slots=True)
class LayoutResult:
    card_width: float
    card_height: float
    column_width: float
    gap_size: float
    is_landscape: bool
    row_config: tuple[tuple[int, ...], ...]
    # Height budget for the stacks of each row.
    row_heights: tuple[float, ...]


@dataclass(frozen=True, slots=True)
class StackOffsets:
    face_down_offset: float
    face_up_offset: float
    needs_scroll: bool = False


IDEAL_OFFSETS = StackOffsets(face_down_offset=IDEAL_FACEDOWN_PEEK, face_up_offset=IDEAL_FACEUP_PEEK)


def _clamp_card_width(width: float) -> float:
    return min(MAX_CARD_WIDTH, max(MIN_CARD_WIDTH, width))


def calculate_layout(config: LayoutConfig) -> LayoutResult:
    insets = config.safe_area_insets or SafeAreaInsets()
    safe_width = config.container_width - insets.left - insets.right
    safe_height = config.container_height - insets.top - insets.bottom

    is_landscape = config.container_width > config.container_height and config.container_width > LANDSCAPE_MIN_WIDTH

    if is_landscape:
        # Ten columns across with a gap on both sides of each.
        card_width = _clamp_card_width((safe_width - GAP_SIZE * 11) / 10)
        row_config = LANDSCAPE_ROW_CONFIG
        row_heights = (max(0.0, safe_height - GAP_SIZE * 2),)
    else:
        # The widest portrait row holds four columns.
        card_width = _clamp_card_width((safe_width - GAP_SIZE * 5) / 4)
        row_config = PORTRAIT_ROW_CONFIG
        available = max(0.0, safe_height - GAP_SIZE * 4)
        row_heights = tuple(available * w for w in PORTRAIT_ROW_WEIGHTS)

    return LayoutResult(
        card_width=card_width,
        card_height=card_width * CARD_ASPECT_RATIO,
        column_width=card_width + GAP_SIZE,
        gap_size=GAP_SIZE,
        is_landscape=is_landscape,
        row_config=row_config,
        row_heights=row_heights,
    )


def get_row_for_column(column_index: int, is_landscape: bool) -> int:
    config = LANDSCAPE_ROW_CONFIG if is_landscape else PORTRAIT_ROW_CONFIG
    for row, columns in enumerate(config):
        if column_index in columns:
            return row
    return 0


def _count_peeks(cards: Sequence[Card]) -> tuple[int, int]:
    # The top card is always drawn in full, so it is left out.
    face_down = 0
    face_up = 0
    for card in cards[:-1]:
        if card.face_up:
            face_up += 1
        else:
            face_down += 1
    return face_down, face_up


def fit_offsets(face_down: int, face_up: int, available: float, overhead: float = 0.0) -> tuple[StackOffsets, float]:
    """
    Choose peeks so that `overhead + face_down * fd + face_up * fu <= available`.

    `overhead` is fixed height that only shrinks once the minimum peeks no
    longer fit; the returned factor says how far it had to shrink.
    """
    if available <= 0:
        return StackOffsets(ABSOLUTE_MIN_PEEK, ABSOLUTE_MIN_PEEK, needs_scroll=True), 0.0

    ideal_total = overhead + face_down * IDEAL_FACEDOWN_PEEK + face_up * IDEAL_FACEUP_PEEK
    if ideal_total <= available:
        return IDEAL_OFFSETS, 1.0

    min_total = overhead + face_down * MIN_FACEDOWN_PEEK + face_up * MIN_FACEUP_PEEK
    if min_total >= available:
        # Below the touch-friendly minimum; shrink everything so it still fits.
        scale = available / min_total
        return StackOffsets(MIN_FACEDOWN_PEEK * scale, MIN_FACEUP_PEEK * scale), scale

    t = (available - min_total) / (ideal_total - min_total)
    return (
        StackOffsets(
            face_down_offset=MIN_FACEDOWN_PEEK + t * (IDEAL_FACEDOWN_PEEK - MIN_FACEDOWN_PEEK),
            face_up_offset=MIN_FACEUP_PEEK + t * (IDEAL_FACEUP_PEEK - MIN_FACEUP_PEEK),
        ),
        1.0,
    )


def calculate_smart_overlap(cards: Sequence[Card], card_height: float, max_stack_height: float) -> StackOffsets:
    if len(cards) <= 1:
        return IDEAL_OFFSETS
    face_down, face_up = _count_peeks(cards)
    offsets, _ = fit_offsets(face_down, face_up, max_stack_height - card_height)
    return offsets


def calculate_stack_height(cards: Sequence[Card], card_height: float, offsets: StackOffsets) -> float:
    if len(cards) == 0:
        return 0.0
    return card_height + get_card_stack_offset(cards, len(cards) - 1, offsets)


def calculate_expanded_offsets(cards: Sequence[Card], card_height: float, max_height: float) -> StackOffsets:
    if calculate_stack_height(cards, card_height, IDEAL_OFFSETS) <= max_height:
        return IDEAL_OFFSETS
    return calculate_smart_overlap(cards, card_height, max_height)


def get_card_stack_offset(cards: Sequence[Card], card_index: int, offsets: StackOffsets) -> float:
    """Distance from the top of the column to the top edge of `cards[card_index]`."""
    offset = 0.0
    for card in cards[:card_index]:
        offset += offsets.face_up_offset if card.face_up else offsets.face_down_offset
    return offset


def is_stack_compressed(offsets: StackOffsets, card_count: int) -> bool:
    if card_count <= 1:
        return False
    return offsets.face_down_offset < IDEAL_FACEDOWN_PEEK or offsets.face_up_offset < IDEAL_FACEUP_PEEK


def top_offset_to_bottom_offset(top_offset: float, card_height: float, stack_height: float) -> float:
    return stack_height - top_offset - card_height
