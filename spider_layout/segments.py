"""
Run compression: a column is cut into single cards and runs of three or more
same-suit descending face-up cards. A run is drawn as one glyph (top card
peek, a thin band for the interior cards, bottom card), which keeps very deep
columns inside their height budget.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from spider_engine.cards import Card
from spider_engine.rules import is_valid_sequence
from spider_layout.calculator import IDEAL_OFFSETS, StackOffsets, fit_offsets
from spider_layout.layout_config import (
    ABSOLUTE_MIN_PEEK,
    CARD_ASPECT_RATIO,
    RUN_MIDDLE_MIN,
    RUN_MIDDLE_RATIO,
    RUN_MIN_LENGTH,
    RUN_TOP_PEEK_MIN,
    RUN_TOP_PEEK_RATIO,
)

SINGLETON = "singleton"
RUN = "run"


@dataclass(frozen=True, slots=True)
class ColumnSegment:
    kind: str
    start_index: int
    end_index: int
    cards: tuple[Card, ...]

    @property
    def label(self) -> str:
        if self.kind != RUN:
            return self.cards[0].rank
        return f"{self.cards[0].rank}-{self.cards[-1].rank}"


@dataclass(frozen=True, slots=True)
class SegmentLayout:
    segments: tuple[ColumnSegment, ...]
    # Top edge of every segment, measured from the top of the column.
    segment_offsets: tuple[float, ...]
    face_down_offset: float
    face_up_offset: float
    run_top_peek: float
    run_middle_height: float
    card_height: float
    total_height: float
    needs_scroll: bool = False

    @property
    def has_runs(self) -> bool:
        return any(s.kind == RUN for s in self.segments)


def find_segments(column: Sequence[Card], use_compression: bool = True) -> tuple[ColumnSegment, ...]:
    segments = []
    n = len(column)
    i = 0
    while i < n:
        end = i
        if use_compression and column[i].face_up:
            while end + 1 < n and is_valid_sequence(column[end:end + 2]):
                end += 1
        if end - i + 1 >= RUN_MIN_LENGTH:
            segments.append(ColumnSegment(RUN, i, end, tuple(column[i:end + 1])))
            i = end + 1
        else:
            segments.append(ColumnSegment(SINGLETON, i, i, (column[i],)))
            i += 1
    return tuple(segments)


def run_band_heights(card_width: float) -> tuple[float, float]:
    return (
        max(RUN_TOP_PEEK_MIN, card_width * RUN_TOP_PEEK_RATIO),
        max(RUN_MIDDLE_MIN, card_width * RUN_MIDDLE_RATIO),
    )


def calculate_segment_layout(
    column: Sequence[Card],
    card_height: float,
    max_height: float,
    use_compression: bool = True,
    card_width: Optional[float] = None,
) -> SegmentLayout:
    segments = find_segments(column, use_compression)
    if card_width is None:
        card_width = card_height / CARD_ASPECT_RATIO
    top_peek, middle = run_band_heights(card_width)

    face_down = 0
    face_up = 0
    overhead = 0.0
    for k, segment in enumerate(segments):
        is_last = k == len(segments) - 1
        if segment.kind == RUN:
            overhead += top_peek + middle
            if not is_last:
                face_up += 1
        elif not is_last:
            if segment.cards[0].face_up:
                face_up += 1
            else:
                face_down += 1

    if len(column) <= 1:
        offsets, scale = IDEAL_OFFSETS, 1.0
    else:
        offsets, scale = fit_offsets(face_down, face_up, max_height - card_height, overhead)
    if offsets.needs_scroll:
        top_peek = middle = ABSOLUTE_MIN_PEEK
    elif scale < 1.0:
        top_peek *= scale
        middle *= scale

    segment_offsets = []
    y = 0.0
    for k, segment in enumerate(segments):
        segment_offsets.append(y)
        is_last = k == len(segments) - 1
        if segment.kind == RUN:
            y += top_peek + middle
            y += card_height if is_last else offsets.face_up_offset
        elif is_last:
            y += card_height
        else:
            y += offsets.face_up_offset if segment.cards[0].face_up else offsets.face_down_offset

    return SegmentLayout(
        segments=segments,
        segment_offsets=tuple(segment_offsets),
        face_down_offset=offsets.face_down_offset,
        face_up_offset=offsets.face_up_offset,
        run_top_peek=top_peek,
        run_middle_height=middle,
        card_height=card_height,
        total_height=y,
        needs_scroll=offsets.needs_scroll,
    )


def segment_stack_offsets(layout: SegmentLayout) -> StackOffsets:
    return StackOffsets(layout.face_down_offset, layout.face_up_offset, layout.needs_scroll)


def card_top_offsets(layout: SegmentLayout) -> tuple[float, ...]:
    """Top edge of every physical card; interior run cards share the middle band."""
    tops = []
    for segment, offset in zip(layout.segments, layout.segment_offsets):
        if segment.kind != RUN:
            tops.append(offset)
            continue
        interior = len(segment.cards) - 2
        tops.append(offset)
        for k in range(interior):
            tops.append(offset + layout.run_top_peek + layout.run_middle_height * k / interior)
        tops.append(offset + layout.run_top_peek + layout.run_middle_height)
    return tuple(tops)


def card_index_at_offset(layout: SegmentLayout, y: float) -> Optional[int]:
    """
    Resolve a vertical position inside a column to a card index.

    Inside a run's middle band the position maps proportionally onto the
    interior cards. Returns None above the column or below its last card.
    """
    if not layout.segments or y < 0 or y > layout.total_height:
        return None
    k = len(layout.segments) - 1
    while k > 0 and layout.segment_offsets[k] > y:
        k -= 1
    segment = layout.segments[k]
    if segment.kind != RUN:
        return segment.start_index

    rel = y - layout.segment_offsets[k]
    if rel < layout.run_top_peek:
        return segment.start_index
    if rel < layout.run_top_peek + layout.run_middle_height:
        interior = len(segment.cards) - 2
        pos = int((rel - layout.run_top_peek) / layout.run_middle_height * interior)
        return segment.start_index + 1 + min(pos, interior - 1)
    return segment.end_index
