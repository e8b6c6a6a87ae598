from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from spider_engine.cards import Card
from spider_layout.calculator import (
    LayoutResult,
    StackOffsets,
    calculate_expanded_offsets,
    calculate_smart_overlap,
    get_card_stack_offset,
    get_row_for_column,
    is_stack_compressed,
    top_offset_to_bottom_offset,
)
from spider_layout.layout_config import EXPANDED_CONTAINER_MARGIN, EXPANDED_HEIGHT_FACTOR
from spider_layout.segments import SegmentLayout, calculate_segment_layout, card_top_offsets


@dataclass(frozen=True)
class ColumnGeometry:
    column: int
    row: int
    max_height: float
    offsets: StackOffsets
    segment_layout: SegmentLayout
    stack_height: float
    is_compressed: bool
    use_segment_rendering: bool
    # Per card: distance from the top of the column in portrait, from the
    # bottom in landscape where stacks grow upwards.
    card_positions: tuple[float, ...]


@dataclass(frozen=True)
class BoardGeometry:
    layout: LayoutResult
    columns: tuple[ColumnGeometry, ...]


def build_column_geometry(
    cards: Sequence[Card],
    column: int,
    layout: LayoutResult,
    expanded_height: Optional[float] = None,
) -> ColumnGeometry:
    """`expanded_height` switches the column to its tall, uncompressed form."""
    row = get_row_for_column(column, layout.is_landscape)
    max_height = layout.row_heights[row] if row < len(layout.row_heights) else 0.0
    card_height = layout.card_height
    expanded = expanded_height is not None
    if expanded:
        max_height = expanded_height

    segment_layout = calculate_segment_layout(cards, card_height, max_height, not expanded, layout.card_width)
    if expanded:
        offsets = calculate_expanded_offsets(cards, card_height, max_height)
    else:
        offsets = calculate_smart_overlap(cards, card_height, max_height)

    use_segments = not expanded and segment_layout.has_runs
    if use_segments:
        stack_height = segment_layout.total_height
        tops = card_top_offsets(segment_layout)
    else:
        tops = tuple(get_card_stack_offset(cards, i, offsets) for i in range(len(cards)))
        stack_height = tops[-1] + card_height if tops else 0.0

    if layout.is_landscape:
        positions = tuple(top_offset_to_bottom_offset(t, card_height, stack_height) for t in tops)
    else:
        positions = tops

    return ColumnGeometry(
        column=column,
        row=row,
        max_height=max_height,
        offsets=offsets,
        segment_layout=segment_layout,
        stack_height=stack_height,
        is_compressed=is_stack_compressed(offsets, len(cards)) or segment_layout.has_runs,
        use_segment_rendering=use_segments,
        card_positions=positions,
    )


def build_board_geometry(
    tableau: Sequence[Sequence[Card]],
    layout: LayoutResult,
    container_height: Optional[float] = None,
    expanded_column: Optional[int] = None,
) -> BoardGeometry:
    columns = []
    for idx, cards in enumerate(tableau):
        expanded_height = None
        if expanded_column == idx:
            row_height = layout.row_heights[get_row_for_column(idx, layout.is_landscape)]
            expanded_height = row_height * EXPANDED_HEIGHT_FACTOR
            if container_height is not None:
                expanded_height = min(expanded_height, container_height - EXPANDED_CONTAINER_MARGIN)
            expanded_height = max(0.0, expanded_height)
        columns.append(build_column_geometry(cards, idx, layout, expanded_height))
    return BoardGeometry(layout=layout, columns=tuple(columns))
