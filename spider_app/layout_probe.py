from __future__ import annotations

import argparse
import json
import random
from dataclasses import asdict

from spider_engine.cards import SUIT_COUNT_ORDER
from spider_engine.game import GameSettings, initialize_game
from spider_layout.board import BoardGeometry, build_board_geometry
from spider_layout.calculator import LayoutConfig, SafeAreaInsets, calculate_layout
from spider_layout.segments import RUN


def _round(value: float) -> float:
    return round(float(value), 2)


def board_report(board: BoardGeometry) -> dict:
    layout = board.layout
    columns = []
    for col in board.columns:
        columns.append(
            {
                "column": col.column,
                "row": col.row,
                "cards": len(col.card_positions),
                "max_height": _round(col.max_height),
                "stack_height": _round(col.stack_height),
                "face_down_offset": _round(col.offsets.face_down_offset),
                "face_up_offset": _round(col.offsets.face_up_offset),
                "compressed": col.is_compressed,
                "segments": [s.label if s.kind == RUN else s.kind for s in col.segment_layout.segments],
            }
        )
    return {
        "layout": {
            **asdict(layout),
            "card_width": _round(layout.card_width),
            "card_height": _round(layout.card_height),
            "column_width": _round(layout.column_width),
            "row_heights": [_round(h) for h in layout.row_heights],
        },
        "columns": columns,
    }


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Report board geometry for a container size.")
    parser.add_argument("--width", type=float, required=True, help="Container width in px.")
    parser.add_argument("--height", type=float, required=True, help="Container height in px.")
    parser.add_argument("--inset", type=float, default=0.0, help="Safe-area inset applied on every side.")
    parser.add_argument("--suits", type=int, choices=SUIT_COUNT_ORDER, default=1, help="Suit count.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the dealt game.")
    parser.add_argument("--expand", type=int, default=None, help="Column to show expanded.")
    parser.add_argument("--pretty", action="store_true", help="Pretty-print json output.")
    return parser.parse_args()


def main() -> None:
    args = _parse_args()
    insets = SafeAreaInsets(args.inset, args.inset, args.inset, args.inset)
    layout = calculate_layout(LayoutConfig(args.width, args.height, insets))
    state = initialize_game(GameSettings(suit_count=args.suits), random.Random(args.seed))
    board = build_board_geometry(state.tableau, layout, args.height, args.expand)
    payload = board_report(board)
    if args.pretty:
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        print(json.dumps(payload, ensure_ascii=False))


if __name__ == "__main__":
    main()
