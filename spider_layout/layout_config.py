CARD_ASPECT_RATIO = 1.38
MIN_CARD_WIDTH = 50
MAX_CARD_WIDTH = 90
GAP_SIZE = 4
LANDSCAPE_MIN_WIDTH = 600

# Peeks: the visible sliver of a covered card.
IDEAL_FACEDOWN_PEEK = 8
IDEAL_FACEUP_PEEK = 22
MIN_FACEDOWN_PEEK = 6
MIN_FACEUP_PEEK = 16
ABSOLUTE_MIN_PEEK = 2

PORTRAIT_ROW_CONFIG = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8, 9),
)
LANDSCAPE_ROW_CONFIG = ((0, 1, 2, 3, 4, 5, 6, 7, 8, 9),)
PORTRAIT_ROW_WEIGHTS = (0.28, 0.28, 0.44)

# Compressed run glyph.
RUN_MIN_LENGTH = 3
RUN_TOP_PEEK_RATIO = 0.28
RUN_TOP_PEEK_MIN = 16
RUN_MIDDLE_RATIO = 0.15
RUN_MIDDLE_MIN = 10

EXPANDED_HEIGHT_FACTOR = 2
EXPANDED_CONTAINER_MARGIN = 80
