"""Correction for voice-transcription price errors.

Speech-to-text regularly hears "twenty ten" as 20100 instead of 2010. When
an offer is roughly ten times the board rate and dividing by ten lands it
near the board rate, the divided value is almost certainly what the carrier
said. This is a best-effort heuristic; it is never the only check on a
price.
"""

import math

from app.numeric import round_half_up

# Only offers on loads posted within this range are corrected.
MIN_CORRECTABLE_BOARD = 800
MAX_CORRECTABLE_BOARD = 6000
MIN_SUSPECT_OFFER = 10000
# How close offer/10 must land to the board rate, as a fraction of board.
MAX_CORRECTION_DRIFT = 0.5


def normalize_offer(raw_offer: float, board_rate: float) -> float:
    """Undo a spurious trailing zero on ``raw_offer`` when it is clearly one.

    >>> normalize_offer(20100, 2200)
    2010
    >>> normalize_offer(7000, 2200)
    7000
    """
    if not math.isfinite(raw_offer) or not math.isfinite(board_rate):
        return raw_offer
    if not MIN_CORRECTABLE_BOARD <= board_rate <= MAX_CORRECTABLE_BOARD:
        return raw_offer
    if raw_offer < MIN_SUSPECT_OFFER:
        return raw_offer

    ten_x = round_half_up(raw_offer / 10)
    if abs(ten_x - board_rate) <= MAX_CORRECTION_DRIFT * board_rate:
        return ten_x
    return raw_offer
