"""Basic strategy for 6 decks, dealer stands on soft 17, DAS, late surrender."""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Sequence

from core.cards import Card
from core.hand import hand_total, visible_cards


class Action(Enum):
    """Possible player decisions, valued by their chart letter."""

    HIT = "H"
    STAND = "S"
    DOUBLE = "D"
    SPLIT = "P"
    SURRENDER = "R"

    @property
    def label(self) -> str:
        return self.name.title()

    def __str__(self) -> str:
        return self.label


class TableType(Enum):
    """Which chart a hand is read from."""

    HARD = "hard"
    SOFT = "soft"
    PAIRS = "pairs"


class HardRow(Enum):
    """
    Hard total rows.

    Totals of 8 or less share the first row, 17 or more the last one.
    """

    FIVE_TO_EIGHT = "5-8"
    NINE = "9"
    TEN = "10"
    ELEVEN = "11"
    TWELVE = "12"
    THIRTEEN = "13"
    FOURTEEN = "14"
    FIFTEEN = "15"
    SIXTEEN = "16"
    SEVENTEEN_PLUS = "17+"


class SoftRow(Enum):
    """
    Soft total rows, keyed by what the hand holds beside the soft Ace.

    2 or less reads as A,2; 8 and 9 (and anything above) share A,8+.
    """

    A2 = "A2"
    A3 = "A3"
    A4 = "A4"
    A5 = "A5"
    A6 = "A6"
    A7 = "A7"
    A8_PLUS = "A8+"


class PairRow(Enum):
    """Pair rows. All ten-value pairs share TT, Aces have their own row."""

    TWOS = "22"
    THREES = "33"
    FOURS = "44"
    FIVES = "55"
    SIXES = "66"
    SEVENS = "77"
    EIGHTS = "88"
    NINES = "99"
    TENS = "TT"
    ACES = "AA"


Row = HardRow | SoftRow | PairRow

# Dealer upcard column labels, left to right
UPCARD_LABELS = ("2", "3", "4", "5", "6", "7", "8", "9", "T", "A")


def _row(letters: str) -> tuple[Action, ...]:
    return tuple(Action(letter) for letter in letters.split())


#                                  2 3 4 5 6 7 8 9 T A
HARD_TABLE: dict[HardRow, tuple[Action, ...]] = {
    HardRow.FIVE_TO_EIGHT:  _row("H H H H H H H H H H"),
    HardRow.NINE:           _row("H D D D D H H H H H"),
    HardRow.TEN:            _row("D D D D D D D D H H"),
    HardRow.ELEVEN:         _row("D D D D D D D D D D"),
    HardRow.TWELVE:         _row("H H S S S H H H H H"),
    HardRow.THIRTEEN:       _row("S S S S S H H H H H"),
    HardRow.FOURTEEN:       _row("S S S S S H H H H H"),
    HardRow.FIFTEEN:        _row("S S S S S H H H R H"),
    HardRow.SIXTEEN:        _row("S S S S S H H R R R"),
    HardRow.SEVENTEEN_PLUS: _row("S S S S S S S S S S"),
}

SOFT_TABLE: dict[SoftRow, tuple[Action, ...]] = {
    SoftRow.A2:      _row("H H H D D H H H H H"),
    SoftRow.A3:      _row("H H H D D H H H H H"),
    SoftRow.A4:      _row("H H D D D H H H H H"),
    SoftRow.A5:      _row("H H D D D H H H H H"),
    SoftRow.A6:      _row("H D D D D H H H H H"),
    SoftRow.A7:      _row("S D D D D S S H H H"),
    SoftRow.A8_PLUS: _row("S S S S S S S S S S"),
}

PAIR_TABLE: dict[PairRow, tuple[Action, ...]] = {
    PairRow.TWOS:   _row("P P P P P P H H H H"),
    PairRow.THREES: _row("P P P P P P H H H H"),
    PairRow.FOURS:  _row("H H H P P H H H H H"),
    PairRow.FIVES:  _row("D D D D D D D D H H"),
    PairRow.SIXES:  _row("P P P P P H H H H H"),
    PairRow.SEVENS: _row("P P P P P P H H H H"),
    PairRow.EIGHTS: _row("P P P P P P P P P P"),
    PairRow.NINES:  _row("P P P P P S P P S S"),
    PairRow.TENS:   _row("S S S S S S S S S S"),
    PairRow.ACES:   _row("P P P P P P P P P P"),
}


def _check_tables() -> None:
    """Every row enumerated, every row ten columns wide."""
    for table, rows in ((HARD_TABLE, HardRow), (SOFT_TABLE, SoftRow), (PAIR_TABLE, PairRow)):
        missing = set(rows) - set(table)
        if missing:
            raise RuntimeError(f"Strategy table missing rows: {sorted(r.value for r in missing)}")
        for row, actions in table.items():
            if len(actions) != len(UPCARD_LABELS):
                raise RuntimeError(f"Strategy row {row.value} has {len(actions)} columns")


_check_tables()


@dataclass(frozen=True)
class StrategyOptions:
    """What the player may legally do right now."""

    can_hit: bool = True
    can_double: bool = True
    can_split: bool = True
    can_surrender: bool = True
    is_first_action: bool = True

    def allows(self, action: Action) -> bool:
        """Check if an action is legal under these options."""
        if action == Action.HIT:
            return self.can_hit
        if action == Action.DOUBLE:
            return self.can_double
        if action == Action.SPLIT:
            return self.can_split
        if action == Action.SURRENDER:
            return self.can_surrender and self.is_first_action
        return True


class Recommendation(NamedTuple):
    """A strategy answer and the chart cell it came from."""

    action: Action
    table_type: TableType
    row_key: str


class Feedback(NamedTuple):
    """Verdict on a decision the player made."""

    correct: bool
    chosen: Action
    recommended: Action
    message: str


def dealer_column(upcard_value: int) -> int:
    """
    Map a dealer upcard value to its chart column.

    2-9 map to columns 0-7, ten-value cards to 8 ("T") and the Ace (11)
    to 9 ("A").
    """
    if upcard_value == 11:
        return 9
    if upcard_value == 10:
        return 8
    if 2 <= upcard_value <= 9:
        return upcard_value - 2
    raise ValueError(f"Invalid dealer upcard value: {upcard_value}")


def classify_hard(total: int) -> HardRow:
    """Hard row for a total, clamped to 5-8 below and 17+ above."""
    if total <= 8:
        return HardRow.FIVE_TO_EIGHT
    if total >= 17:
        return HardRow.SEVENTEEN_PLUS
    return HardRow(str(total))


def classify_soft(other_value: int) -> SoftRow:
    """Soft row for the non-ace part of a soft total (total - 11)."""
    if other_value <= 2:
        return SoftRow.A2
    if other_value >= 8:
        return SoftRow.A8_PLUS
    return SoftRow(f"A{other_value}")


def classify_pair(card: Card) -> PairRow:
    """Pair row for one card of a pair."""
    if card.value == 11:
        return PairRow.ACES
    if card.value == 10:
        return PairRow.TENS
    return PairRow(f"{card.value}{card.value}")


def classify(cards: Sequence[Card], can_split: bool = True) -> tuple[TableType, Row]:
    """
    Decide which chart row a hand is read from.

    Pairs only count as pairs while splitting is possible; otherwise the
    hand is read as soft or hard like any other.
    """
    shown = visible_cards(cards)

    if can_split and len(shown) == 2 and shown[0].value == shown[1].value:
        return TableType.PAIRS, classify_pair(shown[0])

    total, is_soft, _ = hand_total(shown)
    if is_soft:
        return TableType.SOFT, classify_soft(total - 11)
    return TableType.HARD, classify_hard(total)


def lookup(table_type: TableType, row: Row, upcard_value: int) -> Action:
    """Raw chart entry, before degradation."""
    col = dealer_column(upcard_value)
    if table_type == TableType.PAIRS:
        return PAIR_TABLE[row][col]  # type: ignore[index]
    if table_type == TableType.SOFT:
        return SOFT_TABLE[row][col]  # type: ignore[index]
    return HARD_TABLE[row][col]  # type: ignore[index]


def degrade(action: Action, options: StrategyOptions) -> Action:
    """
    Replace an unavailable chart action with the nearest legal one.

    Double, Split and Surrender fall back to Hit, and Hit falls back to
    Stand when hitting is not possible either. Stand is always legal.
    """
    if options.allows(action):
        return action
    if action in (Action.DOUBLE, Action.SPLIT, Action.SURRENDER) and options.can_hit:
        return Action.HIT
    return Action.STAND


def recommend(
    cards: Sequence[Card],
    dealer_upcard: int,
    options: StrategyOptions | None = None,
) -> Recommendation:
    """
    Get the basic strategy play for a hand.

    Args:
        cards: The player's cards (face-down cards are ignored)
        dealer_upcard: Dealer upcard value, 2-11 (11 = Ace)
        options: Legal moves for the hand (everything allowed if None)

    Returns:
        The action to take and the chart row it was read from
    """
    options = options or StrategyOptions()
    table_type, row = classify(cards, can_split=options.can_split)
    action = degrade(lookup(table_type, row, dealer_upcard), options)
    return Recommendation(action, table_type, row.value)


def critique(chosen: Action, recommendation: Recommendation) -> Feedback:
    """Compare a decision with the recommended one."""
    recommended = recommendation.action
    if chosen == recommended:
        return Feedback(True, chosen, recommended, f"Correct: {recommended.label}")
    return Feedback(
        False,
        chosen,
        recommended,
        f"Wrong move! Should have: {recommended.label}",
    )


def chart() -> dict[TableType, list[tuple[str, tuple[Action, ...]]]]:
    """The three charts as ordered (row key, actions per upcard) rows."""
    return {
        TableType.HARD: [(row.value, HARD_TABLE[row]) for row in HardRow],
        TableType.SOFT: [(row.value, SOFT_TABLE[row]) for row in SoftRow],
        TableType.PAIRS: [(row.value, PAIR_TABLE[row]) for row in PairRow],
    }
