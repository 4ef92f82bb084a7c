"""Hand comparison and multi-way showdown resolution."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence

from .cards import Card, Hand
from .evaluator import HandStrength, evaluate_hand


class Ordering(Enum):
    """Result of comparing two hand strengths."""
    GREATER = 1
    TIED = 0
    LESS = -1


class Outcome(Enum):
    """Showdown outcome from the player's point of view."""
    WIN = "win"
    TIE = "tie"
    LOSS = "loss"


@dataclass(frozen=True)
class ShowdownResult:
    """
    Result of a multi-way showdown.

    Attributes:
        outcome: Player's outcome against the whole field
        best_opponents: Indices of every opponent holding the best
            opponent hand (empty when there are no opponents)
    """
    outcome: Outcome
    best_opponents: tuple[int, ...] = ()

    @property
    def winner(self) -> Optional[int]:
        """Single-winner view: first best opponent if it beats the player."""
        if self.outcome is Outcome.LOSS:
            return self.best_opponents[0]
        return None


def compare(a: HandStrength, b: HandStrength) -> Ordering:
    """
    Compare two hand strengths.

    Level, then primary rank, then secondary rank (absent lowest), then
    kickers high to low.
    """
    if a > b:
        return Ordering.GREATER
    if a < b:
        return Ordering.LESS
    return Ordering.TIED


def is_better(hand1: Hand, hand2: Hand, community: Sequence[Card]) -> bool:
    """True if hand1 strictly beats hand2 on the same community cards."""
    eval1 = evaluate_hand(hand1, community)
    eval2 = evaluate_hand(hand2, community)
    return compare(eval1, eval2) is Ordering.GREATER


def resolve(player_key: Any, opponent_keys: Sequence[Any]) -> ShowdownResult:
    """
    Resolve a showdown from already computed, mutually comparable keys.

    Higher keys are stronger. Shared by the showdown helpers and the
    equity simulator so both rank hands the same way.
    """
    if not opponent_keys:
        return ShowdownResult(Outcome.WIN)

    best = max(opponent_keys)
    best_opponents = tuple(i for i, key in enumerate(opponent_keys) if key == best)

    if player_key > best:
        outcome = Outcome.WIN
    elif player_key == best:
        outcome = Outcome.TIE
    else:
        outcome = Outcome.LOSS
    return ShowdownResult(outcome, best_opponents)


def showdown(
    player_hand: Hand,
    opponent_hands: Sequence[Hand],
    community: Sequence[Card],
) -> ShowdownResult:
    """
    Evaluate the player and every opponent once against the same board.

    Args:
        player_hand: Hero's hole cards
        opponent_hands: Opponents' hole cards, in seat order
        community: Community cards (0-5)

    Returns:
        ShowdownResult with the tied-best opponent set
    """
    player_eval = evaluate_hand(player_hand, community)
    opponent_evals = [evaluate_hand(h, community) for h in opponent_hands]
    return resolve(player_eval, opponent_evals)


def find_winner(
    player_hand: Hand,
    opponent_hands: Sequence[Hand],
    community: Sequence[Card],
) -> Optional[int]:
    """
    Index of the opponent that beats the player, or None if the player wins.

    Only the best opponent is reported; when several opponents tie for
    best the lowest index is returned. A player who ties the best
    opponent is not beaten.
    """
    return showdown(player_hand, opponent_hands, community).winner
