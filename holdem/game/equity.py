"""Monte Carlo win probability estimation."""

import logging
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Optional, Sequence, Union

import numpy as np

from .cards import Card, Deck, Hand, HAND_SIZE, BOARD_SIZE, card_mask
from .evaluator import evaluate_hand, standard_rank
from .showdown import Outcome, resolve


logger = logging.getLogger(__name__)

DEFAULT_TRIALS = 10000
RANKINGS = ("reference", "standard")
VALID_BOARD_SIZES = (0, 3, 4, 5)

Seed = Union[None, int, np.random.SeedSequence]


@dataclass
class EquityConfig:
    """Configuration for the equity simulator."""
    num_trials: int = DEFAULT_TRIALS
    complete_board: bool = True    # Deal missing community cards each trial
    ranking: str = "reference"     # "reference" evaluator or "standard" (treys)
    workers: int = 1               # Worker processes (1 = run in-process)
    batch_size: int = 2500         # Trials per batch
    time_limit: Optional[float] = None  # Seconds, checked between batches

    def __post_init__(self):
        if self.num_trials <= 0:
            raise ValueError(f"num_trials must be positive, got {self.num_trials}")
        if self.batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {self.batch_size}")
        if self.workers <= 0:
            raise ValueError(f"workers must be positive, got {self.workers}")
        if self.ranking not in RANKINGS:
            raise ValueError(f"Unknown ranking: {self.ranking}")
        if self.ranking == "standard" and not self.complete_board:
            raise ValueError("Standard ranking needs complete_board=True")
        if self.time_limit is not None and self.time_limit <= 0:
            raise ValueError(f"time_limit must be positive, got {self.time_limit}")

    def batches(self) -> list[int]:
        """Split num_trials into batch sizes."""
        full, rest = divmod(self.num_trials, self.batch_size)
        return [self.batch_size] * full + ([rest] if rest else [])


@dataclass
class SimulationResult:
    """
    Outcome counters from a set of trials.

    A trial is a win when no opponent strictly beats the player, the same
    rule find_winner applies. Wins where the player only shares the best
    hand are also counted in ``splits``. ``ties`` stays in the denominator
    but the win rule never produces one.
    """
    wins: int = 0
    losses: int = 0
    ties: int = 0
    splits: int = 0

    @property
    def trials(self) -> int:
        return self.wins + self.losses + self.ties

    @property
    def percentage(self) -> int:
        """Win percentage, rounded down, 0-100."""
        return (self.wins * 100) // self.trials

    @property
    def win_rate(self) -> float:
        return self.wins / self.trials

    @property
    def split_rate(self) -> float:
        return self.splits / self.trials

    def record(self, outcome: Outcome) -> None:
        if outcome is Outcome.LOSS:
            self.losses += 1
        else:
            self.wins += 1
            if outcome is Outcome.TIE:
                self.splits += 1

    def __add__(self, other: "SimulationResult") -> "SimulationResult":
        return SimulationResult(
            wins=self.wins + other.wins,
            losses=self.losses + other.losses,
            ties=self.ties + other.ties,
            splits=self.splits + other.splits,
        )


def _hand_key(hand: Hand, board: list[Card], ranking: str):
    """Comparable strength key, higher is better."""
    if ranking == "standard":
        # treys ranks lower-is-better
        return -standard_rank(hand, board)
    return evaluate_hand(hand, board)


def run_trials(
    player_hand: Hand,
    community: Sequence[Card],
    num_players: int,
    num_trials: int,
    complete_board: bool = True,
    ranking: str = "reference",
    seed: Seed = None,
) -> SimulationResult:
    """
    Run one batch of trials with its own generator.

    Module-level so it can be shipped to worker processes.
    """
    rng = np.random.default_rng(seed)
    deck = Deck(rng)
    community = list(community)
    known = card_mask([*player_hand.cards, *community])
    missing = BOARD_SIZE - len(community) if complete_board else 0

    result = SimulationResult()
    for _ in range(num_trials):
        deck.shuffle()

        opponents = [
            Hand(*deck.deal(HAND_SIZE, skip=known))
            for _ in range(num_players - 1)
        ]
        board = community + deck.deal(missing, skip=known) if missing else community

        player_key = _hand_key(player_hand, board, ranking)
        opponent_keys = [_hand_key(h, board, ranking) for h in opponents]
        result.record(resolve(player_key, opponent_keys).outcome)

    return result


class EquityCalculator:
    """
    Monte Carlo win probability against random opponent hands.

    Trials are split into batches, each seeded from a child of one
    SeedSequence, so a fixed seed gives the same counts whatever the
    number of workers.
    """

    def __init__(self, config: Optional[EquityConfig] = None):
        self.config = config or EquityConfig()

    def simulate(
        self,
        player_hand: Hand,
        community: Sequence[Card],
        num_players: int,
        seed: Seed = None,
    ) -> SimulationResult:
        """
        Simulate trials and return raw counters.

        Args:
            player_hand: Hero's hole cards
            community: Known community cards (0, 3, 4 or 5)
            num_players: Players at the table including hero (2-6)
            seed: Seed for reproducible results

        Returns:
            SimulationResult summed over all completed batches
        """
        community = list(community)
        if len(community) not in VALID_BOARD_SIZES:
            raise ValueError(f"Board must have 0, 3, 4 or 5 cards, got {len(community)}")
        if len(set([*player_hand.cards, *community])) != HAND_SIZE + len(community):
            raise ValueError("Duplicate cards detected")

        cfg = self.config
        sizes = cfg.batches()
        seed_seq = seed if isinstance(seed, np.random.SeedSequence) else np.random.SeedSequence(seed)
        children = seed_seq.spawn(len(sizes))
        deadline = time.monotonic() + cfg.time_limit if cfg.time_limit else None

        logger.debug(
            "Simulating %d trials in %d batches (%d workers) for %s on [%s]",
            cfg.num_trials, len(sizes), cfg.workers, player_hand,
            " ".join(str(c) for c in community),
        )

        args = [
            (player_hand, community, num_players, size, cfg.complete_board, cfg.ranking, child)
            for size, child in zip(sizes, children)
        ]
        if cfg.workers == 1:
            result = self._run_serial(args, deadline)
        else:
            result = self._run_pool(args, deadline)

        logger.debug(
            "Simulated %d trials: %d wins (%d split), %d losses",
            result.trials, result.wins, result.splits, result.losses,
        )
        return result

    def _run_serial(self, args: list[tuple], deadline: Optional[float]) -> SimulationResult:
        result = SimulationResult()
        for i, batch in enumerate(args):
            result = result + run_trials(*batch)
            if deadline is not None and time.monotonic() > deadline and i + 1 < len(args):
                logger.warning(
                    "Time limit reached after %d of %d batches", i + 1, len(args)
                )
                break
        return result

    def _run_pool(self, args: list[tuple], deadline: Optional[float]) -> SimulationResult:
        result = SimulationResult()
        with ProcessPoolExecutor(max_workers=self.config.workers) as ex:
            futures = [ex.submit(run_trials, *batch) for batch in args]
            done = 0
            for future in as_completed(futures):
                result = result + future.result()
                done += 1
                if deadline is not None and time.monotonic() > deadline and done < len(futures):
                    cancelled = sum(f.cancel() for f in futures)
                    logger.warning(
                        "Time limit reached after %d of %d batches, cancelled %d",
                        done, len(futures), cancelled,
                    )
                    break
        return result

    def win_probability(
        self,
        player_hand: Hand,
        community: Sequence[Card],
        num_players: int,
        seed: Seed = None,
    ) -> int:
        """Win percentage, 0-100."""
        return self.simulate(player_hand, community, num_players, seed).percentage


def estimate_win_probability(
    player_hand: Hand,
    community: Sequence[Card],
    num_players: int,
    config: Optional[EquityConfig] = None,
    seed: Seed = None,
) -> int:
    """
    Estimate the percentage of hands in which no opponent beats the player.

    Args:
        player_hand: Hero's hand
        community: Known community cards (0, 3, 4 or 5)
        num_players: Players at the table including hero (2-6)
        config: Simulator configuration
        seed: Seed for reproducible results

    Returns:
        Win percentage, rounded down (0-100)
    """
    return EquityCalculator(config).win_probability(
        player_hand, community, num_players, seed
    )
