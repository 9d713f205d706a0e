"""
simulation_runner.py – Automated headless matches against the opponent AI.

Runs N matches where a scripted policy stands in for the human player.
Nothing is rendered and no window is opened, so a batch of matches runs
as fast as the CPU allows and is fully reproducible from a seed.

Usage (from CLI):
    python main.py --simulate 50 --seed 7

Architecture:
    SimulationRunner builds a fresh Encounter per match and feeds it a
    fixed 60 FPS delta plus the ScriptedPlayer's intent.  No gameplay
    logic is duplicated; the Encounter does all resolution.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field

from settings import FPS, SIM_MAX_SECONDS
from entities.player import PlayerIntent
from systems.combat_system import Encounter, EventKind, FrameView
from entities.body import CombatantId
from utils.geometry import direction_between, distance

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════
#  Scripted player policy
# ══════════════════════════════════════════════════════════

@dataclass
class ScriptedPlayer:
    """Chase the opponent, aim at it, push when close, dash when far."""

    push_range: float = 120.0
    dash_range: float = 300.0

    def intent(self, view: FrameView) -> PlayerIntent:
        me, them = view.player, view.opponent
        ux, uy = direction_between(me.x, me.y, them.x, them.y)
        gap = distance(me.x, me.y, them.x, them.y)
        return PlayerIntent(
            move_x=ux,
            move_y=uy,
            aim_x=them.x,
            aim_y=them.y,
            force_push_requested=gap < self.push_range,
            force_dash_requested=gap > self.dash_range,
        )


# ══════════════════════════════════════════════════════════
#  Per-match result
# ══════════════════════════════════════════════════════════

@dataclass
class MatchResult:
    """Lightweight record for one simulated match."""
    match_number: int = 0
    seed: int | None = None
    winner: str = ""               # "player", "opponent", "draw" or "timeout"
    duration_sec: float = 0.0      # simulated, not wall-clock
    player_hits: int = 0           # blade hits landed by the player
    opponent_hits: int = 0         # blade hits landed by the opponent
    player_pushes: int = 0         # push ticks applied by the player
    opponent_pushes: int = 0
    state_transitions: int = 0
    final_personality: dict[str, float] = field(default_factory=dict)


# ══════════════════════════════════════════════════════════
#  Simulation Runner
# ══════════════════════════════════════════════════════════

class SimulationRunner:
    """Run *n_matches* headless scripted-player-vs-AI matches.

    Parameters
    ----------
    n_matches : int
        How many matches to run.
    seed : int | None
        Base seed; match *i* uses ``seed + i``.  None draws fresh seeds.
    max_seconds : float
        Simulated time cap per match.
    """

    def __init__(self, n_matches: int = 10, seed: int | None = None,
                 max_seconds: float = SIM_MAX_SECONDS,
                 policy: ScriptedPlayer | None = None) -> None:
        self._n_matches = max(1, n_matches)
        self._seed = seed
        self._max_seconds = max_seconds
        self._policy = policy or ScriptedPlayer()
        self._results: list[MatchResult] = []

    @property
    def results(self) -> list[MatchResult]:
        return list(self._results)

    # ── Public entry point ────────────────────────────────

    def run(self) -> list[MatchResult]:
        """Execute all N matches, then print and return results."""
        seeder = random.Random(self._seed)
        for i in range(1, self._n_matches + 1):
            match_seed = (self._seed + i if self._seed is not None
                          else seeder.randrange(2 ** 31))
            logger.info("=== Simulation match %d / %d ===", i, self._n_matches)
            result = self.run_match(i, match_seed)
            self._results.append(result)
            logger.info(
                "Match %d: winner=%s  dur=%.1fs  hits=%d/%d  pushes=%d/%d  transitions=%d",
                i, result.winner, result.duration_sec,
                result.player_hits, result.opponent_hits,
                result.player_pushes, result.opponent_pushes,
                result.state_transitions,
            )
        self._print_summary()
        return self._results

    # ── Single match ──────────────────────────────────────

    def run_match(self, match_number: int, seed: int | None) -> MatchResult:
        encounter = Encounter(seed=seed)
        result = MatchResult(match_number=match_number, seed=seed)
        delta_ms = 1000.0 / FPS
        max_ms = self._max_seconds * 1000.0

        while not encounter.is_match_over():
            if encounter.elapsed_ms >= max_ms:
                logger.warning("Match %d timed out after %.0fs",
                               match_number, self._max_seconds)
                break
            intent = self._policy.intent(encounter.view())
            for event in encounter.tick(delta_ms, intent):
                self._count(result, event.kind, event.source)

        brain = encounter.opponent.brain
        result.winner = encounter.winner() or "timeout"
        result.duration_sec = encounter.elapsed_ms / 1000.0
        result.state_transitions = brain.transition_count
        result.final_personality = brain.personality.snapshot()
        return result

    @staticmethod
    def _count(result: MatchResult, kind: EventKind, source: CombatantId) -> None:
        by_player = source is CombatantId.PLAYER
        if kind is EventKind.MELEE_HIT:
            if by_player:
                result.player_hits += 1
            else:
                result.opponent_hits += 1
        elif kind is EventKind.FORCE_PUSH:
            if by_player:
                result.player_pushes += 1
            else:
                result.opponent_pushes += 1

    # ── Summary printout ──────────────────────────────────

    def _print_summary(self) -> None:
        n = len(self._results)
        if n == 0:
            print("\nNo matches completed.")
            return

        print(f"\n{'=' * 58}")
        print(f"  Simulation Results  ({n} matches)")
        print(f"{'=' * 58}")

        player_wins = sum(1 for r in self._results if r.winner == "player")
        opponent_wins = sum(1 for r in self._results if r.winner == "opponent")
        other = n - player_wins - opponent_wins

        print(f"\n  Player wins   : {player_wins:>4d}  ({100 * player_wins / n:.1f}%)")
        print(f"  Opponent wins : {opponent_wins:>4d}  ({100 * opponent_wins / n:.1f}%)")
        if other:
            print(f"  Other         : {other:>4d}  (draw / timeout)")

        avg_dur = sum(r.duration_sec for r in self._results) / n
        avg_p_hits = sum(r.player_hits for r in self._results) / n
        avg_o_hits = sum(r.opponent_hits for r in self._results) / n
        avg_trans = sum(r.state_transitions for r in self._results) / n
        print(f"\n  Avg match duration    : {avg_dur:.1f}s")
        print(f"  Avg hits (player/AI)  : {avg_p_hits:.1f} / {avg_o_hits:.1f}")
        print(f"  Avg state transitions : {avg_trans:.1f}")

        # ── Where the personalities drifted to ────────────
        print("\n  Avg final personality:")
        for trait in ("aggression", "caution", "prediction", "adaptability"):
            values = [r.final_personality.get(trait, 0.0) for r in self._results]
            print(f"    {trait:<14s}  {sum(values) / n:.3f}")

        print(f"\n{'=' * 58}\n")
