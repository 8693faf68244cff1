"""Roll engine: evaluate a roll configuration into a result.

The engine only sees configuration values. It never touches the store that
owns them, and it never mutates what it is given.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from dicetray.dice import DiceError, DiceType, RandomSource

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

TIMESTAMP_FORMAT = "%H:%M:%S"


class RollConfig(Protocol):
    """Read-only shape the engine needs from a roll line."""

    @property
    def dice_count(self) -> int: ...

    @property
    def dice_type(self) -> DiceType: ...

    @property
    def modifier(self) -> int: ...


@dataclass(frozen=True)
class RollResult:
    """Outcome of one evaluation. Immutable once created."""

    rolls: tuple[int, ...]
    total: int
    modifier: int
    timestamp: str


def local_now() -> datetime:
    return datetime.now().astimezone()


_default_rng = random.Random()


def evaluate(
    config: RollConfig,
    *,
    rng: RandomSource | None = None,
    clock: Clock | None = None,
) -> RollResult:
    """Roll ``config.dice_count`` dice of ``config.dice_type`` sides and add the modifier.

    Args:
        config: Any object exposing dice_count, dice_type and modifier.
        rng: Random source; defaults to a module-level ``random.Random``.
        clock: Returns the evaluation time; defaults to local wall-clock time.

    Returns:
        A RollResult with one roll per die, each in [1, dice_type].

    Raises:
        DiceError: If the configuration breaks the contract (count < 1 or an
            unsupported die). Callers are expected to have validated already.
    """
    count = config.dice_count
    try:
        sides = DiceType(config.dice_type)
    except ValueError:
        raise DiceError(f"Unsupported die: d{config.dice_type}") from None
    if count < 1:
        raise DiceError(f"Dice count must be at least 1, got {count}")

    rng = rng or _default_rng
    clock = clock or local_now

    rolls = tuple(rng.randint(1, sides.value) for _ in range(count))
    total = sum(rolls) + config.modifier
    logger.debug("Rolled %dd%d%+d -> %s = %d", count, sides.value, config.modifier, rolls, total)
    return RollResult(
        rolls=rolls,
        total=total,
        modifier=config.modifier,
        timestamp=clock().strftime(TIMESTAMP_FORMAT),
    )


def evaluate_all(
    configs: Iterable[RollConfig],
    *,
    rng: RandomSource | None = None,
    clock: Clock | None = None,
) -> list[RollResult]:
    """Evaluate each configuration independently, in iteration order."""
    return [evaluate(config, rng=rng, clock=clock) for config in configs]
