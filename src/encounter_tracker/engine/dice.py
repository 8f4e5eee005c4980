"""Dice rolling for initiative and other d20 checks.

Rolls go through the d20 library. The tracker only ever needs a single d20
plus a flat modifier, but expressions are passed through unchanged so any
d20-notation roll works.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

import d20

from encounter_tracker.core.exceptions import DiceRollError
from encounter_tracker.core.logging import get_logger


logger = get_logger(__name__)


class RollType(StrEnum):
    """Types of d20 rolls."""

    NORMAL = "normal"
    ADVANTAGE = "advantage"
    DISADVANTAGE = "disadvantage"


@dataclass(frozen=True)
class RollResult:
    """Outcome of a dice roll.

    Attributes:
        expression: The expression as requested.
        total: The total result of the roll.
        dice: Kept die faces.
        modifier: Static modifier applied (total minus kept dice).
        natural: The kept d20 face, when the expression rolls a d20.
        roll_type: The type of roll performed.
    """

    expression: str
    total: int
    dice: list[int]
    modifier: int
    natural: int | None
    roll_type: RollType

    @property
    def is_critical(self) -> bool:
        return self.natural == 20

    @property
    def is_fumble(self) -> bool:
        return self.natural == 1


def format_modifier(modifier: int) -> str:
    """Render a modifier for an expression, e.g. ``+3`` or ``-1``."""
    return f"+{modifier}" if modifier >= 0 else str(modifier)


class DiceRoller:
    """Rolls dice through the d20 library.

    A seed makes the roll sequence reproducible.

    Example:
        >>> roller = DiceRoller(seed=42)
        >>> result = roller.roll("1d20+2")
        >>> 3 <= result.total <= 22
        True
    """

    def __init__(self, *, seed: int | None = None) -> None:
        """Initialize the dice roller.

        Args:
            seed: Optional random seed for reproducible rolls.
        """
        self._seed = seed
        if seed is not None:
            random.seed(seed)
        logger.debug("DiceRoller initialized", seed=seed)

    def roll(
        self,
        expression: str,
        *,
        roll_type: RollType = RollType.NORMAL,
    ) -> RollResult:
        """Roll dice according to the given expression.

        Args:
            expression: Dice expression (e.g., '1d20+5').
            roll_type: Advantage or disadvantage applies to the d20.

        Returns:
            RollResult for the roll.

        Raises:
            DiceRollError: If the expression is invalid.
        """
        if not expression or not expression.strip():
            raise DiceRollError("Empty dice expression", expression=expression)

        modified_expression = expression
        if roll_type == RollType.ADVANTAGE:
            modified_expression = expression.replace("1d20", "2d20kh1")
        elif roll_type == RollType.DISADVANTAGE:
            modified_expression = expression.replace("1d20", "2d20kl1")

        try:
            result: d20.RollResult = d20.roll(modified_expression)
        except d20.RollError as exc:
            raise DiceRollError(
                f"Invalid dice expression: {exc}",
                expression=expression,
            ) from exc

        dice_values, natural = self._extract_dice_values(result.expr)
        rolled = RollResult(
            expression=expression,
            total=result.total,
            dice=dice_values,
            modifier=result.total - sum(dice_values),
            natural=natural,
            roll_type=roll_type,
        )
        logger.debug("Dice rolled", expression=expression, total=result.total, natural=natural)
        return rolled

    def _extract_dice_values(self, expr: Any) -> tuple[list[int], int | None]:
        """Collect kept die faces and the first kept d20 face.

        Args:
            expr: The d20 expression tree.

        Returns:
            Kept die values and the natural d20, if any.
        """
        values: list[int] = []
        natural: int | None = None

        def traverse(node: Any) -> None:
            nonlocal natural
            if isinstance(node, d20.Dice):
                for die in node.values:
                    if die.kept:
                        values.append(die.number)
                        if natural is None and node.size == 20:
                            natural = die.number
            elif hasattr(node, "children"):
                for child in node.children:
                    traverse(child)

        traverse(expr)
        return values, natural

    def roll_d20(
        self,
        modifier: int = 0,
        *,
        roll_type: RollType = RollType.NORMAL,
    ) -> RollResult:
        """Roll a d20 plus a flat modifier.

        Args:
            modifier: Modifier added to the die.
            roll_type: Type of roll (normal, advantage, disadvantage).

        Returns:
            RollResult for the roll.
        """
        return self.roll(f"1d20{format_modifier(modifier)}", roll_type=roll_type)

    def roll_initiative(
        self,
        modifier: int,
        *,
        roll_type: RollType = RollType.NORMAL,
    ) -> RollResult:
        """Roll initiative.

        Args:
            modifier: Initiative modifier.
            roll_type: Type of roll (normal, advantage, disadvantage).

        Returns:
            RollResult for the roll.
        """
        return self.roll_d20(modifier, roll_type=roll_type)


# Module-level convenience roller
_default_roller: DiceRoller | None = None


def get_default_roller() -> DiceRoller:
    """Shared unseeded roller used when a caller does not supply one."""
    global _default_roller  # noqa: PLW0603
    if _default_roller is None:
        _default_roller = DiceRoller()
    return _default_roller


def roll(
    expression: str,
    *,
    roll_type: RollType = RollType.NORMAL,
) -> RollResult:
    """Convenience function to roll dice.

    Args:
        expression: Dice expression (e.g., '1d20+5').
        roll_type: Type of roll (normal, advantage, disadvantage).

    Returns:
        RollResult for the roll.

    Example:
        >>> result = roll("1d20+5")
        >>> print(result.total)
    """
    return get_default_roller().roll(expression, roll_type=roll_type)


__all__ = [
    "RollType",
    "RollResult",
    "DiceRoller",
    "format_modifier",
    "get_default_roller",
    "roll",
]
