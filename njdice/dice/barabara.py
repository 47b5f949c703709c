"""
Generic success-counting dice roll ("B" roll).

Notation is one or more ``<times>B<sides>`` groups joined by ``+``, followed by
an optional comparison such as ``>=4``. Every die is kept separately and the
number of dice satisfying the comparison is reported as the success count.

Example result text for ``4B6>=4``:
    (4B6>=4) ＞ 2,5,6,1 ＞ Successes: 2
"""

import operator
import re
from typing import Callable

from pydantic import BaseModel, Field

from njdice.config.logging import get_logger
from njdice.dice.randomizer import Randomizer, TooManyRandsError

logger = get_logger(__name__)

# Separator between the stages of a result text
RESULT_SEPARATOR = " ＞ "

BARABARA_RE = re.compile(
    r"(\d+B\d+(?:\+\d+B\d+)*)(?:(>=|=>|<=|=<|<>|!=|>|<|=)(\d+))?",
    re.IGNORECASE | re.ASCII,
)

# Longest significant digit run converted to an int; larger counts exceed any draw limit
MAX_NUMBER_DIGITS = 18

# Aliases accepted on input, normalized before display
_OP_ALIASES = {"=>": ">=", "=<": "<=", "!=": "<>"}

COMPARE_OPS: dict[str, Callable[[int, int], bool]] = {
    ">=": operator.ge,
    "<=": operator.le,
    ">": operator.gt,
    "<": operator.lt,
    "=": operator.eq,
    "<>": operator.ne,
}


def parse_number(digits: str) -> int:
    """
    Convert a run of digits taken from a command.

    Raises:
        TooManyRandsError: If the number has more than MAX_NUMBER_DIGITS
                           significant digits
    """
    significant = digits.lstrip("0") or "0"
    if len(significant) > MAX_NUMBER_DIGITS:
        raise TooManyRandsError(
            f"Number too large in command ({len(significant)} digits)"
        )
    return int(significant)


class RollResult(BaseModel):
    """Outcome of a B roll."""

    text: str = Field(description="Formatted roll description")
    success_num: int = Field(ge=0, description="Number of dice meeting the comparison")
    dice_list: list[int] = Field(description="Every face rolled, in roll order")
    last_dice_list: list[int] = Field(description="Faces of the last dice group")


class BarabaraDice:
    """Evaluator for B roll notation."""

    @staticmethod
    def eval(
        command: str,
        randomizer: Randomizer,
        default_cmp_op: str | None = None,
        default_target_number: int | None = None,
    ) -> RollResult | None:
        """
        Roll a B roll command.

        Args:
            command: Notation such as ``"4B6>=4"`` or ``"2B6+3B10>5"``
            randomizer: Source of die faces
            default_cmp_op: Comparison used when the command has none
            default_target_number: Target used together with ``default_cmp_op``

        Returns:
            RollResult, or None if the command is not a valid B roll.
        """
        m = BARABARA_RE.fullmatch(command)
        if not m:
            return None

        groups = []
        for notation in m.group(1).upper().split("+"):
            times, sides = (parse_number(part) for part in notation.split("B"))
            if times == 0 or sides == 0:
                logger.debug(f"Rejecting empty dice group {notation!r} in {command!r}")
                return None
            groups.append((times, sides))

        cmp_op = m.group(2)
        target = parse_number(m.group(3)) if m.group(3) is not None else None
        if cmp_op is None and default_cmp_op is not None and default_target_number is not None:
            cmp_op, target = default_cmp_op, default_target_number
        if cmp_op is not None:
            cmp_op = _OP_ALIASES.get(cmp_op, cmp_op)

        dice_list_list = [randomizer.roll_barabara(times, sides) for times, sides in groups]
        dice_list = [value for values in dice_list_list for value in values]

        success_num = 0
        if cmp_op is not None:
            compare = COMPARE_OPS[cmp_op]
            success_num = sum(1 for value in dice_list if compare(value, target))

        notation = "+".join(f"{times}B{sides}" for times, sides in groups)
        if cmp_op is not None:
            notation = f"{notation}{cmp_op}{target}"

        parts = [
            f"({notation})",
            " ".join(",".join(str(v) for v in values) for values in dice_list_list),
        ]
        if cmp_op is not None:
            parts.append(f"Successes: {success_num}")

        return RollResult(
            text=RESULT_SEPARATOR.join(parts),
            success_num=success_num,
            dice_list=dice_list,
            last_dice_list=dice_list_list[-1],
        )
