"""
Ninja Slayer TRPG dice commands.

Commands:
- NJ: normal check, rewritten to a B roll (``NJ4@H`` -> ``4B6>=5``)
- EV: evasion check, reports a counter-strike when the defender out-rolls
  the attacker's success count
- AT: melee attack, reports a brutal hit on two or more sixes
- EL: electronic warfare, each six adds a bonus success
- SB: Satsubatsu table

Difficulty is written as ``[X]`` or ``@X`` where X is 2-6 or one of
K(2) E(3) N(4) H(5) UH(6). Omitted difficulty is NORMAL (4).
"""

import re
from abc import abstractmethod

from pydantic import BaseModel, ConfigDict, Field

from njdice.config.logging import get_logger
from njdice.dice.barabara import RESULT_SEPARATOR, BarabaraDice, RollResult, parse_number
from njdice.dice.table import DiceTable
from njdice.game_system.base import GameSystem

logger = get_logger(__name__)

DEFAULT_DIFFICULTY = 4

# Face value of a six-sided die that triggers brutal hits and EL bonuses
MAX_FACE = 6

DIFFICULTY_SYMBOL_TO_INTEGER = {
    "K": 2,
    "E": 3,
    "N": 4,
    "H": 5,
    "UH": 6,
}

# Only the difficulty token is case-insensitive; command prefixes are not.
# Patterns are ASCII-only so full-width digits and letters never match.
DIFFICULTY_VALUE_RE = r"(?i:UH|[2-6KENH])"
DIFFICULTY_RE = rf"(?:\[({DIFFICULTY_VALUE_RE})\]|@({DIFFICULTY_VALUE_RE}))"

NJ_RE = re.compile(rf"(S)?NJ(\d+){DIFFICULTY_RE}?", re.ASCII)
EV_RE = re.compile(rf"EV(\d+){DIFFICULTY_RE}?(?:/(\d+))?", re.ASCII)
AT_RE = re.compile(rf"AT(\d+){DIFFICULTY_RE}?", re.ASCII)
EL_RE = re.compile(rf"EL(\d+){DIFFICULTY_RE}?", re.ASCII)

COUNTER_STRIKE = "counter-strike"
BRUTAL_HIT = "brutal hit"


class InvalidDifficultyError(ValueError):
    """Raised for a difficulty token outside 2-6 and K/E/N/H/UH."""


def resolve_difficulty(token: str | None) -> int:
    """
    Convert a difficulty token to its threshold.

    Args:
        token: ``"2"``-``"6"``, ``"K"``, ``"E"``, ``"N"``, ``"H"``, ``"UH"``
               (any case), or None

    Returns:
        Threshold in [2, 6]; 4 when token is None.

    Raises:
        InvalidDifficultyError: If the token is not a known difficulty
    """
    if token is None:
        return DEFAULT_DIFFICULTY

    if re.fullmatch(r"[2-6]", token):
        return int(token)

    try:
        return DIFFICULTY_SYMBOL_TO_INTEGER[token.upper()]
    except KeyError:
        raise InvalidDifficultyError(f"Unknown difficulty: {token!r}") from None


def b_roll_command(num: int, difficulty: int) -> str:
    """Build the B roll that counts dice meeting the difficulty."""
    return f"{num}B6>={difficulty}"


class CheckNode(BaseModel):
    """Parsed dice check: dice count and resolved difficulty."""

    num: int = Field(gt=0, description="Number of six-sided dice rolled")
    difficulty: int = Field(ge=2, le=6, description="Minimum face counted as a success")

    model_config = ConfigDict(frozen=True)

    @property
    def command(self) -> str:
        return b_roll_command(self.num, self.difficulty)

    @abstractmethod
    def annotate(self, roll_result: RollResult) -> str:
        """Format the roll, appending this check's narrative annotation if triggered."""
        pass


class Evasion(CheckNode):
    """EV: evasion check against an optional attacker success count."""

    target_value: int | None = Field(
        None, ge=0, description="Attacker's success count, if given"
    )

    def annotate(self, roll_result: RollResult) -> str:
        parts = [roll_result.text]
        # Ties do not trigger a counter-strike
        if self.target_value is not None and roll_result.success_num > self.target_value:
            parts.append(COUNTER_STRIKE)
        return RESULT_SEPARATOR.join(parts)


class MeleeAttack(CheckNode):
    """AT: melee attack."""

    def annotate(self, roll_result: RollResult) -> str:
        parts = [roll_result.text]
        if roll_result.last_dice_list.count(MAX_FACE) >= 2:
            parts.append(BRUTAL_HIT)
        return RESULT_SEPARATOR.join(parts)


class ElectronicWarfare(CheckNode):
    """EL: electronic warfare; every six counts as one extra success."""

    def annotate(self, roll_result: RollResult) -> str:
        values = roll_result.last_dice_list
        num_of_max_values = values.count(MAX_FACE)
        if num_of_max_values == 0:
            return roll_result.text

        sum_of_true_values = sum(1 for v in values if v >= self.difficulty)
        return RESULT_SEPARATOR.join([
            f"{roll_result.text} + {num_of_max_values}",
            str(sum_of_true_values + num_of_max_values),
        ])


def _difficulty_of(m: re.Match, index: int) -> int:
    """Resolve the difficulty from the ``[X]`` / ``@X`` group pair starting at index."""
    return resolve_difficulty(m.group(index) or m.group(index + 1))


def parse_ev(m: re.Match) -> Evasion:
    target_value = m.group(4)
    return Evasion(
        num=parse_number(m.group(1)),
        difficulty=_difficulty_of(m, 2),
        target_value=parse_number(target_value) if target_value is not None else None,
    )


def parse_at(m: re.Match) -> MeleeAttack:
    return MeleeAttack(num=parse_number(m.group(1)), difficulty=_difficulty_of(m, 2))


def parse_el(m: re.Match) -> ElectronicWarfare:
    return ElectronicWarfare(num=parse_number(m.group(1)), difficulty=_difficulty_of(m, 2))


# Checked in order; the first full match wins
PARSERS = (
    (EV_RE, parse_ev),
    (AT_RE, parse_at),
    (EL_RE, parse_el),
)


def parse(command: str) -> CheckNode | None:
    """
    Parse an EV, AT or EL command.

    Returns:
        The parsed node, or None if the command matches no grammar or rolls
        zero dice.

    Raises:
        TooManyRandsError: If a number in the command is too large to roll
    """
    for pattern, builder in PARSERS:
        m = pattern.fullmatch(command)
        if m is None:
            continue
        if parse_number(m.group(1)) == 0:
            logger.debug(f"Zero dice requested in {command!r}")
            return None
        return builder(m)
    return None


SATSUBATSU_TABLE = [
    '「死ねーッ！」腹部に強烈な一撃！　敵はくの字に折れ曲がり、ワイヤーアクションめいて吹っ飛んだ！：本来のダメージ+1ダメージを与える。敵は後方の壁または障害物に向かって、何マスでもまっすぐ弾き飛ばされる（他のキャラのいるマスは通過する）。壁または障害物に接触した時点で、敵はさらに1ダメージを受ける。敵はこの激突ダメージに対して改めて『回避判定』を行っても良い。',
    '「イヤーッ！」頭部への痛烈なカラテ！　眼球破壊もしくは激しい脳震盪が敵を襲う！：本来のダメージを与える。さらに敵の【ニューロン】と【ワザマエ】がそれぞれ1ずつ減少する（これによる最低値は1）。残虐ボーナスにより【万札】がD3発生。この攻撃を【カルマ：善】のキャラに対して行ってしまった場合、【DKK】がD3上昇する。',
    '「苦しみ抜いて死ぬがいい」急所を情け容赦なく破壊！：本来のダメージ+1ダメージを与える。耐え難い苦痛により、敵は【精神力】が-2され、【ニューロン】が1減少する（これによる最低値は1）。残虐ボーナスにより【万札】がD3発生。この攻撃を【カルマ：善】のキャラに対して行ってしまった場合、【DKK】がD3上昇する。',
    '「逃げられるものなら逃げてみよ」敵の脚を粉砕！：本来のダメージを与える。さらに敵の【脚力】がD3減少する（最低値は1）。残虐ボーナスにより【万札】がD3発生。この攻撃を【カルマ：善】のキャラに対して行ってしまった場合、【DKK】がD3上昇する。',
    '「これで手も足も出まい！」敵の両腕を切り飛ばした！　鮮血がスプリンクラーめいて噴き出す！：本来のダメージ+1ダメージを与える。さらに敵の【ワザマエ】と【カラテ】がそれぞれ2減少する（最低値は1）。残虐ボーナスにより【万札】がD3発生。この攻撃を【カルマ：善】のキャラに対して行ってしまった場合、【DKK】がD3上昇する。',
    '「イイイヤアアアアーーーーッ！」ヤリめいたチョップが敵の胸を貫通！　さらに心臓を掴み取り、握りつぶした！　ナムアミダブツ！：敵は残り【体力】に関係なく即死する。残虐ボーナスにより【万札】がD6発生。この攻撃を【カルマ：善】のキャラに対して行ってしまった場合、【DKK】がD6上昇する。',
]

TABLES = {
    "SB": DiceTable("Satsubatsu Table", "1D6", SATSUBATSU_TABLE),
}


class NinjaSlayer(GameSystem):
    """Ninja Slayer TRPG."""

    ID = "NinjaSlayer"
    NAME = "Ninja Slayer TRPG"
    HELP_MESSAGE = """\
- Normal check: NJ
  NJx[y] or NJx@y or NJx
  x = dice, y = difficulty (NORMAL(4) if omitted)
  e.g. NJ4@H  HARD difficulty, 4 dice
- Evasion: EV
  EVx[y]/z or EVx@y/z or EVx/z or EVx[y] or EVx@y or EVx
  x = dice, y = difficulty (NORMAL(4) if omitted), z = attacker's successes (optional)
  With z given, a counter-strike is reported when it triggers
  e.g. EV5/3  NORMAL difficulty, 5 dice, attacker scored 3 successes
- Melee attack: AT
  ATx[y] or ATx@y or ATx
  x = dice, y = difficulty (NORMAL(4) if omitted); brutal hits are reported
  e.g. AT6[H]  HARD difficulty, 6 dice
- Satsubatsu table: SB
- Electronic warfare: EL
  ELx[y] or ELx@y or ELx
  x = dice, y = difficulty (NORMAL(4) if omitted)
  e.g. EL6[H]  HARD difficulty, 6 dice

- Difficulty
  KIDS=K, EASY=E, NORMAL=N, HARD=H, ULTRA HARD=UH, or a number 2-6
"""

    PREFIXES = ("NJ", "EV", "AT", "EL", *TABLES)

    DEFAULT_CMP_OP = ">="
    DEFAULT_TARGET_NUMBER = DEFAULT_DIFFICULTY

    def change_text(self, command: str) -> str:
        """Rewrite an NJ command into its B roll; other commands pass through."""
        m = NJ_RE.fullmatch(command)
        if m is None:
            return command

        secret_flag = m.group(1) or ""
        return f"{secret_flag}{b_roll_command(parse_number(m.group(2)), _difficulty_of(m, 3))}"

    def eval_game_system_specific_command(self, command: str) -> str | None:
        logger.debug(f"{self.ID}: evaluating {command!r}")

        table = TABLES.get(command)
        if table is not None:
            return str(table.roll(self.randomizer))

        node = parse(command)
        if node is None:
            return None

        logger.debug(f"Parsed {command!r} as {node!r}")
        roll_result = BarabaraDice.eval(node.command, self.randomizer)
        return node.annotate(roll_result)
