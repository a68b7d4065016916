from dataclasses import dataclass
from typing import Dict, Tuple


class TierConfigError(ValueError):
    pass


class UnknownDifficultyError(KeyError):
    pass


@dataclass(frozen=True)
class Tier:
    name: str
    grid_size: int
    palette: Tuple[str, ...]

    @property
    def pair_count(self) -> int:
        return (self.grid_size * self.grid_size) // 2

    @property
    def card_count(self) -> int:
        return self.pair_count * 2

    @property
    def label(self) -> str:
        return self.name.capitalize()


def _validate(tier: Tier) -> Tier:
    '''Reject tiers whose palette cannot fill the grid.'''
    if tier.grid_size < 2:
        raise TierConfigError(f"{tier.name}: grid size must be at least 2, got {tier.grid_size}")
    if len(set(tier.palette)) != len(tier.palette):
        raise TierConfigError(f"{tier.name}: palette contains duplicate symbols")
    if len(tier.palette) < tier.pair_count:
        raise TierConfigError(
            f"{tier.name}: needs {tier.pair_count} distinct symbols, palette has {len(tier.palette)}"
        )
    return tier


def build_tiers(*tiers: Tier) -> Dict[str, Tier]:
    table = {}
    for tier in tiers:
        if tier.name in table:
            raise TierConfigError(f"duplicate tier name: {tier.name}")
        table[tier.name] = _validate(tier)
    return table


_BASE = ("🌟", "🌙", "☀️", "🌎", "🌈", "⚡", "❄️", "🔥")
_WATER = ("🌊", "🍀", "🌸", "🍁")
_GARDEN = ("🌴", "🌵", "🌺", "🍄", "🌹", "🌻")

TIERS = build_tiers(
    Tier("easy", 4, _BASE),
    Tier("medium", 5, _BASE + _WATER),
    Tier("hard", 6, _BASE + _WATER + _GARDEN),
)

DEFAULT_DIFFICULTY = "easy"


def get_tier(difficulty: str) -> Tier:
    try:
        return TIERS[difficulty]
    except KeyError:
        raise UnknownDifficultyError(difficulty) from None
