# tower_profile/engine/definitions.py
# Closed vocabularies shared by the scoring stages.

import math
from enum import Enum
from typing import List, Sequence


TYPE_IDS = tuple(range(1, 10))
FOUNDATION_SET_COUNT = 9
FOUNDATION_CHOICE_COUNT = 3

# Returned when no foundation choices were made at all.
DEFAULT_PRIMARY_TYPE = 9


class BlockSide(str, Enum):
    LEFT = "left"
    RIGHT = "right"


class InstinctCategory(str, Enum):
    SELF_PRESERVATION = "sp"
    SOCIAL = "so"
    ONE_TO_ONE = "sx"


# Tie-break order for the priority stack.
INSTINCT_PRECEDENCE = (
    InstinctCategory.SELF_PRESERVATION,
    InstinctCategory.SOCIAL,
    InstinctCategory.ONE_TO_ONE,
)

INSTINCT_NAMES = {
    InstinctCategory.SELF_PRESERVATION: "Self-Preservation",
    InstinctCategory.SOCIAL: "Social",
    InstinctCategory.ONE_TO_ONE: "One-to-One",
}


class ActivationBand(str, Enum):
    HEALTHY = "healthy"
    AVERAGE = "average"
    UNHEALTHY = "unhealthy"


# Colour category index -> band. Order doubles as the severity tie-break.
ACTIVATION_BANDS = (
    ActivationBand.HEALTHY,
    ActivationBand.AVERAGE,
    ActivationBand.UNHEALTHY,
)


class ShiftStrength(str, Enum):
    STRONG = "strong"
    MODERATE = "moderate"


class StackType(str, Enum):
    DOMINANT = "dominant"
    BALANCED = "balanced"
    POLARIZED = "polarized"
    INTEGRATED = "integrated"


class Trend(str, Enum):
    DECLINING = "declining"
    STABLE = "stable"
    IMPROVING = "improving"


class Timeframe(str, Enum):
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


LIFE_DOMAIN_IDS = (
    "health-vitality",
    "career-purpose",
    "financial-abundance",
    "intimate-relationships",
    "family-harmony",
    "social-connection",
    "personal-growth",
    "spiritual-alignment",
)


def clamp_pct(value: float) -> float:
    """Clamps a derived percentage into [0, 100]."""
    return max(0.0, min(100.0, value))


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def apportion_percentages(counts: Sequence[int]) -> List[int]:
    """
    Largest-remainder split of 100 across counts. Leftover points go to the
    largest remainders, earlier positions first on ties. All-zero counts
    give all-zero percentages.
    """
    total = sum(counts)
    if total <= 0:
        return [0] * len(counts)
    shares = [100 * count // total for count in counts]
    remainders = [100 * count % total for count in counts]
    order = sorted(range(len(counts)), key=lambda i: (-remainders[i], i))
    for i in order[:100 - sum(shares)]:
        shares[i] += 1
    return shares
