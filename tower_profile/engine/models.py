from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional, Tuple

from .definitions import (
    ActivationBand,
    BlockSide,
    InstinctCategory,
    ShiftStrength,
    StackType,
    Timeframe,
    Trend,
)


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


# --- Reference data ---

class TypeDescription(FrozenModel):
    name: str
    pattern: str


class ArrowTargets(FrozenModel):
    integration: int
    disintegration: int


class ActivationLevel(FrozenModel):
    min_pct: int = Field(..., ge=0, le=100)
    name: str
    description: str


class DomainImpactText(FrozenModel):
    high: str
    low: str


class ReferenceTables(FrozenModel):
    version: str
    type_names: Dict[int, TypeDescription]
    foundation_weights: List[List[Dict[int, int]]] # [set][choice] -> {type_id: weight}
    wing_pairs: Dict[int, Tuple[int, int]] # (left wing, right wing)
    arrows: Dict[int, ArrowTargets]
    activation_weights: Dict[int, int] # colour category -> weight
    activation_levels: List[ActivationLevel]
    priority_domains: Dict[InstinctCategory, Tuple[str, str]]
    priority_bonus: int
    impact_threshold: int
    life_domains: Dict[str, str] # domain_id -> display name
    domain_sensitivity: Dict[int, Dict[str, int]] = Field(default_factory=dict)
    domain_impacts: Dict[int, Dict[str, DomainImpactText]]
    trajectory_labels: Dict[Trend, Dict[Timeframe, str]]


# --- Engine input ---

class SelectionSet(FrozenModel):
    """Canonical selections for one completed assessment."""
    foundation_choices: Tuple[int, ...] = ()
    building_block_choices: Tuple[BlockSide, ...] = ()
    color_selections: Tuple[int, ...] = ()
    detail_selections: Tuple[InstinctCategory, ...] = ()


# --- Engine output ---

class RankedType(FrozenModel):
    type_id: int
    score: int


class PrimaryTypeResult(FrozenModel):
    number: int = Field(..., ge=1, le=9)
    name: str
    confidence: int = Field(..., ge=0, le=100)
    scores: Dict[int, int]
    top_three: List[RankedType]


class InfluenceResult(FrozenModel):
    adjacent_type: int
    strength: ShiftStrength
    label: str


class MoodShiftResult(FrozenModel):
    integration_type: int
    disintegration_type: int
    integration_strength: ShiftStrength
    disintegration_strength: ShiftStrength


class ActivationDistribution(FrozenModel):
    healthy_pct: int
    average_pct: int
    unhealthy_pct: int


class ActivationResult(FrozenModel):
    activation_pct: int = Field(..., ge=0, le=100)
    distribution: ActivationDistribution
    counts: Dict[ActivationBand, int]
    dominant_band: ActivationBand
    secondary_band: ActivationBand
    level_name: str
    is_default: bool = False


class PriorityStackEntry(FrozenModel):
    category: InstinctCategory
    percentage: int


class PriorityFocusResult(FrozenModel):
    counts: Dict[InstinctCategory, int]
    percentages: Dict[InstinctCategory, int]
    stack: List[PriorityStackEntry]
    dominant: Optional[InstinctCategory] = None
    stack_type: StackType
    clarity: float


class LifeDomainEntry(FrozenModel):
    domain_id: str
    name: str
    activation_score: int = Field(..., ge=0, le=100)
    trend: Trend
    short_term_label: str
    medium_term_label: str
    long_term_label: str
    current_impact_text: str


class LifeDomainProfile(FrozenModel):
    domains: List[LifeDomainEntry]
    overall_activation: int
    primary_domains: List[str]


class ProfileResult(FrozenModel):
    primary_type: PrimaryTypeResult
    influence: Optional[InfluenceResult] = None
    mood_shift: Optional[MoodShiftResult] = None
    activation: ActivationResult
    priority_focus: PriorityFocusResult
    life_domains: LifeDomainProfile


# Custom Error Classes
class ReferenceDataError(ValueError):
    """Raised when the static reference tables are missing or inconsistent."""
    pass


class InvalidActionError(ValueError):
    """Raised when an assessment-state action cannot be applied."""
    pass
