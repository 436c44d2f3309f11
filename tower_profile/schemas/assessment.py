from typing import Any, Dict, List, Optional, Tuple
from pydantic import AliasChoices, BaseModel, Field

from tower_profile.engine.normalizer import FIELD_ALIASES


class ProfileRequest(BaseModel):
    # Raw phase selections; the engine's normalizer handles partial or odd shapes.
    # Null or missing lists fall back to the engine defaults.
    foundation_choices: Optional[List[Any]] = Field(
        default=None, validation_alias=AliasChoices(*FIELD_ALIASES["foundation_choices"]))
    building_block_choices: Optional[List[Any]] = Field(
        default=None, validation_alias=AliasChoices(*FIELD_ALIASES["building_block_choices"]))
    color_selections: Optional[List[Any]] = Field(
        default=None, validation_alias=AliasChoices(*FIELD_ALIASES["color_selections"]))
    detail_selections: Optional[List[Any]] = Field(
        default=None, validation_alias=AliasChoices(*FIELD_ALIASES["detail_selections"]))

class ReferenceSummary(BaseModel):
    version: str
    type_names: Dict[int, str]
    wing_pairs: Dict[int, Tuple[int, int]]
    arrows: Dict[int, Dict[str, int]]
