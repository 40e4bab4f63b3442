"""
Variant Configuration Schema

This module declares the rules contract every variant is described by. A
variant is pure data: the move generator, applier and draw detector read
these fields and contain no variant-specific branches.

Key Components:
    - VariantConfig: complete, frozen description of a variant
    - validate_config_with_errors: structural validation with field-path errors

Serialization:
    Python attributes are snake_case; the JSON form uses camelCase aliases
    (boardSize -> board.size, canCaptureBackward, ...). Both spellings are
    accepted on input. Unknown keys are ignored.
"""

from dataclasses import dataclass, field
from typing import Annotated, Any, Dict, List, Literal, Optional, Tuple

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeInt,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    ValidationError,
    model_validator,
)
from pydantic.alias_generators import to_camel

SCHEMA_VERSION = "1.0.0"

Direction = Literal["forward", "backward", "all"]
Popularity = Literal["common", "regional", "rare"]
NotationFormat = Literal["algebraic", "numeric", "descriptive"]

# Scalars are type-checked, not coerced ("8" is not a board size)
StrictPositiveInt = Annotated[StrictInt, Field(gt=0)]


class SchemaModel(BaseModel):
    """Shared model settings: frozen, camelCase aliases, extra keys dropped."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


# ============================================================================
# Metadata
# ============================================================================

class OfficialRules(SchemaModel):
    organization: Optional[StrictStr] = None
    last_updated: Optional[StrictStr] = None
    version: Optional[StrictStr] = None


class VariantMetadata(SchemaModel):
    name: StrictStr = Field(..., min_length=1)
    display_name: StrictStr = Field(..., min_length=1)
    description: StrictStr
    origin: Optional[StrictStr] = None
    aliases: Optional[Tuple[str, ...]] = None
    popularity: Popularity = "regional"
    official_rules: Optional[OfficialRules] = None


# ============================================================================
# Board
# ============================================================================

class PieceSetup(SchemaModel):
    """Starting row numbers per color."""

    red: Tuple[NonNegativeInt, ...]
    black: Tuple[NonNegativeInt, ...]


class Coordinates(SchemaModel):
    show_numbers: StrictBool = False
    show_letters: StrictBool = False


class BoardConfig(SchemaModel):
    size: StrictInt = Field(..., ge=6, le=12)
    piece_count: StrictPositiveInt
    starting_rows: PieceSetup
    coordinates: Optional[Coordinates] = None

    @model_validator(mode="after")
    def _check_starting_rows(self) -> "BoardConfig":
        rows = self.starting_rows
        out_of_range = sorted(r for r in (*rows.red, *rows.black) if r >= self.size)
        if out_of_range:
            raise ValueError(
                f"starting rows {out_of_range} are outside a board of size {self.size}"
            )
        shared = sorted(set(rows.red) & set(rows.black))
        if shared:
            raise ValueError(f"starting rows {shared} are assigned to both colors")
        return self


# ============================================================================
# Movement / capture
# ============================================================================

class ColorDirections(SchemaModel):
    red: Direction
    black: Direction


class RegularPieceRules(SchemaModel):
    directions: ColorDirections
    can_capture_backward: StrictBool
    can_move_backward: StrictBool = False


class KingRules(SchemaModel):
    can_fly: StrictBool
    can_capture_backward: StrictBool
    max_distance: Optional[StrictPositiveInt] = None


class MovementRules(SchemaModel):
    regular_pieces: RegularPieceRules
    kings: KingRules


class CaptureDirection(SchemaModel):
    regular: Direction
    king: Literal["all"] = "all"


class CapturePromotion(SchemaModel):
    during_capture: StrictBool = False
    stops_capture_chain: StrictBool = True


class CaptureRules(SchemaModel):
    mandatory: StrictBool
    require_maximum: StrictBool
    king_priority: StrictBool
    chain_captures: StrictBool = True
    capture_direction: CaptureDirection
    promotion: CapturePromotion = CapturePromotion()


# ============================================================================
# Promotion / draws
# ============================================================================

class PromotionRows(SchemaModel):
    red: Optional[Tuple[NonNegativeInt, ...]] = None
    black: Optional[Tuple[NonNegativeInt, ...]] = None


class PromotionRules(SchemaModel):
    to_opposite_end: StrictBool = True
    custom_rows: Optional[PromotionRows] = None
    immediate_effect: StrictBool = True


class DrawRules(SchemaModel):
    forty_move_rule: StrictBool = False
    twenty_five_move_rule: StrictBool = False
    repetition_limit: StrictInt = Field(3, ge=1)
    insufficient_material: StrictBool = True
    stale_mate: StrictBool = True
    custom_draw_conditions: Optional[Tuple[str, ...]] = None


# ============================================================================
# Tournament (consumed by outer layers only)
# ============================================================================

class TimeControl(SchemaModel):
    base_time: StrictFloat
    increment: StrictFloat


class TimeControls(SchemaModel):
    enabled: StrictBool
    blitz: Optional[TimeControl] = None
    rapid: Optional[TimeControl] = None
    classical: Optional[TimeControl] = None


class NotationRules(SchemaModel):
    required: StrictBool = False
    format: NotationFormat = "algebraic"


class OpeningRestrictions(SchemaModel):
    three_move: StrictBool = False
    custom_positions: Optional[Tuple[str, ...]] = None


class OfficialCompliance(SchemaModel):
    wcdf: StrictBool = False
    fmjd: StrictBool = False


class TournamentRules(SchemaModel):
    touch_move: StrictBool = False
    time_controls: Optional[TimeControls] = None
    notation: NotationRules
    opening_restrictions: OpeningRestrictions = OpeningRestrictions()
    official_compliance: OfficialCompliance = OfficialCompliance()


# ============================================================================
# Complete variant
# ============================================================================

class VariantConfig(SchemaModel):
    """
    Complete description of a draughts variant.

    Instances are immutable; use model_copy(update=...) to derive a new one.
    """

    metadata: VariantMetadata
    board: BoardConfig
    movement: MovementRules
    capture: CaptureRules
    promotion: PromotionRules = PromotionRules()
    draws: DrawRules = DrawRules()
    tournament: Optional[TournamentRules] = None
    custom_rules: Optional[Dict[str, Any]] = None
    schema_version: StrictStr = SCHEMA_VERSION
    created_at: Optional[StrictStr] = None
    updated_at: Optional[StrictStr] = None

    def to_json_dict(self) -> Dict[str, Any]:
        """JSON-serializable camelCase form (inverse of model_validate)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


@dataclass
class ValidationOutcome:
    """Result of validate_config_with_errors."""

    valid: bool
    errors: List[str] = field(default_factory=list)
    data: Optional[VariantConfig] = None


def format_validation_errors(error: ValidationError) -> List[str]:
    """Render pydantic errors as "dotted.path: message" strings."""
    messages = []
    for item in error.errors():
        path = ".".join(str(part) for part in item["loc"])
        message = item["msg"]
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        messages.append(f"{path}: {message}" if path else message)
    return messages


def validate_config_with_errors(data: Any) -> ValidationOutcome:
    """
    Validate raw configuration data.

    Args:
        data: A VariantConfig, or a mapping in either snake_case or camelCase.
            Instances are dumped and validated again; model_copy(update=...)
            skips validation.

    Returns:
        ValidationOutcome with the parsed config when valid, otherwise the
        list of field-path error messages
    """
    if isinstance(data, VariantConfig):
        data = data.model_dump()
    try:
        config = VariantConfig.model_validate(data)
    except ValidationError as e:
        return ValidationOutcome(valid=False, errors=format_validation_errors(e))
    return ValidationOutcome(valid=True, data=config)


def validate_config(data: Any) -> bool:
    return validate_config_with_errors(data).valid
