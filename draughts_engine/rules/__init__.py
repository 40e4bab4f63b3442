"""
Rules Module

Configuration-driven draughts rules. A variant is described entirely by a
VariantConfig; no function in this package branches on a variant name.

Key Components:
    - schema: pydantic VariantConfig model and validation
    - loader: built-in / custom variant registry with a resolved-config cache
    - moves: move and capture generation, application, validation
    - draws: win and draw detection
    - GameRules: façade binding one configuration to the functions above

Data Flow:
    raw config → validate → resolve → GameRules → find_valid_moves /
    make_move → check_winner
"""

from draughts_engine.rules.draws import (
    DrawReason,
    DrawResult,
    DrawState,
    check_draw_conditions,
    check_winner,
    create_draw_state,
    serialize_board,
    update_draw_state,
)
from draughts_engine.rules.errors import ConfigError, InvalidConfigError, UnknownVariantError
from draughts_engine.rules.game_rules import GameRules, create_game_rules
from draughts_engine.rules.loader import (
    VariantRegistry,
    clear_cache,
    create_variant_template,
    export_variant,
    get_available_variants,
    import_variant,
    load_variant,
    register_custom_variant,
    validate_variant,
)
from draughts_engine.rules.moves import (
    find_valid_moves,
    get_capture_moves,
    get_valid_directions,
    make_move,
    validate_move,
)
from draughts_engine.rules.schema import VariantConfig, validate_config_with_errors

__all__ = [
    'ConfigError',
    'DrawReason',
    'DrawResult',
    'DrawState',
    'GameRules',
    'InvalidConfigError',
    'UnknownVariantError',
    'VariantConfig',
    'VariantRegistry',
    'check_draw_conditions',
    'check_winner',
    'clear_cache',
    'create_draw_state',
    'create_game_rules',
    'create_variant_template',
    'export_variant',
    'find_valid_moves',
    'get_available_variants',
    'get_capture_moves',
    'get_valid_directions',
    'import_variant',
    'load_variant',
    'make_move',
    'register_custom_variant',
    'serialize_board',
    'update_draw_state',
    'validate_config_with_errors',
    'validate_move',
    'validate_variant',
]
