"""
Built-in Variant Definitions

Each variant is a plain mapping in the VariantConfig shape. They are validated
by the loader the first time they are resolved, exactly like custom variants.

Variants:
    - american: 8x8, 12 pieces, men capture forward only, short kings
    - brazilian: 8x8, 12 pieces, international rules on the small board
    - international: 10x10, 20 pieces, FMJD rules
    - canadian: 12x12, 30 pieces, international rules on the large board

Captures that pass through the promotion row follow the FMJD reading for the
flying-king variants: the man does not promote and keeps capturing. In
American checkers reaching the king row ends the move.
"""

from typing import Any, Dict

# fmt: off
AMERICAN: Dict[str, Any] = {
    "metadata": {
        "name": "american",
        "display_name": "American Checkers",
        "description": "Standard 8×8 checkers with mandatory captures and short-range kings. Also known as English Draughts.",
        "origin": "United States",
        "aliases": ["English Draughts", "Straight Checkers"],
        "popularity": "common",
        "official_rules": {
            "organization": "World Checkers/Draughts Federation (WCDF)",
            "last_updated": "2023-01-01",
            "version": "2023.1",
        },
    },
    "board": {
        "size": 8,
        "piece_count": 12,
        "starting_rows": {"black": [0, 1, 2], "red": [5, 6, 7]},
        "coordinates": {"show_numbers": True, "show_letters": True},
    },
    "movement": {
        "regular_pieces": {
            "directions": {"red": "forward", "black": "forward"},
            "can_capture_backward": False,
            "can_move_backward": False,
        },
        "kings": {"can_fly": False, "can_capture_backward": True},
    },
    "capture": {
        "mandatory": True,
        "require_maximum": False,
        "king_priority": False,
        "chain_captures": True,
        "capture_direction": {"regular": "all", "king": "all"},
        "promotion": {"during_capture": False, "stops_capture_chain": True},
    },
    "promotion": {"to_opposite_end": True, "immediate_effect": True},
    "draws": {
        "forty_move_rule": True,
        "twenty_five_move_rule": False,
        "repetition_limit": 3,
        "insufficient_material": True,
        "stale_mate": True,
    },
    "tournament": {
        "touch_move": True,
        "time_controls": {
            "enabled": True,
            "blitz": {"base_time": 5, "increment": 3},
            "rapid": {"base_time": 15, "increment": 5},
            "classical": {"base_time": 60, "increment": 0},
        },
        "notation": {"required": True, "format": "algebraic"},
        "opening_restrictions": {"three_move": True},
        "official_compliance": {"wcdf": True, "fmjd": False},
    },
    "schema_version": "1.0.0",
}

BRAZILIAN: Dict[str, Any] = {
    "metadata": {
        "name": "brazilian",
        "display_name": "Brazilian Draughts",
        "description": "International draughts rules on an 8×8 board: men capture backward, kings fly, and the longest capture is mandatory.",
        "origin": "Brazil",
        "aliases": ["Brazilian Checkers", "Damas Brasileiras"],
        "popularity": "regional",
        "official_rules": {
            "organization": "Confederação Brasileira de Damas (CBD)",
            "last_updated": "2023-01-01",
            "version": "2023.1",
        },
    },
    "board": {
        "size": 8,
        "piece_count": 12,
        "starting_rows": {"black": [0, 1, 2], "red": [5, 6, 7]},
        "coordinates": {"show_numbers": True, "show_letters": True},
    },
    "movement": {
        "regular_pieces": {
            "directions": {"red": "forward", "black": "forward"},
            "can_capture_backward": True,
            "can_move_backward": False,
        },
        "kings": {"can_fly": True, "can_capture_backward": True},
    },
    "capture": {
        "mandatory": True,
        "require_maximum": True,
        "king_priority": True,
        "chain_captures": True,
        "capture_direction": {"regular": "all", "king": "all"},
        "promotion": {"during_capture": False, "stops_capture_chain": False},
    },
    "promotion": {"to_opposite_end": True, "immediate_effect": True},
    "draws": {
        "forty_move_rule": False,
        "twenty_five_move_rule": True,
        "repetition_limit": 3,
        "insufficient_material": True,
        "stale_mate": True,
    },
    "tournament": {
        "touch_move": True,
        "time_controls": {
            "enabled": True,
            "blitz": {"base_time": 5, "increment": 3},
            "rapid": {"base_time": 15, "increment": 5},
            "classical": {"base_time": 60, "increment": 0},
        },
        "notation": {"required": True, "format": "algebraic"},
        "official_compliance": {"wcdf": False, "fmjd": True},
    },
    "schema_version": "1.0.0",
}

INTERNATIONAL: Dict[str, Any] = {
    "metadata": {
        "name": "international",
        "display_name": "International Draughts",
        "description": "Official 10×10 draughts with 20 pieces per player, flying kings, and FMJD tournament rules.",
        "origin": "Netherlands/France",
        "aliases": ["International Checkers", "Polish Draughts", "Continental Draughts"],
        "popularity": "common",
        "official_rules": {
            "organization": "Fédération Mondiale du Jeu de Dames (FMJD)",
            "last_updated": "2023-03-15",
            "version": "2023.1",
        },
    },
    "board": {
        "size": 10,
        "piece_count": 20,
        "starting_rows": {"black": [0, 1, 2, 3], "red": [6, 7, 8, 9]},
        "coordinates": {"show_numbers": True, "show_letters": False},
    },
    "movement": {
        "regular_pieces": {
            "directions": {"red": "forward", "black": "forward"},
            "can_capture_backward": True,
            "can_move_backward": False,
        },
        "kings": {"can_fly": True, "can_capture_backward": True},
    },
    "capture": {
        "mandatory": True,
        "require_maximum": True,
        "king_priority": True,
        "chain_captures": True,
        "capture_direction": {"regular": "all", "king": "all"},
        "promotion": {"during_capture": False, "stops_capture_chain": False},
    },
    "promotion": {"to_opposite_end": True, "immediate_effect": True},
    "draws": {
        "forty_move_rule": False,
        "twenty_five_move_rule": True,
        "repetition_limit": 3,
        "insufficient_material": True,
        "stale_mate": True,
        "custom_draw_conditions": [
            "King vs King",
            "King vs King + 1 piece if no progress in 16 moves",
            "King vs King + 2 pieces if no progress in 32 moves",
        ],
    },
    "tournament": {
        "touch_move": True,
        "time_controls": {
            "enabled": True,
            "blitz": {"base_time": 5, "increment": 3},
            "rapid": {"base_time": 25, "increment": 5},
            "classical": {"base_time": 120, "increment": 0},
        },
        "notation": {"required": True, "format": "numeric"},
        "opening_restrictions": {
            "three_move": False,
            "custom_positions": ["official_opening_1", "official_opening_2"],
        },
        "official_compliance": {"wcdf": False, "fmjd": True},
    },
    "schema_version": "1.0.0",
}

CANADIAN: Dict[str, Any] = {
    "metadata": {
        "name": "canadian",
        "display_name": "Canadian Checkers",
        "description": "12×12 board with 30 pieces per player; flying kings and backward captures allowed.",
        "origin": "Canada",
        "aliases": ["Canadian Draughts"],
        "popularity": "regional",
        "official_rules": {
            "organization": "Regional Federations",
            "last_updated": "2023-01-01",
            "version": "2023.1",
        },
    },
    "board": {
        "size": 12,
        "piece_count": 30,
        "starting_rows": {"black": [0, 1, 2, 3, 4], "red": [7, 8, 9, 10, 11]},
        "coordinates": {"show_numbers": True, "show_letters": False},
    },
    "movement": {
        "regular_pieces": {
            "directions": {"red": "forward", "black": "forward"},
            "can_capture_backward": True,
            "can_move_backward": False,
        },
        "kings": {"can_fly": True, "can_capture_backward": True},
    },
    "capture": {
        "mandatory": True,
        "require_maximum": True,
        "king_priority": True,
        "chain_captures": True,
        "capture_direction": {"regular": "all", "king": "all"},
        "promotion": {"during_capture": False, "stops_capture_chain": False},
    },
    "promotion": {"to_opposite_end": True, "immediate_effect": True},
    "draws": {
        "forty_move_rule": False,
        "twenty_five_move_rule": True,
        "repetition_limit": 3,
        "insufficient_material": True,
        "stale_mate": True,
    },
    "tournament": {
        "touch_move": True,
        "time_controls": {
            "enabled": True,
            "blitz": {"base_time": 5, "increment": 3},
            "rapid": {"base_time": 25, "increment": 5},
            "classical": {"base_time": 120, "increment": 0},
        },
        "notation": {"required": True, "format": "numeric"},
        "official_compliance": {"wcdf": False, "fmjd": True},
    },
    "schema_version": "1.0.0",
}
# fmt: on

BUILT_IN_VARIANTS: Dict[str, Dict[str, Any]] = {
    "american": AMERICAN,
    "brazilian": BRAZILIAN,
    "international": INTERNATIONAL,
    "canadian": CANADIAN,
}
