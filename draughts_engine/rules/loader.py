"""
Variant Configuration Loader

Resolves variant names to validated, immutable VariantConfig objects.

Key Components:
    - VariantRegistry: built-in + custom variants with a resolved-config cache
    - Module-level functions (load_variant, register_custom_variant, ...)
      that delegate to a shared default registry

Resolution:
    Raw variant data is validated against the schema, then missing promotion
    rows are filled in with the far-edge defaults. Resolved configs are cached
    by name until clear_cache() or a re-registration invalidates them.

Thread Safety:
    The registry and its cache are guarded by a reentrant lock, so a single
    registry can be shared by search threads and request handlers.
"""

import json
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from draughts_engine.rules.errors import InvalidConfigError, UnknownVariantError
from draughts_engine.rules.schema import (
    SCHEMA_VERSION,
    PromotionRows,
    VariantConfig,
    validate_config_with_errors,
)
from draughts_engine.rules.utils import get_promotion_rows
from draughts_engine.rules.variants import BUILT_IN_VARIANTS
from draughts_engine.board.representation import PieceColor

logger = logging.getLogger(__name__)


@dataclass
class VariantValidation:
    """Validation report returned by validate_variant()."""

    valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class VariantSummary:
    """Lightweight description of a variant for menus and listings."""

    name: str
    display_name: str
    description: str
    board_size: int
    piece_count: int


def resolve_config(config: VariantConfig) -> VariantConfig:
    """Fill in defaults that depend on other fields (promotion rows)."""
    rows = get_promotion_rows(config)
    custom = PromotionRows(red=rows[PieceColor.RED], black=rows[PieceColor.BLACK])
    if config.promotion.custom_rows == custom:
        return config
    promotion = config.promotion.model_copy(update={"custom_rows": custom})
    return config.model_copy(update={"promotion": promotion})


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class VariantRegistry:
    """
    Registry of built-in and custom variants.

    Attributes:
        built_ins: Raw built-in variant data keyed by name
    """

    def __init__(self, built_ins: Optional[Dict[str, Dict[str, Any]]] = None):
        self.built_ins = dict(BUILT_IN_VARIANTS if built_ins is None else built_ins)
        self._custom: Dict[str, VariantConfig] = {}
        self._cache: Dict[str, VariantConfig] = {}
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_variant(self, name: str) -> VariantConfig:
        """
        Load a variant by name.

        Args:
            name: Built-in or registered custom variant name

        Returns:
            Resolved, immutable VariantConfig

        Raises:
            UnknownVariantError: If the name is neither built in nor registered
            InvalidConfigError: If a built-in definition fails validation
        """
        with self._lock:
            cached = self._cache.get(name)
            if cached is not None:
                return cached

            if name in self._custom:
                config = self._custom[name]
            elif name in self.built_ins:
                outcome = validate_config_with_errors(self.built_ins[name])
                if not outcome.valid:
                    raise InvalidConfigError(
                        f"Invalid configuration for variant {name}", outcome.errors
                    )
                config = outcome.data
            else:
                raise UnknownVariantError(name)

            resolved = resolve_config(config)
            self._cache[name] = resolved
            logger.debug(f"Resolved variant '{name}' ({resolved.board.size}x{resolved.board.size})")
            return resolved

    def load_variants(self, names: List[str]) -> Dict[str, VariantConfig]:
        return {name: self.load_variant(name) for name in names}

    def get_built_in_variants(self) -> List[str]:
        return list(self.built_ins)

    def get_available_variants(self) -> List[str]:
        with self._lock:
            return self.get_built_in_variants() + [
                name for name in self._custom if name not in self.built_ins
            ]

    def has_variant(self, name: str) -> bool:
        with self._lock:
            return name in self.built_ins or name in self._custom

    # ------------------------------------------------------------------
    # Custom variants
    # ------------------------------------------------------------------

    def register_custom_variant(self, name: str, config: Any) -> VariantConfig:
        """
        Validate and register a custom variant.

        A failed validation leaves the registry untouched. Re-registering a
        name replaces the previous definition and its cache entry.

        Args:
            name: Name to register under (must not shadow a built-in)
            config: VariantConfig or raw mapping (snake_case or camelCase)

        Returns:
            The resolved configuration

        Raises:
            InvalidConfigError: On validation failure or a built-in name clash
        """
        if name in self.built_ins:
            raise InvalidConfigError(f"Cannot override built-in variant {name}")

        outcome = validate_config_with_errors(config)
        if not outcome.valid:
            raise InvalidConfigError(f"Invalid configuration for variant {name}", outcome.errors)

        with self._lock:
            self._custom[name] = outcome.data
            self._cache.pop(name, None)
            logger.info(f"Registered custom variant '{name}'")
            return self.load_variant(name)

    def unregister_custom_variant(self, name: str) -> None:
        with self._lock:
            if self._custom.pop(name, None) is None:
                raise UnknownVariantError(name)
            self._cache.pop(name, None)

    def clear_cache(self) -> None:
        """Drop every resolved entry. Custom registrations are kept."""
        with self._lock:
            self._cache.clear()

    def preload_built_in_variants(self) -> None:
        self.load_variants(self.get_built_in_variants())

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    def get_variant_metadata(self, name: str) -> VariantSummary:
        config = self.load_variant(name)
        return VariantSummary(
            name=config.metadata.name,
            display_name=config.metadata.display_name,
            description=config.metadata.description,
            board_size=config.board.size,
            piece_count=config.board.piece_count,
        )

    def get_all_variant_metadata(self) -> List[VariantSummary]:
        return [self.get_variant_metadata(name) for name in self.get_available_variants()]

    # ------------------------------------------------------------------
    # Import / export
    # ------------------------------------------------------------------

    def export_variant(self, name: str) -> Dict[str, Any]:
        """Return the variant as a JSON-serializable camelCase dict."""
        return self.load_variant(name).to_json_dict()

    def import_variant(self, name: str, json_config: str) -> VariantConfig:
        """
        Register a variant from its JSON text.

        Raises:
            InvalidConfigError: If the text is not valid JSON or the document
                fails schema validation
        """
        try:
            data = json.loads(json_config)
        except json.JSONDecodeError as e:
            raise InvalidConfigError(
                f"Failed to import variant {name}: malformed JSON ({e.msg} at line {e.lineno}, column {e.colno})"
            ) from e
        return self.register_custom_variant(name, data)

    def create_variant_template(
        self,
        name: str,
        display_name: str,
        based_on: str = "american",
    ) -> VariantConfig:
        """
        Create a new variant definition copied from an existing one.

        The template is not registered; pass it to register_custom_variant().
        """
        if not self.has_variant(based_on):
            raise UnknownVariantError(based_on)
        base = self.load_variant(based_on)
        metadata = base.metadata.model_copy(
            update={
                "name": name,
                "display_name": display_name,
                "description": f"Custom variant based on {base.metadata.display_name}",
                "popularity": "rare",
                "official_rules": None,
            }
        )
        timestamp = _utc_timestamp()
        return base.model_copy(
            update={"metadata": metadata, "created_at": timestamp, "updated_at": timestamp}
        )

    def validate_variant(self, config: Any) -> VariantValidation:
        outcome = validate_config_with_errors(config)
        warnings = []
        if outcome.valid and outcome.data.schema_version != SCHEMA_VERSION:
            warnings.append(
                f"Schema version {outcome.data.schema_version} may not be fully "
                f"compatible with current version {SCHEMA_VERSION}"
            )
            logger.warning(warnings[-1])
        return VariantValidation(valid=outcome.valid, errors=outcome.errors, warnings=warnings)

    def __repr__(self) -> str:
        return (
            f"VariantRegistry(built_ins={len(self.built_ins)}, "
            f"custom={len(self._custom)}, cached={len(self._cache)})"
        )


# ============================================================================
# Default registry
# ============================================================================

default_registry = VariantRegistry()


def load_variant(name: str) -> VariantConfig:
    return default_registry.load_variant(name)


def load_variants(names: List[str]) -> Dict[str, VariantConfig]:
    return default_registry.load_variants(names)


def get_available_variants() -> List[str]:
    return default_registry.get_available_variants()


def get_built_in_variants() -> List[str]:
    return default_registry.get_built_in_variants()


def register_custom_variant(name: str, config: Any) -> VariantConfig:
    return default_registry.register_custom_variant(name, config)


def has_variant(name: str) -> bool:
    return default_registry.has_variant(name)


def get_variant_metadata(name: str) -> VariantSummary:
    return default_registry.get_variant_metadata(name)


def get_all_variant_metadata() -> List[VariantSummary]:
    return default_registry.get_all_variant_metadata()


def clear_cache() -> None:
    default_registry.clear_cache()


def preload_built_in_variants() -> None:
    default_registry.preload_built_in_variants()


def export_variant(name: str) -> Dict[str, Any]:
    return default_registry.export_variant(name)


def import_variant(name: str, json_config: str) -> VariantConfig:
    return default_registry.import_variant(name, json_config)


def create_variant_template(name: str, display_name: str, based_on: str = "american") -> VariantConfig:
    return default_registry.create_variant_template(name, display_name, based_on)


def validate_variant(config: Any) -> VariantValidation:
    return default_registry.validate_variant(config)
