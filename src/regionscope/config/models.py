"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (REGIONSCOPE__SECTION__KEY)
3. Project YAML (.regionscope/config.yaml)
4. Global YAML (~/.config/regionscope/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    REGIONSCOPE__<SECTION>__<KEY>=<VALUE>

Examples:
    REGIONSCOPE__LOGGING__LEVEL=DEBUG
    REGIONSCOPE__SYNC__OUTLINE_DEBOUNCE_SEC=0.2
    REGIONSCOPE__OUTLINE__MODIFIER_DISPLAY=off
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
ModifierDisplayMode = Literal["off", "color_only", "color_and_description"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        REGIONSCOPE__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every parse and synthesis.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class PatternPairConfig(BaseModel):
    """One (start, end) boundary regex pair.

    The optional region title is captured by a group named ``name``, written
    either as ``(?P<name>...)`` or ``(?<name>...)``.
    """

    start: str = Field(description="Regex matching a region start line.")
    end: str = Field(description="Regex matching a region end line.")


class RegionsConfig(BaseModel):
    """Region parsing configuration.

    Env vars:
        REGIONSCOPE__REGIONS__PARSE_DEBOUNCE_SEC: Delay before reparsing after an edit
    """

    parse_debounce_sec: float = Field(
        default=0.1,
        ge=0,
        description="Debounce window before reparsing regions after a text change.",
    )
    overrides: dict[str, list[PatternPairConfig]] = Field(
        default_factory=dict,
        description="Per-language pattern pairs that REPLACE the built-in defaults.",
    )
    additions: dict[str, list[PatternPairConfig]] = Field(
        default_factory=dict,
        description="Per-language pattern pairs tried AFTER the defaults (or overrides).",
    )


class ModifiersConfig(BaseModel):
    """Symbol modifier extraction configuration.

    Env vars:
        REGIONSCOPE__MODIFIERS__CACHE_MAX_ENTRIES: Cache size that triggers eviction
        REGIONSCOPE__MODIFIERS__CACHE_EVICT_COUNT: Oldest entries dropped per eviction
    """

    cache_max_entries: int = Field(
        default=5000,
        gt=0,
        description="Eviction runs once the cache holds more than this many entries.",
    )
    cache_evict_count: int = Field(
        default=1000,
        gt=0,
        description="Number of oldest-inserted entries removed per eviction.",
    )


class OutlineConfig(BaseModel):
    """Full outline presentation configuration.

    Env vars:
        REGIONSCOPE__OUTLINE__MODIFIER_DISPLAY: off, color_only, color_and_description
        REGIONSCOPE__OUTLINE__USE_DISTINCT_MODIFIER_COLORS: Chart colors vs symbol colors
    """

    modifier_display: ModifierDisplayMode = Field(
        default="color_only",
        description="How symbol modifiers are surfaced. 'off' skips extraction entirely.",
    )
    use_distinct_modifier_colors: bool = Field(
        default=True,
        description="Use distinct chart colors for visibility instead of symbol icon colors.",
    )
    should_auto_highlight_active_item: bool = Field(
        default=True,
        description="Track the active outline item as the cursor moves.",
    )


class SyncConfig(BaseModel):
    """Outline synchronization configuration.

    Env vars:
        REGIONSCOPE__SYNC__OUTLINE_DEBOUNCE_SEC: Resynthesis debounce window
        REGIONSCOPE__SYNC__ACTIVE_ITEM_DEBOUNCE_SEC: Active item debounce window
        REGIONSCOPE__SYNC__SYMBOL_REFRESH_DEBOUNCE_SEC: Symbol provider debounce window
    """

    outline_debounce_sec: float = Field(
        default=0.1,
        ge=0,
        description="Debounce before merging regions and symbols after either changes.",
    )
    active_item_debounce_sec: float = Field(
        default=0.1,
        ge=0,
        description="Debounce before recomputing the active item after cursor moves.",
    )
    symbol_refresh_debounce_sec: float = Field(
        default=0.1,
        ge=0,
        description="Debounce before asking the symbol provider for fresh symbols.",
    )


class RegionScopeConfig(BaseModel):
    """Root configuration for RegionScope.

    All settings can be configured via:
    1. Environment variables: REGIONSCOPE__SECTION__KEY
    2. YAML config files (project or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    regions: RegionsConfig = Field(default_factory=RegionsConfig)
    modifiers: ModifiersConfig = Field(default_factory=ModifiersConfig)
    outline: OutlineConfig = Field(default_factory=OutlineConfig)
    sync: SyncConfig = Field(default_factory=SyncConfig)

    @model_validator(mode="after")
    def validate_cache_bounds(self) -> "RegionScopeConfig":
        if self.modifiers.cache_evict_count > self.modifiers.cache_max_entries:
            raise ValueError("modifiers.cache_evict_count cannot exceed cache_max_entries")
        return self
