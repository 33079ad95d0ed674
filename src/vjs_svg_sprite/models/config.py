"""Configuration models for the SVG sprite builder.

Defines Pydantic models for the icon configuration file, the sprite assembly
settings, the SVG optimizer pipelines and logging, together with the loaders
that turn JSON/YAML documents into those models.
"""

import copy
import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from vjs_svg_sprite.constants import (
    DEFAULT_EXAMPLE_DEST,
    DEFAULT_ID_GENERATOR,
    DEFAULT_ID_WHITESPACE,
    DEFAULT_INDENT,
    DEFAULT_MAX_DIMENSION,
    DEFAULT_SPRITE_DEST,
    DEFAULT_SPRITE_FILENAME,
    ICON_OPTIMIZER_CONFIG,
    SPRITE_OPTIMIZER_CONFIG,
    YAML_SUFFIXES,
)
from vjs_svg_sprite.exceptions import (
    ConfigFileNotFoundError,
    ConfigParseError,
    chain_exception,
)


def _normalize_path(path: str | Path) -> Path:
    """Convert a string path to a Path object.

    Internal utility function to avoid circular imports with path_resolver.

    Args:
        path: String or Path object

    Returns:
        A Path object.
    """
    return Path(path) if isinstance(path, str) else path


def format_validation_errors(error: ValidationError) -> list[str]:
    """Flatten pydantic validation errors into ``location: message`` strings."""
    return [
        f"{'.'.join(str(part) for part in err['loc']) or '<root>'}: {err['msg']}"
        for err in error.errors()
    ]


class _DuplicateKeyError(ValueError):
    """Raised by the JSON object hook when an object repeats a key."""


def _reject_duplicate_keys(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    """Build a dict from JSON object pairs, refusing repeated keys."""
    result: dict[str, Any] = {}
    for key, value in pairs:
        if key in result:
            raise _DuplicateKeyError(key)
        result[key] = value
    return result


def merge_override(defaults: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge an override document onto a defaults document.

    Nested mappings merge key by key; every other value (lists included)
    replaces the default outright. Neither input is modified.

    Args:
        defaults: Default document
        override: Values taking precedence

    Returns:
        A new merged document.
    """
    merged = copy.deepcopy(defaults)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_override(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


# Icon configuration file


class IconFile(BaseModel):
    """Icon entry given as an object with its own lookup directory."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    file: str = Field(min_length=1)
    root_dir: str | None = Field(default=None, alias="root-dir")


# A bare filename resolved against the top-level root-dir, or an IconFile
IconSource = str | IconFile


class SpriteConfig(BaseModel):
    """Icon configuration file mapping logical icon names to SVG sources."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    root_dir: str = Field(default=".", alias="root-dir")
    output_dir: str | None = Field(default=None, alias="output-dir")
    icons: dict[str, IconSource]

    @field_validator("icons")
    @classmethod
    def validate_icons(cls, v: dict[str, IconSource]) -> dict[str, IconSource]:
        """Validate icon names and bare filenames are not empty.

        Args:
            v: The icon mapping.

        Returns:
            The validated icon mapping.

        Raises:
            ValueError: If an icon name or filename is empty.
        """
        for name, source in v.items():
            if not name:
                raise ValueError("Icon names must not be empty")
            if isinstance(source, str) and not source:
                raise ValueError(f"Icon '{name}' has an empty file name")
        return v

    @classmethod
    def from_data(cls, data: Any, source: str | Path | None = None) -> "SpriteConfig":
        """Decode a parsed JSON document into a SpriteConfig.

        Args:
            data: Parsed JSON document.
            source: Optional file the document came from, used in error details.

        Returns:
            The decoded configuration.

        Raises:
            ConfigParseError: If the document does not have the expected shape.
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise chain_exception(
                ConfigParseError(
                    "Invalid icon configuration",
                    {"path": str(source), "errors": format_validation_errors(e)},
                ),
                e,
            ) from e


def parse_config_file(file_name: str | Path | None) -> SpriteConfig | None:
    """Parse the configuration file linking icon names to their files.

    Args:
        file_name: The path of the configuration file to parse.

    Returns:
        The decoded configuration, or None if no file name is provided.

    Raises:
        ConfigFileNotFoundError: If the file is missing or cannot be read.
        ConfigParseError: If the file is not valid JSON or has the wrong shape.
    """
    if not file_name:
        return None

    # Use direct import to avoid circular imports
    from vjs_svg_sprite.utils.file_utils import read_json

    path = _normalize_path(file_name)

    try:
        data = read_json(path, object_pairs_hook=_reject_duplicate_keys)
    except FileNotFoundError as e:
        raise chain_exception(
            ConfigFileNotFoundError(f"Configuration file not found: {path}", {"path": str(path)}),
            e,
        ) from e
    except json.JSONDecodeError as e:
        raise chain_exception(
            ConfigParseError(
                f"Configuration file is not valid JSON: {path}",
                {"path": str(path), "line": e.lineno, "column": e.colno, "error": e.msg},
            ),
            e,
        ) from e
    except _DuplicateKeyError as e:
        raise chain_exception(
            ConfigParseError(
                f"Configuration file repeats the key '{e}': {path}",
                {"path": str(path), "key": str(e)},
            ),
            e,
        ) from e
    except UnicodeDecodeError as e:
        raise chain_exception(
            ConfigParseError(f"Configuration file is not UTF-8: {path}", {"path": str(path)}),
            e,
        ) from e
    except OSError as e:
        raise chain_exception(
            ConfigFileNotFoundError(
                f"Configuration file cannot be read: {path}",
                {"path": str(path), "error": str(e)},
            ),
            e,
        ) from e

    return SpriteConfig.from_data(data, source=path)


def load_override_file(file_name: str | Path) -> dict[str, Any]:
    """Load an override document for one of the declarative configurations.

    Files ending in ``.yaml``/``.yml`` are parsed with PyYAML, everything
    else as JSON.

    Args:
        file_name: Path to the override file.

    Returns:
        The parsed document.

    Raises:
        ConfigFileNotFoundError: If the file is missing or cannot be read.
        ConfigParseError: If the file has invalid syntax or is not a mapping.
    """
    import yaml

    from vjs_svg_sprite.utils.file_utils import read_text

    path = _normalize_path(file_name)

    try:
        content = read_text(path)
    except FileNotFoundError as e:
        raise chain_exception(
            ConfigFileNotFoundError(f"Override file not found: {path}", {"path": str(path)}), e
        ) from e
    except (OSError, UnicodeDecodeError) as e:
        raise chain_exception(
            ConfigFileNotFoundError(
                f"Override file cannot be read: {path}", {"path": str(path), "error": str(e)}
            ),
            e,
        ) from e

    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            data = yaml.safe_load(content)
        else:
            data = json.loads(content)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise chain_exception(
            ConfigParseError(f"Override file has invalid syntax: {path}", {"path": str(path)}),
            e,
        ) from e

    if not isinstance(data, dict):
        raise ConfigParseError(
            f"Override file must contain a mapping: {path}",
            {"path": str(path), "type": type(data).__name__},
        )

    return data


# Sprite assembly configuration


class _CamelModel(BaseModel):
    """Base for models read from camelCase documents."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ExampleConfig(_CamelModel):
    """HTML preview page settings."""

    dest: str = DEFAULT_EXAMPLE_DEST
    template: str | None = None  # None selects the packaged template


class SymbolModeConfig(_CamelModel):
    """Settings of the <symbol> sprite output mode."""

    inline: bool = True
    sprite: str = DEFAULT_SPRITE_FILENAME
    dest: str = DEFAULT_SPRITE_DEST
    example: ExampleConfig | None = Field(default_factory=ExampleConfig)

    @field_validator("example", mode="before")
    @classmethod
    def validate_example(cls, v: Any) -> Any:
        """Accept booleans as shorthand for default or disabled preview pages.

        Args:
            v: Raw example value.

        Returns:
            A value pydantic can decode into ``ExampleConfig | None``.
        """
        if v is True:
            return {}
        if v is False:
            return None
        return v


class ModeConfig(_CamelModel):
    """Output modes of the sprite assembler."""

    symbol: SymbolModeConfig = Field(default_factory=SymbolModeConfig)


class ShapeIdConfig(_CamelModel):
    """Symbol ID generation."""

    generator: str = DEFAULT_ID_GENERATOR
    whitespace: str = DEFAULT_ID_WHITESPACE

    @field_validator("whitespace")
    @classmethod
    def validate_whitespace(cls, v: str) -> str:
        """Validate the whitespace replacement is usable in a fragment identifier."""
        if any(char.isspace() for char in v):
            raise ValueError("Whitespace replacement must not contain whitespace")
        return v

    @field_validator("generator")
    @classmethod
    def validate_generator(cls, v: str) -> str:
        """Validate the ID template has a placeholder for the icon name.

        Args:
            v: The ID template.

        Returns:
            The validated template.

        Raises:
            ValueError: If the template lacks exactly one ``%s``.
        """
        if v.count("%s") != 1:
            raise ValueError("ID generator must contain exactly one '%s' placeholder")
        return v


class DimensionConfig(_CamelModel):
    """Per-icon maximum size used for viewBox normalization."""

    max_width: float = Field(default=DEFAULT_MAX_DIMENSION, gt=0)
    max_height: float = Field(default=DEFAULT_MAX_DIMENSION, gt=0)


class ShapeConfig(_CamelModel):
    """Per-shape settings."""

    id: ShapeIdConfig = Field(default_factory=ShapeIdConfig)
    dimension: DimensionConfig = Field(default_factory=DimensionConfig)


class SvgOutputConfig(_CamelModel):
    """Markup flags of the emitted sprite."""

    xml_declaration: bool = False
    doctype_declaration: bool = False
    namespace_ids: bool = Field(default=True, alias="namespaceIDs")


class SpriteAssemblyConfig(_CamelModel):
    """Sprite assembly configuration in the shape of an svg-sprite config."""

    dest: str = "."
    mode: ModeConfig = Field(default_factory=ModeConfig)
    shape: ShapeConfig = Field(default_factory=ShapeConfig)
    svg: SvgOutputConfig = Field(default_factory=SvgOutputConfig)

    def with_output_dir(self, output_dir: str | None) -> "SpriteAssemblyConfig":
        """Return a copy whose symbol sprite is written to ``output_dir``.

        Args:
            output_dir: Replacement for ``mode.symbol.dest``; None keeps the current value.

        Returns:
            A new configuration; this one is left untouched.
        """
        if not output_dir:
            return self.model_copy(deep=True)
        updated = self.model_copy(deep=True)
        updated.mode.symbol.dest = output_dir
        return updated


# SVG optimizer configuration


class PluginSpec(BaseModel):
    """One optimizer plugin with its parameters."""

    name: str
    params: dict[str, Any] = Field(default_factory=dict)


class Js2SvgConfig(_CamelModel):
    """Serializer settings."""

    indent: int = Field(default=DEFAULT_INDENT, ge=0)
    pretty: bool = False
    final_newline: bool = False


class OptimizerConfig(BaseModel):
    """SVG optimizer pipeline in the shape of an svgo config."""

    plugins: list[PluginSpec] = Field(default_factory=list)
    js2svg: Js2SvgConfig = Field(default_factory=Js2SvgConfig)

    @field_validator("plugins", mode="before")
    @classmethod
    def validate_plugins(cls, v: Any) -> Any:
        """Accept bare plugin names as shorthand for plugins without parameters.

        Args:
            v: Raw plugin list.

        Returns:
            The plugin list with names expanded to ``{"name": ...}`` objects.
        """
        if isinstance(v, list):
            return [{"name": item} if isinstance(item, str) else item for item in v]
        return v


def default_icon_optimizer_config() -> OptimizerConfig:
    """Build the per-icon optimizer configuration."""
    return OptimizerConfig.model_validate(copy.deepcopy(ICON_OPTIMIZER_CONFIG))


def default_sprite_optimizer_config() -> OptimizerConfig:
    """Build the sprite-wide optimizer configuration."""
    return OptimizerConfig.model_validate(copy.deepcopy(SPRITE_OPTIMIZER_CONFIG))


# Logging configuration


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    file: str | None = None
    format: str = "console"
    max_size_mb: int = 5
    backup_count: int = 3
