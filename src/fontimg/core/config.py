"""Configuration management for font preview rendering."""

from pathlib import Path

import yaml
from PIL import ImageColor
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError, InvalidColorError
from .models import FontStyle, FontVariant


def validate_color(value: str, field_name: str = "color") -> str:
    """Validate a color specification using Pillow's color parser.

    Accepts anything ``PIL.ImageColor.getrgb`` understands: names such as
    ``"black"``, hex strings (``"#ff0000"``, ``"#ff000080"``) and
    ``rgb()``/``hsl()`` functions.
    """
    try:
        ImageColor.getrgb(value)
    except (ValueError, AttributeError) as e:
        raise InvalidColorError(f"{value} ({field_name})") from e
    return value


class RenderConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="FONTIMG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    """Font preview rendering configuration."""

    size: int = Field(48, ge=1, description="Base font size in points")
    style: str = Field("Regular", description="Font style (e.g. Regular, Bold Italic)")
    variant: str = Field("normal", description="Font variant")
    foreground: str = Field("black", description="Text color")
    background: str = Field("white", description="Background color")
    dpi: float = Field(100.0, gt=0.0, description="Output resolution in dots per inch")
    margin: float = Field(5.0, ge=0.0, description="Margin around the text in millimetres")
    template_path: Path | None = Field(None, description="Custom text template file")
    font_dirs: list[Path] = Field(
        default_factory=list, description="Font directories for the system font index"
    )

    @field_validator("style")
    @classmethod
    def validate_style(cls, v):
        from fontimg.fonts.utils import parse_style

        return str(parse_style(v, strict=True))

    @field_validator("variant")
    @classmethod
    def validate_variant(cls, v):
        return FontVariant.parse(v).value

    @field_validator("foreground")
    @classmethod
    def validate_foreground(cls, v):
        return validate_color(v, "foreground")

    @field_validator("background")
    @classmethod
    def validate_background(cls, v):
        return validate_color(v, "background")

    @field_validator("template_path")
    @classmethod
    def validate_template_path(cls, v):
        if v is not None and not Path(v).is_file():
            raise ValueError(f"template file not found: {v}")
        return v

    @property
    def font_style(self) -> FontStyle:
        from fontimg.fonts.utils import parse_style

        return parse_style(self.style)

    @property
    def font_variant(self) -> FontVariant:
        return FontVariant.parse(self.variant)

    def read_template(self) -> str | None:
        """Return the custom template text, or None for the built-in template."""
        if self.template_path is None:
            return None
        return Path(self.template_path).read_text(encoding="utf-8")

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> "RenderConfig":
        """Load configuration from YAML file."""
        return load_config_from_yaml(config_path, cls)

    @classmethod
    def from_env_and_yaml(
        cls, yaml_path: str | Path | None = None, env_file: str = ".env"
    ) -> "RenderConfig":
        """Load configuration from environment variables and optionally override with YAML."""
        if yaml_path and Path(yaml_path).exists():
            return cls.from_yaml(yaml_path)
        return cls(_env_file=env_file if Path(env_file).exists() else None)


def load_config_from_yaml(config_path: str | Path, config_class: type) -> BaseSettings:
    """Load configuration from YAML file."""
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            config_data = yaml.safe_load(f)

        if config_data is None:
            raise ConfigurationError(f"Empty configuration file: {config_path}")

        if issubclass(config_class, BaseSettings):
            # YAML values win; do not mix in a .env file
            class TempConfig(config_class):
                model_config = SettingsConfigDict(
                    env_file=None,
                    case_sensitive=False,
                    extra="ignore",
                )

            return TempConfig(**config_data)
        return config_class(**config_data)

    except ConfigurationError:
        raise
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e
    except Exception as e:
        raise ConfigurationError(f"Failed to load configuration: {e}") from e
