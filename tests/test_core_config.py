"""
Unit tests for core configuration - Imperative style.

Tests configuration loading, validation, and defaults.
"""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from fontimg.core.config import RenderConfig, load_config_from_yaml, validate_color
from fontimg.core.exceptions import (
    ConfigurationError,
    InvalidColorError,
    InvalidStyleError,
    InvalidVariantError,
)
from fontimg.core.models import BOLD_ITALIC, REGULAR, FontVariant


class TestRenderConfig:
    """Test RenderConfig defaults and validation."""

    def test_render_config_defaults(self):
        """Test configuration defaults."""
        config = RenderConfig(_env_file=None)

        assert config.size == 48
        assert config.style == "Regular"
        assert config.variant == "normal"
        assert config.foreground == "black"
        assert config.background == "white"
        assert config.dpi == 100.0
        assert config.margin == 5.0
        assert config.template_path is None
        assert config.font_dirs == []
        assert config.font_style == REGULAR
        assert config.font_variant is FontVariant.NORMAL

    def test_render_config_normalizes_style(self):
        """Test that style names are normalized."""
        config = RenderConfig(style="bold-italic", _env_file=None)

        assert config.style == "Bold Italic"
        assert config.font_style == BOLD_ITALIC

    def test_render_config_invalid_style(self):
        """Test that unknown style names are rejected."""
        with pytest.raises(InvalidStyleError):
            RenderConfig(style="Wobbly", _env_file=None)

    def test_render_config_invalid_variant(self):
        """Test that unknown variants are rejected."""
        with pytest.raises(InvalidVariantError):
            RenderConfig(variant="outline", _env_file=None)

    def test_render_config_invalid_color(self):
        """Test that colors Pillow cannot parse are rejected."""
        with pytest.raises(InvalidColorError):
            RenderConfig(foreground="not-a-color", _env_file=None)

    def test_render_config_accepts_color_formats(self):
        """Test the color syntaxes understood by Pillow."""
        config = RenderConfig(foreground="#ff000080", background="rgb(10, 20, 30)", _env_file=None)

        assert config.foreground == "#ff000080"
        assert config.background == "rgb(10, 20, 30)"

    @pytest.mark.parametrize("field, value", [("size", 0), ("dpi", 0.0), ("margin", -1.0)])
    def test_render_config_numeric_bounds(self, field, value):
        """Test numeric field bounds."""
        with pytest.raises(ValidationError):
            RenderConfig(**{field: value}, _env_file=None)

    def test_render_config_missing_template(self, temp_dir):
        """Test that a missing template file is rejected."""
        with pytest.raises(ValidationError):
            RenderConfig(template_path=temp_dir / "missing.j2", _env_file=None)

    def test_read_template(self, temp_dir):
        """Test reading a custom template."""
        template = temp_dir / "custom.j2"
        template.write_text("{{ name }}")

        assert RenderConfig(_env_file=None).read_template() is None
        assert RenderConfig(template_path=template, _env_file=None).read_template() == "{{ name }}"


class TestEnvironmentVariableSupport:
    """Test environment variable support."""

    def test_render_config_from_env_vars(self, monkeypatch):
        """Test config loading from environment variables."""
        monkeypatch.setenv("FONTIMG_SIZE", "24")
        monkeypatch.setenv("FONTIMG_STYLE", "Bold")
        monkeypatch.setenv("FONTIMG_DPI", "300")
        monkeypatch.setenv("FONTIMG_FONT_DIRS", '["/opt/fonts"]')

        config = RenderConfig(_env_file=None)

        assert config.size == 24
        assert config.style == "Bold"
        assert config.dpi == 300.0
        assert config.font_dirs == [Path("/opt/fonts")]

    def test_render_config_from_env_file(self, temp_dir, monkeypatch):
        """Test config loading from a .env file."""
        env_file = temp_dir / ".env"
        env_file.write_text("FONTIMG_BACKGROUND=navy\nFONTIMG_MARGIN=2.5\n")
        monkeypatch.delenv("FONTIMG_BACKGROUND", raising=False)
        monkeypatch.delenv("FONTIMG_MARGIN", raising=False)

        config = RenderConfig.from_env_and_yaml(env_file=str(env_file))

        assert config.background == "navy"
        assert config.margin == 2.5


class TestYAMLLoading:
    """Test YAML configuration files."""

    def test_load_config_from_yaml(self, temp_dir):
        """Test loading a complete configuration file."""
        config_path = temp_dir / "render.yaml"
        config_path.write_text(
            yaml.safe_dump(
                {"size": 32, "style": "Italic", "variant": "smallcaps", "background": "#eeeeee"}
            )
        )

        config = RenderConfig.from_yaml(config_path)

        assert config.size == 32
        assert config.style == "Italic"
        assert config.font_variant is FontVariant.SMALLCAPS
        assert config.background == "#eeeeee"
        assert config.foreground == "black"

    def test_from_env_and_yaml_prefers_yaml(self, temp_dir):
        """Test that a YAML file is used when given."""
        config_path = temp_dir / "render.yaml"
        config_path.write_text("size: 12\n")

        assert RenderConfig.from_env_and_yaml(yaml_path=config_path).size == 12

    def test_load_config_missing_file(self, temp_dir):
        """Test loading a file that does not exist."""
        with pytest.raises(ConfigurationError, match="not found"):
            load_config_from_yaml(temp_dir / "missing.yaml", RenderConfig)

    def test_load_config_empty_file(self, temp_dir):
        """Test loading an empty file."""
        config_path = temp_dir / "empty.yaml"
        config_path.write_text("")

        with pytest.raises(ConfigurationError, match="Empty"):
            load_config_from_yaml(config_path, RenderConfig)

    def test_load_config_invalid_yaml(self, temp_dir):
        """Test loading malformed YAML."""
        config_path = temp_dir / "broken.yaml"
        config_path.write_text("size: [1, 2\n")

        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_config_from_yaml(config_path, RenderConfig)

    def test_load_config_invalid_values(self, temp_dir):
        """Test that validation failures are reported as configuration errors."""
        config_path = temp_dir / "bad.yaml"
        config_path.write_text("foreground: not-a-color\n")

        with pytest.raises(ConfigurationError):
            load_config_from_yaml(config_path, RenderConfig)


class TestValidateColor:
    """Test the color validator."""

    @pytest.mark.parametrize("color", ["black", "#000", "#11223344", "hsl(0, 100%, 50%)"])
    def test_valid_colors(self, color):
        """Test accepted colors."""
        assert validate_color(color) == color

    def test_invalid_color_names_field(self):
        """Test that the error names the offending field."""
        with pytest.raises(InvalidColorError, match="background"):
            validate_color("#12", "background")
