#!/usr/bin/env python3
"""
Main CLI for fontimg
====================

This CLI renders preview images of font files and installed fonts.
"""

import logging
import sys
from pathlib import Path

import click

# Setup logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

try:
    from fontimg.core.config import RenderConfig
    from fontimg.core.exceptions import FontImgError
    from fontimg.fonts import SystemFontIndex, open_fonts
    from fontimg.utils.image_ops import save_png
    from fontimg.utils.text_rendering import new_template
except ImportError as e:
    logger.exception(f"Import failed: {e}")
    logger.exception(
        "Make sure you have all dependencies installed and the project is properly set up"
    )
    sys.exit(1)


def _load_config(config, **overrides) -> RenderConfig:
    """Load configuration and apply command line overrides."""
    render_config = RenderConfig.from_env_and_yaml(yaml_path=config)
    values = {key: value for key, value in overrides.items() if value is not None}
    if not values:
        return render_config
    return RenderConfig.model_validate({**render_config.model_dump(), **values})


def _build_index(render_config: RenderConfig) -> SystemFontIndex | None:
    """Build an index of the configured font directories, if any."""
    if not render_config.font_dirs:
        return None
    return SystemFontIndex.build(render_config.font_dirs)


def _output_path(output: Path | None, font_path: str, count: int) -> Path:
    stem = Path(font_path).stem if font_path else "font"
    if output is None:
        return Path(f"{stem}.png")
    if count > 1 or output.is_dir():
        return output / f"{stem}.png"
    return output


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def cli(verbose):
    """fontimg: font preview images."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


@cli.command(name="render")
@click.argument("name")
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    help="Output PNG file (or directory when NAME resolves to several fonts)",
)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration YAML file (optional)",
)
@click.option("--size", "-s", type=int, help="Base font size in points (default: 48)")
@click.option("--style", type=str, help="Font style, e.g. 'Bold Italic' (default: Regular)")
@click.option(
    "--variant",
    type=click.Choice(["normal", "smallcaps", "subscript", "superscript"]),
    help="Font variant (default: normal)",
)
@click.option("--fg", "foreground", type=str, help="Text color (default: black)")
@click.option("--bg", "background", type=str, help="Background color (default: white)")
@click.option("--dpi", type=float, help="Output resolution (default: 100)")
@click.option("--margin", type=float, help="Margin in millimetres (default: 5)")
@click.option(
    "--template",
    "-t",
    "template_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Custom text template file",
)
@click.option(
    "--font-dir",
    "font_dirs",
    multiple=True,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Font directory to match family names against (repeatable)",
)
def render(name, output, config, font_dirs, **options):
    """Render preview images for the fonts NAME resolves to."""
    try:
        render_config = _load_config(config, font_dirs=list(font_dirs) or None, **options)
        template_text = render_config.read_template()
        template = new_template(template_text) if template_text is not None else None

        fonts = open_fonts(name, render_config.font_style, _build_index(render_config))
        logger.info(f"Rendering {len(fonts)} font(s) for {name}")

        for font in fonts:
            image = font.rasterize(
                template,
                render_config.size,
                render_config.font_style,
                render_config.font_variant,
                render_config.foreground,
                render_config.background,
                render_config.dpi,
                render_config.margin,
            )
            path = save_png(image, _output_path(output, font.path, len(fonts)))
            click.echo(f"{font} -> {path}")

    except FontImgError as e:
        logger.exception(f"Rendering failed: {e}")
        sys.exit(1)
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        sys.exit(1)


@cli.command(name="info")
@click.argument("name")
@click.option("--style", type=str, default="Regular", help="Font style used for matching")
@click.option(
    "--font-dir",
    "font_dirs",
    multiple=True,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Font directory to match family names against (repeatable)",
)
def info(name, style, font_dirs):
    """Print a YAML summary of the fonts NAME resolves to."""
    try:
        render_config = _load_config(None, style=style, font_dirs=list(font_dirs) or None)
        fonts = open_fonts(name, render_config.font_style, _build_index(render_config))
        stream = click.get_text_stream("stdout")
        for font in fonts:
            font.ensure_loaded(render_config.font_style)
            font.write_yaml(stream)

    except FontImgError as e:
        logger.exception(f"Font lookup failed: {e}")
        sys.exit(1)
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        sys.exit(1)


@cli.command(name="list")
@click.option(
    "--font-dir",
    "font_dirs",
    multiple=True,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Font directory to index instead of the system directories (repeatable)",
)
def list_fonts(font_dirs):
    """List installed font families and their styles."""
    try:
        index = SystemFontIndex.build(list(font_dirs) or None)
        families = index.families()
        print(f"Found {len(families)} font families")
        for family in families:
            styles = ", ".join(str(font.style) for font in index.fonts(family))
            print(f"{family}: {styles}")

    except Exception as e:
        logger.exception(f"Font listing failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    cli()
