"""Preview text generation: template expansion and line breaking."""

import logging
import re
from importlib import resources

from jinja2 import Environment, StrictUndefined, Template

from fontimg.core.models import Line, TemplateData

logger = logging.getLogger(__name__)

# A line starting with NUL, decimal digits, NUL carries its own font size
SIZE_MARKER_RE = re.compile(r"^\x00([0-9]+)\x00(.*)$", re.DOTALL)


def size_marker(size: int) -> str:
    """Template helper: mark the current line to be drawn at ``size`` points."""
    return f"\x00{int(size)}\x00"


def inc(a: int, b: int) -> int:
    """Template helper: integer addition."""
    return int(a) + int(b)


def _build_environment() -> Environment:
    environment = Environment(
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=False,
    )
    environment.globals["fontsize"] = size_marker
    environment.globals["inc"] = inc
    return environment


_environment = _build_environment()


def new_template(text: str) -> Template:
    """
    Compile a preview text template.

    Templates see the TemplateData fields ``size``, ``name``, ``style`` and
    ``sample_text`` plus two helpers: ``fontsize(n)`` sets the size of the line
    it appears on and ``inc(a, b)`` adds two integers, e.g.
    ``{{ fontsize(inc(size, 16)) }}{{ name }}``.

    Raises:
        jinja2.TemplateSyntaxError: The template does not parse
    """
    return _environment.from_string(text)


def default_template_text() -> str:
    """Return the source of the built-in template."""
    return resources.files("fontimg").joinpath("templates/text.j2").read_text(encoding="utf-8")


DEFAULT_TEMPLATE = new_template(default_template_text())


def break_lines(text: str, size: int) -> list[Line]:
    """
    Split template output into lines and pick each line's font size.

    Lines without a size marker, or whose marker is not a positive size,
    use ``size``. Line text is stripped of surrounding whitespace.
    """
    lines = []
    for raw in text.split("\n"):
        line_size = size
        match = SIZE_MARKER_RE.match(raw)
        if match:
            try:
                line_size = int(match.group(1)) or size
            except ValueError:
                pass
            raw = match.group(2)
        lines.append(Line(text=raw.strip(), size=line_size))
    return lines


def render_lines(template: Template | None, data: TemplateData) -> list[Line]:
    """Expand a template (the built-in one when None) and break it into lines."""
    if template is None:
        template = DEFAULT_TEMPLATE
    text = template.render(**data.model_dump())
    lines = break_lines(text, data.size)
    logger.debug(f"Template produced {len(lines)} lines for {data.name!r}")
    return lines
