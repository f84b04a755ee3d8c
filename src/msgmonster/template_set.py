from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import jinja2
from jinja2 import Environment, FileSystemLoader, StrictUndefined

from msgmonster.errors import TemplateError

DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


class TemplateSet:
    """Named Java source fragments stored as Jinja2 templates.

    Fragments are rendered with Jinja2 first; the ${...} placeholders they
    contain are left for the Substitutor.
    """

    def __init__(self, template_dir: Optional[Path] = None):
        self.template_dir = Path(template_dir) if template_dir else DEFAULT_TEMPLATE_DIR
        self._env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            keep_trailing_newline=True,
            trim_blocks=True,
            undefined=StrictUndefined,
        )

    def render(self, name: str, **context: Any) -> str:
        """Render fragment 'name' (without the .j2 suffix)."""
        file_name = f"{name}.j2"
        try:
            template = self._env.get_template(file_name)
            text = template.render(**context)
        except jinja2.TemplateNotFound as e:
            raise TemplateError(f"Template {file_name} not found in {self.template_dir}") from e
        except (jinja2.TemplateError, OSError) as e:
            raise TemplateError(f"Failed to render template {file_name}: {e}") from e
        return text.rstrip("\n")
