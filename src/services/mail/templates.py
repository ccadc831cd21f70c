from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional
import jinja2
import logging

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATES_DIR = Path(__file__).parents[3] / "templates" / "email"


@dataclass(frozen=True)
class RenderedEmail:
    template: str
    subject: str
    html: str


class EmailTemplateManager:
    """
    Loads email templates laid out as <templates_dir>/<name>/subject.txt and body.html.

    Bodies are HTML and autoescaped, since they interpolate visitor-submitted text.
    """

    def __init__(self, templates_dir: Optional[Path] = None):
        self.templates_dir = Path(templates_dir) if templates_dir else DEFAULT_TEMPLATES_DIR
        if not self.templates_dir.exists():
            raise FileNotFoundError(f"Email templates dir not found: {self.templates_dir}")

        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(self.templates_dir)),
            undefined=jinja2.StrictUndefined,
            autoescape=jinja2.select_autoescape(enabled_extensions=("html",)),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def available(self) -> List[str]:
        return sorted(p.name for p in self.templates_dir.iterdir() if (p / "body.html").exists())

    def render(self, name: str, variables: Dict[str, Any]) -> RenderedEmail:
        try:
            subject = self.jinja_env.get_template(f"{name}/subject.txt").render(**variables)
            html = self.jinja_env.get_template(f"{name}/body.html").render(**variables)
        except jinja2.TemplateNotFound as e:
            raise FileNotFoundError(f"Email template not found: {name} ({e})") from e
        except jinja2.UndefinedError as e:
            raise ValueError(f"Missing required variable in email template {name}: {e}") from e

        logger.debug(f"Rendered email template {name}")
        return RenderedEmail(template=name, subject=" ".join(subject.split()), html=html)
