"""Loads and renders the Jinja2 templates shipped in the package's templates directory."""

from functools import lru_cache
from pathlib import Path

import jinja2
import structlog
from pydantic import BaseModel

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

TEMPLATES_DIRECTORY = Path(__file__).parent.parent / "templates"

ISSUE_BODY_TEMPLATE = "issue_body.j2"


@lru_cache(maxsize=1)
def get_template_environment() -> jinja2.Environment:
    """Return the environment shared by every render, created on first use.

    The environment caches compiled templates, so each file is read and parsed
    once per process. Undefined variables raise rather than rendering empty,
    and output is not HTML-escaped since issue bodies are Markdown.
    """
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(TEMPLATES_DIRECTORY),
        undefined=jinja2.StrictUndefined,
        autoescape=False,
    )


def render_package_template(template_name: str, model: BaseModel) -> str:
    """Render one of the package's templates against a Pydantic model."""
    try:
        template = get_template_environment().get_template(template_name)
        return template.render(model.model_dump())
    except jinja2.TemplateNotFound:
        logger.error("Jinja2 template not found", template_name=template_name, templates_directory=str(TEMPLATES_DIRECTORY))
        raise
    except jinja2.UndefinedError as exc:
        logger.error("Failed to render template with model", template_name=template_name, model_type=type(model).__name__, error=str(exc))
        raise
