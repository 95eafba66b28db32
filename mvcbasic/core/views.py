"""
mvcbasic — View Resolution and Templating
===========================================

What:  Maps logical view names to template files and renders them.
How:   Convention: ``{template_dir}/{prefix}{view_name}{suffix}``, so
       "response/hello" → templates/response/hello.html. Rendering is
       delegated to Jinja2; the renderer only sees ``render(...) -> bytes``.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Protocol

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape

from mvcbasic.config import settings
from mvcbasic.exceptions import ViewNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedView:
    """A logical view name pinned to a concrete template."""

    view_name: str
    template_name: str
    location: str


class ViewResolver:
    """Resolves logical view names by directory convention."""

    def __init__(
        self,
        template_dir: Optional[str] = None,
        prefix: Optional[str] = None,
        suffix: Optional[str] = None,
    ):
        self.template_dir = Path(template_dir or settings.template_dir).resolve()
        self.prefix = settings.view_prefix if prefix is None else prefix
        self.suffix = settings.view_suffix if suffix is None else suffix

    def resolve(self, view_name: str) -> ResolvedView:
        """
        Raises:
            ViewNotFoundError: no template file exists for ``view_name``, or
                the name points outside the template directory.
        """
        template_name = f"{self.prefix}{view_name.strip('/')}{self.suffix}"
        location = (self.template_dir / template_name).resolve()
        if self.template_dir not in location.parents or not location.is_file():
            raise ViewNotFoundError(view_name, location=str(location))
        return ResolvedView(
            view_name=view_name,
            template_name=template_name,
            location=str(location),
        )


class TemplateRenderer(Protocol):
    def render(self, template_name: str, variables: Mapping[str, Any]) -> bytes:
        """Render ``template_name`` with ``variables`` into response bytes."""


class Jinja2TemplateRenderer:
    """TemplateRenderer backed by a Jinja2 environment."""

    def __init__(self, template_dir: Optional[str] = None, encoding: str = "utf-8"):
        self.encoding = encoding
        self.env = Environment(
            loader=FileSystemLoader(template_dir or settings.template_dir),
            autoescape=select_autoescape(["html", "xml"]),
        )

    def render(self, template_name: str, variables: Mapping[str, Any]) -> bytes:
        try:
            template = self.env.get_template(template_name)
        except TemplateNotFound as exc:
            raise ViewNotFoundError(template_name) from exc
        logger.debug("Rendering template %s with %s", template_name, sorted(variables))
        return template.render(**variables).encode(self.encoding)
