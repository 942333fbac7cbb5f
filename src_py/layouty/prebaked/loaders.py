from __future__ import annotations

from layouty.exceptions import TemplateNotFound
from layouty.loaders import AsyncTemplateLoader
from layouty.loaders import SyncTemplateLoader
from layouty.nodes import Template


class DictTemplateLoader[L: str](AsyncTemplateLoader, SyncTemplateLoader):
    """A barebones template loader that simply loads templates from a
    dictionary based on their name. Handy for tests, and for callers
    that parse all of their templates up front.
    """
    _lookup: dict[L, Template]

    def __init__(self, templates: dict[L, Template] | None = None):
        if templates is None:
            templates = {}
        self._lookup = templates

    def add(self, *templates: Template) -> None:
        """Registers the passed templates, each under its own name."""
        for template in templates:
            self._lookup[template.name] = template  # type: ignore

    def load_sync(self, template_name: L) -> Template:
        try:
            return self._lookup[template_name]
        except KeyError as exc:
            raise TemplateNotFound(template_name) from exc

    async def load_async(self, template_name: L) -> Template:
        return self.load_sync(template_name)
