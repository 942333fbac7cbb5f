from __future__ import annotations

import typing
from typing import Protocol

from layouty._types import TemplateName

if typing.TYPE_CHECKING:
    from layouty.nodes import Template


class SyncTemplateLoader(Protocol):

    def load_sync(self, template_name: TemplateName) -> Template:
        """Sync template loaders take the name of a template (as used in
        an extends directive) and return the already-parsed template.
        If there's no template with that name, they should raise
        ``TemplateNotFound`` (any other ``LookupError`` is converted to
        one by the resolver). They should never block indefinitely.
        """
        ...


class AsyncTemplateLoader(Protocol):

    async def load_async(self, template_name: TemplateName) -> Template:
        """Async template loaders are the same as sync ones, but...
        async.
        """
        ...
