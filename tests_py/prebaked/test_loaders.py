from __future__ import annotations

import pytest

from layouty.exceptions import TemplateNotFound
from layouty.prebaked.loaders import DictTemplateLoader

from layouty_testutils import block
from layouty_testutils import tpl

LAYOUT = tpl('layout', block('content'))


class TestDictTemplateLoader:

    def test_sync(self):
        loader = DictTemplateLoader(templates={'layout': LAYOUT})
        assert loader.load_sync('layout') is LAYOUT

    def test_sync_missing(self):
        loader = DictTemplateLoader()
        with pytest.raises(TemplateNotFound) as exc_info:
            loader.load_sync('layout')

        assert exc_info.value.template_name == 'layout'

    def test_add(self):
        """Adding templates must register them under their own names."""
        loader = DictTemplateLoader()
        loader.add(LAYOUT, tpl('other'))
        assert loader.load_sync('layout') is LAYOUT
        assert loader.load_sync('other').name == 'other'

    @pytest.mark.anyio
    async def test_async(self):
        loader = DictTemplateLoader(templates={'layout': LAYOUT})
        assert (await loader.load_async('layout')) is LAYOUT

    @pytest.mark.anyio
    async def test_async_missing(self):
        loader = DictTemplateLoader()
        with pytest.raises(TemplateNotFound):
            await loader.load_async('layout')
