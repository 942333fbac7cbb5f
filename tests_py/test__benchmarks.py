import json
import time
from datetime import datetime
from datetime import timezone
from pathlib import Path

import jinja2
import pytest

from layouty.prebaked.loaders import DictTemplateLoader
from layouty.resolver import resolve_async
from layouty.resolver import resolve_sync

from layouty_testutils import append
from layouty_testutils import block
from layouty_testutils import el
from layouty_testutils import extends
from layouty_testutils import serialize
from layouty_testutils import text
from layouty_testutils import tpl

_ITERATION_COUNT = 1000
_OUTFILE_NAME = 'layouty_benchmark_{timestamp}.json'
_OUTFILE_DEST = Path(__file__).parent.parent


JINJA_TEMPLATES = {
    'base': (
        '<html><head>{% block styles %}<link href="/main.css">'
        + '{% endblock %}</head><body><main>{% block content %}default'
        + '{% endblock %}</main></body></html>'),
    'section': (
        '{% extends "base" %}{% block styles %}{{ super() }}'
        + '<link href="/section.css">{% endblock %}'
        + '{% block content %}<section>{% block inner %}I{% endblock %}'
        + '</section>{% endblock %}'),
    'page': (
        '{% extends "section" %}{% block inner %}{{ super() }}J'
        + '{% endblock %}'),
}

LAYOUTY_TEMPLATES = (
    tpl(
        'base',
        el(
            'html',
            el('head', block('styles', el('link', href='/main.css'))),
            el('body', el('main', block('content', text('default')))))),
    tpl(
        'section',
        extends('base'),
        append('styles', el('link', href='/section.css')),
        block('content', el('section', block('inner', text('I'))))),
    tpl('page', extends('section'), append('inner', text('J'))),
)


@pytest.fixture(scope='session')
def benchmark_gatherer():
    now = datetime.now(timezone.utc)
    timestamp = f"{now.strftime('%Y-%m-%d')}-{int(now.timestamp())}"
    outfile_path = _OUTFILE_DEST / _OUTFILE_NAME.format(timestamp=timestamp)
    results = {'jinja': {}, 'layouty': {}}
    try:
        yield results
    finally:
        outfile_path.write_text(json.dumps(results))


@pytest.fixture
def jinja_env() -> jinja2.Environment:
    return jinja2.Environment(
        autoescape=True,
        loader=jinja2.DictLoader(JINJA_TEMPLATES),
        cache_size=0)


@pytest.fixture
def layouty_loader() -> DictTemplateLoader:
    loader = DictTemplateLoader()
    loader.add(*LAYOUTY_TEMPLATES)
    return loader


@pytest.mark.benchmark
class TestBenchmarks:

    def test_three_level_jinja(self, jinja_env, benchmark_gatherer):
        """Benchmark loading and rendering a three-level extends chain
        with jinja. Caching is disabled, so that this includes the full
        inheritance lookup every time.
        """
        elapsed_time = 0
        for __ in range(_ITERATION_COUNT):
            before = time.monotonic()
            jinja_env.get_template('page').render()
            after = time.monotonic()
            elapsed_time += (after - before)
        benchmark_gatherer['jinja']['three_level.render'] = (
            elapsed_time / _ITERATION_COUNT)

    def test_three_level_layouty(self, layouty_loader, benchmark_gatherer):
        """Benchmark resolving the same three-level chain, plus a trivial
        serialization of the result.
        """
        elapsed_time = 0
        page = layouty_loader.load_sync('page')
        for __ in range(_ITERATION_COUNT):
            before = time.monotonic()
            serialize(resolve_sync(page, layouty_loader).nodes)
            after = time.monotonic()
            elapsed_time += (after - before)
        benchmark_gatherer['layouty']['three_level.render'] = (
            elapsed_time / _ITERATION_COUNT)

    @pytest.mark.anyio
    async def test_three_level_layouty_async(
            self, layouty_loader, benchmark_gatherer, anyio_backend_name):
        elapsed_time = 0
        page = layouty_loader.load_sync('page')
        for __ in range(_ITERATION_COUNT):
            before = time.monotonic()
            serialize((await resolve_async(page, layouty_loader)).nodes)
            after = time.monotonic()
            elapsed_time += (after - before)
        benchmark_gatherer['layouty'][
            f'three_level.render.{anyio_backend_name}'] = (
                elapsed_time / _ITERATION_COUNT)


class TestBenchmarkParity:

    def test_outputs_match(self, jinja_env, layouty_loader):
        """Both benchmarks must be doing the same work: resolving the
        chain must give the same markup that jinja renders for it.
        """
        jinja_result = jinja_env.get_template('page').render()
        layouty_result = serialize(resolve_sync(
            layouty_loader.load_sync('page'), layouty_loader).nodes)

        assert jinja_result.replace(
            '<link href="/main.css">', '<link href="/main.css"></link>'
        ).replace(
            '<link href="/section.css">', '<link href="/section.css"></link>'
        ) == layouty_result
