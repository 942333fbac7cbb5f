from __future__ import annotations

import logging
from collections.abc import Generator
from collections.abc import Iterator
from collections.abc import Sequence
from dataclasses import dataclass
from dataclasses import replace
from typing import Annotated

from docnote import ClcNote

from layouty._types import AsyncLoaderFunc
from layouty._types import BlockName
from layouty._types import SyncLoaderFunc
from layouty._types import TemplateName
from layouty.config import DEFAULT_CONFIG
from layouty.config import ResolverConfig
from layouty.exceptions import CyclicExtends
from layouty.exceptions import DuplicateBlockName
from layouty.exceptions import ExtendsTooDeep
from layouty.exceptions import IgnoredContent
from layouty.exceptions import LayoutyAdvisory
from layouty.exceptions import MisplacedExtends
from layouty.exceptions import MultipleExtends
from layouty.exceptions import OrphanBlock
from layouty.exceptions import RecursiveBlock
from layouty.exceptions import TemplateNotFound
from layouty.loaders import AsyncTemplateLoader
from layouty.loaders import SyncTemplateLoader
from layouty.nodes import BlockMode
from layouty.nodes import BlockNode
from layouty.nodes import ContentNode
from layouty.nodes import ControlNode
from layouty.nodes import ElementNode
from layouty.nodes import ExtendsNode
from layouty.nodes import Template
from layouty.nodes import TextNode
from layouty.nodes import is_blank_text
from layouty.nodes import is_container_node
from layouty.nodes import iter_blocks
from layouty.nodes import iter_nodes

logger = logging.getLogger(__name__)

type _BlockTable = dict[BlockName, tuple[ContentNode, ...]]


@dataclass(slots=True, frozen=True)
class ResolvedTemplate:
    """The result of resolving a template: a single, flattened tree
    with no extends directive and no block placeholders, plus anything
    worth telling the caller about that didn't prevent resolution.
    """
    name: TemplateName
    nodes: tuple[ContentNode, ...]
    # Root first, then each descendant, ending with the resolved template
    chain: tuple[TemplateName, ...]
    advisories: tuple[LayoutyAdvisory, ...] = ()

    def as_template(self) -> Template:
        return Template(name=self.name, nodes=self.nodes)


def resolve_sync(
        template: Template,
        loader: Annotated[
            SyncTemplateLoader | SyncLoaderFunc,
            ClcNote(
                '''Used to fetch every ancestor of the template. This can
                either be a loader object (with a ``load_sync`` method) or
                a plain function accepting the template name.
                ''')],
        *,
        config: ResolverConfig | None = None
        ) -> ResolvedTemplate:
    """Resolves the extends chain of the passed template, merging in
    all of the block overrides, and returns the flattened result.
    """
    if config is None:
        config = DEFAULT_CONFIG

    # The loader protocols aren't runtime checkable, hence the duck typing
    if hasattr(loader, 'load_sync'):
        load = loader.load_sync
    else:
        load = loader

    help_response: Template | None = None
    chain_walker = _walk_chain(template, config)
    # Note that the first .send() MUST be None, as per the generator spec.
    # We can't use a for loop here, since the return value of .send() is the
    # next yield.
    try:
        while True:
            template_name = chain_walker.send(help_response)
            help_response = _coerce_load_result(
                template_name, _call_loader(load, template_name))
    except StopIteration as exc:
        chain: list[Template] = exc.value

    return _merge_chain(chain, config)


async def resolve_async(
        template: Template,
        loader: Annotated[
            AsyncTemplateLoader | AsyncLoaderFunc,
            ClcNote(
                '''Used to fetch every ancestor of the template. This can
                either be a loader object (with a ``load_async`` method) or
                a plain async function accepting the template name.
                ''')],
        *,
        config: ResolverConfig | None = None
        ) -> ResolvedTemplate:
    """This is the async twin of ``resolve_sync``. The loader is the
    only thing that's actually async; the merge itself is pure.
    """
    if config is None:
        config = DEFAULT_CONFIG

    if hasattr(loader, 'load_async'):
        load = loader.load_async
    else:
        load = loader

    help_response: Template | None = None
    chain_walker = _walk_chain(template, config)
    try:
        while True:
            template_name = chain_walker.send(help_response)
            try:
                loaded = await load(template_name)
            except TemplateNotFound:
                raise
            except LookupError as exc:
                raise TemplateNotFound(template_name) from exc

            help_response = _coerce_load_result(template_name, loaded)
    except StopIteration as exc:
        chain: list[Template] = exc.value

    return _merge_chain(chain, config)


resolve = resolve_sync


def _call_loader(load: SyncLoaderFunc, template_name: TemplateName) -> object:
    try:
        return load(template_name)
    except TemplateNotFound:
        raise
    except LookupError as exc:
        raise TemplateNotFound(template_name) from exc


def _coerce_load_result(
        template_name: TemplateName,
        loaded: object
        ) -> Template:
    if not isinstance(loaded, Template):
        raise TypeError(
            'Template loaders must return Template instances!',
            template_name, loaded)

    return loaded


def _walk_chain(
        template: Template,
        config: ResolverConfig
        ) -> Generator[TemplateName, Template | None, list[Template]]:
    """Okay, so the deal here is that we want to share the chain-walking
    logic between the sync and async resolvers, but loading happens in
    the middle of it. So this is an old-school coroutine: every time we
    need a parent template, we yield its name back to the driver, which
    loads it (sync or async) and sends it back in.

    The return value is the full chain, root first.
    """
    _validate_template(template)
    chain = [template]
    visited = [template.name]
    parent_name = template.extends

    while parent_name is not None:
        if parent_name in visited:
            raise CyclicExtends((*visited, parent_name))
        if len(chain) >= config.max_depth:
            raise ExtendsTooDeep(config.max_depth, (*visited, parent_name))

        visited.append(parent_name)
        parent = yield parent_name
        if parent is None:
            raise TypeError(
                'Impossible branch: requested parent template, got None!',
                parent_name)

        _validate_template(parent)
        chain.append(parent)
        parent_name = parent.extends

    chain.reverse()
    logger.debug(
        'Resolved extends chain for %s: %s',
        template.name, ' -> '.join(t.name for t in chain))
    return chain


def _validate_template(template: Template):
    """Re-checks the structural invariants that the parser is supposed
    to have already enforced. These are all fatal.
    """
    top_level_parents = [
        node.parent for node in template.nodes
        if isinstance(node, ExtendsNode)]
    if len(top_level_parents) > 1:
        raise MultipleExtends(template.name, top_level_parents)

    seen_block_names: set[BlockName] = set()
    for node in iter_nodes(template.nodes):
        if isinstance(node, BlockNode):
            if node.name in seen_block_names:
                raise DuplicateBlockName(template.name, node.name)
            seen_block_names.add(node.name)

        if is_container_node(node):
            for child in node.children:
                if isinstance(child, ExtendsNode):
                    raise MisplacedExtends(template.name, child.parent)


def _merge_chain(
        chain: Sequence[Template],
        config: ResolverConfig
        ) -> ResolvedTemplate:
    root, *descendants = chain
    advisories: list[LayoutyAdvisory] = []

    block_table: _BlockTable = {
        block.name: block.children for block in root.iter_blocks()}
    # Insertion order here is first declaration; the value is the most recent
    # declarer, since that's the one whose content actually got dropped
    declared_by: dict[BlockName, TemplateName] = {}

    for descendant in descendants:
        for node in descendant.nodes:
            if isinstance(node, BlockNode):
                # Blocks nested within an override are themselves
                # declarations, which later descendants can override again
                for block in iter_blocks((node,)):
                    _apply_block(block_table, block)
                    declared_by[block.name] = descendant.name

            elif isinstance(node, ExtendsNode) or is_blank_text(node):
                continue

            elif config.report_ignored_content:
                advisories.append(IgnoredContent(descendant.name, node))

    placed: set[BlockName] = set()
    nodes = _substitute(root.nodes, block_table, placed)

    for block_name, declarer in declared_by.items():
        if block_name not in placed:
            advisories.append(OrphanBlock(block_name, declarer))

    for advisory in advisories:
        logger.info('Layout advisory for %s: %s', chain[-1].name, advisory)

    if advisories and config.strict:
        raise ExceptionGroup(
            'Template layout produced advisories', advisories)

    return ResolvedTemplate(
        name=chain[-1].name,
        nodes=nodes,
        chain=tuple(template.name for template in chain),
        advisories=tuple(advisories))


def _apply_block(block_table: _BlockTable, block: BlockNode):
    previous = block_table.get(block.name)
    if previous is None or block.mode is BlockMode.REPLACE:
        block_table[block.name] = block.children
    elif block.mode is BlockMode.APPEND:
        block_table[block.name] = (*previous, *block.children)
    elif block.mode is BlockMode.PREPEND:
        block_table[block.name] = (*block.children, *previous)
    else:
        raise TypeError('Impossible branch: invalid block mode!', block)


@dataclass(slots=True)
class _SubstitutionFrame:
    children: Iterator[ContentNode]
    # Block frames share their encloser's output list, since block content
    # is spliced in directly instead of being wrapped in anything
    output: list[ContentNode]
    # The element or control node being rebuilt; None for blocks and the root
    container: ElementNode | ControlNode | None
    block_stack: tuple[BlockName, ...]


def _substitute(
        nodes: Sequence[ContentNode],
        block_table: _BlockTable,
        placed: set[BlockName]
        ) -> tuple[ContentNode, ...]:
    """Replaces every block placeholder in the passed nodes with its
    final content from the block table, descending into containers and
    into the substituted content itself. Records every block name that
    actually got placed into ``placed``.

    Like iter_nodes, this uses an explicit stack instead of recursion, so
    that very deep trees don't hit the recursion limit.
    """
    substituted: list[ContentNode] = []
    substitution_stack = [_SubstitutionFrame(
        children=iter(nodes),
        output=substituted,
        container=None,
        block_stack=())]

    while substitution_stack:
        frame = substitution_stack[-1]
        try:
            node = next(frame.children)
        except StopIteration:
            substitution_stack.pop()
            if frame.container is not None:
                substitution_stack[-1].output.append(replace(
                    frame.container, children=tuple(frame.output)))
            continue

        if isinstance(node, TextNode):
            frame.output.append(node)

        elif isinstance(node, BlockNode):
            if node.name in frame.block_stack:
                raise RecursiveBlock(
                    node.name, (*frame.block_stack, node.name))

            placed.add(node.name)
            substitution_stack.append(_SubstitutionFrame(
                children=iter(block_table.get(node.name, node.children)),
                output=frame.output,
                container=None,
                block_stack=(*frame.block_stack, node.name)))

        elif isinstance(node, (ElementNode, ControlNode)):
            substitution_stack.append(_SubstitutionFrame(
                children=iter(node.children),
                output=[],
                container=node,
                block_stack=frame.block_stack))

        elif isinstance(node, ExtendsNode):
            # The root can't have one of these, and overrides are validated
            # before we get here, so this really should be impossible
            raise TypeError(
                'Impossible branch: extends directive during substitution!',
                node)

        else:
            raise TypeError('Unknown content node type!', node)

    return tuple(substituted)
