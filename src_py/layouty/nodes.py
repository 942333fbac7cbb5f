"""Content nodes are the (deliberately small) tree vocabulary that the
layout resolver understands. Anything the resolver doesn't need to look
inside of -- tags, attributes, control flow expressions -- is carried
through untouched, so parsers for any surface syntax can target these.
"""
from __future__ import annotations

from collections.abc import Iterable
from collections.abc import Iterator
from collections.abc import Mapping
from dataclasses import dataclass
from dataclasses import field
from enum import Enum

from typing_extensions import TypeIs

from layouty._types import BlockName
from layouty._types import TemplateName


class BlockMode(Enum):
    REPLACE = 'replace'
    APPEND = 'append'
    PREPEND = 'prepend'


@dataclass(slots=True, frozen=True)
class TextNode:
    text: str


@dataclass(slots=True, frozen=True)
class ElementNode:
    tag: str
    # Attributes are opaque to the resolver, and dicts aren't hashable, so
    # we leave them out of the hash
    attrs: Mapping[str, str] = field(default_factory=dict, hash=False)
    children: tuple[ContentNode, ...] = ()


@dataclass(slots=True, frozen=True)
class ControlNode:
    """Control nodes stand in for any kind of control-flow construct
    (``each``, ``if``, ``case``, mixin calls, etc). The resolver doesn't
    evaluate them; it only walks their children to find blocks.
    """
    kind: str
    expression: str = ''
    children: tuple[ContentNode, ...] = ()


@dataclass(slots=True, frozen=True)
class BlockNode:
    """A named block. Within the root of an extends chain, this is a
    placeholder, and its children are the default content. Within an
    extending template, it's an override, and its mode determines how
    the children are merged with whatever came before.
    """
    name: BlockName
    mode: BlockMode = BlockMode.REPLACE
    children: tuple[ContentNode, ...] = ()


@dataclass(slots=True, frozen=True)
class ExtendsNode:
    parent: TemplateName


type ContentNode = TextNode | ElementNode | ControlNode | BlockNode | ExtendsNode
type ContainerNode = ElementNode | ControlNode | BlockNode


def is_container_node(node: ContentNode) -> TypeIs[ContainerNode]:
    return isinstance(node, (ElementNode, ControlNode, BlockNode))


def is_blank_text(node: ContentNode) -> bool:
    """Whitespace-only text nodes are an artifact of most parsers, and
    carry no meaning at the top level of an extending template.
    """
    return isinstance(node, TextNode) and not node.text.strip()


def iter_nodes(nodes: Iterable[ContentNode]) -> Iterator[ContentNode]:
    """Walks the passed nodes pre-order, in source order, descending
    into the children of every container node. We use an explicit stack
    here so that absurdly deep trees don't hit the recursion limit.
    """
    stack: list[Iterator[ContentNode]] = [iter(nodes)]
    while stack:
        try:
            node = next(stack[-1])
        except StopIteration:
            stack.pop()
            continue

        yield node
        if is_container_node(node):
            stack.append(iter(node.children))


def iter_blocks(nodes: Iterable[ContentNode]) -> Iterator[BlockNode]:
    for node in iter_nodes(nodes):
        if isinstance(node, BlockNode):
            yield node


@dataclass(slots=True, frozen=True)
class Template:
    """A single parsed template. The template name is whatever the
    loader uses to find it; it's also what extends directives refer to.

    Note that constructing a template does no validation at all; that's
    done by the resolver, since that's where we'd need to raise anyways.
    """
    name: TemplateName
    nodes: tuple[ContentNode, ...] = ()

    @property
    def extends(self) -> TemplateName | None:
        """The parent template, if this template extends one. If the
        template (invalidly) has more than one extends directive, this is
        the first one.
        """
        for node in self.nodes:
            if isinstance(node, ExtendsNode):
                return node.parent

        return None

    @property
    def is_resolved(self) -> bool:
        return not any(
            isinstance(node, (BlockNode, ExtendsNode))
            for node in iter_nodes(self.nodes))

    def iter_blocks(self) -> Iterator[BlockNode]:
        return iter_blocks(self.nodes)
