"""Terse builders for constructing node trees in tests, plus a tiny
serializer so that tests can assert against readable strings instead of
deeply nested dataclasses.
"""
from __future__ import annotations

from collections.abc import Iterable

from layouty.nodes import BlockMode
from layouty.nodes import BlockNode
from layouty.nodes import ContentNode
from layouty.nodes import ControlNode
from layouty.nodes import ElementNode
from layouty.nodes import ExtendsNode
from layouty.nodes import Template
from layouty.nodes import TextNode


def text(value: str) -> TextNode:
    return TextNode(value)


def el(tag: str, *children: ContentNode, **attrs: str) -> ElementNode:
    return ElementNode(tag=tag, attrs=attrs, children=children)


def each(expression: str, *children: ContentNode) -> ControlNode:
    return ControlNode(kind='each', expression=expression, children=children)


def block(name: str, *children: ContentNode) -> BlockNode:
    return BlockNode(name=name, mode=BlockMode.REPLACE, children=children)


def append(name: str, *children: ContentNode) -> BlockNode:
    return BlockNode(name=name, mode=BlockMode.APPEND, children=children)


def prepend(name: str, *children: ContentNode) -> BlockNode:
    return BlockNode(name=name, mode=BlockMode.PREPEND, children=children)


def extends(parent: str) -> ExtendsNode:
    return ExtendsNode(parent)


def tpl(name: str, *nodes: ContentNode) -> Template:
    return Template(name=name, nodes=nodes)


def serialize(nodes: Iterable[ContentNode]) -> str:
    """Flattens resolved nodes into a compact, HTML-ish string. Blocks
    and extends directives are written out as markers, so that
    accidentally unresolved trees are obvious in assertion failures.
    """
    parts: list[str] = []
    for node in nodes:
        if isinstance(node, TextNode):
            parts.append(node.text)
        elif isinstance(node, ElementNode):
            attrs = ''.join(
                f' {key}="{value}"' for key, value in node.attrs.items())
            parts.append(
                f'<{node.tag}{attrs}>{serialize(node.children)}</{node.tag}>')
        elif isinstance(node, ControlNode):
            parts.append(
                f'{{{node.kind} {node.expression}}}'
                + serialize(node.children)
                + f'{{/{node.kind}}}')
        elif isinstance(node, BlockNode):
            parts.append(f'[block {node.name}]')
        else:
            parts.append(f'[extends {node.parent}]')

    return ''.join(parts)
