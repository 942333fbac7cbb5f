from __future__ import annotations

import typing
from collections.abc import Sequence

if typing.TYPE_CHECKING:
    from layouty.nodes import ContentNode


class LayoutyException(Exception):
    """Base class for all fatal layouty errors. Anything deriving from
    this aborts resolution for the current template; no partial tree is
    ever returned alongside one.
    """


class TemplateNotFound(LayoutyException, LookupError):
    """Raised when the template loader cannot find a template named in
    an extends chain.
    """

    def __init__(self, template_name: str, *args: object):
        super().__init__(
            f'No template found with name {template_name!r}', *args)
        self.template_name = template_name


class CyclicExtends(LayoutyException):
    """Raised when following extends references revisits a template
    name. The chain is given in visit order (child first), ending with
    the name that was repeated.
    """

    def __init__(self, chain: Sequence[str]):
        super().__init__(
            'Cyclic extends chain: ' + ' -> '.join(chain))
        self.chain = tuple(chain)


class MultipleExtends(LayoutyException):

    def __init__(self, template_name: str, parents: Sequence[str]):
        super().__init__(
            f'Template {template_name!r} extends more than one parent',
            tuple(parents))
        self.template_name = template_name
        self.parents = tuple(parents)


class MisplacedExtends(LayoutyException):
    """Extends directives are only meaningful at the top level of a
    template; one nested inside an element, control node or block is a
    structural error.
    """

    def __init__(self, template_name: str, parent: str):
        super().__init__(
            f'Template {template_name!r} has a nested extends directive',
            parent)
        self.template_name = template_name
        self.parent = parent


class DuplicateBlockName(LayoutyException):

    def __init__(self, template_name: str, block_name: str):
        super().__init__(
            f'Template {template_name!r} declares block {block_name!r} '
            + 'more than once')
        self.template_name = template_name
        self.block_name = block_name


class RecursiveBlock(LayoutyException):
    """Raised when a block's resolved content contains a placeholder for
    that same block, which could never finish substituting.
    """

    def __init__(self, block_name: str, block_stack: Sequence[str]):
        super().__init__(
            f'Block {block_name!r} is placed within itself',
            tuple(block_stack))
        self.block_name = block_name
        self.block_stack = tuple(block_stack)


class ExtendsTooDeep(LayoutyException):

    def __init__(self, max_depth: int, chain: Sequence[str]):
        super().__init__(
            f'Extends chain is longer than the maximum of {max_depth}',
            tuple(chain))
        self.max_depth = max_depth
        self.chain = tuple(chain)


class LayoutyAdvisory(UserWarning):
    """Advisories are non-fatal: they're collected onto the resolved
    template instead of being raised (unless the resolver is in strict
    mode). They subclass ``UserWarning`` so that callers can pass them
    straight to ``warnings.warn`` if they'd like.
    """


class OrphanBlock(LayoutyAdvisory):
    """A block was declared by an extending template, but no template
    in the chain ever placed it, so its content was dropped.
    """

    def __init__(self, block_name: str, declared_by: str):
        super().__init__(
            f'Block {block_name!r} (declared by {declared_by!r}) is never '
            + 'placed by any ancestor; its content was dropped')
        self.block_name = block_name
        self.declared_by = declared_by


class IgnoredContent(LayoutyAdvisory):
    """An extending template had top-level content outside of any block.
    Only block content from extending templates reaches the output.
    """

    def __init__(self, template_name: str, node: ContentNode):
        super().__init__(
            f'Template {template_name!r} has top-level content outside of '
            + 'a block; it was ignored', node)
        self.template_name = template_name
        self.node = node
