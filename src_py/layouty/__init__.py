import layouty.prebaked as prebaked  # noqa: PLR0402
from layouty.config import ResolverConfig
from layouty.exceptions import CyclicExtends
from layouty.exceptions import DuplicateBlockName
from layouty.exceptions import LayoutyAdvisory
from layouty.exceptions import LayoutyException
from layouty.exceptions import MultipleExtends
from layouty.exceptions import OrphanBlock
from layouty.exceptions import TemplateNotFound
from layouty.nodes import BlockMode
from layouty.nodes import BlockNode
from layouty.nodes import ControlNode
from layouty.nodes import ElementNode
from layouty.nodes import ExtendsNode
from layouty.nodes import Template
from layouty.nodes import TextNode
from layouty.resolver import ResolvedTemplate
from layouty.resolver import resolve
from layouty.resolver import resolve_async
from layouty.resolver import resolve_sync

__all__ = [
    'BlockMode',
    'BlockNode',
    'ControlNode',
    'CyclicExtends',
    'DuplicateBlockName',
    'ElementNode',
    'ExtendsNode',
    'LayoutyAdvisory',
    'LayoutyException',
    'MultipleExtends',
    'OrphanBlock',
    'ResolvedTemplate',
    'ResolverConfig',
    'Template',
    'TemplateNotFound',
    'TextNode',
    'prebaked',
    'resolve',
    'resolve_async',
    'resolve_sync',
]
