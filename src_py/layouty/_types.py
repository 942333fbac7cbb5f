from __future__ import annotations

import typing
from collections.abc import Awaitable
from collections.abc import Callable

if typing.TYPE_CHECKING:
    from layouty.nodes import Template

type TemplateName = str
type BlockName = str

# Plain callables are accepted anywhere a loader object is; they're
# treated as the load_sync / load_async method respectively.
type SyncLoaderFunc = Callable[[TemplateName], Template]
type AsyncLoaderFunc = Callable[[TemplateName], Awaitable[Template]]
