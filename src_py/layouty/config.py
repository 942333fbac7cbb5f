from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class ResolverConfig:
    """Controls the (few) knobs of layout resolution.

    ``max_depth`` bounds the number of templates in a single extends
    chain, counting both the child and the root. ``strict`` turns any
    advisories into an ``ExceptionGroup`` instead of returning them
    on the resolved template. ``report_ignored_content`` controls
    whether stray top-level content in extending templates is reported
    at all; it's always ignored either way.
    """
    max_depth: int = 64
    strict: bool = False
    report_ignored_content: bool = True

    def __post_init__(self):
        if self.max_depth < 1:
            raise ValueError(
                'max_depth must allow at least one template!', self.max_depth)


DEFAULT_CONFIG = ResolverConfig()
