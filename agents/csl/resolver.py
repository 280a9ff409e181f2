"""
Dependent style resolution.

A dependent CSL style only points at an independent parent through
``<link rel="independent-parent" href="..."/>``. ``resolve_step`` follows
that link one hop, reading the dependent file the first time and answering
from the registry memo afterwards. ``resolve_fully`` repeats the step until
an independent style is reached.
"""
from typing import Optional

from common.config import Config
from common.errors import (
    DependentResolutionError,
    InvalidIdentifier,
    ResolutionLoopError,
    StyleNotFound,
)
from common.logging import logger

from .identifier import StyleIdentifier, normalize_style_identifier
from .models import StyleRequest
from .parent_link import extract_parent_link
from .registry import StyleKind, StyleRegistry


class StyleResolver:
    """Resolves dependent styles to their independent parents."""

    def __init__(self, registry: StyleRegistry, store, host: Optional[str] = None,
                 max_hops: Optional[int] = None):
        self.registry = registry
        self.store = store
        self.host = host or Config.STYLE_HOST
        self.max_hops = max_hops if max_hops is not None else Config.MAX_RESOLUTION_HOPS

    def _normalize(self, style: str) -> StyleIdentifier:
        return normalize_style_identifier(style, host=self.host)

    async def resolve_step(self, request: StyleRequest) -> bool:
        """
        Advance the request's identifier by at most one dependency hop.

        Returns:
            True if the identifier was replaced by its parent, False if it
            already names an independent style.

        Raises:
            StyleNotFound: short name is in neither registry
            FileReadError: the dependent style file could not be read
            DependentResolutionError: the dependent style declares no parent
            InvalidIdentifier: the declared parent cannot be normalized
        """
        if request.identifier is None:
            raise InvalidIdentifier("No style identifier to resolve")
        short_name = request.identifier.short_name
        entry = self.registry.lookup(short_name)

        if entry is None:
            logger.info(f"Style not found: {short_name}")
            raise StyleNotFound(f"Style not found: {short_name}")

        if entry.kind is StyleKind.INDEPENDENT:
            logger.debug(f"Independent style: {short_name}")
            return False

        if entry.kind is StyleKind.RESOLVED:
            logger.debug(f"Dependent style {short_name} cached as {entry.parent}")
            request.identifier = self._normalize(entry.parent)
            request.hops += 1
            return True

        logger.debug(f"Resolving dependent style: {short_name}")
        dependent_xml = await self.store.read_dependent(short_name)
        parent = extract_parent_link(dependent_xml)
        if parent is None:
            logger.error(f"No independent-parent link in dependent style {short_name}")
            raise DependentResolutionError(f"Error resolving dependent style {short_name}")

        parent_identifier = self._normalize(parent)
        self.registry.record_parent(short_name, parent)
        logger.info(f"Style {short_name} depends on {parent}")
        request.identifier = parent_identifier
        request.hops += 1
        return True

    async def resolve_fully(self, request: StyleRequest) -> StyleIdentifier:
        """
        Follow parent links until the identifier names an independent style.

        Raises:
            ResolutionLoopError: a short name repeats, or more than
                ``max_hops`` hops are needed
        """
        seen = set()
        hops = 0
        while True:
            short_name = request.short_name
            if short_name in seen:
                raise ResolutionLoopError(f"Dependent style cycle detected at {short_name}")
            seen.add(short_name)

            if not await self.resolve_step(request):
                return request.identifier

            hops += 1
            if hops > self.max_hops:
                raise ResolutionLoopError(
                    f"Style {request.short_name} not resolved after {self.max_hops} hops")
