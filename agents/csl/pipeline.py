"""
Style lookup pipeline: Normalize -> Resolve -> Fetch.

Stages run strictly one after another for a request. The first stage to
raise aborts the pipeline and its StyleError reaches the caller unchanged.
"""
from typing import Optional

from common.config import Config
from common.logging import logger

from .fetcher import StyleFetcher
from .identifier import normalize_style_identifier
from .models import StyleRequest
from .registry import StyleRegistry, load_style_registry
from .resolver import StyleResolver
from .storage import StyleStore


class StylePipeline:
    """Owns the registry snapshot and runs style lookups against it."""

    def __init__(self, registry: StyleRegistry, store, host: Optional[str] = None,
                 max_hops: Optional[int] = None):
        self.registry = registry
        self.store = store
        self.host = host or Config.STYLE_HOST
        self.resolver = StyleResolver(registry, store, host=self.host, max_hops=max_hops)
        self.fetcher = StyleFetcher(registry, store, host=self.host)

    def new_request(self, style: Optional[str], posted_style: Optional[str] = None) -> StyleRequest:
        """Normalize stage. A posted style needs no identifier."""
        if posted_style is not None and not style:
            return StyleRequest(posted_style=posted_style)
        identifier = normalize_style_identifier(style, host=self.host)
        return StyleRequest(identifier=identifier, posted_style=posted_style)

    async def resolve(self, style: str, full: bool = True) -> StyleRequest:
        """Normalize and resolve without fetching the style text."""
        request = self.new_request(style)
        if full:
            await self.resolver.resolve_fully(request)
        else:
            await self.resolver.resolve_step(request)
        return request

    async def run(self, style: Optional[str], posted_style: Optional[str] = None,
                  full: bool = True) -> StyleRequest:
        """
        Run the whole pipeline for one style lookup.

        Args:
            style: Style short name or URL
            posted_style: CSL XML supplied by the caller; skips resolve and fetch lookups
            full: Follow dependent chains to the end instead of a single hop

        Returns:
            The finished StyleRequest, with ``csl_xml`` set
        """
        logger.info(f"Style lookup for {style!r}")
        request = self.new_request(style, posted_style)

        if request.posted_style is None:
            if full:
                await self.resolver.resolve_fully(request)
            else:
                await self.resolver.resolve_step(request)

        await self.fetcher.fetch(request)
        return request


def build_pipeline(csl_path: Optional[str] = None, dependent_path: Optional[str] = None,
                   host: Optional[str] = None, max_hops: Optional[int] = None) -> StylePipeline:
    """Create the store, load the registry and return a ready pipeline.

    Raises RegistryLoadError when a style directory cannot be listed.
    """
    store = StyleStore(csl_path, dependent_path)
    registry = load_style_registry(store)
    return StylePipeline(registry, store, host=host, max_hops=max_hops)
