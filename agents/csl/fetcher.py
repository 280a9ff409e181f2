from typing import Optional

from common.config import Config
from common.errors import InternalFallthrough, StyleNotFound, UnsupportedSource
from common.logging import logger

from .models import StyleRequest
from .registry import StyleRegistry


class StyleFetcher:
    """Returns the CSL XML for a resolved request."""

    def __init__(self, registry: StyleRegistry, store, host: Optional[str] = None):
        self.registry = registry
        self.store = store
        self.host = (host or Config.STYLE_HOST).lower()

    async def fetch(self, request: StyleRequest) -> str:
        """
        Fetch the style text for ``request`` and store it on ``request.csl_xml``.

        A posted style always wins. Otherwise only independent styles from the
        canonical host are served; a dependent identifier at this point means
        resolution was skipped or stopped early.
        """
        if request.posted_style is not None:
            logger.debug("Using the posted style")
            request.csl_xml = request.posted_style
            return request.csl_xml

        identifier = request.identifier
        if identifier is None:
            raise InternalFallthrough("No style identifier or posted style to fetch")

        if identifier.host != self.host:
            logger.info(f"Non-canonical style requested: {identifier.url}")
            raise UnsupportedSource(
                f"Styles from {identifier.host or 'unknown hosts'} are not supported at this time")

        short_name = identifier.short_name
        if self.registry.is_independent(short_name):
            logger.debug(f"Loading independent style {short_name}")
            request.csl_xml = await self.store.read_independent(short_name)
            return request.csl_xml

        if self.registry.is_dependent(short_name):
            logger.error(f"Fetch reached unresolved dependent style {short_name}")
            raise InternalFallthrough(
                f"Style {short_name} is a dependent style and was not resolved to an independent parent")

        raise StyleNotFound(f"Style not found: {short_name}")
