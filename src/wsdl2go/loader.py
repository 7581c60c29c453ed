"""Builds the resolved, deduplicated WSDL model: fetch, parse, resolve, dedup."""

from typing import Optional

from .config import Config
from .fetcher import ResourceFetcher
from .location import Location
from .logger import create_logger
from .parser import WSDLParser
from .refinement import TypeDeduplicator
from .resolver import ExternalReferenceResolver, ResolutionContext
from .wsdl_model import WSDLDocument


class WSDLLoader:
    """Loads the WSDL at ``config.wsdl_location`` with all referenced schemas."""

    def __init__(self, config: Config, fetcher: Optional[ResourceFetcher] = None):
        self.config = config
        self.location = Location.parse(config.wsdl_location)
        level = config.logging.level
        self.logger = create_logger(level=level, component="loader")

        self._owns_fetcher = fetcher is None
        self.fetcher = fetcher or ResourceFetcher(
            ignore_tls=config.ignore_tls,
            auth=config.basic_auth,
            timeout=config.fetch_timeout,
            log_level=level,
        )
        self.parser = WSDLParser(log_level=level)
        self.resolver = ExternalReferenceResolver(
            self.fetcher, self.parser, max_depth=config.max_recursion_depth, log_level=level
        )
        self.deduplicator = TypeDeduplicator(
            ignore_namespaces=config.ignore_type_namespaces, log_level=level
        )
        self.context: Optional[ResolutionContext] = None
        self.duplicates_removed = 0

    def load(self) -> WSDLDocument:
        """Fetch errors and parse errors propagate unchanged."""
        try:
            data = self.fetcher.fetch(self.location)
            document = self.parser.parse_wsdl(data, self.location)
            self.context = self.resolver.resolve_all(document.schemas, self.location)
        finally:
            if self._owns_fetcher:
                self.fetcher.close()

        self.duplicates_removed = self.deduplicator.remove_duplicates(document.schemas)

        self.logger.info(
            "WSDL model resolved",
            location=str(self.location),
            schemas=len(document.schemas),
            fetchedSchemas=self.context.fetch_count,
            duplicatesRemoved=self.duplicates_removed,
            truncated=self.context.truncated,
        )
        return document
