"""Recursive resolution of xs:import / xs:include schema references."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .config import DEFAULT_MAX_RECURSION_DEPTH
from .fetcher import ResourceFetcher
from .location import Location
from .logger import LogLevel, create_logger
from .parser import WSDLParser
from .schema_model import Schema


@dataclass
class ResolutionContext:
    """State shared by every call of one resolution run.

    ``depth`` counts every recursive entry across the whole reference tree
    and is never decremented; once it exceeds ``max_depth`` further schemas
    are left unexpanded and ``truncated`` is set.
    """
    schemas: List[Schema]
    visited: Dict[str, bool] = field(default_factory=dict)
    depth: int = 0
    max_depth: int = DEFAULT_MAX_RECURSION_DEPTH
    truncated: bool = False
    fetch_count: int = 0


class ExternalReferenceResolver:
    """Fetches and appends every schema reachable through import/include."""

    def __init__(self, fetcher: ResourceFetcher, parser: WSDLParser,
                 max_depth: int = DEFAULT_MAX_RECURSION_DEPTH,
                 log_level: LogLevel = LogLevel.INFO):
        self.fetcher = fetcher
        self.parser = parser
        self.max_depth = max_depth
        self.logger = create_logger(level=log_level, component="resolver")

    def new_context(self, schemas: List[Schema]) -> ResolutionContext:
        return ResolutionContext(schemas=schemas, max_depth=self.max_depth)

    def resolve_all(self, schemas: List[Schema], location: Location) -> ResolutionContext:
        """Resolve the externals of every inline schema of a WSDL in place.

        Inline schemas share the WSDL's location, so each is keyed by its
        position to keep them from shadowing each other in the visited set.
        """
        context = self.new_context(schemas)
        for index, schema in enumerate(list(schemas)):
            self.resolve(schema, location, context, key=f"{location}#schema{index}")
        return context

    def resolve(self, schema: Optional[Schema], location: Optional[Location],
                context: ResolutionContext, key: Optional[str] = None) -> None:
        """Resolve ``schema``'s imports and includes, recursing into each new schema.

        Fetch and parse errors propagate and abort the whole resolution.
        """
        if schema is None or location is None:
            return

        context.depth += 1
        if context.depth > context.max_depth:
            if not context.truncated:
                self.logger.warn(
                    "Recursion ceiling reached, remaining schema references are not resolved",
                    maxDepth=context.max_depth,
                    location=str(location),
                )
            context.truncated = True
            return

        schema_key = key or str(location)
        if context.visited.get(schema_key):
            return
        context.visited[schema_key] = True

        self.logger.info("Resolving external XSDs", location=schema_key, depth=context.depth)

        for schema_import in schema.imports:
            if not schema_import.schema_location:
                self.logger.warn("Don't know where to find XSD", namespace=schema_import.namespace)
                continue
            self._handle_external_schema(location, schema_import.schema_location, context)

        for include in schema.includes:
            if not include.schema_location:
                continue
            self._handle_external_schema(location, include.schema_location, context, including=schema)

    def _handle_external_schema(self, base: Location, reference: str,
                                context: ResolutionContext,
                                including: Optional[Schema] = None) -> None:
        new_location = base.resolve(reference)
        new_schema = self._download_schema_if_required(new_location, context)
        if new_schema is None:
            return
        if including is not None and not new_schema.target_namespace:
            # An included schema without target namespace takes the includer's.
            new_schema.target_namespace = including.target_namespace
            new_schema.namespace_prefixes.setdefault(None, including.target_namespace)
        context.schemas.append(new_schema)
        self.resolve(new_schema, new_location, context)

    def _download_schema_if_required(self, location: Location,
                                     context: ResolutionContext) -> Optional[Schema]:
        if context.visited.get(str(location)):
            return None

        data = self.fetcher.fetch(location)
        context.fetch_count += 1
        schema = self.parser.parse_schema(data, location)
        self.logger.schema_event("downloaded", str(location), targetNamespace=schema.target_namespace)
        return schema
