"""Post-resolution refinement of the schema set: type deduplication."""

from typing import Dict, List, Optional

from .logger import LogLevel, create_logger
from .schema_model import Schema


def type_key(namespace: Optional[str], name: str, ignore_namespaces: bool = False) -> str:
    """Identity of a type definition for deduplication and naming."""
    if ignore_namespaces:
        return name
    return f"{namespace or ''}:{name}"


class TypeDeduplicator:
    """Drops definitions whose key was already seen in an earlier position.

    The walk covers simple types, complex types and then top-level elements
    of each schema in the order schemas were appended; the first occurrence
    wins. Elements share the key space with types because each of them is
    emitted as a Go type of the same name. Elements typed by a same-named
    type declare nothing of their own and are left alone.
    """

    def __init__(self, ignore_namespaces: bool = False, log_level: LogLevel = LogLevel.INFO):
        self.ignore_namespaces = ignore_namespaces
        self.logger = create_logger(level=log_level, component="refinement")

    def remove_duplicates(self, schemas: List[Schema]) -> int:
        """Prune duplicates in place and return how many were dropped."""
        handled: Dict[str, bool] = {}
        removed = 0

        for schema in schemas:
            for attribute in ("simple_types", "complex_types", "elements"):
                unique = []
                for definition in getattr(schema, attribute):
                    if attribute == "elements" and not definition.declares_type:
                        unique.append(definition)
                        continue
                    key = type_key(schema.target_namespace, definition.name, self.ignore_namespaces)
                    if handled.get(key):
                        removed += 1
                        self.logger.debug("Dropping duplicate definition", typeKey=key, kind=attribute)
                        continue
                    handled[key] = True
                    unique.append(definition)
                setattr(schema, attribute, unique)

        if removed:
            self.logger.info("Removed duplicate types", count=removed)
        return removed
