"""Object-oriented schema model for XSD representation."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Union


class ElementOccurrence:
    """Represents minOccurs/maxOccurs for elements."""

    def __init__(self, min_occurs: int = 1, max_occurs: Union[int, str] = 1):
        self.min = max(0, min_occurs)
        self.max = max_occurs if max_occurs == "unbounded" else max(1, int(max_occurs))

    @classmethod
    def from_attributes(cls, min_occurs: Optional[str], max_occurs: Optional[str]) -> "ElementOccurrence":
        """Build from raw minOccurs/maxOccurs attribute strings."""
        minimum = int(min_occurs) if min_occurs and min_occurs.isdigit() else 1
        if max_occurs == "unbounded":
            return cls(minimum, "unbounded")
        maximum = int(max_occurs) if max_occurs and max_occurs.isdigit() else 1
        return cls(minimum, maximum)

    @property
    def is_optional(self) -> bool:
        """Whether element is optional (minOccurs = 0)."""
        return self.min == 0

    @property
    def is_array(self) -> bool:
        """Whether element can occur multiple times."""
        return self.max == "unbounded" or (isinstance(self.max, int) and self.max > 1)

    def __str__(self) -> str:
        return f"[{self.min}..{self.max}]"


class AttributeUse(str, Enum):
    """Attribute usage types."""
    REQUIRED = "required"
    OPTIONAL = "optional"
    PROHIBITED = "prohibited"


class DerivationMethod(str, Enum):
    """Type derivation methods."""
    EXTENSION = "extension"
    RESTRICTION = "restriction"


class ContentType(str, Enum):
    """Complex type content types."""
    ELEMENT_ONLY = "elementOnly"
    MIXED = "mixed"
    EMPTY = "empty"
    SIMPLE = "simple"


@dataclass
class Annotation:
    """XSD annotation (documentation only)."""
    documentation: List[str] = field(default_factory=list)

    def add_documentation(self, text: Optional[str]) -> None:
        """Add documentation text."""
        if text and text.strip():
            self.documentation.append(text.strip())

    @property
    def text(self) -> str:
        return "\n".join(self.documentation)


class SchemaComponent:
    """Base class for all named schema components."""

    def __init__(self, name: str):
        self.name = name
        self.annotation = Annotation()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


class Attribute(SchemaComponent):
    """XSD attribute definition."""

    def __init__(self, name: str, type: Optional[str] = None):
        super().__init__(name)
        self.type = type
        self.ref: Optional[str] = None
        self.use: AttributeUse = AttributeUse.OPTIONAL

    @property
    def is_required(self) -> bool:
        return self.use == AttributeUse.REQUIRED


class Particle(SchemaComponent):
    """Base class for particles (element, choice, sequence, all, any)."""

    def __init__(self, name: str = ""):
        super().__init__(name)
        self.occurs = ElementOccurrence()


class Element(Particle):
    """XSD element declaration.

    ``type`` and ``ref`` keep the raw ``prefix:local`` reference strings as
    they appear in the document.
    """

    def __init__(self, name: str, type: Optional[str] = None):
        super().__init__(name)
        self.type = type
        self.ref: Optional[str] = None
        self.complex_type: Optional["ComplexType"] = None
        self.simple_type: Optional["SimpleType"] = None

    @property
    def declares_type(self) -> bool:
        """Whether a top-level declaration of this element yields its own Go type.

        An element typed by a type of the same local name reuses that type.
        """
        if self.complex_type is not None or self.simple_type is not None:
            return True
        return bool(self.type) and self.type.split(":")[-1] != self.name


class ModelGroup(Particle):
    """Base class for model groups (sequence, choice, all)."""

    def __init__(self, name: str = ""):
        super().__init__(name)
        self.particles: List[Particle] = []

    def add_particle(self, particle: Particle) -> None:
        """Add a particle to this group."""
        self.particles.append(particle)


class Sequence(ModelGroup):
    """XSD sequence group."""


class Choice(ModelGroup):
    """XSD choice group."""


class All(ModelGroup):
    """XSD all group."""


class Any(Particle):
    """XSD any element wildcard."""

    def __init__(self):
        super().__init__("any")


class SimpleType(SchemaComponent):
    """XSD simple type definition."""

    def __init__(self, name: str):
        super().__init__(name)
        self.base: Optional[str] = None
        self.enumeration_values: List[str] = []
        self.list_item_type: Optional[str] = None
        self.union_member_types: List[str] = []

    @property
    def variety(self) -> str:
        """Get simple type variety: atomic, list, or union."""
        if self.union_member_types:
            return "union"
        elif self.list_item_type:
            return "list"
        else:
            return "atomic"


class ComplexType(SchemaComponent):
    """XSD complex type definition."""

    def __init__(self, name: str):
        super().__init__(name)
        self.content_type: ContentType = ContentType.ELEMENT_ONLY
        self.particle: Optional[ModelGroup] = None
        self.attributes: List[Attribute] = []
        self.base: Optional[str] = None
        self.derivation_method: Optional[DerivationMethod] = None
        self.mixed: bool = False

    def add_attribute(self, attribute: Attribute) -> None:
        """Add an attribute to this complex type."""
        self.attributes.append(attribute)

    def iter_elements(self) -> Iterator[Element]:
        """Yield element particles, flattening nested sequence/choice/all groups."""
        stack = [iter([self.particle])] if self.particle else []
        while stack:
            try:
                particle = next(stack[-1])
            except StopIteration:
                stack.pop()
                continue
            if isinstance(particle, Element):
                yield particle
            elif isinstance(particle, ModelGroup):
                stack.append(iter(particle.particles))

    @property
    def has_simple_content(self) -> bool:
        return self.content_type == ContentType.SIMPLE


class Import:
    """xs:import directive."""

    def __init__(self, namespace: Optional[str] = None, schema_location: Optional[str] = None):
        self.namespace = namespace
        self.schema_location = schema_location

    def __repr__(self) -> str:
        return f"Import(namespace={self.namespace!r}, schema_location={self.schema_location!r})"


class Include:
    """xs:include directive."""

    def __init__(self, schema_location: Optional[str] = None):
        self.schema_location = schema_location

    def __repr__(self) -> str:
        return f"Include(schema_location={self.schema_location!r})"


class Schema:
    """Root XSD schema representation."""

    def __init__(self, target_namespace: Optional[str] = None):
        self.target_namespace = target_namespace or ""
        self.namespace_prefixes: Dict[str, str] = {}

        # Directives and components, in declaration order
        self.imports: List[Import] = []
        self.includes: List[Include] = []
        self.simple_types: List[SimpleType] = []
        self.complex_types: List[ComplexType] = []
        self.elements: List[Element] = []

    def resolve_prefix(self, qualified_name: Optional[str]) -> str:
        """Namespace URI for the prefix of ``prefix:local``; unprefixed names
        use the default namespace."""
        if not qualified_name:
            return ""
        prefix = qualified_name.split(":", 1)[0] if ":" in qualified_name else None
        return self.namespace_prefixes.get(prefix, "")

    def __repr__(self) -> str:
        return (
            f"Schema(target_namespace={self.target_namespace!r}, "
            f"simple_types={len(self.simple_types)}, complex_types={len(self.complex_types)}, "
            f"elements={len(self.elements)})"
        )
