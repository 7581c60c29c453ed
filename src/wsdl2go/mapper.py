"""Mapping of XSD type references and raw names to Go types and identifiers."""

from types import MappingProxyType
from typing import Optional

GO_RESERVED_WORDS = frozenset({
    "break", "default", "func", "interface", "select",
    "case", "defer", "go", "map", "struct",
    "chan", "else", "goto", "package", "switch",
    "const", "fallthrough", "if", "range", "type",
    "continue", "for", "import", "return", "var",
})

# Keys are lower-cased XSD local names
XSD_TO_GO_TYPES = MappingProxyType({
    "string": "string",
    "token": "string",
    "float": "float32",
    "double": "float64",
    "decimal": "float64",
    "integer": "int32",
    "int": "int32",
    "short": "int16",
    "byte": "int8",
    "long": "int64",
    "boolean": "bool",
    "datetime": "time.Time",
    "date": "time.Time",
    "time": "time.Time",
    "base64binary": "[]byte",
    "hexbinary": "[]byte",
    "unsignedint": "uint32",
    "unsignedshort": "uint16",
    "unsignedbyte": "byte",
    "unsignedlong": "uint64",
    "anytype": "interface{}",
})


def strip_ns(xsd_type: Optional[str]) -> str:
    """``prefix:local`` -> ``local``."""
    parts = (xsd_type or "").split(":")
    if len(parts) == 2:
        return parts[1]
    return parts[0]


def ns_prefix(xsd_type: Optional[str]) -> str:
    """``prefix:local`` -> ``prefix``; empty when unprefixed."""
    parts = (xsd_type or "").split(":")
    if len(parts) == 2:
        return parts[0]
    return ""


def normalize(value: str) -> str:
    """Drop every character that is not a letter, digit or underscore."""
    return "".join(ch for ch in value if ch.isalpha() or ch.isdecimal() or ch == "_")


def replace_reserved_words(identifier: str) -> str:
    """Normalize ``identifier`` and suffix Go keywords with an underscore."""
    value = normalize(identifier)
    if value in GO_RESERVED_WORDS:
        return value + "_"
    return value


def export_identifier(identifier: str) -> str:
    """Upper-case the first character."""
    if not identifier:
        return identifier
    return identifier[0].upper() + identifier[1:]


def primitive_type(xsd_type: Optional[str]) -> Optional[str]:
    """Go type for an XSD built-in, or None for user-defined types."""
    return XSD_TO_GO_TYPES.get(strip_ns(xsd_type).lower())


def comment(text: Optional[str]) -> str:
    """Turn documentation into a Go ``//`` block, one line per source line."""
    if not text:
        return ""
    lines = text.split("\n")
    if not any(line.strip() for line in lines):
        return ""
    return "".join("\n// " + line.lstrip() for line in lines)


def go_string(value: Optional[str]) -> str:
    """Escape double quotes for a Go string literal."""
    return (value or "").replace('"', '\\"')


class TypeMapper:
    """Type references and identifiers for generated Go code.

    ``ignore_type_namespaces`` turns off qualification of user-defined type
    names with their namespace; ``export_all_types`` capitalizes type names.
    """

    def __init__(self, ignore_type_namespaces: bool = False, export_all_types: bool = False):
        self.ignore_type_namespaces = ignore_type_namespaces
        self.export_all_types = export_all_types

    def make_public(self, identifier: str) -> str:
        if not self.export_all_types:
            return identifier
        return export_identifier(identifier)

    def make_field_public(self, identifier: str) -> str:
        return export_identifier(identifier)

    def _qualify(self, name: str, namespace: str) -> str:
        if not self.ignore_type_namespaces and namespace:
            return namespace + name
        return name

    def type_name(self, name: str, namespace: str = "") -> str:
        """Name of a generated type declaration."""
        return replace_reserved_words(self.make_public(self._qualify(name, namespace)))

    def field_name(self, name: str) -> str:
        """Name of a generated struct field."""
        return replace_reserved_words(self.make_field_public(name))

    def to_type_ns(self, xsd_type: Optional[str], namespace: Optional[str] = None) -> str:
        """Go type for an XSD reference; user-defined types become pointers.

        ``namespace`` qualifies user-defined names; when None the reference's
        own prefix is used.
        """
        builtin = primitive_type(xsd_type)
        if builtin is not None:
            return builtin

        if namespace is None:
            namespace = ns_prefix(xsd_type)
        return "*" + self.type_name(strip_ns(xsd_type), namespace)

    def to_type(self, xsd_type: Optional[str]) -> str:
        return self.to_type_ns(xsd_type)

    def to_value_type(self, xsd_type: Optional[str], namespace: Optional[str] = None) -> str:
        """Like :meth:`to_type_ns` but without the pointer, for type definitions."""
        return self.to_type_ns(xsd_type, namespace).lstrip("*")

    def element_type(self, element, schema) -> str:
        """Go type of a struct field declared by ``element`` inside ``schema``.

        Inline complex types are rendered as anonymous structs by the
        templates and are not handled here.
        """
        if element.simple_type is not None:
            go_type = self.simple_type_base(element.simple_type, schema)
        else:
            reference = element.type or element.ref
            if reference:
                go_type = self.to_type_ns(reference, schema.resolve_prefix(reference))
            else:
                go_type = XSD_TO_GO_TYPES["anytype"]

        if element.occurs.is_array:
            return "[]" + go_type
        return go_type

    def simple_type_base(self, simple_type, schema) -> str:
        """Underlying Go type of a simple type definition."""
        if simple_type.variety == "list":
            item = simple_type.list_item_type
            return "[]" + self.to_value_type(item, schema.resolve_prefix(item))
        if simple_type.variety == "union" or not simple_type.base:
            return "string"
        return self.to_value_type(simple_type.base, schema.resolve_prefix(simple_type.base))

    def template_globals(self) -> dict:
        """Helpers exposed to the code templates."""
        return {
            "primitive_type": primitive_type,
            "element_type": self.element_type,
            "simple_type_base": self.simple_type_base,
            "normalize": normalize,
            "replace_reserved_words": replace_reserved_words,
            "strip_ns": strip_ns,
            "comment": comment,
            "go_string": go_string,
            "make_public": self.make_public,
            "make_field_public": self.make_field_public,
            "type_name": self.type_name,
            "field_name": self.field_name,
            "to_type": self.to_type,
            "to_type_ns": self.to_type_ns,
            "to_value_type": self.to_value_type,
        }
