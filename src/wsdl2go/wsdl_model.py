"""WSDL 1.1 document model: messages, port types, bindings and services."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .schema_model import Schema


@dataclass
class Part:
    """Message part, typed either inline (``type``) or by an element reference."""
    name: str
    type: str = ""
    element: str = ""


@dataclass
class Message:
    name: str
    parts: List[Part] = field(default_factory=list)


@dataclass
class Operation:
    """Abstract operation of a port type."""
    name: str
    documentation: str = ""
    input: str = ""
    output: str = ""
    faults: List[str] = field(default_factory=list)


@dataclass
class PortType:
    name: str
    documentation: str = ""
    operations: List[Operation] = field(default_factory=list)


@dataclass
class BindingOperation:
    name: str
    soap_action: str = ""
    style: str = ""


@dataclass
class Binding:
    """Binding of a port type (``type``) to SOAP."""
    name: str
    type: str = ""
    style: str = ""
    transport: str = ""
    operations: List[BindingOperation] = field(default_factory=list)


@dataclass
class Port:
    name: str
    binding: str = ""
    address: str = ""


@dataclass
class Service:
    name: str
    documentation: str = ""
    ports: List[Port] = field(default_factory=list)


@dataclass
class WSDLDocument:
    """Parsed WSDL; ``schemas`` is the resolved schema set, appended to
    while external references are resolved."""
    target_namespace: str = ""
    name: str = ""
    namespace_prefixes: Dict[Optional[str], str] = field(default_factory=dict)
    messages: List[Message] = field(default_factory=list)
    port_types: List[PortType] = field(default_factory=list)
    bindings: List[Binding] = field(default_factory=list)
    services: List[Service] = field(default_factory=list)
    schemas: List[Schema] = field(default_factory=list)
