"""Cross-cutting queries over a resolved WSDL used while emitting code."""

from typing import List, Tuple

from .logger import LogLevel, create_logger
from .mapper import strip_ns
from .wsdl_model import WSDLDocument


class SemanticLookup:
    """Message, binding and service lookups by (namespace-stripped) name."""

    def __init__(self, document: WSDLDocument, log_level: LogLevel = LogLevel.INFO):
        self.document = document
        self.logger = create_logger(level=log_level, component="lookup")

    def _find_message_type(self, message_name: str) -> Tuple[str, str]:
        """(type name, namespace URI) of a message's first part."""
        message_name = strip_ns(message_name)

        for message in self.document.messages:
            if message.name != message_name:
                continue

            # Assumes document/literal wrapped
            if not message.parts:
                self.logger.warn(
                    "Message doesn't have any parts, ignoring message",
                    messageName=message.name,
                )
                continue

            part = message.parts[0]
            if part.type:
                namespace = self._wsdl_namespace(part.type)
                return strip_ns(part.type), namespace

            element_ref = strip_ns(part.element)
            for schema in self.document.schemas:
                for element in schema.elements:
                    if element.name.lower() != element_ref.lower():
                        continue
                    if element.type:
                        return strip_ns(element.type), schema.resolve_prefix(element.type)
                    return element.name, schema.target_namespace

        return "", ""

    def _wsdl_namespace(self, qualified_name: str) -> str:
        prefix = qualified_name.split(":", 1)[0] if ":" in qualified_name else None
        return self.document.namespace_prefixes.get(prefix, "")

    def find_type(self, message_name: str) -> str:
        """Type of the message's first part, or "" when it cannot be determined."""
        return self._find_message_type(message_name)[0]

    def find_type_namespace(self, message_name: str) -> str:
        """Namespace URI of the type returned by :meth:`find_type`."""
        return self._find_message_type(message_name)[1]

    def find_soap_action(self, operation_name: str, port_type_name: str) -> str:
        for binding in self.document.bindings:
            if strip_ns(binding.type) != port_type_name:
                continue
            for operation in binding.operations:
                if operation.name == operation_name:
                    return operation.soap_action
        return ""

    def find_service_address(self, port_name: str) -> str:
        for service in self.document.services:
            for port in service.ports:
                if port.name == port_name:
                    return port.address
        return ""

    def find_port_names(self, port_type_name: str) -> List[str]:
        """Names of the ports whose binding implements ``port_type_name``."""
        binding_names = {
            binding.name for binding in self.document.bindings
            if strip_ns(binding.type) == port_type_name
        }
        return [
            port.name
            for service in self.document.services
            for port in service.ports
            if strip_ns(port.binding) in binding_names
        ]

    def template_globals(self) -> dict:
        """Helpers exposed to the code templates."""
        return {
            "find_type": self.find_type,
            "find_type_namespace": self.find_type_namespace,
            "find_soap_action": self.find_soap_action,
            "find_service_address": self.find_service_address,
            "find_port_names": self.find_port_names,
        }
