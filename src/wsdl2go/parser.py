"""WSDL and XSD parser producing the structural model.

Only the parts needed to resolve type and reference names are read; the
documents are not validated against XML Schema rules.
"""

from typing import Optional, Union

from lxml import etree
from xmlschema.names import SOAP_NAMESPACE, WSDL_NAMESPACE, XSD_NAMESPACE

from .exceptions import ParseError
from .location import Location
from .logger import LogLevel, create_logger
from .schema_model import (
    All, Annotation, Any, Attribute, AttributeUse, Choice, ComplexType,
    ContentType, DerivationMethod, Element, ElementOccurrence, Import,
    Include, ModelGroup, Schema, Sequence, SimpleType
)
from .wsdl_model import (
    Binding, BindingOperation, Message, Operation, Part, Port, PortType,
    Service, WSDLDocument
)

SOAP12_NAMESPACE = "http://schemas.xmlsoap.org/wsdl/soap12/"
HTTP_NAMESPACE = "http://schemas.xmlsoap.org/wsdl/http/"

SOAP_NAMESPACES = (SOAP_NAMESPACE, SOAP12_NAMESPACE)


def xsd(tag: str) -> str:
    return f"{{{XSD_NAMESPACE}}}{tag}"


def wsdl(tag: str) -> str:
    return f"{{{WSDL_NAMESPACE}}}{tag}"


def local_name(tag: str) -> str:
    if "}" in tag:
        return tag.rsplit("}", 1)[1]
    return tag


def _children(elem):
    """Child elements, skipping comments and processing instructions."""
    return [child for child in elem if isinstance(child.tag, str)]


def _find_extension(elem, tag: str):
    """First child ``tag`` in any SOAP extension namespace."""
    for namespace in SOAP_NAMESPACES:
        found = elem.find(f"{{{namespace}}}{tag}")
        if found is not None:
            return found
    return None


class WSDLParser:
    """Parser for WSDL documents and XSD schema payloads."""

    def __init__(self, log_level: LogLevel = LogLevel.INFO):
        self.logger = create_logger(level=log_level, component="parser")

    def parse_wsdl(self, data: bytes, location: Union[Location, str]) -> WSDLDocument:
        """Parse a WSDL document, including its inline schemas."""
        root = self._parse_xml(data, location)
        if root.tag != wsdl("definitions"):
            raise ParseError(location, f"expected wsdl:definitions, found {local_name(root.tag)}")

        document = WSDLDocument(
            target_namespace=root.get("targetNamespace", ""),
            name=root.get("name", ""),
            namespace_prefixes=dict(root.nsmap),
        )

        for types in root.iterfind(wsdl("types")):
            for schema_elem in types.iterfind(xsd("schema")):
                document.schemas.append(self._convert_schema(schema_elem))

        for message in root.iterfind(wsdl("message")):
            document.messages.append(self._convert_message(message))

        for port_type in root.iterfind(wsdl("portType")):
            document.port_types.append(self._convert_port_type(port_type))

        for binding in root.iterfind(wsdl("binding")):
            document.bindings.append(self._convert_binding(binding))

        for service in root.iterfind(wsdl("service")):
            document.services.append(self._convert_service(service))

        self.logger.info(
            "WSDL parsed",
            location=str(location),
            targetNamespace=document.target_namespace,
            schemas=len(document.schemas),
            messages=len(document.messages),
            portTypes=len(document.port_types),
        )
        return document

    def parse_schema(self, data: bytes, location: Union[Location, str]) -> Schema:
        """Parse a standalone XSD document."""
        root = self._parse_xml(data, location)
        if root.tag != xsd("schema"):
            raise ParseError(location, f"expected xs:schema, found {local_name(root.tag)}")

        schema = self._convert_schema(root)
        self.logger.debug(
            "Schema parsed",
            location=str(location),
            targetNamespace=schema.target_namespace,
            complexTypes=len(schema.complex_types),
            simpleTypes=len(schema.simple_types),
        )
        return schema

    def _parse_xml(self, data: bytes, location):
        parser = etree.XMLParser(resolve_entities=False, no_network=True, remove_comments=True)
        try:
            return etree.fromstring(data, parser)
        except (etree.XMLSyntaxError, ValueError) as e:
            self.logger.error("XML parsing error", location=str(location), error=str(e))
            raise ParseError(location, str(e)) from e

    # WSDL components

    def _documentation(self, elem) -> str:
        doc = elem.find(wsdl("documentation"))
        if doc is None or not doc.text:
            return ""
        return doc.text.strip()

    def _convert_message(self, elem) -> Message:
        message = Message(name=elem.get("name", ""))
        for part in elem.iterfind(wsdl("part")):
            message.parts.append(Part(
                name=part.get("name", ""),
                type=part.get("type", ""),
                element=part.get("element", ""),
            ))
        return message

    def _convert_port_type(self, elem) -> PortType:
        port_type = PortType(name=elem.get("name", ""), documentation=self._documentation(elem))
        for op in elem.iterfind(wsdl("operation")):
            operation = Operation(name=op.get("name", ""), documentation=self._documentation(op))
            input_elem = op.find(wsdl("input"))
            if input_elem is not None:
                operation.input = input_elem.get("message", "")
            output_elem = op.find(wsdl("output"))
            if output_elem is not None:
                operation.output = output_elem.get("message", "")
            operation.faults = [fault.get("message", "") for fault in op.iterfind(wsdl("fault"))]
            port_type.operations.append(operation)
        return port_type

    def _convert_binding(self, elem) -> Binding:
        binding = Binding(name=elem.get("name", ""), type=elem.get("type", ""))
        soap_binding = _find_extension(elem, "binding")
        if soap_binding is not None:
            binding.style = soap_binding.get("style", "document")
            binding.transport = soap_binding.get("transport", "")
        else:
            self.logger.warn("Binding without SOAP extension", binding=binding.name)

        for op in elem.iterfind(wsdl("operation")):
            operation = BindingOperation(name=op.get("name", ""))
            soap_operation = _find_extension(op, "operation")
            if soap_operation is not None:
                operation.soap_action = soap_operation.get("soapAction", "")
                operation.style = soap_operation.get("style", "")
            binding.operations.append(operation)
        return binding

    def _convert_service(self, elem) -> Service:
        service = Service(name=elem.get("name", ""), documentation=self._documentation(elem))
        for port_elem in elem.iterfind(wsdl("port")):
            port = Port(name=port_elem.get("name", ""), binding=port_elem.get("binding", ""))
            address = _find_extension(port_elem, "address")
            if address is None:
                address = port_elem.find(f"{{{HTTP_NAMESPACE}}}address")
            if address is not None:
                port.address = address.get("location", "")
            service.ports.append(port)
        return service

    # XSD components

    def _convert_schema(self, elem) -> Schema:
        schema = Schema(target_namespace=elem.get("targetNamespace"))
        schema.namespace_prefixes = dict(elem.nsmap)

        for child in _children(elem):
            tag = child.tag
            if tag == xsd("import"):
                schema.imports.append(Import(child.get("namespace"), child.get("schemaLocation")))
            elif tag == xsd("include"):
                schema.includes.append(Include(child.get("schemaLocation")))
            elif tag == xsd("simpleType"):
                schema.simple_types.append(self._convert_simple_type(child, child.get("name", "")))
            elif tag == xsd("complexType"):
                schema.complex_types.append(self._convert_complex_type(child, child.get("name", "")))
            elif tag == xsd("element"):
                schema.elements.append(self._convert_element(child))

        return schema

    def _add_annotation(self, elem, annotation: Annotation) -> None:
        for doc in elem.iterfind(f"{xsd('annotation')}/{xsd('documentation')}"):
            annotation.add_documentation(doc.text)

    def _convert_element(self, elem) -> Element:
        ref = elem.get("ref")
        name = elem.get("name") or (ref.split(":")[-1] if ref else "")
        element = Element(name, elem.get("type"))
        element.ref = ref
        element.occurs = ElementOccurrence.from_attributes(elem.get("minOccurs"), elem.get("maxOccurs"))

        complex_elem = elem.find(xsd("complexType"))
        if complex_elem is not None:
            element.complex_type = self._convert_complex_type(complex_elem, name)
        simple_elem = elem.find(xsd("simpleType"))
        if simple_elem is not None:
            element.simple_type = self._convert_simple_type(simple_elem, name)

        self._add_annotation(elem, element.annotation)
        return element

    def _convert_attribute(self, elem) -> Attribute:
        ref = elem.get("ref")
        attribute = Attribute(elem.get("name") or (ref.split(":")[-1] if ref else ""), elem.get("type"))
        attribute.ref = ref
        use = elem.get("use", "optional")
        if use == "required":
            attribute.use = AttributeUse.REQUIRED
        elif use == "prohibited":
            attribute.use = AttributeUse.PROHIBITED

        simple_elem = elem.find(xsd("simpleType"))
        if attribute.type is None and simple_elem is not None:
            attribute.type = self._convert_simple_type(simple_elem, attribute.name).base

        self._add_annotation(elem, attribute.annotation)
        return attribute

    def _convert_model_group(self, elem) -> Optional[ModelGroup]:
        group_classes = {xsd("sequence"): Sequence, xsd("choice"): Choice, xsd("all"): All}
        group_class = group_classes.get(elem.tag)
        if group_class is None:
            return None

        group = group_class()
        group.occurs = ElementOccurrence.from_attributes(elem.get("minOccurs"), elem.get("maxOccurs"))
        for child in _children(elem):
            if child.tag == xsd("element"):
                group.add_particle(self._convert_element(child))
            elif child.tag == xsd("any"):
                wildcard = Any()
                wildcard.occurs = ElementOccurrence.from_attributes(child.get("minOccurs"), child.get("maxOccurs"))
                group.add_particle(wildcard)
            else:
                nested = self._convert_model_group(child)
                if nested is not None:
                    group.add_particle(nested)
        return group

    def _convert_type_content(self, elem, complex_type: ComplexType) -> None:
        """Read particle and attributes declared directly below ``elem``."""
        for child in _children(elem):
            if child.tag == xsd("attribute"):
                complex_type.add_attribute(self._convert_attribute(child))
            elif complex_type.particle is None:
                complex_type.particle = self._convert_model_group(child)

    def _convert_complex_type(self, elem, name: str) -> ComplexType:
        complex_type = ComplexType(name)
        complex_type.mixed = elem.get("mixed") == "true"
        self._add_annotation(elem, complex_type.annotation)

        complex_content = elem.find(xsd("complexContent"))
        simple_content = elem.find(xsd("simpleContent"))
        content = complex_content if complex_content is not None else simple_content

        if content is None:
            self._convert_type_content(elem, complex_type)
        else:
            for derivation in _children(content):
                if derivation.tag == xsd("extension"):
                    complex_type.derivation_method = DerivationMethod.EXTENSION
                elif derivation.tag == xsd("restriction"):
                    complex_type.derivation_method = DerivationMethod.RESTRICTION
                else:
                    continue
                complex_type.base = derivation.get("base")
                self._convert_type_content(derivation, complex_type)
                break

        if simple_content is not None:
            complex_type.content_type = ContentType.SIMPLE
        elif complex_type.mixed:
            complex_type.content_type = ContentType.MIXED
        elif complex_type.particle is None and complex_type.base is None:
            complex_type.content_type = ContentType.EMPTY

        return complex_type

    def _convert_simple_type(self, elem, name: str) -> SimpleType:
        simple_type = SimpleType(name)
        self._add_annotation(elem, simple_type.annotation)

        restriction = elem.find(xsd("restriction"))
        if restriction is not None:
            simple_type.base = restriction.get("base")
            nested = restriction.find(xsd("simpleType"))
            if simple_type.base is None and nested is not None:
                simple_type.base = self._convert_simple_type(nested, name).base
            simple_type.enumeration_values = [
                enum.get("value", "") for enum in restriction.iterfind(xsd("enumeration"))
            ]

        list_elem = elem.find(xsd("list"))
        if list_elem is not None:
            simple_type.list_item_type = list_elem.get("itemType", "string")

        union = elem.find(xsd("union"))
        if union is not None:
            simple_type.union_member_types = (union.get("memberTypes") or "").split()

        return simple_type
