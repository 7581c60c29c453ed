"""Pytest configuration and fixtures for wsdl2go tests."""

import tempfile
from pathlib import Path
from typing import Dict, Generator
from unittest.mock import Mock

import pytest

from wsdl2go.config import Config
from wsdl2go.exceptions import FetchError
from wsdl2go.fetcher import ResourceFetcher
from wsdl2go.logger import LogLevel


PERSON_XSD = '''<?xml version="1.0" encoding="UTF-8"?>
<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema"
           targetNamespace="http://example.com/people"
           xmlns:ppl="http://example.com/people"
           elementFormDefault="qualified">

    <xs:complexType name="Person">
        <xs:annotation>
            <xs:documentation>A person known to the service</xs:documentation>
        </xs:annotation>
        <xs:sequence>
            <xs:element name="name" type="xs:string"/>
        </xs:sequence>
    </xs:complexType>

</xs:schema>'''


COMMON_XSD = '''<?xml version="1.0" encoding="UTF-8"?>
<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema"
           targetNamespace="http://example.com/common"
           xmlns:cmn="http://example.com/common"
           xmlns:ppl="http://example.com/people">

    <xs:import namespace="http://example.com/people" schemaLocation="person.xsd"/>

    <xs:simpleType name="Status">
        <xs:restriction base="xs:string">
            <xs:enumeration value="active"/>
            <xs:enumeration value="retired"/>
        </xs:restriction>
    </xs:simpleType>

    <xs:complexType name="Team">
        <xs:sequence>
            <xs:element name="member" type="ppl:Person" maxOccurs="unbounded"/>
            <xs:element name="status" type="cmn:Status" minOccurs="0"/>
        </xs:sequence>
        <xs:attribute name="id" type="xs:int" use="required"/>
    </xs:complexType>

</xs:schema>'''


SERVICE_WSDL = '''<?xml version="1.0" encoding="UTF-8"?>
<wsdl:definitions xmlns:wsdl="http://schemas.xmlsoap.org/wsdl/"
                  xmlns:soap="http://schemas.xmlsoap.org/wsdl/soap/"
                  xmlns:xsd="http://www.w3.org/2001/XMLSchema"
                  xmlns:tns="http://example.com/service"
                  targetNamespace="http://example.com/service"
                  name="PersonService">

    <wsdl:types>
        <xsd:schema targetNamespace="http://example.com/service"
                    xmlns:ppl="http://example.com/people"
                    elementFormDefault="qualified">
            <xsd:import namespace="http://example.com/people" schemaLocation="person.xsd"/>
            <xsd:import namespace="http://example.com/common" schemaLocation="common.xsd"/>
            <xsd:import namespace="http://example.com/unknown"/>

            <xsd:element name="GetPersonRequest">
                <xsd:complexType>
                    <xsd:sequence>
                        <xsd:element name="id" type="xsd:int"/>
                    </xsd:sequence>
                </xsd:complexType>
            </xsd:element>
            <xsd:element name="GetPersonResponse" type="ppl:Person"/>
        </xsd:schema>
    </wsdl:types>

    <wsdl:message name="GetPersonInput">
        <wsdl:part name="parameters" element="tns:GetPersonRequest"/>
    </wsdl:message>
    <wsdl:message name="GetPersonOutput">
        <wsdl:part name="parameters" element="tns:GetPersonResponse"/>
    </wsdl:message>
    <wsdl:message name="PingInput">
        <wsdl:part name="text" type="xsd:string"/>
    </wsdl:message>
    <wsdl:message name="EmptyMessage"/>

    <wsdl:portType name="PersonPortType">
        <wsdl:documentation>Looks people up</wsdl:documentation>
        <wsdl:operation name="GetPerson">
            <wsdl:documentation>Returns one person by id</wsdl:documentation>
            <wsdl:input message="tns:GetPersonInput"/>
            <wsdl:output message="tns:GetPersonOutput"/>
        </wsdl:operation>
        <wsdl:operation name="Ping">
            <wsdl:input message="tns:PingInput"/>
            <wsdl:output message="tns:EmptyMessage"/>
        </wsdl:operation>
    </wsdl:portType>

    <wsdl:binding name="PersonBinding" type="tns:PersonPortType">
        <soap:binding style="document" transport="http://schemas.xmlsoap.org/soap/http"/>
        <wsdl:operation name="GetPerson">
            <soap:operation soapAction="http://example.com/service/GetPerson"/>
        </wsdl:operation>
        <wsdl:operation name="Ping">
            <soap:operation soapAction="http://example.com/service/Ping"/>
        </wsdl:operation>
    </wsdl:binding>

    <wsdl:service name="PersonService">
        <wsdl:port name="PersonPort" binding="tns:PersonBinding">
            <soap:address location="http://example.com/soap"/>
        </wsdl:port>
    </wsdl:service>

</wsdl:definitions>'''


def schema_with_imports(target_namespace: str, *locations: str, body: str = "") -> str:
    """Minimal XSD importing each of ``locations``."""
    imports = "\n".join(
        f'    <xs:import namespace="urn:{location}" schemaLocation="{location}"/>'
        for location in locations
    )
    return f'''<?xml version="1.0" encoding="UTF-8"?>
<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema" targetNamespace="{target_namespace}">
{imports}
{body}
</xs:schema>'''


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def service_wsdl_file(temp_dir: Path) -> Path:
    """Service WSDL importing person.xsd directly and through common.xsd."""
    (temp_dir / "person.xsd").write_text(PERSON_XSD, encoding="utf-8")
    (temp_dir / "common.xsd").write_text(COMMON_XSD, encoding="utf-8")
    wsdl_file = temp_dir / "service.wsdl"
    wsdl_file.write_text(SERVICE_WSDL, encoding="utf-8")
    return wsdl_file


@pytest.fixture
def default_config(temp_dir: Path) -> Config:
    """Default configuration for testing."""
    config = Config(output_file=temp_dir / "out" / "myservice.go")
    config.logging.level = LogLevel.ERROR  # Suppress logs in tests
    return config


def make_memory_fetcher(documents: Dict[str, str]) -> Mock:
    """Fetcher mock serving ``documents`` keyed by canonical location."""
    fetcher = Mock(spec=ResourceFetcher)

    def fetch(location):
        try:
            return documents[str(location)].encode("utf-8")
        except KeyError:
            raise FetchError(location, "not found") from None

    fetcher.fetch.side_effect = fetch
    return fetcher


@pytest.fixture
def memory_fetcher():
    """Factory for in-memory fetchers."""
    return make_memory_fetcher
