"""Tests for external schema reference resolution."""

import pytest

from wsdl2go.exceptions import FetchError, ParseError
from wsdl2go.location import Location
from wsdl2go.logger import LogLevel
from wsdl2go.parser import WSDLParser
from wsdl2go.resolver import ExternalReferenceResolver

from conftest import schema_with_imports


BASE = "http://example.com/xsd/"


def make_resolver(fetcher, max_depth=100):
    parser = WSDLParser(log_level=LogLevel.ERROR)
    return ExternalReferenceResolver(fetcher, parser, max_depth=max_depth, log_level=LogLevel.ERROR)


def resolve_root(resolver, root_text, root_name="root.xsd"):
    location = Location.parse(BASE + root_name)
    root = resolver.parser.parse_schema(root_text.encode(), location)
    context = resolver.new_context([root])
    resolver.resolve(root, location, context)
    return context


def namespaces(context):
    return [schema.target_namespace for schema in context.schemas]


class TestResolution:
    """Tests for the recursive import/include walk."""

    def test_shared_import_fetched_once(self, memory_fetcher):
        """Test a schema reachable over two paths is fetched and appended once."""
        fetcher = memory_fetcher({
            BASE + "a.xsd": schema_with_imports("urn:a"),
            BASE + "b.xsd": schema_with_imports("urn:b", "a.xsd"),
        })
        resolver = make_resolver(fetcher)

        context = resolve_root(resolver, schema_with_imports("urn:root", "a.xsd", "b.xsd"))

        assert namespaces(context) == ["urn:root", "urn:a", "urn:b"]
        assert context.fetch_count == 2
        assert fetcher.fetch.call_count == 2
        assert not context.truncated

    def test_cycle_terminates(self, memory_fetcher):
        """Test mutually importing schemas terminate and appear once each."""
        fetcher = memory_fetcher({
            BASE + "a.xsd": schema_with_imports("urn:a", "b.xsd"),
            BASE + "b.xsd": schema_with_imports("urn:b", "a.xsd", "root.xsd"),
        })
        resolver = make_resolver(fetcher)

        context = resolve_root(resolver, schema_with_imports("urn:root", "a.xsd"))

        assert namespaces(context) == ["urn:root", "urn:a", "urn:b"]
        assert context.fetch_count == 2

    def test_includes_followed_after_imports(self, memory_fetcher):
        """Test includes are resolved relative to the including schema."""
        fetcher = memory_fetcher({
            BASE + "a.xsd": schema_with_imports("urn:a"),
            BASE + "parts/inc.xsd": schema_with_imports("urn:root", "../a.xsd"),
        })
        resolver = make_resolver(fetcher)
        root = schema_with_imports(
            "urn:root", body='<xs:include schemaLocation="parts/inc.xsd"/>\n<xs:include/>'
        )

        context = resolve_root(resolver, root)

        assert namespaces(context) == ["urn:root", "urn:root", "urn:a"]

    def test_include_without_namespace_adopts_includer(self, memory_fetcher):
        """Test an included schema without targetNamespace joins the including namespace."""
        fetcher = memory_fetcher({
            BASE + "inc.xsd": '''<?xml version="1.0" encoding="UTF-8"?>
<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema">
    <xs:complexType name="Item">
        <xs:sequence>
            <xs:element name="sku" type="xs:string"/>
        </xs:sequence>
    </xs:complexType>
</xs:schema>''',
        })
        resolver = make_resolver(fetcher)
        root = schema_with_imports("urn:svc", body='<xs:include schemaLocation="inc.xsd"/>')

        context = resolve_root(resolver, root)

        included = context.schemas[1]
        assert included.target_namespace == "urn:svc"
        assert included.resolve_prefix("Item") == "urn:svc"

    def test_imported_schema_keeps_empty_namespace(self, memory_fetcher):
        """Test only includes adopt the referencing schema's namespace."""
        fetcher = memory_fetcher({
            BASE + "plain.xsd": '<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema"/>',
        })
        resolver = make_resolver(fetcher)

        context = resolve_root(resolver, schema_with_imports("urn:svc", "plain.xsd"))

        assert context.schemas[1].target_namespace == ""

    def test_namespace_only_import_not_fetched(self, memory_fetcher):
        """Test imports without schemaLocation are skipped."""
        fetcher = memory_fetcher({})
        resolver = make_resolver(fetcher)
        root = schema_with_imports("urn:root", body='<xs:import namespace="urn:elsewhere"/>')

        context = resolve_root(resolver, root)

        assert len(context.schemas) == 1
        fetcher.fetch.assert_not_called()

    def test_recursion_ceiling(self, memory_fetcher):
        """Test resolution stops at the ceiling and flags the result as truncated."""
        documents = {
            BASE + f"c{i}.xsd": schema_with_imports(f"urn:c{i}", f"c{i + 1}.xsd")
            for i in range(1, 6)
        }
        documents[BASE + "c6.xsd"] = schema_with_imports("urn:c6")
        resolver = make_resolver(memory_fetcher(documents), max_depth=3)

        context = resolve_root(resolver, schema_with_imports("urn:root", "c1.xsd"))

        assert context.truncated
        assert context.fetch_count == 3
        assert namespaces(context) == ["urn:root", "urn:c1", "urn:c2", "urn:c3"]

    def test_inline_schemas_keyed_separately(self, memory_fetcher):
        """Test inline WSDL schemas sharing one location are all resolved."""
        fetcher = memory_fetcher({
            BASE + "a.xsd": schema_with_imports("urn:a"),
            BASE + "b.xsd": schema_with_imports("urn:b"),
        })
        resolver = make_resolver(fetcher)
        location = Location.parse(BASE + "service.wsdl")
        inline = [
            resolver.parser.parse_schema(schema_with_imports("urn:one", "a.xsd").encode(), location),
            resolver.parser.parse_schema(schema_with_imports("urn:two", "a.xsd", "b.xsd").encode(), location),
        ]

        context = resolver.resolve_all(inline, location)

        assert namespaces(context) == ["urn:one", "urn:two", "urn:a", "urn:b"]
        assert context.fetch_count == 2
        assert f"{location}#schema0" in context.visited
        assert f"{location}#schema1" in context.visited


class TestResolutionErrors:
    """Tests for failures while resolving."""

    def test_fetch_error_propagates(self, memory_fetcher):
        """Test an unreachable import aborts resolution."""
        resolver = make_resolver(memory_fetcher({}))

        with pytest.raises(FetchError) as exc_info:
            resolve_root(resolver, schema_with_imports("urn:root", "missing.xsd"))

        assert exc_info.value.location == BASE + "missing.xsd"

    def test_parse_error_propagates(self, memory_fetcher):
        """Test a malformed imported schema aborts resolution."""
        resolver = make_resolver(memory_fetcher({BASE + "bad.xsd": "<xs:schema"}))

        with pytest.raises(ParseError):
            resolve_root(resolver, schema_with_imports("urn:root", "bad.xsd"))
