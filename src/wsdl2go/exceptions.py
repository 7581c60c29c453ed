"""Exception hierarchy for WSDL loading and code generation."""

from xmlschema import XMLSchemaException


class WSDLGenerationError(Exception):
    """Base class for all generation failures."""


class InputError(WSDLGenerationError, ValueError):
    """The generator was given an unusable input, e.g. a blank WSDL location."""


class FetchError(WSDLGenerationError):
    """A WSDL or XSD resource could not be read or downloaded."""

    def __init__(self, location, reason):
        super().__init__(f"cannot fetch {location}: {reason}")
        self.location = str(location)
        self.reason = reason


class ParseError(WSDLGenerationError, XMLSchemaException):
    """A WSDL or XSD document is malformed or has an unexpected root."""

    def __init__(self, location, reason):
        super().__init__(f"cannot parse {location}: {reason}")
        self.location = str(location)
        self.reason = reason


class RenderError(WSDLGenerationError):
    """A template failed while rendering one generated artifact."""

    def __init__(self, artifact, reason):
        super().__init__(f"rendering {artifact} failed: {reason}")
        self.artifact = artifact
        self.reason = reason
