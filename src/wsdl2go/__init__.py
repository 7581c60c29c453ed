"""wsdl2go: generates Go SOAP clients from WSDL service descriptions."""

__version__ = "0.1.0"

from .config import Config
from .generator import Generator, GenerationResult

__all__ = ["Config", "Generator", "GenerationResult"]
