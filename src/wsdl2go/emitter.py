"""Renders the generated Go artifacts from a resolved WSDL model."""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Dict, List

from jinja2 import Environment, PackageLoader, StrictUndefined

from .config import Config
from .exceptions import RenderError
from .logger import create_logger
from .lookup import SemanticLookup
from .mapper import TypeMapper
from .wsdl_model import WSDLDocument

ARTIFACT_ORDER = ("header", "types", "operations", "soap")

TEMPLATES = {
    "header": "header.go.j2",
    "types": "types.go.j2",
    "operations": "operations.go.j2",
    "soap": "soap.go.j2",
}


@dataclass
class EmissionResult:
    """Rendered artifacts keyed by name, plus per-artifact failures."""
    artifacts: Dict[str, bytes] = field(default_factory=dict)
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def degraded(self) -> bool:
        return bool(self.errors)

    def ordered(self) -> List[bytes]:
        """Artifacts in output order: header, types, operations, soap."""
        return [self.artifacts.get(name, b"") for name in ARTIFACT_ORDER]

    def combined(self) -> bytes:
        return b"".join(self.ordered())


def create_environment() -> Environment:
    """Jinja environment loading the Go templates shipped with the package."""
    return Environment(
        loader=PackageLoader("wsdl2go", "templates"),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
        autoescape=False,
    )


class CodeEmitter:
    """Renders header, types, operations and SOAP client artifacts.

    The model must not be mutated once emission starts; types and
    operations are rendered concurrently against it.
    """

    def __init__(self, document: WSDLDocument, config: Config):
        self.document = document
        self.config = config
        self.logger = create_logger(level=config.logging.level, component="emitter")
        self.mapper = TypeMapper(
            ignore_type_namespaces=config.ignore_type_namespaces,
            export_all_types=config.export_all_types,
        )
        self.lookup = SemanticLookup(document, log_level=config.logging.level)

        self.env = create_environment()
        self.env.globals.update(self.mapper.template_globals())
        self.env.globals.update(self.lookup.template_globals())

    def emit(self) -> EmissionResult:
        result = EmissionResult()

        renderers: Dict[str, Callable[[], bytes]] = {
            "types": self.gen_types,
            "operations": self.gen_operations,
        }
        if self.config.parallel_processing:
            with ThreadPoolExecutor(max_workers=2, thread_name_prefix="wsdl2go-emit") as executor:
                futures = {
                    name: executor.submit(self._render_artifact, name, renderer)
                    for name, renderer in renderers.items()
                }
                for name, future in futures.items():
                    self._collect(result, name, future.result())
        else:
            for name, renderer in renderers.items():
                self._collect(result, name, self._render_artifact(name, renderer))

        self._collect(result, "header", self._render_artifact("header", self.gen_header))
        self._collect(result, "soap", self._render_artifact("soap", self.gen_soap_client))

        self.logger.info(
            "Emission completed",
            artifacts={name: len(data) for name, data in result.artifacts.items()},
            failed=sorted(result.errors),
        )
        return result

    def _collect(self, result: EmissionResult, name: str, outcome) -> None:
        data, error = outcome
        result.artifacts[name] = data
        if error is not None:
            if self.config.strict_rendering:
                raise error
            result.errors[name] = str(error)

    def _render_artifact(self, name: str, renderer: Callable[[], bytes]):
        """Run one renderer; a failure yields empty output and the error."""
        try:
            return renderer(), None
        except Exception as e:
            self.logger.error("Rendering failed", artifact=name, error=str(e), errorType=type(e).__name__)
            return b"", RenderError(name, e)

    def _render(self, name: str, **context) -> bytes:
        template = self.env.get_template(TEMPLATES[name])
        return template.render(**context).encode("utf-8")

    def gen_types(self) -> bytes:
        return self._render("types", schemas=self.document.schemas)

    def gen_operations(self) -> bytes:
        return self._render("operations", port_types=self.document.port_types)

    def gen_header(self) -> bytes:
        return self._render("header", package=self.config.package_name)

    def gen_soap_client(self) -> bytes:
        return self._render("soap", package=self.config.package_name)
