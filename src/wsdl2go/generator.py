"""Main generator turning a WSDL into a Go SOAP client source file."""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from .config import Config
from .emitter import CodeEmitter, EmissionResult
from .exceptions import WSDLGenerationError
from .fetcher import ResourceFetcher
from .loader import WSDLLoader
from .logger import create_logger
from .wsdl_model import WSDLDocument


@dataclass
class GenerationResult:
    """Result of one WSDL to Go generation run."""
    success: bool
    output_file: Optional[Path]
    processing_time: float
    errors: List[str]
    warnings: List[str]
    statistics: Dict[str, int]
    artifacts: Dict[str, bytes] = field(default_factory=dict)


class Generator:
    """Runs load -> emit -> write for one configuration.

    Loading failures make the run fail. A failing artifact only degrades the
    output: it is reported as a warning and the run still succeeds, unless
    ``config.strict_rendering`` is set.
    """

    def __init__(self, config: Config, fetcher: Optional[ResourceFetcher] = None):
        self.config = config
        self.fetcher = fetcher
        self.logger = create_logger(level=config.logging.level, component="generator")

        self.logger.info(
            "Generator initialized",
            package=config.package_name,
            ignoreTypeNamespaces=config.ignore_type_namespaces,
            exportAllTypes=config.export_all_types,
        )

    def generate(self) -> GenerationResult:
        """Generate the Go client; writes ``config.output_file`` when set."""
        start_time = time.time()
        errors: List[str] = []
        warnings: List[str] = []
        statistics: Dict[str, int] = {}

        try:
            self.logger.info("Loading WSDL", location=self.config.wsdl_location)
            loader = WSDLLoader(self.config, fetcher=self.fetcher)
            document = loader.load()

            if loader.context is not None and loader.context.truncated:
                warnings.append(
                    f"Recursion ceiling of {self.config.max_recursion_depth} reached; "
                    "some external schemas were not resolved"
                )

            self.logger.info("Generating Go code")
            emission = CodeEmitter(document, self.config).emit()
            for artifact, error in emission.errors.items():
                warnings.append(f"{artifact}: {error}")

            statistics = self._collect_statistics(document, emission)
            statistics["duplicatesRemoved"] = loader.duplicates_removed

            output_file = None
            if self.config.output_file is not None:
                output_file = self._write_output(emission)

            processing_time = time.time() - start_time
            self.logger.info("Generation completed", **statistics)
            self.logger.performance_metric("generation_time", processing_time, "seconds")
            return GenerationResult(
                success=True,
                output_file=output_file,
                processing_time=processing_time,
                errors=errors,
                warnings=warnings,
                statistics=statistics,
                artifacts=emission.artifacts,
            )

        except (WSDLGenerationError, OSError) as e:
            self.logger.error("Generation failed", error=str(e), errorType=type(e).__name__)
            errors.append(str(e))
            return GenerationResult(
                success=False,
                output_file=None,
                processing_time=time.time() - start_time,
                errors=errors,
                warnings=warnings,
                statistics=statistics,
            )

    def _collect_statistics(self, document: WSDLDocument, emission: EmissionResult) -> Dict[str, int]:
        return {
            "schemas": len(document.schemas),
            "simpleTypes": sum(len(schema.simple_types) for schema in document.schemas),
            "complexTypes": sum(len(schema.complex_types) for schema in document.schemas),
            "portTypes": len(document.port_types),
            "operations": sum(len(port_type.operations) for port_type in document.port_types),
            "failedArtifacts": len(emission.errors),
        }

    def _write_output(self, emission: EmissionResult) -> Path:
        """Write header, types, operations and soap, in that order."""
        output_file = Path(self.config.output_file)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_bytes(emission.combined())

        self.logger.info("Generated output file", outputFile=str(output_file))
        return output_file
