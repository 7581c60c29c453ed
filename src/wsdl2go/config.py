"""Configuration management for the wsdl2go generator."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from .logger import LogLevel

DEFAULT_PACKAGE = "myservice"
DEFAULT_MAX_RECURSION_DEPTH = 100
DEFAULT_FETCH_TIMEOUT = 30.0


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: LogLevel = LogLevel.INFO


@dataclass
class Config:
    """Main configuration for the WSDL to Go generator."""

    # Input/Output
    wsdl_location: str = ""
    package: str = DEFAULT_PACKAGE
    output_file: Optional[Path] = None

    # Fetching
    ignore_tls: bool = False
    login: str = ""
    password: str = ""
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT

    # Type handling
    ignore_type_namespaces: bool = False
    export_all_types: bool = False

    # System Configuration
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Advanced Options
    max_recursion_depth: int = DEFAULT_MAX_RECURSION_DEPTH
    parallel_processing: bool = True
    strict_rendering: bool = False

    @property
    def package_name(self) -> str:
        """Target Go package name, falling back to the default when blank."""
        package = (self.package or "").strip()
        return package or DEFAULT_PACKAGE

    @property
    def basic_auth(self) -> Optional[Tuple[str, str]]:
        """Login/password pair, only when both are given."""
        if self.login and self.password:
            return self.login, self.password
        return None

    def validate(self) -> List[str]:
        """Validate configuration and return any errors."""
        errors = []

        if not (self.wsdl_location or "").strip():
            errors.append("WSDL location is required to generate a Go client")

        if self.output_file and self.output_file.exists() and self.output_file.is_dir():
            errors.append(f"Output file is a directory: {self.output_file}")

        if bool(self.login) != bool(self.password):
            errors.append("Basic auth requires both login and password")

        if self.max_recursion_depth < 1:
            errors.append("max_recursion_depth must be at least 1")

        if self.fetch_timeout <= 0:
            errors.append("fetch_timeout must be positive")

        return errors

    @classmethod
    def from_cli_args(cls, **kwargs) -> "Config":
        """Create config from CLI arguments."""
        config = cls()

        for key, value in kwargs.items():
            if hasattr(config, key) and value is not None:
                setattr(config, key, value)

        if kwargs.get("output_file") is not None:
            config.output_file = Path(kwargs["output_file"])

        if kwargs.get("log_level") is not None:
            config.logging.level = LogLevel(kwargs["log_level"])

        return config
