"""Command-line interface for the wsdl2go generator."""

import sys
from pathlib import Path
from typing import Optional

import click

from . import __version__
from .config import Config, DEFAULT_MAX_RECURSION_DEPTH, DEFAULT_PACKAGE
from .generator import Generator
from .logger import LogLevel, create_logger


@click.command()
@click.version_option(__version__)
@click.argument("wsdl_location")
@click.option(
    "--package", "-p",
    default=DEFAULT_PACKAGE,
    show_default=True,
    help="Go package name of the generated code"
)
@click.option(
    "--output", "-o",
    type=click.Path(path_type=Path, dir_okay=False),
    help="Output Go file (default: ./<package>/<package>.go)"
)
@click.option(
    "--insecure", "-i",
    is_flag=True,
    help="Skip TLS certificate verification when downloading"
)
@click.option(
    "--make-public",
    is_flag=True,
    help="Export all generated types"
)
@click.option(
    "--ignore-type-ns",
    is_flag=True,
    help="Do not qualify generated type names with their namespace"
)
@click.option("--login", default="", help="Basic auth login for downloads")
@click.option("--password", default="", help="Basic auth password for downloads")
@click.option(
    "--max-depth",
    type=click.IntRange(min=1),
    default=DEFAULT_MAX_RECURSION_DEPTH,
    show_default=True,
    help="Ceiling for schema import/include resolution"
)
@click.option(
    "--sequential",
    is_flag=True,
    help="Render types and operations one after the other"
)
@click.option(
    "--strict",
    is_flag=True,
    help="Fail the run when any artifact fails to render"
)
@click.option(
    "--log-level",
    type=click.Choice([level.value for level in LogLevel]),
    default=LogLevel.INFO.value,
    help="Logging level"
)
def main(
    wsdl_location: str,
    package: str,
    output: Optional[Path],
    insecure: bool,
    make_public: bool,
    ignore_type_ns: bool,
    login: str,
    password: str,
    max_depth: int,
    sequential: bool,
    strict: bool,
    log_level: str,
) -> None:
    """Generate a Go SOAP client from a WSDL file or URL.

    Examples:
        # Local WSDL
        wsdl2go service.wsdl -p weather

        # Remote WSDL with basic auth, exporting all types
        wsdl2go https://example.com/service?wsdl --make-public --login me --password secret
    """
    config = Config.from_cli_args(
        wsdl_location=wsdl_location,
        package=package,
        ignore_tls=insecure,
        export_all_types=make_public,
        ignore_type_namespaces=ignore_type_ns,
        login=login,
        password=password,
        max_recursion_depth=max_depth,
        parallel_processing=not sequential,
        strict_rendering=strict,
        log_level=log_level,
    )
    if output is None:
        output = Path(config.package_name) / f"{config.package_name}.go"
    config.output_file = output

    logger = create_logger(level=config.logging.level, component="cli")

    errors = config.validate()
    if errors:
        logger.error("Configuration validation failed", errors=errors)
        for error in errors:
            click.echo(f"Error: {error}", err=True)
        sys.exit(1)

    logger.info(
        "Starting wsdl2go generation",
        wsdlLocation=config.wsdl_location,
        outputFile=str(config.output_file),
        package=config.package_name,
    )

    try:
        result = Generator(config).generate()

        if result.success:
            click.echo("✓ Generation completed successfully!")
            click.echo(f"  Output file: {result.output_file}")
            click.echo(f"  Processing time: {result.processing_time:.2f}s")
            for warning in result.warnings:
                click.echo(f"  Warning: {warning}", err=True)
        else:
            click.echo("✗ Generation failed:", err=True)
            for error in result.errors:
                click.echo(f"  {error}", err=True)
            sys.exit(1)

    except KeyboardInterrupt:
        logger.info("Generation interrupted by user")
        click.echo("\nGeneration interrupted by user")
        sys.exit(130)
    except Exception as e:
        logger.error("Unexpected error during generation", error=str(e), errorType=type(e).__name__)
        click.echo(f"✗ Unexpected error: {e}", err=True)
        if config.logging.level == LogLevel.DEBUG:
            import traceback
            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
