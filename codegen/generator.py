# ============================================================================
# GENERATOR
# ============================================================================
# STATUS: Codegen - End-to-end pipeline
# PURPOSE: Connect, introspect, transform, serialize and write or verify
# CREATED: 10 OCT 2026
# EXPORTS: Generator, GenerationResult, GeneratorError, VerificationError
# ============================================================================
"""
Generator

Runs one generation from a GeneratorConfig:

    1. resolve the connection string (env(KEY) + env file)
    2. pick the dialect (explicit, else inferred from the URL)
    3. introspect the catalog through the dialect's connector
    4. transform metadata into declaration nodes
    5. serialize to TypeScript
    6. write ``out_file``, or compare against it when ``verify`` is set

Usage:
    from codegen.generator import Generator
    from core.config import GeneratorConfig

    result = Generator().generate(GeneratorConfig(url="./app.db"))
    print(result.output)
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from codegen.dialect import Dialect, get_dialect
from codegen.serializer import Serializer
from codegen.transformer import Transformer
from codegen.type_mapper import ColumnOverrides, TransformOptions
from core.config import GeneratorConfig
from core.logging import get_logger, log_context
from introspection.connection import ConnectionStringParser, infer_dialect
from introspection.introspector import IntrospectOptions
from introspection.metadata import DatabaseMetadata

logger = get_logger(__name__)


# ============================================================================
# EXCEPTIONS
# ============================================================================

class GeneratorError(Exception):
    """Base exception for generation failures."""
    pass


class VerificationError(GeneratorError):
    """Raised when the generated output differs from the file on disk."""
    def __init__(self, out_file: str, reason: str):
        self.out_file = out_file
        self.reason = reason
        super().__init__(f"Generated types are not up-to-date with '{out_file}': {reason}")


# ============================================================================
# RESULT
# ============================================================================

@dataclass(frozen=True)
class GenerationResult:
    output: str
    dialect: str
    table_count: int
    out_file: Optional[str] = None
    written: bool = False


# ============================================================================
# OPTION BUILDERS
# ============================================================================

def to_transform_options(config: GeneratorConfig) -> TransformOptions:
    return TransformOptions(
        camel_case=config.camel_case,
        type_mapping=dict(config.type_mapping),
        overrides=ColumnOverrides(columns=dict(config.overrides)),
        custom_imports=dict(config.custom_imports),
    )


def to_introspect_options(config: GeneratorConfig) -> IntrospectOptions:
    return IntrospectOptions(
        include_pattern=config.include_pattern,
        exclude_pattern=config.exclude_pattern,
        include_views=config.include_views,
        partitions=config.partitions,
    )


def _database_label(url: str) -> str:
    """Database name for log context; never includes credentials."""
    parsed = urlparse(url)
    if parsed.scheme in ("postgres", "postgresql"):
        return parsed.path.lstrip("/") or parsed.hostname or "postgres"
    return Path(url.replace("sqlite://", "", 1)).name or url


# ============================================================================
# GENERATOR
# ============================================================================

class Generator:
    """
    Pipeline from connection string to TypeScript declarations.

    Args:
        parser: Connection string parser (injectable for tests)
        dialect_resolver: Callable mapping a dialect name to a Dialect
    """

    def __init__(
        self,
        parser: Optional[ConnectionStringParser] = None,
        dialect_resolver=get_dialect,
    ):
        self.parser = parser or ConnectionStringParser()
        self.dialect_resolver = dialect_resolver

    def generate(self, config: GeneratorConfig) -> GenerationResult:
        with log_context(operation="resolve"):
            url = self.parser.parse(config.url, config.env_file)
            dialect = self.dialect_resolver(config.dialect or infer_dialect(url))

        with log_context(dialect=dialect.name, database=_database_label(url)):
            metadata = self.introspect(dialect, url, config)
            output = self.render(dialect, metadata, config)

            if config.verify:
                self.verify(output, config.out_file)
                return GenerationResult(
                    output=output,
                    dialect=dialect.name,
                    table_count=len(metadata.tables),
                    out_file=config.out_file,
                )

            written = False
            if config.out_file:
                self.write(output, config.out_file)
                written = True

            return GenerationResult(
                output=output,
                dialect=dialect.name,
                table_count=len(metadata.tables),
                out_file=config.out_file,
                written=written,
            )

    def introspect(self, dialect: Dialect, url: str, config: GeneratorConfig) -> DatabaseMetadata:
        with log_context(operation="introspect"):
            logger.info("Introspecting database...")
            with dialect.connect(url) as connection:
                metadata = dialect.introspector.introspect(connection, to_introspect_options(config))

        if not metadata.tables:
            logger.warning("No tables found in database")
        return metadata

    def render(self, dialect: Dialect, metadata: DatabaseMetadata, config: GeneratorConfig) -> str:
        with log_context(operation="transform"):
            nodes = Transformer(dialect.adapter).transform(metadata, to_transform_options(config))
            output = Serializer(type_only_imports=config.type_only_imports).serialize(nodes)
        logger.debug(f"Rendered {len(nodes)} nodes")
        return output

    @staticmethod
    def write(output: str, out_file: str) -> None:
        with log_context(operation="write"):
            path = Path(out_file)
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(output, encoding="utf-8")
            except OSError as e:
                raise GeneratorError(f"Could not write '{out_file}': {e}") from e
            logger.info(f"Wrote types to '{out_file}'")

    @staticmethod
    def verify(output: str, out_file: Optional[str]) -> None:
        """
        Compare ``output`` with the contents of ``out_file``.

        Raises:
            GeneratorError: if no output file is configured
            VerificationError: if the file is missing or differs
        """
        with log_context(operation="verify"):
            if not out_file:
                raise GeneratorError("Verification requires an output file")
            path = Path(out_file)
            if not path.is_file():
                raise VerificationError(out_file, "file does not exist")
            if path.read_text(encoding="utf-8") != output:
                raise VerificationError(out_file, "contents differ")
            logger.info(f"Generated types are up-to-date with '{out_file}'")


__all__ = [
    "Generator",
    "GenerationResult",
    "GeneratorError",
    "VerificationError",
    "to_transform_options",
    "to_introspect_options",
]
