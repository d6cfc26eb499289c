#!/usr/bin/env python
# ============================================================================
# COMMAND LINE INTERFACE
# ============================================================================
# STATUS: Codegen - Entry point
# PURPOSE: Generate TypeScript table types from a live database schema
# CREATED: 10 OCT 2026
# USAGE:
#   schema-typegen --url ./app.db --out-file src/db.d.ts
#   schema-typegen --url "env(DATABASE_URL)" --camel-case --print
#   schema-typegen --out-file src/db.d.ts --verify
# ============================================================================

import argparse
import json
import sys
from typing import Dict, List, Optional

from __version__ import __version__
from codegen.dialect import DIALECTS, DialectError
from codegen.generator import Generator, GeneratorError
from core.config import ConfigError, GeneratorConfig
from core.logging import configure_logging, get_logger
from introspection.connection import ConnectionStringError
from introspection.introspector import IntrospectionError

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


def _json_object(value: str) -> Dict[str, str]:
    try:
        parsed = json.loads(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid JSON: {e}")
    if not isinstance(parsed, dict):
        raise argparse.ArgumentTypeError("expected a JSON object")
    return {str(k): str(v) for k, v in parsed.items()}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schema-typegen",
        description="Generate TypeScript table types from a database schema",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  schema-typegen --url ./app.db --out-file src/db.d.ts
  schema-typegen --dialect postgres --camel-case --print
  schema-typegen --out-file src/db.d.ts --verify

Environment Variables:
  DATABASE_URL          Connection string read by the default --url
  SCHEMA_TYPEGEN_*      Any option, e.g. SCHEMA_TYPEGEN_CAMEL_CASE=true
  LOG_FORMAT            "json" for structured log output
        """
    )
    parser.add_argument(
        "--url",
        type=str,
        help='Connection string or env(KEY) expression (default: "env(DATABASE_URL)")'
    )
    parser.add_argument(
        "--dialect",
        type=str,
        choices=sorted(DIALECTS),
        help="Database dialect (inferred from the URL when omitted)"
    )
    parser.add_argument(
        "--env-file",
        type=str,
        help="Environment file to load (default: ./.env when present)"
    )
    parser.add_argument(
        "--out-file",
        type=str,
        help="File to write the generated types to"
    )
    parser.add_argument(
        "--print",
        dest="print_output",
        action="store_true",
        default=None,
        help="Print the generated types to stdout"
    )
    parser.add_argument(
        "--camel-case",
        action="store_true",
        default=None,
        help="Use camelCase property keys"
    )
    parser.add_argument(
        "--type-mapping",
        type=_json_object,
        help='JSON object mapping data types to TypeScript types, e.g. \'{"timestamptz": "Temporal.Instant"}\''
    )
    parser.add_argument(
        "--overrides",
        type=_json_object,
        help='JSON object mapping "table.column" to a TypeScript type'
    )
    parser.add_argument(
        "--custom-imports",
        type=_json_object,
        help='JSON object mapping type names to "module" or "module#Export"'
    )
    parser.add_argument(
        "--include-pattern",
        type=str,
        help="Only include tables matching this glob pattern"
    )
    parser.add_argument(
        "--exclude-pattern",
        type=str,
        help="Exclude tables matching this glob pattern"
    )
    parser.add_argument(
        "--exclude-views",
        dest="include_views",
        action="store_false",
        default=None,
        help="Skip views"
    )
    parser.add_argument(
        "--partitions",
        action="store_true",
        default=None,
        help="Include partition tables (PostgreSQL)"
    )
    parser.add_argument(
        "--value-imports",
        dest="type_only_imports",
        action="store_false",
        default=None,
        help='Emit "import" instead of "import type"'
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        default=None,
        help="Fail if the output file is not up-to-date instead of writing it"
    )
    parser.add_argument(
        "--config",
        type=str,
        help="JSON config file; command line flags take precedence"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error", "silent"],
        help="Log level (default: info)"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    return parser


def load_config(args: argparse.Namespace) -> GeneratorConfig:
    """Layer environment, config file and command line flags."""
    config = GeneratorConfig.from_env()
    if args.config:
        config = GeneratorConfig.from_file(args.config, base=config)

    return config.merged(
        url=args.url,
        dialect=args.dialect,
        env_file=args.env_file,
        out_file=args.out_file,
        print_output=args.print_output,
        camel_case=args.camel_case,
        type_mapping=args.type_mapping,
        overrides=args.overrides,
        custom_imports=args.custom_imports,
        include_pattern=args.include_pattern,
        exclude_pattern=args.exclude_pattern,
        include_views=args.include_views,
        partitions=args.partitions,
        type_only_imports=args.type_only_imports,
        verify=args.verify,
        log_level=args.log_level,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args)
    except ConfigError as e:
        configure_logging(args.log_level or "info")
        logger.error(str(e))
        return EXIT_FAILURE

    configure_logging(config.log_level)

    try:
        result = Generator().generate(config)
    except (ConnectionStringError, DialectError, IntrospectionError, GeneratorError) as e:
        logger.error(str(e))
        return EXIT_FAILURE

    if config.print_output or not (config.out_file or config.verify):
        sys.stdout.write(result.output)

    logger.info(f"Introspected {result.table_count} tables ({result.dialect})")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
