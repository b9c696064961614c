"""
=========================================
Command-line entry point for sqlscribe.
=========================================

Generates DDL for every table registered in a TableRegistry found in an
importable module.

Usage:
    # One combined file
    python main.py --models myapp.models --output schema/schema.sql

    # One <table>.schema.sql per table
    python main.py --models myapp.models --output-dir schema/

    # Print to stdout, unformatted, with table comments
    python main.py --models myapp.models --stdout --no-pretty --comments

The models module must expose a TableRegistry (attribute 'registry' unless
--registry names another one). Logging goes to stderr; stdout only ever
carries generated SQL.

Exit Codes:
    0: Success
    1: Error
    130: User interrupt (Ctrl+C)
"""

import argparse
import importlib
import logging
import sys
from typing import List, Optional

from core.config import config
from core.logger import setup_logging
from schema_builder.emitter import build_schema, render_schema
from schema_builder.registry import DeclarationError, TableRegistry
from sql.formatter import FormatterError

logger = logging.getLogger(__name__)


class SchemaCommandError(Exception):
    """Exception raised when the models module or its registry cannot be loaded."""
    pass


def load_registry(module_name: str, attribute: str = 'registry') -> TableRegistry:
    """
    Import a module and return its TableRegistry.

    Args:
        module_name: Dotted module path (e.g. 'myapp.models')
        attribute: Name of the registry attribute in that module

    Returns:
        The module's TableRegistry

    Raises:
        SchemaCommandError: If the module or registry cannot be found
    """
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise SchemaCommandError(f"Cannot import models module '{module_name}': {e}")

    registry = getattr(module, attribute, None)
    if not isinstance(registry, TableRegistry):
        raise SchemaCommandError(
            f"Module '{module_name}' has no TableRegistry named '{attribute}'"
        )

    logger.debug(f"Loaded registry '{attribute}' with {len(registry)} tables from {module_name}")
    return registry


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        description="sqlscribe - generate CREATE TABLE / CREATE INDEX statements",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --models myapp.models --output schema/schema.sql
  python main.py --models myapp.models --output-dir schema/
  python main.py --models myapp.models --stdout --dialect mysql
        """
    )

    parser.add_argument(
        '--models',
        required=True,
        help='Importable module exposing a TableRegistry'
    )
    parser.add_argument(
        '--registry',
        default='registry',
        help='Name of the TableRegistry attribute in the models module'
    )

    destination = parser.add_mutually_exclusive_group(required=True)
    destination.add_argument(
        '--output',
        help='Write one combined schema file'
    )
    destination.add_argument(
        '--output-dir',
        help='Write one <table>.schema.sql file per table into this directory'
    )
    destination.add_argument(
        '--stdout',
        action='store_true',
        help='Print the combined schema'
    )

    parser.add_argument(
        '--comments',
        action='store_true',
        default=None,
        help='Prefix each table of a combined schema with a comment'
    )
    parser.add_argument(
        '--dialect',
        default=None,
        help=f'SQL dialect for pretty-printing (default: {config.dialect})'
    )
    parser.add_argument(
        '--no-pretty',
        dest='pretty',
        action='store_false',
        default=None,
        help='Do not pretty-print the generated SQL'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging (DEBUG level)'
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the command-line interface and return the exit code."""
    args = build_parser().parse_args(argv)

    setup_logging(
        log_level='DEBUG' if args.verbose else config.log_level,
        log_file=config.logging.log_file,
        log_dir=config.logging.log_dir
    )

    try:
        registry = load_registry(args.models, args.registry)

        options = dict(comments=args.comments, dialect=args.dialect, pretty=args.pretty)

        if args.stdout:
            sys.stdout.write(render_schema(registry, **options) + "\n")
        elif args.output:
            build_schema(registry, path=args.output, **options)
        else:
            build_schema(registry, dirname=args.output_dir, **options)

        logger.info(f"Schema generated for {len(registry)} tables")
        return 0

    except (SchemaCommandError, DeclarationError) as e:
        logger.error(f"Schema generation failed: {e}")
        return 1
    except FormatterError as e:
        logger.error(f"Formatting failed: {e}")
        return 1
    except KeyboardInterrupt:
        logger.warning("Operation interrupted by user")
        return 130
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        return 1


if __name__ == '__main__':
    sys.exit(main())
