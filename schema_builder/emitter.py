"""
================================
Schema emission for a registry.
================================

Walks a TableRegistry in registration order and either combines every
table's DDL into one text (optionally written to a single file) or writes
one '<table>.schema.sql' file per table.

Example:
    >>> from schema_builder.emitter import build_schema, render_schema
    >>>
    >>> print(render_schema(registry, comments=True))
    >>> build_schema(registry, path='out/schema.sql')
    >>> build_schema(registry, dirname='out/tables')
"""

import logging
from pathlib import Path
from typing import Any, List, Optional, Union

from core.config import config
from schema_builder.registry import TableRegistry
from schema_builder.table_schema import table_schema

logger = logging.getLogger(__name__)

TABLE_SEPARATOR = "\n\n\n"


def render_schema(
    registry: TableRegistry,
    comments: Optional[bool] = None,
    dialect: Optional[str] = None,
    pretty: Optional[bool] = None,
    **format_options: Any
) -> str:
    """Combine the DDL of every registered table.

    Args:
        registry: Tables to render, in registration order
        comments: Prefix each table with '-- <name>' (defaults to config)
        dialect: Formatter dialect
        pretty: Pretty-print each table's DDL
        **format_options: Extra formatter options

    Returns:
        Every table's DDL separated by blank lines
    """
    if comments is None:
        comments = config.output.comments

    blocks = []
    for metadata in registry:
        ddl = table_schema(metadata, dialect=dialect, pretty=pretty, **format_options)
        blocks.append(f"-- {metadata.name}\n{ddl}" if comments else ddl)

    return TABLE_SEPARATOR.join(blocks)


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding=config.output.encoding)


def build_schema(
    registry: TableRegistry,
    path: Union[str, Path, None] = None,
    dirname: Union[str, Path, None] = None,
    comments: Optional[bool] = None,
    dialect: Optional[str] = None,
    pretty: Optional[bool] = None,
    **format_options: Any
) -> List[Path]:
    """Write the schema of every registered table.

    Exactly one destination is required: path writes one combined file,
    dirname writes one '<table>.schema.sql' file per table. Missing
    directories are created.

    Args:
        registry: Tables to write, in registration order
        path: Combined schema file
        dirname: Directory for per-table files
        comments: Prefix tables with '-- <name>' in combined mode
        dialect: Formatter dialect
        pretty: Pretty-print the DDL
        **format_options: Extra formatter options

    Returns:
        Paths of the written files

    Raises:
        ValueError: If not exactly one of path and dirname is given
    """
    if (path is None) == (dirname is None):
        raise ValueError("Exactly one of 'path' or 'dirname' must be given")

    if path is not None:
        target = Path(path)
        _write(target, render_schema(registry, comments, dialect, pretty, **format_options))
        logger.info(f"Wrote schema of {len(registry)} tables to {target}")
        return [target]

    directory = Path(dirname)
    directory.mkdir(parents=True, exist_ok=True)

    written = []
    for metadata in registry:
        target = directory / config.output.schema_file_name(metadata.name)
        _write(target, table_schema(metadata, dialect=dialect, pretty=pretty, **format_options))
        logger.info(f"Wrote schema of table '{metadata.name}' to {target}")
        written.append(target)

    return written
