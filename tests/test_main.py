"""
===============================================
Comprehensive pytest suite for main.py
===============================================

Sections:
---------
1. Unit tests - load_registry and argument parsing
2. CLI tests - main() with every destination
3. Edge case tests - exit codes for failures and interrupts

Available markers:
------------------
unit, integration, edge_case, smoke

How to Execute:
---------------
All tests:          pytest tests/test_main.py -v
By category:        pytest tests/test_main.py -m unit

Note: Use 'python -m pytest' (not just 'pytest') to ensure correct Python path resolution.
"""

import sys
import textwrap
from unittest.mock import patch

import pytest

import main
from schema_builder.registry import DeclarationError, TableRegistry

MODELS_SOURCE = textwrap.dedent('''
    from models.schema_models import Column, Index
    from schema_builder.registry import TableDefinition, TableRegistry

    registry = TableRegistry()
    other = TableRegistry()
    not_a_registry = 'registry'


    @registry.table('orgs')
    class Org:
        id = Column('SERIAL', primary=True)


    registry.register(
        TableDefinition('users')
        .column('id', 'SERIAL', primary=True)
        .column('org_id', 'INTEGER')
        .index('idx_users_org', ['org_id'])
    )
''')


@pytest.fixture
def models_module(tmp_path, monkeypatch):
    """Importable models module exposing a populated registry."""
    (tmp_path / 'cli_sample_models.py').write_text(MODELS_SOURCE, encoding='utf-8')
    monkeypatch.syspath_prepend(str(tmp_path))
    yield 'cli_sample_models'
    sys.modules.pop('cli_sample_models', None)


@pytest.fixture(autouse=True)
def no_logging_setup():
    """Keep main() from replacing pytest's logging handlers."""
    with patch('main.setup_logging') as mock_setup:
        yield mock_setup


# ============================================================================
# UNIT TESTS
# ============================================================================


@pytest.mark.unit
def test_load_registry(models_module):
    """Test the default registry attribute is returned."""
    registry = main.load_registry(models_module)
    assert isinstance(registry, TableRegistry)
    assert [table.name for table in registry] == ['orgs', 'users']


@pytest.mark.unit
def test_load_registry_named_attribute(models_module):
    """Test --registry selects another attribute."""
    assert len(main.load_registry(models_module, 'other')) == 0


@pytest.mark.edge_case
def test_load_registry_missing_module():
    """Test an unknown module raises SchemaCommandError."""
    with pytest.raises(main.SchemaCommandError, match="Cannot import models module"):
        main.load_registry('no_such_models_module_xyz')


@pytest.mark.edge_case
@pytest.mark.parametrize("attribute", ['missing', 'not_a_registry'])
def test_load_registry_bad_attribute(models_module, attribute):
    """Test a missing or wrongly typed attribute raises SchemaCommandError."""
    with pytest.raises(main.SchemaCommandError, match="has no TableRegistry"):
        main.load_registry(models_module, attribute)


@pytest.mark.unit
def test_parser_defaults():
    """Test optional flags defer to configuration."""
    args = main.build_parser().parse_args(['--models', 'm', '--stdout'])

    assert args.registry == 'registry'
    assert args.comments is None
    assert args.pretty is None
    assert args.dialect is None
    assert args.verbose is False


@pytest.mark.unit
def test_parser_no_pretty_and_comments():
    """Test --no-pretty and --comments."""
    args = main.build_parser().parse_args(['--models', 'm', '--output', 'x.sql', '--no-pretty', '--comments'])
    assert args.pretty is False
    assert args.comments is True


@pytest.mark.edge_case
@pytest.mark.parametrize("argv", [
    ['--stdout'],
    ['--models', 'm'],
    ['--models', 'm', '--stdout', '--output', 'x.sql'],
])
def test_parser_rejects_invalid_arguments(argv):
    """Test missing module, missing destination and conflicting destinations."""
    with pytest.raises(SystemExit) as exc_info:
        main.build_parser().parse_args(argv)
    assert exc_info.value.code == 2


# ============================================================================
# CLI TESTS
# ============================================================================


@pytest.mark.integration
def test_main_stdout(models_module, capsys):
    """Test the combined schema is printed."""
    exit_code = main.main(['--models', models_module, '--stdout', '--no-pretty', '--comments'])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert out.startswith('-- orgs\nCREATE TABLE orgs (')
    assert '-- users\nCREATE TABLE users (' in out
    assert 'CREATE INDEX idx_users_org ON users (org_id);' in out


@pytest.mark.integration
def test_main_output_file(models_module, tmp_path):
    """Test --output writes one combined file."""
    target = tmp_path / 'schema' / 'schema.sql'

    assert main.main(['--models', models_module, '--output', str(target), '--no-pretty']) == 0

    text = target.read_text(encoding='utf-8')
    assert text.index('CREATE TABLE orgs') < text.index('CREATE TABLE users')


@pytest.mark.integration
def test_main_output_dir(models_module, tmp_path):
    """Test --output-dir writes one file per table."""
    directory = tmp_path / 'tables'

    assert main.main(['--models', models_module, '--output-dir', str(directory), '--no-pretty']) == 0

    assert sorted(path.name for path in directory.iterdir()) == ['orgs.schema.sql', 'users.schema.sql']


@pytest.mark.unit
def test_main_passes_options(models_module):
    """Test CLI flags reach the emitter."""
    with patch('main.render_schema', return_value='SQL') as mock_render:
        main.main(['--models', models_module, '--stdout', '--dialect', 'mysql', '--comments'])

    _, kwargs = mock_render.call_args
    assert kwargs == {'comments': True, 'dialect': 'mysql', 'pretty': None}


@pytest.mark.unit
def test_main_verbose_sets_debug(models_module, no_logging_setup):
    """Test --verbose configures DEBUG logging."""
    with patch('main.render_schema', return_value=''):
        main.main(['--models', models_module, '--stdout', '--verbose'])

    assert no_logging_setup.call_args.kwargs['log_level'] == 'DEBUG'


# ============================================================================
# EDGE CASE TESTS - Exit codes
# ============================================================================


@pytest.mark.edge_case
def test_main_missing_module_returns_1():
    """Test an unknown models module exits with 1."""
    assert main.main(['--models', 'no_such_models_module_xyz', '--stdout']) == 1


@pytest.mark.edge_case
def test_main_declaration_error_returns_1(models_module):
    """Test DeclarationError exits with 1."""
    with patch('main.render_schema', side_effect=DeclarationError('bad')):
        assert main.main(['--models', models_module, '--stdout']) == 1


@pytest.mark.edge_case
def test_main_formatter_error_returns_1(models_module):
    """Test formatter failures exit with 1."""
    from sql.formatter import FormatterError

    with patch('main.build_schema', side_effect=FormatterError('bad')):
        assert main.main(['--models', models_module, '--output', 'unused.sql']) == 1


@pytest.mark.edge_case
def test_main_unexpected_error_returns_1(models_module):
    """Test unexpected exceptions exit with 1."""
    with patch('main.render_schema', side_effect=RuntimeError('boom')):
        assert main.main(['--models', models_module, '--stdout']) == 1


@pytest.mark.edge_case
def test_main_keyboard_interrupt_returns_130(models_module):
    """Test Ctrl+C exits with 130."""
    with patch('main.render_schema', side_effect=KeyboardInterrupt):
        assert main.main(['--models', models_module, '--stdout']) == 130


@pytest.mark.smoke
def test_main_pretty_smoke(models_module, capsys):
    """Test the default pretty-printed path end to end."""
    assert main.main(['--models', models_module, '--stdout']) == 0
    assert 'CREATE TABLE orgs' in capsys.readouterr().out
