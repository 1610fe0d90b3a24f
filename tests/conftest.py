"""Shared pytest fixtures for troopfund tests."""

import logging
import tempfile
import os
import pytest

from troopfund.database.factories import create_sqlite_database
from troopfund.domain.authorization import Principal, Role
from troopfund.domain.audit import AuditService
from troopfund.domain.ledger import LedgerService
from troopfund.domain.user import UserService


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers the CLI installs so later tests do not write to a closed stream."""
    yield
    package_logger = logging.getLogger("troopfund")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def ledger(temp_db):
    """Create a LedgerService with a provisioned unit account."""
    service = LedgerService(temp_db)
    service.ensure_unit_account()
    return service


@pytest.fixture
def audit_service(temp_db):
    """Create an AuditService with a temporary database."""
    return AuditService(temp_db)


@pytest.fixture
def user_service(temp_db, audit_service):
    """Create a UserService with a temporary database."""
    return UserService(temp_db, audit_service)


@pytest.fixture
def admin(user_service):
    """Bootstrap an admin user and return its principal."""
    user = user_service.bootstrap_admin("admin")
    return Principal(id=user.id, role=Role.ADMIN)


@pytest.fixture
def editor(user_service, admin):
    """Create an editor user and return its principal."""
    user = user_service.create_user(admin, "editor", Role.EDITOR)
    return Principal(id=user.id, role=Role.EDITOR)


@pytest.fixture
def viewer(user_service, admin):
    """Create a viewer user and return its principal."""
    user = user_service.create_user(admin, "viewer", Role.VIEWER)
    return Principal(id=user.id, role=Role.VIEWER)


@pytest.fixture
def unit_account(ledger):
    """Return the provisioned unit account."""
    return ledger.get_unit_account()


@pytest.fixture
def sample_account(ledger, editor):
    """Create a sample scout account for testing."""
    return ledger.create_account(editor, "Alex")


@pytest.fixture
def second_account(ledger, editor):
    """Create a second scout account for testing."""
    return ledger.create_account(editor, "Jordan")


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def cli_db(cli_runner, temp_db):
    """Initialize the CLI database with an admin named 'admin'.

    Returns the base arguments every CLI invocation needs.
    """
    from troopfund.cli.main import cli

    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "init", "--admin", "admin"])
    assert result.exit_code == 0, result.output
    return ["--db-path", temp_db.database_path, "--user", "admin"]
