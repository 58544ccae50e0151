import os
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Set the Protean environment before the domain module is imported, so the
    logging level and config overlay match the test run.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)


@pytest.fixture(scope="session")
def easyorder_bed():
    from easyorder.domain import easyorder

    bed = DomainFixture(easyorder)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(easyorder_bed):
    with easyorder_bed.domain_context():
        yield


@pytest.fixture(autouse=True)
def run_around_tests(_ctx):
    """Fixture to automatically cleanup infrastructure after every test"""
    yield

    from easyorder.notifications import reset_email_generator
    from protean import current_domain

    # Clear all databases
    for _, provider in current_domain.providers.items():
        provider._data_reset()

    # Drain event stores
    current_domain.event_store.store._data_reset()

    reset_email_generator()


@pytest.fixture
def fake_email_generator():
    from easyorder.notifications import set_email_generator
    from easyorder.notifications.fake_email import FakeEmailGenerator

    generator = FakeEmailGenerator()
    set_email_generator(generator)
    return generator
