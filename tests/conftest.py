import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Fetch and activate the domain by pushing the associated domain_context. The activated domain can then be referred
    to elsewhere as `current_domain`
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    # Cheap hashes keep auth-heavy tests fast
    os.environ.setdefault("BCRYPT_ROUNDS", "4")

    # Import the API package before traversal, as app.py does, so that
    # domain traversal does not re-enter canteen.api mid-import.
    import canteen.api  # noqa: F401
    from canteen.domain import canteen

    canteen.init()
    canteen.domain_context().push()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)
        elif "/bdd/" in str(test_path):
            item.add_marker(pytest.mark.bdd)


@pytest.fixture(scope="session", autouse=True)
def setup_db():
    from canteen.domain import canteen
    from canteen.utils.db import drop_db, setup_db

    setup_db(canteen)

    yield

    drop_db(canteen)


@pytest.fixture(autouse=True)
def run_around_tests():
    """Fixture to automatically cleanup infrastructure after every test"""
    yield

    from protean import current_domain

    from canteen.media import reset_image_store
    from canteen.notifications.channel import reset_channels

    # Clear all databases
    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    # Drain event stores
    current_domain.event_store.store._data_reset()

    reset_channels()
    reset_image_store()


@pytest.fixture()
def email_outbox():
    """Fresh fake email adapter installed as the active channel."""
    from canteen.notifications.channel import set_channel
    from canteen.notifications.channel.fake_email import FakeEmailAdapter

    adapter = FakeEmailAdapter()
    set_channel(adapter)
    return adapter


@pytest.fixture()
def image_store():
    from canteen.media import set_image_store
    from canteen.media.fake_store import FakeImageStore

    store = FakeImageStore()
    set_image_store(store)
    return store


# ---------------------------------------------------------------------------
# Builders shared across layers
# ---------------------------------------------------------------------------
DEFAULT_PASSWORD = "Password123"


@pytest.fixture()
def make_user():
    """Register a user through the domain and return the stored aggregate."""
    from protean import current_domain

    from canteen.identity.registration import RegisterUser
    from canteen.identity.security import hash_password
    from canteen.identity.user import User, UserRole

    counter = {"n": 0}

    def _make(email=None, role=UserRole.STUDENT.value, password=DEFAULT_PASSWORD, name="Test Student", student_id=None):
        counter["n"] += 1
        user_id = current_domain.process(
            RegisterUser(
                name=name,
                email=email or f"student{counter['n']}@campus.edu",
                student_id=student_id or f"STU{counter['n']:04d}",
                phone="01711111111",
                password_hash=hash_password(password),
                role=role,
            ),
            asynchronous=False,
        )
        return current_domain.repository_for(User).get(user_id)

    return _make


@pytest.fixture()
def make_category():
    from protean import current_domain

    from canteen.catalogue.category import Category
    from canteen.catalogue.category_management import CreateCategory

    def _make(name="Lunch", description="Main course meals"):
        category_id = current_domain.process(CreateCategory(name=name, description=description), asynchronous=False)
        return current_domain.repository_for(Category).get(category_id)

    return _make


@pytest.fixture()
def make_menu_item(make_category):
    from protean import current_domain

    from canteen.catalogue.menu_item import MenuItem
    from canteen.catalogue.menu_management import CreateMenuItem

    def _make(name="Chicken Biryani", price=100.0, preparation_time=15, is_available=True, category=None):
        category = category or make_category(name=f"Category for {name}")
        item_id = current_domain.process(
            CreateMenuItem(
                name=name,
                description=f"Freshly made {name.lower()}",
                category_id=str(category.id),
                price=price,
                preparation_time=preparation_time,
                is_available=is_available,
            ),
            asynchronous=False,
        )
        return current_domain.repository_for(MenuItem).get(item_id)

    return _make


@pytest.fixture()
def auth_headers():
    from canteen.identity.security import create_access_token

    def _headers(user):
        token = create_access_token(str(user.id), user.email, user.role)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture()
def client():
    from fastapi import FastAPI
    from fastapi.testclient import TestClient

    from canteen.api import install_api

    return TestClient(install_api(FastAPI()))
