import pytest
from orders.auth import Principal, Role, issue_token
from orders.config import Settings
from orders.users import StaticUserDirectory, reset_user_directory, set_user_directory
from protean.integrations.pytest import DomainFixture

TEST_SECRET = "orders-test-secret-0123456789abcdef"

ALICE_ID = "0d2c6c3b-1e6b-4f0e-8a57-3b1f4c1e2d9a"
BOB_ID = "7f9e2b1a-3c4d-4e5f-8a9b-0c1d2e3f4a5b"
ADMIN_ID = "c3a1f7e2-5b6d-4c8e-9f0a-1b2c3d4e5f6a"


@pytest.fixture(scope="session")
def orders_bed():
    from orders.domain import orders

    bed = DomainFixture(orders)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(orders_bed):
    with orders_bed.domain_context():
        yield


@pytest.fixture(autouse=True)
def _user_directory():
    yield
    reset_user_directory()


@pytest.fixture()
def settings():
    return Settings(env="test", jwt_secret=TEST_SECRET)


@pytest.fixture()
def alice():
    return Principal(user_id=ALICE_ID, roles=frozenset({Role.USER}))


@pytest.fixture()
def bob():
    return Principal(user_id=BOB_ID, roles=frozenset({Role.USER, Role.MANAGER}))


@pytest.fixture()
def admin():
    return Principal(user_id=ADMIN_ID, roles=frozenset({Role.ADMIN}))


@pytest.fixture()
def known_users():
    directory = StaticUserDirectory([ALICE_ID, BOB_ID, ADMIN_ID])
    set_user_directory(directory)
    return directory


@pytest.fixture()
def token_for():
    def _token_for(user_id, *roles):
        return issue_token(TEST_SECRET, user_id, roles=roles or (Role.USER,))

    return _token_for
