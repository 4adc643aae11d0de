"""Pytest fixtures and configuration."""
import pytest
from unittest.mock import patch
from fastapi.testclient import TestClient
import fakeredis

from bignum.commands import CommandDispatcher
from bignum.engine import DecimalEngine
from bignum.numeric import NumericContext, init
from bignum.services import RedisStore


@pytest.fixture(autouse=True)
def numeric_context():
    """Install the default decimal128 / ROUND_DOWN context."""
    return init(NumericContext())


@pytest.fixture
def fake_server():
    """In-memory Redis server shared by the clients below."""
    return fakeredis.FakeServer()


@pytest.fixture
def fake_redis(fake_server):
    """Text client, as the application uses it."""
    return fakeredis.FakeRedis(server=fake_server, decode_responses=True)


@pytest.fixture
def raw_redis(fake_server):
    """Bytes client on the same server, for writing arbitrary values."""
    return fakeredis.FakeRedis(server=fake_server)


@pytest.fixture
def store(fake_redis):
    """Redis store backed by fakeredis."""
    return RedisStore(client=fake_redis, max_watch_retries=5)


@pytest.fixture
def engine(store):
    """Decimal engine over the fake store."""
    return DecimalEngine(store)


@pytest.fixture
def dispatcher(engine):
    """Command dispatcher over the fake store."""
    return CommandDispatcher(engine)


@pytest.fixture
def client(store, engine, dispatcher):
    """Create test client with the fake store wired into every router."""
    with patch("bignum.routers.health.get_redis_store", return_value=store):
        with patch("bignum.routers.keys.get_engine", return_value=engine):
            with patch("bignum.routers.commands.get_dispatcher", return_value=dispatcher):
                from bignum.main import app
                yield TestClient(app)
