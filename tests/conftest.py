from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

from app.config import settings
from app.loads.models import Load
from app.main import app


@pytest.fixture
def api_key():
    return settings.API_KEY


@pytest.fixture
def sample_loads():
    return [
        {
            "load_id": "L-1001",
            "origin": "Dallas, TX",
            "destination": "Atlanta, GA",
            "pickup_datetime": "2025-08-22T09:00:00-05:00",
            "delivery_datetime": "2025-08-23T17:00:00-04:00",
            "equipment_type": "Dry Van",
            "loadboard_rate": 2200,
            "notes": "No pallets exchange",
            "weight": "38000 lb",
            "commodity_type": "Paper goods",
        },
        {
            "load_id": "L-1002",
            "origin": "Reno, NV",
            "destination": "Los Angeles, CA",
            "pickup_datetime": "2025-08-22T10:00:00-07:00",
            "delivery_datetime": "2025-08-22T20:00:00-07:00",
            "equipment_type": "Reefer",
            "loadboard_rate": 1400,
            "notes": "Keep at 36F",
            "weight": 38000,
            "commodity_type": "Fresh produce",
        },
        {
            "load_id": "L-1003",
            "origin": "Dallas, TX",
            "destination": "Atlanta, GA",
            "pickup_datetime": "2025-08-24T08:00:00-05:00",
            "delivery_datetime": "2025-08-25T12:00:00-04:00",
            "equipment_type": "Van",
            "loadboard_rate": 2500,
            "notes": "",
            "weight": 41000,
            "commodity_type": "Household goods",
            "miles": 780,
        },
    ]


@pytest.fixture
def load_models(sample_loads):
    return [Load(**doc) for doc in sample_loads]


def _make_collection(docs=None, find_one_result=None, count=0):
    mock_cursor = MagicMock()
    mock_cursor.to_list = AsyncMock(return_value=docs or [])

    collection = MagicMock()
    collection.find = MagicMock(return_value=mock_cursor)
    collection.find_one = AsyncMock(return_value=find_one_result)
    collection.insert_one = AsyncMock()
    collection.count_documents = AsyncMock(return_value=count)
    return collection


def _make_mock_db(loads_data, find_one_result=None, call_records=None):
    """Mock motor database with loads, negotiations and call_records collections.

    Collections are reachable both as attributes (db.loads) and by
    subscription (db["negotiations"]), like the real driver.
    """
    call_records = call_records or []
    collections = {
        "loads": _make_collection(loads_data, find_one_result),
        "negotiations": _make_collection(),
        "call_records": _make_collection(call_records, count=len(call_records) + 1),
    }

    mock_db = MagicMock()
    for name, collection in collections.items():
        setattr(mock_db, name, collection)
    mock_db.__getitem__.side_effect = lambda name: collections[name]
    return mock_db


@pytest.fixture
def mock_db(sample_loads):
    return _make_mock_db(sample_loads, sample_loads[0])


@pytest.fixture
async def client(api_key, mock_db):
    with patch("app.database.get_database", return_value=mock_db):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            ac.headers["X-API-Key"] = api_key
            yield ac
