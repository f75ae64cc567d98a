import httpx
import pytest

from app.carriers.service import check_eligibility, only_digits, parse_carrier
from app.config import settings
from app.exceptions import InvalidInput

ACTIVE_CARRIER = {
    "legalName": "TYROLER METALS INC",
    "dbaName": None,
    "dotNumber": 1234567,
    "statusCode": "A",
    "allowedToOperate": "Y",
    "oosDate": None,
    "safetyRating": "S",
}


def _client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def webkey(monkeypatch):
    monkeypatch.setattr(settings, "FMCSA_WEBKEY", "test-key")


class TestParseCarrier:
    def test_active_carrier_eligible(self):
        result = parse_carrier("123456", ACTIVE_CARRIER)
        assert result.eligible is True
        assert result.authority == "active"
        assert result.usdot == "1234567"
        assert result.carrier_name == "TYROLER METALS INC"
        assert result.oos is False
        assert result.fallback is False

    def test_inactive_authority(self):
        result = parse_carrier("1", {**ACTIVE_CARRIER, "statusCode": "I"})
        assert result.authority == "inactive"
        assert result.eligible is False

    def test_unknown_status_code_kept(self):
        assert parse_carrier("1", {**ACTIVE_CARRIER, "statusCode": "x"}).authority == "X"

    def test_missing_status_code(self):
        result = parse_carrier("1", {**ACTIVE_CARRIER, "statusCode": None})
        assert result.authority is None
        assert result.eligible is False

    def test_not_allowed_to_operate(self):
        assert parse_carrier("1", {**ACTIVE_CARRIER, "allowedToOperate": "N"}).eligible is False

    @pytest.mark.parametrize(
        "override",
        [
            {"oosDate": "2024-01-01"},
            {"oosStatus": "y"},
            {"safetyRating": "Out of Service"},
        ],
    )
    def test_out_of_service(self, override):
        result = parse_carrier("1", {**ACTIVE_CARRIER, **override})
        assert result.oos is True
        assert result.eligible is False

    def test_dba_name_when_no_legal_name(self):
        result = parse_carrier("1", {**ACTIVE_CARRIER, "legalName": None, "dbaName": "TM"})
        assert result.carrier_name == "TM"

    def test_raw_only_in_debug(self, monkeypatch):
        assert parse_carrier("1", ACTIVE_CARRIER).raw is None
        monkeypatch.setattr(settings, "DEBUG", True)
        assert parse_carrier("1", ACTIVE_CARRIER).raw == ACTIVE_CARRIER


def test_only_digits():
    assert only_digits("MC-123 456") == "123456"
    assert only_digits(None) == ""


async def test_missing_mc_raises_invalid_input():
    with pytest.raises(InvalidInput):
        await check_eligibility("MC")


async def test_no_webkey_returns_fallback(monkeypatch):
    monkeypatch.setattr(settings, "FMCSA_WEBKEY", "")
    result = await check_eligibility("MC123456")
    assert result.eligible is True
    assert result.fallback is True
    assert result.authority == "unknown"
    assert result.mc_number == "123456"
    assert result.error is None


async def test_registry_lookup(webkey):
    seen = {}

    def handler(request):
        seen["url"] = request.url
        return httpx.Response(200, json={"content": [{"carrier": ACTIVE_CARRIER}]})

    async with _client(handler) as client:
        result = await check_eligibility("123456", client)

    assert result.eligible is True
    assert result.fallback is False
    assert seen["url"].path.endswith("/carriers/docket-number/123456")
    assert seen["url"].params["webKey"] == "test-key"


async def test_registry_content_as_object(webkey):
    def handler(request):
        return httpx.Response(200, json={"content": {"carrier": ACTIVE_CARRIER}})

    async with _client(handler) as client:
        assert (await check_eligibility("123456", client)).eligible is True


async def test_registry_bare_carrier_object(webkey):
    def handler(request):
        return httpx.Response(200, json=ACTIVE_CARRIER)

    async with _client(handler) as client:
        assert (await check_eligibility("123456", client)).carrier_name == "TYROLER METALS INC"


async def test_registry_error_status_falls_back(webkey):
    def handler(request):
        return httpx.Response(503)

    async with _client(handler) as client:
        result = await check_eligibility("123456", client)

    assert result.fallback is True
    assert result.eligible is True
    assert result.error == "FMCSA 503"


async def test_registry_unreachable_falls_back(webkey):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as client:
        result = await check_eligibility("123456", client)

    assert result.fallback is True
    assert "connection refused" in result.error


async def test_registry_bad_json_falls_back(webkey):
    def handler(request):
        return httpx.Response(200, content=b"<html>maintenance</html>")

    async with _client(handler) as client:
        result = await check_eligibility("123456", client)

    assert result.fallback is True
