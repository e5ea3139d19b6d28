from fastapi.testclient import TestClient

import api
from errors import AccountNotFound, MalformedAccountData, RpcError, UpstreamFormatError
from sources import TokenMetadata


def _patch(monkeypatch, result=None, error=None):
    calls = []

    def fake_get_token_metadata(mint, use_token_list=None, resolve_logos=True):
        calls.append((mint, use_token_list, resolve_logos))
        if error is not None:
            raise error
        return result

    monkeypatch.setattr(api, "get_token_metadata", fake_get_token_metadata)
    return calls


def test_api_metadata_ok(monkeypatch):
    res = TokenMetadata(mint="MINT1", name="Cool", symbol="CLX", uri="http://x", logo="http://x/y.png", source="onchain")
    calls = _patch(monkeypatch, result=res)
    client = TestClient(api.app)
    r = client.get("/metadata/MINT1")
    assert r.status_code == 200
    data = r.json()
    assert data == {"mint": "MINT1", "name": "Cool", "symbol": "CLX", "source": "onchain", "uri": "http://x", "logo": "http://x/y.png"}
    assert calls == [("MINT1", None, True)]


def test_api_query_flags(monkeypatch):
    res = TokenMetadata(mint="MINT1", name="Cool", symbol="CLX", source="onchain")
    calls = _patch(monkeypatch, result=res)
    client = TestClient(api.app)
    r = client.get("/metadata/MINT1", params={"token_list": "false", "logo": "false"})
    assert r.status_code == 200
    assert r.json()["logo"] is None
    assert calls == [("MINT1", False, False)]


def test_api_not_found(monkeypatch):
    _patch(monkeypatch, error=AccountNotFound("MINT1"))
    r = TestClient(api.app).get("/metadata/MINT1")
    assert r.status_code == 404


def test_api_malformed(monkeypatch):
    _patch(monkeypatch, error=MalformedAccountData("name length 99 exceeds maximum 32"))
    r = TestClient(api.app).get("/metadata/MINT1")
    assert r.status_code == 422
    assert "name length" in r.json()["detail"]


def test_api_invalid_mint(monkeypatch):
    _patch(monkeypatch, error=ValueError("Invalid mint address"))
    r = TestClient(api.app).get("/metadata/bogus")
    assert r.status_code == 400


def test_api_upstream_error(monkeypatch):
    _patch(monkeypatch, error=RpcError("getAsset", {"code": -32603}))
    r = TestClient(api.app).get("/metadata/MINT1")
    assert r.status_code == 502


def test_api_bad_token_list_is_upstream_error(monkeypatch):
    _patch(monkeypatch, error=UpstreamFormatError("Unexpected token list format from http://list"))
    r = TestClient(api.app).get("/metadata/MINT1")
    assert r.status_code == 502
