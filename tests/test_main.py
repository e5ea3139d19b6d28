import json

import main
from errors import AccountNotFound
from sources import TokenMetadata


def test_main_prints_json(monkeypatch, capsys):
    seen = {}

    def fake_get_token_metadata(mint, rpc_url=None, use_token_list=None, resolve_logos=True):
        seen.update(mint=mint, rpc_url=rpc_url, use_token_list=use_token_list, resolve_logos=resolve_logos)
        return TokenMetadata(mint=mint, name="Cool", symbol="CLX", uri="http://x", source="onchain")

    monkeypatch.setattr(main, "get_token_metadata", fake_get_token_metadata)
    rc = main.main(["--mint", "MINT1", "--rpc", "http://rpc", "--no-token-list"])
    assert rc == 0

    out = json.loads(capsys.readouterr().out)
    assert out["name"] == "Cool"
    assert out["symbol"] == "CLX"
    assert out["logo"] is None
    assert seen == {"mint": "MINT1", "rpc_url": "http://rpc", "use_token_list": False, "resolve_logos": True}


def test_main_reports_failure(monkeypatch, capsys):
    def fake_get_token_metadata(mint, **kwargs):
        raise AccountNotFound(mint)

    monkeypatch.setattr(main, "get_token_metadata", fake_get_token_metadata)
    rc = main.main(["--mint", "MINT1", "--no-logo"])
    assert rc == 1
    assert capsys.readouterr().out == ""
