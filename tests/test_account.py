import pytest

from near_linkdrop.account import Account, ViewFunctionError
from near_linkdrop.keys import generate_key_pair


def test_account_decodes_private_keys():
    kp = generate_key_pair()
    acc = Account(account_id="funder.testnet", private_key=kp.private_key)
    assert len(acc._signers) == 1
    assert len(acc._signers[0]) == 64

    acc = Account(account_id="funder.testnet", private_key=[kp.private_key, kp.secret_key])
    assert len(acc._signers) == 2


@pytest.mark.asyncio
async def test_call_without_key_fails_before_rpc():
    acc = Account(account_id="funder.testnet")
    with pytest.raises(ValueError):
        await acc.function_call("proxy.testnet", "add_to_balance", {})
    await acc.shutdown()


@pytest.mark.asyncio
async def test_view_function_decodes_result(monkeypatch):
    acc = Account(account_id="funder.testnet")
    sent = {}

    async def view_call(account_id, method_name, args):
        sent.update(account_id=account_id, method_name=method_name, args=args)
        return {
            "block_height": 10,
            "block_hash": "abc",
            "logs": [],
            "result": list(b'{"drop_id": "3"}'),
        }

    monkeypatch.setattr(acc.provider, "view_call", view_call)
    res = await acc.view_function("proxy.testnet", "get_drop_information", {"drop_id": 3})

    assert res.result == {"drop_id": "3"}
    assert sent["args"] == b'{"drop_id": 3}'


@pytest.mark.asyncio
async def test_view_function_error(monkeypatch):
    acc = Account(account_id="funder.testnet")

    async def view_call(account_id, method_name, args):
        return {"error": "wasm execution failed", "logs": [], "block_height": 1}

    monkeypatch.setattr(acc.provider, "view_call", view_call)
    with pytest.raises(ViewFunctionError):
        await acc.view_function("proxy.testnet", "get_keys")
