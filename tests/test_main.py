import json

import pytest

import near_linkdrop.__main__ as cli
from fakes import FakeGateway
from near_linkdrop.exceptions.exceptions import ConfigurationError


def test_missing_configuration_makes_no_remote_calls(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)

    def no_account(*args, **kwargs):
        raise AssertionError("no account may be built without configuration")

    monkeypatch.setattr(cli, "Account", no_account)
    monkeypatch.setattr(cli, "ContractGateway", no_account)

    assert cli.main() == 1


@pytest.mark.asyncio
async def test_provision_end_to_end(settings):
    gateway = FakeGateway(
        views={"get_next_drop_id": 1, "get_key_total_supply": "1"},
        returns={"create_drop": 1},
    )

    result = await cli.provision(settings, gateway=gateway)

    (fund,) = gateway.calls_to("add_to_balance")
    assert fund["amount"] == 4005 * 10**21
    assert result.failed_stages == []
    assert len(result.views) == 8

    views = json.loads((settings.output_dir / "views-create.json").read_text())
    assert views == result.views
    assert views["get_key_total_supply"] == "1"

    links = json.loads((settings.output_dir / "pks.json").read_text())
    (kp,) = result.key_pairs
    assert links == {
        kp.public_key: f"https://wallet.testnet.near.org/linkdrop/proxy.testnet/{kp.secret_key}"
    }


@pytest.mark.asyncio
async def test_provision_writes_partial_results(settings):
    gateway = FakeGateway(views={"get_next_drop_id": 1}, returns={"create_drop": 1})
    gateway.fail["create_drop"] = RuntimeError("rpc down")
    gateway.fail["get_keys"] = RuntimeError("rpc down")

    result = await cli.provision(settings, gateway=gateway)

    assert "create_drop" in result.failed_stages
    views = json.loads((settings.output_dir / "views-create.json").read_text())
    assert "get_keys" not in views
    assert "get_key_total_supply" in views
    assert (settings.output_dir / "pks.json").exists()


@pytest.mark.asyncio
async def test_links_written_when_view_snapshot_fails(settings, gateway):
    (settings.output_dir / "views-create.json").mkdir(parents=True)

    result = await cli.provision(settings, gateway=gateway)

    links = json.loads((settings.output_dir / "pks.json").read_text())
    (kp,) = result.key_pairs
    assert kp.public_key in links


@pytest.mark.asyncio
async def test_missing_funder_credentials_stop_before_pipeline(settings, gateway):
    (settings.near_credentials_dir / "testnet" / "funder.testnet.json").unlink()

    with pytest.raises(ConfigurationError, match="funder.testnet"):
        await cli.provision(settings, gateway=gateway)

    assert gateway.calls == []
    assert not (settings.output_dir / "pks.json").exists()
