import pytest

from near_linkdrop.config import load_settings
from near_linkdrop.exceptions.exceptions import ConfigurationError


def test_load_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("CONTRACT_NAME", "proxy.testnet")
    monkeypatch.setenv("FUNDING_ACCOUNT_ID", "funder.testnet")
    monkeypatch.setenv("LINKDROP_NEAR_AMOUNT", "0.5")
    monkeypatch.setenv("NUM_KEYS", "3")

    settings = load_settings(env_file=None)

    assert settings.contract_id == "proxy.testnet"
    assert settings.num_keys == 3
    assert settings.uses_per_key == 1
    assert settings.deposit_per_use_yocto == str(5 * 10**23)
    assert settings.node_url == "https://rpc.testnet.near.org"
    assert settings.wallet == "https://wallet.testnet.near.org"


def test_contract_defaults_to_dev_account(tmp_path):
    dev_account = tmp_path / "neardev" / "dev-account"
    dev_account.parent.mkdir()
    dev_account.write_text("dev-1234-5678\n")

    settings = load_settings(
        env_file=None,
        funding_account_id="funder.testnet",
        linkdrop_near_amount="1",
        dev_account_file=dev_account,
    )
    assert settings.contract_id == "dev-1234-5678"


@pytest.mark.parametrize(
    "overrides",
    [
        dict(linkdrop_near_amount="1"),
        dict(funding_account_id="funder.testnet"),
        dict(funding_account_id="", linkdrop_near_amount="1"),
        dict(funding_account_id="funder.testnet", linkdrop_near_amount=" "),
    ],
)
def test_missing_required_inputs(tmp_path, overrides):
    with pytest.raises(ConfigurationError, match="funding account"):
        load_settings(
            env_file=None,
            contract_name="proxy.testnet",
            dev_account_file=tmp_path / "missing",
            **overrides,
        )


def test_missing_contract(tmp_path):
    with pytest.raises(ConfigurationError, match="CONTRACT_NAME"):
        load_settings(
            env_file=None,
            funding_account_id="funder.testnet",
            linkdrop_near_amount="1",
            dev_account_file=tmp_path / "missing",
        )


@pytest.mark.parametrize(
    "overrides",
    [
        dict(uses_per_key=0),
        dict(num_keys=0),
        dict(linkdrop_near_amount="one"),
        dict(linkdrop_near_amount="-1"),
        dict(ft_balance_per_use="-5"),
        dict(network_id="localnet"),
    ],
)
def test_invalid_values(overrides):
    values = dict(
        contract_name="proxy.testnet",
        funding_account_id="funder.testnet",
        linkdrop_near_amount="1",
    )
    values.update(overrides)
    with pytest.raises(ConfigurationError):
        load_settings(env_file=None, **values)
