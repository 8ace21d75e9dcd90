import json

import pytest

from fakes import FakeGateway
from near_linkdrop.config import ProvisionSettings
from near_linkdrop.keys import generate_key_pair

ENV_VARS = [
    "CONTRACT_NAME",
    "FUNDING_ACCOUNT_ID",
    "LINKDROP_NEAR_AMOUNT",
    "NUM_KEYS",
    "USES_PER_KEY",
    "FT_CONTRACT_ID",
    "FT_BALANCE_PER_USE",
    "NETWORK_ID",
    "RPC_URL",
    "WALLET_URL",
    "OUTPUT_DIR",
    "DEV_ACCOUNT_FILE",
    "NEAR_CREDENTIALS_DIR",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings(tmp_path) -> ProvisionSettings:
    funder_key = tmp_path / "credentials" / "testnet" / "funder.testnet.json"
    funder_key.parent.mkdir(parents=True)
    funder_key.write_text(
        json.dumps(
            {
                "account_id": "funder.testnet",
                "private_key": generate_key_pair().private_key,
            }
        )
    )
    return ProvisionSettings(
        contract_name="proxy.testnet",
        funding_account_id="funder.testnet",
        linkdrop_near_amount="1",
        ft_contract_id="ft.examples.benjiman.testnet",
        near_credentials_dir=tmp_path / "credentials",
        dev_account_file=tmp_path / "neardev" / "dev-account",
        output_dir=tmp_path / "out",
    )


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway(
        views={"get_next_drop_id": 0},
        returns={"create_drop": 0},
    )
