"""Run configuration, read once from the environment (and an optional .env file)."""

from pathlib import Path
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings

from near_linkdrop.constants import NETWORKS
from near_linkdrop.exceptions.exceptions import ConfigurationError
from near_linkdrop.keystore import DEFAULT_CREDENTIALS_DIR
from near_linkdrop.utils import parse_near_amount


class ProvisionSettings(BaseSettings):
    """Settings of one provisioning run."""

    # Accounts
    contract_name: Optional[str] = Field(
        default=None, description="Linkdrop proxy contract account"
    )
    funding_account_id: Optional[str] = Field(default=None)
    root_account: str = Field(default="testnet")
    dev_account_file: Path = Field(default=Path("neardev") / "dev-account")

    # Drop
    linkdrop_near_amount: Optional[str] = Field(
        default=None, description="NEAR deposited per key use"
    )
    num_keys: int = Field(default=1, ge=1)
    uses_per_key: int = Field(default=1, ge=1)
    on_claim_refund_deposit: bool = Field(default=False)
    drop_root: Optional[str] = Field(default="benjiman.testnet")
    start_timestamp: Optional[int] = Field(default=None)
    throttle_timestamp: Optional[int] = Field(default=None)
    claim_permission: Optional[Literal["Claim", "CreateAccountAndClaim"]] = Field(
        default=None
    )
    drop_title: str = Field(default="This is a title")
    drop_description: str = Field(default="This is a description")

    # Fungible token payout; an empty contract disables the FT stage
    ft_contract_id: Optional[str] = Field(default="ft.examples.benjiman.testnet")
    ft_balance_per_use: str = Field(default="25")
    ft_surplus_factor: int = Field(default=2, ge=1)

    # Network
    network_id: Literal["testnet", "mainnet"] = Field(default="testnet")
    rpc_url: Optional[str] = Field(default=None)
    wallet_url: Optional[str] = Field(default=None)
    near_credentials_dir: Path = Field(default=DEFAULT_CREDENTIALS_DIR)

    # Output
    output_dir: Path = Field(default=Path("."))
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")

    @field_validator("linkdrop_near_amount")
    @classmethod
    def check_near_amount(cls, value):
        if value is not None and value.strip():
            if int(parse_near_amount(value)) < 0:
                raise ValueError("linkdrop_near_amount must not be negative")
            return value.strip()
        return None

    @field_validator("ft_balance_per_use")
    @classmethod
    def check_ft_balance(cls, value):
        if not value.isdigit():
            raise ValueError("ft_balance_per_use must be a non-negative integer string")
        return value

    @field_validator(
        "ft_contract_id", "drop_root", "contract_name", "funding_account_id"
    )
    @classmethod
    def empty_as_none(cls, value):
        if value is not None and not value.strip():
            return None
        return value

    @property
    def contract_id(self) -> str:
        return self.contract_name

    @property
    def node_url(self) -> str:
        return self.rpc_url or NETWORKS[self.network_id]["node_url"]

    @property
    def wallet(self) -> str:
        return (self.wallet_url or NETWORKS[self.network_id]["wallet_url"]).rstrip("/")

    @property
    def deposit_per_use_yocto(self) -> str:
        return parse_near_amount(self.linkdrop_near_amount)


def _read_dev_account(path: Path) -> Optional[str]:
    if not path.is_file():
        return None
    return path.read_text(encoding="utf-8").strip() or None


def load_settings(env_file: Optional[str] = ".env", **overrides) -> ProvisionSettings:
    """
    Build the run settings and check the inputs every stage depends on.

    The proxy contract defaults to the account in ``neardev/dev-account``.

    Raises:
        ConfigurationError: If the funding account, the drop amount or the
            proxy contract is missing, or a value is invalid
    """
    if env_file:
        load_dotenv(env_file)
    try:
        settings = ProvisionSettings(**overrides)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e

    if not settings.contract_name:
        settings.contract_name = _read_dev_account(settings.dev_account_file)

    if not settings.funding_account_id or not settings.linkdrop_near_amount:
        raise ConfigurationError(
            "must specify funding account and linkdrop near amount "
            "(FUNDING_ACCOUNT_ID, LINKDROP_NEAR_AMOUNT)"
        )
    if not settings.contract_name:
        raise ConfigurationError(
            f"must specify the linkdrop proxy contract (CONTRACT_NAME) "
            f"or deploy one to {settings.dev_account_file}"
        )
    return settings
