"""
Linkdrop provisioning pipeline.

The run is a fixed list of stages executed in order. Each stage is wrapped
by :func:`run_stage`, which turns an exception into a failed
:class:`StageOutcome` and logs it, so a failing stage never stops the
stages after it. Values flow between stages explicitly: a stage declares the
names it ``requires`` and the name it ``provides``, and the driver passes
them along. A value is only provided when its stage succeeded.
"""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

from loguru import logger

from near_linkdrop import constants
from near_linkdrop.amounts import calculate_funding_amount, calculate_ft_transfer_amount
from near_linkdrop.config import ProvisionSettings
from near_linkdrop.dapps.ft.async_client import FT
from near_linkdrop.dapps.linkdrop.async_client import DropId, LinkdropProxy
from near_linkdrop.dapps.linkdrop.models import (
    CreateDropModel,
    DropConfig,
    DropMetadata,
    FTData,
)
from near_linkdrop.exceptions.exceptions import MissingStageInput
from near_linkdrop.keys import KeyPair
from near_linkdrop.utils import format_near_amount, parse_near_amount


@dataclass(frozen=True)
class Stage:
    name: str
    run: Callable[..., Awaitable[Any]]
    requires: Tuple[str, ...] = ()
    provides: Optional[str] = None


@dataclass
class StageOutcome:
    name: str
    ok: bool
    value: Any = None
    error: Optional[BaseException] = None


@dataclass
class ProvisioningResult:
    key_pairs: List[KeyPair]
    drop_id: Optional[DropId] = None
    views: Dict[str, Any] = field(default_factory=dict)
    outcomes: List[StageOutcome] = field(default_factory=list)

    @property
    def failed_stages(self) -> List[str]:
        return [o.name for o in self.outcomes if not o.ok]


async def run_stage(
    name: str, func: Callable[..., Awaitable[Any]], **kwargs
) -> StageOutcome:
    logger.info(f"{name}: started")
    try:
        value = await func(**kwargs)
    except Exception as e:
        logger.error(f"{name}: failed: {e!r}")
        return StageOutcome(name=name, ok=False, error=e)
    logger.info(f"{name}: done")
    return StageOutcome(name=name, ok=True, value=value)


def _require(stage: str, name: str, value):
    if value is None:
        raise MissingStageInput(stage, name)
    return value


class ProvisioningPipeline:
    """
    Provision a linkdrop on a deployed proxy contract.

    Args:
        settings: Run settings
        contract: Proxy client signed by the contract account, used for ``new``
        funder: Proxy client signed by the funding account
        ft: Fungible token client signed by the funding account
    """

    def __init__(
        self,
        settings: ProvisionSettings,
        contract: LinkdropProxy,
        funder: LinkdropProxy,
        ft: FT,
    ):
        self.settings = settings
        self.contract = contract
        self.funder = funder
        self.ft = ft

    @property
    def stages(self) -> List[Stage]:
        return [
            Stage("initialize", self.initialize),
            Stage("fund_balance", self.fund_balance, requires=("public_keys",)),
            Stage(
                "create_drop",
                self.create_drop,
                requires=("public_keys",),
                provides="drop_id",
            ),
            Stage(
                "fund_fungible_token",
                self.fund_fungible_token,
                requires=("public_keys", "drop_id"),
            ),
            Stage(
                "collect_views",
                self.collect_views,
                requires=("public_keys", "drop_id"),
                provides="views",
            ),
        ]

    async def run(self, key_pairs: List[KeyPair]) -> ProvisioningResult:
        values: Dict[str, Any] = {"public_keys": [kp.public_key for kp in key_pairs]}
        result = ProvisioningResult(key_pairs=list(key_pairs))
        for stage in self.stages:
            kwargs = {name: values.get(name) for name in stage.requires}
            outcome = await run_stage(stage.name, stage.run, **kwargs)
            result.outcomes.append(outcome)
            if outcome.ok and stage.provides:
                values[stage.provides] = outcome.value
        result.drop_id = values.get("drop_id")
        result.views = values.get("views") or {}
        return result

    async def initialize(self):
        logger.info(f"initializing contract for account {self.settings.contract_id}")
        return await self.contract.new(
            root_account=self.settings.root_account,
            owner_id=self.settings.contract_id,
        )

    async def fund_balance(self, public_keys: List[str]):
        amount = calculate_funding_amount(
            self.settings.linkdrop_near_amount,
            num_keys=len(_require("fund_balance", "public_keys", public_keys)),
            uses_per_key=self.settings.uses_per_key,
        )
        logger.info(
            f"adding {format_near_amount(amount)} NEAR to the balance of "
            f"{self.settings.funding_account_id}"
        )
        return await self.funder.add_to_balance(amount)

    def build_drop(self, public_keys: List[str]) -> CreateDropModel:
        settings = self.settings
        ft_data = None
        if settings.ft_contract_id:
            ft_data = FTData(
                contract_id=settings.ft_contract_id,
                sender_id=settings.funding_account_id,
                balance_per_use=settings.ft_balance_per_use,
            )
        return CreateDropModel(
            public_keys=public_keys,
            deposit_per_use=settings.deposit_per_use_yocto,
            ft_data=ft_data,
            config=DropConfig(
                uses_per_key=settings.uses_per_key,
                start_timestamp=settings.start_timestamp,
                throttle_timestamp=settings.throttle_timestamp,
                on_claim_refund_deposit=settings.on_claim_refund_deposit,
                claim_permission=settings.claim_permission,
                drop_root=settings.drop_root,
            ),
            metadata=DropMetadata(
                title=settings.drop_title,
                description=settings.drop_description,
            ).model_dump_json(),
        )

    async def create_drop(self, public_keys: List[str]) -> DropId:
        """
        Create the drop and return its id.

        The id is read from ``get_next_drop_id`` before the drop exists and is
        replaced by the id ``create_drop`` returns, which wins if another drop
        was created in between.
        """
        drop = self.build_drop(_require("create_drop", "public_keys", public_keys))
        try:
            predicted_id = await self.funder.get_next_drop_id()
        except Exception as e:
            logger.error(f"error calling view get_next_drop_id: {e!r}")
            predicted_id = None
        else:
            logger.info(f"next drop id: {predicted_id}")
        created_id = await self.funder.create_drop(drop)
        if created_id is None:
            if predicted_id is None:
                raise MissingStageInput("create_drop", "drop_id")
            logger.warning(
                f"create_drop returned no id, using predicted id {predicted_id}"
            )
            return predicted_id
        if predicted_id is not None and str(created_id) != str(predicted_id):
            logger.warning(
                f"drop id {created_id} differs from predicted id {predicted_id}, "
                f"another drop was created concurrently"
            )
        return created_id

    async def fund_fungible_token(
        self, public_keys: List[str], drop_id: Optional[DropId]
    ):
        settings = self.settings
        if not settings.ft_contract_id:
            logger.info("no fungible token configured, skipping")
            return None
        num_keys = len(_require("fund_fungible_token", "public_keys", public_keys))
        logger.info(
            f"Paying for FT storage on contract: {settings.ft_contract_id} "
            f"for the proxy contract ID"
        )
        await self.ft.storage_deposit(
            settings.ft_contract_id,
            account_id=settings.contract_id,
            amount=parse_near_amount(constants.FT_STORAGE_DEPOSIT),
        )
        drop_id = _require("fund_fungible_token", "drop_id", drop_id)
        amount = calculate_ft_transfer_amount(
            settings.ft_balance_per_use,
            num_keys=num_keys,
            uses_per_key=settings.uses_per_key,
            surplus_factor=settings.ft_surplus_factor,
        )
        logger.info(
            f"Transferring {amount} FTs from {settings.funding_account_id} "
            f"to {settings.contract_id}"
        )
        return await self.ft.ft_transfer_call(
            settings.ft_contract_id,
            receiver_id=settings.contract_id,
            amount=amount,
            msg=str(drop_id),
        )

    def view_requests(
        self, public_keys, drop_id
    ) -> List[Tuple[str, Callable[[], Awaitable[Any]]]]:
        funder = self.funder
        owner = self.settings.funding_account_id

        def needs_key():
            keys = _require("get_key_information", "public_keys", public_keys or None)
            return keys[0]

        def needs_drop(method):
            return _require(method, "drop_id", drop_id)

        return [
            ("get_key_total_supply", funder.get_key_total_supply),
            ("get_keys", funder.get_keys),
            (
                "get_key_information",
                lambda: funder.get_key_information(needs_key()),
            ),
            (
                "get_drop_information",
                lambda: funder.get_drop_information(needs_drop("get_drop_information")),
            ),
            (
                "get_keys_for_drop",
                lambda: funder.get_keys_for_drop(needs_drop("get_keys_for_drop")),
            ),
            (
                "get_key_supply_for_owner",
                lambda: funder.get_key_supply_for_owner(owner),
            ),
            (
                "get_drop_supply_for_owner",
                lambda: funder.get_drop_supply_for_owner(owner),
            ),
            ("get_drops_for_owner", lambda: funder.get_drops_for_owner(owner)),
        ]

    async def collect_views(self, public_keys, drop_id) -> Dict[str, Any]:
        views: Dict[str, Any] = {}
        for name, request in self.view_requests(public_keys, drop_id):
            try:
                views[name] = await request()
            except Exception as e:
                logger.error(f"error calling view {name}: {e!r}")
                continue
            logger.info(f"{name}: {views[name]}")
        return views
