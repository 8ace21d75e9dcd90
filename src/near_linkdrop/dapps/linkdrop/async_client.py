from typing import Any, List, Optional, Union

from near_linkdrop.dapps.core import DappClient
from near_linkdrop.dapps.linkdrop.models import CreateDropModel

DropId = Union[int, str]


def _page(from_index: Optional[int], limit: Optional[int]) -> dict:
    args = {}
    if from_index is not None:
        args["from_index"] = str(from_index)
    if limit is not None:
        args["limit"] = limit
    return args


class LinkdropProxy(DappClient):
    """
    Client for a deployed linkdrop proxy contract.

    Change methods are signed by the bound account: the contract account
    itself for ``new``, the funder for everything else.
    """

    def __init__(self, gateway, account, contract_id: str):
        super().__init__(gateway, account)
        self.contract_id = contract_id

    async def _view(self, method_name: str, args: Optional[dict] = None) -> Any:
        return await self._gateway.view(
            self._account, self.contract_id, method_name, args
        )

    async def new(self, root_account: str, owner_id: str):
        """
        Initialize the contract. Fails if it is already initialized.
        """
        return await self._gateway.call(
            self._account,
            self.contract_id,
            "new",
            {"root_account": root_account, "owner_id": owner_id},
        )

    async def add_to_balance(self, amount: Union[int, str]):
        """
        Top up the funder's balance on the proxy.

        Args:
            amount: yoctoNEAR to attach
        """
        return await self._gateway.call(
            self._account,
            self.contract_id,
            "add_to_balance",
            {},
            amount=int(amount),
        )

    async def create_drop(self, drop: CreateDropModel) -> Optional[DropId]:
        """
        Create a drop for a batch of public keys.

        Returns:
            Drop ID returned by the contract, None if the transaction carried no value
        """
        result = await self._gateway.call(
            self._account,
            self.contract_id,
            "create_drop",
            drop.to_args(),
        )
        return result.return_value

    async def get_next_drop_id(self) -> DropId:
        """
        Id the contract will assign to the next created drop.

        This is a prediction only: a drop created by anyone else in between
        takes the id.
        """
        return await self._view("get_next_drop_id")

    async def get_key_total_supply(self):
        return await self._view("get_key_total_supply")

    async def get_keys(
        self, from_index: Optional[int] = None, limit: Optional[int] = None
    ) -> List[dict]:
        return await self._view("get_keys", _page(from_index, limit))

    async def get_key_information(self, key: str):
        return await self._view("get_key_information", {"key": key})

    async def get_drop_information(self, drop_id: DropId):
        return await self._view("get_drop_information", {"drop_id": drop_id})

    async def get_keys_for_drop(
        self,
        drop_id: DropId,
        from_index: Optional[int] = None,
        limit: Optional[int] = None,
    ):
        return await self._view(
            "get_keys_for_drop", {"drop_id": drop_id, **_page(from_index, limit)}
        )

    async def get_key_supply_for_owner(self, account_id: str):
        return await self._view("get_key_supply_for_owner", {"account_id": account_id})

    async def get_drop_supply_for_owner(self, account_id: str):
        return await self._view(
            "get_drop_supply_for_owner", {"account_id": account_id}
        )

    async def get_drops_for_owner(
        self,
        account_id: str,
        from_index: Optional[int] = None,
        limit: Optional[int] = None,
    ):
        return await self._view(
            "get_drops_for_owner",
            {"account_id": account_id, **_page(from_index, limit)},
        )
