from typing import Optional, Union

from near_linkdrop.constants import ONE_YOCTO
from near_linkdrop.dapps.core import DappClient, NEAR


class FT(DappClient):
    """
    NEP-141 fungible token client.
    """

    async def storage_deposit(
        self,
        contract_id: str,
        account_id: Optional[str] = None,
        amount: Union[int, str] = NEAR // 50,
    ):
        """
        Register an account on the token contract, paying its storage.

        Args:
            contract_id: Fungible token contract
            account_id: Account to register. If None, uses the current account.
            amount: yoctoNEAR to attach (default: 0.02 NEAR)
        """
        if not account_id:
            account_id = self._account.account_id
        return await self._gateway.call(
            self._account,
            contract_id,
            "storage_deposit",
            {"account_id": account_id},
            amount=int(amount),
        )

    async def ft_transfer_call(
        self,
        contract_id: str,
        receiver_id: str,
        amount: Union[int, str],
        msg: str = "",
    ):
        """
        Transfer tokens and call ``ft_on_transfer`` on the receiver contract.

        Args:
            contract_id: Fungible token contract
            receiver_id: Receiving contract
            amount: Raw amount in the token's smallest unit
            msg: Message handed to ``ft_on_transfer``
        """
        return await self._gateway.call(
            self._account,
            contract_id,
            "ft_transfer_call",
            {
                "receiver_id": receiver_id,
                "amount": str(amount),
                "msg": msg,
            },
            amount=ONE_YOCTO,
        )

