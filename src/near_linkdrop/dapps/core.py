from typing import TYPE_CHECKING

from near_linkdrop.constants import NEAR_NOMINATION

NEAR = NEAR_NOMINATION

if TYPE_CHECKING:
    from near_linkdrop.account import Account
    from near_linkdrop.gateway import ContractGateway


class DappClient:
    """
    Base class for contract-specific clients.

    Every call goes through the gateway, signed by the bound account.
    """

    def __init__(self, gateway: "ContractGateway", account: "Account"):
        self._gateway = gateway
        self._account = account
