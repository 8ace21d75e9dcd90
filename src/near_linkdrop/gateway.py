from typing import Any, Optional

from loguru import logger

from near_linkdrop import constants
from near_linkdrop.account import Account
from near_linkdrop.exceptions.exceptions import RemoteCallError, RemoteViewError
from near_linkdrop.models import TransactionResult


class ContractGateway:
    """
    Stateless adapter for contract calls.

    `call` sends one state-changing transaction and `view` runs a read-only
    query. Neither retries. Every failure, including a transaction that was
    executed but ended in ``Failure``, is raised as RemoteCallError or
    RemoteViewError with the original error attached.
    """

    async def call(
        self,
        account: Account,
        contract_id: str,
        method_name: str,
        args: dict,
        gas: int = constants.DEFAULT_ATTACHED_GAS,
        amount: int = 0,
    ) -> TransactionResult:
        logger.debug(
            f"call {contract_id}.{method_name} as {account.account_id}, deposit {amount}"
        )
        try:
            result = await account.function_call(
                contract_id, method_name, args, gas=gas, amount=int(amount)
            )
        except Exception as e:
            error = RemoteCallError(contract_id, method_name, e)
            error.trx_hash = getattr(e, "trx_hash", None)
            raise error from e

        failure = result.failure
        if failure is not None:
            error = RemoteCallError(contract_id, method_name, result.error or failure)
            error.trx_hash = result.transaction.hash
            raise error
        for line in result.logs:
            logger.debug(f"{contract_id}.{method_name}: {line}")
        return result

    async def view(
        self,
        account: Account,
        contract_id: str,
        method_name: str,
        args: Optional[dict] = None,
    ) -> Any:
        logger.debug(f"view {contract_id}.{method_name} {args or {}}")
        try:
            result = await account.view_function(contract_id, method_name, args or {})
        except Exception as e:
            raise RemoteViewError(contract_id, method_name, e) from e
        return result.result
