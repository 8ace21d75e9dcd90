import json
from typing import Optional

from loguru import logger


class JsonProviderError(Exception):
    trx_hash: Optional[str] = None
    error_json: dict

    def __init__(self, *args, error_json=None, **kargs):
        super().__init__(*args)
        self.error_json = error_json


class TransactionError(JsonProviderError):
    pass


class AccountError(JsonProviderError):
    pass


class BlockError(JsonProviderError):
    pass


class AccessKeyError(JsonProviderError):
    pass


class UnknownAccessKeyError(AccessKeyError):
    """
    The public key is not registered on the account (never added or already deleted)
    """

    pass


class UnknownBlockError(BlockError):
    """
    The block is not produced yet or was garbage-collected by the node
    """

    pass


class InternalError(TransactionError, AccountError, BlockError):
    """
    The node itself failed or is overloaded
    """

    pass


class NoSyncedYetError(BlockError):
    pass


class InvalidAccount(AccountError):
    pass


class UnknownAccount(AccountError):
    """
    The account does not exist (never created or already deleted)
    """

    pass


class NoContractCodeError(AccountError):
    """
    No contract is deployed on the account
    """

    pass


class UnavailableShardError(AccountError):
    pass


class NoSyncedBlocksError(AccountError):
    pass


class InvalidTransactionError(TransactionError):
    """
    The transaction was rejected or failed while executing
    """

    pass


class TxExecutionError(InvalidTransactionError):
    def __init__(self, data=None, error_json=None, **kwargs):
        super().__init__(data, error_json=error_json)
        if data is None:
            data = {}
        if isinstance(data, str):
            try:
                data = json.loads(data)
            except json.decoder.JSONDecodeError:
                logger.error(f"Failed to parse TxExecutionError data: {data}")
                raise InvalidTransactionError(data)
        data.update(kwargs)
        for key, value in data.items():
            setattr(self, key, value)


class InvalidTxError(TxExecutionError):
    pass


class ActionErrorKind(TxExecutionError):
    pass


class AccountDoesNotExist(ActionErrorKind):
    account_id: str


class FunctionCallError(ActionErrorKind):
    """
    The contract method panicked or ran out of gas
    """

    pass


class LackBalanceForState(ActionErrorKind):
    account_id: str
    amount: str


_ACTION_ERROR_KINDS = {
    "AccountDoesNotExist": AccountDoesNotExist,
    "FunctionCallError": FunctionCallError,
    "LackBalanceForState": LackBalanceForState,
}


class ActionError(TxExecutionError):
    index: Optional[int]
    kind: ActionErrorKind

    def __init__(self, data, error_json=None):
        super().__init__({}, error_json=error_json)
        if isinstance(data, str):
            data = json.loads(data)
        self.args = (data,)
        self.index = data.get("index", None)
        kind = data["kind"]
        if isinstance(kind, str):
            self.kind = ActionErrorKind({"name": kind})
        else:
            key, value = list(kind.items())[0]
            if not isinstance(value, dict):
                value = {"error": value}
            self.kind = _ACTION_ERROR_KINDS.get(key, ActionErrorKind)(value)


class InvalidNonce(InvalidTxError):
    tx_nonce: int
    ak_nonce: int


class InvalidAccessKeyError(InvalidTxError):
    pass


class SignerDoesNotExist(InvalidTxError):
    signer_id: str


class NotEnoughBalance(InvalidTxError):
    signer_id: str
    balance: str
    cost: str


class Expired(InvalidTxError):
    pass


class RPCTimeoutError(TransactionError):
    """
    Transaction was routed, but has not been recorded on chain in time.
    """

    pass


ERROR_CODE_TO_EXCEPTION = {
    "AccessKeyError": AccessKeyError,
    "AccountDoesNotExist": AccountDoesNotExist,
    "AccountError": AccountError,
    "ActionError": ActionError,
    "ActionErrorKind": ActionErrorKind,
    "BlockError": BlockError,
    "Expired": Expired,
    "FunctionCallError": FunctionCallError,
    "InternalError": InternalError,
    "InvalidAccessKeyError": InvalidAccessKeyError,
    "InvalidAccount": InvalidAccount,
    "InvalidNonce": InvalidNonce,
    "InvalidTransactionError": InvalidTransactionError,
    "InvalidTxError": InvalidTxError,
    "JsonProviderError": JsonProviderError,
    "LackBalanceForState": LackBalanceForState,
    "NoContractCodeError": NoContractCodeError,
    "NoSyncedBlocksError": NoSyncedBlocksError,
    "NoSyncedYetError": NoSyncedYetError,
    "NotEnoughBalance": NotEnoughBalance,
    "RpcTimeoutError": RPCTimeoutError,
    "SignerDoesNotExist": SignerDoesNotExist,
    "TransactionError": TransactionError,
    "TxExecutionError": TxExecutionError,
    "UnavailableShardError": UnavailableShardError,
    "UnknownAccessKeyError": UnknownAccessKeyError,
    "UnknownAccount": UnknownAccount,
    "UnknownBlockError": UnknownBlockError,
}
