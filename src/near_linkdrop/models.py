import base64
import json
from dataclasses import dataclass, field
from enum import Enum
from json import JSONDecodeError
from typing import List, Any, Optional, Union

from py_near_primitives.py_near_primitives import FunctionCallAction

from near_linkdrop.exceptions.provider import ActionError

Action = FunctionCallAction


class ReceiptOutcome:
    logs: List[str]
    receipt_ids: List[str]
    status: dict
    tokens_burnt: str
    executor_id: str
    gas_burnt: int

    def __init__(self, data):
        self.logs = data["outcome"]["logs"]
        self.receipt_ids = data["outcome"]["receipt_ids"]
        self.status = data["outcome"]["status"]
        self.tokens_burnt = data["outcome"]["tokens_burnt"]
        self.gas_burnt = data["outcome"]["gas_burnt"]
        self.executor_id = data["outcome"].get("executor_id", "")


class ActionType(str, Enum):
    FUNCTION_CALL = "FunctionCall"


@dataclass
class ReceiptAction:
    transactions_type: str
    deposit: Optional[str] = None
    gas: Optional[int] = field(default=None)
    method_name: Optional[str] = field(default=None)
    args: Any = field(default=None)

    @classmethod
    def build(cls, data: Union[str, dict]) -> "ReceiptAction":
        if isinstance(data, str):
            return cls(transactions_type=data)

        action_type, action_data = list(data.items())[0]
        args = None
        if action_type == ActionType.FUNCTION_CALL:
            try:
                args = json.loads(base64.b64decode(action_data["args"]))
            except (UnicodeDecodeError, JSONDecodeError, ValueError):
                args = None
        return cls(
            transactions_type=action_type,
            deposit=action_data.get("deposit"),
            gas=action_data.get("gas"),
            method_name=action_data.get("method_name"),
            args=args,
        )


class TransactionData:
    hash: str
    public_key: str
    receiver_id: str
    signature: str
    signer_id: str
    nonce: int
    actions: List[ReceiptAction]

    def __init__(
        self,
        hash,
        public_key,
        receiver_id,
        signature,
        signer_id,
        nonce,
        actions,
        **kargs,
    ):
        self.actions = [ReceiptAction.build(a) for a in actions]
        self.nonce = nonce
        self.signer_id = signer_id
        self.public_key = public_key
        self.receiver_id = receiver_id
        self.signature = signature
        self.hash = hash


class TransactionResult:
    receipt_outcome: List[ReceiptOutcome]
    transaction_outcome: ReceiptOutcome
    status: dict
    transaction: TransactionData

    def __init__(
        self, receipts_outcome, transaction_outcome, transaction, status, **kargs
    ):
        self.status = status
        self.transaction = TransactionData(**transaction)
        self.transaction_outcome = ReceiptOutcome(transaction_outcome)

        self.receipt_outcome = []
        for ro in receipts_outcome:
            self.receipt_outcome.append(ReceiptOutcome(ro))

    @property
    def logs(self):
        logs = list(self.transaction_outcome.logs)
        for ro in self.receipt_outcome:
            logs.extend(ro.logs)
        return logs

    @property
    def failure(self) -> Optional[dict]:
        """
        Failure payload of the final execution status, None if the transaction succeeded.
        """
        if isinstance(self.status, dict) and "Failure" in self.status:
            return self.status["Failure"]
        return None

    @property
    def error(self) -> Optional[ActionError]:
        failure = self.failure
        if failure and "ActionError" in failure:
            return ActionError(failure["ActionError"])
        return None

    @property
    def return_value(self) -> Any:
        """
        JSON decoded return value of the called method, None when it returned nothing.
        """
        if not isinstance(self.status, dict):
            return None
        raw = self.status.get("SuccessValue")
        if not raw:
            return None
        decoded = base64.b64decode(raw)
        try:
            return json.loads(decoded)
        except (UnicodeDecodeError, JSONDecodeError):
            return decoded


class ViewFunctionResult:
    block_hash: str
    block_height: str
    logs: List[str]
    result: Any

    def __init__(self, block_height, logs, result, block_hash=""):
        self.block_hash = block_hash
        self.block_height = block_height
        self.logs = logs
        self.result = result


@dataclass
class AccountAccessKey:
    block_hash: str
    block_height: int
    nonce: int
    permission: Union[str, dict]
