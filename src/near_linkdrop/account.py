import asyncio
import collections
import json
from typing import List, Union, Dict, Optional

import base58
from nacl import signing, encoding
from loguru import logger

from near_linkdrop import constants
from near_linkdrop import transactions
from near_linkdrop import utils
from near_linkdrop.exceptions.provider import JsonProviderError
from near_linkdrop.models import (
    TransactionResult,
    ViewFunctionResult,
    AccountAccessKey,
    Action,
)
from near_linkdrop.providers import JsonProvider


class ViewFunctionError(Exception):
    """Exception raised when a view function call fails."""

    pass


class Account(object):
    """
    NEAR account bound to zero or more signing keys.

    Accounts without keys can still run view calls; signing a transaction
    without a key raises ValueError.
    """

    _lock: asyncio.Lock = None
    _latest_block_hash: str
    _latest_block_hash_ts: float = 0
    _latest_block_height: int = 0

    def __init__(
        self,
        account_id: str = None,
        private_key: Union[List[Union[str, bytes]], str, bytes] = None,
        rpc_addr=constants.RPC_TESTNET,
    ):
        """
        Args:
            account_id: NEAR account identifier (e.g., "example.testnet")
            private_key: Private key or list of private keys used for signing,
                None for read-only use
            rpc_addr: RPC endpoint URL or list of URLs
        """
        self._provider = JsonProvider(rpc_addr)
        self.account_id = account_id
        if private_key is None:
            private_keys = []
        elif isinstance(private_key, list):
            private_keys = private_key
        else:
            private_keys = [private_key]

        self._signers: List[bytes] = []
        self._access_key_nonce: Dict[bytes, int] = collections.defaultdict(int)

        for pk in private_keys:
            if isinstance(pk, str):
                try:
                    pk = base58.b58decode(pk.replace("ed25519:", ""))
                except (UnicodeEncodeError, ValueError):
                    logger.error(f"Can't decode private key {pk[:10]}")
                    continue
            self._signers.append(pk)

    def __repr__(self):
        return f"Account({self.account_id!r})"

    async def shutdown(self):
        await self._provider.shutdown()

    async def _update_last_block_hash(self):
        """
        Refresh the cached block hash used as transaction reference.

        Transactions referencing a too old block are rejected by the network.
        """
        if self._latest_block_hash_ts + 50 > utils.timestamp():
            return
        sync_info = (await self._provider.get_status())["sync_info"]
        self._latest_block_hash = sync_info["latest_block_hash"]
        self._latest_block_height = sync_info["latest_block_height"]
        self._latest_block_hash_ts = utils.timestamp()

    async def sign_and_submit_tx(
        self, receiver_id, actions: List[Action]
    ) -> TransactionResult:
        """
        Sign a transaction with the first key and wait for its execution outcome.

        Raises:
            ValueError: If no private keys are configured
        """
        if not self._signers:
            raise ValueError(
                f"You must provide a private key to call methods as {self.account_id}"
            )
        if self._lock is None:
            self._lock = asyncio.Lock()
        pk = self._signers[0]

        async with self._lock:
            await self._update_last_block_hash()
            if self._access_key_nonce[pk] == 0:
                access_key = await self.get_access_key(pk)
                self._access_key_nonce[pk] = access_key.nonce
            self._access_key_nonce[pk] += 1
            nonce = self._access_key_nonce[pk]

        block_hash = base58.b58decode(self._latest_block_hash.encode("utf8"))
        trx_hash = transactions.calc_trx_hash(
            self.account_id, pk, receiver_id, nonce, actions, block_hash
        )
        serialized_tx = transactions.sign_and_serialize_transaction(
            self.account_id, pk, receiver_id, nonce, actions, block_hash
        )

        try:
            return await self._provider.send_tx_and_wait(
                serialized_tx, trx_hash=trx_hash, receiver_id=receiver_id
            )
        except JsonProviderError as e:
            e.trx_hash = trx_hash
            raise

    @property
    def provider(self) -> JsonProvider:
        return self._provider

    async def get_access_key(self, pk: Optional[bytes] = None) -> AccountAccessKey:
        """
        Get access key information for the public key of a private key.

        Args:
            pk: Private key bytes. If None, uses the first configured signer.
        """
        if pk is None:
            pk = self._signers[0]

        private_key = signing.SigningKey(pk[:32], encoder=encoding.RawEncoder)
        public_key = private_key.verify_key
        resp = await self._provider.get_access_key(
            self.account_id, base58.b58encode(public_key.encode()).decode("utf8")
        )
        if "error" in resp:
            raise ValueError(resp["error"])
        return AccountAccessKey(**resp)

    async def function_call(
        self,
        contract_id: str,
        method_name: str,
        args: dict,
        gas: int = constants.DEFAULT_ATTACHED_GAS,
        amount: int = 0,
    ) -> TransactionResult:
        """
        Call a change method of a contract.

        Args:
            contract_id: Contract account ID
            method_name: Name of the method to call
            args: Arguments, serialized as JSON
            gas: Gas to attach, 300 TGas by default
            amount: yoctoNEAR to attach
        """
        ser_args = json.dumps(args).encode("utf8")
        return await self.sign_and_submit_tx(
            contract_id,
            [
                transactions.create_function_call_action(
                    method_name, ser_args, gas, int(amount)
                )
            ],
        )

    async def view_function(
        self,
        contract_id: str,
        method_name: str,
        args: Optional[dict] = None,
    ) -> ViewFunctionResult:
        """
        Call a view method of a contract (read-only, no transaction).

        Raises:
            ViewFunctionError: If the contract reports an error
        """
        result = await self._provider.view_call(
            contract_id,
            method_name,
            json.dumps(args or {}).encode("utf8"),
        )
        if "error" in result:
            raise ViewFunctionError(result["error"])
        raw = bytes(result["result"])
        result["result"] = json.loads(raw) if raw else None
        return ViewFunctionResult(**result)

