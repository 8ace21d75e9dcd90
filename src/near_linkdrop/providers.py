import asyncio
import base64
import json
from typing import Optional

import aiohttp
from loguru import logger

from near_linkdrop.constants import TIMEOUT_WAIT_RPC
from near_linkdrop.exceptions.exceptions import RpcNotAvailableError, RpcEmptyResponse
from near_linkdrop.exceptions.provider import (
    UnknownBlockError,
    InvalidAccount,
    NoContractCodeError,
    UnknownAccount,
    UnavailableShardError,
    NoSyncedBlocksError,
    InternalError,
    NoSyncedYetError,
    InvalidTransactionError,
    RPCTimeoutError,
    UnknownAccessKeyError,
    ERROR_CODE_TO_EXCEPTION,
)
from near_linkdrop.models import TransactionResult

PROVIDER_CODE_TO_EXCEPTION = {
    "UNKNOWN_BLOCK": UnknownBlockError,
    "INVALID_ACCOUNT": InvalidAccount,
    "UNKNOWN_ACCOUNT": UnknownAccount,
    "NO_CONTRACT_CODE": NoContractCodeError,
    "UNAVAILABLE_SHARD": UnavailableShardError,
    "NO_SYNCED_BLOCKS": NoSyncedBlocksError,
    "INTERNAL_ERROR": InternalError,
    "NOT_SYNCED_YET": NoSyncedYetError,
    "INVALID_TRANSACTION": InvalidTransactionError,
    "TIMEOUT_ERROR": RPCTimeoutError,
    "UNKNOWN_ACCESS_KEY": UnknownAccessKeyError,
}


class JsonProvider(object):
    """
    JSON-RPC client for a NEAR node.

    Requests go to the configured endpoints in order; the first response
    without an error wins. The aiohttp session is created lazily on first use.
    """

    def __init__(self, rpc_addr, timeout=TIMEOUT_WAIT_RPC, headers=None):
        """
        Args:
            rpc_addr: RPC endpoint URL or list of URLs
            timeout: Request timeout in seconds
            headers: Extra HTTP headers sent with every request
        """
        if isinstance(rpc_addr, list):
            self._rpc_addresses = rpc_addr
        else:
            self._rpc_addresses = [rpc_addr]
        self._headers = headers or dict()
        self.timeout = timeout
        self._client: Optional[aiohttp.ClientSession] = None

    async def startup(self):
        self._client = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.timeout)
        )

    async def shutdown(self):
        if self._client is not None and not self._client.closed:
            await self._client.close()

    async def call_rpc_request(self, method, params):
        """
        Send one JSON-RPC request, falling back to the next endpoint on failure.

        Returns:
            Decoded response of the first endpoint that answered without an error,
            otherwise the last error response (or None if no endpoint answered)
        """
        if not self._client:
            await self.startup()
        j = {"method": method, "params": params, "id": "dontcare", "jsonrpc": "2.0"}

        async def f(rpc_call_addr):
            async with self._client.post(
                rpc_call_addr, json=j, headers=self._headers
            ) as r:
                text = await r.text()
                if r.status == 200:
                    return json.loads(text)
                return {
                    "error": {
                        "cause": {
                            "name": "RPC_ERROR",
                            "message": f"Status: {r.status}",
                        },
                        "data": text,
                    }
                }

        res = None
        for rpc_addr in self._rpc_addresses:
            try:
                res = await f(rpc_addr)
                if "error" not in res:
                    return res
            except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
                logger.error(f"Rpc error: {rpc_addr} {e}")
                continue
        return res

    @staticmethod
    def get_error_from_response(content: dict):
        """
        Map an RPC error payload to the most specific exception class.

        Returns:
            Exception instance if the response carries an error, None otherwise
        """
        if "error" in content:
            error_code = content["error"].get("cause", {}).get("name", "")
            body = content["error"].get("data")
            error = PROVIDER_CODE_TO_EXCEPTION.get(error_code, InternalError)(
                body, error_json=content["error"]
            )
            while True:
                if not isinstance(body, dict):
                    break
                if not body:
                    return error
                if len(body) == 1 and list(body.keys())[0] in ERROR_CODE_TO_EXCEPTION:
                    key, body = list(body.items())[0]
                    if isinstance(body, str) and body in ERROR_CODE_TO_EXCEPTION:
                        key = body
                        body = {}
                    error = ERROR_CODE_TO_EXCEPTION[key](
                        body, error_json=content["error"]
                    )
                else:
                    break
            return error

    async def json_rpc(self, method, params):
        content = await self.call_rpc_request(method, params)
        if not content:
            raise RpcEmptyResponse("RPC returned empty response")

        error = self.get_error_from_response(content)
        if error:
            raise error
        return content["result"]

    async def wait_for_trx(
        self, trx_hash, receiver_id, attempts: int = 6
    ) -> TransactionResult:
        """
        Poll for a transaction that the node did not confirm within its own timeout.

        Raises:
            RPCTimeoutError: If the transaction is not found after all attempts
        """
        for _ in range(attempts):
            await asyncio.sleep(5)
            try:
                result = await self.get_tx(trx_hash, receiver_id)
            except InternalError:
                continue
            except (UnknownBlockError, InvalidTransactionError) as e:
                logger.warning(f"Transaction {trx_hash} not found yet: {e}")
                continue
            if result:
                return result
        raise RPCTimeoutError("Transaction not found")

    async def send_tx_and_wait(
        self,
        signed_tx: str,
        trx_hash: Optional[str] = None,
        receiver_id: Optional[str] = None,
    ) -> TransactionResult:
        """
        Broadcast a signed transaction and wait for its final execution outcome.

        Falls back to polling with wait_for_trx() when the node times out.
        """
        try:
            res = await self.json_rpc("broadcast_tx_commit", [signed_tx])
            return TransactionResult(**res)
        except RPCTimeoutError as e:
            if receiver_id and trx_hash:
                return await self.wait_for_trx(trx_hash, receiver_id)
            raise e

    async def get_status(self):
        """
        Get network status from the first endpoint that answers.

        Raises:
            RpcNotAvailableError: If no endpoint is reachable
        """
        if not self._client:
            await self.startup()
        data = {
            "jsonrpc": "2.0",
            "method": "status",
            "params": {"finality": "final"},
            "id": 1,
        }
        for rpc_addr in self._rpc_addresses:
            try:
                async with self._client.post(
                    rpc_addr, json=data, headers=self._headers
                ) as r:
                    if r.status == 200:
                        text = await r.text()
                        return json.loads(text)["result"]
                    logger.error(f"Rpc get status error {r.status}: {rpc_addr}")
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                logger.error(f"Rpc get status error: {rpc_addr} {e}")

        raise RpcNotAvailableError("RPC not available")

    async def get_access_key(self, account_id, public_key, finality="optimistic"):
        """
        Returns:
            {'block_hash': str, 'block_height': int, 'nonce': int, 'permission': str|dict}
        """
        return await self.json_rpc(
            "query",
            {
                "request_type": "view_access_key",
                "account_id": account_id,
                "public_key": public_key,
                "finality": finality,
            },
        )

    async def view_call(self, account_id, method_name, args, finality="optimistic"):
        """
        Call a view method of a contract.

        Args:
            account_id: Contract account ID
            method_name: Method name to call
            args: Serialized method arguments (bytes, sent base64 encoded)
            finality: Finality level of the queried state
        """
        body = {
            "request_type": "call_function",
            "account_id": account_id,
            "method_name": method_name,
            "args_base64": base64.b64encode(args).decode("utf8"),
            "finality": finality,
        }
        return await self.json_rpc("query", body)

    async def get_tx(self, tx_hash, tx_recipient_id) -> TransactionResult:
        return TransactionResult(
            **await self.json_rpc("tx", [tx_hash, tx_recipient_id])
        )
