import base64
from typing import List, Union

import base58
from nacl import signing, encoding
from py_near_primitives import (
    FunctionCallAction,
    Transaction,
)

from near_linkdrop.models import Action


def _signing_key(private_key: Union[str, bytes]):
    if isinstance(private_key, str):
        pk = base58.b58decode(private_key.replace("ed25519:", ""))
    else:
        pk = private_key
    return pk, signing.SigningKey(pk[:32], encoder=encoding.RawEncoder)


def _build_transaction(
    account_id, private_key, receiver_id, nonce, actions: List[Action], block_hash
):
    pk, signing_key = _signing_key(private_key)
    transaction = Transaction(
        account_id,
        signing_key.verify_key.encode(),
        nonce,
        receiver_id,
        block_hash,
        actions,
    )
    return pk, transaction


def sign_and_serialize_transaction(
    account_id,
    private_key,
    receiver_id,
    nonce,
    actions: List[Action],
    block_hash: bytes,
) -> str:
    """
    Sign and serialize a transaction.

    Args:
        account_id: Account ID that signs the transaction
        private_key: Private key (bytes or base58 string) for signing
        receiver_id: Account ID that receives the transaction
        nonce: Nonce value for the transaction
        actions: List of actions to include
        block_hash: Block hash to reference (bytes)

    Returns:
        Base64-encoded signed transaction string
    """
    pk, transaction = _build_transaction(
        account_id, private_key, receiver_id, nonce, actions, block_hash
    )
    signed_trx = bytes(bytearray(transaction.to_vec(pk)))
    return base64.b64encode(signed_trx).decode("utf-8")


def calc_trx_hash(
    account_id,
    private_key,
    receiver_id,
    nonce,
    actions: List[Action],
    block_hash: bytes,
) -> str:
    """
    Calculate the base58 transaction hash without broadcasting it.
    """
    _, transaction = _build_transaction(
        account_id, private_key, receiver_id, nonce, actions, block_hash
    )
    return base58.b58encode(bytes(bytearray(transaction.get_hash()))).decode("utf-8")


def create_function_call_action(method_name: str, args, gas: int, deposit: int):
    """
    Create a FunctionCall action.

    Args:
        method_name: Name of the method to call
        args: Serialized method arguments (bytes)
        gas: Gas to attach
        deposit: Amount of NEAR to attach (in yoctoNEAR)
    """
    return FunctionCallAction(method_name, args, gas, deposit)
