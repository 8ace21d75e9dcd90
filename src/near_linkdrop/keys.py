from dataclasses import dataclass
from typing import List

import base58
from nacl import signing

KEY_TYPE = "ed25519"


@dataclass(frozen=True)
class KeyPair:
    """
    ed25519 key pair in the string encoding used by NEAR wallets.

    public_key is ``ed25519:<base58 public key>``; secret_key is the base58
    encoded 64-byte secret (seed followed by public key), without prefix,
    which is the form embedded in wallet linkdrop URLs.
    """

    public_key: str
    secret_key: str

    @property
    def private_key(self) -> str:
        return f"{KEY_TYPE}:{self.secret_key}"


def generate_key_pair() -> KeyPair:
    signing_key = signing.SigningKey.generate()
    verify_key = bytes(signing_key.verify_key)
    secret = bytes(signing_key) + verify_key
    return KeyPair(
        public_key=f"{KEY_TYPE}:{base58.b58encode(verify_key).decode('utf-8')}",
        secret_key=base58.b58encode(secret).decode("utf-8"),
    )


def generate_key_batch(count: int) -> List[KeyPair]:
    """
    Generate `count` independent key pairs, in generation order.

    Raises:
        ValueError: If count is less than 1
    """
    if count < 1:
        raise ValueError(f"Key batch size must be at least 1, got {count}")
    return [generate_key_pair() for _ in range(count)]
