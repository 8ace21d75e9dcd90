import json
import os
from pathlib import Path
from typing import Optional, Union

from loguru import logger

DEFAULT_CREDENTIALS_DIR = Path.home() / ".near-credentials"


class FileSystemKeyStore:
    """
    Read-only view of a near-cli credentials directory.

    Keys live in ``<root>/<network_id>/<account_id>.json`` with a
    ``private_key`` field.
    """

    def __init__(self, root: Union[str, Path] = DEFAULT_CREDENTIALS_DIR):
        self.root = Path(os.path.expanduser(str(root)))

    def key_path(self, network_id: str, account_id: str) -> Path:
        return self.root / network_id / f"{account_id}.json"

    def get_private_key(self, network_id: str, account_id: str) -> Optional[str]:
        """
        Returns:
            The ``ed25519:...`` private key, or None if no credential file exists
        """
        path = self.key_path(network_id, account_id)
        if not path.is_file():
            logger.warning(f"No credentials for {account_id} in {path.parent}")
            return None
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        private_key = data.get("private_key") or data.get("secret_key")
        if not private_key:
            raise ValueError(f"Credential file {path} has no private_key")
        return private_key
