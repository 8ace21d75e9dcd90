import json
from pathlib import Path
from typing import Any, Dict, Iterable, Union

from loguru import logger

from near_linkdrop.keys import KeyPair


def redemption_link(wallet_url: str, contract_id: str, secret_key: str) -> str:
    return f"{wallet_url.rstrip('/')}/linkdrop/{contract_id}/{secret_key}"


def build_redemption_links(
    key_pairs: Iterable[KeyPair], contract_id: str, wallet_url: str
) -> Dict[str, str]:
    """
    Map every public key to the wallet link that claims it.
    """
    links = {}
    for kp in key_pairs:
        links[kp.public_key] = redemption_link(wallet_url, contract_id, kp.secret_key)
        logger.info(links[kp.public_key])
        logger.info(f"Pub Key: {kp.public_key}")
    return links


def _write_json(data: Any, path: Union[str, Path]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    return path


def write_view_snapshot(views: Dict[str, Any], path: Union[str, Path]) -> Path:
    path = _write_json(views, path)
    logger.info(f"wrote {len(views)} views to {path}")
    return path


def write_redemption_links(links: Dict[str, str], path: Union[str, Path]) -> Path:
    path = _write_json(links, path)
    logger.info(f"wrote {len(links)} links to {path}")
    return path
