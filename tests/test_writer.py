import json

from near_linkdrop.keys import generate_key_batch
from near_linkdrop.writer import (
    build_redemption_links,
    write_redemption_links,
    write_view_snapshot,
)


def test_one_link_per_key_pair():
    key_pairs = generate_key_batch(5)
    links = build_redemption_links(
        key_pairs, "proxy.testnet", "https://wallet.testnet.near.org/"
    )

    assert len(links) == 5
    for kp in key_pairs:
        assert links[kp.public_key] == (
            f"https://wallet.testnet.near.org/linkdrop/proxy.testnet/{kp.secret_key}"
        )


def test_files_are_overwritten(tmp_path):
    path = tmp_path / "out" / "views-create.json"
    write_view_snapshot({"get_keys": [1, 2], "get_key_total_supply": 2}, path)
    write_view_snapshot({"get_keys": []}, path)
    assert json.loads(path.read_text()) == {"get_keys": []}

    links_path = tmp_path / "pks.json"
    write_redemption_links({"ed25519:a": "https://x/linkdrop/c/s"}, links_path)
    assert json.loads(links_path.read_text()) == {"ed25519:a": "https://x/linkdrop/c/s"}
