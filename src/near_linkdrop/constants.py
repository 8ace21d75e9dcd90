from decimal import Decimal

TGAS = 10**12
DEFAULT_ATTACHED_GAS = 300 * TGAS

NEAR_NOMINATION_EXP = 24
NEAR_NOMINATION = 10**NEAR_NOMINATION_EXP

TIMEOUT_WAIT_RPC = 600

# Linkdrop proxy fees, in NEAR
KEY_FEE = Decimal("0.005")
OFFSET = Decimal("2")
DROP_FEE = Decimal("1")

FT_STORAGE_DEPOSIT = "1"
ONE_YOCTO = 1

RPC_MAINNET = "https://rpc.mainnet.near.org"
RPC_TESTNET = "https://rpc.testnet.near.org"

NETWORKS = {
    "testnet": {
        "node_url": RPC_TESTNET,
        "wallet_url": "https://wallet.testnet.near.org",
    },
    "mainnet": {
        "node_url": RPC_MAINNET,
        "wallet_url": "https://wallet.near.org",
    },
}

VIEWS_FILE_NAME = "views-create.json"
LINKS_FILE_NAME = "pks.json"
