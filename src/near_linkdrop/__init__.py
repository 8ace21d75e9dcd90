from near_linkdrop.amounts import calculate_funding_amount
from near_linkdrop.gateway import ContractGateway
from near_linkdrop.keys import KeyPair, generate_key_batch
from near_linkdrop.pipeline import ProvisioningPipeline, ProvisioningResult

__version__ = "0.1.0"

__all__ = [
    "calculate_funding_amount",
    "ContractGateway",
    "KeyPair",
    "generate_key_batch",
    "ProvisioningPipeline",
    "ProvisioningResult",
]
