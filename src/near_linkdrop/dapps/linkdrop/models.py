from enum import Enum
from typing import Optional, List

from pydantic import BaseModel, Field, model_validator


class ClaimPermissionEnum(str, Enum):
    CLAIM = "Claim"
    CREATE_ACCOUNT_AND_CLAIM = "CreateAccountAndClaim"


class DropConfig(BaseModel):
    uses_per_key: int = Field(default=1, ge=1)
    start_timestamp: Optional[int] = None
    throttle_timestamp: Optional[int] = None
    on_claim_refund_deposit: Optional[bool] = None
    claim_permission: Optional[ClaimPermissionEnum] = None
    drop_root: Optional[str] = None


class DropMetadata(BaseModel):
    title: str
    description: str


class FTData(BaseModel):
    contract_id: str
    sender_id: str
    balance_per_use: str


class NFTData(BaseModel):
    sender_id: str
    contract_id: str
    longest_token_id: str


class MethodData(BaseModel):
    receiver_id: str
    method_name: str
    args: str
    attached_deposit: str


class FCConfig(BaseModel):
    attached_gas: Optional[int] = None


class FCData(BaseModel):
    methods: List[Optional[List[MethodData]]]
    config: Optional[FCConfig] = None


class CreateDropModel(BaseModel):
    public_keys: List[str]
    deposit_per_use: str
    config: Optional[DropConfig] = None
    metadata: Optional[str] = None
    ft_data: Optional[FTData] = None
    nft_data: Optional[NFTData] = None
    fc_data: Optional[FCData] = None

    @model_validator(mode="after")
    def check_drop_type(self):
        specified = sum(
            data is not None for data in (self.ft_data, self.nft_data, self.fc_data)
        )
        if specified > 1:
            raise ValueError("You cannot specify more than one callback data")
        if int(self.deposit_per_use) < 0:
            raise ValueError("deposit_per_use must not be negative")
        if not specified and int(self.deposit_per_use) <= 0:
            raise ValueError("Cannot have a simple drop with zero balance")
        return self

    def to_args(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)
