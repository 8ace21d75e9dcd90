from typing import Any, Optional


class RpcNotAvailableError(Exception):
    pass


class RpcEmptyResponse(Exception):
    pass


class LinkdropError(Exception):
    """
    Base class for errors raised while provisioning a linkdrop.
    """

    pass


class ConfigurationError(LinkdropError):
    """
    Required configuration is missing or invalid. Raised before any remote call is made.
    """

    pass


class RemoteError(LinkdropError):
    contract_id: str
    method_name: str
    error: Any

    def __init__(self, contract_id: str, method_name: str, error: Any):
        self.contract_id = contract_id
        self.method_name = method_name
        self.error = error
        super().__init__(f"{contract_id}.{method_name}: {error!r}")


class RemoteCallError(RemoteError):
    """
    A state-changing function call failed: transport error, signing error,
    insufficient funds or gas, or a contract panic.
    """

    trx_hash: Optional[str] = None


class RemoteViewError(RemoteError):
    """
    A read-only view call failed.
    """

    pass


class MissingStageInput(LinkdropError):
    """
    A pipeline stage needs a value that an earlier stage did not produce.
    """

    def __init__(self, stage: str, name: str):
        self.stage = stage
        self.name = name
        super().__init__(f"{stage} requires '{name}', which no earlier stage produced")
