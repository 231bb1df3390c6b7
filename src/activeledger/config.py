"""Configuration for Activeledger node connections."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from activeledger.constants import DEFAULT_CHUNK_SIZE, DEFAULT_TIMEOUT


class ConnectionConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    url: str = Field(..., description="Base URL of the Activeledger node")
    encrypt: bool = Field(
        default=False,
        description="Encrypt transactions with the node's public key before sending",
    )
    timeout_seconds: float = Field(
        default=DEFAULT_TIMEOUT, gt=0, description="HTTP timeout in seconds"
    )
    chunk_size: int = Field(
        default=DEFAULT_CHUNK_SIZE,
        gt=0,
        description="Plaintext bytes per RSA-OAEP block when encrypting",
    )
