"""Key material shared by every key variant.

PemPair is the text form handed to callers, PemBytes the byte form held
inside a key handle. KeyFile is the on-disk export format.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Protocol

from pydantic import BaseModel, ConfigDict, Field

from activeledger.errors import StringifyCode, StringifyError


class KeyType(str, Enum):
    """Tag written to key files and used to select a key variant."""

    RSA = "rsa"
    EC = "ec"


@dataclass(frozen=True)
class PemPair:
    """Private (PKCS#8) and public (SPKI) PEM text of a keypair."""

    private: str = field(repr=False)
    public: str


@dataclass(frozen=True)
class PemBytes:
    private: bytes = field(repr=False)
    public: bytes

    @classmethod
    def from_pair(cls, pem: PemPair) -> PemBytes:
        # surrogatepass keeps construction infallible; bad text surfaces in to_pair()
        return cls(
            private=pem.private.encode("utf-8", "surrogatepass"),
            public=pem.public.encode("utf-8", "surrogatepass"),
        )

    def to_pair(self) -> PemPair:
        """Decode both halves as UTF-8. Raises StringifyError if either is not valid UTF-8."""
        try:
            private = self.private.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise StringifyError(StringifyCode.PRIVATE_PEM) from exc
        try:
            public = self.public.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise StringifyError(StringifyCode.PUBLIC_PEM) from exc
        return PemPair(private=private, public=public)


class Key(Protocol):
    """Capabilities shared by the RSA and EllipticCurve key variants."""

    key_type: ClassVar[KeyType]
    name: str

    def sign(self, data: str) -> str: ...

    def verify(self, data: str, signature: str) -> bool: ...

    def get_pem(self) -> PemPair: ...


class KeyFilePem(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    private: str
    public: str


class KeyFile(BaseModel):
    """JSON key export format: ``{name, type, pem: {private, public}}``."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str = Field(..., description="Key name, used as the identity in $sigs")
    type: str = Field(..., description="Key type tag: rsa or ec")
    pem: KeyFilePem
