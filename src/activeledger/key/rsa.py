"""RSA keys for signing Activeledger transactions.

Example:
    >>> from activeledger.key import RSA
    >>> key = RSA.generate("my-identity")
    >>> signature = key.sign('{"$namespace":"default"}')
    >>> key.verify('{"$namespace":"default"}', signature)
    True
    >>> same_key = RSA.from_pem("my-identity", key.get_pem())
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric import rsa

from activeledger.constants import RSA_KEY_SIZE, RSA_PUBLIC_EXPONENT
from activeledger.errors import GenerationCode, GenerationError
from activeledger.key import signing
from activeledger.key.models import KeyType, PemBytes, PemPair
from activeledger.observability import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class RSA:
    """A named 2048-bit RSA keypair held as PEM bytes.

    The provider key is reloaded from the stored PEM on every sign/verify
    call, so a key built with from_pem() is only validated on first use.
    """

    key_type: ClassVar[KeyType] = KeyType.RSA

    name: str
    pem_bytes: PemBytes = field(repr=False)

    @classmethod
    def generate(cls, name: str) -> RSA:
        """Generate a fresh keypair. Raises GenerationError (1004-1006)."""
        try:
            private_key = rsa.generate_private_key(
                public_exponent=RSA_PUBLIC_EXPONENT,
                key_size=RSA_KEY_SIZE,
            )
        except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
            raise GenerationError(GenerationCode.RSA_KEY) from exc

        private_pem, public_pem = signing.serialize_keypair(
            private_key,
            GenerationError(GenerationCode.RSA_PRIVATE_PEM),
            GenerationError(GenerationCode.RSA_PUBLIC_PEM),
        )
        logger.debug("key.generated", key_type=cls.key_type.value, key_name=name)
        return cls(name=name, pem_bytes=PemBytes(private=private_pem, public=public_pem))

    @classmethod
    def from_pem(cls, name: str, pem: PemPair) -> RSA:
        return cls(name=name, pem_bytes=PemBytes.from_pair(pem))

    def sign(self, data: str) -> str:
        return signing.sign(self._private_key(), data)

    def verify(self, data: str, signature: str) -> bool:
        return signing.verify(self._public_key(), data, signature)

    def get_pem(self) -> PemPair:
        return self.pem_bytes.to_pair()

    def _private_key(self) -> rsa.RSAPrivateKey:
        key: rsa.RSAPrivateKey = signing.load_private_key(
            self.pem_bytes.private, rsa.RSAPrivateKey
        )
        return key

    def _public_key(self) -> rsa.RSAPublicKey:
        if not self.pem_bytes.public:
            return self._private_key().public_key()
        key: rsa.RSAPublicKey = signing.load_public_key(self.pem_bytes.public, rsa.RSAPublicKey)
        return key
