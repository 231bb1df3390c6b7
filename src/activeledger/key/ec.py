"""Elliptic curve (secp256k1) keys for signing Activeledger transactions.

Same interface as activeledger.key.rsa; signatures are DER-encoded ECDSA
over SHA-256.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric import ec

from activeledger.constants import EC_CURVE_NAME
from activeledger.errors import GenerationCode, GenerationError
from activeledger.key import signing
from activeledger.key.models import KeyType, PemBytes, PemPair
from activeledger.observability import get_logger

logger = get_logger(__name__)

# Curves a group can be built from by name
_CURVES: dict[str, type[ec.EllipticCurve]] = {
    "secp256k1": ec.SECP256K1,
}


def curve_by_name(curve_name: str) -> ec.EllipticCurve:
    """Build the curve group for ``curve_name``. Raises GenerationError(EC_GROUP)."""
    try:
        return _CURVES[curve_name]()
    except KeyError as exc:
        raise GenerationError(
            GenerationCode.EC_GROUP, details={"curve": curve_name}
        ) from exc


@dataclass(frozen=True)
class EllipticCurve:
    """A named secp256k1 keypair held as PEM bytes."""

    key_type: ClassVar[KeyType] = KeyType.EC

    name: str
    pem_bytes: PemBytes = field(repr=False)

    @classmethod
    def generate(cls, name: str) -> EllipticCurve:
        """Generate a fresh keypair. Raises GenerationError (1000-1003)."""
        curve = curve_by_name(EC_CURVE_NAME)
        try:
            private_key = ec.generate_private_key(curve)
        except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
            raise GenerationError(GenerationCode.EC_KEYPAIR) from exc

        private_pem, public_pem = signing.serialize_keypair(
            private_key,
            GenerationError(GenerationCode.EC_PRIVATE_PEM),
            GenerationError(GenerationCode.EC_PUBLIC_PEM),
        )
        logger.debug("key.generated", key_type=cls.key_type.value, key_name=name)
        return cls(name=name, pem_bytes=PemBytes(private=private_pem, public=public_pem))

    @classmethod
    def from_pem(cls, name: str, pem: PemPair) -> EllipticCurve:
        return cls(name=name, pem_bytes=PemBytes.from_pair(pem))

    def sign(self, data: str) -> str:
        return signing.sign(self._private_key(), data)

    def verify(self, data: str, signature: str) -> bool:
        return signing.verify(self._public_key(), data, signature)

    def get_pem(self) -> PemPair:
        return self.pem_bytes.to_pair()

    def _private_key(self) -> ec.EllipticCurvePrivateKey:
        key: ec.EllipticCurvePrivateKey = signing.load_private_key(
            self.pem_bytes.private, ec.EllipticCurvePrivateKey
        )
        return key

    def _public_key(self) -> ec.EllipticCurvePublicKey:
        if not self.pem_bytes.public:
            return self._private_key().public_key()
        key: ec.EllipticCurvePublicKey = signing.load_public_key(
            self.pem_bytes.public, ec.EllipticCurvePublicKey
        )
        return key
