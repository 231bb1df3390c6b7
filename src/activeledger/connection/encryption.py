"""Transaction encryption for nodes that require payload confidentiality.

The node publishes a base64-encoded RSA public key PEM on its status
endpoint. Payloads are split into fixed-size byte chunks, each chunk is
encrypted with RSA-OAEP (SHA-1, the padding the node decrypts with) and
base64-encoded, and the chunks are joined with ``|``.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from activeledger.constants import CHUNK_SEPARATOR, DEFAULT_CHUNK_SIZE
from activeledger.errors import EncryptionCode, EncryptionError


@dataclass(frozen=True)
class NodeKeyData:
    """Encryption key served by a node, cached per connection."""

    encryption: str
    pem: str


def _oaep() -> padding.OAEP:
    return padding.OAEP(
        mgf=padding.MGF1(algorithm=hashes.SHA1()),
        algorithm=hashes.SHA1(),
        label=None,
    )


def load_node_public_key(node_key_data: NodeKeyData) -> rsa.RSAPublicKey:
    """Decode and load the node's RSA public key.

    Raises:
        EncryptionError: KEY_DECODE if the PEM is not base64, PUBLIC_KEY if it
            is not a PEM public key, RSA_KEY if the key is not RSA.
    """
    try:
        pem = base64.b64decode(node_key_data.pem, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise EncryptionError(EncryptionCode.KEY_DECODE) from exc

    try:
        key = serialization.load_pem_public_key(pem)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise EncryptionError(EncryptionCode.PUBLIC_KEY) from exc

    if not isinstance(key, rsa.RSAPublicKey):
        raise EncryptionError(EncryptionCode.RSA_KEY, details={"key_type": type(key).__name__})
    return key


def chunk(data: bytes, size: int = DEFAULT_CHUNK_SIZE) -> list[bytes]:
    """Split ``data`` into ``size``-byte pieces; empty data yields one empty chunk."""
    if not data:
        return [b""]
    return [data[i : i + size] for i in range(0, len(data), size)]


def encrypt_payload(
    node_key_data: NodeKeyData, payload: str, chunk_size: int = DEFAULT_CHUNK_SIZE
) -> str:
    """Encrypt ``payload`` for the node holding ``node_key_data``.

    Returns the base64 ciphertext of each chunk joined with ``|`` (no
    trailing separator). Raises EncryptionError on any failure; ENCRYPT
    covers chunks the key cannot encrypt (e.g. ``chunk_size`` too large).
    """
    key = load_node_public_key(node_key_data)

    try:
        data = payload.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise EncryptionError(EncryptionCode.ENCRYPT) from exc

    encrypted: list[str] = []
    for piece in chunk(data, chunk_size):
        try:
            ciphertext = key.encrypt(piece, _oaep())
        except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
            raise EncryptionError(
                EncryptionCode.ENCRYPT,
                details={"chunk_size": chunk_size, "key_size": key.key_size},
            ) from exc
        encrypted.append(base64.b64encode(ciphertext).decode("ascii"))

    return CHUNK_SEPARATOR.join(encrypted)
