"""Detached SHA-256 signing and verification shared by all key variants.

The signature scheme is chosen from the provider key type in one place:
RSA keys sign with PKCS#1 v1.5, EC keys with ECDSA (DER encoded). Signatures
travel as standard base64 text.
"""

from __future__ import annotations

import base64
import binascii
from typing import Any, Union

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, padding, rsa

from activeledger.errors import SigningCode, SigningError

PrivateKey = Union[rsa.RSAPrivateKey, ec.EllipticCurvePrivateKey]
PublicKey = Union[rsa.RSAPublicKey, ec.EllipticCurvePublicKey]

# Errors cryptography raises for malformed key material or unusable parameters
_PROVIDER_ERRORS = (ValueError, TypeError, UnsupportedAlgorithm)


def _signature_args(key: object) -> tuple[Any, ...] | None:
    if isinstance(key, (rsa.RSAPrivateKey, rsa.RSAPublicKey)):
        return (padding.PKCS1v15(), hashes.SHA256())
    if isinstance(key, (ec.EllipticCurvePrivateKey, ec.EllipticCurvePublicKey)):
        return (ec.ECDSA(hashes.SHA256()),)
    return None


def load_private_key(pem: bytes, expected: type) -> Any:
    """From PKCS#8 PEM. Raises SigningError(PRIVATE_KEY) if invalid or not ``expected``."""
    try:
        key = serialization.load_pem_private_key(pem, password=None)
    except _PROVIDER_ERRORS as exc:
        raise SigningError(SigningCode.PRIVATE_KEY) from exc
    if not isinstance(key, expected):
        raise SigningError(
            SigningCode.PRIVATE_KEY,
            details={"expected": expected.__name__, "actual": type(key).__name__},
        )
    return key


def load_public_key(pem: bytes, expected: type) -> Any:
    """From SPKI PEM. Raises SigningError(PUBLIC_KEY) if invalid or not ``expected``."""
    try:
        key = serialization.load_pem_public_key(pem)
    except _PROVIDER_ERRORS as exc:
        raise SigningError(SigningCode.PUBLIC_KEY) from exc
    if not isinstance(key, expected):
        raise SigningError(
            SigningCode.PUBLIC_KEY,
            details={"expected": expected.__name__, "actual": type(key).__name__},
        )
    return key


def sign(private_key: PrivateKey, data: str) -> str:
    """Sign the UTF-8 bytes of ``data``; returns the base64 signature."""
    args = _signature_args(private_key)
    if args is None or not hasattr(private_key, "sign"):
        raise SigningError(SigningCode.SIGNER, details={"key_type": type(private_key).__name__})

    try:
        message = data.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise SigningError(SigningCode.SIGN_DATA) from exc

    try:
        raw_signature = private_key.sign(message, *args)
    except _PROVIDER_ERRORS as exc:
        raise SigningError(SigningCode.SIGNATURE) from exc

    return base64.b64encode(raw_signature).decode("ascii")


def verify(public_key: PublicKey, data: str, signature: str) -> bool:
    """Check a base64 signature over ``data``.

    Returns False when the signature is well formed but does not match.
    Raises SigningError when the signature is not base64 or the provider
    fails for any other reason.
    """
    try:
        raw_signature = base64.b64decode(signature, validate=True)
    except (binascii.Error, ValueError, TypeError) as exc:
        raise SigningError(SigningCode.SIGNATURE_DECODE) from exc

    args = _signature_args(public_key)
    if args is None:
        raise SigningError(SigningCode.VERIFIER, details={"key_type": type(public_key).__name__})

    try:
        message = data.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise SigningError(SigningCode.VERIFY_DATA) from exc

    try:
        public_key.verify(raw_signature, message, *args)
    except InvalidSignature:
        return False
    except _PROVIDER_ERRORS as exc:
        raise SigningError(SigningCode.VERIFICATION) from exc
    return True


def serialize_keypair(
    private_key: PrivateKey, private_error: Exception, public_error: Exception
) -> tuple[bytes, bytes]:
    """Export (PKCS#8 private PEM, SPKI public PEM); raises the given error on failure."""
    try:
        private_pem = private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        )
    except _PROVIDER_ERRORS as exc:
        raise private_error from exc
    try:
        public_pem = private_key.public_key().public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
    except _PROVIDER_ERRORS as exc:
        raise public_error from exc
    return private_pem, public_pem
