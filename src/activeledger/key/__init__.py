"""Activeledger key management.

RSA (2048-bit) and elliptic curve (secp256k1) keys with detached SHA-256
signing, PEM export, and JSON key file import/export.

Public exports:
    RSA, EllipticCurve: key variants {generate, from_pem, sign, verify, get_pem}
    PemPair: private/public PEM text
    KeyType: "rsa" | "ec" key file tag
    importer, exporter: key file submodules
"""

from activeledger.key import exporter, importer, signing
from activeledger.key.ec import EllipticCurve
from activeledger.key.models import Key, KeyFile, KeyType, PemPair
from activeledger.key.rsa import RSA

__all__ = [
    "exporter",
    "importer",
    "signing",
    "EllipticCurve",
    "Key",
    "KeyFile",
    "KeyType",
    "PemPair",
    "RSA",
]
