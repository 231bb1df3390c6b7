"""Activeledger Python SDK.

Integrate applications with Activeledger nodes:

- Keys: RSA and EC (secp256k1) key generation, signing and verification,
  JSON key file import and export.
- Connection: connect to a node and send (optionally encrypted) transactions.

Example:
    >>> from activeledger import Connection, RSA, build_transaction
    >>>
    >>> key = RSA.generate("identity")
    >>> tx = build_transaction({"$namespace": "default", "$contract": "onboard", "$i": {...}}, [key])
    >>> with Connection("http://localhost:5260") as connection:
    ...     print(connection.send_transaction(tx))
"""

__version__ = "0.1.0"

from activeledger.config import ConnectionConfig
from activeledger.connection import Connection, NodeKeyData, Transaction, build_transaction
from activeledger.errors import (
    ActiveledgerConnectionError,
    ActiveledgerError,
    ActiveledgerKeyError,
    EncodingError,
    EncryptionError,
    GenerationError,
    HttpError,
    KeyExportError,
    KeyImportError,
    ResponseError,
    SigningError,
    StringifyError,
    UrlError,
)
from activeledger.key import EllipticCurve, KeyType, PemPair, RSA

__all__ = [
    "__version__",
    "ActiveledgerConnectionError",
    "ActiveledgerError",
    "ActiveledgerKeyError",
    "Connection",
    "ConnectionConfig",
    "EllipticCurve",
    "EncodingError",
    "EncryptionError",
    "GenerationError",
    "HttpError",
    "KeyExportError",
    "KeyImportError",
    "KeyType",
    "NodeKeyData",
    "PemPair",
    "RSA",
    "ResponseError",
    "SigningError",
    "StringifyError",
    "Transaction",
    "UrlError",
    "build_transaction",
]
