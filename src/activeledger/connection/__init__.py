"""Node connection, transaction envelope and payload encryption."""

from activeledger.connection.connection import Connection
from activeledger.connection.encryption import NodeKeyData, encrypt_payload
from activeledger.connection.transaction import Transaction, build_transaction

__all__ = [
    "Connection",
    "NodeKeyData",
    "Transaction",
    "build_transaction",
    "encrypt_payload",
]
