"""Activeledger SDK Error Taxonomy.

This module defines the error hierarchy for the SDK. Every error carries a
kind (the operation family), a numeric code and a fixed description looked
up from that code, so callers can branch on the precise cause.

Key lifecycle errors derive from ActiveledgerKeyError, node communication
errors from ActiveledgerConnectionError. Code numbers are stable and match
the codes documented for the other Activeledger SDKs.

Example:
    >>> from activeledger.errors import SigningError, SigningCode
    >>> str(SigningError(SigningCode.SIGNATURE_DECODE))
    'Signing Error - 2003: Error decoding signature for verification'
"""
from __future__ import annotations

from enum import IntEnum
from typing import Any, ClassVar, Mapping

UNKNOWN_ERROR = "Unknown Error"


class GenerationCode(IntEnum):
    EC_GROUP = 1000
    EC_KEYPAIR = 1001
    EC_PRIVATE_PEM = 1002
    EC_PUBLIC_PEM = 1003
    RSA_KEY = 1004
    RSA_PRIVATE_PEM = 1005
    RSA_PUBLIC_PEM = 1006


class SigningCode(IntEnum):
    SIGNER = 2000
    SIGN_DATA = 2001
    SIGNATURE = 2002
    SIGNATURE_DECODE = 2003
    VERIFIER = 2004
    VERIFY_DATA = 2005
    VERIFICATION = 2006
    PRIVATE_KEY = 2007
    PUBLIC_KEY = 2008


class StringifyCode(IntEnum):
    PRIVATE_PEM = 3000
    PUBLIC_PEM = 3001
    PRIVATE_KEY = 3007
    PUBLIC_KEY = 3008


class ImportCode(IntEnum):
    OPEN_FILE = 4000
    READ_FILE = 4001
    TYPE_MISMATCH = 4002


class ExportCode(IntEnum):
    JSON = 5000
    OPEN_FILE = 5001
    WRITE_FILE = 5002


class HttpCode(IntEnum):
    POST = 1000
    GET = 1001


class UrlCode(IntEnum):
    INVALID = 2000


class ResponseCode(IntEnum):
    NO_BODY = 3000
    NOT_SUCCESS = 3001


class EncryptionCode(IntEnum):
    KEY_DATA_MISSING = 4000
    KEY_DATA_REQUEST = 4001
    KEY_DATA_RESPONSE = 4002
    KEY_DATA_PARSE = 4003
    KEY_DECODE = 4004
    PUBLIC_KEY = 4005
    RSA_KEY = 4006
    ENCRYPT = 4007


class EncodingCode(IntEnum):
    JSON = 5000


class ActiveledgerError(Exception):
    """Base exception for all Activeledger SDK errors.

    Subclasses set ``kind`` (the display name of the operation family) and
    ``messages`` (the fixed description for each code they raise).

    Attributes:
        code: Numeric error code
        message: Fixed human-readable description of the code
        details: Optional additional error context
    """

    kind: ClassVar[str] = "Activeledger Error"
    messages: ClassVar[Mapping[int, str]] = {}

    def __init__(self, code: int, details: dict[str, Any] | None = None) -> None:
        self.code = int(code)
        self.message = self.messages.get(self.code, UNKNOWN_ERROR)
        self.details = details or {}
        super().__init__(f"{self.kind} - {self.code}: {self.message}")

    def to_dict(self) -> dict[str, Any]:
        """Serialize to ``{kind, code, message, details}`` dict."""
        return {
            "kind": self.kind,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ActiveledgerKeyError(ActiveledgerError):
    """Key generation, signing, stringify, import or export failure."""


class GenerationError(ActiveledgerKeyError):
    kind = "Generation Error"
    messages = {
        GenerationCode.EC_GROUP: "Error generating Elliptic Curve Group for keygen",
        GenerationCode.EC_KEYPAIR: "Error generating Elliptic Curve Keypair",
        GenerationCode.EC_PRIVATE_PEM: "Error generating Elliptic Curve Private PEM",
        GenerationCode.EC_PUBLIC_PEM: "Error generating Elliptic Curve Public PEM",
        GenerationCode.RSA_KEY: "Error generating the RSA Key",
        GenerationCode.RSA_PRIVATE_PEM: "Error generating RSA Private PEM",
        GenerationCode.RSA_PUBLIC_PEM: "Error generating RSA Public PEM",
    }


class SigningError(ActiveledgerKeyError):
    kind = "Signing Error"
    messages = {
        SigningCode.SIGNER: "Error creating signer",
        SigningCode.SIGN_DATA: "Error passing data to sign",
        SigningCode.SIGNATURE: "Error generating signature",
        SigningCode.SIGNATURE_DECODE: "Error decoding signature for verification",
        SigningCode.VERIFIER: "Error creating verifier",
        SigningCode.VERIFY_DATA: "Error passing data to verify",
        SigningCode.VERIFICATION: "Signature verification failed",
        SigningCode.PRIVATE_KEY: "Error initialising private key",
        SigningCode.PUBLIC_KEY: "Error initialising public key",
    }


class StringifyError(ActiveledgerKeyError):
    kind = "Stringify Error"
    messages = {
        StringifyCode.PRIVATE_PEM: "Error converting private pem to string",
        StringifyCode.PUBLIC_PEM: "Error converting public pem to string",
        StringifyCode.PRIVATE_KEY: "Error initialising private key",
        StringifyCode.PUBLIC_KEY: "Error initialising public key",
    }


class KeyImportError(ActiveledgerKeyError):
    kind = "Import Error"
    messages = {
        ImportCode.OPEN_FILE: "Error opening file for import",
        ImportCode.READ_FILE: "Error reading file contents",
        ImportCode.TYPE_MISMATCH: "Key Type missmatch",
    }


class KeyExportError(ActiveledgerKeyError):
    kind = "Export Error"
    messages = {
        ExportCode.JSON: "Error generating JSON",
        ExportCode.OPEN_FILE: "Error preparing the export file for writing",
        ExportCode.WRITE_FILE: "Error writing to the export file",
    }


class ActiveledgerConnectionError(ActiveledgerError):
    """Failure while talking to an Activeledger node."""


class HttpError(ActiveledgerConnectionError):
    """The POST or GET request could not be completed."""

    kind = "HTTP Error"
    messages = {
        HttpCode.POST: "Error POSTing the transaction",
        HttpCode.GET: "Error during GET request",
    }


class UrlError(ActiveledgerConnectionError):
    kind = "Url Error"
    messages = {
        UrlCode.INVALID: "Invalid node URL",
    }


class ResponseError(ActiveledgerConnectionError):
    """The node replied but without a usable 200-class body."""

    kind = "Response Error"
    messages = {
        ResponseCode.NO_BODY: "No response body",
        ResponseCode.NOT_SUCCESS: "The server did not return 200",
    }


class EncryptionError(ActiveledgerConnectionError):
    """Node key retrieval or payload encryption failed."""

    kind = "Encryption Error"
    messages = {
        EncryptionCode.KEY_DATA_MISSING: "Key data missing",
        EncryptionCode.KEY_DATA_REQUEST: "Error creating key data request",
        EncryptionCode.KEY_DATA_RESPONSE: "Error processing response",
        EncryptionCode.KEY_DATA_PARSE: "Unable to parse JSON",
        EncryptionCode.KEY_DECODE: "Error preparing key for encryption",
        EncryptionCode.PUBLIC_KEY: "Error creating public key for transaction encryption",
        EncryptionCode.RSA_KEY: "Error generating RSA key for encryption",
        EncryptionCode.ENCRYPT: "Error encrypting transaction",
    }


class EncodingError(ActiveledgerConnectionError):
    kind = "Encoding Error"
    messages = {
        EncodingCode.JSON: "Error generating JSON",
    }
