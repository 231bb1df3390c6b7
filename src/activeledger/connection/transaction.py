"""Transaction envelope sent to an Activeledger node.

The connection never inspects the document; it forwards ``Transaction.data``
as-is. Expected document structure:

    {
        "$territoriality": "",          # optional
        "$tx": {
            "$namespace": "",
            "$contract": "",
            "$entry": "",               # optional
            "$i": {},
            "$o": {},                   # optional
            "$r": {}                    # optional
        },
        "$selfsign": true,              # optional
        "$sigs": {"<identity>": "<signature>"}
    }
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from activeledger.errors import EncodingCode, EncodingError
from activeledger.key.models import Key


def to_json(document: Any) -> str:
    """Compact JSON, the form nodes verify ``$tx`` signatures against."""
    try:
        return json.dumps(document, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise EncodingError(EncodingCode.JSON) from exc


@dataclass(frozen=True)
class Transaction:
    data: str

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> Transaction:
        """Serialize a transaction document. Raises EncodingError if not JSON serializable."""
        return cls(data=to_json(document))


def build_transaction(
    tx_body: Mapping[str, Any],
    signers: Iterable[Key],
    *,
    selfsign: bool = False,
    territoriality: str | None = None,
) -> Transaction:
    """Sign ``tx_body`` with each key and wrap it in a transaction document.

    Each signer's name becomes its identity in ``$sigs``. For onboarding
    (``selfsign=True``) the name must match the ``$i`` entry being created.

    Example:
        >>> key = RSA.generate("onboard-me")
        >>> tx = build_transaction(
        ...     {"$namespace": "default", "$contract": "onboard",
        ...      "$i": {"onboard-me": {"type": "rsa", "publicKey": key.get_pem().public}}},
        ...     [key],
        ...     selfsign=True,
        ... )
    """
    body = to_json(tx_body)
    sigs = {key.name: key.sign(body) for key in signers}

    document: dict[str, Any] = {}
    if territoriality is not None:
        document["$territoriality"] = territoriality
    document["$tx"] = tx_body
    if selfsign:
        document["$selfsign"] = True
    document["$sigs"] = sigs
    return Transaction.from_document(document)
