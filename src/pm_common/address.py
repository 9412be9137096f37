"""Content-derived identities for the registry and its markets.

An address is "0:" followed by the SHA-256 hex digest of a kind tag and the
immutable parts that define the instance. The same inputs always yield the
same address, so a market's address can be recomputed from its id and
creation parameters without asking the market.
"""

import hashlib
from collections.abc import Iterable

_SEPARATOR = b"\x1f"


def derive_address(kind: str, parts: Iterable[object]) -> str:
    digest = hashlib.sha256(kind.encode())
    for part in parts:
        digest.update(_SEPARATOR)
        digest.update(str(part).encode())
    return f"0:{digest.hexdigest()}"


def derive_factory_address(salt: str) -> str:
    return derive_address("factory", [salt])


def derive_market_address(
    factory_address: str,
    market_id: int,
    question: str,
    clarification: str,
    close_timestamp: int,
    oracle_addr: str,
    fee_bps: int,
) -> str:
    """Address of market ``market_id`` deployed by ``factory_address``."""
    return derive_address(
        "market",
        [factory_address, market_id, question, clarification, close_timestamp, oracle_addr, fee_bps],
    )
