"""Integrity fingerprint: SHA-256 over the canonical model's stable serialization.

Only objective scan facts are hashed. Session and payment identifiers, share
tokens, storage paths and report-generation time never reach the payload
because the canonical model has no place for them.
"""

import hashlib
import hmac
from collections.abc import Mapping
from typing import Any

from riskcheck.integrity.serializer import stable_serialize
from riskcheck.normalization.models import CanonicalModel
from riskcheck.normalization.normalizer import normalize

DIGEST_ALGORITHM = "sha256"
DIGEST_HEX_LENGTH = 64
FINGERPRINT_LABEL = "Integrity hash (SHA-256):"
VERIFY_LINK_LABEL = "Verify this report:"


def canonical_string(facts: CanonicalModel | Mapping[str, Any]) -> str:
    """Deterministic text the digest is computed over.

    Raw records are normalized first; hashing arrays in scanner order would
    make the digest depend on detection order.
    """
    model = normalize(facts)
    return stable_serialize(model.to_dict())


def compute_fingerprint(facts: CanonicalModel | Mapping[str, Any]) -> str:
    """Hex-encoded SHA-256 of ``canonical_string(facts)``."""
    payload = canonical_string(facts).encode("utf-8")
    return hashlib.new(DIGEST_ALGORITHM, payload).hexdigest()


def verify_fingerprint(facts: CanonicalModel | Mapping[str, Any], expected: str) -> bool:
    """Recompute the fingerprint from stored facts and compare it to ``expected``."""
    candidate = (expected or "").strip().lower()
    if len(candidate) != DIGEST_HEX_LENGTH:
        return False
    return hmac.compare_digest(compute_fingerprint(facts), candidate)
