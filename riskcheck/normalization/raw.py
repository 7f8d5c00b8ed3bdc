"""The two input shapes a scanner may hand us, as an explicit tagged union."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

_EMPTY: Mapping[str, Any] = {}


@dataclass(frozen=True)
class LegacyFacts:
    """Flat record: every signal is a top-level field (``hasPrivacyPolicy``...)."""

    fields: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class StructuredFacts:
    """Nested record grouped into ``meta`` / ``coverage`` / ``signals``."""

    meta: Mapping[str, Any] = field(default_factory=dict)
    coverage: Mapping[str, Any] = field(default_factory=dict)
    signals: Mapping[str, Any] = field(default_factory=dict)


RawFacts = LegacyFacts | StructuredFacts


def classify(raw: Any) -> RawFacts:
    """Tag a raw scan record with its shape.

    A record is structured only when it carries both a ``meta`` group and a
    ``signals`` group; anything else, including non-mapping input, is legacy.
    """
    if isinstance(raw, (LegacyFacts, StructuredFacts)):
        return raw
    if not isinstance(raw, Mapping):
        return LegacyFacts(fields=_EMPTY)
    meta = raw.get("meta")
    signals = raw.get("signals")
    if isinstance(meta, Mapping) and isinstance(signals, Mapping):
        coverage = raw.get("coverage")
        return StructuredFacts(
            meta=meta,
            coverage=coverage if isinstance(coverage, Mapping) else _EMPTY,
            signals=signals,
        )
    return LegacyFacts(fields=raw)
