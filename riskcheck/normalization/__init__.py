from riskcheck.normalization.models import CanonicalModel
from riskcheck.normalization.normalizer import normalize
from riskcheck.normalization.raw import LegacyFacts, RawFacts, StructuredFacts, classify

__all__ = [
    "CanonicalModel",
    "LegacyFacts",
    "RawFacts",
    "StructuredFacts",
    "classify",
    "normalize",
]
