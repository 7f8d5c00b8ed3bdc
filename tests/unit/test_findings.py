from typing import Any

from riskcheck.findings.models import CATEGORY_PRECEDENCE, Category, impact, probability
from riskcheck.findings.synthesizer import UNRETRIEVED_COVERAGE_SCORE, synthesize_findings


class TestRatings:
    def test_label_format(self) -> None:
        assert str(probability(4)) == "4 - Likely"
        assert str(impact(5)) == "5 - Severe"

    def test_values_are_clamped(self) -> None:
        assert probability(9).value == 5
        assert impact(0).label == "Low"


class TestSynthesizeFindings:
    def test_full_register_order(self, structured_facts: dict[str, Any]) -> None:
        findings = synthesize_findings(structured_facts)
        assert [f.category for f in findings] == list(CATEGORY_PRECEDENCE)
        assert [f.id for f in findings] == [f"F-{n:02d}" for n in range(1, 8)]

    def test_scores(self, structured_facts: dict[str, Any]) -> None:
        scores = {f.category: f.score for f in synthesize_findings(structured_facts)}
        assert scores == {
            Category.COVERAGE: 6,
            Category.SECURITY: 16,
            Category.COMPLIANCE: 20,
            Category.TRACKING_CONSENT: 16,
            Category.DATA_CAPTURE: 12,
            Category.ACCESSIBILITY: 12,
            Category.TRUST: 9,
        }

    def test_score_is_probability_times_impact(self, structured_facts: dict[str, Any]) -> None:
        for finding in synthesize_findings(structured_facts):
            assert finding.score == finding.probability.value * finding.impact.value

    def test_clean_site_keeps_coverage_and_trust(self, clean_facts: dict[str, Any]) -> None:
        findings = synthesize_findings(clean_facts)
        assert [f.category for f in findings] == [Category.COVERAGE, Category.TRUST]
        assert [f.id for f in findings] == ["F-01", "F-02"]
        assert findings[0].score == 4
        assert findings[1].score == 2

    def test_unretrieved_coverage_is_worst_case(self, unreachable_facts: dict[str, Any]) -> None:
        coverage = synthesize_findings(unreachable_facts)[0]
        assert coverage.category == Category.COVERAGE
        assert coverage.score == UNRETRIEVED_COVERAGE_SCORE
        assert coverage.probability.value == 5

    def test_banner_lowers_tracking_probability(self, structured_facts: dict[str, Any]) -> None:
        structured_facts["signals"]["consent"]["bannerDetected"] = True
        tracking = next(
            f for f in synthesize_findings(structured_facts)
            if f.category == Category.TRACKING_CONSENT
        )
        assert (tracking.probability.value, tracking.impact.value) == (2, 3)

    def test_evidence_lists_missing_policies(self, structured_facts: dict[str, Any]) -> None:
        compliance = next(
            f for f in synthesize_findings(structured_facts) if f.category == Category.COMPLIANCE
        )
        assert compliance.evidence == "Not detected: privacy policy, terms, cookie policy."

    def test_to_dict(self, clean_facts: dict[str, Any]) -> None:
        payload = synthesize_findings(clean_facts)[0].to_dict()
        assert payload["category"] == "Coverage"
        assert payload["probability"] == {"value": 2, "label": "Unlikely"}
