import pytest

from core.domain.entities.TechnicalPatternEntity import PatternKey, TechnicalPattern
from core.services.pattern_matcher_service import (
    build_technical_insight,
    describe_patterns,
    resolve_pattern,
)


def make_pattern(pattern_type, key, significance="Significance"):
    return TechnicalPattern(
        type=pattern_type,
        pattern_key=key,
        start_index=0,
        end_index=14,
        description=f"{pattern_type} description",
        significance=significance,
    )


@pytest.fixture
def patterns():
    return [
        make_pattern("Ascending Triangle", PatternKey.TRIANGLE, "Bullish pattern"),
        make_pattern("Testing Resistance", PatternKey.RESISTANCE, "Breakout watch"),
        make_pattern("Testing Support", PatternKey.SUPPORT),
    ]


class TestResolvePattern:

    def test_exact_key(self, patterns):
        assert resolve_pattern(patterns, "resistance").type == "Testing Resistance"

    def test_tag_inside_pattern_name(self, patterns):
        assert resolve_pattern(patterns, "Ascending").pattern_key == "triangle"

    def test_key_inside_tag(self, patterns):
        assert resolve_pattern(patterns, "support-bounce").type == "Testing Support"

    def test_first_match_in_detection_order_wins(self, patterns):
        # "testing" appears in both support/resistance names
        assert resolve_pattern(patterns, "testing").type == "Testing Resistance"

    @pytest.mark.parametrize("tag", ["none", "NONE", " none ", "", None])
    def test_none_tag_means_no_pattern(self, patterns, tag):
        assert resolve_pattern(patterns, tag) is None

    def test_unknown_tag(self, patterns):
        assert resolve_pattern(patterns, "cup-and-handle") is None

    def test_no_patterns(self):
        assert resolve_pattern([], "triangle") is None


def test_describe_patterns(patterns):
    assert describe_patterns(patterns[:2]) == (
        "- Ascending Triangle: Ascending Triangle description\n"
        "- Testing Resistance: Testing Resistance description"
    )
    assert describe_patterns(patterns[:1], include_significance=True) == (
        "- Ascending Triangle: Ascending Triangle description (Bullish pattern)"
    )
    assert describe_patterns([]) == ""


def test_build_technical_insight_uses_first_pattern(patterns):
    insight = build_technical_insight(patterns)

    assert insight.type == "technical"
    assert insight.title == "Technical Pattern: Ascending Triangle"
    assert insight.description == (
        "Ascending Triangle description. Bullish pattern. "
        "Technical analysts use such patterns to anticipate potential price movements."
    )
    assert insight.confidence == 70
    assert insight.technical_pattern == patterns[0]
    assert build_technical_insight([]) is None
