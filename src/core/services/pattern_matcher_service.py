"""
Join between detected patterns and text produced by the narrative service.

The text service is asked to tag each insight with one of the pattern keys
(or "none"); these helpers turn that tag back into the detected pattern and
render the pattern lines that go into its requests.
"""
from typing import List, Optional
from common.logger import logger
from core.domain.entities.TechnicalPatternEntity import TechnicalInsight, TechnicalPattern

NO_PATTERN_TAG = "none"
FALLBACK_INSIGHT_CONFIDENCE = 70


def resolve_pattern(patterns: List[TechnicalPattern], pattern_tag: Optional[str]) -> Optional[TechnicalPattern]:
    """
    Find the detected pattern an insight's ``patternType`` tag refers to.

    A pattern matches when its key equals the tag, when the tag appears in the
    pattern's display name, or when the key appears in the tag. The first
    match in detection order wins.
    """
    if not pattern_tag:
        return None
    tag = pattern_tag.strip().lower()
    if not tag or tag == NO_PATTERN_TAG:
        return None

    for pattern in patterns:
        key = str(pattern.pattern_key)
        if key == tag or tag in pattern.type.lower() or key in tag:
            return pattern

    logger.debug(f"No detected pattern matches tag '{pattern_tag}'")
    return None


def describe_patterns(patterns: List[TechnicalPattern], include_significance: bool = False) -> str:
    lines = []
    for pattern in patterns:
        line = f"- {pattern.type}: {pattern.description}"
        if include_significance:
            line += f" ({pattern.significance})"
        lines.append(line)
    return "\n".join(lines)


def build_technical_insight(patterns: List[TechnicalPattern]) -> Optional[TechnicalInsight]:
    """Insight built from the first detected pattern, used when no generated text is available."""
    if not patterns:
        return None
    pattern = patterns[0]
    return TechnicalInsight(
        title=f"Technical Pattern: {pattern.type}",
        description=(
            f"{pattern.description}. {pattern.significance}. "
            "Technical analysts use such patterns to anticipate potential price movements."
        ),
        confidence=FALLBACK_INSIGHT_CONFIDENCE,
        technical_pattern=pattern,
    )
