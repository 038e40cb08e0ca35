"""
pagegrade/services/content_analyzer.py
Low-value content battery: 8 checks over raw text (100 points).

Every check is a pure function of the text. Thresholds and wording come
from the published content-quality rules; scores are normalized by the
battery's declared total.
"""
import logging
import math
import re
from collections import Counter
from typing import Optional

from ..config import Settings
from ..models import AnalysisOutcome, CheckStatus, ScoreTier
from .ladder import Rung, Verdict, climb, round_half_up
from .score_calculator import Battery, CheckDefinition, Tier, aggregate
from .text_utils import (
    count_words,
    lowercase_tokens,
    split_paragraphs,
    split_sentences,
    split_words,
)
from .validation import validate_text

logger = logging.getLogger(__name__)

PASS, WARNING, FAIL = CheckStatus.PASS, CheckStatus.WARNING, CheckStatus.FAIL

# Common words that are never reported as overused
REPETITION_STOP_WORDS = frozenset([
    "this", "that", "with", "from", "have", "been", "more", "their", "when", "which",
    "about", "would", "there", "some", "what", "your", "other", "into", "also", "than",
    "only", "these", "very", "just", "over", "such", "most", "even", "after", "make",
    "like", "them", "each", "will", "they", "many", "were", "being", "could", "much",
    "does", "well", "before", "should",
])

FILLER_WORDS = frozenset([
    "very", "really", "actually", "basically", "literally", "just", "simply", "quite",
    "rather", "somewhat", "perhaps", "maybe", "probably", "certainly", "definitely",
    "absolutely", "extremely", "incredibly", "amazingly", "essentially",
])

_NON_LETTER = re.compile(r"[^a-z]")

# Engagement signals
_QUESTION = re.compile(r"\?")
_EXCLAMATION = re.compile(r"!")
_QUOTED = re.compile(r"\"[^\"]+\"|'[^']+'")
_NUMBER = re.compile(r"\b\d+\b", re.ASCII)
_LIST_LINE = re.compile(r"^\s*[-*•]\s|\d+\.\s", re.MULTILINE | re.ASCII)

# Specificity signals; each contributes at most 3 matches
SPECIFICITY_PATTERNS = (
    re.compile(r"\b\d+%", re.ASCII),                               # percentages
    re.compile(r"\b(?:19|20)\d{2}\b", re.ASCII),                   # years
    re.compile(r"\$[\d,]+", re.ASCII),                             # money
    re.compile(r"\b[A-Z][a-z]+(?:\s[A-Z][a-z]+)+\b", re.ASCII),    # proper nouns
)


def check_word_count(text: str) -> Verdict:
    count = count_words(text)
    return climb(
        [count < 300, count < 500, count < 800, True],
        (
            Rung(FAIL, 5, "Very thin content ({count} words). Likely to be flagged as low-value.",
                 "Expand to at least 500-800 words with meaningful, helpful information."),
            Rung(WARNING, 10, "Light content ({count} words). May appear thin to Google.",
                 "Consider expanding to 600+ words with additional insights and examples."),
            Rung(WARNING, 15, "Moderate length ({count} words). Acceptable but not comprehensive.",
                 "For competitive topics, aim for 1000+ words of thorough coverage."),
            Rung(PASS, 20, "Good content length ({count} words). Shows topical depth."),
        ),
        count=count,
    )


def check_sentence_variety(text: str) -> Verdict:
    sentences = split_sentences(text)
    cv = 0.0
    if len(sentences) >= 5:
        lengths = [len(split_words(s.strip())) for s in sentences]
        mean = sum(lengths) / len(lengths)
        variance = sum((n - mean) ** 2 for n in lengths) / len(lengths)
        cv = math.sqrt(variance) / mean
    return climb(
        [len(sentences) < 5, cv < 0.2, cv < 0.4, True],
        (
            Rung(WARNING, 7, "Too few sentences to analyze variety properly.",
                 "Add more sentences to create varied, engaging content."),
            Rung(FAIL, 4, "Very uniform sentence lengths. Reads robotically.",
                 "Mix short, punchy sentences with longer, complex ones. Vary your rhythm."),
            Rung(WARNING, 10, "Moderate sentence variety. Could be more dynamic.",
                 "Add more short sentences for emphasis and longer ones for depth."),
            Rung(PASS, 15, "Good sentence length variety. Natural reading flow."),
        ),
    )


def check_paragraphs(text: str) -> Verdict:
    paragraphs = split_paragraphs(text)
    word_count = len(split_words(text))
    average = word_count / max(len(paragraphs), 1)
    return climb(
        [
            len(paragraphs) <= 1 and word_count > 200,
            average > 150,
            len(paragraphs) < 3 and word_count > 300,
            True,
        ],
        (
            Rung(FAIL, 2, "Content is one giant block of text. Very hard to read.",
                 "Break content into paragraphs of 3-5 sentences each."),
            Rung(WARNING, 6, "Paragraphs are too long (~{average} words avg).",
                 "Break long paragraphs into shorter, scannable chunks."),
            Rung(WARNING, 8, "Very few paragraph breaks for the content length.",
                 "Add more paragraph breaks to improve readability."),
            Rung(PASS, 12, "Well-structured paragraphs ({paragraphs} paragraphs)."),
        ),
        average=round_half_up(average),
        paragraphs=len(paragraphs),
    )


def check_vocabulary(text: str) -> Verdict:
    words = lowercase_tokens(text)
    density = len(set(words)) / len(words) if words else 0.0
    return climb(
        [len(words) < 50, density < 0.3, density < 0.45, True],
        (
            Rung(WARNING, 7, "Not enough text to assess vocabulary properly.",
                 "Add more content for a meaningful vocabulary analysis."),
            Rung(FAIL, 4, "Very repetitive vocabulary. Content feels redundant.",
                 "Use synonyms and varied phrasing. Expand your word choices."),
            Rung(WARNING, 10, "Moderate vocabulary variety. Some repetition detected.",
                 "Try using more diverse word choices throughout your content."),
            Rung(PASS, 15, "Rich vocabulary with good word variety."),
        ),
    )


def find_overused_words(text: str):
    """Words of 4+ letters above max(3, 3% of all such words), in first-seen order."""
    words = lowercase_tokens(text, min_length=4)
    threshold = max(3, len(words) * 0.03)
    return [
        word for word, n in Counter(words).items()
        if n > threshold and word not in REPETITION_STOP_WORDS
    ]


def check_repetition(text: str) -> Verdict:
    overused = find_overused_words(text)
    return climb(
        [len(overused) > 5, len(overused) > 2, len(overused) > 0, True],
        (
            Rung(FAIL, 3, "Many overused words detected: {top}",
                 "Reduce repetition by using synonyms and restructuring sentences."),
            Rung(WARNING, 10, "Some word repetition: {all}",
                 "Consider using synonyms for frequently repeated terms."),
            Rung(PASS, 15, "No excessive word repetition detected. Most repeated: {all}"),
            Rung(PASS, 15, "No excessive word repetition detected."),
        ),
        top=", ".join(overused[:5]),
        all=", ".join(overused),
    )


def check_filler_words(text: str) -> Verdict:
    words = split_words(text.lower())
    filler = sum(1 for w in words if _NON_LETTER.sub("", w) in FILLER_WORDS)
    ratio = filler / len(words)
    return climb(
        [ratio > 0.05, ratio > 0.025, True],
        (
            Rung(FAIL, 2, "High filler word usage ({filler} filler words, {percent:.1f}%).",
                 'Remove unnecessary filler words like "very," "really," "actually."'),
            Rung(WARNING, 6, "Moderate filler word usage ({filler} filler words).",
                 "Consider reducing filler words for more direct writing."),
            Rung(PASS, 10, "Low filler word usage. Direct, purposeful writing."),
        ),
        filler=filler,
        percent=ratio * 100,
    )


def check_engagement(text: str) -> Verdict:
    signals = sum(
        1 for pattern in (_QUESTION, _EXCLAMATION, _QUOTED, _NUMBER, _LIST_LINE)
        if pattern.search(text)
    )
    return climb(
        [signals == 0, signals < 3, True],
        (
            Rung(FAIL, 1, "No engagement elements detected. Content may feel flat.",
                 "Add questions, examples with numbers, quotes, or lists to engage readers."),
            Rung(WARNING, 5, "Some engagement elements present but could use more variety.",
                 "Consider adding rhetorical questions, data points, or expert quotes."),
            Rung(PASS, 8, "Good variety of engagement elements throughout content."),
        ),
    )


def check_specificity(text: str) -> Verdict:
    specificity = sum(
        min(sum(1 for _ in pattern.finditer(text)), 3)
        for pattern in SPECIFICITY_PATTERNS
    )
    return climb(
        [specificity == 0, specificity < 4, True],
        (
            Rung(WARNING, 1, "No specific data, dates, or names detected.",
                 "Add statistics, years, names, or other specific details to add credibility."),
            Rung(WARNING, 3, "Some specific details present but light on data.",
                 "Consider adding more concrete examples and statistics."),
            Rung(PASS, 5, "Good use of specific details and data points."),
        ),
    )


CONTENT_BATTERY = Battery(
    key="content_quality",
    checks=(
        CheckDefinition("Content Depth (Word Count)", 20, check_word_count),
        CheckDefinition("Sentence Variety", 15, check_sentence_variety),
        CheckDefinition("Paragraph Structure", 12, check_paragraphs),
        CheckDefinition("Vocabulary Richness", 15, check_vocabulary),
        CheckDefinition("Keyword/Word Repetition", 15, check_repetition),
        CheckDefinition("Filler Words", 10, check_filler_words),
        CheckDefinition("Engagement Elements", 8, check_engagement),
        CheckDefinition("Specificity & Details", 5, check_specificity),
    ),
    max_score=100,
    tiers=(
        Tier(ScoreTier.EXCELLENT, 75, "High-Quality Content",
             "Your content shows strong quality signals. It should be well-received by both readers and search engines."),
        Tier(ScoreTier.GOOD, 50, "Needs Improvement",
             "Your content has potential but may be flagged for quality issues. Address the items below."),
        Tier(ScoreTier.POOR, 0, "Low-Value Content Risk",
             "This content shows multiple low-value signals. Major revisions recommended before publishing."),
    ),
)


def analyze_content(text: str, settings: Optional[Settings] = None) -> AnalysisOutcome:
    """
    Validate and score a text blob.

    Raises InputValidationError for empty text or text under the configured
    minimum word count; otherwise always returns an outcome.
    """
    text = validate_text(text, settings)
    outcome = aggregate(
        CONTENT_BATTERY,
        CONTENT_BATTERY.evaluate(text),
        source=text,
        word_count=len(split_words(text)),
    )
    logger.info("Content analysis of %d words scored %d (%s)",
                outcome.word_count, outcome.score, outcome.label)
    return outcome
