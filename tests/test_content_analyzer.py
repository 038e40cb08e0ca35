"""
Low-value content battery over raw text.
"""
import pytest

from pagegrade.config import Settings
from pagegrade.models import CheckStatus, ScoreTier
from pagegrade.services.content_analyzer import (
    analyze_content,
    check_engagement,
    check_filler_words,
    check_paragraphs,
    check_repetition,
    check_sentence_variety,
    check_specificity,
    check_vocabulary,
    check_word_count,
    find_overused_words,
)
from pagegrade.utils.exceptions import InputValidationError

PASS, WARNING, FAIL = CheckStatus.PASS, CheckStatus.WARNING, CheckStatus.FAIL

ARTICLE = """How much does a home espresso setup really cost? In 2023 the average \
grinder sold for $450, and prices rose 12% the following year.

Start with the grinder. A consistent grind matters more than the machine itself! \
Burr grinders crush beans evenly. Blade grinders chop them into dust and boulders, \
which ruins extraction.

Next comes water. Hard water scales boilers quickly, so many owners filter it. \
Soft water tastes flat. Somewhere between the two is ideal.

1. Weigh the dose.
2. Time the shot.
3. Taste and adjust.

As James Hoffmann says, "dial in slowly and change one variable at a time." \
Patience turns a good cup into a great one."""


def words(n, word="lorem"):
    return " ".join([word] * n)


class TestWordCount:

    @pytest.mark.parametrize("n,status,score", [
        (299, FAIL, 5), (300, WARNING, 10), (500, WARNING, 15), (799, WARNING, 15), (800, PASS, 20),
    ])
    def test_thresholds(self, n, status, score):
        verdict = check_word_count(words(n))
        assert verdict.status == status
        assert verdict.score == score

    def test_message_has_count(self):
        assert check_word_count(words(120)).message.startswith("Very thin content (120 words)")


class TestSentenceVariety:

    def test_too_few_sentences(self):
        verdict = check_sentence_variety("One. Two. Three. Four.")
        assert verdict.status == WARNING
        assert verdict.score == 7

    def test_uniform_lengths_fail(self):
        verdict = check_sentence_variety("The cat sat on mats. " * 6)
        assert verdict.status == FAIL
        assert verdict.score == 4

    def test_varied_lengths_pass(self):
        text = (
            "Stop. "
            "This sentence is noticeably longer than the one before it, by design. "
            "Short again. "
            "Then we ramble for quite a while about nothing in particular at all today. "
            "Done!"
        )
        assert check_sentence_variety(text).score == 15


class TestParagraphs:

    def test_single_block(self):
        verdict = check_paragraphs(words(250))
        assert verdict.status == FAIL
        assert verdict.score == 2

    def test_long_paragraphs(self):
        text = "\n\n".join([words(160), words(160)])
        verdict = check_paragraphs(text)
        assert verdict.score == 6
        assert verdict.message == "Paragraphs are too long (~160 words avg)."

    def test_well_structured(self):
        text = "\n\n".join([words(60)] * 4)
        verdict = check_paragraphs(text)
        assert verdict.status == PASS
        assert verdict.message == "Well-structured paragraphs (4 paragraphs)."

    def test_short_single_paragraph_passes(self):
        assert check_paragraphs(words(50)).score == 12


class TestVocabulary:

    def test_too_few_tokens(self):
        assert check_vocabulary(words(49)).score == 7

    def test_repetitive(self):
        assert check_vocabulary(words(3000, "hello")).status == FAIL

    def test_rich(self):
        text = " ".join(a + b + "x" for a in "abcdefgh" for b in "abcdefgh")
        assert check_vocabulary(text).score == 15


class TestRepetition:

    def test_single_word_flood_names_the_word(self):
        verdict = check_repetition(words(3000, "hello"))
        assert "hello" in verdict.message
        assert find_overused_words(words(3000, "hello")) == ["hello"]

    def test_stop_words_ignored(self):
        assert find_overused_words(words(100, "this")) == []

    def test_short_words_ignored(self):
        assert find_overused_words(words(100, "cat")) == []

    def test_many_overused_words_fail(self):
        text = " ".join(["alpha", "bravo", "delta", "gamma", "kappa", "sigma", "omega"] * 10)
        verdict = check_repetition(text)
        assert verdict.status == FAIL
        assert verdict.score == 3
        assert verdict.message == "Many overused words detected: alpha, bravo, delta, gamma, kappa"

    def test_some_overused_words_warn(self):
        text = " ".join(["alpha", "bravo", "delta"] * 10)
        verdict = check_repetition(text)
        assert verdict.status == WARNING
        assert verdict.message == "Some word repetition: alpha, bravo, delta"

    def test_clean_text_passes(self):
        verdict = check_repetition(ARTICLE)
        assert verdict.status == PASS
        assert verdict.message == "No excessive word repetition detected."


class TestFillerWords:

    def test_heavy(self):
        verdict = check_filler_words(" ".join(["very good"] * 50))
        assert verdict.status == FAIL
        assert verdict.message == "High filler word usage (50 filler words, 50.0%)."

    def test_punctuation_stripped(self):
        verdict = check_filler_words("Really! " + words(30))
        assert verdict.status == WARNING

    def test_clean(self):
        assert check_filler_words(words(100)).score == 10


class TestEngagement:

    def test_flat(self):
        assert check_engagement(words(50)).score == 1

    def test_some(self):
        verdict = check_engagement("Is this it? " + words(10))
        assert verdict.status == WARNING

    def test_rich(self):
        assert check_engagement(ARTICLE).score == 8


class TestSpecificity:

    def test_none(self):
        verdict = check_specificity(words(20))
        assert verdict.status == WARNING
        assert verdict.score == 1

    def test_some(self):
        assert check_specificity("Founded in 1998.").score == 3

    def test_rich(self):
        assert check_specificity("In 2023 revenue rose 15% to $1,200 in New York.").score == 5

    def test_each_pattern_capped_at_three(self):
        assert check_specificity("1990 1991 1992 1993 1994 1995").score == 3


class TestAnalyzeContent:

    def test_empty_text_rejected(self):
        with pytest.raises(InputValidationError) as exc:
            analyze_content("   ")
        assert exc.value.message == "Please enter some content to analyze."

    def test_short_text_rejected(self):
        with pytest.raises(InputValidationError) as exc:
            analyze_content(words(99))
        assert exc.value.message == "Please enter at least 100 words for meaningful analysis."

    def test_minimum_is_configurable(self):
        outcome = analyze_content(words(20), settings=Settings(min_text_words=10))
        assert outcome.word_count == 20

    def test_flooded_text(self):
        outcome = analyze_content(words(3000, "hello"))
        checks = {c.name: c for c in outcome.checks}
        assert checks["Vocabulary Richness"].status == FAIL
        assert "hello" in checks["Keyword/Word Repetition"].message
        assert outcome.word_count == 3000
        assert outcome.battery == "content_quality"
        assert 0 <= outcome.score <= 100

    def test_tiers(self):
        outcome = analyze_content(words(3000, "hello"))
        # full marks only on length, repetition and filler
        assert outcome.score == 60
        assert outcome.tier == ScoreTier.GOOD
        assert outcome.label == "Needs Improvement"

    def test_idempotent(self):
        text = (ARTICLE + "\n\n") * 3
        assert analyze_content(text) == analyze_content(text)
