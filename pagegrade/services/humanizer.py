"""
pagegrade/services/humanizer.py
Rule-based tone rewriter.

Pipeline: split into sentences -> tone dictionary -> occasional intro
phrases -> occasional transitions -> drop doubled words -> contraction
handling. The intro/transition stages draw from a random.Random; pass a
seeded one to pin the output.
"""
import logging
import random
import re
from typing import List, Optional, Sequence, Tuple

from ..config import Settings
from ..models import Tone, TransformResult
from .ladder import round_half_up
from .text_utils import split_sentences_keep_punctuation, split_words
from .validation import validate_humanize_input

logger = logging.getLogger(__name__)


def _compile(pairs: Sequence[Tuple[str, str]], whole_word: bool) -> List[Tuple[re.Pattern, str]]:
    compiled = []
    for source, target in pairs:
        pattern = re.escape(source)
        if whole_word:
            pattern = rf"\b{pattern}\b"
        compiled.append((re.compile(pattern, re.IGNORECASE), target))
    return compiled


# ── Tone dictionaries (applied in order; later entries see earlier output) ────

CASUAL_REPLACEMENTS = _compile([
    ("utilize", "use"),
    ("implement", "put in place"),
    ("demonstrate", "show"),
    ("facilitate", "help with"),
    ("regarding", "about"),
    ("concerning", "about"),
    ("commence", "start"),
    ("terminate", "end"),
    ("endeavor", "try"),
    ("sufficient", "enough"),
    ("numerous", "lots of"),
    ("approximately", "about"),
    ("subsequently", "then"),
    ("nevertheless", "but still"),
    ("furthermore", "also"),
    ("therefore", "so"),
    ("however", "but"),
    ("additionally", "plus"),
    ("consequently", "so"),
    ("In conclusion", "So basically"),
    ("It is important to note that", "Keep in mind that"),
    ("It should be noted that", "Just so you know"),
    ("In order to", "To"),
    ("Due to the fact that", "Because"),
    ("For the purpose of", "To"),
    ("In the event that", "If"),
    ("At this point in time", "Now"),
    ("In the near future", "Soon"),
    ("In spite of the fact that", "Even though"),
], whole_word=False)

NARRATIVE_REPLACEMENTS = _compile([
    ("utilize", "work with"),
    ("implement", "bring to life"),
    ("demonstrate", "show firsthand"),
    ("experience", "journey through"),
    ("discover", "stumble upon"),
    ("learn", "come to realize"),
    ("understand", "grasp"),
    ("important", "crucial"),
    ("significant", "remarkable"),
    ("interesting", "fascinating"),
], whole_word=True)

PROFESSIONAL_REPLACEMENTS = _compile([
    ("lots of", "numerous"),
    ("a lot", "significantly"),
    ("really", "substantially"),
    ("very", "considerably"),
    ("get", "obtain"),
    ("got", "obtained"),
    ("show", "demonstrate"),
    ("use", "utilize"),
    ("help", "assist"),
    ("need", "require"),
    ("want", "desire"),
    ("think", "believe"),
    ("know", "understand"),
    ("good", "beneficial"),
    ("bad", "detrimental"),
    ("big", "substantial"),
    ("small", "minimal"),
], whole_word=True)

TONE_REPLACEMENTS = {
    Tone.CASUAL: CASUAL_REPLACEMENTS,
    Tone.NARRATIVE: NARRATIVE_REPLACEMENTS,
    Tone.PROFESSIONAL: PROFESSIONAL_REPLACEMENTS,
}

# ── Structural variation ──────────────────────────────────────────────────────

INTROS = (
    "Interestingly, ",
    "What's worth noting is that ",
    "Here's the thing: ",
    "The reality is, ",
    "Looking at this closely, ",
)
_HAS_INTRO = re.compile(r"^(Interestingly|What's|Here's|The reality|Looking)")

TRANSITIONS = {
    Tone.CASUAL: ("Also, ", "And ", "Plus, ", "So ", "Now, "),
    Tone.NARRATIVE: ("Then, ", "Next, ", "Meanwhile, ", "Eventually, ", "As it turns out, "),
    Tone.PROFESSIONAL: ("Furthermore, ", "Additionally, ", "Moreover, ", "Subsequently, ", "Consequently, "),
}
_HAS_TRANSITION = re.compile(r"^(Furthermore|Additionally|Moreover|Also|And|Plus|Then|Next)")

# Never collapsed when doubled ("the the" is left alone)
COMMON_WORDS = frozenset(["the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for"])

# ── Contractions ──────────────────────────────────────────────────────────────

CONTRACTIONS = [
    (re.compile(r"\bdo not\b", re.IGNORECASE), "don't"),
    (re.compile(r"\bcannot\b", re.IGNORECASE), "can't"),
    (re.compile(r"\bwill not\b", re.IGNORECASE), "won't"),
    (re.compile(r"\bshould not\b", re.IGNORECASE), "shouldn't"),
    (re.compile(r"\bwould not\b", re.IGNORECASE), "wouldn't"),
    (re.compile(r"\bcould not\b", re.IGNORECASE), "couldn't"),
    (re.compile(r"\bit is\b", re.IGNORECASE), "it's"),
    (re.compile(r"\bthat is\b", re.IGNORECASE), "that's"),
    (re.compile(r"\bwhat is\b", re.IGNORECASE), "what's"),
    (re.compile(r"\bthere is\b", re.IGNORECASE), "there's"),
    (re.compile(r"\bI am\b"), "I'm"),
    (re.compile(r"\byou are\b", re.IGNORECASE), "you're"),
    (re.compile(r"\bthey are\b", re.IGNORECASE), "they're"),
    (re.compile(r"\bwe are\b", re.IGNORECASE), "we're"),
]

EXPANSIONS = [
    (re.compile(r"\bdon't\b", re.IGNORECASE), "do not"),
    (re.compile(r"\bcan't\b", re.IGNORECASE), "cannot"),
    (re.compile(r"\bwon't\b", re.IGNORECASE), "will not"),
    (re.compile(r"\bshouldn't\b", re.IGNORECASE), "should not"),
    (re.compile(r"\bwouldn't\b", re.IGNORECASE), "would not"),
    (re.compile(r"\bcouldn't\b", re.IGNORECASE), "could not"),
    (re.compile(r"\bit's\b", re.IGNORECASE), "it is"),
    (re.compile(r"\bthat's\b", re.IGNORECASE), "that is"),
    (re.compile(r"\bI'm\b"), "I am"),
]


def _lower_first(sentence: str) -> str:
    return sentence[:1].lower() + sentence[1:]


def _substitute(text: str, rules: Sequence[Tuple[re.Pattern, str]]) -> str:
    for pattern, replacement in rules:
        text = pattern.sub(lambda _m, r=replacement: r, text)
    return text


def apply_tone(sentences: List[str], tone: Tone) -> List[str]:
    rules = TONE_REPLACEMENTS[tone]
    return [_substitute(s, rules) for s in sentences]


def vary_structure(sentences: List[str], rng: random.Random) -> List[str]:
    """Every third sentence gets an intro phrase 30% of the time."""
    varied = []
    for index, sentence in enumerate(sentences):
        if index % 3 == 0 and rng.random() > 0.7 and not _HAS_INTRO.match(sentence):
            sentence = rng.choice(INTROS) + _lower_first(sentence)
        varied.append(sentence)
    return varied


def add_transitions(sentences: List[str], tone: Tone, rng: random.Random) -> List[str]:
    """Every fourth sentence (never the first) gets a transition half the time."""
    transitions = TRANSITIONS[tone]
    result = []
    for index, sentence in enumerate(sentences):
        if index > 0 and index % 4 == 0 and rng.random() > 0.5:
            transition = rng.choice(transitions)
            if not _HAS_TRANSITION.match(sentence):
                sentence = transition + _lower_first(sentence)
        result.append(sentence)
    return result


def remove_repetition(text: str) -> str:
    """Collapse immediately repeated words, case-insensitively."""
    kept: List[str] = []
    last = ""
    for word in split_words(text):
        if word.lower() == last.lower() and word.lower() not in COMMON_WORDS:
            continue
        kept.append(word)
        last = word
    return " ".join(kept)


def adjust_contractions(text: str, tone: Tone) -> str:
    if tone == Tone.PROFESSIONAL:
        return _substitute(text, EXPANSIONS)
    return _substitute(text, CONTRACTIONS)


def rewrite(text: str, tone: Tone, rng: random.Random) -> str:
    sentences = split_sentences_keep_punctuation(text)
    sentences = apply_tone(sentences, tone)
    sentences = vary_structure(sentences, rng)
    sentences = add_transitions(sentences, tone, rng)
    result = remove_repetition(" ".join(sentences))
    return adjust_contractions(result, tone)


def humanize(
    text: str,
    tone: Tone = Tone.CASUAL,
    rng: Optional[random.Random] = None,
    settings: Optional[Settings] = None,
) -> TransformResult:
    """
    Validate and rewrite `text` in the requested tone.

    Raises InputValidationError for empty or too-short input. Output varies
    between calls unless a seeded `rng` is supplied.
    """
    text = validate_humanize_input(text, settings)
    tone = Tone(tone)
    rewritten = rewrite(text, tone, rng or random.Random())

    original_words = len(split_words(text))
    humanized_words = len(split_words(rewritten))
    change_percent = round_half_up(abs(humanized_words - original_words) / original_words * 100)
    logger.info("Humanized %d words (%s): %d%% change", original_words, tone.value, change_percent)
    return TransformResult(
        text=rewritten,
        tone=tone,
        original_words=original_words,
        humanized_words=humanized_words,
        change_percent=change_percent,
    )
