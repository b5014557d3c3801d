import os
import re
import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import List

import nltk
from nltk.tokenize import RegexpTokenizer
from nltk.tokenize.punkt import PunktSentenceTokenizer, PunktTokenizer

from keywords_config import (
    TECHNICAL_SKILLS,
    SOFT_SKILLS,
    TOOLS_TECHNOLOGIES,
    STOPWORDS,
    is_dictionary_term,
)

logger = logging.getLogger(__name__)

MAX_CANDIDATES = 50
MAX_PER_CATEGORY = 15
DICTIONARY_BOOST = 3


# ---------------- SENTENCE MODEL ----------------
def _load_sentence_tokenizer():
    auto_download = os.getenv("NLTK_AUTO_DOWNLOAD", "1").lower() not in ("0", "false", "no")
    try:
        nltk.data.find("tokenizers/punkt_tab")
    except LookupError:
        if auto_download:
            nltk.download("punkt_tab", quiet=True)

    try:
        return PunktTokenizer("english")
    except LookupError:
        # untrained punkt still breaks on end punctuation, it just knows no abbreviations
        logger.warning("punkt_tab model not available, using untrained sentence tokenizer")
        return PunktSentenceTokenizer()


_sentence_tokenizer = _load_sentence_tokenizer()
_word_tokenizer = RegexpTokenizer(r"\w+")


# ---------------- NORMALIZE / TOKENIZE ----------------
def clean_text(text):
    t = text.lower()
    t = re.sub(r"[^\w\s]", " ", t)
    t = re.sub(r"\s+", " ", t)
    return t.strip()


def split_words(cleaned):
    if not cleaned:
        return []
    return cleaned.split(" ")


def split_sentences(text):
    return [s for s in _sentence_tokenizer.tokenize(text) if s.strip()]


def sentence_tokens(sentence):
    return _word_tokenizer.tokenize(sentence.lower())


# ---------------- RESULT TYPES ----------------
@dataclass
class KeywordCandidate:
    keyword: str
    count: int
    score: int


@dataclass
class KeywordResult:
    """Categorized keywords, each list in descending score order."""
    technical_skills: List[str] = field(default_factory=list)
    soft_skills: List[str] = field(default_factory=list)
    tools_and_technologies: List[str] = field(default_factory=list)

    def to_dict(self):
        return {
            "technicalSkills": list(self.technical_skills),
            "softSkills": list(self.soft_skills),
            "toolsAndTechnologies": list(self.tools_and_technologies),
        }

    def all_keywords(self):
        return self.technical_skills + self.soft_skills + self.tools_and_technologies

    def clipboard_text(self):
        return ", ".join(self.all_keywords())

    def is_empty(self):
        return not self.all_keywords()


# ---------------- SCORING ----------------
def find_phrases(text):
    """Two-word dictionary terms, scanned pairwise inside each sentence.

    Every occurrence is returned, so a repeated phrase appears repeatedly.
    """
    phrases = []
    for sentence in split_sentences(text):
        tokens = sentence_tokens(sentence)
        if not tokens:
            continue
        for i in range(len(tokens) - 1):
            phrase = tokens[i] + " " + tokens[i + 1]
            if is_dictionary_term(phrase):
                phrases.append(phrase)
    return phrases


def extract_keywords(text, limit=MAX_CANDIDATES):
    if not text:
        return []

    words = split_words(clean_text(text))
    filtered = [w for w in words if len(w) > 2 and w not in STOPWORDS]
    word_count = Counter(filtered)

    scores = {}
    for keyword in filtered + find_phrases(text):
        if keyword in scores:
            continue
        score = word_count.get(keyword) or 1
        if is_dictionary_term(keyword):
            score *= DICTIONARY_BOOST
        scores[keyword] = score

    # sorted() is stable, so ties keep first-seen order
    ranked = sorted(scores.items(), key=lambda x: x[1], reverse=True)
    return [KeywordCandidate(k, word_count.get(k, 0), s) for k, s in ranked[:limit]]


# ---------------- CATEGORIZATION ----------------
TECHNICAL = "technical_skills"
SOFT = "soft_skills"
TOOLS = "tools_and_technologies"


def _contains_any(*parts):
    return lambda kw: any(p in kw for p in parts)


# first matching rule wins
CATEGORY_RULES = [
    (lambda kw: kw in TECHNICAL_SKILLS, TECHNICAL),
    (lambda kw: kw in SOFT_SKILLS, SOFT),
    (lambda kw: kw in TOOLS_TECHNOLOGIES, TOOLS),
    (_contains_any("develop", "program", "code"), TECHNICAL),
    (_contains_any("manage", "lead", "communicate"), SOFT),
    (lambda kw: len(kw) > 2 and kw not in STOPWORDS, TOOLS),
]


def categorize(keyword):
    """Return the category attribute name for a keyword, or None to drop it."""
    normalized = keyword.lower()
    for predicate, category in CATEGORY_RULES:
        if predicate(normalized):
            return category
    return None


def display_form(keyword):
    return keyword[:1].upper() + keyword[1:]


def categorize_keywords(keywords):
    result = KeywordResult()
    seen = set()

    for item in keywords:
        keyword = item.keyword if isinstance(item, KeywordCandidate) else item
        if not keyword:
            continue
        normalized = keyword.lower()
        if normalized in seen:
            continue
        seen.add(normalized)

        category = categorize(normalized)
        if category is None:
            continue
        getattr(result, category).append(display_form(keyword))

    result.technical_skills = result.technical_skills[:MAX_PER_CATEGORY]
    result.soft_skills = result.soft_skills[:MAX_PER_CATEGORY]
    result.tools_and_technologies = result.tools_and_technologies[:MAX_PER_CATEGORY]
    return result


def extract_and_categorize(text):
    return categorize_keywords(extract_keywords(text))
