"""
Context Modifier Engine

Inspects the text around a matched phrase for negation,
intensifiers and certainty language, and returns the
multiplier to apply to that phrase's score.

CLINICAL_VALIDATION_REQUIRED: Modifiers compose independently
and multiplicatively, so a phrase can be both negated and
intensified. This is deliberate pending clinical calibration.
"""

import re
from typing import Optional, Pattern

from saneyar.domain.enums.crisis_enums import ContextModifier
from saneyar.domain.models.crisis_models import ContextAssessment
from saneyar.services.detection.phrase_corpus import ModifierLexicon

TOKEN_PATTERN = re.compile(r"[a-z0-9']+")

# Negation never scopes across these
CLAUSE_BOUNDARY = re.compile(r"[.!?;,:\n]")

# Bridging words tolerated between a negation and its phrase
MAX_NEGATION_BRIDGE = 4


def _term_pattern(terms: tuple[str, ...]) -> Optional[Pattern[str]]:
    """Whole-word alternation of terms, longest first."""
    cleaned = sorted({t for t in terms if t}, key=len, reverse=True)
    if not cleaned:
        return None
    alternation = "|".join(re.escape(t) for t in cleaned)
    return re.compile(rf"(?<![\w'])(?:{alternation})(?![\w'])")


class ContextModifierEngine:
    """
    Context window analysis for phrase matches.

    Window: window_size characters on each side of the match,
    truncated at the text boundaries.

    - Negation: a negation term immediately precedes the phrase
      (or its first word), allowing a few bridging words such as
      "want to", so "I do not want to hurt myself" is negated.
      The bridge stops at clause punctuation, so "Why not? Going
      to kill myself" is not negated.
    - Intensifier: an intensifier appears anywhere in the window.
    - Certainty: a certainty/futurity term appears anywhere in the window.

    Usage:
        engine = ContextModifierEngine(corpus.lexicon)
        context = engine.assess(text, start, len(phrase))
    """

    def __init__(
        self,
        lexicon: Optional[ModifierLexicon] = None,
        window_size: int = 50,
    ) -> None:
        self._lexicon = lexicon or ModifierLexicon()
        self._window_size = max(0, window_size)
        self._intensifier_pattern = _term_pattern(self._lexicon.intensifier_terms)
        self._certainty_pattern = _term_pattern(self._lexicon.certainty_terms)
        self._negation_sequences = [
            tuple(term.split()) for term in self._lexicon.negation_terms if term.strip()
        ]
        self._bridge_terms = frozenset(self._lexicon.negation_bridge_terms)

    @property
    def window_size(self) -> int:
        return self._window_size

    def window_bounds(self, text_length: int, match_start: int, match_length: int) -> tuple[int, int]:
        start = max(0, match_start - self._window_size)
        end = min(text_length, match_start + match_length + self._window_size)
        return start, end

    def assess(self, text: str, match_start: int, match_length: int) -> ContextAssessment:
        """
        Assess context modifiers for one phrase occurrence.

        Args:
            text: Normalized (lowercased) message text
            match_start: Index of the match in text
            match_length: Length of the matched phrase

        Returns:
            ContextAssessment with the composed multiplier
        """
        window_start, window_end = self.window_bounds(len(text), match_start, match_length)
        surrounding = text[window_start:window_end]
        phrase = text[match_start:match_start + match_length]

        negated = self._is_negated(
            preceding=text[window_start:match_start],
            surrounding=surrounding,
            phrase=phrase,
        )
        intensified = bool(
            self._intensifier_pattern and self._intensifier_pattern.search(surrounding)
        )
        certainty = bool(
            self._certainty_pattern and self._certainty_pattern.search(surrounding)
        )

        multiplier = 1.0
        if negated:
            multiplier *= self._lexicon.multiplier_for(ContextModifier.NEGATION)
        if intensified:
            multiplier *= self._lexicon.multiplier_for(ContextModifier.INTENSIFIER)
        if certainty:
            multiplier *= self._lexicon.multiplier_for(ContextModifier.CERTAINTY)

        return ContextAssessment(
            multiplier=multiplier,
            negated=negated,
            intensified=intensified,
            certainty=certainty,
            surrounding_text=surrounding,
        )

    def _is_negated(self, preceding: str, surrounding: str, phrase: str) -> bool:
        words = phrase.split()
        first_word = words[0] if words else phrase

        # Literal "<negation> <phrase>" or "<negation> <first word>" in the window
        for term in self._lexicon.negation_terms:
            if f"{term} {phrase}" in surrounding or f"{term} {first_word}" in surrounding:
                return True

        # Negation scoped over a short bridge ("not want to <phrase>")
        # within the clause that contains the phrase
        clause = CLAUSE_BOUNDARY.split(preceding)[-1]
        tokens = TOKEN_PATTERN.findall(clause)
        index = len(tokens)
        bridged = 0
        while index > 0 and bridged < MAX_NEGATION_BRIDGE and tokens[index - 1] in self._bridge_terms:
            index -= 1
            bridged += 1

        head = tokens[:index]
        for sequence in self._negation_sequences:
            if len(head) >= len(sequence) and tuple(head[-len(sequence):]) == sequence:
                return True

        return False
