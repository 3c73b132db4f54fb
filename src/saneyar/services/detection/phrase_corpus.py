"""
Phrase Corpus

Categorized tables of crisis-indicative phrases, the per
(category, tier) severity weight table, and the context
modifier lexicon.

SAFETY-CRITICAL: A corpus that fails to load must stop the
service from starting. Silently scoring every message as
"no crisis" is the worst possible failure mode.

ARCHITECTURE: The corpus is built once at startup and is
read-only afterwards. It is injected into the scorer rather
than read from module globals, so tests can substitute
their own tables.

CLINICAL_VALIDATION_REQUIRED: Phrases and weights are
calibration data. Override them with a JSON file via
SANEYAR_DETECTION_CORPUS_PATH instead of editing code.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from saneyar.config.settings import DetectionSettings
from saneyar.domain.enums.crisis_enums import ContextModifier, CrisisCategory, SeverityTier
from saneyar.domain.models.crisis_models import PhraseEntry
from saneyar.config.logging_config import get_logger

logger = get_logger(__name__)


DEFAULT_CORPUS_VERSION = "2024.1-default"

MAX_SEVERITY_WEIGHT = 1.2


class CorpusConfigurationError(RuntimeError):
    """
    The phrase corpus or weight table could not be loaded.

    Fatal at startup. Never raised per message.
    """

    def __init__(self, message: str, source: Optional[str] = None) -> None:
        super().__init__(message)
        self.source = source


# =============================================================================
# DEFAULT TABLES
# =============================================================================

DEFAULT_PHRASES: dict[CrisisCategory, dict[SeverityTier, tuple[str, ...]]] = {
    CrisisCategory.SUICIDE: {
        SeverityTier.CRITICAL: (
            "kill myself", "end my life", "suicide plan", "ready to die",
            "going to kill myself", "have the pills", "have the rope", "have the gun",
            "final goodbye", "taking my life tonight", "this is the end",
            "can't live anymore", "planning my death", "writing suicide note",
            "saying goodbye forever", "tonight is the night", "ready to go",
            "time has come", "doing it now",
        ),
        SeverityTier.HIGH: (
            "want to die", "suicide", "suicidal thoughts", "take my own life",
            "better off dead", "end it all", "not worth living", "thinking about dying",
            "want to disappear forever", "life has no meaning", "tired of living",
            "wish i was dead", "everyone would be better without me", "planning to die",
            "considering suicide", "contemplating death", "researching methods",
        ),
        SeverityTier.MEDIUM: (
            "sometimes think about death", "wonder what dying feels like",
            "life is hard", "feeling hopeless", "don't want to be here",
            "questioning my existence", "feeling worthless", "death thoughts",
            "passive suicidal ideation", "wish i could just disappear",
        ),
    },
    CrisisCategory.SELF_HARM: {
        SeverityTier.CRITICAL: (
            "cutting right now", "about to cut", "have the blade ready",
            "burning myself tonight", "going to hurt myself", "need to cut deep",
            "punching myself hard", "hitting my head against wall", "deserve to bleed",
            "cutting feels good", "pain makes me feel alive", "carved into my skin",
            "bleeding everywhere", "can't stop cutting", "doing it again",
        ),
        SeverityTier.HIGH: (
            "cut myself", "hurt myself", "self harm", "self-harm", "cutting",
            "burning myself", "hitting myself", "punching walls", "deserve pain",
            "need to feel pain", "self-injury", "scratching until i bleed",
            "biting myself", "pulling my hair out", "razor blade", "fresh cuts",
        ),
        SeverityTier.MEDIUM: (
            "urge to hurt myself", "thinking about cutting", "want to feel pain",
            "scratching my arms", "picking at my skin", "tempted to self-harm",
            "self-destructive", "hurting myself emotionally",
        ),
    },
    CrisisCategory.VIOLENCE: {
        SeverityTier.CRITICAL: (
            "going to kill", "murder someone", "shoot everyone", "bomb the place",
            "make them pay", "revenge time", "they all deserve to die",
            "planning an attack", "have the weapons", "tonight is the night",
            "going to hurt them", "make them suffer", "eliminate them all",
            "loading the gun", "making a bomb", "target acquired",
        ),
        SeverityTier.HIGH: (
            "want to hurt someone", "kill them", "make them pay", "get revenge",
            "violent thoughts", "angry enough to kill", "they deserve pain",
            "fantasizing about violence", "want to fight", "lose control",
            "homicidal thoughts", "planning violence", "want to attack",
        ),
        SeverityTier.MEDIUM: (
            "really angry", "want to punch something", "mad at everyone",
            "feeling aggressive", "violent urges", "anger issues",
            "rage building up", "losing my temper",
        ),
    },
    CrisisCategory.IMMEDIACY: {
        SeverityTier.CRITICAL: (
            "right now", "in the next hour", "tonight", "tonight before bed",
            "today is the day", "can't wait anymore", "doing it now", "this is it",
            "final moment", "ready to go", "time has come", "no more waiting",
            "it's happening", "in 10 minutes", "as soon as", "immediately",
            "before sunrise",
        ),
        SeverityTier.HIGH: (
            "by the end of today", "this morning", "later today", "before midnight",
            "this week", "very soon", "in a few hours", "after work",
            "when everyone sleeps", "before dawn", "this evening",
        ),
        SeverityTier.MEDIUM: (
            "soon", "sometime", "eventually", "when i'm ready", "maybe tomorrow",
            "next week", "in the future", "one day",
        ),
    },
    CrisisCategory.HOPELESSNESS: {
        SeverityTier.CRITICAL: (
            "no hope left", "completely hopeless", "no point in living", "beyond saving",
            "no future possible", "lost all hope", "nothing will ever change",
            "permanently broken", "no way out ever", "doomed forever",
            "past the point of no return", "irreversibly damaged",
        ),
        SeverityTier.HIGH: (
            "no hope", "hopeless", "pointless", "nothing matters", "give up",
            "can't go on", "no future", "no point", "meaningless", "empty",
            "lost cause", "beyond help", "no way out", "trapped forever",
        ),
        SeverityTier.MEDIUM: (
            "feeling down", "so sad all the time", "discouraged", "losing hope",
            "struggling", "difficult times", "hard to cope", "feeling stuck",
        ),
    },
    CrisisCategory.SUBSTANCE: {
        SeverityTier.CRITICAL: (
            "overdose on purpose", "taking all the pills", "mixing drugs to die",
            "drinking to death", "lethal dose", "poisoning myself",
            "drug overdose plan", "alcohol poisoning intentional",
            "swallowing everything", "final high", "deadly combination",
        ),
        SeverityTier.HIGH: (
            "overdose", "too many pills", "drinking heavily", "using to numb pain",
            "self-medicating", "substance abuse", "addicted and desperate",
            "can't stop using", "need more drugs", "dangerous amounts",
        ),
        SeverityTier.MEDIUM: (
            "drinking more", "using substances", "numbing the pain",
            "relying on alcohol", "medication misuse", "substance problems",
        ),
    },
    CrisisCategory.ISOLATION: {
        SeverityTier.CRITICAL: (
            "completely alone", "no one cares", "abandoned by everyone",
            "pushing everyone away", "isolated forever", "no friends left",
            "family gave up on me", "totally disconnected", "nobody would notice",
            "disappearing without trace", "cutting all ties",
        ),
        SeverityTier.HIGH: (
            "feeling alone", "isolated", "no support", "no one understands",
            "lonely", "disconnected", "withdrawn", "social isolation",
            "avoiding everyone", "shutting people out",
        ),
        SeverityTier.MEDIUM: (
            "feeling lonely sometimes", "need connection", "missing friends",
            "socially anxious", "having trouble connecting",
        ),
    },
    CrisisCategory.METHODS: {
        SeverityTier.CRITICAL: (
            "have the gun", "loaded weapon", "sharp knife", "rope ready",
            "pills counted", "bridge location", "tall building", "train tracks",
            "poison prepared", "gas turned on", "car in garage", "method chosen",
            "means available", "tools ready", "location scouted",
        ),
        SeverityTier.HIGH: (
            "researching methods", "looking up ways", "planning how",
            "considering options", "exploring methods", "studying techniques",
            "gathering materials", "preparing tools",
        ),
        SeverityTier.MEDIUM: (
            "wondering how", "curious about methods", "thinking about ways",
        ),
    },
}

DEFAULT_WEIGHTS: dict[CrisisCategory, dict[SeverityTier, float]] = {
    CrisisCategory.SUICIDE: {SeverityTier.CRITICAL: 1.0, SeverityTier.HIGH: 0.8, SeverityTier.MEDIUM: 0.5},
    CrisisCategory.SELF_HARM: {SeverityTier.CRITICAL: 0.9, SeverityTier.HIGH: 0.7, SeverityTier.MEDIUM: 0.4},
    CrisisCategory.VIOLENCE: {SeverityTier.CRITICAL: 1.0, SeverityTier.HIGH: 0.8, SeverityTier.MEDIUM: 0.5},
    CrisisCategory.IMMEDIACY: {SeverityTier.CRITICAL: 1.2, SeverityTier.HIGH: 0.9, SeverityTier.MEDIUM: 0.3},
    CrisisCategory.HOPELESSNESS: {SeverityTier.CRITICAL: 0.8, SeverityTier.HIGH: 0.6, SeverityTier.MEDIUM: 0.3},
    CrisisCategory.SUBSTANCE: {SeverityTier.CRITICAL: 0.9, SeverityTier.HIGH: 0.7, SeverityTier.MEDIUM: 0.4},
    CrisisCategory.ISOLATION: {SeverityTier.CRITICAL: 0.6, SeverityTier.HIGH: 0.4, SeverityTier.MEDIUM: 0.2},
    CrisisCategory.METHODS: {SeverityTier.CRITICAL: 1.1, SeverityTier.HIGH: 0.8, SeverityTier.MEDIUM: 0.3},
}

DEFAULT_NEGATION_TERMS: tuple[str, ...] = (
    "not", "never", "don't", "dont", "won't", "wont",
    "can't", "cant", "cannot", "wouldn't", "wouldnt",
)

DEFAULT_INTENSIFIER_TERMS: tuple[str, ...] = (
    "really", "very", "extremely", "totally", "completely", "absolutely",
)

DEFAULT_CERTAINTY_TERMS: tuple[str, ...] = (
    "will", "going to", "planning", "ready", "decided", "determined",
)

# Words allowed between a negation term and the phrase it negates
DEFAULT_NEGATION_BRIDGE_TERMS: tuple[str, ...] = (
    "want", "wanna", "to", "going", "gonna", "plan", "trying", "try",
    "ever", "even", "really", "actually",
)

DEFAULT_MODIFIER_MULTIPLIERS: dict[ContextModifier, float] = {
    ContextModifier.NEGATION: 0.3,
    ContextModifier.INTENSIFIER: 1.5,
    ContextModifier.CERTAINTY: 1.3,
}


def normalize_text(text: str) -> str:
    """
    Lowercase text and fold typographic apostrophes.

    Not length preserving: some characters lowercase to more
    than one code point. Match offsets are only valid in the
    normalized text, which is all scoring indexes.
    """
    return text.lower().replace("’", "'").replace("‘", "'")


@dataclass(frozen=True)
class ModifierLexicon:
    """Term lists and multipliers for context modifiers."""

    negation_terms: tuple[str, ...] = DEFAULT_NEGATION_TERMS
    intensifier_terms: tuple[str, ...] = DEFAULT_INTENSIFIER_TERMS
    certainty_terms: tuple[str, ...] = DEFAULT_CERTAINTY_TERMS
    negation_bridge_terms: tuple[str, ...] = DEFAULT_NEGATION_BRIDGE_TERMS
    multipliers: Mapping[ContextModifier, float] = field(
        default_factory=lambda: MappingProxyType(dict(DEFAULT_MODIFIER_MULTIPLIERS))
    )

    def multiplier_for(self, modifier: ContextModifier) -> float:
        return self.multipliers[modifier]


# =============================================================================
# CORPUS FILE SCHEMA
# =============================================================================

class ModifierLexiconFile(BaseModel):
    """Modifier section of a corpus JSON file."""

    model_config = ConfigDict(extra="forbid")

    negation_terms: list[str] = Field(min_length=1)
    intensifier_terms: list[str] = Field(min_length=1)
    certainty_terms: list[str] = Field(min_length=1)
    negation_bridge_terms: list[str] = Field(default_factory=lambda: list(DEFAULT_NEGATION_BRIDGE_TERMS))
    multipliers: dict[ContextModifier, float]

    @model_validator(mode="after")
    def check_multipliers(self) -> "ModifierLexiconFile":
        missing = [m.value for m in ContextModifier if m not in self.multipliers]
        if missing:
            raise ValueError(f"missing modifier multipliers: {', '.join(missing)}")
        for modifier, value in self.multipliers.items():
            if value <= 0:
                raise ValueError(f"multiplier for {modifier.value} must be positive")
        return self

    def to_lexicon(self) -> ModifierLexicon:
        return ModifierLexicon(
            negation_terms=tuple(normalize_text(t).strip() for t in self.negation_terms),
            intensifier_terms=tuple(normalize_text(t).strip() for t in self.intensifier_terms),
            certainty_terms=tuple(normalize_text(t).strip() for t in self.certainty_terms),
            negation_bridge_terms=tuple(normalize_text(t).strip() for t in self.negation_bridge_terms),
            multipliers=MappingProxyType(dict(self.multipliers)),
        )


class CorpusFile(BaseModel):
    """
    Schema of a corpus JSON file.

    Example:
        {
          "version": "2025.03",
          "phrases": {"suicide": {"critical": ["kill myself"], ...}, ...},
          "weights": {"suicide": {"critical": 1.0, ...}, ...},
          "modifiers": {...}
        }
    """

    model_config = ConfigDict(extra="forbid")

    version: str = Field(min_length=1)
    phrases: dict[CrisisCategory, dict[SeverityTier, list[str]]]
    weights: dict[CrisisCategory, dict[SeverityTier, float]]
    modifiers: Optional[ModifierLexiconFile] = None

    @model_validator(mode="after")
    def check_completeness(self) -> "CorpusFile":
        problems = _table_problems(self.phrases, self.weights)
        if problems:
            raise ValueError("; ".join(problems))
        return self


def _table_problems(
    phrases: Mapping[CrisisCategory, Mapping[SeverityTier, Sequence[str]]],
    weights: Mapping[CrisisCategory, Mapping[SeverityTier, float]],
) -> list[str]:
    """Collect every structural problem in phrase and weight tables."""
    problems = []
    for category in CrisisCategory:
        category_phrases = phrases.get(category)
        category_weights = weights.get(category)
        if category_phrases is None:
            problems.append(f"phrases missing category {category.value}")
        if category_weights is None:
            problems.append(f"weights missing category {category.value}")
        for tier in SeverityTier:
            if category_phrases is not None:
                if tier not in category_phrases:
                    problems.append(f"phrases missing {category.value}.{tier.value}")
                elif any(not str(p).strip() for p in category_phrases[tier]):
                    problems.append(f"blank phrase in {category.value}.{tier.value}")
            if category_weights is not None:
                weight = category_weights.get(tier)
                if weight is None:
                    problems.append(f"weights missing {category.value}.{tier.value}")
                elif not 0.0 <= weight <= MAX_SEVERITY_WEIGHT:
                    problems.append(
                        f"weight {category.value}.{tier.value}={weight} "
                        f"outside [0, {MAX_SEVERITY_WEIGHT}]"
                    )
    return problems


# =============================================================================
# CORPUS
# =============================================================================

class PhraseCorpus:
    """
    Immutable phrase corpus with severity weights.

    Phrases are stored lowercased and in taxonomy order
    (category, then tier critical/high/medium, then file order),
    which is also the order matches are reported in.

    Usage:
        corpus = PhraseCorpus.default()
        for entry in corpus.get_phrase_table():
            weight = corpus.get_weight(entry.category, entry.tier)
    """

    def __init__(
        self,
        phrases: Mapping[CrisisCategory, Mapping[SeverityTier, Sequence[str]]],
        weights: Mapping[CrisisCategory, Mapping[SeverityTier, float]],
        lexicon: Optional[ModifierLexicon] = None,
        version: str = DEFAULT_CORPUS_VERSION,
    ) -> None:
        problems = _table_problems(phrases, weights)
        if problems:
            raise CorpusConfigurationError(
                "Invalid phrase corpus: " + "; ".join(problems),
                source=version,
            )

        self._entries: tuple[PhraseEntry, ...] = tuple(
            PhraseEntry(
                category=category,
                tier=tier,
                phrase=normalize_text(phrase).strip(),
            )
            for category in CrisisCategory
            for tier in SeverityTier
            for phrase in phrases[category][tier]
        )
        self._weights: Mapping[tuple[CrisisCategory, SeverityTier], float] = MappingProxyType({
            (category, tier): float(weights[category][tier])
            for category in CrisisCategory
            for tier in SeverityTier
        })
        self._lexicon = lexicon or ModifierLexicon()
        self._version = version

    @property
    def version(self) -> str:
        return self._version

    @property
    def lexicon(self) -> ModifierLexicon:
        return self._lexicon

    @property
    def phrase_count(self) -> int:
        return len(self._entries)

    def get_phrase_table(self) -> tuple[PhraseEntry, ...]:
        """Every phrase entry, in taxonomy order."""
        return self._entries

    def get_weight(self, category: CrisisCategory, tier: SeverityTier) -> float:
        """Severity weight for a (category, tier) pair."""
        return self._weights[(category, tier)]

    def phrases_for(self, category: CrisisCategory, tier: Optional[SeverityTier] = None) -> list[str]:
        return [
            e.phrase for e in self._entries
            if e.category == category and (tier is None or e.tier == tier)
        ]

    @classmethod
    def default(cls) -> "PhraseCorpus":
        """Corpus built from the built-in tables."""
        return cls(phrases=DEFAULT_PHRASES, weights=DEFAULT_WEIGHTS)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], source: Optional[str] = None) -> "PhraseCorpus":
        """
        Build a corpus from parsed corpus-file content.

        Raises:
            CorpusConfigurationError: If the content fails validation
        """
        try:
            parsed = CorpusFile.model_validate(data)
        except ValidationError as exc:
            raise CorpusConfigurationError(
                f"Corpus file failed validation: {exc.error_count()} error(s): {exc}",
                source=source,
            ) from exc

        return cls(
            phrases=parsed.phrases,
            weights=parsed.weights,
            lexicon=parsed.modifiers.to_lexicon() if parsed.modifiers else None,
            version=parsed.version,
        )

    @classmethod
    def from_file(cls, path: Path) -> "PhraseCorpus":
        """
        Load a corpus from a JSON file.

        Raises:
            CorpusConfigurationError: If the file is unreadable or invalid
        """
        try:
            raw = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise CorpusConfigurationError(
                f"Cannot read corpus file: {exc}",
                source=str(path),
            ) from exc

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise CorpusConfigurationError(
                f"Corpus file is not valid JSON: {exc}",
                source=str(path),
            ) from exc

        if not isinstance(data, dict):
            raise CorpusConfigurationError(
                "Corpus file must contain a JSON object",
                source=str(path),
            )

        return cls.from_dict(data, source=str(path))


def load_corpus(settings: Optional[DetectionSettings] = None) -> PhraseCorpus:
    """
    Load the phrase corpus for this process.

    Uses the JSON file named by settings.corpus_path when set,
    otherwise the built-in tables. Call once at startup.

    Raises:
        CorpusConfigurationError: If the configured corpus cannot be loaded
    """
    settings = settings or DetectionSettings()

    if settings.corpus_path is None:
        corpus = PhraseCorpus.default()
    else:
        try:
            corpus = PhraseCorpus.from_file(settings.corpus_path)
        except CorpusConfigurationError as exc:
            logger.critical(
                "Phrase corpus failed to load",
                source=exc.source,
                error=str(exc),
            )
            raise

    logger.info(
        "Phrase corpus loaded",
        version=corpus.version,
        phrase_count=corpus.phrase_count,
        source=str(settings.corpus_path) if settings.corpus_path else "built-in",
    )
    return corpus
