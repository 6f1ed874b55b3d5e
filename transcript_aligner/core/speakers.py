"""Pluggable speaker-label detection for corrected-text units.

WHY: Editors mark speaker turns in different ways — a bare name at the
start of each line ("Alice: hello"), a bracketed name ("[Alice] hello"),
or nothing at all. Telling a speaker name apart from a genuinely spoken
word is undecidable in general, so the rule is a swappable policy rather
than logic baked into the extractors.

HOW: SpeakerDetectionPolicy is an ABC with one abstract method,
classify_first_token(). The extractors cut each unit with
split_first_token(), which a policy may override when its labels span
whitespace, then classify that token against the normalized
machine-transcript vocabulary.
SPEAKER_POLICIES maps string keys to policy *classes*.

RULES:
- classify_first_token() returns the speaker name (possibly "") when the
  token is a label, or None when the token is spoken text
- Policies are stateless; one instance may serve any number of calls
- The vocabulary policy is the default and breaks when a speaker's name
  is also spoken somewhere in the machine transcript (known limitation)
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Dict, FrozenSet, Optional, Tuple, Type, Union

from transcript_aligner import config
from transcript_aligner.core.normalize import normalize_word

_BRACKET_LABEL_RE = re.compile(r"^\[([^\]]+)\]:?$")
_LEADING_BRACKET_RE = re.compile(r"^\s*(\[[^\]]+\]:?)")


class SpeakerDetectionPolicy(ABC):
    """Abstract base for speaker-label detection rules.

    To add a new rule:
    1. Subclass SpeakerDetectionPolicy
    2. Implement classify_first_token() and name
    3. Register the class in SPEAKER_POLICIES
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Registry key, e.g. 'vocabulary'."""

    @abstractmethod
    def classify_first_token(self, token: str, vocabulary: FrozenSet[str]) -> Optional[str]:
        """Decide whether the first token of a unit is a speaker label.

        Args:
            token: The first token of a non-blank unit, as cut by
                split_first_token().
            vocabulary: Normalized words of the machine transcript.

        Returns:
            The speaker name if token is a label, otherwise None.
        """

    def split_first_token(self, unit: str) -> Tuple[Optional[str], str]:
        """Cut a unit into its first token and the text after it.

        classify_first_token() only ever sees what this returns. The
        default token is the first whitespace-delimited word; policies
        whose labels can contain spaces override it.

        Returns:
            (token, rest), or (None, "") for a blank unit.
        """
        parts = unit.split(None, 1)
        if not parts:
            return None, ""
        return parts[0], parts[1] if len(parts) > 1 else ""


class VocabularySpeakerPolicy(SpeakerDetectionPolicy):
    """A first token that never occurs in the machine transcript is a speaker.

    RULES:
    - Membership is tested on normalize_word(token)
    - The speaker name drops a single trailing colon ("Alice:" → "Alice")
    """

    @property
    def name(self) -> str:
        return "vocabulary"

    def classify_first_token(self, token: str, vocabulary: FrozenSet[str]) -> Optional[str]:
        if normalize_word(token) in vocabulary:
            return None
        if token.endswith(":"):
            return token[:-1]
        return token


class BracketSpeakerPolicy(SpeakerDetectionPolicy):
    """A unit starting with "[Name]" (or "[Name]:") has a speaker.

    The bracketed label is the first token even when the name contains
    spaces ("[Jane Doe] hi") or no space follows it ("[Alice]hello").
    Surrounding whitespace inside the brackets is trimmed.
    """

    @property
    def name(self) -> str:
        return "bracket"

    def split_first_token(self, unit: str) -> Tuple[Optional[str], str]:
        match = _LEADING_BRACKET_RE.match(unit)
        if match is None:
            return super().split_first_token(unit)
        return match.group(1), unit[match.end():]

    def classify_first_token(self, token: str, vocabulary: FrozenSet[str]) -> Optional[str]:
        match = _BRACKET_LABEL_RE.match(token)
        if match is None:
            return None
        return match.group(1).strip()


class NoSpeakerPolicy(SpeakerDetectionPolicy):
    """Every token is spoken text; no unit carries a speaker."""

    @property
    def name(self) -> str:
        return "none"

    def classify_first_token(self, token: str, vocabulary: FrozenSet[str]) -> Optional[str]:
        return None


SPEAKER_POLICIES: Dict[str, Type[SpeakerDetectionPolicy]] = {
    "vocabulary": VocabularySpeakerPolicy,
    "bracket": BracketSpeakerPolicy,
    "none": NoSpeakerPolicy,
}


def get_speaker_policy(
    policy: Union[str, SpeakerDetectionPolicy, None] = None,
) -> SpeakerDetectionPolicy:
    """Resolve a policy instance from a registry key, an instance, or None.

    None resolves to the configured default (config.DEFAULT_SPEAKER_POLICY).

    Raises:
        ValueError: If a string key is not registered.
    """
    if isinstance(policy, SpeakerDetectionPolicy):
        return policy
    if policy is None:
        policy = config.DEFAULT_SPEAKER_POLICY
    try:
        return SPEAKER_POLICIES[policy]()
    except KeyError:
        available = ", ".join(sorted(SPEAKER_POLICIES))
        raise ValueError(
            "Unknown speaker policy '{}'. Available: {}".format(policy, available)
        ) from None
