"""
Command routing for voxagent.

This module defines an ordered rule table that classifies a normalized
transcript into an intent.  Each :class:`IntentRule` tests the text with a
set of trigger phrases (plain substring containment) and, on a match,
strips its keyword phrases from the text to obtain a free-text argument.

Rules are evaluated strictly in the order they were registered and the
first match wins; overlapping trigger sets are resolved by that order, not
by any notion of a better match.  When nothing matches, the router falls
back to a dedicated rule.  Rules only *describe* what should happen (see
:class:`CommandOutcome`); performing the side effects is the job of the
assistant controller.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from .normalizer import normalize_transcript


@dataclass(frozen=True)
class CommandContext:
    """Everything a rule handler needs to build its outcome."""

    text: str
    normalized: str
    argument: str
    now: datetime


@dataclass(frozen=True)
class CommandOutcome:
    """
    Description of a classified command.

    ``url`` is the destination to open, or ``None`` when the command has no
    navigation side effect.  ``speech`` is the acknowledgment to speak and
    ``action`` the label shown in the history.
    """

    intent: str
    argument: str
    action: str
    speech: str
    url: Optional[str] = None


OutcomeBuilder = Callable[[CommandContext], CommandOutcome]


def _keyword_pattern(keywords: Sequence[str]) -> Optional[re.Pattern[str]]:
    if not keywords:
        return None
    return re.compile("|".join(re.escape(k) for k in keywords), re.IGNORECASE)


@dataclass(frozen=True)
class IntentRule:
    """
    A single entry of the rule table.

    Parameters
    ----------
    name:
        Intent name, e.g. ``"navigate"``.
    triggers:
        Phrases of which at least one must occur in the normalized text.
    build:
        Callable turning a :class:`CommandContext` into a :class:`CommandOutcome`.
    strip:
        Phrases removed (case-insensitively, everywhere) to obtain the
        argument.  At each position the phrases are tried in the given
        order, so longer phrases must precede their prefixes.
    default_argument:
        Substituted when stripping leaves nothing.
    """

    name: str
    triggers: Sequence[str]
    build: OutcomeBuilder
    strip: Sequence[str] = ()
    default_argument: str = ""
    _pattern: Optional[re.Pattern[str]] = field(init=False, repr=False, compare=False, default=None)

    def __post_init__(self) -> None:
        object.__setattr__(self, "triggers", tuple(self.triggers))
        object.__setattr__(self, "strip", tuple(self.strip))
        object.__setattr__(self, "_pattern", _keyword_pattern(self.strip))

    def matches(self, normalized: str) -> bool:
        return any(trigger in normalized for trigger in self.triggers)

    def extract(self, normalized: str) -> str:
        if self._pattern is None:
            return self.default_argument
        argument = self._pattern.sub("", normalized).strip()
        return argument or self.default_argument

    def resolve(self, text: str, normalized: str, now: datetime) -> CommandOutcome:
        context = CommandContext(
            text=text,
            normalized=normalized,
            argument=self.extract(normalized),
            now=now,
        )
        return self.build(context)


class CommandRouter:
    """
    Routes transcripts to the first matching :class:`IntentRule`.

    ``fallback`` is used when no registered rule matches.  Its trigger list
    is ignored.
    """

    def __init__(self, fallback: IntentRule, rules: Sequence[IntentRule] = ()) -> None:
        self._rules: List[IntentRule] = list(rules)
        self.fallback = fallback

    @property
    def rules(self) -> List[IntentRule]:
        return list(self._rules)

    def add_rule(self, rule: IntentRule) -> None:
        """Append ``rule`` to the table; it has lower priority than all existing rules."""
        self._rules.append(rule)

    def classify(self, normalized: str) -> IntentRule:
        """Return the first rule whose triggers occur in ``normalized``, else the fallback."""
        for rule in self._rules:
            if rule.matches(normalized):
                return rule
        return self.fallback

    def route(self, text: str, now: Optional[datetime] = None) -> CommandOutcome:
        """
        Normalize ``text``, classify it and build the outcome of the matched rule.

        ``now`` defaults to the current local time and is used by rules that
        report the time or date.
        """
        normalized = normalize_transcript(text)
        rule = self.classify(normalized)
        return rule.resolve(text, normalized, now or datetime.now())
