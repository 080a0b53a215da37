"""
Ordered pattern-substitution rules.

Provides the building blocks every standardization stage is written with:
- Rule / RuleTable: ordered regex rewrites, optionally context-sensitive
- Case / CaseTable: first-match-wins conditional value substitution
- preceded_by / followed_by: zero-width context predicates

Context predicates stand in for regex lookbehind, which Python's ``re`` only
allows at a fixed width (patterns like ``(?<= |^)`` or ``(?<=[0-9]{1,4})``
are rejected at compile time).
"""

import re
from typing import Callable, Optional, Pattern, Union

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field

# Context predicate: (text, cursor) -> bool
ContextPredicate = Callable[[str, int], bool]


class _Blank:
    """Replacement marker that nulls the whole field."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "BLANK"


BLANK = _Blank()


def is_null(value) -> bool:
    """True for None, NaN and pd.NA."""
    if value is None or isinstance(value, str):
        return value is None
    return bool(pd.isna(value))


def preceded_by(pattern: str) -> ContextPredicate:
    """
    Build a predicate that holds when the text left of the cursor ends with
    ``pattern``.

    The pattern may be variable width and may use ``^`` for start-of-string.

    Example:
        ```python
        at_word_start = preceded_by(" |^")
        at_word_start("1 FIRST ST", 2)  # True
        ```
    """
    compiled = re.compile(f"(?:{pattern})\\Z")

    def predicate(text: str, pos: int) -> bool:
        return compiled.search(text, 0, pos) is not None

    predicate.__name__ = f"preceded_by({pattern!r})"
    return predicate


def followed_by(pattern: str) -> ContextPredicate:
    """
    Build a predicate that holds when ``pattern`` matches at the cursor.

    ``$`` matches at end of string.
    """
    compiled = re.compile(f"(?:{pattern})")

    def predicate(text: str, pos: int) -> bool:
        return compiled.match(text, pos) is not None

    predicate.__name__ = f"followed_by({pattern!r})"
    return predicate


class Rule(BaseModel):
    """
    One (matcher, replacement) pair.

    The matcher is ``pattern`` plus optional ``before``/``after`` context
    predicates evaluated at the start and end of each candidate span. The
    replacement is literal text (``""`` deletes) or ``BLANK``.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    pattern: Pattern[str]
    replacement: Union[str, _Blank]
    before: Optional[ContextPredicate] = None
    after: Optional[ContextPredicate] = None
    count: int = Field(0, ge=0, description="Max substitutions, 0 for all")

    @classmethod
    def of(
        cls,
        pattern: str,
        replacement: Union[str, _Blank],
        before: Optional[str] = None,
        after: Optional[str] = None,
        count: int = 0,
    ) -> "Rule":
        """Build a rule from pattern strings."""
        return cls(
            pattern=re.compile(pattern),
            replacement=replacement,
            before=preceded_by(before) if before is not None else None,
            after=followed_by(after) if after is not None else None,
            count=count,
        )

    @property
    def blanks(self) -> bool:
        return self.replacement is BLANK

    def _spans(self, text: str):
        pos = 0
        found = 0
        while pos <= len(text):
            match = self.pattern.search(text, pos)
            if match is None:
                return
            start, end = match.span()
            if (self.before is None or self.before(text, start)) and (
                self.after is None or self.after(text, end)
            ):
                yield start, end
                found += 1
                if self.count and found >= self.count:
                    return
                pos = end if end > start else end + 1
            else:
                pos = start + 1

    def matches(self, text: str) -> bool:
        return next(self._spans(text), None) is not None

    def apply(self, text: str) -> Optional[str]:
        """Substitute every matching span; None if a BLANK rule matched."""
        if self.blanks:
            return None if self.matches(text) else text

        pieces = []
        last = 0
        for start, end in self._spans(text):
            pieces.append(text[last:start])
            pieces.append(self.replacement)
            last = end
        if not pieces:
            return text
        pieces.append(text[last:])
        return "".join(pieces)


class RuleTable(BaseModel):
    """
    Ordered sequence of rules.

    Each rule runs across the full output of the previous one. A matching
    BLANK rule nulls the value and stops evaluation.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    rules: list[Rule]
    trim: bool = False

    def apply(self, value: Optional[str]) -> Optional[str]:
        if is_null(value):
            return value
        for rule in self.rules:
            value = rule.apply(value)
            if value is None:
                return None
        return value.strip() if self.trim else value

    def __call__(self, value: Optional[str]) -> Optional[str]:
        return self.apply(value)

    def __len__(self) -> int:
        return len(self.rules)


def _identity(value: str) -> Optional[str]:
    return value


class Case(BaseModel):
    """One (predicate, result) variant of a CaseTable."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    when: Callable[[str], bool]
    then: Union[Callable[[str], Optional[str]], _Blank]

    @classmethod
    def search(cls, pattern: str, then) -> "Case":
        """Case that fires when ``pattern`` occurs anywhere in the value."""
        compiled = re.compile(pattern)
        return cls(when=lambda value: compiled.search(value) is not None, then=then)

    def result(self, value: str) -> Optional[str]:
        if self.then is BLANK:
            return None
        return self.then(value)


class CaseTable(BaseModel):
    """
    Cascading conditional rewrite: the first case whose predicate holds
    produces the result; ``otherwise`` handles values no case matched.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    cases: list[Case]
    otherwise: Callable[[str], Optional[str]] = _identity

    def apply(self, value: Optional[str]) -> Optional[str]:
        if is_null(value):
            return value
        for case in self.cases:
            if case.when(value):
                return case.result(value)
        return self.otherwise(value)

    def __call__(self, value: Optional[str]) -> Optional[str]:
        return self.apply(value)


__all__ = [
    "BLANK",
    "Case",
    "CaseTable",
    "ContextPredicate",
    "Rule",
    "RuleTable",
    "followed_by",
    "is_null",
    "preceded_by",
]
