"""
NIST SP 800-53 control identifier parsing and comparison.

Control tags in result files are free-form strings such as "AC-2 (1)",
"SI-4a.2." or "SI-7 (14)(b)". This module turns them into structured
NistControl values that can be compared by lineage (is one control an
enhancement of another?) and ordered lexicographically for display.

Grammar:
    CONTROL := FAMILY [ "-" SUBSPEC* ]
    FAMILY  := two uppercase letters
    SUBSPEC := " " | [a-z] "." | [0-9]+ "."? | "(" [a-z] ")" | "(" [0-9]+ ")"

Parsing never fails on trailing garbage; it stops at the first token that
does not match. A string that does not start with a family code does not
parse at all.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

NIST_FAMILY_FORMAT = r"[A-Z]{2}"
SUBSPEC_FORMAT = r" |[a-z]\.|[0-9]+\.?|\([a-z]\)|\([0-9]+\)"
NIST_CONTROL_FORMAT = rf"^({NIST_FAMILY_FORMAT})(-((?:{SUBSPEC_FORMAT})*))?"

_SUBSPEC_RE = re.compile(SUBSPEC_FORMAT)
_CONTROL_RE = re.compile(NIST_CONTROL_FORMAT)

# Splits a token into digit runs, letter runs and everything else
_CHUNK_RE = re.compile(r"\d+|[A-Za-z]+|[^\dA-Za-z]+")


class MalformedNistTagError(ValueError):
    """Raised when a tag string is not a NIST control identifier."""

    pass


def _natural_token_key(token: str) -> tuple[Any, ...]:
    """
    Build a sort key that orders tokens the way a numeric-aware collator does.

    Punctuation sorts before digits, digits before letters, digit runs
    compare by value and letters compare case-insensitively. The raw token
    is appended so that distinct tokens never compare equal.
    """
    chunks: list[tuple[int, int, str]] = []
    for chunk in _CHUNK_RE.findall(token):
        if chunk.isdigit():
            chunks.append((1, int(chunk), ""))
        elif chunk.isalpha():
            chunks.append((2, 0, chunk.lower()))
        else:
            chunks.append((0, 0, chunk))
    return (tuple(chunks), token)


@dataclass(frozen=True)
class NistControl:
    """
    A single NIST control, or a group of controls if the sub specs are vague.

    Equality and hashing use only family and sub_specs; raw_text is carried
    along for display and never affects comparisons.

    Attributes:
        family: The leading two capital letters (e.g., "AC", "SI").
        sub_specs: Tokens after the dash. For "SI-7 (14)(b)" this is
            ("7", "(14)", "(b)"); for "SI-4a.2." it is ("4", "a.", "2.").
            Empty for a bare family.
        raw_text: The string this control was parsed from, if any.
    """

    family: str
    sub_specs: tuple[str, ...] = ()
    raw_text: str | None = field(default=None, compare=False)

    def contains(self, other: NistControl) -> bool:
        """Check whether other is this control or one of its descendants."""
        return self.lineage(other) != -1

    def lineage(self, other: NistControl) -> int:
        """
        Measure how many levels below this control other sits.

        Returns:
            -1 if other is not this control or a descendant of it,
            otherwise the difference in sub spec depth (0 for equal controls).
        """
        if self.family != other.family:
            return -1
        if len(self.sub_specs) > len(other.sub_specs):
            return -1
        for mine, theirs in zip(self.sub_specs, other.sub_specs):
            if mine != theirs:
                return -1
        return len(other.sub_specs) - len(self.sub_specs)

    def sort_key(self) -> tuple[Any, ...]:
        """Key for sorting controls lexicographically by their token chain."""
        return tuple(_natural_token_key(t) for t in (self.family, *self.sub_specs))

    def local_compare(self, other: NistControl) -> int:
        """
        Compare two controls lexicographically.

        Token chains are compared element-wise with numeric-aware ordering,
        so "AC-10" sorts after "AC-9". When one chain is a prefix of the
        other, the shorter one sorts first.

        Returns:
            Negative if self sorts first, positive if other does, 0 if equal.
        """
        a_chain = (self.family, *self.sub_specs)
        b_chain = (other.family, *other.sub_specs)
        for a_token, b_token in zip(a_chain, b_chain):
            a_key = _natural_token_key(a_token)
            b_key = _natural_token_key(b_token)
            if a_key < b_key:
                return -1
            if a_key > b_key:
                return 1
        return len(a_chain) - len(b_chain)

    def parent(self) -> NistControl | None:
        """Return the control one level up, or None for a bare family."""
        if not self.sub_specs:
            return None
        return NistControl(self.family, self.sub_specs[:-1])

    def key(self) -> str:
        """Stable string key used to index controls in the hierarchy."""
        return self.family + "-".join(self.sub_specs)

    def to_string(self) -> str:
        """Render in canonical form, e.g. "AC-2 (1)" or "SI-4a.2."."""
        if not self.sub_specs:
            return self.family
        rendered = ""
        previous = ""
        for token in self.sub_specs:
            if token == " ":
                continue
            if token.startswith("(") and previous and not previous.startswith("("):
                rendered += " "
            rendered += token
            previous = token
        return f"{self.family}-{rendered}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "family": self.family,
            "sub_specs": list(self.sub_specs),
            "raw_text": self.raw_text,
            "text": self.to_string(),
        }

    def __str__(self) -> str:
        return self.to_string()


def parse_nist(raw_nist: str) -> NistControl | None:
    """
    Parse a free-form tag into a NistControl.

    Args:
        raw_nist: Tag text such as "AC-2 (1)" or "SI-7 (14)(b)".

    Returns:
        The parsed control, or None if the text does not begin with a
        two-letter family code.
    """
    match = _CONTROL_RE.match(raw_nist)
    if not match:
        return None

    family = match.group(1)
    remaining = (match.group(3) or "").strip()
    sub_specs: list[str] = []
    while remaining:
        token_match = _SUBSPEC_RE.match(remaining)
        if not token_match:
            break
        token = token_match.group(0)
        remaining = remaining[len(token):].strip()
        sub_specs.append(token)

    return NistControl(family, tuple(sub_specs), raw_nist)


def parse_nist_strict(raw_nist: str) -> NistControl:
    """
    Parse a tag, raising instead of returning None.

    Raises:
        MalformedNistTagError: If the tag is not a NIST control identifier.
    """
    control = parse_nist(raw_nist)
    if control is None:
        raise MalformedNistTagError(f"Not a NIST control identifier: {raw_nist!r}")
    return control


def sort_controls(controls: list[NistControl]) -> list[NistControl]:
    """Return controls sorted lexicographically."""
    return sorted(controls, key=lambda c: c.sort_key())
