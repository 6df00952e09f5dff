"""Fuzzy matching and ranking of applications.

Scoring is an optimal-alignment subsequence match in the fzf/nucleo
family. Every query character must appear in the haystack in order;
among all such alignments the best-scoring one wins, where:

- each matched character earns SCORE_MATCH
- gaps between matched characters cost PENALTY_GAP_START for the first
  skipped character and PENALTY_GAP_EXTENSION for each further one
- characters at word boundaries (start of text, after whitespace, after
  a delimiter, camelCase humps, digit runs) earn a bonus, doubled for
  the first query character
- consecutive matches keep the bonus of the character that started the
  run, so a contiguous substring beats the same characters scattered

The ranked score blends this fuzzy score with the frecency score from
launch history: combined = fuzzy + frecency * frecency_weight.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..models.app import DesktopApp
from .history import FrecencyStore

logger = logging.getLogger(__name__)

SCORE_MATCH = 16
PENALTY_GAP_START = -3
PENALTY_GAP_EXTENSION = -1

BONUS_BOUNDARY = SCORE_MATCH // 2
BONUS_BOUNDARY_WHITE = BONUS_BOUNDARY + 2
BONUS_BOUNDARY_DELIMITER = BONUS_BOUNDARY + 1
BONUS_NON_WORD = BONUS_BOUNDARY
BONUS_CAMEL123 = BONUS_BOUNDARY + PENALTY_GAP_EXTENSION
BONUS_CONSECUTIVE = -(PENALTY_GAP_START + PENALTY_GAP_EXTENSION)
BONUS_FIRST_CHAR_MULTIPLIER = 2

# Frecency is scaled so it separates matches of similar quality
# without overturning a clearly better textual match. Adjustable.
DEFAULT_FRECENCY_WEIGHT = 10.0

DELIMITERS = "/,:;|-_.\\"

# Character classes, ordered so that everything above CLASS_NON_WORD
# is a word character.
CLASS_WHITESPACE = 0
CLASS_NON_WORD = 1
CLASS_DELIMITER = 2
CLASS_LOWER = 3
CLASS_UPPER = 4
CLASS_LETTER = 5
CLASS_NUMBER = 6


def _char_class(ch: str) -> int:
    if ch.isspace():
        return CLASS_WHITESPACE
    if ch in DELIMITERS:
        return CLASS_DELIMITER
    if ch.isdigit():
        return CLASS_NUMBER
    if ch.islower():
        return CLASS_LOWER
    if ch.isupper():
        return CLASS_UPPER
    if ch.isalpha():
        return CLASS_LETTER
    return CLASS_NON_WORD


def _bonus_for(prev_class: int, cur_class: int) -> int:
    if cur_class > CLASS_DELIMITER:
        if prev_class == CLASS_WHITESPACE:
            return BONUS_BOUNDARY_WHITE
        if prev_class == CLASS_DELIMITER:
            return BONUS_BOUNDARY_DELIMITER
        if prev_class == CLASS_NON_WORD:
            return BONUS_BOUNDARY
    if (prev_class == CLASS_LOWER and cur_class == CLASS_UPPER) or (
        prev_class != CLASS_NUMBER and cur_class == CLASS_NUMBER
    ):
        return BONUS_CAMEL123
    if cur_class == CLASS_WHITESPACE:
        return BONUS_BOUNDARY_WHITE
    if cur_class in (CLASS_NON_WORD, CLASS_DELIMITER):
        return BONUS_NON_WORD
    return 0


def fold_case(text: str) -> str:
    """Case-fold text one character at a time.

    Folding that would change the length of a character (e.g. "ß" ->
    "ss") keeps the lowercase form instead, so positions in the folded
    text line up with the original.
    """
    folded = []
    for ch in text:
        fc = ch.casefold()
        if len(fc) != 1:
            fc = ch.lower()
            if len(fc) != 1:
                fc = ch
        folded.append(fc)
    return "".join(folded)


def is_case_sensitive(query: str) -> bool:
    """Smart case: a query with any uppercase character matches case-sensitively."""
    return any(ch.isupper() for ch in query)


def _is_subsequence(needle: str, haystack: str) -> bool:
    it = iter(haystack)
    return all(ch in it for ch in needle)


def _boundary_bonuses(haystack: str) -> List[int]:
    # Start of text counts as following whitespace
    bonuses = []
    prev_class = CLASS_WHITESPACE
    for ch in haystack:
        cur_class = _char_class(ch)
        bonuses.append(_bonus_for(prev_class, cur_class))
        prev_class = cur_class
    return bonuses


def fuzzy_score(needle: str, haystack: str, bonuses: Sequence[int]) -> Optional[int]:
    """Score the best alignment of needle as a subsequence of haystack.

    Both strings must already be case-normalized. bonuses holds the
    boundary bonus of each haystack position, computed on the original
    (unfolded) text so camelCase humps survive folding.

    Args:
        needle: Query atom
        haystack: Text to search
        bonuses: Per-position boundary bonuses for haystack

    Returns:
        Score of the best alignment, or None if needle is not a subsequence
    """
    if not needle:
        return 0
    if not _is_subsequence(needle, haystack):
        return None

    n = len(haystack)
    # prev_score[j]: best score with the previous needle char matched at j
    # prev_run[j]: bonus of the character that started the consecutive run at j
    prev_score: List[Optional[int]] = [None] * n
    prev_run = [0] * n

    for j, ch in enumerate(haystack):
        if ch == needle[0]:
            prev_score[j] = SCORE_MATCH + bonuses[j] * BONUS_FIRST_CHAR_MULTIPLIER
            prev_run[j] = bonuses[j]

    for i in range(1, len(needle)):
        target = needle[i]
        score: List[Optional[int]] = [None] * n
        run = [0] * n
        gap: Optional[int] = None

        for j in range(i, n):
            # gap: best previous-row score ending at or before j-2,
            # charged for the skipped characters up to j-1
            opened = prev_score[j - 2] if j >= 2 else None
            if opened is not None:
                opened += PENALTY_GAP_START
                gap = opened if gap is None else max(gap + PENALTY_GAP_EXTENSION, opened)
            elif gap is not None:
                gap += PENALTY_GAP_EXTENSION

            if haystack[j] != target:
                continue

            bonus = bonuses[j]
            best: Optional[int] = None
            best_run = bonus

            diagonal = prev_score[j - 1]
            if diagonal is not None:
                carried = prev_run[j - 1]
                if bonus >= BONUS_BOUNDARY and bonus > carried:
                    carried = bonus
                best = diagonal + SCORE_MATCH + max(bonus, carried, BONUS_CONSECUTIVE)
                best_run = carried

            if gap is not None:
                from_gap = gap + SCORE_MATCH + bonus
                if best is None or from_gap > best:
                    best = from_gap
                    best_run = bonus

            score[j] = best
            run[j] = best_run

        prev_score, prev_run = score, run

    result = max((s for s in prev_score if s is not None), default=None)
    return result


@dataclass
class MatchResult:
    """Ranked application with the scores that placed it.

    combined_score is only comparable within a single ranking call.
    """

    app: DesktopApp
    fuzzy_score: int
    frecency_score: float
    combined_score: float


class FuzzyMatcher:
    """Rank applications against a query using fuzzy match and frecency.

    Attributes:
        min_score: Matches with a fuzzy score below this are dropped
        frecency_weight: Multiplier applied to frecency in the combined score

    Examples:
        >>> matcher = FuzzyMatcher()
        >>> results = matcher.match_apps("fire", apps, history, 10)
        >>> results[0].app.name
        'Firefox'
    """

    def __init__(self, min_score: float = 0, frecency_weight: float = DEFAULT_FRECENCY_WEIGHT):
        """Initialize matcher.

        Args:
            min_score: Minimum fuzzy score threshold (default 0 keeps every match)
            frecency_weight: Frecency multiplier (default 10)
        """
        self.min_score = min_score
        self.frecency_weight = frecency_weight

    def score(self, query: str, haystack: str) -> Optional[int]:
        """Score query against haystack text.

        The query is split on whitespace; every atom must match and the
        atom scores are summed. Matching is case-insensitive unless the
        query contains an uppercase character.

        Args:
            query: User query
            haystack: Text to match against

        Returns:
            Fuzzy score, or None if any atom fails to match
        """
        atoms = query.split()
        if not atoms:
            return 0

        bonuses = _boundary_bonuses(haystack)
        if not is_case_sensitive(query):
            atoms = [fold_case(atom) for atom in atoms]
            haystack = fold_case(haystack)

        total = 0
        for atom in atoms:
            atom_score = fuzzy_score(atom, haystack, bonuses)
            if atom_score is None:
                return None
            total += atom_score
        return total

    def match_apps(
        self,
        query: str,
        apps: Sequence[DesktopApp],
        history: FrecencyStore,
        max_results: int,
    ) -> List[MatchResult]:
        """Match apps against a query, returning sorted results.

        An empty (or whitespace-only) query returns every app ordered by
        frecency, then alphabetically. Otherwise only matching apps are
        returned, ordered by combined score, then alphabetically.

        Args:
            query: User query
            apps: Catalog snapshot, in any order
            history: Launch history used for frecency scores
            max_results: Maximum number of results

        Returns:
            At most max_results MatchResult objects, best first
        """
        if max_results <= 0:
            return []

        if not query.strip():
            results = []
            for app in apps:
                frecency = history.score(app.id)
                results.append(MatchResult(
                    app=app,
                    fuzzy_score=0,
                    frecency_score=frecency,
                    combined_score=frecency,
                ))

            results.sort(key=lambda r: (-r.frecency_score, fold_case(r.app.name), r.app.id))
            return results[:max_results]

        results = []
        for app in apps:
            score = self.score(query, app.haystack())
            if score is None or score < self.min_score:
                continue

            frecency = history.score(app.id)
            results.append(MatchResult(
                app=app,
                fuzzy_score=score,
                frecency_score=frecency,
                combined_score=score + frecency * self.frecency_weight,
            ))

        results.sort(key=lambda r: (-r.combined_score, fold_case(r.app.name), r.app.id))
        logger.debug(f"Query {query!r}: {len(results)} of {len(apps)} apps matched")
        return results[:max_results]
