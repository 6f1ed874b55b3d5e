"""Levenshtein word alignment between machine and corrected transcripts.

WHY: Machine transcripts contain wrong, missing, and extra words. To carry
timings over, every corrected word must be mapped to the machine word it
replaces (or marked as inserted), and every machine word that the editor
removed must be marked as deleted. Minimum edit distance gives the mapping
that changes the fewest words.

HOW: Classic dynamic programming. cost[i][j] is the minimum number of
edits turning the first i source words into the first j target words.
Matches cost 0, substitutions, deletions, and insertions cost 1. The
table is then walked back from (m, n) to (0, 0) and the trace reversed.

RULES:
- Word equality is raw lowercase comparison; punctuation is NOT stripped
  ("hello," and "hello" are a substitution, not a match)
- Backtracking prefers a match when the words are equal, otherwise the
  first of substitute, delete, insert whose predecessor cell is cost - 1
- The tie-break order above fixes the output on ties and must not change
- Time and memory are O(m * n); a warning is logged above
  config.LARGE_TABLE_WARNING_CELLS, nothing is enforced
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence

from transcript_aligner import config
from transcript_aligner.core.ir import AlignmentOp, AlignmentStats, OpType

logger = logging.getLogger(__name__)


def words_equal(source_word: str, target_word: str) -> bool:
    """Case-insensitive word equality used by the aligner."""
    return source_word.lower() == target_word.lower()


def _build_cost_table(
    source_words: Sequence[str],
    target_words: Sequence[str],
) -> List[List[int]]:
    m = len(source_words)
    n = len(target_words)
    cost = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(m + 1):
        cost[i][0] = i
    for j in range(n + 1):
        cost[0][j] = j

    lowered_target = [w.lower() for w in target_words]
    for i in range(1, m + 1):
        source = source_words[i - 1].lower()
        row = cost[i]
        above = cost[i - 1]
        for j in range(1, n + 1):
            if source == lowered_target[j - 1]:
                row[j] = above[j - 1]
            else:
                row[j] = min(above[j - 1], above[j], row[j - 1]) + 1
    return cost


def align_words(
    source_words: Sequence[str],
    target_words: Sequence[str],
) -> List[AlignmentOp]:
    """Align machine-transcript words with corrected words.

    Args:
        source_words: Words from the machine transcript (have timings).
        target_words: Words from the corrected text (need timings).

    Returns:
        Forward-ordered operations covering every source index and every
        target index exactly once.

    Example:
        align_words(["I", "think", "we", "should"], ["I", "believe", "we", "must"])
        → [match(0, 0), substitute(1, 1), match(2, 2), substitute(3, 3)]
    """
    m = len(source_words)
    n = len(target_words)
    if (m + 1) * (n + 1) > config.LARGE_TABLE_WARNING_CELLS:
        logger.warning(
            "Aligning %d x %d words builds a %d-cell table; expect high memory use",
            m, n, (m + 1) * (n + 1),
        )

    cost = _build_cost_table(source_words, target_words)

    trace: List[AlignmentOp] = []
    i, j = m, n
    while i > 0 or j > 0:
        if i == 0:
            trace.append(AlignmentOp.insert(j - 1))
            j -= 1
        elif j == 0:
            trace.append(AlignmentOp.delete(i - 1))
            i -= 1
        elif words_equal(source_words[i - 1], target_words[j - 1]):
            trace.append(AlignmentOp.match(i - 1, j - 1))
            i -= 1
            j -= 1
        elif cost[i][j] == cost[i - 1][j - 1] + 1:
            trace.append(AlignmentOp.substitute(i - 1, j - 1))
            i -= 1
            j -= 1
        elif cost[i][j] == cost[i - 1][j] + 1:
            trace.append(AlignmentOp.delete(i - 1))
            i -= 1
        else:
            trace.append(AlignmentOp.insert(j - 1))
            j -= 1

    trace.reverse()
    return trace


def summarize_alignment(alignment: Iterable[AlignmentOp]) -> AlignmentStats:
    """Count each operation type in an alignment."""
    stats = AlignmentStats()
    for op in alignment:
        if op.op is OpType.MATCH:
            stats.matches += 1
        elif op.op is OpType.SUBSTITUTE:
            stats.substitutions += 1
        elif op.op is OpType.INSERT:
            stats.insertions += 1
        else:
            stats.deletions += 1
    return stats
