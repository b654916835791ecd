"""Damerau-Levenshtein distance with a cheap length-difference exit.

Uses the unrestricted (true) Damerau-Levenshtein recurrence, not optimal string alignment. With
the early exit disabled (``max_length_delta=-1``) the result is a metric: symmetric, zero only for
equal strings and satisfying the triangle inequality. The early exit reports the length difference,
a lower bound of the true distance, so approximate results may break the triangle inequality.
"""

from __future__ import annotations

from typing import Final

__all__: list[str] = ["MAX_LENGTH_DELTA", "edit_distance"]

MAX_LENGTH_DELTA: Final[int] = 3


def edit_distance(first: str, second: str, *, max_length_delta: int = MAX_LENGTH_DELTA) -> int:
    """Return the edit distance between two strings.

    Insertions, deletions, substitutions and transpositions of adjacent characters each cost 1.
    When the lengths differ by more than ``max_length_delta`` the length difference is returned
    without running the full computation. That value can be smaller than the true distance;
    callers only compare such results against small bounds.

    Args:
        first (str): First string.
        second (str): Second string.
        max_length_delta (int): Length difference above which the early exit applies. Negative
            disables the exit.

    Returns:
        int: The distance.
    """
    if first == second:
        return 0
    len_first: int = len(first)
    len_second: int = len(second)
    if not len_first:
        return len_second
    if not len_second:
        return len_first

    delta: int = abs(len_first - len_second)
    if 0 <= max_length_delta < delta:
        return delta

    infinity: int = len_first + len_second
    # (len_first + 2) x (len_second + 2) matrix, first row and column hold the sentinel
    matrix: list[list[int]] = [[0] * (len_second + 2) for _ in range(len_first + 2)]
    matrix[0][0] = infinity
    for i in range(len_first + 1):
        matrix[i + 1][0] = infinity
        matrix[i + 1][1] = i
    for j in range(len_second + 1):
        matrix[0][j + 1] = infinity
        matrix[1][j + 1] = j

    last_row: dict[str, int] = {}
    for i in range(1, len_first + 1):
        char_first: str = first[i - 1]
        last_match_col: int = 0
        for j in range(1, len_second + 1):
            char_second: str = second[j - 1]
            last_match_row: int = last_row.get(char_second, 0)
            transpose_col: int = last_match_col
            cost: int = 0 if char_first == char_second else 1
            if not cost:
                last_match_col = j
            matrix[i + 1][j + 1] = min(
                matrix[i][j] + cost,
                matrix[i + 1][j] + 1,
                matrix[i][j + 1] + 1,
                matrix[last_match_row][transpose_col] + (i - last_match_row - 1) + 1 + (j - transpose_col - 1),
            )
        last_row[char_first] = i
    return matrix[len_first + 1][len_second + 1]
