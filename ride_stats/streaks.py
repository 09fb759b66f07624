"""
Streaks of consecutive riding weeks.

A streak (run) is a maximal block of consecutive week numbers, e.g. the active
weeks [1, 2, 3, 5, 6, 8] form the streaks [[1, 2, 3], [5, 6], [8]].
"""

from typing import Iterable, Iterator, List, Tuple

import pandas as pd


def iter_runs(values: Iterable[int]) -> Iterator[List[int]]:
    """
    Yield maximal runs of consecutive integers from an ascending, duplicate-free sequence.
    Sorting and de-duplication are the caller's job. An empty input yields nothing.
    """
    current = []
    previous = None
    for value in values:
        value = int(value)
        if previous is not None and value == previous + 1:
            current.append(value)
        else:
            if current:
                yield current
            current = [value]
        previous = value
    if current:
        yield current


def group_sequential(values: Iterable[int]) -> List[List[int]]:
    return list(iter_runs(values))


def streak_lengths(runs: List[List[int]]) -> List[int]:
    """Run lengths, longest first."""
    return sorted((len(run) for run in runs), reverse=True)


def top_streaks(runs: List[List[int]]) -> Tuple[int, int]:
    """Longest and second-longest streak; 0 stands in for a streak that doesn't exist."""
    lengths = streak_lengths(runs) + [0, 0]
    return lengths[0], lengths[1]


def weekly_streaks(dataset: pd.DataFrame) -> List[List[int]]:
    weeks = sorted(int(week) for week in dataset["week"].unique())
    return group_sequential(weeks)
