# core/segment/ranking.py
"""
Window-style ranking helpers over pandas objects.

Each helper reproduces one SQL window function:

- percent_rank   -> PERCENT_RANK() OVER (ORDER BY measure)
- dense_rank     -> DENSE_RANK()   OVER (PARTITION BY group ORDER BY measure)
- row_number     -> ROW_NUMBER()   OVER (PARTITION BY group ORDER BY measure)
- top_n_per_group: sum, filter, dense rank and cut in one call
"""

from typing import Iterable, Optional, Union

import numpy as np  # type: ignore
import pandas as pd  # type: ignore


def percent_rank(values: Union[pd.Series, Iterable[float]]) -> pd.Series:
    """
    Percentile rank of every value within the population.

    rank = (position of the first tied value - 1) / (N - 1), so the minimum
    gets 0, the maximum gets 1 and tied values share the lowest rank of
    their group. A single value gets 0.

    Parameters
    ----------
    values : pd.Series or iterable of float
        Measures to rank. The index of a Series is preserved.

    Returns
    -------
    pd.Series
        Float ranks in [0, 1], aligned with the input.
    """
    series = values if isinstance(values, pd.Series) else pd.Series(list(values), dtype=float)
    n = len(series)
    if n == 0:
        return pd.Series(dtype=float, index=series.index)
    if n == 1:
        return pd.Series(0.0, index=series.index)

    min_rank = series.rank(method="min", ascending=True)
    return (min_rank - 1.0) / (n - 1)


def dense_rank(
    df: pd.DataFrame,
    measure_col: str,
    group_col: Optional[str] = None,
    ascending: bool = False,
) -> pd.Series:
    """Dense rank (1, 1, 2, ...) of ``measure_col``, optionally per group."""
    if df.empty:
        return pd.Series(dtype="int64", index=df.index)
    if group_col is None:
        ranks = df[measure_col].rank(method="dense", ascending=ascending)
    else:
        ranks = df.groupby(group_col, sort=False)[measure_col].rank(
            method="dense", ascending=ascending
        )
    return ranks.astype("int64")


def row_number(
    df: pd.DataFrame,
    measure_col: str,
    group_col: Optional[str] = None,
    ascending: bool = False,
) -> pd.Series:
    """
    Sequential 1..n numbering by ``measure_col``, optionally per group.

    Ties keep input order, so the first-seen row of a tie gets the lower
    number.
    """
    if df.empty:
        return pd.Series(dtype="int64", index=df.index)
    ordered = df.sort_values(measure_col, ascending=ascending, kind="stable")
    if group_col is None:
        numbers = pd.Series(np.arange(1, len(ordered) + 1), index=ordered.index)
    else:
        numbers = ordered.groupby(group_col, sort=False).cumcount() + 1
    return numbers.reindex(df.index).astype("int64")


def top_n_per_group(
    df: pd.DataFrame,
    group_col: str,
    item_col: str,
    measure_col: str,
    n: int = 3,
    min_total: Optional[float] = None,
    rank_col: str = "rank",
) -> pd.DataFrame:
    """
    Top ``n`` items per group by summed measure.

    Items whose total is not strictly above ``min_total`` are dropped
    before ranking. Ranking is dense, so ties can return more than ``n``
    rows for a group.

    Parameters
    ----------
    df : pd.DataFrame
        Detail rows holding group, item and measure columns
    group_col : str
        Partition column (e.g. product category)
    item_col : str
        Ranked column (e.g. product subcategory)
    measure_col : str
        Column summed per (group, item)
    n : int
        Highest rank kept
    min_total : float, optional
        Exclusive lower bound on the item total
    rank_col : str
        Name of the output rank column

    Returns
    -------
    pd.DataFrame
        Columns ``[group_col, item_col, measure_col, rank_col]`` ordered by
        group then rank.
    """
    if n < 1:
        raise ValueError(f"n must be a positive integer, got {n}")

    totals = (
        df.groupby([group_col, item_col], sort=False)[measure_col]
        .sum()
        .reset_index()
    )
    if min_total is not None:
        totals = totals[totals[measure_col] > min_total]

    totals = totals.copy()
    totals[rank_col] = dense_rank(totals, measure_col, group_col=group_col)
    top = totals[totals[rank_col] <= n]

    return (
        top.sort_values([group_col, rank_col], kind="stable")
        .reset_index(drop=True)
        [[group_col, item_col, measure_col, rank_col]]
    )
