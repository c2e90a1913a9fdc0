"""Entropy and information gain of categorical CSV columns (ID3 split scoring)."""

from __future__ import annotations

import argparse
import math
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

YES = "Yes"
NO = "No"
DEFAULT_FILENAME = "data.csv"
DEFAULT_MAX_ROWS = 100_000_000


@dataclass
class Dataset:
    """A table of categorical values whose last column is the Yes/No target."""

    headers: list[str] = field(default_factory=list)
    rows: list[tuple[str, ...]] = field(default_factory=list)

    @property
    def cols(self) -> int:
        return len(self.headers)

    @property
    def target_col(self) -> int:
        if not self.headers:
            raise ValueError("dataset has no columns")
        return len(self.headers) - 1

    def __len__(self) -> int:
        return len(self.rows)


@dataclass
class ColumnStats:
    """Per-value Yes/No tallies of one column, in order of first appearance."""

    yes_counts: dict[str, int] = field(default_factory=dict)
    no_counts: dict[str, int] = field(default_factory=dict)

    def add(self, value: str, is_yes: bool) -> None:
        self.yes_counts.setdefault(value, 0)
        self.no_counts.setdefault(value, 0)
        if is_yes:
            self.yes_counts[value] += 1
        else:
            self.no_counts[value] += 1

    @property
    def values(self) -> list[str]:
        return list(self.yes_counts)

    @property
    def unique_count(self) -> int:
        return len(self.yes_counts)

    def count(self, value: str) -> int:
        return self.yes_counts.get(value, 0) + self.no_counts.get(value, 0)


def log2_safe(x: float) -> float:
    """Base-2 logarithm that yields 0 for non-positive input."""
    return 0.0 if x <= 0.0 else math.log2(x)


def entropy(yes: int, no: int) -> float:
    """Binary entropy of a Yes/No split."""
    total = yes + no
    if total == 0:
        return 0.0
    p_yes = yes / total
    p_no = no / total
    return -p_yes * log2_safe(p_yes) - p_no * log2_safe(p_no)


def _tokens(line: str) -> list[str]:
    # Consecutive separators collapse, so empty fields vanish.
    return [token for token in line.rstrip("\r\n").split(",") if token]


def read_csv(path: str | Path, max_rows: int = DEFAULT_MAX_ROWS) -> Dataset:
    """Load a comma-separated file; rows with too few fields are dropped."""
    dataset = Dataset()
    with open(path, encoding="utf-8", errors="surrogateescape", newline="") as handle:
        header = handle.readline()
        if not header:
            return dataset
        dataset.headers = _tokens(header)
        width = dataset.cols
        for line in handle:
            if len(dataset.rows) >= max_rows:
                break
            fields = _tokens(line)
            if len(fields) >= width:
                dataset.rows.append(tuple(fields[:width]))
    return dataset


def _target_counts(dataset: Dataset) -> tuple[int, int]:
    target = dataset.target_col
    yes = no = 0
    for row in dataset.rows:
        if row[target] == YES:
            yes += 1
        elif row[target] == NO:
            no += 1
    return yes, no


def total_entropy(dataset: Dataset) -> float:
    """Entropy of the target column over the whole dataset."""
    return entropy(*_target_counts(dataset))


def count_unique_values(dataset: Dataset, col_idx: int) -> ColumnStats:
    """Tally each distinct value of a column against the target (non-Yes counts as No)."""
    target = dataset.target_col
    stats = ColumnStats()
    for row in dataset.rows:
        stats.add(row[col_idx], row[target] == YES)
    return stats


def _weighted_entropy(dataset: Dataset, stats: ColumnStats) -> float:
    total = len(dataset)
    return sum(
        stats.count(value) / total * entropy(stats.yes_counts[value], stats.no_counts[value])
        for value in stats.values
    )


def information_gain(dataset: Dataset, col_idx: int) -> float:
    """Reduction in target entropy obtained by splitting on a column."""
    stats = count_unique_values(dataset, col_idx)
    return total_entropy(dataset) - _weighted_entropy(dataset, stats)


def _report_column(dataset: Dataset, col_idx: int) -> float:
    stats = count_unique_values(dataset, col_idx)
    print(f"Column {dataset.headers[col_idx]} has {stats.unique_count} unique values")
    total = len(dataset)
    for value in stats.values:
        yes, no = stats.yes_counts[value], stats.no_counts[value]
        count = yes + no
        print(
            f"  Value '{value}': {count} examples ({yes} yes, {no} no), "
            f"entropy: {entropy(yes, no):.4f}, weight: {count / total:.4f}"
        )
    yes, no = _target_counts(dataset)
    print(f"Total dataset: {yes} yes, {no} no")
    return entropy(yes, no) - _weighted_entropy(dataset, stats)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Information gain of each CSV column.")
    parser.add_argument("filename", nargs="?", default=DEFAULT_FILENAME)
    parser.add_argument("max_rows", nargs="?", type=int, default=DEFAULT_MAX_ROWS)
    args = parser.parse_args(argv)

    print(f"Starting ID3 entropy calculation for up to {args.max_rows} rows")
    start_total = time.process_time()
    try:
        dataset = read_csv(args.filename, args.max_rows)
    except OSError as exc:
        print(f"File open error: {exc}", file=sys.stderr)
        print("Failed to load dataset", file=sys.stderr)
        return 1
    print(f"Reading: 100.0% complete ({len(dataset)} rows read)")
    print(f"Loaded {len(dataset)} rows, {dataset.cols} columns from {args.filename}")
    if dataset.cols == 0:
        print("Failed to load dataset", file=sys.stderr)
        return 1

    yes, no = _target_counts(dataset)
    print(f"Total dataset: {yes} yes, {no} no")
    print(f"Total Entropy: {entropy(yes, no):.4f}")

    for col_idx in range(dataset.cols - 1):
        start = time.process_time()
        gain = _report_column(dataset, col_idx)
        elapsed = time.process_time() - start
        print(f"Info Gain ({dataset.headers[col_idx]}): {gain:.4f} ({elapsed:.3f} seconds)")

    print(f"Total time: {time.process_time() - start_total:.3f} seconds")
    return 0


if __name__ == "__main__":
    sys.exit(main())