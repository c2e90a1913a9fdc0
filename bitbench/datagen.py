"""Synthetic weather/play datasets for exercising the ID3 entropy tools."""

from __future__ import annotations

import argparse
import random
import sys
import time
from enum import Enum
from pathlib import Path
from typing import Sequence

YES = "Yes"
NO = "No"
PLAY_VALUES = (YES, NO)

SIMPLE_OUTLOOK = ("Sunny", "Overcast", "Rain")
SIMPLE_TEMP = ("Hot", "Mild", "Cool")
SIMPLE_HUMIDITY = ("High", "Normal")
SIMPLE_WINDY = ("True", "False")
SIMPLE_HEADERS = ("Outlook", "Temp", "Humidity", "Windy", "Play")

OUTLOOK = ("Sunny", "Overcast", "Rain", "Fog", "Snow", "Sleet", "Hail")
TEMP = ("Hot", "Mild", "Cool", "Cold", "Freezing", "Warm")
HUMIDITY = ("High", "Normal", "Low", "VeryHigh", "VeryLow")
WINDY = ("None", "Light", "Medium", "Strong", "Gale")
TIME_OF_DAY = ("Morning", "Afternoon", "Evening", "Night", "Dawn", "Dusk")
SEASON = ("Spring", "Summer", "Fall", "Winter")
FORECAST = ("Improving", "Stable", "Worsening", "Unpredictable")
PRESSURE = ("Rising", "Stable", "Falling")
VISIBILITY = ("Excellent", "Good", "Fair", "Poor", "VeryPoor")
COMPLEX_HEADERS = (
    "Outlook",
    "Temp",
    "Humidity",
    "Windy",
    "Time",
    "Season",
    "Forecast",
    "Pressure",
    "Visibility",
    "Play",
)

MIN_PROBABILITY = 5
MAX_PROBABILITY = 95

COMPLEX_DEFAULT_ROWS = 1_000_000
COMPLEX_MAX_ROWS = 1_000_000
SIMPLE_DEFAULT_ROWS = 100_000_000
UNIFORM_DEFAULT_ROWS = 10_000
LARGE_FILENAME = "large_data.csv"


class DatasetKind(Enum):
    """Which generator produces the rows."""

    SIMPLE = "simple"
    COMPLEX = "complex"
    UNIFORM = "uniform"

    @property
    def headers(self) -> tuple[str, ...]:
        return COMPLEX_HEADERS if self is DatasetKind.COMPLEX else SIMPLE_HEADERS


def _percent(rng: random.Random) -> int:
    return rng.randrange(100)


def simple_row(rng: random.Random) -> tuple[str, ...]:
    """Five-column row where Play is strongly correlated with the weather."""
    outlook = rng.randrange(len(SIMPLE_OUTLOOK))
    temp = rng.randrange(len(SIMPLE_TEMP))
    humidity = rng.randrange(len(SIMPLE_HUMIDITY))
    windy = rng.randrange(len(SIMPLE_WINDY))

    if outlook == 1:  # Overcast: 90% Yes
        play = 0 if _percent(rng) < 90 else 1
    elif outlook == 0 and humidity == 0:  # Sunny and High: 80% No
        play = 1 if _percent(rng) < 80 else 0
    elif outlook == 2 and windy == 0:  # Rain and True: 70% No
        play = 1 if _percent(rng) < 70 else 0
    else:
        play = rng.randrange(2)

    return (
        SIMPLE_OUTLOOK[outlook],
        SIMPLE_TEMP[temp],
        SIMPLE_HUMIDITY[humidity],
        SIMPLE_WINDY[windy],
        PLAY_VALUES[play],
    )


def play_yes_probability(
    outlook: int,
    temp: int,
    humidity: int,
    windy: int,
    time_of_day: int,
    season: int,
    forecast: int,
    visibility: int,
) -> int:
    """Percent chance of Play=Yes for the given feature indices, clamped to 5..95."""
    p = 50

    if outlook == 1:
        p += 30
    if outlook == 0:
        p -= 15
    if outlook == 2:
        p -= 10
    if outlook >= 3:
        p -= 20

    if temp in (1, 5):
        p += 15
    if temp == 0:
        p -= 10
    if temp >= 3:
        p -= 20

    if humidity == 1:
        p += 10
    if humidity in (0, 3):
        p -= 15

    if windy >= 3:
        p -= 25

    if time_of_day in (1, 2):
        p += 10
    if time_of_day == 3:
        p -= 15

    if season == 1:
        p += 15
    if season == 3:
        p -= 15

    if forecast == 0:
        p += 10
    if forecast == 2:
        p -= 10

    if visibility >= 3:
        p -= 20

    if outlook == 2 and windy >= 2:
        p -= 15
    if temp == 0 and humidity in (0, 3):
        p -= 20
    if season == 1 and time_of_day in (0, 1) and visibility <= 1:
        p += 25
    if season == 3 and temp in (3, 4):
        p -= 30

    return max(MIN_PROBABILITY, min(MAX_PROBABILITY, p))


def complex_row(rng: random.Random) -> tuple[str, ...]:
    """Ten-column row whose Play value follows many feature interactions."""
    outlook = rng.randrange(len(OUTLOOK))
    temp = rng.randrange(len(TEMP))
    humidity = rng.randrange(len(HUMIDITY))
    windy = rng.randrange(len(WINDY))
    time_of_day = rng.randrange(len(TIME_OF_DAY))
    season = rng.randrange(len(SEASON))
    forecast = rng.randrange(len(FORECAST))
    pressure = rng.randrange(len(PRESSURE))
    visibility = rng.randrange(len(VISIBILITY))

    probability = play_yes_probability(
        outlook, temp, humidity, windy, time_of_day, season, forecast, visibility
    )
    play = 0 if _percent(rng) < probability else 1

    return (
        OUTLOOK[outlook],
        TEMP[temp],
        HUMIDITY[humidity],
        WINDY[windy],
        TIME_OF_DAY[time_of_day],
        SEASON[season],
        FORECAST[forecast],
        PRESSURE[pressure],
        VISIBILITY[visibility],
        PLAY_VALUES[play],
    )


def uniform_row(rng: random.Random) -> tuple[str, ...]:
    """Five-column row with every value, Play included, drawn uniformly."""
    return tuple(
        rng.choice(values)
        for values in (SIMPLE_OUTLOOK, SIMPLE_TEMP, SIMPLE_HUMIDITY, SIMPLE_WINDY, PLAY_VALUES)
    )


_ROW_MAKERS = {
    DatasetKind.SIMPLE: simple_row,
    DatasetKind.COMPLEX: complex_row,
    DatasetKind.UNIFORM: uniform_row,
}


def generate_csv(
    path: str | Path,
    row_count: int,
    kind: DatasetKind = DatasetKind.COMPLEX,
    rng: random.Random | None = None,
) -> int:
    """Write a header and ``row_count`` generated rows; return the rows written."""
    if row_count < 0:
        raise ValueError("row_count must not be negative")
    rng = rng if rng is not None else random.Random()
    make_row = _ROW_MAKERS[kind]
    with open(path, "w", encoding="utf-8", newline="") as handle:
        handle.write(",".join(kind.headers) + "\n")
        for _ in range(row_count):
            handle.write(",".join(make_row(rng)) + "\n")
    return row_count


def default_filename(rows: int) -> str:
    """File name that records the row count in millions."""
    return f"id3_data_{rows // 1_000_000}M.csv"


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Generate ID3 test data as CSV.")
    parser.add_argument(
        "rows", nargs="?", type=int, default=None, help="number of data rows to write"
    )
    parser.add_argument(
        "--kind",
        choices=[kind.value for kind in DatasetKind],
        default=DatasetKind.COMPLEX.value,
    )
    parser.add_argument("--output", default=None, help="output CSV path")
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)

    kind = DatasetKind(args.kind)
    rng = random.Random(args.seed)

    if kind is DatasetKind.COMPLEX:
        rows = COMPLEX_DEFAULT_ROWS if args.rows is None else args.rows
        if rows <= 0 or rows > COMPLEX_MAX_ROWS:
            print("Invalid row count. Using default of 1 million rows.")
            rows = COMPLEX_DEFAULT_ROWS
        filename = args.output or default_filename(rows)
        print(f"Generating {rows} rows of ID3 test data to {filename}")
        start = time.time()
        generate_csv(filename, rows, kind, rng)
        print(f"Generating: 100.0% complete ({rows}/{rows} rows)")
        print(f"Dataset generated in {int(time.time() - start)} seconds")
        return 0

    default_rows = SIMPLE_DEFAULT_ROWS if kind is DatasetKind.SIMPLE else UNIFORM_DEFAULT_ROWS
    rows = default_rows if args.rows is None else args.rows
    if rows <= 0:
        print(f"Invalid row count. Using default of {default_rows} rows.")
        rows = default_rows
    filename = args.output or LARGE_FILENAME
    try:
        generate_csv(filename, rows, kind, rng)
    except OSError as exc:
        print(f"File open error: {exc}", file=sys.stderr)
        return 1
    print(f"Dataset generated: {filename}")
    return 0


if __name__ == "__main__":
    sys.exit(main())