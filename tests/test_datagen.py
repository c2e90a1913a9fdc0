import random

import pytest

from bitbench.datagen import (
    DatasetKind,
    complex_row,
    default_filename,
    generate_csv,
    main,
    play_yes_probability,
    simple_row,
    uniform_row,
)


class ScriptedRng:
    """Returns preset values from randrange, in order."""

    def __init__(self, values):
        self._values = iter(values)

    def randrange(self, stop):
        value = next(self._values)
        assert 0 <= value < stop
        return value


SIMPLE_DOMAINS = [
    {"Sunny", "Overcast", "Rain"},
    {"Hot", "Mild", "Cool"},
    {"High", "Normal"},
    {"True", "False"},
    {"Yes", "No"},
]


def test_simple_row_values_in_domains():
    rng = random.Random(1)
    for _ in range(200):
        row = simple_row(rng)
        assert len(row) == 5
        assert all(value in domain for value, domain in zip(row, SIMPLE_DOMAINS))


def test_uniform_row_values_in_domains():
    rng = random.Random(2)
    for _ in range(200):
        row = uniform_row(rng)
        assert len(row) == 5
        assert all(value in domain for value, domain in zip(row, SIMPLE_DOMAINS))


def test_simple_row_overcast_mostly_yes():
    row = simple_row(ScriptedRng([1, 0, 0, 0, 50]))
    assert row == ("Overcast", "Hot", "High", "True", "Yes")
    row = simple_row(ScriptedRng([1, 0, 0, 0, 95]))
    assert row[-1] == "No"


def test_simple_row_sunny_high_mostly_no():
    row = simple_row(ScriptedRng([0, 1, 0, 1, 10]))
    assert row == ("Sunny", "Mild", "High", "False", "No")
    assert simple_row(ScriptedRng([0, 1, 0, 1, 85]))[-1] == "Yes"


def test_simple_row_rain_true_mostly_no():
    assert simple_row(ScriptedRng([2, 2, 1, 0, 60]))[-1] == "No"
    assert simple_row(ScriptedRng([2, 2, 1, 0, 75]))[-1] == "Yes"


def test_simple_row_fallback_coin_flip():
    assert simple_row(ScriptedRng([2, 0, 1, 1, 0]))[-1] == "Yes"
    assert simple_row(ScriptedRng([2, 0, 1, 1, 1]))[-1] == "No"


def test_complex_row_shape_and_play():
    rng = random.Random(3)
    for _ in range(200):
        row = complex_row(rng)
        assert len(row) == 10
        assert row[-1] in {"Yes", "No"}


def test_complex_row_scripted():
    # Overcast, Mild, Normal, None, Afternoon, Summer, Improving, Rising, Excellent
    rng = ScriptedRng([1, 1, 1, 0, 1, 1, 0, 0, 0, 94])
    row = complex_row(rng)
    assert row == (
        "Overcast", "Mild", "Normal", "None", "Afternoon",
        "Summer", "Improving", "Rising", "Excellent", "Yes",
    )


def test_probability_clamped_high():
    assert play_yes_probability(1, 1, 1, 0, 1, 1, 0, 0) == 95


def test_probability_clamped_low():
    assert play_yes_probability(3, 3, 0, 4, 3, 3, 2, 4) == 5


def test_probability_always_within_bounds():
    rng = random.Random(4)
    for _ in range(500):
        p = play_yes_probability(
            rng.randrange(7), rng.randrange(6), rng.randrange(5), rng.randrange(5),
            rng.randrange(6), rng.randrange(4), rng.randrange(4), rng.randrange(5),
        )
        assert 5 <= p <= 95


def test_overcast_beats_sunny():
    base = dict(temp=2, humidity=2, windy=0, time_of_day=0, season=0, forecast=1, visibility=2)
    assert play_yes_probability(outlook=1, **base) > play_yes_probability(outlook=0, **base)


def test_default_filename():
    assert default_filename(1_000_000) == "id3_data_1M.csv"
    assert default_filename(500) == "id3_data_0M.csv"


@pytest.mark.parametrize(
    "kind, header",
    [
        (DatasetKind.SIMPLE, "Outlook,Temp,Humidity,Windy,Play"),
        (DatasetKind.UNIFORM, "Outlook,Temp,Humidity,Windy,Play"),
        (DatasetKind.COMPLEX,
         "Outlook,Temp,Humidity,Windy,Time,Season,Forecast,Pressure,Visibility,Play"),
    ],
)
def test_generate_csv_layout(tmp_path, kind, header):
    path = tmp_path / "out.csv"
    written = generate_csv(path, 25, kind, random.Random(5))
    lines = path.read_text().splitlines()
    assert written == 25
    assert lines[0] == header
    assert len(lines) == 26
    width = header.count(",") + 1
    assert all(len(line.split(",")) == width for line in lines[1:])


def test_generate_csv_is_deterministic_with_seed(tmp_path):
    a, b = tmp_path / "a.csv", tmp_path / "b.csv"
    generate_csv(a, 40, DatasetKind.COMPLEX, random.Random(9))
    generate_csv(b, 40, DatasetKind.COMPLEX, random.Random(9))
    assert a.read_bytes() == b.read_bytes()


def test_generate_csv_rejects_negative(tmp_path):
    with pytest.raises(ValueError):
        generate_csv(tmp_path / "x.csv", -1)


def test_main_complex(tmp_path, capsys):
    path = tmp_path / "data.csv"
    assert main(["30", "--output", str(path), "--seed", "1"]) == 0
    assert len(path.read_text().splitlines()) == 31
    assert "Generating 30 rows" in capsys.readouterr().out


def test_main_simple(tmp_path, capsys):
    path = tmp_path / "simple.csv"
    assert main(["--kind", "simple", "12", "--output", str(path)]) == 0
    lines = path.read_text().splitlines()
    assert len(lines) == 13
    assert f"Dataset generated: {path}" in capsys.readouterr().out