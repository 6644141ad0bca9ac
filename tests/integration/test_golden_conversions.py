"""Data-driven integration tests for enzyme to RTL conversion.

Each ``enzyme_given_NN.txt`` file under tests/data/given_and_expected/ is
converted in memory and compared with ``rtl_expected_NN.txt``.
"""

from pathlib import Path

import pytest

from splurge_enzyme_to_rtl.transformers import EnzymeToRtlCodemod

DATA_DIR = Path(__file__).resolve().parents[1] / "data" / "given_and_expected"


def _pairs():
    pairs = []
    for given in sorted(DATA_DIR.glob("enzyme_given_*.txt")):
        number = given.stem.rsplit("_", 1)[-1]
        expected = DATA_DIR / f"rtl_expected_{number}.txt"
        pairs.append(pytest.param(given, expected, id=number))
    return pairs


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def test_data_pairs_exist():
    assert len(_pairs()) >= 3


@pytest.mark.parametrize("given, expected", _pairs())
def test_conversion_matches_expected(given, expected):
    outcome = EnzymeToRtlCodemod().transform(_read(given))

    assert outcome.code == _read(expected)
    assert outcome.warnings == []


@pytest.mark.parametrize("given, expected", _pairs())
def test_expected_output_is_stable(given, expected):
    converted = _read(expected)

    assert EnzymeToRtlCodemod().transform_code(converted) == converted


def test_counter_statistics():
    outcome = EnzymeToRtlCodemod().transform(_read(DATA_DIR / "enzyme_given_01.txt"))

    assert outcome.render_function == "renderCounter"
    assert outcome.wrapper_names == ["wrapper"]
    assert outcome.statistics.to_dict() == {
        "legacy_import_replaced": True,
        "selectors_rewritten": 4,
        "text_assertions_converted": 2,
        "simulate_calls_converted": 1,
        "exists_assertions_converted": 1,
        "chain_calls_removed": 2,
        "suggestions_added": 2,
    }


def test_render_helper_named_render_is_renamed():
    outcome = EnzymeToRtlCodemod().transform(_read(DATA_DIR / "enzyme_given_03.txt"))

    assert outcome.render_function == "renderFunc"
    assert outcome.wrapper_names == ["form"]
