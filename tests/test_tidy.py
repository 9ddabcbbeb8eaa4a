"""Tests for the tidy summary entry points"""

import numpy as np
import pandas as pd
import pytest
from pydantic import ValidationError

from boottidy.config import TidyConfig
from boottidy.errors import CIComputationError, MissingDataError, UnknownMethodError
from boottidy.routines.mock_routines import MockIntervals, MockWeightedMoments
from boottidy.schemas import BootstrapResult
from boottidy.summary.confint import ConfMethod
from boottidy.summary.tidy import tidy_bootstrap, tidy_from_config


@pytest.fixture
def gapped_result() -> BootstrapResult:
    """Three statistics, the second never observed."""
    rng = np.random.default_rng(11)
    replicates = rng.normal(loc=[1.0, 0.0, 5.0], scale=1.0, size=(200, 3))
    replicates[:, 1] = np.nan
    return BootstrapResult(replicates=replicates, original=[1.0, 0.0, 5.0])


def test_tidy_example_values():
    """Test the 1..5 replicate example with and without an original value."""
    plain = tidy_bootstrap(BootstrapResult(replicates=[1.0, 2.0, 3.0, 4.0, 5.0]))
    assert list(plain.columns) == ["term", "estimate", "std.error"]
    assert plain["term"].tolist() == ["t1*"]
    assert np.isclose(plain.loc[0, "estimate"], 3.0)
    assert np.isclose(plain.loc[0, "std.error"], 1.5811, atol=1e-4)

    with_original = tidy_bootstrap(BootstrapResult(replicates=[1.0, 2.0, 3.0, 4.0, 5.0], original=[3.0]))
    assert list(with_original.columns) == ["term", "statistic", "bias", "std.error"]
    assert np.isclose(with_original.loc[0, "bias"], 0.0)


def test_terms_keep_original_indices(gapped_result):
    """Test that dropped statistics leave gaps in term labels."""
    table = tidy_bootstrap(gapped_result)
    assert table["term"].tolist() == ["t1*", "t3*"]
    assert table["statistic"].tolist() == [1.0, 5.0]


@pytest.mark.parametrize("has_original", [False, True])
@pytest.mark.parametrize("weighted", [False, True])
def test_column_sets(has_original, weighted):
    """Test the column set of every case, with and without intervals."""
    result = BootstrapResult(
        replicates=[[1.0, 4.0], [2.0, 5.0], [3.0, 9.0], [4.0, 1.0]],
        original=[2.0, 6.0] if has_original else None,
        weighted=weighted,
    )
    expected = {
        (False, False): ["estimate", "std.error"],
        (False, True): ["estimate", "std.error"],
        (True, False): ["statistic", "bias", "std.error"],
        (True, True): ["statistic", "bias", "std.error", "estimate"],
    }[(has_original, weighted)]

    table = tidy_bootstrap(result, moments_fn=MockWeightedMoments())
    assert list(table.columns) == ["term"] + expected

    table = tidy_bootstrap(result, conf_int=True, moments_fn=MockWeightedMoments(), ci_fn=MockIntervals())
    assert list(table.columns) == ["term"] + expected + ["conf.low", "conf.high"]


@pytest.mark.parametrize("method", list(ConfMethod))
def test_conf_low_not_above_high(gapped_result, method):
    """Test interval ordering for every method."""
    table = tidy_bootstrap(gapped_result, conf_int=True, conf_method=method, ci_fn=MockIntervals())
    assert len(table) == 2
    assert (table["conf.low"] <= table["conf.high"]).all()


def test_intervals_follow_retained_rows(gapped_result):
    """Test that intervals are computed only for retained statistics."""
    calls = []
    mock = MockIntervals()

    def recording(index, result, conf_level, method):
        calls.append(index)
        return mock(index, result, conf_level, method)

    table = tidy_bootstrap(gapped_result, conf_int=True, conf_level=0.9, ci_fn=recording)

    assert calls == [0, 2]
    assert table.loc[0, "conf.low"] < 1.0 < table.loc[0, "conf.high"]
    assert table.loc[1, "conf.low"] < 5.0 < table.loc[1, "conf.high"]


def test_intervals_without_original():
    """Test intervals when the bootstrap recorded no original statistic."""
    result = BootstrapResult(replicates=[[1.0, 2.0], [2.0, 4.0], [3.0, 6.0], [4.0, 8.0], [5.0, 10.0]])
    table = tidy_bootstrap(result, conf_int=True, conf_level=0.5, ci_fn=MockIntervals())

    assert table["conf.low"].tolist() == [2.0, 4.0]
    assert table["conf.high"].tolist() == [4.0, 8.0]


def test_threaded_matches_sequential(gapped_result):
    """Test that worker count does not change the table."""
    sequential = tidy_bootstrap(gapped_result, conf_int=True, ci_fn=MockIntervals())
    threaded = tidy_bootstrap(gapped_result, conf_int=True, ci_fn=MockIntervals(), max_workers=4)
    pd.testing.assert_frame_equal(sequential, threaded)


def test_unknown_method_produces_no_output(gapped_result):
    """Test that an unrecognised method fails before any interval work."""
    calls = []

    def recording(index, result, conf_level, method):
        calls.append(index)
        return {}

    with pytest.raises(UnknownMethodError):
        tidy_bootstrap(gapped_result, conf_int=True, conf_method="jackknife", ci_fn=recording)
    assert calls == []


def test_method_ignored_without_conf_int(gapped_result):
    """Test that the method name only matters when intervals are requested."""
    table = tidy_bootstrap(gapped_result, conf_method="jackknife")
    assert "conf.low" not in table.columns


def test_ci_failure_aborts_whole_table():
    """Test that one failing statistic fails the summary."""
    result = BootstrapResult(replicates=[[1.0, 1.0], [2.0, None], [3.0, None]])
    with pytest.raises(CIComputationError) as excinfo:
        tidy_bootstrap(result, conf_int=True, ci_fn=MockIntervals())
    assert excinfo.value.index == 1


def test_single_observation_gives_nan_std_error():
    """Test that degenerate variances stay in the table as NaN."""
    table = tidy_bootstrap(BootstrapResult(replicates=[[1.0, 1.0], [2.0, None], [3.0, None]]))
    assert np.isclose(table.loc[1, "estimate"], 1.0)
    assert np.isnan(table.loc[1, "std.error"])


def test_missing_replicates_raise():
    """Test the missing-data error path."""
    with pytest.raises(MissingDataError):
        tidy_bootstrap(BootstrapResult())


@pytest.mark.parametrize("level", [0.0, -0.5, 1.5])
def test_conf_level_validated(gapped_result, level):
    """Test that confidence levels outside (0, 1] are rejected."""
    with pytest.raises(ValidationError):
        tidy_bootstrap(gapped_result, conf_int=True, conf_level=level, ci_fn=MockIntervals())


def test_conf_int_needs_routine(gapped_result):
    """Test that intervals cannot be requested without a routine."""
    with pytest.raises(ValueError):
        tidy_bootstrap(gapped_result, conf_int=True)


def test_weighted_estimate_uses_weights():
    """Test weighted bias against the plain estimate column."""
    result = BootstrapResult(
        replicates=[1.0, 2.0, 3.0, 4.0, 5.0],
        original=[3.0],
        weighted=True,
        metadata={"weights": [0.0, 0.0, 0.0, 1.0, 1.0]},
    )
    table = tidy_bootstrap(result, moments_fn=MockWeightedMoments())

    assert np.isclose(table.loc[0, "bias"], 1.5)
    assert np.isclose(table.loc[0, "std.error"], 0.5)
    assert np.isclose(table.loc[0, "estimate"], 3.0)


def test_tidy_from_config_uses_backend(gapped_result):
    """Test that the configured backend supplies the routines."""
    config = TidyConfig(**{"tidy": {"conf_int": True, "conf_method": "norm"}, "execution": {"max_workers": 2}})
    table = tidy_from_config(gapped_result, config)
    expected = tidy_bootstrap(gapped_result, conf_int=True, conf_method="norm", ci_fn=MockIntervals())
    pd.testing.assert_frame_equal(table, expected)


def test_tidy_from_config_explicit_routine_wins(gapped_result):
    """Test that routines passed in override the configured backend."""
    config = TidyConfig(**{"tidy": {"conf_int": True}, "routines": {"backend": "missing"}})

    def constant(index, result, conf_level, method):
        return {"percent": (conf_level, 1.0, 2.0, -1.0, 1.0)}

    table = tidy_from_config(gapped_result, config, moments_fn=MockWeightedMoments(), ci_fn=constant)
    assert table["conf.low"].tolist() == [-1.0, -1.0]


@pytest.mark.parametrize("max_workers", [1, 2])
def test_non_mapping_interval_output_aborts(max_workers):
    """Test that a routine returning no intervals fails the summary."""
    result = BootstrapResult(replicates=[[1.0, 2.0], [2.0, 3.0], [3.0, 5.0]])
    with pytest.raises(CIComputationError):
        tidy_bootstrap(
            result, conf_int=True, ci_fn=lambda i, r, c, m: None, max_workers=max_workers
        )
