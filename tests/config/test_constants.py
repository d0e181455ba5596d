from mortality_resampling.config.constants import (
    ALIVE_DATE_SENTINEL,
    DEFAULT_CONFIDENCE_LEVEL,
    DEFAULT_REPS,
    DIED_LABEL,
    LOW_POWER_GROUP_SIZE,
    MAX_DEGENERATE_REDRAWS,
    MIN_BOOTSTRAP_GROUP_SIZE,
    MIN_RESAMPLE_ROWS,
    SUBSAMPLE_ROWS,
    SURVIVED_LABEL,
)


def test_default_reps_is_positive_int() -> None:
    assert isinstance(DEFAULT_REPS, int) and DEFAULT_REPS > 0


def test_default_level_in_open_unit_interval() -> None:
    assert 0.0 < DEFAULT_CONFIDENCE_LEVEL < 1.0


def test_min_rows_allow_two_groups() -> None:
    assert MIN_RESAMPLE_ROWS >= 2
    assert MIN_BOOTSTRAP_GROUP_SIZE >= 2
    assert LOW_POWER_GROUP_SIZE > MIN_BOOTSTRAP_GROUP_SIZE


def test_redraw_cap_is_positive() -> None:
    assert isinstance(MAX_DEGENERATE_REDRAWS, int) and MAX_DEGENERATE_REDRAWS > 0


def test_subsample_rows_matches_notebook_size() -> None:
    assert SUBSAMPLE_ROWS == 10_000


def test_group_labels_are_distinct() -> None:
    assert DIED_LABEL != SURVIVED_LABEL


def test_alive_sentinel_is_not_a_date() -> None:
    assert ALIVE_DATE_SENTINEL == "9999-99-99"
