"""Tests for the RMD divisor lookup."""

import pytest

from rothledger.engine.rmd_tables import rmd_divisor, rmd_amount


def test_no_rmd_before_73():
    assert rmd_divisor(72) is None
    assert rmd_amount(72, 1_000_000) == 0.0


def test_first_rmd_year():
    assert rmd_divisor(73) == 26.5
    assert rmd_amount(73, 2_650_000) == pytest.approx(100_000)


def test_ages_beyond_table_reuse_last_divisor():
    assert rmd_divisor(95) == rmd_divisor(90) == 12.2


def test_empty_account_has_no_rmd():
    assert rmd_amount(80, 0) == 0.0
