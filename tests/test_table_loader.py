"""
tests/test_table_loader.py - Dataset Loading and Validation Tests

Author: Reading Lifetime Project
License: MIT
"""

import json
import logging

import pytest

from reading_lifetime.life_expectancy import get_remaining_years
from reading_lifetime.table_loader import (
    DEFAULT_TABLE_PATH,
    LifeExpectancyDataError,
    compute_source_hash,
    load_life_expectancy_table,
    parse_life_expectancy_table,
)


class TestBundledDataset:
    """The dataset shipped with the package must always validate."""

    def test_bundled_dataset_loads(self):
        table = load_life_expectancy_table()
        assert table.has_global_fallback
        assert len(table.countries) == 10
        assert {"US", "GB", "JP"} <= set(table.countries)

    def test_every_entry_has_all_genders(self):
        table = load_life_expectancy_table()
        for country in table:
            assert set(table[country]) == {"all", "male", "female"}, \
                f"{country} should carry all, male and female entries"

    def test_female_outlives_male_in_bundled_data(self):
        table = load_life_expectancy_table()
        for country in table:
            for band in ["0-19", "20-39", "40-59", "60-79"]:
                female = table[country]["female"]["remainingYearsByAgeBand"][band]
                male = table[country]["male"]["remainingYearsByAgeBand"][band]
                assert female > male, f"{country} {band}: female {female} <= male {male}"

    def test_lookup_against_bundled_data(self):
        table = load_life_expectancy_table()
        assert get_remaining_years(30, table, "us", "female") == 52.1
        assert get_remaining_years(30, table) == 46.0

    def test_explicit_path(self):
        table = load_life_expectancy_table(DEFAULT_TABLE_PATH)
        assert "global" in table


class TestParsing:

    def test_keys_are_normalized(self, raw_table):
        raw_table["gb"] = raw_table.pop("US")
        raw_table["Global"] = raw_table.pop("global")
        table = parse_life_expectancy_table(raw_table)
        assert table.countries == ("GB",)
        assert table.has_global_fallback

    def test_missing_global_logs_warning(self, raw_table, caplog):
        del raw_table["global"]
        with caplog.at_level(logging.WARNING, logger="reading_lifetime.table_loader"):
            table = parse_life_expectancy_table(raw_table)
        assert not table.has_global_fallback
        assert "default expected age" in caplog.text

    def test_unknown_gender_rejected(self, raw_table):
        raw_table["US"]["other"] = raw_table["US"]["all"]
        with pytest.raises(LifeExpectancyDataError, match="unknown gender"):
            parse_life_expectancy_table(raw_table)

    def test_missing_band_rejected(self, raw_table):
        raw_table["US"]["all"] = {"atBirth": 77.0, "remainingYearsByAgeBand": {"0-19": 60.0}}
        with pytest.raises(LifeExpectancyDataError, match="US/all"):
            parse_life_expectancy_table(raw_table)

    def test_unexpected_band_rejected(self, raw_table):
        bands = dict(raw_table["US"]["all"]["remainingYearsByAgeBand"], **{"80+": 5.0})
        raw_table["US"]["all"] = {"atBirth": 77.0, "remainingYearsByAgeBand": bands}
        with pytest.raises(LifeExpectancyDataError):
            parse_life_expectancy_table(raw_table)

    def test_negative_years_rejected(self, raw_table):
        bands = dict(raw_table["US"]["all"]["remainingYearsByAgeBand"], **{"20-39": -1.0})
        raw_table["US"]["all"] = {"atBirth": 77.0, "remainingYearsByAgeBand": bands}
        with pytest.raises(LifeExpectancyDataError):
            parse_life_expectancy_table(raw_table)

    def test_missing_at_birth_rejected(self, raw_table):
        raw_table["US"]["all"] = {"remainingYearsByAgeBand": raw_table["US"]["all"]["remainingYearsByAgeBand"]}
        with pytest.raises(LifeExpectancyDataError):
            parse_life_expectancy_table(raw_table)

    def test_duplicate_country_rejected(self, raw_table):
        raw_table["us"] = raw_table["US"]
        with pytest.raises(LifeExpectancyDataError, match="duplicate"):
            parse_life_expectancy_table(raw_table)

    @pytest.mark.parametrize("raw", [[], "table", None])
    def test_non_object_rejected(self, raw):
        with pytest.raises(LifeExpectancyDataError):
            parse_life_expectancy_table(raw)

    def test_non_object_record_rejected(self, raw_table):
        raw_table["US"] = [1, 2, 3]
        with pytest.raises(LifeExpectancyDataError, match="US"):
            parse_life_expectancy_table(raw_table)


class TestFileLoading:

    def test_load_from_file(self, tmp_path, raw_table):
        path = tmp_path / "table.json"
        path.write_text(json.dumps(raw_table), encoding="utf-8")
        table = load_life_expectancy_table(path)
        assert get_remaining_years(30, table, "US", "female") == 52.0

    def test_missing_file(self, tmp_path):
        with pytest.raises(LifeExpectancyDataError, match="Cannot read"):
            load_life_expectancy_table(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(LifeExpectancyDataError, match="not valid JSON"):
            load_life_expectancy_table(str(path))

    def test_source_hash_logged(self, tmp_path, raw_table, caplog):
        content = json.dumps(raw_table).encode("utf-8")
        path = tmp_path / "table.json"
        path.write_bytes(content)
        with caplog.at_level(logging.INFO, logger="reading_lifetime.table_loader"):
            load_life_expectancy_table(path)
        assert compute_source_hash(content) in caplog.text

    def test_loader_error_is_value_error(self, tmp_path):
        with pytest.raises(ValueError):
            load_life_expectancy_table(tmp_path / "missing.json")
