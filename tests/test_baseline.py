"""Tests for baseline persistence."""

import json

import pytest

from gsbench.experiments.baseline import (
    BaselineLoadError,
    load_baseline,
    save_baseline,
    stats_from_document,
)
from gsbench.models.stats import STAT_FIELDS


def _record(**overrides):
    record = {name: 1.0 for name in STAT_FIELDS}
    record["dim"] = 10
    record.update(overrides)
    return record


class TestRoundTrip:
    def test_save_then_load_is_identical(self, sample_stats, tmp_path):
        path = save_baseline(sample_stats, tmp_path / "nested" / "baseline.json")
        loaded = load_baseline(path)

        assert loaded.to_dict() == sample_stats.to_dict()
        assert loaded.names() == ["Ackley", "SixHumpCamel"]
        assert [p.dim for p in loaded.get("Ackley")] == [50, 10, 100]

    def test_floats_are_exact(self, sample_stats, tmp_path):
        path = save_baseline(sample_stats, tmp_path / "baseline.json")
        original = sample_stats.get("Ackley")[0]
        loaded = load_baseline(path).get("Ackley")[0]
        assert loaded.avg_runtime_sec == original.avg_runtime_sec
        assert loaded.avg_best_obj == original.avg_best_obj

    def test_document_layout(self, sample_stats, tmp_path):
        path = save_baseline(sample_stats, tmp_path / "baseline.json")
        document = json.loads(path.read_text())
        assert set(document) == {"data"}
        assert set(document["data"]["Ackley"][0]) == set(STAT_FIELDS)

    def test_integral_float_dim_is_accepted(self):
        stats = stats_from_document({"data": {"Levy": [_record(dim=10.0)]}})
        point = stats.get("Levy")[0]
        assert point.dim == 10
        assert isinstance(point.dim, int)


class TestLoadErrors:
    def test_missing_file(self, tmp_path):
        with pytest.raises(BaselineLoadError, match="not found"):
            load_baseline(tmp_path / "missing.json")

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "baseline.json"
        path.write_text('{"data": {')
        with pytest.raises(BaselineLoadError):
            load_baseline(path)

    @pytest.mark.parametrize("document", [
        [],
        {},
        {"data": []},
        {"data": {"Ackley": {"dim": 10}}},
        {"data": {"Ackley": ["not a record"]}},
    ])
    def test_wrong_structure(self, document):
        with pytest.raises(BaselineLoadError):
            stats_from_document(document)

    def test_missing_field(self):
        record = _record()
        del record["avg_best_obj"]
        with pytest.raises(BaselineLoadError, match="avg_best_obj"):
            stats_from_document({"data": {"Ackley": [record]}})

    def test_unknown_field(self):
        with pytest.raises(BaselineLoadError, match="median_runtime"):
            stats_from_document({"data": {"Ackley": [_record(median_runtime=1.0)]}})

    @pytest.mark.parametrize("value", ["fast", None, True, [1.0]])
    def test_non_numeric_value(self, value):
        with pytest.raises(BaselineLoadError, match="avg_runtime_sec"):
            stats_from_document({"data": {"Ackley": [_record(avg_runtime_sec=value)]}})

    def test_fractional_dim(self):
        with pytest.raises(BaselineLoadError, match="dim"):
            stats_from_document({"data": {"Ackley": [_record(dim=10.5)]}})

    def test_error_names_the_source(self, tmp_path):
        path = tmp_path / "baseline.json"
        path.write_text(json.dumps({"data": {"Ackley": [_record(dim="ten")]}}))
        with pytest.raises(BaselineLoadError, match="baseline.json"):
            load_baseline(path)
