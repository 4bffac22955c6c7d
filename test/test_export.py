import json
import math

import pytest

from analysis.bursts import calculate_rates, summarize
from analysis.export import burst_to_dict, dumps, result_to_dict, write_json
from analysis.models import AnalysisResult, Summary
from analysis.settings import AnalysisSettings
from shared.models import Burst


def _result(bursts=(), peaks=()):
    stats = calculate_rates(bursts)
    return AnalysisResult(
        audio_duration=3.0,
        sample_rate=44100,
        parameters=AnalysisSettings(),
        summary=summarize(stats),
        bursts=stats,
        peaks=tuple(peaks),
        input_file="clip.wav",
    )


def test_document_layout():
    result = _result([Burst.from_times([0.0, 0.1, 0.2, 0.3, 0.4])], peaks=[0, 4410, 8820, 13230, 17640])
    doc = result_to_dict(result)
    assert list(doc) == ["inputFile", "audioDuration", "sampleRate", "parameters", "summary", "bursts", "peaks"]
    assert doc["inputFile"] == "clip.wav"
    assert doc["parameters"]["minBurstCount"] == 5
    assert doc["summary"]["totalShots"] == 5
    assert doc["summary"]["overallRateRpm"] == pytest.approx(600.0)
    burst = doc["bursts"][0]
    assert burst["burstNumber"] == 1
    assert burst["numShots"] == 5
    assert burst["rateRpm"] == pytest.approx(600.0)
    assert burst["shotTimes"] == [0.0, 0.1, 0.2, 0.3, 0.4]
    assert doc["peaks"] == [0, 4410, 8820, 13230, 17640]


def test_empty_result_serializes_zero_summary():
    doc = json.loads(dumps(_result()))
    assert doc["bursts"] == []
    assert doc["peaks"] == []
    assert all(value == 0 for value in doc["summary"].values())


def test_infinite_interval_sentinels_become_null():
    stats = calculate_rates([Burst.from_times([1.0])])[0]
    assert math.isinf(stats.min_interval)
    doc = burst_to_dict(stats)
    assert doc["minInterval"] is None
    assert doc["maxInterval"] is None
    assert doc["meanInterval"] == 0.0
    # Strict JSON encoding must succeed
    json.loads(dumps(_result([Burst.from_times([1.0])])))


def test_write_json(tmp_path):
    target = write_json(_result(), tmp_path / "rof_results.json")
    assert target.exists()
    doc = json.loads(target.read_text(encoding="utf-8"))
    assert doc["sampleRate"] == 44100
    assert doc["summary"]["totalBursts"] == Summary().total_bursts
    assert target.read_text(encoding="utf-8").endswith("}\n")
