"""Tests for response deduplication and sampling."""

import random

import pytest

from survey_cloud.responses import SKIP_RESPONSES, count_responses, normalize_response, sample_responses


def test_counts_normalized_duplicates():
    counts = count_responses(["great product", "great product", "bad fit"])
    assert counts == {"great product": 2, "bad fit": 1}


def test_weight_conservation_skips_blank_boilerplate_and_short():
    raw = [
        "Great product", "  great product  ", "N/A", "", "   ", "ok", None, float("nan"),
        "Bad fit", "no comment", "All good",
    ]
    counts = count_responses(raw)
    assert sum(counts.values()) == 3
    assert counts["great product"] == 2
    assert "n/a" not in counts
    assert "ok" not in counts


def test_every_boilerplate_phrase_is_dropped():
    assert count_responses(sorted(SKIP_RESPONSES)) == {}


def test_keys_keep_first_seen_order():
    counts = count_responses(["zebra stripes", "apple pie", "zebra stripes"])
    assert list(counts) == ["zebra stripes", "apple pie"]


def test_normalize_non_string_is_blank():
    assert normalize_response(12) == ""
    assert normalize_response("  MiXeD Case ") == "mixed case"


def test_sampling_passthrough_under_cap():
    unique = [f"answer {i}" for i in range(10)]
    sampled, ratio = sample_responses(unique, 2000)
    assert sampled == unique
    assert ratio == 1.0


def test_sampling_at_cap_is_passthrough():
    unique = [f"answer {i}" for i in range(50)]
    sampled, ratio = sample_responses(unique, 50)
    assert len(sampled) == 50
    assert ratio == 1.0


def test_sampling_above_cap():
    counts = count_responses([f"distinct response number {i}" for i in range(3000)])
    unique = list(counts)
    sampled, ratio = sample_responses(unique, 2000, random.Random(7))
    assert len(sampled) == 2000
    assert len(set(sampled)) == 2000
    assert set(sampled) <= set(unique)
    assert ratio == pytest.approx(1.5)


def test_sampling_is_deterministic_with_seeded_rng():
    unique = [f"answer {i}" for i in range(100)]
    first, _ = sample_responses(unique, 10, random.Random(3))
    second, _ = sample_responses(unique, 10, random.Random(3))
    assert first == second


def test_sampling_rejects_non_positive_cap():
    with pytest.raises(ValueError):
        sample_responses(["abc"], 0)
