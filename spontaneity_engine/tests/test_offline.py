import random

from spontaneity_engine.recommendations.models import RealtimeStatus
from spontaneity_engine.recommendations.offline import TEMPLATES, generate_offline
from spontaneity_engine.recommendations.text import (
    contains_leakage,
    count_marker_blocks,
    extract_context,
    strip_context_markers,
)


# ── Text extraction ──────────────────────────────────────────────────────


class TestExtractContext:
    def test_labelled_fragments(self):
        ctx = extract_context("Vibe: relaxed, Time: 2 hours, Location: nearby")
        assert ctx.vibe == "relaxed"
        assert ctx.time == "2 hours"
        assert ctx.location == "nearby"

    def test_loose_patterns(self):
        ctx = extract_context("Something chill for 90 minutes in Washington DC")
        assert ctx.location == "Washington DC"
        assert ctx.time == "90 minutes"
        assert ctx.vibe is None

    def test_context_block_is_ignored(self):
        ctx = extract_context("Location: Denver [Context: Role=Local, Mood=Tired]")
        assert ctx.location == "Denver"

    def test_empty_input(self):
        ctx = extract_context("")
        assert (ctx.location, ctx.time, ctx.vibe) == (None, None, None)


class TestLeakageMarkers:
    def test_detects_markers(self):
        assert contains_leakage("Kayak Tour [Context: Role=Traveler]")
        assert contains_leakage("Role=Traveler Sunset Walk")
        assert contains_leakage("[Mood: tired] Coffee")
        assert not contains_leakage("Sunset Walk at the Pier")
        assert not contains_leakage(None)

    def test_strip_markers(self):
        assert strip_context_markers("Kayak Tour [Context: Role=Traveler, Mood=Happy]") == "Kayak Tour"
        assert strip_context_markers("Role=Traveler Sunset Walk") == "Sunset Walk"
        assert strip_context_markers("[Context: Role=Traveler]") == ""

    def test_count_marker_blocks(self):
        assert count_marker_blocks("[Context: Role=A] [Mood: tired] Walk") == 2
        assert count_marker_blocks("Walk [Context: Role=A]") == 1
        assert count_marker_blocks("Walk [with a friend]") == 0


# ── Offline generator ────────────────────────────────────────────────────


def test_offline_defaults_when_nothing_extracted():
    candidate = generate_offline("surprise me", rng=random.Random(1))
    assert candidate.title
    assert candidate.location == "nearby"
    assert candidate.duration == "a few hours"
    assert candidate.vibe == "spontaneous"
    assert candidate.status is RealtimeStatus.open
    assert not candidate.unavailable


def test_offline_interpolates_extracted_fragments():
    candidate = generate_offline(
        "Vibe: creative, Time: 3 hours, Location: Austin", rng=random.Random(0),
    )
    assert "Austin" in candidate.title
    assert candidate.title.startswith("Creative")
    assert candidate.duration == "3 hours"
    assert all(a.duration == "3 hours" for a in candidate.activities)


def test_offline_is_deterministic_with_seeded_rng():
    text = "Vibe: relaxed, Time: 2 hours, Location: Denver"
    first = generate_offline(text, rng=random.Random(42))
    second = generate_offline(text, rng=random.Random(42))
    assert first == second


def test_offline_covers_every_template():
    rng = random.Random(7)
    titles = {generate_offline("Vibe: calm", rng=rng).title for _ in range(200)}
    assert len(titles) == len(TEMPLATES)


def test_offline_keeps_recommendation_id_and_never_leaks():
    candidate = generate_offline(
        "Vibe: social [Context: Role=Traveler, Group=4]",
        rng=random.Random(3),
        recommendation_id="rec_1",
    )
    assert candidate.recommendation_id == "rec_1"
    assert not contains_leakage(candidate.title)
    assert not contains_leakage(candidate.description)


def test_offline_handles_empty_input():
    candidate = generate_offline("", rng=random.Random(5))
    assert candidate.title.strip()
