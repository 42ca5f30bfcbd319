# -*- coding: utf-8 -*-
"""
Tests for core.activity - busy/idle tracking of backend operations
"""

import random

import pytest

from orangefish.core.activity import ActivityCounter


def _recording_counter():
    counter = ActivityCounter()
    transitions = []
    counter.subscribe(transitions.append)
    return counter, transitions


class TestActivityCounter:

    def test_starts_idle(self):
        counter = ActivityCounter()
        assert counter.count == 0
        assert counter.is_busy is False

    def test_busy_only_on_first_start(self):
        counter, transitions = _recording_counter()
        counter.start()
        counter.start()
        assert counter.count == 2
        assert transitions == [True]

    def test_idle_only_when_last_operation_ends(self):
        counter, transitions = _recording_counter()
        counter.start()
        counter.start()
        counter.end()
        assert transitions == [True]
        counter.end()
        assert transitions == [True, False]
        assert counter.is_busy is False

    def test_three_starts_two_ends_stays_busy(self):
        counter, transitions = _recording_counter()
        for _ in range(3):
            counter.start()
        counter.end()
        counter.end()
        assert counter.count == 1
        assert transitions == [True]

    def test_unmatched_end_is_absorbed(self):
        counter, transitions = _recording_counter()
        counter.end()
        assert counter.count == 0
        assert transitions == []

    def test_extra_end_then_start_still_signals_busy(self):
        counter, transitions = _recording_counter()
        counter.start()
        counter.end()
        counter.end()
        counter.start()
        assert counter.count == 1
        assert transitions == [True, False, True]

    def test_unsubscribe(self):
        counter, transitions = _recording_counter()
        counter.unsubscribe(transitions.append)
        counter.start()
        assert transitions == []

    def test_subscribe_twice_notifies_once(self):
        counter, transitions = _recording_counter()
        counter.subscribe(transitions.append)
        counter.start()
        assert transitions == [True]

    def test_failing_observer_does_not_break_others(self):
        counter, transitions = _recording_counter()

        def broken(busy):
            raise RuntimeError("boom")

        counter.subscribe(broken)
        counter.start()
        assert transitions == [True]
        assert counter.count == 1

    def test_reset_releases_everything_once(self):
        counter, transitions = _recording_counter()
        counter.start()
        counter.start()
        counter.reset()
        assert counter.count == 0
        assert transitions == [True, False]
        counter.end()
        assert transitions == [True, False]

    def test_reset_when_idle_is_silent(self):
        counter, transitions = _recording_counter()
        counter.reset()
        assert transitions == []


def _replay(sequence):
    """Run a string of 's' (start) and 'e' (end) against a fresh counter."""
    counter, transitions = _recording_counter()
    expected_count, expected_transitions = 0, []
    for step in sequence:
        if step == "s":
            counter.start()
            expected_count += 1
            if expected_count == 1:
                expected_transitions.append(True)
        else:
            counter.end()
            if expected_count > 0:
                expected_count -= 1
                if expected_count == 0:
                    expected_transitions.append(False)
        assert counter.count == expected_count
        assert counter.is_busy == (expected_count > 0)
    return transitions, expected_transitions


class TestInterleavings:

    @pytest.mark.parametrize(
        "sequence",
        ["", "e", "eee", "se", "see", "ssee", "sese", "eess", "sseeese", "esesee", "ssseeseeee", "seesseseee"],
    )
    def test_listed_sequences(self, sequence):
        transitions, expected = _replay(sequence)
        assert transitions == expected

    @pytest.mark.parametrize("seed", range(25))
    def test_random_sequences(self, seed):
        rng = random.Random(seed)
        sequence = "".join(rng.choice("se") for _ in range(rng.randint(1, 60)))
        transitions, expected = _replay(sequence)
        assert transitions == expected
        # Strictly alternating, starting with busy: one idle signal per return to zero
        assert transitions == [i % 2 == 0 for i in range(len(transitions))]
