"""Tests for the shared progress channel and its observer loop."""

from __future__ import annotations

import threading

import pytest
from hypothesis import given
from hypothesis.strategies import floats, lists

from progress import Progress, ProgressSpan, poll


class TestProgress:

    def test_starts_at_zero(self):
        progress = Progress()
        assert progress.value == 0.0
        assert not progress.done

    def test_report_and_finish(self):
        progress = Progress()
        progress.report(0.25)
        assert progress.value == 0.25
        progress.finish()
        assert progress.value == 1.0
        assert progress.done

    @pytest.mark.parametrize("reported, expected", [(-0.5, 0.0), (1.5, 1.0), (0.5, 0.5)])
    def test_values_are_clamped(self, reported, expected):
        progress = Progress()
        progress.report(reported)
        assert progress.value == expected

    def test_lower_values_are_ignored(self):
        progress = Progress()
        progress.report(0.6)
        progress.report(0.3)
        assert progress.value == 0.6

    @given(values=lists(floats(min_value=-2.0, max_value=2.0), max_size=30))
    def test_never_goes_backwards(self, values):
        progress = Progress()
        seen = []
        for v in values:
            progress.report(v)
            seen.append(progress.value)
        assert seen == sorted(seen)
        assert all(0.0 <= v <= 1.0 for v in seen)

    def test_concurrent_writers_keep_the_maximum(self):
        progress = Progress()

        def writer(offset: int) -> None:
            for i in range(200):
                progress.report((i * 4 + offset) / 1000)

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert progress.value == pytest.approx(799 / 1000)


class TestProgressSpan:

    def test_maps_onto_parent_slice(self, recording_progress):
        span = recording_progress.span(0.5, 0.75)
        span.report(0.5)
        assert recording_progress.value == pytest.approx(0.625)
        span.finish()
        assert recording_progress.value == pytest.approx(0.75)

    def test_nested_spans(self, recording_progress):
        inner = recording_progress.span(0.0, 0.5).span(0.5, 1.0)
        inner.report(0.5)
        assert recording_progress.value == pytest.approx(0.375)

    def test_span_clamps_its_input(self, recording_progress):
        span = recording_progress.span(0.2, 0.4)
        span.report(5.0)
        assert recording_progress.value == pytest.approx(0.4)

    @pytest.mark.parametrize("start, stop", [(-0.1, 0.5), (0.6, 0.5), (0.5, 1.1)])
    def test_invalid_bounds(self, start, stop):
        with pytest.raises(ValueError):
            ProgressSpan(Progress(), start, stop)


class TestPoll:

    def test_returns_after_rendering_completion(self):
        progress = Progress()
        progress.finish()
        rendered = []
        poll(progress, rendered.append, interval=0.001)
        assert rendered == [1.0]

    def test_observer_thread_sees_final_value(self):
        progress = Progress()
        rendered = []
        observer = threading.Thread(
            target=poll, args=(progress, rendered.append, 0.001), daemon=True
        )
        observer.start()
        for i in range(1, 50):
            progress.report(i / 50)
        progress.finish()
        observer.join(timeout=5)

        assert not observer.is_alive()
        assert rendered[-1] == 1.0
        assert rendered == sorted(rendered)
