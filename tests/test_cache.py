"""Tests for the immutable result cache."""

import logging

import pytest

from karps._cache import ResultCache, UpdatePolicy
from karps._path import GlobalPath
from karps._result import Done, Failed, Running, Scheduled

PA = GlobalPath.from_parts("s", "c", "a")
PB = GlobalPath.from_parts("s", "c", "b")


class TestLookups:
    def test_empty_cache(self) -> None:
        cache = ResultCache()
        assert cache.status(PA) is None
        assert cache.final_result(PA) is None
        assert len(cache) == 0

    def test_done_then_final_result(self) -> None:
        cache = ResultCache().update([(PA, Done("X"))])
        assert cache.final_result(PA) == "X"
        assert cache.final_result(PB) is None

    @pytest.mark.parametrize("result", [Scheduled(), Running(), Failed(RuntimeError("boom"))])
    def test_final_result_absent_unless_done(self, result: object) -> None:
        cache = ResultCache().update([(PA, result)])  # type: ignore[list-item]
        assert cache.final_result(PA) is None
        assert cache.status(PA) == result

    def test_status_distinguishes_never_reported(self) -> None:
        cache = ResultCache().update([(PA, Scheduled())])
        assert cache.status(PA) == Scheduled()
        assert cache.status(PB) is None

    def test_results_for(self) -> None:
        cache = ResultCache().update([(PA, Running())])
        assert cache.results_for([PA, PB]) == [(PA, Running()), (PB, None)]

    def test_mapping_helpers(self) -> None:
        cache = ResultCache().update([(PA, Running()), (PB, Done(1))])
        assert PA in cache
        assert cache.paths() == [PA, PB]
        assert list(cache) == [PA, PB]
        assert cache.items() == [(PA, Running()), (PB, Done(1))]


class TestUpdate:
    def test_does_not_mutate_receiver(self) -> None:
        cache = ResultCache()
        updated = cache.update([(PA, Done(1))])
        assert cache.status(PA) is None
        assert updated.status(PA) == Done(1)
        assert updated is not cache

    def test_later_entry_in_batch_wins(self) -> None:
        cache = ResultCache().update([(PA, Running()), (PA, Done(2)), (PB, Scheduled())])
        assert cache.status(PA) == Done(2)
        assert cache.status(PB) == Scheduled()

    def test_all_entries_of_batch_applied(self) -> None:
        cache = ResultCache().update([(PA, Done(1)), (PB, Done(2))])
        assert cache.final_result(PA) == 1
        assert cache.final_result(PB) == 2

    def test_sequential(self) -> None:
        base = ResultCache().update([(PA, Scheduled())])
        x = (PA, Running())
        y = (PB, Done(3))
        assert base.update([x, y]) == base.update([x]).update([y])

    def test_sequential_same_path(self) -> None:
        x = (PA, Done(1))
        y = (PA, Failed("late failure"))
        assert ResultCache().update([x, y]) == ResultCache().update([x]).update([y])

    def test_empty_batch(self) -> None:
        cache = ResultCache().update([(PA, Done(1))])
        assert cache.update([]) == cache

    def test_overwrite_allows_regression(self) -> None:
        cache = ResultCache().update([(PA, Done(1))]).update([(PA, Running())])
        assert cache.status(PA) == Running()
        assert cache.final_result(PA) is None

    def test_monotonic_ignores_regression(self, caplog: pytest.LogCaptureFixture) -> None:
        cache = ResultCache().update([(PA, Failed("x"))])
        with caplog.at_level(logging.WARNING, logger="karps._cache"):
            cache = cache.update([(PA, Scheduled()), (PB, Running())], UpdatePolicy.MONOTONIC)
        assert cache.status(PA) == Failed("x")
        assert cache.status(PB) == Running()
        assert "Ignoring result" in caplog.text

    def test_monotonic_allows_terminal_replacement(self) -> None:
        cache = ResultCache().update([(PA, Done(1))])
        cache = cache.update([(PA, Done(2))], UpdatePolicy.MONOTONIC)
        assert cache.final_result(PA) == 2

    def test_monotonic_allows_progress(self) -> None:
        cache = ResultCache().update(
            [(PA, Scheduled()), (PA, Running()), (PA, Done(1))],
            UpdatePolicy.MONOTONIC,
        )
        assert cache.final_result(PA) == 1

    def test_each_update_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="karps._cache"):
            ResultCache().update([(PA, Running()), (PB, Done(1))])
        assert f"New result for {PA}" in caplog.text
        assert f"New result for {PB}" in caplog.text


class TestEquality:
    def test_equal_by_content(self) -> None:
        assert ResultCache({PA: Done(1)}) == ResultCache().update([(PA, Done(1))])
        assert ResultCache({PA: Done(1)}) != ResultCache({PA: Done(2)})

    def test_not_equal_to_other_types(self) -> None:
        assert ResultCache() != {}

    def test_constructor_copies_input(self) -> None:
        results = {PA: Done(1)}
        cache = ResultCache(results)
        results[PB] = Done(2)
        assert PB not in cache
