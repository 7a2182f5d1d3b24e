from unittest import mock

import pytest

from blocklu.timing import KernelTimes, Stopwatch


def test_stopwatch_measures_difference():
    sw = Stopwatch()
    with mock.patch("blocklu.timing.time.perf_counter", side_effect=[10.0, 12.5]):
        sw.start()
        elapsed = sw.stop()
    assert elapsed == pytest.approx(2.5)
    assert sw.elapsed == elapsed


def test_stopwatch_requires_start():
    with pytest.raises(RuntimeError):
        Stopwatch().stop()


def test_stopwatch_context_manager():
    with Stopwatch() as sw:
        sum(range(1000))
    assert sw.elapsed >= 0.0


def test_summary_fields_and_total():
    kt = KernelTimes(getrf=1.0, tstrf=2.0, gessm=3.0, ssssm=4.0, calculate_wait=0.5, cuda_memcpy=0.25)
    parts = kt.summary(7).split("\t")
    assert len(parts) == 8
    assert parts[0] == "7"
    assert float(parts[1]) == pytest.approx(kt.calculate_wait)
    assert float(parts[6]) == pytest.approx(kt.getrf + kt.tstrf + kt.gessm + kt.ssssm)
    assert float(parts[7]) == pytest.approx(kt.cuda_memcpy)
    assert parts[1] == "0.50000"


def test_reset_zeroes_everything():
    kt = KernelTimes(getrf=1.0, ssssm=2.0, wait=3.0, transpose=4.0)
    kt.reset()
    assert kt == KernelTimes()
    assert all(float(v) == 0.0 for v in kt.summary(0).split("\t")[1:])