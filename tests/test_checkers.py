"""Tests for the backward checker and the parallelizer.

Tests cover:
  - Verdict and witness trace exchanged through the result queue
  - Logging of the method
  - Running checkers in separate processes, with and without time limit
  - Killing worker processes
"""

from __future__ import annotations

import logging
import os
import queue
from multiprocessing import Process
from time import sleep

import pytest

from bwreach.checkers.abstractchecker import AbstractChecker
from bwreach.checkers.backward import BackwardReachability
from bwreach.exec.parallelizer import Parallelizer
from bwreach.exec.utils import KILL, send_signal_pids
from bwreach.models import lockless, mutex
from bwreach.ptio.verdict import Verdict


class _Stalling(AbstractChecker):
    """Checker that never concludes."""

    def prove(self, result):
        while True:
            sleep(0.1)


# ── Test: Backward checker ───────────────────────────────────────────────


class TestBackwardReachability:
    def test_safe_net(self):
        ptnet, initial, target = mutex()
        result = queue.Queue()
        BackwardReachability(ptnet, target, initial).prove(result)
        verdict, trace = result.get_nowait()
        assert verdict is Verdict.INV
        assert trace is None

    def test_unsafe_net_with_trace(self):
        ptnet, initial, target = lockless()
        result = queue.Queue()
        checker = BackwardReachability(ptnet, target, initial, minimize=True)
        checker.prove(result)
        verdict, trace = result.get_nowait()
        assert verdict is Verdict.CEX
        assert trace[-1] == target
        assert any(marking >= trace[0] for marking in initial)
        assert checker.search.explored.minimize

    def test_iteration_limit(self):
        ptnet, initial, target = mutex()
        result = queue.Queue()
        BackwardReachability(ptnet, target, initial, max_iterations=1).prove(result)
        assert result.get_nowait()[0] is Verdict.UNKNOWN

    def test_logging(self, caplog):
        ptnet, initial, target = mutex()
        with caplog.at_level(logging.DEBUG):
            BackwardReachability(ptnet, target, initial, show_trace=True).prove(queue.Queue())
        assert "[BACKWARD] RUNNING" in caplog.text
        assert "[BACKWARD] Exploring Current(2)" in caplog.text

    def test_no_trace_logging_by_default(self, caplog):
        ptnet, initial, target = mutex()
        with caplog.at_level(logging.DEBUG):
            BackwardReachability(ptnet, target, initial).prove(queue.Queue())
        assert "Exploring" not in caplog.text


# ── Test: Parallelizer ───────────────────────────────────────────────────


class TestParallelizer:
    def test_run_safe(self, capsys):
        ptnet, initial, target = mutex()
        parallelizer = Parallelizer(str(target), ['BACKWARD'], [BackwardReachability(ptnet, target, initial)])
        assert parallelizer.run(timeout=60) is Verdict.INV
        assert capsys.readouterr().out.strip() == "TARGET Current(2) FALSE"

    def test_run_unsafe_show_model(self, capsys):
        ptnet, initial, target = lockless()
        checkers = [BackwardReachability(ptnet, target, initial), BackwardReachability(ptnet, target, initial, minimize=True)]
        parallelizer = Parallelizer(str(target), ['BACKWARD', 'BACKWARD-ANTICHAIN'], checkers, show_techniques=True, show_model=True)
        assert parallelizer.run() is Verdict.CEX
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].startswith("TARGET Current(2) TRUE TECHNIQUES BACKWARD")
        assert lines[1] == "# Trace:"
        assert lines[-1] == "# Current(2)"

    def test_timeout_unknown(self, capsys):
        parallelizer = Parallelizer(" Current(2)", ['STALLING'], [_Stalling()], show_time=True)
        assert parallelizer.run(timeout=0.5) is Verdict.UNKNOWN
        assert capsys.readouterr().out.startswith("TARGET Current(2) UNKNOWN TIME ")
        assert all(not proc.is_alive() for proc in parallelizer.processes)

    def test_no_methods(self):
        assert Parallelizer("", [], []).run() is Verdict.UNKNOWN

    def test_methods_checkers_mismatch(self):
        with pytest.raises(ValueError):
            Parallelizer("", ['BACKWARD'], [])


# ── Test: Signals ────────────────────────────────────────────────────────


class TestSignals:
    def test_skip_current_and_unstarted(self):
        send_signal_pids([None, os.getpid()], KILL)

    def test_kill_process(self):
        proc = Process(target=sleep, args=(60,))
        proc.start()
        send_signal_pids([proc.pid], KILL)
        proc.join(timeout=10)
        assert not proc.is_alive()
        assert proc.exitcode == -KILL
