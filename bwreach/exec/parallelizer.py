"""
Parallelizer

Run checkers in separate processes, with a time limit.

This file is part of BWReach.

BWReach is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

BWReach is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU General Public License for more details.

You should have received a copy of the GNU General Public License
along with BWReach. If not, see <https://www.gnu.org/licenses/>.
"""

from __future__ import annotations

__author__ = "BWReach developers"
__license__ = "GPLv3"
__version__ = "1.0.0"

import logging as log
from multiprocessing import Process, Queue
from time import time
from typing import Any, Optional

from bwreach.checkers.abstractchecker import AbstractChecker
from bwreach.exec.utils import KILL, send_signal_pids
from bwreach.ptio.verdict import Verdict


class Parallelizer:
    """ Helper to manage methods in parallel.

    Attributes
    ----------
    target_id : str
        Textual form of the target.
    methods : list of str
        Method names.
    checkers : list of AbstractChecker
        Checkers corresponding to the methods.
    show_techniques : bool
        Show techniques flag.
    show_time : bool
        Show time flag.
    show_model : bool
        Show model flag.
    log_level : int
        Logging level propagated to the processes.
    processes : list of Process
        List of processes corresponding to the methods.
    computation_time : float
        Computation time.
    results : list of Queue of tuple of Verdict, Any
        List of Queue to store the verdicts corresponding to the methods.
    """

    def __init__(self, target_id: str, methods: list[str], checkers: list[AbstractChecker], show_techniques: bool = False, show_time: bool = False, show_model: bool = False) -> None:
        """ Initializer.

        Parameters
        ----------
        target_id : str
            Textual form of the target.
        methods : list of str
            Method names.
        checkers : list of AbstractChecker
            Checkers corresponding to the methods.
        show_techniques : bool, optional
            Show techniques flag.
        show_time : bool, optional
            Show time flag.
        show_model : bool, optional
            Show model flag.
        """
        if len(methods) != len(checkers):
            raise ValueError("Each method requires exactly one checker")

        self.target_id: str = target_id

        # Methods
        self.methods: list[str] = methods
        self.checkers: list[AbstractChecker] = checkers

        # Output flags
        self.show_techniques: bool = show_techniques
        self.show_time: bool = show_time
        self.show_model: bool = show_model

        # Logging level of the processes
        self.log_level: int = log.getLogger().getEffectiveLevel()

        # Process information
        self.processes: list[Process] = []
        self.computation_time: float = 0

        # Create queues to store the results
        self.results: list[Queue[tuple[Verdict, Any]]] = [Queue() for _ in methods]

    def __getstate__(self):
        # Capture what is normally pickled
        state = self.__dict__.copy()

        # Remove unpicklable variable
        state['processes'] = None
        return state

    def prove(self, checker: AbstractChecker, result: Queue[tuple[Verdict, Any]]) -> None:
        """ Prover runner (inside the process).

        Parameters
        ----------
        checker : AbstractChecker
            Method used for proving.
        result : Queue of tuple of Verdict, Any
            Queue to exchange the verdict.
        """
        # No effect if the logging configuration has been inherited
        log.basicConfig(format="%(message)s", level=self.log_level)

        checker.prove(result)

    def run(self, timeout: Optional[float] = None) -> Verdict:
        """ Run analysis in parallel.

        Parameters
        ----------
        timeout : float, optional
            Time limit (no limit if None).

        Returns
        -------
        Verdict
            Verdict of the first method that finished, UNKNOWN if the time limit is reached.
        """
        # Exit if no methods to run
        if not self.methods:
            return Verdict.UNKNOWN

        # Create and start processes
        for checker, result in zip(self.checkers, self.results):
            proc = Process(target=self.prove, args=(checker, result,))
            proc.start()
            self.processes.append(proc)

        return self.handle(timeout)

    def handle(self, timeout: Optional[float]) -> Verdict:
        """ Handle the methods.

        Parameters
        ----------
        timeout : float, optional
            Time limit.

        Returns
        -------
        Verdict
            Verdict of the first method that finished, UNKNOWN if the time limit is reached.
        """
        # Get the starting time
        start_time = time()

        # Wait for the first process to deliver a verdict
        while True:
            remaining = None if timeout is None else max(0., timeout - (time() - start_time))
            for proc in self.processes:
                proc.join(timeout=0.05 if remaining is None else min(0.05, remaining))
            if any(not result.empty() for result in self.results):
                break
            if all(not proc.is_alive() for proc in self.processes):
                break
            if remaining is not None and remaining <= 0:
                break

        # Get the computation time
        self.computation_time += time() - start_time

        verdict, model, method = Verdict.UNKNOWN, None, None

        # Return result data if one method finished
        for result_method, method_name in zip(self.results, self.methods):
            if not result_method.empty():
                verdict, model = result_method.get()
                method = method_name
                break

        output = "TARGET{} {}".format(self.target_id, verdict.answer())

        # Show techniques
        if self.show_techniques and method is not None:
            output += " TECHNIQUES {}".format(method)

        # Show computation time
        if self.show_time:
            output += " TIME {}".format(self.computation_time)

        print(output)

        # Show model
        if self.show_model and model is not None:
            print("# Trace:")
            for marking in model:
                print("#{}".format(marking))

        self.stop()

        return verdict

    def stop(self) -> None:
        """ Stop the methods.
        """
        send_signal_pids([proc.pid for proc in self.processes], KILL)
        for proc in self.processes:
            proc.join()
