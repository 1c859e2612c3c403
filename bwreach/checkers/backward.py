"""
Backward Coverability Method

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

from logging import debug, info
from multiprocessing import Queue
from typing import Optional

from bwreach.backward import BackwardSearch
from bwreach.checkers.abstractchecker import AbstractChecker
from bwreach.ptio.ptnet import Marking, PetriNet
from bwreach.ptio.verdict import Verdict


def log_marking(marking: Marking) -> None:
    """ Trace observer: log a popped marking.
    """
    debug("[BACKWARD] Exploring{}".format(marking))


class BackwardReachability(AbstractChecker):
    """ Backward coverability method.

    Attributes
    ----------
    ptnet : PetriNet
        Petri net.
    target : Marking
        Bad marking (all the markings covering it are bad).
    initial : list of Marking
        Initial markings.
    minimize : bool
        Maintain the explored markings as a minimal antichain.
    max_iterations : int, optional
        Iteration limit.
    show_trace : bool
        Log each explored marking.
    search : BackwardSearch, optional
        Last search run.
    """

    def __init__(self, ptnet: PetriNet, target: Marking, initial: list[Marking], minimize: bool = False, max_iterations: Optional[int] = None, show_trace: bool = False) -> None:
        """ Initializer.

        Parameters
        ----------
        ptnet : PetriNet
            Petri net.
        target : Marking
            Bad marking.
        initial : list of Marking
            Initial markings.
        minimize : bool, optional
            Maintain the explored markings as a minimal antichain.
        max_iterations : int, optional
            Iteration limit.
        show_trace : bool, optional
            Log each explored marking.
        """
        # Petri net
        self.ptnet: PetriNet = ptnet

        # Coverability question
        self.target: Marking = target
        self.initial: list[Marking] = initial

        # Search options
        self.minimize: bool = minimize
        self.max_iterations: Optional[int] = max_iterations
        self.show_trace: bool = show_trace

        self.search: Optional[BackwardSearch] = None

    def prove(self, result: Queue[tuple[Verdict, Optional[list[Marking]]]]) -> None:
        """ Prover.

        Parameters
        ----------
        result : Queue of tuple of Verdict, list of Marking
            Queue to exchange the verdict and the witness trace (if any).
        """
        info("[BACKWARD] RUNNING")
        info("[BACKWARD] Target:{}".format(self.target))
        info("[BACKWARD] Firing mode: {}".format(self.ptnet.mode.name))

        self.search = BackwardSearch(self.ptnet, self.target, self.initial, observer=log_marking if self.show_trace else None, max_iterations=self.max_iterations, minimize=self.minimize)
        verdict = self.search.run()

        info("[BACKWARD] Iterations: {} / Expansions: {} / Pruned: {} / Explored: {}".format(self.search.iterations, self.search.expansions, self.search.pruned, len(self.search.explored)))

        trace = None
        if verdict == Verdict.CEX:
            info("[BACKWARD] Covered by initial marking:{}".format(self.search.covering))
            trace = self.search.trace()

        # Put the result in the queue
        result.put((verdict, trace))
