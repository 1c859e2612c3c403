"""
Backward Reachability

Backward coverability for well-structured transition systems: starting
from a bad pattern, predecessors are computed until a pattern covered by
an initial state is found, or until every new pattern is subsumed by an
explored one.

Termination relies on the states being well-quasi-ordered by domination
(e.g. multisets over a finite set of places, Dickson's lemma). Over any
other order the search may diverge, use `max_iterations` or run it through
a `Parallelizer` with a timeout.

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

from abc import ABC, abstractmethod
from logging import debug
from typing import Any, Callable, Generic, Iterator, Optional, TypeVar

from bwreach.ptio.verdict import Verdict

S = TypeVar('S')


class PredecessorBasis(ABC, Generic[S]):
    """ Capability to enumerate the immediate predecessors of a state.
    """

    @abstractmethod
    def pred_basis(self, state: S) -> list[S]:
        """ Predecessor basis.

        Parameters
        ----------
        state : S
            Current state.

        Returns
        -------
        list of S
            Immediate predecessors (duplicates allowed).
        """
        pass


class Antichain(Generic[S]):
    """ Explored states.

    Attributes
    ----------
    states : list of S
        Explored states.
    minimize : bool
        Remove the members dominated by a new state (strict antichain),
        otherwise keep a plain growing list.
    """

    def __init__(self, minimize: bool = False) -> None:
        """ Initializer.

        Parameters
        ----------
        minimize : bool, optional
            Maintain a minimal antichain.
        """
        self.states: list[S] = []
        self.minimize: bool = minimize

    def __len__(self) -> int:
        return len(self.states)

    def __iter__(self) -> Iterator[S]:
        return iter(self.states)

    def covers(self, state: S) -> bool:
        """ Check if some explored state is smaller than or equal to `state`.
        """
        return any(explored <= state for explored in self.states)

    def add(self, state: S) -> None:
        """ Add an explored state.

        Parameters
        ----------
        state : S
            State to add.
        """
        if self.minimize:
            self.states = [explored for explored in self.states if not state <= explored]
        self.states.append(state)


class _Node(Generic[S]):
    """ Worklist entry, linked to the state it is a predecessor of.
    """

    __slots__ = ('state', 'successor')

    def __init__(self, state: S, successor: Optional[_Node[S]] = None) -> None:
        self.state: S = state
        self.successor: Optional[_Node[S]] = successor


def _silent(state: Any) -> None:
    pass


class BackwardSearch(Generic[S]):
    """ Backward coverability search.

    Attributes
    ----------
    ts : PredecessorBasis
        Transition system.
    target : S
        Bad pattern (generator of an upward-closed set).
    initial : list of S
        Initial states.
    observer : callable
        Called once on each state popped from the worklist.
    max_iterations : int, optional
        Maximal number of worklist pops.
    explored : Antichain
        Explored states.
    iterations : int
        Number of states popped from the worklist.
    expansions : int
        Number of predecessor basis computations.
    pruned : int
        Number of states discarded because an explored state is smaller.
    witness : S, optional
        Explored pattern covered by an initial state (if reachable).
    covering : S, optional
        Initial state covering the witness.
    """

    def __init__(self, ts: PredecessorBasis[S], target: S, initial: list[S], observer: Optional[Callable[[S], Any]] = None, max_iterations: Optional[int] = None, minimize: bool = False) -> None:
        """ Initializer.

        Parameters
        ----------
        ts : PredecessorBasis
            Transition system.
        target : S
            Bad pattern.
        initial : list of S
            Initial states.
        observer : callable, optional
            Called on each popped state.
        max_iterations : int, optional
            Maximal number of worklist pops.
        minimize : bool, optional
            Maintain the explored states as a minimal antichain.
        """
        self.ts: PredecessorBasis[S] = ts
        self.target: S = target
        self.initial: list[S] = list(initial)

        self.observer: Callable[[S], Any] = observer if observer is not None else _silent
        self.max_iterations: Optional[int] = max_iterations

        self.explored: Antichain[S] = Antichain(minimize)

        self.iterations: int = 0
        self.expansions: int = 0
        self.pruned: int = 0

        self.witness: Optional[S] = None
        self.covering: Optional[S] = None
        self._witness_node: Optional[_Node[S]] = None

    def covered_by_initial(self, state: S) -> Optional[S]:
        """ Return an initial state greater than or equal to `state`, if any.
        """
        for initial in self.initial:
            if initial >= state:
                return initial
        return None

    def run(self) -> Verdict:
        """ Run the search.

        Returns
        -------
        Verdict
            CEX if the target is coverable, INV if not,
            UNKNOWN if `max_iterations` is reached.
        """
        # Fresh search state, the search can be run again
        self.explored = Antichain(self.explored.minimize)
        self.iterations, self.expansions, self.pruned = 0, 0, 0
        self.witness, self.covering, self._witness_node = None, None, None

        worklist: list[_Node[S]] = [_Node(self.target)]

        while worklist:

            if self.max_iterations is not None and self.iterations >= self.max_iterations:
                debug("[BACKWARD] Iteration limit reached ({})".format(self.max_iterations))
                return Verdict.UNKNOWN

            node = worklist.pop()
            curr = node.state
            self.iterations += 1
            self.observer(curr)

            # Subsumed by an explored state
            if self.explored.covers(curr):
                self.pruned += 1
                continue

            covering = self.covered_by_initial(curr)
            if covering is not None:
                self.witness, self.covering, self._witness_node = curr, covering, node
                return Verdict.CEX

            self.expansions += 1
            worklist.extend(_Node(pred, node) for pred in self.ts.pred_basis(curr))
            self.explored.add(curr)

        return Verdict.INV

    def trace(self) -> list[S]:
        """ Patterns from the witness back to the target.

        Returns
        -------
        list of S
            Empty if no witness has been found.
        """
        trace = []

        node = self._witness_node
        while node is not None:
            trace.append(node.state)
            node = node.successor

        return trace


def is_backward_reachable(ts: PredecessorBasis[S], target: S, initial: list[S], observer: Optional[Callable[[S], Any]] = None) -> bool:
    """ Check if `target` is coverable from some initial state.

    Parameters
    ----------
    ts : PredecessorBasis
        Transition system.
    target : S
        Bad pattern.
    initial : list of S
        Initial states.
    observer : callable, optional
        Called on each popped state.

    Returns
    -------
    bool
        True if some initial state covers a backward-reachable pattern.
    """
    return BackwardSearch(ts, target, initial, observer=observer).run() is Verdict.CEX
