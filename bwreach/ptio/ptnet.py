"""
Petri Net Module

Transitions are pairs of multisets of places (inputs, outputs), markings
are multisets of places.

Notation used by the command line (same arcs as the .net format):
    marking:     Lock Waiting*2
    transition:  get_lock: Lock Waiting -> Current

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

from enum import Enum
from re import fullmatch, split
from typing import Iterable, Optional

from bwreach.backward import PredecessorBasis
from bwreach.ptio.multiset import Multiset

Marking = Multiset[str]


class FiringMode(Enum):
    """ Firing semantics.

        Note
        ----
        TRUNCATING -> firing is total, missing tokens are silently ignored
                      (over-approximation)
        STRICT -> firing requires the transition to be enabled
    """
    TRUNCATING = 1
    STRICT = 2


class Transition:
    """ Transition.

    Attributes
    ----------
    id : str, optional
        An identifier.
    inputs : Multiset
        Pre vector (consumed tokens).
    outputs : Multiset
        Post vector (produced tokens).
    """

    def __init__(self, inputs: Multiset, outputs: Multiset, transition_id: Optional[str] = None) -> None:
        """ Initializer.

        Parameters
        ----------
        inputs : Multiset
            Consumed tokens.
        outputs : Multiset
            Produced tokens.
        transition_id : str, optional
            An identifier.
        """
        self.id: Optional[str] = transition_id
        self.inputs: Multiset = inputs.copy()
        self.outputs: Multiset = outputs.copy()

    def __str__(self) -> str:
        """ Transition to textual format.

        Returns
        -------
        str
            .net format.
        """
        text = "tr {}".format(self.id if self.id is not None else "_")

        for place, weight in self.inputs.items():
            text += ' ' + str_arc(place, weight)

        text += ' ->'

        for place, weight in self.outputs.items():
            text += ' ' + str_arc(place, weight)

        return text

    def __repr__(self) -> str:
        return "Transition({!r}, {!r}, {!r})".format(self.inputs, self.outputs, self.id)

    def act(self, state: Multiset) -> Multiset:
        """ Forward firing: (state - inputs) + outputs.
        """
        return state - self.inputs + self.outputs

    def reverse_act(self, state: Multiset) -> Multiset:
        """ Backward firing: (state + inputs) - outputs.
        """
        return state + self.inputs - self.outputs

    def is_enabled(self, state: Multiset) -> bool:
        """ Check if `state` holds the input tokens.
        """
        return self.inputs <= state

    def covering_predecessor(self, state: Multiset) -> Multiset:
        """ Least marking enabling the transition whose successor covers `state`.

        Returns
        -------
        Multiset
            inputs + (state - outputs).
        """
        return self.inputs + (state - self.outputs)


class PetriNet(PredecessorBasis[Multiset]):
    """ Petri net.

    Attributes
    ----------
    id : str
        Identifier.
    transitions : list of Transition
        Transitions (the order only impacts the enumeration order).
    mode : FiringMode
        Firing semantics.
    """

    def __init__(self, transitions: Optional[Iterable[Transition]] = None, mode: FiringMode = FiringMode.TRUNCATING, net_id: str = "") -> None:
        """ Initializer.

        Parameters
        ----------
        transitions : iterable of Transition, optional
            Transitions.
        mode : FiringMode, optional
            Firing semantics.
        net_id : str, optional
            Identifier.
        """
        self.id: str = net_id
        self.transitions: list[Transition] = list(transitions) if transitions is not None else []
        self.mode: FiringMode = mode

    def __str__(self) -> str:
        """ Petri net to textual format.

        Returns
        -------
        str
            .net format.
        """
        text = "net {}\n".format(self.id)
        text += ''.join(map(lambda tr: str(tr) + '\n', self.transitions))

        return text

    @property
    def places(self) -> set[str]:
        """ Places connected to some transition.
        """
        places = set()
        for tr in self.transitions:
            places |= tr.inputs.support() | tr.outputs.support()
        return places

    def add_transition(self, inputs: Multiset, outputs: Multiset, transition_id: Optional[str] = None) -> Transition:
        """ Create and append a transition.

        Parameters
        ----------
        inputs : Multiset
            Consumed tokens.
        outputs : Multiset
            Produced tokens.
        transition_id : str, optional
            An identifier.

        Returns
        -------
        Transition
            The new transition.
        """
        transition = Transition(inputs, outputs, transition_id)
        self.transitions.append(transition)
        return transition

    def fire(self, transition: Transition, state: Multiset) -> Optional[Multiset]:
        """ Forward firing.

        Returns
        -------
        Multiset, optional
            Successor, None if the transition is not enabled (STRICT mode only).
        """
        if self.mode is FiringMode.STRICT and not transition.is_enabled(state):
            return None
        return transition.act(state)

    def unfire(self, transition: Transition, state: Multiset) -> Optional[Multiset]:
        """ Backward firing.

        Returns
        -------
        Multiset, optional
            Predecessor, None if `state` cannot result from firing
            the transition (STRICT mode only).
        """
        if self.mode is FiringMode.STRICT and not transition.outputs <= state:
            return None
        return transition.reverse_act(state)

    def enabled_transitions(self, state: Multiset) -> list[Transition]:
        return [tr for tr in self.transitions if tr.is_enabled(state)]

    def successors(self, state: Multiset) -> list[Multiset]:
        """ One-step successors.

        Returns
        -------
        list of Multiset
            One successor per fireable transition (duplicates allowed).
        """
        successors = []
        for tr in self.transitions:
            successor = self.fire(tr, state)
            if successor is not None:
                successors.append(successor)
        return successors

    def pred_basis(self, state: Multiset) -> list[Multiset]:
        """ Predecessor basis, one marking per transition.

        Parameters
        ----------
        state : Multiset
            Current pattern.

        Returns
        -------
        list of Multiset
            Reverse firing of each transition in TRUNCATING mode, minimal
            markings covering `state` after an enabled firing in STRICT mode.
        """
        if self.mode is FiringMode.STRICT:
            return [tr.covering_predecessor(state) for tr in self.transitions]
        return [tr.reverse_act(state) for tr in self.transitions]


def str_arc(place: str, weight: int) -> str:
    """ Arc to textual format.

    Parameters
    ----------
    place : str
        Place identifier.
    weight : int
        Weight of the arc.

    Returns
    -------
    str
        .net format.
    """
    text = place

    if weight > 1:
        text += '*' + str(weight)

    return text


def parse_marking(content: str) -> Marking:
    """ Parse a marking (`p q*2`).

    Parameters
    ----------
    content : str
        Places separated by spaces or commas, with an optional `*weight`.

    Returns
    -------
    Multiset
        The corresponding marking.

    Raises
    ------
    ValueError
        Incorrect place or weight.
    """
    marking = Multiset()

    for arc in split(r'[\s,]+', content.strip()):
        if not arc:
            continue

        place_weight = arc.split('*')
        if len(place_weight) > 2 or not fullmatch(r'[A-Za-z_][\w.]*', place_weight[0]):
            raise ValueError("Incorrect place: {}".format(arc))

        weight = 1
        if len(place_weight) == 2:
            if not fullmatch(r'[0-9]+', place_weight[1]):
                raise ValueError("Incorrect weight: {}".format(arc))
            weight = int(place_weight[1])

        marking.insert_many(place_weight[0], weight)

    return marking


def parse_transition(content: str) -> Transition:
    """ Parse a transition (`name: p q*2 -> r`).

    The name is optional.

    Parameters
    ----------
    content : str
        Transition in textual format.

    Returns
    -------
    Transition
        The corresponding transition.

    Raises
    ------
    ValueError
        Missing arrow, incorrect name, place or weight.
    """
    transition_id = None

    if ':' in content:
        transition_id, content = content.split(':', 1)
        transition_id = transition_id.strip()
        if not fullmatch(r'[A-Za-z_][\w.-]*', transition_id):
            raise ValueError("Incorrect transition name: {}".format(transition_id))

    if content.count('->') != 1:
        raise ValueError("Incorrect transition (expected exactly one '->'): {}".format(content.strip()))

    inputs, outputs = content.split('->')

    return Transition(parse_marking(inputs), parse_marking(outputs), transition_id)
