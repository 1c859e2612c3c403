"""
Bundled Models

Small nets with their coverability question (initial markings, target).

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

from typing import Callable, NamedTuple

from bwreach.ptio.multiset import Multiset
from bwreach.ptio.ptnet import FiringMode, Marking, PetriNet, Transition


class Model(NamedTuple):
    ptnet: PetriNet
    initial: list[Marking]
    target: Marking


def mutual_exclusion(get_lock_inputs: list[str], mode: FiringMode = FiringMode.TRUNCATING, net_id: str = "mutex") -> Model:
    """ Lock shared by waiting processes.

    Two processes waiting, one lock, bad marking: two processes in the
    critical section.

    Parameters
    ----------
    get_lock_inputs : list of str
        Places consumed to acquire the lock.
    mode : FiringMode, optional
        Firing semantics.
    net_id : str, optional
        Identifier.

    Returns
    -------
    Model
        Net, initial markings and target.
    """
    get_lock = Transition(Multiset(get_lock_inputs), Multiset(["Current"]), "get_lock")
    release_lock = Transition(Multiset(["Current"]), Multiset(["Lock", "Waiting"]), "release_lock")

    ptnet = PetriNet([get_lock, release_lock], mode=mode, net_id=net_id)

    return Model(ptnet, [Multiset(["Lock", "Waiting", "Waiting"])], Multiset(["Current", "Current"]))


def mutex(mode: FiringMode = FiringMode.TRUNCATING) -> Model:
    return mutual_exclusion(["Lock", "Waiting"], mode, "mutex")


def lock_only(mode: FiringMode = FiringMode.TRUNCATING) -> Model:
    """ Acquisition consumes the lock but not the waiting token (still safe: one lock).
    """
    return mutual_exclusion(["Lock"], mode, "lock-only")


def lockless(mode: FiringMode = FiringMode.TRUNCATING) -> Model:
    """ Acquisition ignores the lock (unsafe).
    """
    return mutual_exclusion(["Waiting"], mode, "lockless")


def first_second_third(mode: FiringMode = FiringMode.TRUNCATING) -> Model:
    """ First + Second <-> Third.
    """
    join = Transition(Multiset(["First", "Second"]), Multiset(["Third"]), "join")
    split = Transition(Multiset(["Third"]), Multiset(["First", "Second"]), "split")

    ptnet = PetriNet([join, split], mode=mode, net_id="first-second-third")

    return Model(ptnet, [Multiset(["Third", "Third"])], Multiset(["First", "First", "Second"]))


MODELS: dict[str, Callable[[FiringMode], Model]] = {
    'mutex': mutex,
    'lock-only': lock_only,
    'lockless': lockless,
    'first-second-third': first_second_third,
}
