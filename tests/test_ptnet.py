"""Unit tests for transitions and Petri nets.

Tests cover:
  - Forward and reverse firing (truncating semantics)
  - Strict firing and covering predecessors
  - Predecessor basis
  - Arc notation helpers
"""

from __future__ import annotations

import pytest

from bwreach.ptio.multiset import Multiset
from bwreach.ptio.ptnet import FiringMode, PetriNet, Transition, parse_marking, parse_transition


# ── Helpers ──────────────────────────────────────────────────────────────


def _same_unordered(first: list, second: list) -> bool:
    """Compare two lists of unhashable items as multisets."""
    remaining = list(second)
    for item in first:
        if item not in remaining:
            return False
        remaining.remove(item)
    return not remaining


def _build_first_second_third(mode: FiringMode = FiringMode.TRUNCATING) -> PetriNet:
    """First + Second -> Third and Third -> First + Second."""
    return PetriNet([
        Transition(Multiset(["First", "Second"]), Multiset(["Third"]), "join"),
        Transition(Multiset(["Third"]), Multiset(["First", "Second"]), "split"),
    ], mode=mode)


@pytest.fixture
def transition() -> Transition:
    return Transition(Multiset([1, 2]), Multiset([3]))


# ── Test: Transition ─────────────────────────────────────────────────────


class TestTransition:
    def test_act(self, transition):
        state = Multiset([1, 2, 3])
        assert transition.act(state) == Multiset([3, 3])

    def test_reverse_act(self, transition):
        state = Multiset([1, 2, 3])
        assert transition.reverse_act(state) == Multiset([1, 1, 2, 2])

    def test_act_removes_inputs_adds_outputs(self, transition):
        state = Multiset.from_counts({1: 2, 2: 1, 4: 1})
        successor = transition.act(state)
        assert successor.counts == {1: 1, 3: 1, 4: 1}

    def test_act_fabricates_when_not_enabled(self, transition):
        """Truncating firing does not check the inputs."""
        assert transition.act(Multiset()) == Multiset([3])

    def test_act_does_not_mutate_state(self, transition):
        state = Multiset([1, 2])
        transition.act(state)
        assert state == Multiset([1, 2])

    def test_reverse_act_not_inverse_with_overlap(self):
        """reverse_act(act(s)) differs from s when inputs and outputs overlap."""
        loop = Transition(Multiset(["p"]), Multiset(["p", "q"]))
        state = Multiset(["q"])
        assert loop.reverse_act(loop.act(state)) != state

    def test_is_enabled(self, transition):
        assert transition.is_enabled(Multiset([1, 2, 2]))
        assert not transition.is_enabled(Multiset([1, 3]))

    def test_covering_predecessor(self, transition):
        state = Multiset([3, 3, 4])
        pred = transition.covering_predecessor(state)
        assert pred == Multiset([1, 2, 3, 4])
        assert transition.is_enabled(pred)
        assert transition.act(pred) >= state

    def test_str(self):
        tr = Transition(Multiset(["Lock", "Waiting", "Waiting"]), Multiset(["Current"]), "get_lock")
        assert str(tr) == "tr get_lock Lock Waiting*2 -> Current"


# ── Test: Petri net ──────────────────────────────────────────────────────


class TestPetriNet:
    def test_pred_basis(self):
        ptnet = _build_first_second_third()
        state = Multiset(["Second", "Second"])
        expected = [
            Multiset(["Second", "Third"]),
            Multiset(["Second", "Second", "Second", "First"]),
        ]
        assert _same_unordered(ptnet.pred_basis(state), expected)

    def test_pred_basis_keeps_duplicates(self):
        tr = Transition(Multiset(["a"]), Multiset(["b"]))
        ptnet = PetriNet([tr, Transition(Multiset(["a"]), Multiset(["b"]))])
        preds = ptnet.pred_basis(Multiset(["b"]))
        assert preds == [Multiset(["a"]), Multiset(["a"])]

    def test_strict_pred_basis(self):
        ptnet = _build_first_second_third(FiringMode.STRICT)
        state = Multiset(["Second", "Second"])
        expected = [
            Multiset(["First", "Second", "Second", "Second"]),
            Multiset(["Third", "Second"]),
        ]
        assert _same_unordered(ptnet.pred_basis(state), expected)

    def test_strict_pred_basis_with_overlap(self):
        """Covering predecessor keeps the loop input, truncating reverse firing drops it."""
        loop = Transition(Multiset(["p"]), Multiset(["p", "q"]))
        state = Multiset(["p", "q"])
        assert PetriNet([loop]).pred_basis(state) == [Multiset(["p"])]
        assert PetriNet([loop], mode=FiringMode.STRICT).pred_basis(state) == [Multiset(["p"])]
        assert PetriNet([loop], mode=FiringMode.STRICT).pred_basis(Multiset(["q", "q"])) == [Multiset(["p", "q"])]
        assert PetriNet([loop]).pred_basis(Multiset(["q", "q"])) == [Multiset(["q"])]

    def test_fire_strict(self):
        ptnet = _build_first_second_third(FiringMode.STRICT)
        join, split = ptnet.transitions
        assert ptnet.fire(join, Multiset(["First"])) is None
        assert ptnet.fire(join, Multiset(["First", "Second"])) == Multiset(["Third"])
        assert ptnet.unfire(split, Multiset(["First"])) is None
        assert ptnet.unfire(split, Multiset(["First", "Second"])) == Multiset(["Third"])

    def test_fire_truncating(self):
        ptnet = _build_first_second_third()
        join, _ = ptnet.transitions
        assert ptnet.fire(join, Multiset(["First"])) == Multiset(["Third"])

    def test_successors(self):
        ptnet = _build_first_second_third(FiringMode.STRICT)
        assert ptnet.successors(Multiset(["Third"])) == [Multiset(["First", "Second"])]
        assert ptnet.enabled_transitions(Multiset(["Third"])) == [ptnet.transitions[1]]

    def test_places_and_add_transition(self):
        ptnet = PetriNet()
        ptnet.add_transition(Multiset(["a"]), Multiset(["b"]), "t")
        assert ptnet.places == {"a", "b"}
        assert [tr.id for tr in ptnet.transitions] == ["t"]

    def test_transition_copies_its_multisets(self):
        inputs = Multiset(["a"])
        tr = Transition(inputs, Multiset())
        inputs.insert("a")
        assert tr.inputs == Multiset(["a"])


# ── Test: Notation ───────────────────────────────────────────────────────


class TestNotation:
    def test_parse_marking(self):
        assert parse_marking("Lock Waiting*2") == Multiset(["Lock", "Waiting", "Waiting"])
        assert parse_marking("Lock, Waiting") == Multiset(["Lock", "Waiting"])
        assert parse_marking("  ") == Multiset()

    @pytest.mark.parametrize("content", ["Lock*", "Lock*x", "2Lock", "Lock*2*3"])
    def test_parse_marking_rejects(self, content):
        with pytest.raises(ValueError):
            parse_marking(content)

    def test_parse_transition(self):
        tr = parse_transition("get_lock: Lock Waiting -> Current")
        assert tr.id == "get_lock"
        assert tr.inputs == Multiset(["Lock", "Waiting"])
        assert tr.outputs == Multiset(["Current"])

    def test_parse_anonymous_transition(self):
        tr = parse_transition("Current -> Lock Waiting")
        assert tr.id is None
        assert tr.outputs == Multiset(["Lock", "Waiting"])

    @pytest.mark.parametrize("content", ["Lock Current", "a -> b -> c", "bad name: a -> b"])
    def test_parse_transition_rejects(self, content):
        with pytest.raises(ValueError):
            parse_transition(content)
