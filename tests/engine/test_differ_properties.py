"""Property-based tests for the snapshot differ.

Uses hypothesis to generate nested configuration records and checks that:
 1. A snapshot compared with itself yields no diffs
 2. Flattening is deterministic and ignores key insertion order
 3. Resources only present on one side list every leaf with the other side absent
 4. Recorded changes never hold equal values

Floats include NaN so an unchanged NaN leaf is exercised by the identity check.
Deadlines are disabled: the nested strategies are slow to warm up on a cold run.
"""

from __future__ import annotations

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from config_diff.engine import diff_snapshots
from config_diff.models import ABSENT, leaf_equal
from config_diff.normalization import flatten

# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

_keys = st.text(alphabet="abcdefxyz", min_size=1, max_size=4)

_scalars = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(min_value=-1000, max_value=1000),
    st.floats(allow_infinity=False),
    st.text(max_size=8),
)

_values = st.recursive(
    _scalars,
    lambda children: st.one_of(
        st.lists(children, max_size=3),
        st.dictionaries(_keys, children, max_size=3),
    ),
    max_leaves=12,
)


@st.composite
def _resources(draw, resource_id: str) -> dict:
    attributes = draw(st.dictionaries(_keys, _values, max_size=4))
    record = {"resourceId": resource_id, "resourceType": draw(st.sampled_from(["X", "Y", "Z"]))}
    record.update(attributes)
    return record


@st.composite
def _snapshots(draw) -> dict:
    ids = draw(st.lists(st.sampled_from(["r1", "r2", "r3", "r4", "r5"]), unique=True, max_size=5))
    return {resource_id: draw(_resources(resource_id)) for resource_id in ids}


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


@given(_snapshots())
@settings(max_examples=100, deadline=None, suppress_health_check=[HealthCheck.too_slow])
def test_snapshot_compared_with_itself_is_empty(snapshot: dict) -> None:
    assert diff_snapshots(snapshot, snapshot) == []


@given(_resources("r1"))
@settings(deadline=None)
def test_flatten_is_deterministic(record: dict) -> None:
    assert flatten(record) == flatten(record)


@given(_resources("r1"))
@settings(deadline=None)
def test_flatten_ignores_key_insertion_order(record: dict) -> None:
    reordered = dict(reversed(list(record.items())))

    assert flatten(reordered) == flatten(record)


@given(_resources("r1"))
@settings(deadline=None)
def test_resource_only_in_before_is_deleted(record: dict) -> None:
    diffs = diff_snapshots({"r1": record}, {})

    assert len(diffs) == 1
    diff = diffs[0]
    assert diff.deleted is True
    assert diff.created is False
    assert {path: (entry.old, entry.new) for path, entry in diff.changes.items()} == {
        path: (value, ABSENT) for path, value in flatten(record).items()
    }


@given(_resources("r1"))
@settings(deadline=None)
def test_resource_only_in_after_is_created(record: dict) -> None:
    diffs = diff_snapshots({}, {"r1": record})

    assert len(diffs) == 1
    diff = diffs[0]
    assert diff.created is True
    assert diff.deleted is False
    assert {path: (entry.old, entry.new) for path, entry in diff.changes.items()} == {
        path: (ABSENT, value) for path, value in flatten(record).items()
    }


@given(_snapshots(), _snapshots())
@settings(max_examples=100, deadline=None, suppress_health_check=[HealthCheck.too_slow])
def test_changes_are_minimal_and_no_ops_are_suppressed(before: dict, after: dict) -> None:
    diffs = diff_snapshots(before, after)
    emitted = {diff.id for diff in diffs}

    for diff in diffs:
        assert diff.changes
        for entry in diff.changes.values():
            if entry.old is not ABSENT and entry.new is not ABSENT:
                assert not leaf_equal(entry.old, entry.new)

    for resource_id in set(before) & set(after):
        if _same_leaves(flatten(before[resource_id]), flatten(after[resource_id])):
            assert resource_id not in emitted


def _same_leaves(old: dict, new: dict) -> bool:
    return old.keys() == new.keys() and all(leaf_equal(old[path], new[path]) for path in old)
