"""Storage sharing between owners and views"""
import gc

import pytest

from py_strided import array, double_array
from py_strided.alias_tracker import AliasError
from py_strided.alias_tracker import _ALIAS_TRACKER
from py_strided.alias_tracker import _AliasTracker


class TestArrayAliasing:
    """alias_count / check_exclusive / unshare on arrays"""

    def test_fresh_array_is_exclusive(self):
        a = double_array(3)
        assert a.alias_count() == 1
        assert a.check_exclusive() is True
        assert a.unshare() is a

    def test_views_share(self):
        a = double_array(2, 2)
        row = a.get_row(0)
        t = a.T
        assert row.shares_storage(a)
        assert t.shares_storage(row)
        assert a.alias_count() == 3

    def test_shared_is_not_exclusive(self):
        a = double_array(2, 2)
        view = a.get_row(0)
        with pytest.raises(AliasError):
            a.check_exclusive()
        with pytest.raises(AliasError):
            view.check_exclusive()

    def test_unshare_copies(self):
        a = array([1.0, 2.0])
        view = a[:]
        private = view.unshare()
        assert private is not view
        assert not private.shares_storage(a)
        private.set(0, 9.0)
        assert a.get(0) == 1.0

    def test_dead_views_are_dropped(self):
        a = double_array(2, 2)
        view = a.get_row(0)
        assert a.alias_count() == 2
        del view
        gc.collect()
        assert a.alias_count() == 1
        assert a.check_exclusive()

    def test_copy_is_exclusive(self):
        a = double_array(2, 2)
        _view = a.T
        c = a.copy()
        assert c.alias_count() == 1

    def test_dropped_arrays_release_their_buckets(self):
        gc.collect()
        before = len(_ALIAS_TRACKER)
        for _ in range(2000):
            double_array(3).T
        gc.collect()
        assert len(_ALIAS_TRACKER) <= before


class _Thing:
    pass


class TestTracker:
    """The tracker on its own"""

    def test_register_is_idempotent(self):
        tracker = _AliasTracker()
        t = _Thing()
        tracker.register(t, 1)
        tracker.register(t, 1)
        assert tracker.count(1) == 1

    def test_collected_user_leaves_bucket(self):
        tracker = _AliasTracker()
        a, b = _Thing(), _Thing()
        tracker.register(a, 7)
        tracker.register(b, 7)
        del a
        gc.collect()
        assert tracker.users(7) == [b]
        del b
        gc.collect()
        assert len(tracker) == 0

    def test_buckets_do_not_accumulate(self):
        tracker = _AliasTracker()
        for i in range(500):
            tracker.register(_Thing(), i)
        gc.collect()
        assert len(tracker) == 0

    def test_unknown_storage(self):
        tracker = _AliasTracker()
        assert tracker.count(99) == 0
        assert tracker.check_exclusive(_Thing(), 99) is True
