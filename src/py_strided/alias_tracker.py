"""
Storage sharing between arrays.

Every BaseArray registers itself under the identity of its Storage when it
is created, so the owner and all of its views end up in one bucket. The
tracker only holds weak references; an array that is garbage collected is
removed from its bucket, and the bucket goes with its last array.
"""

import functools
import weakref

from .errors import StridedError


class AliasError(StridedError):
	"""Raised when an operation needs sole access to a shared storage."""
	pass


class _AliasTracker:
	"""
	storage id -> weak references to the live arrays over that storage.

	Arrays stay unhashable, so buckets are plain lists compared by identity.
	"""

	def __init__(self):
		self._buckets = {}

	def _live(self, storage_id):
		"""Live references for ``storage_id``; empty buckets are dropped."""
		bucket = [r for r in self._buckets.get(storage_id, ()) if r() is not None]
		if bucket:
			self._buckets[storage_id] = bucket
		else:
			self._buckets.pop(storage_id, None)
		return bucket

	def register(self, arr, storage_id):
		bucket = self._live(storage_id)
		if any(r() is arr for r in bucket):
			return
		bucket.append(weakref.ref(arr, functools.partial(self._discard, storage_id)))
		self._buckets[storage_id] = bucket

	def _discard(self, storage_id, ref):
		"""Weakref callback: drop a collected array from its bucket."""
		bucket = self._buckets.get(storage_id)
		if bucket is None:
			return
		bucket = [r for r in bucket if r is not ref]
		if bucket:
			self._buckets[storage_id] = bucket
		else:
			del self._buckets[storage_id]

	def __len__(self):
		"""Number of storages with at least one registered array."""
		return len(self._buckets)

	def users(self, storage_id):
		"""The live arrays over ``storage_id``."""
		return [a for a in (r() for r in self._live(storage_id)) if a is not None]

	def count(self, storage_id):
		return len(self._live(storage_id))

	def check_exclusive(self, arr, storage_id):
		"""True if ``arr`` is the only live array over ``storage_id``, else AliasError."""
		others = [a for a in self.users(storage_id) if a is not arr]
		if not others:
			return True
		raise AliasError(
			f"Storage is shared with {len(others)} other live array(s); "
			"use .copy() or .unshare() for an independent array"
		)


_ALIAS_TRACKER = _AliasTracker()
