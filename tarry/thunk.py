"""
Deferred values: computations which have not happened yet, and might never.

A Thunk runs its computation at most once and then replays the outcome.
That includes failure: every later force raises the very same exception
object, whatever the computation's source has done in the meantime.

A Suspension runs its computation afresh every time it is forced.
That is what an unmemoized sequence needs, and also what a single-pass
source looks like until somebody memoizes it.
"""
from threading import RLock
from .diagnostics import BlackHole

_ABSENT = object()


class Deferred:
	""" A kind of not-yet-value which can be forced. """
	def force(self):
		raise NotImplementedError(type(self))

	def is_evaluated(self) -> bool:
		return False


class Ready(Deferred):
	""" Already a value, but able to stand where a Deferred is expected. """
	__slots__ = ("value",)
	def __init__(self, value):
		self.value = value
	def __repr__(self): return "<Ready: %r>" % (self.value,)
	def force(self): return self.value
	def is_evaluated(self): return True


class Suspension(Deferred):
	""" Forgetful: runs the computation on every force. """
	__slots__ = ("_fn",)
	def __init__(self, fn):
		assert callable(fn), fn
		self._fn = fn
	def __repr__(self): return "<Suspension: %r>" % (self._fn,)
	def force(self): return self._fn()


class Thunk(Deferred):
	"""
	Evaluates at most once, even when several threads force it at the same
	moment. The lock is re-entrant so that a thunk which demands its own
	value finds out (as BlackHole) instead of waiting on itself forever.

	Only ordinary exceptions are memoized. Something like KeyboardInterrupt
	passes straight through and leaves the thunk as it was.
	"""
	def __init__(self, fn):
		assert callable(fn), fn
		self._fn = fn
		self._value = _ABSENT
		self._error = None
		self._trace = None
		self._busy = False
		self._mutex = RLock()

	def __repr__(self):
		if self._error is not None:
			return "<Thunk: raised %r>" % (self._error,)
		elif self._value is _ABSENT:
			return "<Thunk: %r>" % (self._fn,)
		else:
			return "<Thunk: %r>" % (self._value,)

	def is_evaluated(self):
		return self._value is not _ABSENT or self._error is not None

	def force(self):
		if not self.is_evaluated():
			self._evaluate()
		if self._error is not None:
			# Re-attach the original traceback so it does not grow with each replay.
			raise self._error.with_traceback(self._trace)
		return self._value

	def _evaluate(self):
		with self._mutex:
			# Another thread may have finished the job while this one waited.
			if self.is_evaluated(): return
			if self._busy: raise BlackHole(self)
			self._busy = True
			try: value = self._fn()
			except Exception as ex:
				self._trace = ex.__traceback__
				self._error = ex
			else: self._value = value
			finally: self._busy = False
			del self._fn


def force(it):
	"""
	Force repeatedly until the result is no longer deferred, then return that result.
	Internal code forces exactly once; this is for callers who nest their thunks.
	"""
	while isinstance(it, Deferred): it = it.force()
	return it

def delay(fn) -> Thunk:
	return Thunk(fn)

def suspend(fn) -> Suspension:
	return Suspension(fn)

def ready(value) -> Ready:
	return Ready(value)

def as_deferred(it) -> Deferred:
	""" Anything not already deferred is taken to be a value. Callables included. """
	return it if isinstance(it, Deferred) else Ready(it)

def memoize(it:Deferred) -> Deferred:
	if isinstance(it, (Thunk, Ready)): return it
	assert isinstance(it, Deferred), it
	return Thunk(it.force)

def fmap(it:Deferred, fn) -> Thunk:
	""" A thunk for fn applied to the eventual value of the given deferred. """
	return Thunk(lambda: fn(it.force()))
