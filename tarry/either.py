"""
Either: exactly one value, tagged as the left one or the right one.
By convention a Left carries the trouble and a Right carries the goods.
"""
from concurrent.futures import Future
from .thunk import Deferred, Thunk, Ready, Suspension, as_deferred, memoize, fmap
from .functions import identity
from .maybe import Maybe, Some, NOTHING


class Either:

	def match_lazy(self, on_left, on_right):
		""" Exactly one handler runs, and receives the still-deferred value. """
		raise NotImplementedError(type(self))

	def match(self, on_left, on_right):
		return self.match_lazy(lambda value: on_left(value.force()), lambda value: on_right(value.force()))

	@staticmethod
	def left(value) -> "Either":
		return Left(as_deferred(value))

	@staticmethod
	def right(value) -> "Either":
		return Right(as_deferred(value))

	@staticmethod
	def lazy(source) -> "Either":
		""" As with Maybe.lazy, a plain callable runs on every match; a Deferred follows its own rules. """
		if not isinstance(source, Deferred): source = Suspension(source)
		return LazyEither(source)

	@staticmethod
	def attempt(fn) -> "Either":
		""" Call fn (once, and not yet). The exception it raises, if any, is the left value. """
		def outcome():
			try: return Right(Ready(fn()))
			except Exception as ex: return Left(Ready(ex))
		return LazyEither(Thunk(outcome))

	@staticmethod
	def from_future(future:Future) -> "Either":
		return Either.attempt(future.result)

	@staticmethod
	def join_left(nested:"Either") -> "Either":
		""" The left side holds another Either; flatten it. """
		return LazyEither(Suspension(lambda: nested.match_lazy(_force, Right)))

	@staticmethod
	def join_right(nested:"Either") -> "Either":
		return LazyEither(Suspension(lambda: nested.match_lazy(Left, _force)))

	@staticmethod
	def join(nested:"Either") -> "Either":
		""" Both sides hold an Either. """
		return LazyEither(Suspension(lambda: nested.match_lazy(_force, _force)))

	def merge(self):
		""" Whichever value there is. """
		return self.match(identity, identity)

	def for_left(self, action):
		self.match(action, _ignore)

	def for_right(self, action):
		self.match(_ignore, action)

	def for_either(self, on_left, on_right):
		self.match(on_left, on_right)

	def memoize(self) -> "Either":
		return LazyEither(Thunk(lambda: self.match_lazy(lambda v: Left(memoize(v)), lambda v: Right(memoize(v)))))

	def eager(self) -> "Either":
		return self.match(lambda v: Left(Ready(v)), lambda v: Right(Ready(v)))

	def is_left(self) -> bool:
		return self.match_lazy(_yes, _no)

	def is_right(self) -> bool:
		return self.match_lazy(_no, _yes)

	def __eq__(self, other):
		if not isinstance(other, Either): return NotImplemented
		def same(mine, theirs): return mine is theirs or mine.force() == theirs.force()
		return self.match_lazy(
			lambda mine: other.match_lazy(lambda theirs: same(mine, theirs), _no),
			lambda mine: other.match_lazy(_no, lambda theirs: same(mine, theirs)),
		)

	def __hash__(self):
		return self.match(lambda v: hash((False, v)), lambda v: hash((True, v)))

	def __repr__(self):
		from .render import Render
		return Render().visit(self)

	def left_value(self) -> Maybe:
		""" The left value as a Maybe. """
		return Maybe.lazy(lambda: self.match_lazy(Some, _nothing))

	def right_value(self) -> Maybe:
		return Maybe.lazy(lambda: self.match_lazy(_nothing, Some))

	def swap(self) -> "Either":
		return LazyEither(Suspension(lambda: self.match_lazy(Right, Left)))

	def map_left(self, fn) -> "Either":
		return self.map_either(fn, identity)

	def map_right(self, fn) -> "Either":
		return self.map_either(identity, fn)

	def map_either(self, on_left, on_right) -> "Either":
		def outcome():
			return self.match_lazy(lambda v: Left(fmap(v, on_left)), lambda v: Right(fmap(v, on_right)))
		return LazyEither(Suspension(outcome))

	def flat_map_left(self, fn) -> "Either":
		return self.flat_map_either(fn, Either.right)

	def flat_map_right(self, fn) -> "Either":
		return self.flat_map_either(Either.left, fn)

	def flat_map_either(self, on_left, on_right) -> "Either":
		return LazyEither(Suspension(lambda: self.match(on_left, on_right)))

	def apply_left(self, function:"Either") -> "Either":
		""" function holds a function on its left side; apply it to this left value. """
		return function.flat_map_left(self.map_left)

	def apply_right(self, function:"Either") -> "Either":
		return function.flat_map_right(self.map_right)


class Left(Either):
	__slots__ = ("value",)
	def __init__(self, value:Deferred):
		assert isinstance(value, Deferred), value
		self.value = value
	def match_lazy(self, on_left, on_right):
		return on_left(self.value)

class Right(Either):
	__slots__ = ("value",)
	def __init__(self, value:Deferred):
		assert isinstance(value, Deferred), value
		self.value = value
	def match_lazy(self, on_left, on_right):
		return on_right(self.value)

class LazyEither(Either):
	__slots__ = ("_principal",)
	def __init__(self, principal:Deferred):
		assert isinstance(principal, Deferred), principal
		self._principal = principal
	def resolve(self) -> Either:
		it = self
		while isinstance(it, LazyEither): it = it._principal.force()
		assert isinstance(it, (Left, Right)), it
		return it
	def match_lazy(self, on_left, on_right):
		return self.resolve().match_lazy(on_left, on_right)


def _yes(_): return True
def _no(_): return False
def _ignore(_): pass
def _nothing(_): return NOTHING
def _force(it): return it.force()
