"""
Maybe: zero or one value, and possibly not even decided which yet.

There are three shapes. Nothing and Some are what they sound like.
LazyMaybe holds a deferred computation of one of the other two, and
keeps its counsel until somebody asks.
"""
from concurrent.futures import Future
from .thunk import Deferred, Thunk, Ready, Suspension, as_deferred, memoize, fmap
from .diagnostics import ValueDoesNotExist
from .functions import identity


class Maybe:
	""" The one essential operation is match_lazy. Everything else is built on it. """

	def match_lazy(self, on_some, on_empty):
		"""
		Exactly one handler runs. on_some gets the still-deferred value;
		on_empty gets nothing at all.
		"""
		raise NotImplementedError(type(self))

	def match(self, on_some, on_empty):
		return self.match_lazy(lambda value: on_some(value.force()), on_empty)

	# Construction:

	@staticmethod
	def empty() -> "Maybe":
		return NOTHING

	@staticmethod
	def of(value) -> "Maybe":
		""" A Deferred argument stays deferred; anything else is the value itself. """
		return Some(as_deferred(value))

	@staticmethod
	def lazy(source) -> "Maybe":
		"""
		Put off deciding. The source is either a Deferred or a zero-argument
		callable, producing a Maybe. A plain callable runs on every match.
		"""
		if not isinstance(source, Deferred): source = Suspension(source)
		return LazyMaybe(source)

	@staticmethod
	def nullable(value) -> "Maybe":
		""" None means nothing. """
		if isinstance(value, Deferred):
			return LazyMaybe(Suspension(lambda: Maybe.nullable(value.force())))
		return NOTHING if value is None else Some(Ready(value))

	@staticmethod
	def when(condition:bool, value) -> "Maybe":
		return Maybe.of(value) if condition else NOTHING

	@staticmethod
	def unless(condition:bool, value) -> "Maybe":
		return NOTHING if condition else Maybe.of(value)

	@staticmethod
	def attempt(fn) -> "Maybe":
		""" Call fn (once, and not yet). If it raises, there is no value. """
		def outcome():
			try: return Some(Ready(fn()))
			except Exception: return NOTHING
		return LazyMaybe(Thunk(outcome))

	@staticmethod
	def from_future(future:Future) -> "Maybe":
		""" Waits for the future only when matched. A failed future has no value. """
		return Maybe.attempt(future.result)

	@staticmethod
	def join(nested:"Maybe") -> "Maybe":
		return LazyMaybe(Suspension(lambda: nested.match(identity, Maybe.empty)))

	@staticmethod
	def lift(fn):
		""" Turn a function of values into a function of Maybes, present only if all arguments are. """
		def lifted(*maybes):
			def outcome():
				values = []
				for m in maybes:
					if m.is_empty(): return NOTHING
					values.append(m)
				return Some(Thunk(lambda: fn(*(m.or_throw() for m in values))))
			return LazyMaybe(Suspension(outcome))
		return lifted

	# Interrogation:

	def is_empty(self) -> bool:
		return self.match_lazy(_false, _true)

	def __iter__(self):
		value = self.match_lazy(identity, _none)
		if value is not None: yield value.force()

	def __eq__(self, other):
		if not isinstance(other, Maybe): return NotImplemented
		return self.match_lazy(
			lambda mine: other.match_lazy(lambda theirs: mine is theirs or mine.force() == theirs.force(), _false),
			other.is_empty,
		)

	def __hash__(self):
		return self.match(lambda value: 31 + hash(value), lambda: 1)

	def __repr__(self):
		from .render import Render
		return Render().visit(self)

	def or_else(self, default):
		return self.match(identity, lambda: default)

	def or_else_get(self, fn):
		""" fn computes the default, only when it is needed. """
		return self.match(identity, fn)

	def or_maybe(self, alternative) -> "Maybe":
		""" This, if present, or else the alternative Maybe (or zero-argument callable producing one). """
		def outcome():
			return self.match_lazy(Some, lambda: alternative if isinstance(alternative, Maybe) else alternative())
		return LazyMaybe(Suspension(outcome))

	def or_throw(self, factory=None):
		"""
		The value, or else an exception. The factory, if given, runs only when
		there is no value, and anew each time: its exception is never cached.
		"""
		def complain():
			raise ValueDoesNotExist() if factory is None else factory()
		return self.match(identity, complain)

	def for_each(self, action, otherwise=None):
		self.match(action, otherwise or _none)

	# Conversion:

	def memoize(self) -> "Maybe":
		return LazyMaybe(Thunk(lambda: self.match_lazy(lambda value: Some(memoize(value)), Maybe.empty)))

	def eager(self) -> "Maybe":
		return self.match(lambda value: Some(Ready(value)), Maybe.empty)

	def sequence(self):
		from .sequence import Sequence, Cons, EMPTY
		return Sequence.lazy(lambda: self.match_lazy(lambda value: Cons(value, EMPTY), lambda: EMPTY))

	def right(self):
		""" An Either with this value on the right, or None on the left. """
		return self.right_or(None)

	def right_or(self, left):
		from .either import Either
		return Either.lazy(lambda: self.match_lazy(Either.right, lambda: Either.left(left)))

	def left(self):
		return self.left_or(None)

	def left_or(self, right):
		from .either import Either
		return Either.lazy(lambda: self.match_lazy(Either.left, lambda: Either.right(right)))

	# Transformation:

	def map(self, fn) -> "Maybe":
		return LazyMaybe(Suspension(lambda: self.match_lazy(lambda value: Some(fmap(value, fn)), Maybe.empty)))

	def flat_map(self, fn) -> "Maybe":
		return LazyMaybe(Suspension(lambda: self.match(fn, Maybe.empty)))

	def apply(self, function:"Maybe") -> "Maybe":
		""" Apply a Maybe-function to this Maybe-argument. """
		return function.flat_map(self.map)

	def apply2(self, other:"Maybe", fn) -> "Maybe":
		return self.flat_map(lambda a: other.map(lambda b: fn(a, b)))

	def filter(self, predicate) -> "Maybe":
		def outcome():
			return self.match_lazy(lambda value: Some(value) if predicate(value.force()) else NOTHING, Maybe.empty)
		return LazyMaybe(Suspension(outcome))

	def narrow(self, kind:type) -> "Maybe":
		return self.filter(lambda value: isinstance(value, kind))


class Nothing(Maybe):
	__slots__ = ()
	def match_lazy(self, on_some, on_empty):
		return on_empty()
	def memoize(self): return self
	def eager(self): return self

NOTHING = Nothing()

class Some(Maybe):
	__slots__ = ("value",)
	def __init__(self, value:Deferred):
		assert isinstance(value, Deferred), value
		self.value = value
	def match_lazy(self, on_some, on_empty):
		return on_some(self.value)

class LazyMaybe(Maybe):
	__slots__ = ("_principal",)
	def __init__(self, principal:Deferred):
		assert isinstance(principal, Deferred), principal
		self._principal = principal
	def resolve(self) -> Maybe:
		""" Unwrap layers of laziness in a loop, not by recursion. """
		it = self
		while isinstance(it, LazyMaybe): it = it._principal.force()
		assert isinstance(it, (Nothing, Some)), it
		return it
	def match_lazy(self, on_some, on_empty):
		return self.resolve().match_lazy(on_some, on_empty)


def _true(*_): return True
def _false(*_): return False
def _none(*_): return None
