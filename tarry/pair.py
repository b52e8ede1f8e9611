"""
Pair: two values, each of which may take its time.
"""
from .thunk import Deferred, Thunk, Ready, Suspension, as_deferred, memoize, fmap
from .functions import identity


class Pair:
	""" Unpacks like a tuple: `a, b = pair`. """
	__slots__ = ("_first", "_second")

	def __init__(self, first:Deferred, second:Deferred):
		assert isinstance(first, Deferred), first
		assert isinstance(second, Deferred), second
		self._first = first
		self._second = second

	def match_lazy(self, fn):
		return fn(self._first, self._second)

	def match(self, fn):
		return self.match_lazy(lambda a, b: fn(a.force(), b.force()))

	@staticmethod
	def of(first, second) -> "Pair":
		return Pair(as_deferred(first), as_deferred(second))

	@staticmethod
	def lazy(source) -> "Pair":
		if not isinstance(source, Deferred): source = Suspension(source)
		return LazyPair(source)

	@staticmethod
	def duplicate(value) -> "Pair":
		""" Both sides share one deferred value, so it is worked out (at most) once. """
		it = memoize(as_deferred(value))
		return Pair(it, it)

	@staticmethod
	def by_first(key=identity):
		""" A sort key looking only at the first component. """
		return lambda pair: key(pair.first())

	@staticmethod
	def by_second(key=identity):
		return lambda pair: key(pair.second())

	def first(self):
		return self.match_lazy(lambda a, b: a.force())

	def second(self):
		return self.match_lazy(lambda a, b: b.force())

	def __iter__(self):
		yield self.first()
		yield self.second()

	def __eq__(self, other):
		if not isinstance(other, Pair): return NotImplemented
		return self.first() == other.first() and self.second() == other.second()

	def __hash__(self):
		return hash((self.first(), self.second()))

	def __repr__(self):
		from .render import Render
		return Render().visit(self)

	def memoize(self) -> "Pair":
		return self.match_lazy(lambda a, b: Pair(memoize(a), memoize(b)))

	def eager(self) -> "Pair":
		return self.match(lambda a, b: Pair(Ready(a), Ready(b)))

	def swap(self) -> "Pair":
		return self.match_lazy(lambda a, b: Pair(b, a))

	def map_first(self, fn) -> "Pair":
		return self.map_both(fn, identity)

	def map_second(self, fn) -> "Pair":
		return self.map_both(identity, fn)

	def map_both(self, on_first, on_second) -> "Pair":
		return self.match_lazy(lambda a, b: Pair(fmap(a, on_first), fmap(b, on_second)))

	def for_both(self, action):
		self.match(action)


class LazyPair(Pair):
	""" Not even the shape is worked out until asked. Components stay lazy once it is. """
	__slots__ = ("_principal",)

	def __init__(self, principal:Deferred):
		assert isinstance(principal, Deferred), principal
		self._principal = principal

	def resolve(self) -> Pair:
		it = self
		while isinstance(it, LazyPair): it = it._principal.force()
		assert isinstance(it, Pair), it
		return it

	def match_lazy(self, fn):
		return self.resolve().match_lazy(fn)

	def memoize(self) -> Pair:
		return LazyPair(Thunk(lambda: self.resolve().memoize()))

	def swap(self) -> Pair:
		return LazyPair(Suspension(lambda: self.resolve().swap()))

	def map_both(self, on_first, on_second) -> Pair:
		return LazyPair(Suspension(lambda: self.resolve().map_both(on_first, on_second)))
