"""
The persistent lazy sequence.

A sequence is either empty, or a head and a tail. Neither head nor tail is
computed before somebody looks. The one essential operation is match_lazy,
which tells the two cases apart; everything else here is built from it and
the two constructors.

Concrete shapes:

	Empty     the one and only EMPTY.
	Cons      a deferred head and a tail sequence.
	Lazy      a deferred computation of some other sequence.
	Memoized  a Lazy which computes each node (head and tail) at most once.
	Concat    one sequence followed by another.

A plain Lazy recomputes on every traversal. That is the right thing for a
cheap or deterministic recipe and the wrong thing for a one-shot source,
so call memoize() where it matters.

Anything which must walk an unbounded distance (length, equality, searching,
skipping, right folds) runs on a trampoline, so it is limited by time and
memory but not by the interpreter's recursion limit.
"""
import operator
from .thunk import Deferred, Thunk, Ready, Suspension, as_deferred, memoize as memoize_deferred, fmap
from .trampoline import call, terminate, evaluate
from .functions import identity, flip, maximum, minimum
from . import predicates
from .maybe import Maybe, Some, NOTHING
from .pair import Pair

HASH_MULTIPLIER = 31
HASH_MASK = (1 << 64) - 1


class Sequence:

	def match_lazy(self, on_cons, on_empty):
		"""
		The one-step dispatch. Exactly one handler runs:
		on_cons(head, tail) with the head still deferred, or else on_empty().
		"""
		raise NotImplementedError(type(self))

	def match(self, on_cons, on_empty=None):
		"""
		As match_lazy, but the head is forced (the tail is not) before on_cons sees it.
		Without on_empty, the answer comes wrapped in a Maybe.
		"""
		if on_empty is None:
			return Maybe.lazy(lambda: self.match(lambda head, tail: Maybe.of(on_cons(head, tail)), Maybe.empty))
		return self.match_lazy(lambda head, tail: on_cons(head.force(), tail), on_empty)

	def match_non_empty(self, fn, on_empty):
		""" fn gets the whole (known non-empty) sequence rather than its pieces. """
		return self.match_lazy(lambda head, tail: fn(Cons(head, tail)), on_empty)

	def uncons(self) -> Maybe:
		""" Maybe a Pair of head and tail. """
		return Maybe.lazy(lambda: self.match_lazy(lambda head, tail: Maybe.of(Pair(head, Ready(tail))), Maybe.empty))

	############################
	# Construction

	@staticmethod
	def empty() -> "Sequence":
		return EMPTY

	@staticmethod
	def cons(head, tail) -> "Sequence":
		"""
		The head is a value, or a Deferred standing for one.
		The tail is a Sequence, or a Deferred or zero-argument callable producing one.
		A plain callable runs on each traversal; a Thunk only the once.
		"""
		return Cons(as_deferred(head), _as_tail(tail))

	@staticmethod
	def of(*elements) -> "Sequence":
		seq = EMPTY
		for element in reversed(elements): seq = Cons(as_deferred(element), seq)
		return seq

	@staticmethod
	def lazy(source) -> "Sequence":
		""" Defer the whole decision. The source is a Deferred or a zero-argument callable. """
		return _as_tail(source)

	@staticmethod
	def from_iterable(iterable) -> "Sequence":
		"""
		A sequence over the elements of any iterable.

		Re-iterable collections are iterated afresh on each traversal.
		One-shot iterators (and generators) are memoized as they go,
		so every traversal sees the same elements.
		"""
		if isinstance(iterable, Sequence): return iterable
		if iter(iterable) is iterable: return _pull(iterable)
		return Lazy(Suspension(lambda: _pull(iter(iterable))))

	@staticmethod
	def iterate(initial, fn, condition=None) -> "Sequence":
		""" initial, fn(initial), fn(fn(initial)), ... for as long as condition holds, if given. """
		def going(x):
			return Cons(Ready(x), Lazy(Suspension(lambda: going(fn(x)))))
		seq = going(initial)
		return seq if condition is None else seq.take_while(condition)

	@staticmethod
	def iterate_indexed(initial, fn) -> "Sequence":
		""" initial, fn(1, initial), fn(2, fn(1, initial)), ... """
		return _counting(1).scan_left(initial, lambda acc, i: fn(i, acc))

	@staticmethod
	def recurrence(first, second, fn) -> "Sequence":
		""" Each element after the first two is fn of the previous two. Fibonacci, for instance. """
		return Cons(Ready(first), Lazy(Suspension(lambda: Sequence.recurrence(second, fn(first, second), fn))))

	@staticmethod
	def repeat(element) -> "Sequence":
		head = as_deferred(element)
		def again(): return Cons(head, Lazy(Suspension(again)))
		return again()

	@staticmethod
	def generate(fn) -> "Sequence":
		""" fn(), fn(), fn(), ... called in traversal order. Memoize it to see the same values twice. """
		return Lazy(Suspension(lambda: Cons(Ready(fn()), Sequence.generate(fn))))

	@staticmethod
	def unfold(seed, fn, condition=None) -> "Sequence":
		"""
		fn(seed) produces a pair of (element, next seed). The sequence ends when
		condition(seed) fails, if there is a condition; otherwise it goes forever.
		"""
		def build():
			if condition is not None and not condition(seed): return EMPTY
			element, after = fn(seed)
			return Cons(Ready(element), Sequence.unfold(after, fn, condition))
		return Lazy(Suspension(build))

	############################
	# Conversion

	def memoize(self) -> "Sequence":
		return Memoized(self)

	def eager(self) -> "Sequence":
		""" Force every head and every tail, now. Only for finite sequences, obviously. """
		return _from_list(list(self))

	def _links(self):
		""" Yield (deferred head, tail) for each node in turn. """
		seq = self
		while True:
			link = seq.match_lazy(_link, _none)
			if link is None: return
			yield link
			seq = link[1]

	def __iter__(self):
		for head, _ in self._links(): yield head.force()

	def to_list(self) -> list:
		return list(self)

	def for_each(self, action, otherwise=None):
		""" action on each element in turn; otherwise(), if given, only when there are none. """
		empty = True
		for x in self:
			empty = False
			action(x)
		if empty and otherwise is not None: otherwise()

	def joined(self, delimiter="", prefix="", suffix="") -> str:
		return prefix + delimiter.join(map(str, self)) + suffix

	def __bool__(self):
		return not self.is_empty()

	def __getitem__(self, index):
		if isinstance(index, slice):
			start, stop, step = index.start or 0, index.stop, index.step
			if step == 0: raise ValueError("slice step cannot be zero")
			if step is None: step = 1
			if start < 0 or step < 1 or (stop is not None and stop < 0):
				raise ValueError("Lazy sequences take no negative indices or steps", index)
			seq = self.skip(start) if stop is None else self.slice(start, stop)
			return seq.step(step)
		if index < 0: raise IndexError(index)
		return self.element(index).or_throw(lambda: IndexError(index))

	def __add__(self, other):
		if not isinstance(other, Sequence): return NotImplemented
		return self.concatenate(other)

	def __eq__(self, other):
		if not isinstance(other, Sequence): return NotImplemented
		def equal(again):
			def compare(xs, ys):
				if xs is ys: return terminate(True)
				return xs.match_lazy(
					lambda x, x_tail: ys.match_lazy(
						lambda y, y_tail: call(again, x_tail, y_tail) if _same(x, y) else terminate(False),
						lambda: terminate(False),
					),
					lambda: terminate(ys.is_empty()),
				)
			return compare
		return evaluate(equal, self, other)

	def __hash__(self):
		return self.fold_left(1, lambda h, x: (HASH_MULTIPLIER * h + hash(x)) & HASH_MASK)

	def __repr__(self):
		from .render import Render
		return Render().visit(self)

	############################
	# Queries

	def is_empty(self) -> bool:
		return self.match_lazy(_false, _true)

	def is_singleton(self) -> bool:
		return self.match_lazy(lambda head, tail: tail.is_empty(), _false)

	def head(self) -> Maybe:
		return Maybe.lazy(lambda: self.match_lazy(lambda head, tail: Some(head), Maybe.empty))

	def tail(self) -> Maybe:
		return Maybe.lazy(lambda: self.match_lazy(lambda head, tail: Some(Ready(tail)), Maybe.empty))

	def initial(self) -> Maybe:
		""" Everything but the last element, if there is a last element. """
		return Maybe.lazy(lambda: self.match_lazy(lambda head, tail: Maybe.of(_all_but_last(head, tail)), Maybe.empty))

	def last(self) -> Maybe:
		def final(again):
			return lambda head, seq: seq.match_lazy(lambda h, t: call(again, h, t), lambda: terminate(head))
		return Maybe.lazy(lambda: self.match_lazy(
			lambda head, tail: Some(evaluate(final, head, tail)),
			Maybe.empty,
		))

	def element(self, index:int) -> Maybe:
		""" Zero-based. Past the end (or before the start) there is nothing. """
		if index < 0: return NOTHING
		return self.skip(index).head()

	def only(self) -> Maybe:
		""" The element of a singleton. Longer or shorter sequences have none. """
		return Maybe.lazy(lambda: self.match_lazy(
			lambda head, tail: Some(head) if tail.is_empty() else NOTHING,
			Maybe.empty,
		))

	def length(self) -> int:
		def count(again):
			return lambda seq, n: seq.match_lazy(lambda _, tail: call(again, tail, n+1), lambda: terminate(n))
		return evaluate(count, self, 0)

	def length_at_most(self, bound:int) -> Maybe:
		""" The length, unless it exceeds the bound, in which case stop counting. """
		def count(again):
			def step(seq, n):
				if n > bound: return terminate(NOTHING)
				return seq.match_lazy(lambda _, tail: call(again, tail, n+1), lambda: terminate(Maybe.of(n)))
			return step
		return evaluate(count, self, 0)

	def longer_than(self, other) -> bool:
		""" other is an int or another sequence. Works even if both are infinite, on one side. """
		if isinstance(other, Sequence):
			def race(again):
				return lambda xs, ys: xs.match_lazy(
					lambda _, x_tail: ys.match_lazy(lambda _, y_tail: call(again, x_tail, y_tail), lambda: terminate(True)),
					lambda: terminate(False),
				)
			return evaluate(race, self, other)
		if other < 0: return True
		return not self.skip(other).is_empty()

	def shorter_than(self, other) -> bool:
		if isinstance(other, Sequence): return other.longer_than(self)
		return other > 0 and self.skip(other - 1).is_empty()

	def any(self, predicate=bool) -> bool:
		def search(again):
			return lambda seq: seq.match(
				lambda x, tail: terminate(True) if predicate(x) else call(again, tail),
				lambda: terminate(False),
			)
		return evaluate(search, self)

	def all(self, predicate=bool) -> bool:
		return not self.any(predicates.negate(predicate))

	def contains(self, element) -> bool:
		return self.any(lambda x: x == element)

	def contains_any(self, elements) -> bool:
		mine = self.memoize()
		return _as_sequence(elements).any(mine.contains)

	def contains_all(self, elements) -> bool:
		mine = self.memoize()
		return _as_sequence(elements).all(mine.contains)

	def find(self, predicate) -> Maybe:
		return Maybe.lazy(lambda: self.skip_while(predicates.negate(predicate)).head())

	def find_index(self, predicate) -> Maybe:
		def search(again):
			return lambda seq, i: seq.match(
				lambda x, tail: terminate(Maybe.of(i)) if predicate(x) else call(again, tail, i+1),
				lambda: terminate(NOTHING),
			)
		return Maybe.lazy(lambda: evaluate(search, self, 0))

	def index_of(self, element) -> Maybe:
		return self.find_index(lambda x: x == element)

	def has_prefix(self, prefix:"Sequence") -> bool:
		def check(again):
			return lambda seq, rest: rest.match_lazy(
				lambda p, p_tail: seq.match_lazy(
					lambda x, x_tail: call(again, x_tail, p_tail) if _same(x, p) else terminate(False),
					lambda: terminate(False),
				),
				lambda: terminate(True),
			)
		return evaluate(check, self, prefix)

	def has_suffix(self, suffix:"Sequence") -> bool:
		""" Both must be finite. """
		return self.reverse().has_prefix(suffix.reverse())

	def has_infix(self, infix:"Sequence") -> bool:
		infix = infix.memoize()
		return self.suffixes().any(lambda suffix: suffix.has_prefix(infix))

	def has_subsequence(self, sub:"Sequence") -> bool:
		""" Are the elements of sub all here, in order, though maybe not adjacent? """
		def check(again):
			return lambda seq, rest: rest.match_lazy(
				lambda want, want_tail: seq.match_lazy(
					lambda x, x_tail: call(again, x_tail, want_tail if _same(x, want) else rest),
					lambda: terminate(False),
				),
				lambda: terminate(True),
			)
		return evaluate(check, self, sub.memoize())

	def _neighbors_all(self, relation) -> bool:
		return self.zip_adjacent(relation).all(identity)

	def increasing(self, key=identity) -> bool:
		return self._neighbors_all(predicates.increasing(key))

	def strictly_increasing(self, key=identity) -> bool:
		return self._neighbors_all(predicates.strictly_increasing(key))

	def decreasing(self, key=identity) -> bool:
		return self._neighbors_all(predicates.decreasing(key))

	def strictly_decreasing(self, key=identity) -> bool:
		return self._neighbors_all(predicates.strictly_decreasing(key))

	def pairwise_distinct(self, key=identity) -> bool:
		""" No two elements share a key. The keys must be hashable. """
		seen = set()
		def novel(x):
			k = key(x)
			if k in seen: return False
			seen.add(k)
			return True
		return self.all(novel)

	def maximum(self, key=identity) -> Maybe:
		""" The first of the greatest. """
		return self.fold_left1(maximum(key))

	def minimum(self, key=identity) -> Maybe:
		return self.fold_left1(minimum(key))

	############################
	# Folds and scans

	def fold_left(self, initial, fn):
		acc = initial
		for x in self: acc = fn(acc, x)
		return acc

	def fold_left1(self, fn) -> Maybe:
		return self.match(lambda head, tail: Maybe.of(tail.fold_left(head, fn)), Maybe.empty)

	def fold_right(self, initial, fn):
		""" fn(x1, fn(x2, ... fn(xn, initial))), worked from the right without recursion. """
		return self.reverse().fold_left(initial, lambda acc, x: fn(x, acc))

	def fold_right1(self, fn) -> Maybe:
		return self.reverse().fold_left1(flip(fn))

	def fold_right_until(self, initial, fn):
		"""
		A right fold which may stop early. For each element from the left, fn
		returns either Left(answer), meaning "the fold of everything from here
		on is this; look no further", or Right(step), where step(acc) combines
		this element with the fold of what follows.

		The multiplication of a sequence stops at the first zero this way.
		"""
		def fold(again):
			return lambda seq, pending: seq.match(
				lambda x, tail: fn(x).match(
					lambda answer: terminate(pending.fold_left(answer, _feed)),
					lambda step: call(again, tail, Cons(Ready(step), pending)),
				),
				lambda: terminate(pending.fold_left(initial, _feed)),
			)
		return evaluate(fold, self, EMPTY)

	def fold_right_lazy(self, initial, fn):
		"""
		fn(x, rest) where rest is a Deferred of the fold over the remaining elements.
		Whatever fn does not force is never computed, so this can fold infinite sequences.
		"""
		return self.match(lambda x, tail: fn(x, Thunk(lambda: tail.fold_right_lazy(initial, fn))), lambda: initial)

	def scan_left(self, initial, fn) -> "Sequence":
		""" initial, fn(initial, x1), fn(fn(initial, x1), x2), ... """
		return Cons(Ready(initial), _lazy(lambda: self.match(lambda x, tail: tail.scan_left(fn(initial, x), fn), _empty)))

	def scan_left1(self, fn) -> "Sequence":
		return _lazy(lambda: self.match(lambda x, tail: tail.scan_left(x, fn), _empty))

	def scan_right(self, initial, fn) -> "Sequence":
		""" Every suffix's right fold, longest first. Finite sequences only. """
		return self.reverse().scan_left(initial, lambda acc, x: fn(x, acc)).reverse()

	def scan_right1(self, fn) -> "Sequence":
		return self.reverse().scan_left1(flip(fn)).reverse()

	def scan_right_lazy(self, initial, fn) -> "Sequence":
		""" As scan_right, but fn is as in fold_right_lazy. """
		def step(head, tail):
			rest = tail.scan_right_lazy(initial, fn).memoize()
			folded = Thunk(lambda: rest.match(_first, _impossible))
			return Cons(Thunk(lambda: fn(head.force(), folded)), rest)
		return _lazy(lambda: self.match_lazy(step, lambda: Cons(Ready(initial), EMPTY)))

	############################
	# Transformations

	def map(self, fn) -> "Sequence":
		return _lazy(lambda: self.match_lazy(lambda head, tail: Cons(fmap(head, fn), tail.map(fn)), _empty))

	def flat_map(self, fn) -> "Sequence":
		""" fn produces a Sequence (or any iterable) for each element. """
		return flatten(self.map(lambda x: _as_sequence(fn(x))))

	def filter(self, predicate) -> "Sequence":
		def keep():
			return self.skip_while(predicates.negate(predicate)).match_lazy(
				lambda head, tail: Cons(head, tail.filter(predicate)), _empty)
		return _lazy(keep)

	def apply(self, functions:"Sequence") -> "Sequence":
		""" Every function, applied to every element: function-major order. """
		return _lazy(lambda: EMPTY if self.is_empty() else functions.flat_map(self.map))

	def apply2(self, other:"Sequence", fn) -> "Sequence":
		""" fn over the Cartesian product: for each x here, for each y there, fn(x, y). """
		return _lazy(lambda: EMPTY if other.is_empty() else self.flat_map(lambda x: other.map(lambda y: fn(x, y))))

	def zip(self, other:"Sequence") -> "Sequence":
		return self.zip_with(other, Pair.of)

	def zip_with(self, other:"Sequence", fn) -> "Sequence":
		""" Stops with the shorter. """
		return _lazy(lambda: self.match_lazy(
			lambda x, xs: other.match_lazy(
				lambda y, ys: Cons(Thunk(lambda: fn(x.force(), y.force())), xs.zip_with(ys, fn)),
				_empty,
			),
			_empty,
		))

	def zip_adjacent(self, fn=Pair.of) -> "Sequence":
		""" Each element with its successor: one shorter than the original, or empty. """
		source = self.memoize()
		return source.zip_with(source.skip(1), fn)

	def index(self) -> "Sequence":
		""" Pairs of (position, element). """
		return _counting(0).zip(self)

	def indices(self) -> "Sequence":
		return _counting(0).zip_with(self, _left)

	def interleave(self, other:"Sequence") -> "Sequence":
		""" x1, y1, x2, y2, ... as far as both go. """
		return flatten(self.zip_with(other, lambda x, y: Sequence.of(x, y)))

	def concatenate(self, other) -> "Sequence":
		""" other may be a Sequence, or a Deferred or callable producing one. """
		return Concat(self, _as_tail(other))

	def append(self, element) -> "Sequence":
		return self.concatenate(Cons(as_deferred(element), EMPTY))

	def prepend(self, element) -> "Sequence":
		return Cons(as_deferred(element), self)

	def insert(self, index:int, element) -> "Sequence":
		"""
		Put the element at the given position, shifting the rest along.
		An index past the end changes nothing. A negative one changes nothing either.
		"""
		if index < 0: return self
		if index == 0: return self.prepend(element)
		return _lazy(lambda: self.match_lazy(lambda head, tail: Cons(head, tail.insert(index - 1, element)), _empty))

	def insert_all(self, index:int, elements:"Sequence") -> "Sequence":
		""" Put all the elements at the given position. A negative index first drops that many of them. """
		if index <= 0: return elements.skip(-index).concatenate(self)
		return _lazy(lambda: self.match_lazy(lambda head, tail: Cons(head, tail.insert_all(index - 1, elements)), _empty))

	def intersperse(self, separator) -> "Sequence":
		""" x1, separator, x2, separator, ... xn """
		sep = as_deferred(separator)
		def after_first(seq):
			return _lazy(lambda: seq.match_lazy(lambda head, tail: Cons(sep, Cons(head, after_first(tail))), _empty))
		return _lazy(lambda: self.match_lazy(lambda head, tail: Cons(head, after_first(tail)), _empty))

	def reverse(self) -> "Sequence":
		""" Finite sequences only. Heads stay unforced. The result is computed once. """
		def build():
			acc = EMPTY
			for head, _ in self._links(): acc = Cons(head, acc)
			return acc
		return Lazy(Thunk(build))

	def sort(self, key=None, reverse=False) -> "Sequence":
		""" A stable sort, performed once, when first needed. """
		return Lazy(Thunk(lambda: _from_list(sorted(self, key=key, reverse=reverse))))

	def cycle(self, times=None) -> "Sequence":
		""" Round and round, forever or the given number of times. An empty sequence stays empty. """
		if times is None:
			return _lazy(lambda: EMPTY if self.is_empty() else self.concatenate(lambda: self.cycle()))
		if times <= 0: return EMPTY
		return self.concatenate(lambda: self.cycle(times - 1))

	def pad(self, padding) -> "Sequence":
		""" Follow the end with the padding, forever. """
		return self.concatenate(Sequence.repeat(padding))

	def extend(self, fn) -> "Sequence":
		""" After the last element x, continue with fn(x), fn(fn(x)), and so on. """
		def build():
			return self.match_lazy(
				lambda head, tail: Cons(head, tail.extend(fn)) if not tail.is_empty() else Sequence.iterate(head.force(), fn),
				_empty,
			)
		return _lazy(build)

	def take(self, n:int) -> "Sequence":
		if n <= 0: return EMPTY
		return _lazy(lambda: self.match_lazy(lambda head, tail: Cons(head, tail.take(n - 1)), _empty))

	def take_while(self, predicate) -> "Sequence":
		return _lazy(lambda: self.match(
			lambda x, tail: Cons(Ready(x), tail.take_while(predicate)) if predicate(x) else EMPTY,
			_empty,
		))

	def skip(self, n:int) -> "Sequence":
		if n <= 0: return self
		def drop(again):
			def step(seq, k):
				if k == 0: return terminate(seq)
				return seq.match_lazy(lambda _, tail: call(again, tail, k - 1), lambda: terminate(EMPTY))
			return step
		return _lazy(lambda: evaluate(drop, self, n))

	def skip_while(self, predicate) -> "Sequence":
		def drop(again):
			return lambda seq: seq.match_lazy(
				lambda head, tail: call(again, tail) if predicate(head.force()) else terminate(Cons(head, tail)),
				lambda: terminate(EMPTY),
			)
		return _lazy(lambda: evaluate(drop, self))

	def step(self, n:int) -> "Sequence":
		""" Every nth element, starting with the first. """
		if n <= 0: return self.take(1)
		if n == 1: return self
		return _lazy(lambda: self.match_lazy(lambda head, tail: Cons(head, tail.skip(n - 1).step(n)), _empty))

	def slice(self, start:int, stop:int) -> "Sequence":
		""" As with Python's slices: from start, up to but not including stop. """
		return self.take(stop).skip(start)

	def slice_length(self, start:int, length:int) -> "Sequence":
		return self.skip(start).take(length)

	def delete(self, index:int) -> "Sequence":
		""" Leave out the element at index, if any. """
		if index < 0: return self
		return _lazy(lambda: self.match_lazy(lambda head, tail: tail if index == 0 else Cons(head, tail.delete(index - 1)), _empty))

	def delete_slice(self, start:int, stop:int) -> "Sequence":
		if stop <= start: return self
		return self.take(start).concatenate(lambda: self.skip(stop))

	def replace(self, index:int, element) -> "Sequence":
		""" The element at index is swapped for another. No such index, no change. """
		if index < 0: return self
		new = as_deferred(element)
		return _lazy(lambda: self.match_lazy(
			lambda head, tail: Cons(new, tail) if index == 0 else Cons(head, tail.replace(index - 1, element)),
			_empty,
		))

	def update(self, index:int, fn) -> "Sequence":
		""" As replace, but the new element is fn of the old. """
		if index < 0: return self
		return _lazy(lambda: self.match_lazy(
			lambda head, tail: Cons(fmap(head, fn), tail) if index == 0 else Cons(head, tail.update(index - 1, fn)),
			_empty,
		))

	def deduplicate(self, key=identity) -> "Sequence":
		""" Keep the first of each key. Keys must be hashable. """
		def build():
			seen = set()
			def novel(x):
				k = key(x)
				if k in seen: return False
				seen.add(k)
				return True
			return self.filter(novel)
		return _lazy(build)

	def select(self) -> "Sequence":
		"""
		Each element paired with the rest of the sequence without it:
		[1, 2, 3] gives (1, [2, 3]), (2, [1, 3]), (3, [1, 2]).
		"""
		def build():
			return self.match_lazy(
				lambda head, tail: Cons(
					Ready(Pair(head, Ready(tail))),
					tail.select().map(lambda pair: pair.match_lazy(lambda chosen, rest: Pair(chosen, Ready(Cons(head, rest.force()))))),
				),
				_empty,
			)
		return _lazy(build)

	def partition(self, predicate) -> Pair:
		""" (those which pass, those which fail) """
		source = self.memoize()
		return Pair.of(source.filter(predicate), source.filter(predicates.negate(predicate)))

	def span(self, predicate) -> Pair:
		""" (the longest prefix which passes, everything after it) """
		source = self.memoize()
		return Pair.of(source.take_while(predicate), source.skip_while(predicate))

	def split_at(self, n:int) -> Pair:
		source = self.memoize()
		return Pair.of(source.take(n), source.skip(n))

	def slide(self, window:int, step:int=1) -> "Sequence":
		""" Windows of the given size, each one step along from the last. The last few may be short. """
		if window < 1: return EMPTY
		source = self.memoize()
		return _lazy(lambda: source.match_non_empty(
			lambda seq: Cons(Ready(seq.take(window)), seq.skip(step).slide(window, step)),
			_empty,
		))

	def chunk(self, length:int) -> "Sequence":
		""" Consecutive pieces of the given length; the last may be shorter. """
		return self.slide(length, length)

	def group(self, relation=operator.eq) -> "Sequence":
		"""
		Runs of adjacent elements, each related to the one before it.
		The default relation is equality: [1, 1, 2, 1] gives [1, 1], [2], [1].
		"""
		source = self.memoize()
		return _lazy(lambda: source.match_lazy(lambda head, tail: _runs(head, tail, relation), _empty))

	def group_by(self, key) -> "Sequence":
		""" Runs of adjacent elements sharing the same key. """
		return self.group(lambda a, b: key(a) == key(b))

	def unzip(self, first, second) -> Pair:
		""" Two sequences, of first(x) and of second(x) for each x. """
		source = self.memoize()
		return Pair.of(source.map(first), source.map(second))

	############################
	# Combinatorics

	def prefixes(self) -> "Sequence":
		""" Empty first, then each longer prefix in turn. """
		source = self.memoize()
		return Cons(Ready(EMPTY), source.indices().map(lambda i: source.take(i + 1)))

	def suffixes(self) -> "Sequence":
		""" The whole sequence first, then each shorter suffix, ending with empty. """
		return _lazy(lambda: self.match_lazy(
			lambda head, tail: Cons(Ready(Cons(head, tail)), tail.suffixes()),
			lambda: Cons(Ready(EMPTY), EMPTY),
		))

	def infixes(self) -> "Sequence":
		""" Every contiguous piece: empty, then the non-empty prefixes of each suffix. """
		return Cons(Ready(EMPTY), self.suffixes().flat_map(lambda suffix: suffix.prefixes().skip(1)))

	def subsequences(self) -> "Sequence":
		"""
		Every selection of elements which keeps their order.
		Those with the head come first: [a, b] gives [a, b], [a], [b], [].
		"""
		def with_and_without(head, tail):
			without = tail.subsequences().memoize()
			return without.map(lambda sub: Cons(head, sub)).concatenate(without)
		return _lazy(lambda: self.match_lazy(with_and_without, lambda: Cons(Ready(EMPTY), EMPTY)))

	def combinations(self, k:int) -> "Sequence":
		"""
		Every selection of exactly k elements, keeping their order.
		Those with the head come first. There is exactly one way to choose none.
		"""
		if k < 0: return EMPTY
		if k == 0: return Cons(Ready(EMPTY), EMPTY)
		def choose(head, tail):
			with_head = tail.combinations(k - 1).map(lambda rest: Cons(head, rest))
			return with_head.concatenate(lambda: tail.combinations(k))
		return _lazy(lambda: self.match_lazy(choose, _empty))

	def permutations(self) -> "Sequence":
		""" Every ordering. A sorted sequence yields its permutations in lexicographic order. """
		def arrange(seq):
			return seq.select().flat_map(lambda pair: pair.match_lazy(
				lambda chosen, rest: rest.force().permutations().map(lambda p: Cons(chosen, p))
			))
		return _lazy(lambda: self.match_non_empty(arrange, lambda: Cons(Ready(EMPTY), EMPTY)))

	def partitions(self) -> "Sequence":
		"""
		Every way to divide the elements into non-empty cells.
		[a, b] gives [[a, b]] and then [[b], [a]]. An empty sequence has one partition with no cells.
		"""
		return _lazy(lambda: self.match_lazy(
			lambda head, tail: tail.partitions().flat_map(lambda partition: _placements(head, partition)),
			lambda: Cons(Ready(EMPTY), EMPTY),
		))

	def sequences(self) -> "Sequence":
		""" Every finite sequence over these elements, shortest first, starting with the empty one. """
		def build():
			if self.is_empty(): return Cons(Ready(EMPTY), EMPTY)
			alphabet = self.memoize()
			def longer(level): return alphabet.apply2(level, lambda x, seq: Cons(Ready(x), seq)).memoize()
			return flatten(Sequence.iterate(Cons(Ready(EMPTY), EMPTY), longer))
		return _lazy(build)


class Empty(Sequence):
	__slots__ = ()
	def match_lazy(self, on_cons, on_empty):
		return on_empty()
	def memoize(self): return self

EMPTY = Empty()

class Cons(Sequence):
	__slots__ = ("_head", "_tail")
	def __init__(self, head:Deferred, tail:Sequence):
		assert isinstance(head, Deferred), head
		assert isinstance(tail, Sequence), tail
		self._head = head
		self._tail = tail
	def match_lazy(self, on_cons, on_empty):
		return on_cons(self._head, self._tail)

class Lazy(Sequence):
	""" A sequence which has not yet decided whether it is empty. """
	__slots__ = ("_principal",)
	def __init__(self, principal:Deferred):
		assert isinstance(principal, Deferred), principal
		self._principal = principal
	def resolve(self) -> Sequence:
		return _settle(self)
	def match_lazy(self, on_cons, on_empty):
		return _settle(self).match_lazy(on_cons, on_empty)

class Memoized(Lazy):
	""" Each node, head and tail alike, is worked out at most once. """
	__slots__ = ()
	def __init__(self, source:Sequence):
		super().__init__(Thunk(lambda: source.match_lazy(_memo_cons, _empty)))
	def memoize(self): return self

class Concat(Sequence):
	"""
	One sequence followed by another. Appending in a loop builds these nested
	to the left; resolving rotates them to the right one node per step, so
	the depth of the nesting costs time but not stack.
	"""
	__slots__ = ("_left", "_right")
	def __init__(self, left:Sequence, right:Sequence):
		assert isinstance(left, Sequence), left
		assert isinstance(right, Sequence), right
		self._left = left
		self._right = right
	def _rotate(self) -> Sequence:
		left, right = self._left, self._right
		if isinstance(left, Concat): return Concat(left._left, Concat(left._right, right))
		if isinstance(left, Lazy): return Concat(left._principal.force(), right)
		return left.match_lazy(lambda head, tail: Cons(head, Concat(tail, right)), lambda: right)
	def resolve(self) -> Sequence:
		return _settle(self)
	def match_lazy(self, on_cons, on_empty):
		return _settle(self).match_lazy(on_cons, on_empty)


############################
# Helpers

def _settle(seq:Sequence) -> Sequence:
	"""
	Unwrap layers of laziness and concatenation in a loop rather than by recursion.
	A deferred sequence may well produce another deferred sequence.
	"""
	while True:
		if isinstance(seq, Lazy): seq = seq._principal.force()
		elif isinstance(seq, Concat): seq = seq._rotate()
		else: break
	assert isinstance(seq, (Empty, Cons)), seq
	return seq

def flatten(sequences:Sequence) -> Sequence:
	""" One sequence from a sequence of sequences. Empty ones cost a step each, not a stack frame. """
	return _lazy(lambda: sequences.match(lambda first, rest: first.concatenate(lambda: flatten(rest)), _empty))

def _lazy(fn) -> Lazy:
	return Lazy(Suspension(fn))

def _as_tail(it) -> Sequence:
	if isinstance(it, Sequence): return it
	if isinstance(it, Deferred): return Lazy(it)
	assert callable(it), it
	return Lazy(Suspension(it))

def _as_sequence(it) -> Sequence:
	return it if isinstance(it, Sequence) else Sequence.from_iterable(it)

def _from_list(items:list) -> Sequence:
	seq = EMPTY
	for x in reversed(items): seq = Cons(Ready(x), seq)
	return seq

def _pull(iterator) -> Sequence:
	""" Memoized by construction: each node is a thunk, and pulls at most once. """
	def node():
		try: item = next(iterator)
		except StopIteration: return EMPTY
		return Cons(Ready(item), Lazy(Thunk(node)))
	return Lazy(Thunk(node))

def _counting(start:int) -> Sequence:
	return Sequence.iterate(start, lambda n: n + 1)

def _memo_cons(head, tail):
	return Cons(memoize_deferred(head), tail.memoize())

def _all_but_last(head, tail) -> Sequence:
	return _lazy(lambda: tail.match_lazy(lambda h, t: Cons(head, _all_but_last(h, t)), _empty))

def _runs(head, tail, relation) -> Sequence:
	""" The run starting at head, followed by the runs after it. """
	def rest_of_run(previous, seq):
		return _lazy(lambda: seq.match_lazy(
			lambda h, t: Cons(h, rest_of_run(h, t)) if relation(previous.force(), h.force()) else EMPTY,
			_empty,
		))
	def after_run(again):
		return lambda previous, seq: seq.match_lazy(
			lambda h, t: call(again, h, t) if relation(previous.force(), h.force()) else terminate(Cons(h, t)),
			lambda: terminate(EMPTY),
		)
	following = _lazy(lambda: evaluate(after_run, head, tail).match_lazy(lambda h, t: _runs(h, t, relation), _empty))
	return Cons(Ready(Cons(head, rest_of_run(head, tail))), following)

def _placements(element:Deferred, partition:Sequence) -> Sequence:
	""" Every way to add one element to a partition: into each cell in turn, or else as a cell by itself. """
	return _lazy(lambda: partition.match(
		lambda cell, cells: Cons(
			Ready(Cons(Ready(Cons(element, cell)), cells)),
			_placements(element, cells).map(lambda p: Cons(Ready(cell), p)),
		),
		lambda: Cons(Ready(Cons(Ready(Cons(element, EMPTY)), EMPTY)), EMPTY),
	))

def _same(x:Deferred, y:Deferred) -> bool:
	return x is y or x.force() == y.force()

def _feed(acc, fn): return fn(acc)
def _link(head, tail): return head, tail
def _first(head, tail): return head
def _left(a, b): return a
def _impossible(): raise AssertionError("This sequence was supposed to have an element.")
def _empty(*_): return EMPTY
def _true(*_): return True
def _false(*_): return False
def _none(*_): return None
