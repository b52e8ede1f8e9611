"""
Things done with several sequences at once, or with sequences of special things.
"""
import math
import operator
from fractions import Fraction
from .thunk import Ready
from .trampoline import call, terminate, evaluate
from .functions import identity
from .maybe import Maybe
from .either import Either
from .pair import Pair
from .sequence import Sequence, Cons, EMPTY, flatten

def naturals(start:int=0) -> Sequence:
	return Sequence.iterate(start, lambda n: n + 1)

def range_inclusive(start:int, stop:int) -> Sequence:
	""" Both ends included. Counts down if stop is below start. """
	step = 1 if start <= stop else -1
	return Sequence.iterate(start, lambda n: n + step).take(abs(stop - start) + 1)

def rationals() -> Sequence:
	"""
	Every positive rational exactly once, in lowest terms, in Calkin-Wilf order:
	1, 1/2, 2, 1/3, 3/2, 2/3, 3, ...
	"""
	return Sequence.iterate(Fraction(1), lambda q: 1 / (2 * math.floor(q) - q + 1))

def concatenate(*sequences:Sequence) -> Sequence:
	return flatten(Sequence.of(*sequences))

def interleave(*sequences:Sequence) -> Sequence:
	""" Round-robin, one from each in turn, until the first of them runs dry. """
	return flatten(zip(*sequences))

def zip(*sequences:Sequence) -> Sequence:
	"""
	Columns to rows: a sequence of sequences, the nth holding the nth element
	of each argument. Stops with the shortest.
	"""
	return transpose(Sequence.of(*sequences))

def transpose(rows:Sequence) -> Sequence:
	""" rows must be finite, though each row need not be. """
	def build():
		if rows.is_empty() or rows.any(Sequence.is_empty): return EMPTY
		source = rows.memoize()
		return Cons(Ready(source.map(_head)), transpose(source.map(_tail)))
	return Sequence.lazy(build)

def unzip(pairs:Sequence) -> Pair:
	""" A sequence of pairs becomes a pair of sequences. """
	return pairs.unzip(Pair.first, Pair.second)

def product(*sequences:Sequence) -> Sequence:
	"""
	The Cartesian product, as a sequence of sequences.
	The first argument varies slowest, as with itertools.product.
	"""
	if not sequences: return Sequence.of(EMPTY)
	first, rest = sequences[0], product(*sequences[1:]).memoize()
	return first.apply2(rest, lambda x, tail: Cons(Ready(x), tail))

def maybe(maybes:Sequence) -> Maybe:
	""" All of the values, if every one is present; otherwise nothing. """
	source = maybes.memoize()
	def outcome():
		if source.any(Maybe.is_empty): return Maybe.empty()
		return Maybe.of(source.map(Maybe.or_throw))
	return Maybe.lazy(outcome)

def rights(eithers:Sequence) -> Either:
	""" All of the right values, unless there is a left, in which case the first left. """
	source = eithers.memoize()
	def outcome():
		return source.find(Either.is_left).match(
			identity,
			lambda: Either.right(source.map(lambda e: e.right_value().or_throw())),
		)
	return Either.lazy(outcome)

def lefts(eithers:Sequence) -> Either:
	""" The mirror image of rights. """
	source = eithers.memoize()
	def outcome():
		return source.find(Either.is_right).match(
			identity,
			lambda: Either.left(source.map(lambda e: e.left_value().or_throw())),
		)
	return Either.lazy(outcome)

def partition_eithers(eithers:Sequence) -> Pair:
	""" (all the left values, all the right values) """
	source = eithers.memoize()
	return Pair.of(
		source.flat_map(lambda e: e.left_value().sequence()),
		source.flat_map(lambda e: e.right_value().sequence()),
	)

def lexicographically(key=identity):
	"""
	A three-way comparison of sequences, element by element, then by length.
	Suitable for functools.cmp_to_key.
	"""
	def compare(again):
		return lambda xs, ys: xs.match(
			lambda x, x_tail: ys.match(
				lambda y, y_tail: _versus(key(x), key(y)) or call(again, x_tail, y_tail),
				lambda: terminate(1),
			),
			lambda: terminate(0 if ys.is_empty() else -1),
		)
	return lambda xs, ys: evaluate(compare, xs, ys)

def _versus(a, b):
	if a < b: return terminate(-1)
	if b < a: return terminate(1)
	return None

def lift(fn):
	""" A function of elements becomes a function of sequences. """
	return lambda seq: seq.map(fn)

def lift2(fn):
	""" A function of two elements becomes one over the Cartesian product of two sequences. """
	return lambda xs, ys: xs.apply2(ys, fn)

def sum_of(numbers:Sequence):
	return numbers.fold_left(0, operator.add)

def product_of(numbers:Sequence):
	""" Stops looking at the first zero. """
	return numbers.fold_right_until(1, lambda x: Either.left(0) if x == 0 else Either.right(lambda acc: x * acc))

def all_of(booleans:Sequence) -> bool:
	return booleans.all(identity)

def any_of(booleans:Sequence) -> bool:
	return booleans.any(identity)

def _head(seq): return seq.head().or_throw()
def _tail(seq): return seq.tail().or_throw()
