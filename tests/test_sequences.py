import functools
import operator
import unittest
from fractions import Fraction

from tarry import sequences
from tarry.maybe import Maybe
from tarry.either import Either
from tarry.pair import Pair
from tarry.sequence import Sequence, EMPTY


def lists(seqs):
	return [s.to_list() for s in seqs]


class SourceTests(unittest.TestCase):

	def test_naturals(self):
		self.assertEqual([0, 1, 2], sequences.naturals().take(3).to_list())
		self.assertEqual([5, 6], sequences.naturals(5).take(2).to_list())

	def test_range_inclusive(self):
		self.assertEqual([1, 2, 3], sequences.range_inclusive(1, 3).to_list())
		self.assertEqual([3, 2, 1], sequences.range_inclusive(3, 1).to_list())
		self.assertEqual([4], sequences.range_inclusive(4, 4).to_list())

	def test_rationals_in_calkin_wilf_order(self):
		expect = [Fraction(1), Fraction(1, 2), Fraction(2), Fraction(1, 3), Fraction(3, 2), Fraction(2, 3), Fraction(3)]
		self.assertEqual(expect, sequences.rationals().take(7).to_list())

	def test_rationals_do_not_repeat(self):
		self.assertTrue(sequences.rationals().take(500).pairwise_distinct())


class CombiningTests(unittest.TestCase):

	def test_concatenate(self):
		self.assertEqual([1, 2, 3], sequences.concatenate(Sequence.of(1), EMPTY, Sequence.of(2, 3)).to_list())
		self.assertTrue(sequences.concatenate().is_empty())

	def test_interleave(self):
		mixed = sequences.interleave(Sequence.of(1, 2, 3), Sequence.of("a", "b"), sequences.naturals(7))
		self.assertEqual([1, "a", 7, 2, "b", 8], mixed.to_list())

	def test_zip_makes_rows(self):
		rows = sequences.zip(Sequence.of(1, 2, 3), Sequence.of(4, 5), sequences.naturals())
		self.assertEqual([[1, 4, 0], [2, 5, 1]], lists(rows))
		self.assertTrue(sequences.zip().is_empty())

	def test_transpose_of_infinite_rows(self):
		rows = Sequence.of(sequences.naturals(), sequences.naturals(10))
		self.assertEqual([[0, 10], [1, 11], [2, 12]], lists(sequences.transpose(rows).take(3)))

	def test_unzip(self):
		left, right = sequences.unzip(Sequence.of(Pair.of(1, "a"), Pair.of(2, "b")))
		self.assertEqual([1, 2], left.to_list())
		self.assertEqual(["a", "b"], right.to_list())

	def test_product_varies_the_last_fastest(self):
		grid = sequences.product(Sequence.of(1, 2), Sequence.of("a", "b"))
		self.assertEqual([[1, "a"], [1, "b"], [2, "a"], [2, "b"]], lists(grid))
		self.assertEqual([[]], lists(sequences.product()))
		self.assertTrue(sequences.product(Sequence.of(1), EMPTY).is_empty())


class SpecialValueTests(unittest.TestCase):

	def test_maybe(self):
		self.assertEqual(Maybe.of(Sequence.of(1, 2)), sequences.maybe(Sequence.of(Maybe.of(1), Maybe.of(2))))
		self.assertTrue(sequences.maybe(Sequence.of(Maybe.of(1), Maybe.empty())).is_empty())
		self.assertEqual(Maybe.of(EMPTY), sequences.maybe(EMPTY))

	def test_rights_and_lefts(self):
		self.assertEqual(Either.right(Sequence.of(1, 2)), sequences.rights(Sequence.of(Either.right(1), Either.right(2))))
		mixed = Sequence.of(Either.right(1), Either.left("oops"), Either.left("again"))
		self.assertEqual(Either.left("oops"), sequences.rights(mixed))
		self.assertEqual(Either.right(1), sequences.lefts(mixed))
		self.assertEqual(Either.left(Sequence.of("x")), sequences.lefts(Sequence.of(Either.left("x"))))

	def test_partition_eithers(self):
		mixed = Sequence.of(Either.right(1), Either.left("a"), Either.right(2))
		lefts, rights = sequences.partition_eithers(mixed)
		self.assertEqual(["a"], lefts.to_list())
		self.assertEqual([1, 2], rights.to_list())


class ComparisonTests(unittest.TestCase):

	def test_lexicographically(self):
		compare = sequences.lexicographically()
		self.assertEqual(0, compare(EMPTY, EMPTY))
		self.assertEqual(-1, compare(EMPTY, Sequence.of(1)))
		self.assertEqual(1, compare(Sequence.of(1, 2), Sequence.of(1)))
		self.assertEqual(-1, compare(Sequence.of(1, 2), Sequence.of(1, 3)))
		self.assertEqual(0, compare(sequences.naturals().take(100_000), sequences.naturals().take(100_000)))

	def test_sorting_with_a_key(self):
		words = [Sequence.of("bb", "a"), Sequence.of("c"), Sequence.of("dd")]
		ordered = sorted(words, key=functools.cmp_to_key(sequences.lexicographically(len)))
		self.assertEqual([["c"], ["dd"], ["bb", "a"]], lists(ordered))

	def test_lifting(self):
		self.assertEqual([2, 4], sequences.lift(lambda x: 2 * x)(Sequence.of(1, 2)).to_list())
		self.assertEqual([11, 21, 12, 22], sequences.lift2(operator.add)(Sequence.of(1, 2), Sequence.of(10, 20)).to_list())


class AggregateTests(unittest.TestCase):

	def test_sum_and_product(self):
		self.assertEqual(10, sequences.sum_of(Sequence.of(1, 2, 3, 4)))
		self.assertEqual(0, sequences.sum_of(EMPTY))
		self.assertEqual(24, sequences.product_of(Sequence.of(1, 2, 3, 4)))
		self.assertEqual(1, sequences.product_of(EMPTY))

	def test_product_stops_at_zero(self):
		self.assertEqual(0, sequences.product_of(sequences.naturals(1).map(lambda n: n % 5)))

	def test_all_and_any(self):
		self.assertTrue(sequences.all_of(Sequence.of(True, 1)))
		self.assertFalse(sequences.all_of(sequences.naturals()))
		self.assertTrue(sequences.any_of(sequences.naturals()))
		self.assertFalse(sequences.any_of(EMPTY))


if __name__ == '__main__':
	unittest.main()
