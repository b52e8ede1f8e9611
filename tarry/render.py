"""
Text for the containers, for the benefit of people looking at them.
"""
from boozetools.support.foundation import Visitor
from .sequence import Sequence
from .maybe import Maybe
from .either import Either
from .pair import Pair

# A rendered sequence shows this many elements before giving up with an ellipsis.
REPR_LIMIT = 30

class Render(Visitor):
	""" Return a string representation of the container. """

	def element(self, it) -> str:
		if isinstance(it, (Sequence, Maybe, Either, Pair)):
			return self.visit(it)
		else:
			return repr(it)

	def visit_Empty(self, seq):
		return "[]"

	def visit_Cons(self, seq):
		shown = list(seq.take(REPR_LIMIT + 1))
		text = ", ".join(self.element(x) for x in shown[:REPR_LIMIT])
		if len(shown) > REPR_LIMIT:
			return "[%s, ...]" % text
		else:
			return "[%s]" % text

	def visit_Lazy(self, seq):
		return self.visit(seq.resolve())

	def visit_Memoized(self, seq):
		return self.visit(seq.resolve())

	def visit_Concat(self, seq):
		return self.visit(seq.resolve())

	def visit_Nothing(self, m):
		return "()"

	def visit_Some(self, m):
		return "(%s)" % self.element(m.or_throw())

	def visit_LazyMaybe(self, m):
		return self.visit(m.resolve())

	def visit_Left(self, e):
		return "(%s, ())" % self.element(e.merge())

	def visit_Right(self, e):
		return "((), %s)" % self.element(e.merge())

	def visit_LazyEither(self, e):
		return self.visit(e.resolve())

	def visit_Pair(self, p):
		return "(%s, %s)" % (self.element(p.first()), self.element(p.second()))

	def visit_LazyPair(self, p):
		return self.visit(p.resolve())
