"""
Recursion without the stack.

A recursive function which returns a Trampoline instead of calling itself
describes one step at a time. The loop in Trampoline.evaluate takes those
steps one after another, so the depth of the recursion is limited by
patience rather than by the interpreter's stack.

	def count_down(n):
		return terminate("liftoff") if n == 0 else call(count_down, n-1)

	count_down(1_000_000).evaluate()

Recursive functions passed to `evaluate` or `execute` need no name at all:

	evaluate(lambda again: lambda n, acc: terminate(acc) if n == 0 else call(again, n-1, n*acc), 10, 1)
"""
from .functions import fix, apply


class Trampoline:
	""" Either finished, or ready to take one more step. """
	def finished(self) -> bool:
		raise NotImplementedError(type(self))

	def evaluate(self):
		"""
		Take steps until done, then return the final value.
		This is a loop, not a recursion; that is the whole point.
		"""
		it = self
		while isinstance(it, More):
			it = it.step()
		assert isinstance(it, Done), it
		return it.value

class Done(Trampoline):
	__slots__ = ("value",)
	def __init__(self, value):
		self.value = value
	def __repr__(self): return "<Done: %r>"%(self.value,)
	def finished(self): return True

class More(Trampoline):
	__slots__ = ("step",)
	def __init__(self, step):
		assert callable(step), step
		self.step = step
	def __repr__(self): return "<More: %r>"%(self.step,)
	def finished(self): return False


def terminate(value=None) -> Done:
	return Done(value)

def call(fn, *args, curried=False) -> More:
	"""
	Suspend the recursive call `fn(*args)` as the next step.
	With curried=True, the arguments are fed one at a time: `fn(a)(b)(c)`.
	"""
	if not args: return More(fn)
	elif curried: return More(lambda: apply(fn, *args))
	else: return More(lambda: fn(*args))

def evaluate(transformer, *args, curried=False):
	"""
	Fix a trampolined recursive definition, apply it to the arguments,
	run it to completion, and return the result.
	"""
	return _start(transformer, args, curried).evaluate()

def execute(transformer, *args, curried=False) -> None:
	""" As evaluate, but for the effect alone. """
	_start(transformer, args, curried).evaluate()

def _start(transformer, args, curried) -> Trampoline:
	function = fix(transformer)
	first = apply(function, *args) if curried else function(*args)
	assert isinstance(first, Trampoline), first
	return first
