"""
Small higher-order helpers, chief among them the fixed-point combinator.
"""
from .diagnostics import BlackHole


def fix(transformer):
	"""
	Tie the recursive knot for a function that has no name.

	The transformer receives "the function so far" and returns the finished
	version. What it receives is a proxy which looks up the finished function
	when called, so the transformer must only *mention* its argument, not call
	it, while building. Calling it too early raises BlackHole.

	The proxy passes along whatever arguments it gets, so the same fix serves
	plain functions, curried ones, and ones that return trampolines:

		factorial = fix(lambda f: lambda n: 1 if n == 0 else n * f(n-1))
		adder = fix(lambda f: lambda a: lambda b: a if b == 0 else f(a+1)(b-1))
	"""
	cell = []
	def proxy(*args, **kwargs):
		if not cell: raise BlackHole(transformer)
		return cell[0](*args, **kwargs)
	cell.append(transformer(proxy))
	return cell[0]

def apply(fn, *args):
	""" Curried application: apply(f, a, b, c) is f(a)(b)(c). """
	for a in args: fn = fn(a)
	return fn

def curry(fn):
	return lambda a: lambda b: fn(a, b)

def uncurry(fn):
	return lambda a, b: fn(a)(b)

def flip(fn):
	return lambda a, b: fn(b, a)

def compose(*fns):
	""" compose(f, g, h)(x) is f(g(h(x))). With no functions, the identity. """
	def composite(x):
		for fn in reversed(fns): x = fn(x)
		return x
	return composite

def identity(x):
	return x

def constant(value):
	return lambda *_: value

def gather(fn):
	""" From a function of two arguments, make one which takes a pair. """
	return lambda pair: pair.match(fn)

def spread(fn):
	""" From a function of a pair, make one which takes two arguments. """
	from .pair import Pair
	return lambda a, b: fn(Pair.of(a, b))

def on(fn, key):
	""" Combine two things by way of the same view of each: on(operator.eq, len). """
	return lambda a, b: fn(key(a), key(b))

def join(fn):
	""" Use the same argument twice: join(operator.mul) squares. """
	return lambda a: fn(a, a)

def let(*args):
	""" let(a, b, fn) is fn(a, b): a way to name a value inside an expression. """
	*values, fn = args
	return fn(*values)

def maximum(key=identity):
	""" A binary chooser for the greater of two. Ties go to the first. """
	return lambda a, b: b if key(b) > key(a) else a

def minimum(key=identity):
	""" A binary chooser for the lesser of two. Ties go to the first. """
	return lambda a, b: b if key(b) < key(a) else a
