"""
Predicate algebra, and the comparisons which sequences like to be handed.
"""
from .functions import identity

def negate(p):
	return lambda *args: not p(*args)

def both(p, q):
	return lambda *args: p(*args) and q(*args)

def either(p, q):
	return lambda *args: p(*args) or q(*args)

def xor(p, q):
	return lambda *args: bool(p(*args)) != bool(q(*args))

def nor(p, q):
	return negate(either(p, q))

def nand(p, q):
	return negate(both(p, q))

def implies(p, q):
	return lambda *args: not p(*args) or q(*args)

def implied_by(p, q):
	return implies(q, p)

def iff(p, q):
	return negate(xor(p, q))

def equal_to(it, key=identity):
	k = key(it)
	return lambda x: key(x) == k

def less_than(it, key=identity):
	k = key(it)
	return lambda x: key(x) < k

def less_or_equal(it, key=identity):
	k = key(it)
	return lambda x: key(x) <= k

def greater_than(it, key=identity):
	k = key(it)
	return lambda x: key(x) > k

def greater_or_equal(it, key=identity):
	k = key(it)
	return lambda x: key(x) >= k

# Relations between neighbors:

def increasing(key=identity):
	return lambda a, b: key(a) <= key(b)

def strictly_increasing(key=identity):
	return lambda a, b: key(a) < key(b)

def decreasing(key=identity):
	return lambda a, b: key(a) >= key(b)

def strictly_decreasing(key=identity):
	return lambda a, b: key(a) > key(b)

def divides(dividend):
	""" divides(12)(4) is True: four goes into twelve. Zero divides nothing. """
	return lambda divisor: divisor != 0 and dividend % divisor == 0
