"""
The things that go wrong, and a place to say so.
"""
import sys

class ValueDoesNotExist(AssertionError):
	""" Somebody insisted on a value which was not there. """
	def __init__(self, message="value does not exist"):
		super().__init__(message)

class BlackHole(RuntimeError):
	"""
	A computation demanded its own result while still working it out.
	Without this check, the result would be either infinite recursion
	or a thread waiting on itself forever.
	"""

class NoSuchDemo(KeyError):
	pass

class Report:
	""" Where a verbose run leaves its remarks. """
	def __init__(self, *, verbose:int=0):
		self._verbose = verbose or 0   # Because None is incomparable.

	def is_verbose(self): return self._verbose > 0

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def trace(self, level:int, *args):
		if self._verbose >= level:
			print("  "*(level-1)+" ".join(map(str, args)), file=sys.stderr)
