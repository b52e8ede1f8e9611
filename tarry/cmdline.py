"""
Show off a few famous infinite sequences, computed lazily.

{0}

For example:

    tarry primes -n 20

prints the first twenty primes, and

    tarry --list

names all the demonstrations on offer.
"""
import sys, argparse, operator
from .sequence import Sequence
from . import sequences

DEFAULT_COUNT = 10

def _primes():
	# Trial division by the primes found so far. The sequence consults itself,
	# which only works because it is memoized.
	def is_prime(n):
		return found.take_while(lambda p: p * p <= n).all(lambda p: n % p)
	found = Sequence.cons(2, lambda: sequences.naturals(3).step(2).filter(is_prime)).memoize()
	return found

def _fizzbuzz(n):
	return "Fizz"*(n % 3 == 0) + "Buzz"*(n % 5 == 0) or n

def _collatz(n):
	return n // 2 if n % 2 == 0 else 3 * n + 1

DEMOS = {
	"naturals": lambda: sequences.naturals(),
	"fibonacci": lambda: Sequence.recurrence(0, 1, operator.add),
	"primes": _primes,
	"rationals": sequences.rationals,
	"fizzbuzz": lambda: sequences.naturals(1).map(_fizzbuzz),
	"collatz": lambda: Sequence.iterate(27, _collatz, lambda n: n != 1).append(1),
	"triangles": lambda: sequences.naturals(1).scan_left1(operator.add),
}

parser = argparse.ArgumentParser(
	prog="tarry",
	description="Print the first few terms of some well-known lazy sequences.",
)
parser.add_argument("demo", nargs="?", help="which sequence to show; try 'primes'.")
parser.add_argument('-n', "--count", type=int, default=DEFAULT_COUNT, help="how many terms to print (default %d)." % DEFAULT_COUNT)
parser.add_argument('-l', "--list", action="store_true", help="List the demonstrations and stop.")
parser.add_argument('-v', "--verbose", action="count", help="Remark upon the proceedings on stderr.")

def demo(name:str) -> Sequence:
	from .diagnostics import NoSuchDemo
	try: return DEMOS[name]()
	except KeyError: raise NoSuchDemo(name) from None

def run(args):
	from .diagnostics import Report, NoSuchDemo
	report = Report(verbose=args.verbose)
	if args.list:
		for name in sorted(DEMOS): print(name)
		return
	if args.demo is None:
		parser.print_usage(sys.stderr)
		return 1
	try: seq = demo(args.demo)
	except NoSuchDemo:
		print("There is no demonstration called %r. Try --list." % args.demo, file=sys.stderr)
		return 1
	report.info("Showing", args.count, "terms of", args.demo)
	for i, term in enumerate(seq.take(args.count)):
		report.trace(2, "term", i)
		print(term)
	report.info("Done.")

def main():
	if len(sys.argv) > 1:
		exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))
