"""
So that `python -m tarry` does the same as the `tarry` command.
"""
from tarry.cmdline import main

main()
