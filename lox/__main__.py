"""
Lets `python -m lox` do what the `lox` console script does.
"""
from .cmdline import main

main()
