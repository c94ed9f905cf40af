"""Separator suppliers for the most common kinds of delimited lists.
Candidates are tried in order, so put the separators you'd most like to
break on first.
"""
from emitey.separators import Separators

comma = Separators(', ')
whitespace = Separators(' ')
dotted = Separators('.')
boolean_operators = Separators(' and ', ' or ', ' && ', ' || ')
arithmetic_operators = Separators(' + ', ' - ', ' * ', ' / ')
