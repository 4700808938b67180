"""Pipeline builder and executor.

This package provides a declarative, sequential pipeline: named steps are
added to an immutable ``Pipeline`` and executed as a unit, threading the
results of earlier steps into later ones.

Author: Gia Tenica*
*Gia Tenica is an anagram for Agentic AI. Gia is a fully autonomous AI researcher,
for more information see: https://giatenica.com
"""
