"""
Infrastructure adapters for the tickets bounded context.

Each adapter implements a domain port (ABC). Storage engines are
external collaborators; the bundled adapter keeps tickets in memory.
"""
