"""Domain layer — pure data types and algorithms.

Must never import from infrastructure, services, commands, or output.
"""
