"""
Core domain models, mathematical primitives, and error taxonomy.

This module contains the foundational building blocks of the expression
evaluator that are independent of configuration, logging and the CLI.
"""
