"""
Example programs.

Run with ``python -m densela.examples.matrix_creation`` or
``python -m densela.examples.basic_matrix_operations``.
"""
