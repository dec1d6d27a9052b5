"""CLI layer — argument parsing, output rendering, and error boundary.

This package is the outermost layer of the application.  It may import
from ``plugin``, ``core``, ``infra`` and ``utils``, but no other layer
may import from ``cli``.
"""
