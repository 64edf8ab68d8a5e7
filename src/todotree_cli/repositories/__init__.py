"""Repository interfaces for todotree.

This package contains abstract base classes (ABCs) that define the contracts
for data persistence operations. These are the "Ports" in the Hexagonal
Architecture; the SQLite adapter in ``todotree_cli.adapters.sqlite`` is the
shipped implementation.
"""

from .repository import TaskRepository

__all__ = ["TaskRepository"]
