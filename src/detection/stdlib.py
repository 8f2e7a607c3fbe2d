"""Standard library module names.

Built once at import time from the running interpreter, which knows its own
stdlib (``sys.stdlib_module_names``, Python 3.10+), plus the compiled-in
builtins and ``__future__``.
"""

import sys
from typing import FrozenSet

STDLIB_MODULES: FrozenSet[str] = frozenset(
    set(sys.stdlib_module_names) | set(sys.builtin_module_names) | {"__future__"}
)
