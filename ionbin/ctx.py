"""Reader and writer container context."""

import enum


class Context(enum.Enum):
    """Where a reader or writer currently is."""

    AT_TOP_LEVEL = 0
    IN_STRUCT = 1
    IN_LIST = 2
    IN_SEXP = 3


class ContextStack:
    """A stack of contexts; an empty stack means the top level."""

    def __init__(self):
        self._stack = []

    def peek(self):
        """Return the current context."""
        return self._stack[-1] if self._stack else Context.AT_TOP_LEVEL

    def push(self, context):
        """Enter a new context."""
        self._stack.append(context)

    def pop(self):
        """Leave the current context and return it."""
        if not self._stack:
            raise IndexError("pop called at top level")
        return self._stack.pop()

    def __len__(self):
        return len(self._stack)