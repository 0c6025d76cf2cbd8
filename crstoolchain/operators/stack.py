"""The processor stack and nesting statistics used by the assembler."""

import logging

logger = logging.getLogger(__name__)


class StackEmptyError(Exception):
    """Raised when the processor stack is accessed while empty."""

    def __init__(self, message="stack is empty"):
        super().__init__(message)


class NestingError(Exception):
    """Raised when processor start and end markers do not match."""

    def __init__(self, line, depth):
        super().__init__(f"Nesting error on line {line}, nesting level {depth}")
        self.line = line
        self.depth = depth


class ProcessorStack:
    """A last-in first-out stack of active processors."""

    def __init__(self):
        self._processors = []

    def __len__(self):
        return len(self._processors)

    def push(self, processor):
        """Put ``processor`` on top of the stack."""
        self._processors.append(processor)

    def pop(self):
        """Remove and return the top processor; raise StackEmptyError if empty."""
        top = self.top()
        self._processors.pop()
        return top

    def top(self):
        """Return the top processor; raise StackEmptyError if empty."""
        logger.debug("Processor stack len: %d", len(self._processors))
        if not self._processors:
            raise StackEmptyError()
        return self._processors[-1]


class Stats:
    """Tracks nesting depth and the number of parsed lines."""

    def __init__(self):
        self.line = 0
        self.depth = 0

    def processor_start(self):
        """Enter a new processor."""
        self.depth += 1

    def processor_end(self):
        """Leave a processor; raise NestingError if more were left than entered."""
        self.depth -= 1
        if self.depth < 0:
            raise NestingError(self.line, self.depth)

    def line_parsed(self):
        """Count one more parsed line."""
        self.line += 1