"""The common base of all regex-assembly processors."""

import abc


class Processor(abc.ABC):
    """A processor collects lines and turns them into regular expressions."""

    def __init__(self, ctx):
        self.ctx = ctx
        self.lines = []

    @abc.abstractmethod
    def process_line(self, line):
        """Apply the processor's logic to a single line."""

    @abc.abstractmethod
    def complete(self):
        """Finalize the processor and return its output lines."""

    def consume(self, lines):
        """Apply the output of a nested processor."""
        for line in lines:
            self.process_line(line)