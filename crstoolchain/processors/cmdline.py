"""The cmdline processor: inserts anti-evasion patterns between characters."""

import enum
import logging

from crstoolchain.patterns import is_escaped
from crstoolchain.processors.base import Processor

logger = logging.getLogger(__name__)


class CmdLineType(enum.IntEnum):
    """The command line flavour to emulate."""

    UNDEFINED = 0
    UNIX = 1
    WINDOWS = 2


class CmdLineError(ValueError):
    """Raised for an unknown command line flavour."""


def cmdline_type_from_string(name):
    """Return the CmdLineType for ``name``; raise CmdLineError if it is unknown."""
    if name == "unix":
        return CmdLineType.UNIX
    if name == "windows":
        return CmdLineType.WINDOWS
    raise CmdLineError("bad cmdline option")


class CmdLine(Processor):
    """Turns words into expressions that resist command line evasion."""

    def __init__(self, ctx, cmd_type):
        super().__init__(ctx)
        self.cmd_type = cmd_type
        patterns = ctx.root_context.configuration.patterns
        if cmd_type == CmdLineType.UNIX:
            flavour = "unix"
        elif cmd_type == CmdLineType.WINDOWS:
            flavour = "windows"
        else:
            flavour = None
        if flavour is None:
            self.evasion_pattern = ""
            self.suffix_pattern = ""
            self.no_space_suffix_pattern = ""
        else:
            # Inserted between every pair of characters.
            self.evasion_pattern = getattr(patterns.anti_evasion, flavour)
            # End of the command: space, brace expansion, redirect and the like.
            self.suffix_pattern = getattr(patterns.anti_evasion_suffix, flavour)
            # Same as above, but no white space may follow (e.g. `python3`).
            self.no_space_suffix_pattern = getattr(patterns.anti_evasion_no_space_suffix, flavour)

    def process_line(self, line):
        """Convert a non-empty line and store it."""
        if line:
            processed = self._regexp_str(line)
            self.lines.append(processed)
            logger.debug("cmdline in: %s, out: %s", line, processed)

    def complete(self):
        """Return the alternation of all converted lines."""
        return ["|".join(dict.fromkeys(self.lines))]

    def consume(self, lines):
        """Process the output lines of a nested processor."""
        for line in lines:
            self.process_line(line)

    def _regexp_str(self, text):
        # By convention, a leading single quote means: copy the rest verbatim.
        if text.startswith("'"):
            return text[1:]
        stripped, suffix = self._compute_suffix(text)
        result = self.evasion_pattern.join(self._regexp_char(char) for char in stripped)
        if suffix:
            result += self.evasion_pattern + suffix
        return result

    @staticmethod
    def _regexp_char(char):
        if char == ".":
            return "\\."
        if char == "-":
            return "\\-"
        return char.replace(" ", "\\s+")

    def _compute_suffix(self, text):
        """Split a trailing unescaped `@` or `~` off ``text``, returning the evasion suffix."""
        if len(text) < 2:
            return text, ""
        last = text[-1]
        if is_escaped(text, len(text) - 1):
            return text[:-2] + last, ""
        if last == "@":
            return text[:-1], self.suffix_pattern
        if last == "~":
            return text[:-1], self.no_space_suffix_pattern
        return text, ""