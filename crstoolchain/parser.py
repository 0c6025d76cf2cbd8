"""Parsing of regex-assembly files.

The parser resolves ``include`` and ``include-except`` directives, collects
flags, prefixes and suffixes, drops comments and empty lines and finally
expands all definitions, producing the text that the processors consume.
"""

import enum
import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path

from crstoolchain import patterns

logger = logging.getLogger(__name__)

ALLOWED_FLAGS = frozenset("is")

_SPACE = re.compile(r"\s+")
_SKIP_REPLACEMENT = re.compile(r"^(?:##!|\s*$)")


class ParserError(Exception):
    """Raised when a regex-assembly file cannot be parsed."""


class LineKind(enum.Enum):
    """The kind of a parsed line."""

    REGULAR = enum.auto()
    EMPTY = enum.auto()
    INCLUDE = enum.auto()
    INCLUDE_EXCEPT = enum.auto()
    DEFINITION = enum.auto()
    COMMENT = enum.auto()
    FLAGS = enum.auto()
    PREFIX = enum.auto()
    SUFFIX = enum.auto()


@dataclass
class ParsedLine:
    """The result of parsing a single line; ``kind`` tells which fields are set."""

    kind: LineKind
    line: str
    include_file_name: str = ""
    exclude_file_names: list = field(default_factory=list)
    suffix_replacements: dict = None
    definitions: dict = field(default_factory=dict)
    prefix: str = ""
    suffix: str = ""
    flags: str = ""


_LINE_PATTERNS = (
    (LineKind.INCLUDE, patterns.INCLUDE),
    (LineKind.INCLUDE_EXCEPT, patterns.INCLUDE_EXCEPT),
    (LineKind.DEFINITION, patterns.DEFINITION),
    (LineKind.COMMENT, patterns.COMMENT),
    (LineKind.FLAGS, patterns.FLAGS),
    (LineKind.PREFIX, patterns.PREFIX),
    (LineKind.SUFFIX, patterns.SUFFIX),
)


def _split_lines(text):
    """Split ``text`` into lines without terminators, ignoring a final newline."""
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _extension(file_name):
    name = file_name.rsplit("/", 1)[-1]
    dot = name.rfind(".")
    return name[dot:] if dot >= 0 else ""


class Parser:
    """Resolves inclusions and definitions of a regex-assembly source.

    ``source`` may be a string, bytes or a readable file object.
    """

    def __init__(self, ctx, source):
        self.ctx = ctx
        self.source = source
        self.variables = {}
        self.flags = set()
        self.prefixes = []
        self.suffixes = []

    def _read_source(self):
        source = self.source
        if hasattr(source, "read"):
            source = source.read()
        if isinstance(source, bytes):
            source = source.decode("utf-8")
        return source

    def parse(self, format_only=False):
        """Parse the source; return the resulting text and the number of bytes written.

        With ``format_only`` every line is kept as it is (only its indentation
        is removed) and no inclusions or definitions are resolved.
        """
        chunks = []
        written = 0
        for raw_line in _split_lines(self._read_source()):
            line = raw_line.lstrip(" \t")
            parsed = self.parse_line(line)
            text = ""
            kind = parsed.kind
            if kind is LineKind.REGULAR:
                text = line + "\n"
            elif kind is LineKind.DEFINITION:
                if not format_only:
                    for name, value in parsed.definitions.items():
                        self.variables.setdefault(name, value)
            elif kind is LineKind.INCLUDE:
                if not format_only:
                    text = build_include_string(self, parsed)
            elif kind is LineKind.INCLUDE_EXCEPT:
                if not format_only:
                    text = build_include_except_string(self, parsed)
            elif kind is LineKind.FLAGS:
                for flag in parsed.flags:
                    if flag not in ALLOWED_FLAGS:
                        raise ParserError(f"flag '{flag}' is not supported")
                    self.flags.add(flag)
            elif kind is LineKind.PREFIX:
                self.prefixes.append(parsed.prefix)
            elif kind is LineKind.SUFFIX:
                self.suffixes.append(parsed.suffix)

            if format_only:
                text = line + "\n"
            elif not text:
                continue
            chunks.append(text)
            written += len(text.encode("utf-8"))

        result = "".join(chunks)
        if self.variables:
            result = expand_definitions(result, self.variables)
        return result, written

    def parse_line(self, line):
        """Classify ``line`` and extract the values of its directive."""
        parsed = ParsedLine(kind=LineKind.REGULAR, line=line)
        if not line.strip():
            parsed.kind = LineKind.EMPTY
            return parsed

        for kind, pattern in _LINE_PATTERNS:
            found = pattern.search(line)
            if found is None:
                continue
            logger.debug("found %s statement: %s", kind.name, found.group(0))
            parsed.kind = kind
            if kind is LineKind.INCLUDE:
                parsed.include_file_name = found.group(1)
                parsed.suffix_replacements = build_pair_map(found.group(2) or "")
            elif kind is LineKind.INCLUDE_EXCEPT:
                parsed.include_file_name = found.group(1)
                parsed.suffix_replacements = build_pair_map(found.group(3) or "")
                parsed.exclude_file_names = split_args(found.group(2) or "")
            elif kind is LineKind.DEFINITION:
                parsed.definitions = {found.group(2): found.group(3)}
            elif kind is LineKind.FLAGS:
                parsed.flags = found.group(1)
            elif kind is LineKind.PREFIX:
                parsed.prefix = found.group(1)
            elif kind is LineKind.SUFFIX:
                parsed.suffix = found.group(1)
            break
        return parsed


def build_pair_map(text):
    """Turn ``"a b c d"`` into ``{"a": "b", "c": "d"}``; return None for blank input."""
    if not text.strip():
        return None
    items = split_args(text)
    if len(items) % 2:
        raise ParserError(f"uneven number of arguments found: {text}")
    return dict(zip(items[::2], items[1::2]))


def split_args(text):
    """Split ``text`` on runs of white space."""
    return _SPACE.sub(" ", text).split(" ")


def parse_file(root_parser, file_name, definitions):
    """Parse the named file with a new parser; return its text and its definitions.

    Relative names are looked up in the include directory, then in the
    exclude directory. ``definitions``, if given, are used by the new parser.
    """
    logger.debug("reading file: %s", file_name)
    if _extension(file_name) != ".ra":
        file_name += ".ra"

    root_context = root_parser.ctx.root_context
    if os.path.isabs(file_name):
        candidates = [Path(file_name)]
    else:
        candidates = [
            root_context.includes_dir() / file_name,
            root_context.excludes_dir() / file_name,
        ]

    error = None
    for candidate in candidates:
        try:
            with open(candidate, encoding="utf-8", newline="") as handle:
                contents = handle.read()
            break
        except OSError as exc:
            error = exc
    else:
        raise ParserError(f"cannot open file for parsing: {error}") from error

    sub_parser = Parser(root_parser.ctx, contents)
    if definitions is not None:
        sub_parser.variables = definitions
    out, _ = sub_parser.parse(False)
    return _merge_prefixes_suffixes(sub_parser, out), sub_parser.variables


def _merge_prefixes_suffixes(source, out):
    """Wrap the output of an included file in an assemble block with its prefixes and suffixes."""
    if source.flags:
        raise ParserError("include files must not contain flags")
    # Without prefixes or suffixes the output must not be wrapped: an assemble
    # block could change semantics, e.g. inside a cmdline block.
    if not source.prefixes and not source.suffixes:
        return out

    parts = ["##!> assemble\n"]
    parts.extend(f"{prefix}\n##!=>\n" for prefix in source.prefixes)
    parts.append(out)
    if source.suffixes:
        parts.append("##!=>\n")
    parts.extend(f"{suffix}\n##!=>\n" for suffix in source.suffixes)
    parts.append("##!<\n")
    return "".join(parts)


def expand_definitions(text, variables):
    """Replace every ``{{name}}`` in ``text``; definitions may refer to each other.

    ``variables`` is updated in place with its own references expanded.
    """
    for name, replacement in list(variables.items()):
        needle = "{{" + name + "}}"
        for source_name, value in variables.items():
            variables[source_name] = value.replace(needle, replacement)
    for name, replacement in variables.items():
        text = text.replace("{{" + name + "}}", replacement)

    dangling = patterns.DEFINITION_REFERENCE.search(text)
    if dangling is not None:
        logger.warning(
            "no match found for definition: {{%s}}. could be a typo, or you forgot to define it?",
            dangling.group(1),
        )
    return text


def replace_suffixes(text, replacements):
    """Replace line suffixes according to ``replacements``; ``""`` as a replacement removes the suffix."""
    if replacements is None:
        return text
    lines = []
    for entry in _split_lines(text):
        if not _SKIP_REPLACEMENT.match(entry):
            for suffix, replacement in replacements.items():
                if suffix and entry.endswith(suffix):
                    entry = entry[: -len(suffix)]
                    if replacement != '""':
                        entry += replacement
        lines.append(entry + "\n")
    return "".join(lines)


def build_include_string(parser, parsed_line):
    """Return the content of an ``include`` directive."""
    content, _ = parse_file(parser, parsed_line.include_file_name, None)
    return replace_suffixes(content, parsed_line.suffix_replacements)


def build_include_except_string(parser, parsed_line):
    """Return the content of an ``include-except`` directive, without the excluded lines."""
    content, definitions = parse_file(parser, parsed_line.include_file_name, None)
    included = {}
    for order, entry in enumerate(_split_lines(content) if content else []):
        included[entry] = order

    for file_name in parsed_line.exclude_file_names:
        logger.debug("Processing exclusions from %s", file_name)
        excluded, _ = parse_file(parser, file_name, definitions)
        for exclusion in _split_lines(excluded) if excluded else []:
            included.pop(exclusion, None)

    remaining = sorted(included, key=included.__getitem__)
    result = "".join(entry + "\n" for entry in remaining)
    return replace_suffixes(result, parsed_line.suffix_replacements)