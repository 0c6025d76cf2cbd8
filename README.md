# crstoolchain

Helpers for maintaining a web application firewall rule set. The package is
a library; it has no dependencies outside the standard library.

- `crstoolchain.parser` reads regex-assembly (`.ra`) sources: it resolves
  `##!> include` and `##!> include-except` directives, applies
  `##!> define` definitions, collects flags (`##!+`), prefixes (`##!^`) and
  suffixes (`##!$`), and drops comments and empty lines.
- `crstoolchain.processors.cmdline` turns command words into patterns with
  anti-evasion sequences between their characters.
- `crstoolchain.operators.stack` holds `ProcessorStack` and `Stats`, the
  bookkeeping for nested processor blocks.
- `crstoolchain.renumber` renumbers `test_id` and legacy `test_title`
  fields in regression test YAML files.
- `crstoolchain.fp_finder` lists the words of a file that are not in an
  English dictionary.
- `crstoolchain.patterns` holds the compiled regular expressions for the
  file formats involved, and `is_escaped(text, position)`.
- `crstoolchain.cache` provides `get_cache_file_path` and `download_file`.

## Parsing a regex-assembly source

```python
import io

from crstoolchain.parser import Parser
from crstoolchain.processors.context import Context, RootContext

root = RootContext("/path/to/rules-repository")
parser = Parser(Context(root), io.StringIO(
    "##!> define word [a-z]+\n"
    "{{word}}=1\n"
))
text, written = parser.parse(False)
print(text)      # "[a-z]+=1\n"
print(written)   # number of bytes written before definitions were expanded
```

The source may be a string, bytes or a readable file object. After parsing,
`parser.flags`, `parser.prefixes`, `parser.suffixes` and `parser.variables`
hold what was collected. Only the flags `i` and `s` are accepted. Any other
flag raises `ParserError`, and so does an included file that sets flags.

Relative include names are looked up in `regex-assembly/include`, then in
`regex-assembly/exclude`, below the root directory. Absolute paths are used
as given. `.ra` is appended when the name has no such extension. An included
file that has prefixes or suffixes is wrapped in an `##!> assemble` block.

Suffix replacements follow `--`: `##!> include words -- @ [\s><]` replaces a
trailing `@` on every included line. A replacement of `""` removes the
suffix. `##!> include-except words excluded1 excluded2` includes the lines
of `words` that appear in none of the excluded files, in their original
order.

With `parse(True)` every line is kept as it is, with its indentation
removed, and nothing is included or expanded.

## Command-line evasion patterns

```python
from crstoolchain.processors.cmdline import CmdLine, cmdline_type_from_string
from crstoolchain.processors.context import (
    Configuration, Context, Pattern, Patterns, RootContext,
)

config = Configuration(Patterns(
    anti_evasion=Pattern(unix="_e_", windows="_w_"),
    anti_evasion_suffix=Pattern(unix="_end_", windows="_wend_"),
    anti_evasion_no_space_suffix=Pattern(unix="_ns_", windows="_wns_"),
))
ctx = Context(RootContext(".", config))
cmd = CmdLine(ctx, cmdline_type_from_string("unix"))
cmd.process_line("foo")
cmd.process_line("ls@")
print(cmd.lines)       # ['f_e_o_e_o', 'l_e_s_e__end_']
print(cmd.complete())  # ['f_e_o_e_o|l_e_s_e__end_']
```

The processor follows these rules:

- A trailing `@` appends the suffix pattern.
- A trailing `~` appends the no-space suffix pattern.
- An escaped `\@` or `\~` at the end is kept literally, without its backslash.
- `.` and `-` are escaped, and a space becomes `\s+`.
- A line starting with `'` is copied verbatim, without the quote.

`cmdline_type_from_string` raises `CmdLineError` for anything but `unix` and
`windows`.

## Renumbering regression tests

```python
from crstoolchain.renumber import NumberingError, TestRenumberer

renumberer = TestRenumberer()
try:
    renumberer.renumber_tests(True, False, "tests/regression/tests")
except NumberingError:
    print("some test files are not numbered properly")
```

Only files named like `123456`, `123456.yaml` or `123456.yml` are processed.
Each `test_id` is numbered `1`, `2`, …, and each `test_title` becomes
`<rule id>-<n>`. Trailing blank lines are removed, and the file ends with a
single newline.

With `check_only` set to `True`, files are not changed. With it set to
`False`, they are rewritten in place. With `github_output` set to `True`,
`::warning::` and `::error::` annotations are printed.

`renumber_test(file_path, check_only)` handles one file.
`process_yaml(rule_id, contents)` returns the renumbered text.

## Finding false-positive candidates

```python
from crstoolchain.fp_finder import find_false_positives

words = find_false_positives("words.txt", "", "master")
```

The English dictionary for the given commit reference is downloaded once
and cached in `~/.crs-toolchain`. Only its words of three or more bytes are
used. An optional extended dictionary (second argument) is merged in.

The input file's words that are missing from both dictionaries are printed
and returned, with adjacent duplicates collapsed. Comment lines (`#`), empty
lines and words shorter than three bytes are skipped. Failures raise
`FpFinderError`.

## What this package does not do

- It does not join lines into a single optimised regular expression. There
  is no assemble processor and no assembler operator, so `##!> assemble`
  blocks and `##!=<` / `##!=>` markers are passed through by the parser,
  not evaluated.
- It does not update rule files.
- It does not provide a command-line program. Everything is used from
  Python.