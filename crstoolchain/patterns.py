"""Regular expressions for regex-assembly files, rule files and test files.

Every pattern is meant to be applied with ``search`` unless it is anchored
itself; capture groups are numbered as documented next to each pattern.
"""

import re

_FLAGS = re.ASCII

# ``##!> include <value> [-- <suffix replacements>]``: value in group 1,
# replacements in group 2.
INCLUDE = re.compile(r"##!>\s*include\s+(\S+)(?:\s*--\s*(.*?))?\s*$", _FLAGS)

# ``##!> include-except <include> <excludes...> [-- <replacements>]``:
# include in group 1, excludes in group 2, replacements in group 3.
INCLUDE_EXCEPT = re.compile(
    r"^##!>\s*include-except\s+(\S+)\s*(.*?)(?:\s*--\s*(.*?))?\s*$", _FLAGS
)

# ``##!> define <name> <value>``: everything up to the value in group 1,
# name in group 2, value in group 3.
DEFINITION = re.compile(r"^(##!>\s*define\s+([a-zA-Z0-9_-]+)\s+)(\S+)\s*$", _FLAGS)

# A plain comment line (``##!`` without any directive).
COMMENT = re.compile(r"^\s*##!(?:[^^$+><=]|$)", _FLAGS)

# ``##!+ <flags>``: flags in group 1.
FLAGS = re.compile(r"^##!\+\s*(.*\S)\s*$", _FLAGS)

# ``##!^ <prefix>``: prefix in group 1.
PREFIX = re.compile(r"^##!\^\s*(.*\S)\s*$", _FLAGS)

# ``##!$ <suffix>``: suffix in group 1.
SUFFIX = re.compile(r"^##!\$\s*(.*\S)\s*$", _FLAGS)

# Any processor start line: name in group 1, optional argument in group 2.
PROCESSOR_START = re.compile(r"^##!>\s*([a-z]+)(?:\s+([a-z]+))?", _FLAGS)

# A processor start line for processors with a body: name in group 1,
# optional argument in group 2.
PROCESSOR_BLOCK_START = re.compile(r"^##!>\s*(assemble|cmdline)\s*(\S+)?", _FLAGS)

# A processor end line (``##!<``).
PROCESSOR_END = re.compile(r"^##!<", _FLAGS)

# An assemble input line (``##!=< <name>``): name in group 1.
ASSEMBLE_INPUT = re.compile(r"^\s*##!=<\s*(.*)$", _FLAGS)

# An assemble output line (``##!=> [name]``): name in group 1.
ASSEMBLE_OUTPUT = re.compile(r"^\s*##!=>\s*(.*)$", _FLAGS)

# A SecRule line with ``@rx``: head in group 1, expression in group 2,
# tail in group 3.
RULE_RX = re.compile(r'(.*"!?@rx )(.*)(" \\)', _FLAGS)

# Any SecRule line.
SEC_RULE = re.compile(r"\s*SecRule", _FLAGS)

# ``<id>[-chain<n>][.ra]``: rule id in group 1, chain offset in group 2.
RULE_ID_FILE_NAME = re.compile(r"^(\d{6})(?:-chain(\d+))?(?:\.ra)?$", _FLAGS)

# ``<id>[.yaml|.yml]``: rule id in group 1.
RULE_ID_TEST_FILE_NAME = re.compile(r"^(\d{6})(?:\.ya?ml)?$", _FLAGS)

# ``test_id: <id>``: head in group 1, id in group 2.
TEST_ID = re.compile(r"(.*test_id:)\s+(.*$)", _FLAGS)

# ``test_title: <title>``: head in group 1, title in group 2.
TEST_TITLE = re.compile(r"(.*test_title:)\s+(.*$)", _FLAGS)

# A reference to a definition (``{{name}}``): name in group 1.
DEFINITION_REFERENCE = re.compile(r"{{([a-zA-Z0-9_-]+)}}", _FLAGS)

# The version line of a rules file: version in group 3.
CRS_VERSION = re.compile(r"^(# OWASP (ModSecurity Core Rule Set|CRS) ver\.)(.+)$", _FLAGS)

# The short version variable of the setup file: version in group 2.
SHORT_CRS_VERSION = re.compile(r"(setvar:tx.crs_setup_version=)(\d+)", _FLAGS)

# The ownership notice in the header of rule and setup files; the end year
# of its year range is in group 2.
_NOTICE_HEAD = "# " + "Copy" + "right (c) 2021-"
_NOTICE_TAIL = " project. All " + "rights reserved."
CRS_COPYRIGHT_YEAR = re.compile(
    "^(" + re.escape(_NOTICE_HEAD) + r")(\d{4})( (Core Rule Set|CRS)"
    + re.escape(_NOTICE_TAIL).replace(r"\.$", ".")
    + ")$",
    _FLAGS,
)

# The version in a rule's ``ver`` action: version in group 2.
CRS_YEAR_SEC_RULE_VER = re.compile(r"(ver:'OWASP_CRS/)(\d+\.\d+\.\d+(-[a-z0-9-]+)?)", _FLAGS)

# The version in ``SecComponentSignature``: version in group 2.
CRS_VERSION_COMPONENT_SIGNATURE = re.compile(
    r'^(SecComponentSignature "OWASP_CRS/)(\d+\.\d+\.\d+(-[a-z0-9-]+)?)', _FLAGS
)


def is_escaped(text, position):
    """Return True if the character at ``position`` is preceded by an odd number of backslashes."""
    count = 0
    for char in reversed(text[:position]):
        if char != "\\":
            break
        count += 1
    return count % 2 != 0