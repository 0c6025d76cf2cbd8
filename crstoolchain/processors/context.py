"""Configuration and context shared by the regex-assembly processors."""

import sys
from dataclasses import dataclass, field
from pathlib import Path

ASSEMBLY_DIR_NAME = "regex-assembly"
INCLUDES_DIR_NAME = "include"
EXCLUDES_DIR_NAME = "exclude"


@dataclass(frozen=True)
class Pattern:
    """A pattern with one variant per command line flavour."""

    unix: str = ""
    windows: str = ""


@dataclass(frozen=True)
class Patterns:
    """The anti-evasion patterns used by the cmdline processor."""

    anti_evasion: Pattern = field(default_factory=Pattern)
    anti_evasion_suffix: Pattern = field(default_factory=Pattern)
    anti_evasion_no_space_suffix: Pattern = field(default_factory=Pattern)


@dataclass(frozen=True)
class Configuration:
    """Toolchain configuration."""

    patterns: Patterns = field(default_factory=Patterns)


@dataclass
class RootContext:
    """The toolchain's root directory and configuration."""

    root_dir: Path
    configuration: Configuration = field(default_factory=Configuration)

    def __post_init__(self):
        self.root_dir = Path(self.root_dir)

    def assembly_dir(self):
        """Return the directory holding the regex-assembly files."""
        return self.root_dir / ASSEMBLY_DIR_NAME

    def includes_dir(self):
        """Return the directory holding include files."""
        return self.assembly_dir() / INCLUDES_DIR_NAME

    def excludes_dir(self):
        """Return the directory holding exclude files."""
        return self.assembly_dir() / EXCLUDES_DIR_NAME


@dataclass
class Context:
    """State shared by all processors of one assembly run."""

    root_context: RootContext
    single_rule_id: int = 0
    single_chain_offset: bool = False
    stash: dict = field(default_factory=dict)

    def dump(self, stream=None):
        """Write a description of the context to ``stream`` (standard output by default)."""
        print(f"Context: {self!r}", file=stream if stream is not None else sys.stdout)