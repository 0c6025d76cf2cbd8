"""Renumbering of test ids and titles in regression test YAML files."""

import logging
import os
from pathlib import Path

from crstoolchain import patterns

logger = logging.getLogger(__name__)


class NumberingError(Exception):
    """Raised when test files are not properly numbered."""

    def __init__(self, message="Tests are not properly numbered"):
        super().__init__(message)


def _raise(error):
    raise error


class TestRenumberer:
    """Renumbers the tests of regression test files."""

    __test__ = False

    def renumber_tests(self, check_only, github_output, tests_dir):
        """Renumber every test file below ``tests_dir``; raise NumberingError if any failed."""
        root = Path(tests_dir)
        if not root.is_dir():
            raise FileNotFoundError(f"no such directory: {root}")
        failed = False
        for directory, dir_names, file_names in os.walk(root, onerror=_raise):
            dir_names.sort()
            for name in sorted(file_names):
                try:
                    self._process_file(Path(directory) / name, check_only, github_output)
                except (NumberingError, OSError) as error:
                    logger.debug("failed to process %s: %s", name, error)
                    failed = True
        if failed:
            if github_output:
                print(
                    "::error::All test files need to be properly numbered.",
                    "Please run `crs-toolchain util renumber-tests --all`",
                )
            raise NumberingError()

    def renumber_test(self, file_path, check_only):
        """Renumber a single test file."""
        self._process_file(Path(file_path), check_only, False)

    def _process_file(self, file_path, check_only, github_output):
        found = patterns.RULE_ID_TEST_FILE_NAME.search(file_path.name)
        if found is None:
            return
        rule_id = found.group(1)
        logger.info("Processing %s", rule_id)

        with open(file_path, encoding="utf-8", newline="") as handle:
            contents = handle.read()
        output = self.process_yaml(rule_id, contents)
        if output == contents:
            return
        if github_output:
            print(f"::warning::Test file not properly numbered: {file_path.name}")
        if check_only:
            raise NumberingError()
        with open(file_path, "w", encoding="utf-8", newline="") as handle:
            handle.write(output)

    def process_yaml(self, rule_id, contents):
        """Return ``contents`` with test ids and titles renumbered."""
        index = 0
        id_count = 0
        title_count = 0
        lines = []
        for line in _split_lines(contents):
            match = patterns.TEST_ID.search(line)
            if match:
                id_count += 1
                if id_count > index:
                    index += 1
                line = f"{match.group(1)} {index}"
            match = patterns.TEST_TITLE.search(line)
            if match:
                title_count += 1
                if title_count > index:
                    index += 1
                line = f"{match.group(1)} {rule_id}-{index}"
            lines.append(line)
        while lines and not lines[-1].strip():
            lines.pop()
        lines.append("")
        return "\n".join(lines)


def _split_lines(contents):
    lines = contents.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]