import pytest

from crstoolchain.renumber import NumberingError, TestRenumberer

HEADER = "---\nmeta:\n  enabled: true\n  name: 123456.yaml\ntests:\n"

ID_INPUT = (
    HEADER
    + '  - test_id: bapedibupi\n    desc: "test 1"\n'
    + '  - test_id: "pine apple"\n    desc: "test 2"'
)
ID_EXPECTED = (
    HEADER
    + '  - test_id: 1\n    desc: "test 1"\n'
    + '  - test_id: 2\n    desc: "test 2"\n'
)
TITLE_INPUT = (
    HEADER
    + '  - test_title: bapedibupi\n    desc: "test 1"\n'
    + '  - test_title: "pine apple"\n    desc: "test 2"'
)
TITLE_EXPECTED = (
    HEADER
    + '  - test_title: 123456-1\n    desc: "test 1"\n'
    + '  - test_title: 123456-2\n    desc: "test 2"\n'
)
TRAILING_SPACE = "\n     \n       \n   "


@pytest.mark.parametrize(
    ("contents", "expected"),
    [
        (ID_INPUT + "\n", ID_EXPECTED),
        (ID_INPUT + "\n\n\n", ID_EXPECTED),
        (ID_INPUT, ID_EXPECTED),
        (ID_INPUT + TRAILING_SPACE, ID_EXPECTED),
        (TITLE_INPUT + "\n", TITLE_EXPECTED),
        (TITLE_INPUT + "\n\n\n", TITLE_EXPECTED),
        (TITLE_INPUT, TITLE_EXPECTED),
        (TITLE_INPUT + TRAILING_SPACE, TITLE_EXPECTED),
    ],
    ids=[
        "set_id",
        "remove_superfluous_newlines",
        "add_missing_newline",
        "trim_space_on_trailing_lines",
        "legacy_set_title",
        "legacy_remove_superfluous_newlines",
        "legacy_add_missing_newline",
        "legacy_trim_space_on_trailing_lines",
    ],
)
def test_process_yaml(contents, expected):
    assert TestRenumberer().process_yaml("123456", contents) == expected


def test_support_legacy_and_new_field_at_the_same_time():
    contents = (
        HEADER
        + "  - test_title: bapedibupi\n    test_id: bapedibupi\n    desc: \"test 1\"\n"
        + '  - test_id: "pine apple"\n    test_title: "pine apple"\n    desc: "test 2"\n   '
    )
    expected = (
        HEADER
        + '  - test_title: 123456-1\n    test_id: 1\n    desc: "test 1"\n'
        + '  - test_id: 2\n    test_title: 123456-2\n    desc: "test 2"\n'
    )
    assert TestRenumberer().process_yaml("123456", contents) == expected


def test_renumber_test_rewrites_file(tmp_path):
    path = tmp_path / "123456.yaml"
    path.write_text(ID_INPUT, encoding="utf-8")
    TestRenumberer().renumber_test(path, False)
    assert path.read_text(encoding="utf-8") == ID_EXPECTED


def test_renumber_test_check_only_raises(tmp_path):
    path = tmp_path / "123456.yaml"
    path.write_text(ID_INPUT, encoding="utf-8")
    with pytest.raises(NumberingError, match="Tests are not properly numbered"):
        TestRenumberer().renumber_test(path, True)
    assert path.read_text(encoding="utf-8") == ID_INPUT


def test_renumber_test_ignores_other_files(tmp_path):
    path = tmp_path / "notes.yaml"
    path.write_text(ID_INPUT, encoding="utf-8")
    TestRenumberer().renumber_test(path, True)
    assert path.read_text(encoding="utf-8") == ID_INPUT


def test_renumber_tests_check_only_reports(tmp_path, capsys):
    (tmp_path / "123456.yaml").write_text(ID_INPUT, encoding="utf-8")
    (tmp_path / "654321.yaml").write_text(ID_EXPECTED, encoding="utf-8")
    with pytest.raises(NumberingError):
        TestRenumberer().renumber_tests(True, True, tmp_path)
    out = capsys.readouterr().out
    assert "::warning::Test file not properly numbered: 123456.yaml" in out
    assert "654321.yaml" not in out
    assert "::error::All test files need to be properly numbered." in out


def test_renumber_tests_passes_when_numbered(tmp_path):
    path = tmp_path / "123456.yaml"
    path.write_text(ID_EXPECTED, encoding="utf-8")
    TestRenumberer().renumber_tests(True, False, tmp_path)
    assert path.read_text(encoding="utf-8") == ID_EXPECTED


def test_renumber_tests_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        TestRenumberer().renumber_tests(True, False, tmp_path / "missing")