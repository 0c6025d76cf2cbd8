import pytest

from crstoolchain.fp_finder import (
    FpFinderError,
    filter_content,
    find_false_positives,
    load_dictionary,
    load_lines,
    merge_dictionaries,
)


@pytest.fixture
def home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    return tmp_path


def test_filter_content():
    lines = [
        "# this is a comment",
        " # this is another comment with a space in front",
        "apple",
        "banana",
        "apple",
        "",
    ]
    assert filter_content(lines, {"apple", "dog"}, 3) == ["banana"]


def test_filter_content_drops_short_words():
    assert filter_content(["ab", "abc"], set(), 3) == ["abc"]


def test_merge_dictionaries():
    first = {"apple", "banana"}
    second = {"cherry", "date"}
    assert merge_dictionaries(first, second) == {"apple", "banana", "cherry", "date"}


def test_load_lines_strips_whitespace(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("  alpha \nbeta\r\n\n", encoding="utf-8")
    assert load_lines(path) == ["alpha", "beta", ""]


def test_load_dictionary_respects_min_length(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("a\nab\nabc\nabcd\n", encoding="utf-8")
    assert load_dictionary(path, 3) == {"abc", "abcd"}
    assert load_dictionary(path, 0) == {"a", "ab", "abc", "abcd"}


def test_load_dictionary_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_dictionary(tmp_path / "missing.txt", 0)


def test_find_false_positives_uses_cached_dictionary(home, tmp_path, capsys):
    cache = home / ".crs-toolchain"
    cache.mkdir()
    (cache / "main-words_alpha.txt").write_text("apple\nbanana\nox\n", encoding="utf-8")
    input_path = tmp_path / "input.txt"
    input_path.write_text("# comment\napple\nzzzq\nzzzq\nox\nbanana\nqqqx\n", encoding="utf-8")

    result = find_false_positives(input_path, "", "main")

    assert result == ["zzzq", "qqqx"]
    assert capsys.readouterr().out == "zzzq\nqqqx\n"


def test_find_false_positives_with_extended_dictionary(home, tmp_path):
    cache = home / ".crs-toolchain"
    cache.mkdir()
    (cache / "main-words_alpha.txt").write_text("apple\n", encoding="utf-8")
    extended = tmp_path / "extended.txt"
    extended.write_text("zzzq\n", encoding="utf-8")
    input_path = tmp_path / "input.txt"
    input_path.write_text("apple\nzzzq\nqqqx\n", encoding="utf-8")

    assert find_false_positives(input_path, extended, "main") == ["qqqx"]


def test_find_false_positives_missing_input(home, tmp_path):
    cache = home / ".crs-toolchain"
    cache.mkdir()
    (cache / "main-words_alpha.txt").write_text("apple\n", encoding="utf-8")
    with pytest.raises(FpFinderError, match="Failed to load input file"):
        find_false_positives(tmp_path / "missing.txt", "", "main")


def test_find_false_positives_missing_extended(home, tmp_path):
    cache = home / ".crs-toolchain"
    cache.mkdir()
    (cache / "main-words_alpha.txt").write_text("apple\n", encoding="utf-8")
    input_path = tmp_path / "input.txt"
    input_path.write_text("apple\n", encoding="utf-8")
    with pytest.raises(FpFinderError, match="Failed to load extended dictionary"):
        find_false_positives(input_path, tmp_path / "missing.txt", "main")