import pytest

from crstoolchain.cache import download_file, get_cache_file_path


@pytest.fixture
def home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    return tmp_path


def test_cache_file_path_is_in_toolchain_dir(home):
    path = get_cache_file_path("words.txt")
    assert path == home / ".crs-toolchain" / "words.txt"
    assert path.parent.is_dir()


def test_cache_file_path_does_not_create_file(home):
    path = get_cache_file_path("other.txt")
    assert not path.exists()
    assert get_cache_file_path("other.txt") == path


def test_download_file_copies_content(tmp_path):
    source = tmp_path / "source.txt"
    source.write_bytes(b"alpha\nbeta\n")
    target = tmp_path / "sub" / "target.txt"
    download_file(target, source.as_uri())
    assert target.read_bytes() == b"alpha\nbeta\n"
    assert not (tmp_path / "sub" / "target.txt.part").exists()


def test_download_file_missing_source_raises(tmp_path):
    target = tmp_path / "target.txt"
    with pytest.raises(OSError):
        download_file(target, (tmp_path / "missing.txt").as_uri())
    assert not target.exists()