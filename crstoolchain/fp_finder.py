"""Find words in a list that are not in an English dictionary."""

import itertools
import logging
import re

from crstoolchain.cache import download_file, get_cache_file_path

logger = logging.getLogger(__name__)

DICTIONARY_URL_FORMAT = "https://raw.githubusercontent.com/dwyl/english-words/{ref}/{name}"
DICTIONARY_BASE_FILE_NAME = "words_alpha.txt"
MIN_SIZE = 3

_COMMENT = re.compile(r"^\s*#")


class FpFinderError(Exception):
    """Raised when the false positive finder cannot do its work."""


def _byte_length(word):
    return len(word.encode("utf-8"))


def find_false_positives(input_path, extended_dictionary_path, commit_ref):
    """Print and return the words of ``input_path`` missing from the dictionaries."""
    try:
        dictionary_path = get_cache_file_path(f"{commit_ref}-{DICTIONARY_BASE_FILE_NAME}")
    except OSError as error:
        raise FpFinderError(f"Error getting dictionary path: {error}") from error

    if not dictionary_path.exists():
        logger.debug("Dictionary file not found. Downloading...")
        url = DICTIONARY_URL_FORMAT.format(ref=commit_ref, name=DICTIONARY_BASE_FILE_NAME)
        try:
            download_file(dictionary_path, url)
        except OSError as error:
            raise FpFinderError(f"Failed to download dictionary: {error}") from error
        logger.debug("Download complete.")
    else:
        logger.debug("Dictionary file found, skipping download.")

    try:
        dictionary = load_dictionary(dictionary_path, MIN_SIZE)
    except OSError as error:
        raise FpFinderError(f"Failed to load english dictionary: {error}") from error

    if extended_dictionary_path:
        try:
            extended = load_dictionary(extended_dictionary_path, 0)
        except OSError as error:
            raise FpFinderError(f"Failed to load extended dictionary: {error}") from error
        dictionary = merge_dictionaries(dictionary, extended)

    try:
        lines = load_lines(input_path)
    except OSError as error:
        raise FpFinderError(f"Failed to load input file: {error}") from error

    filtered = [word for word, _ in itertools.groupby(filter_content(lines, dictionary, MIN_SIZE))]
    for word in filtered:
        print(word)
    return filtered


def load_dictionary(path, min_word_length):
    """Return the set of lines of ``path`` at least ``min_word_length`` bytes long."""
    return {word for word in load_lines(path) if _byte_length(word) >= min_word_length}


def merge_dictionaries(first, second):
    """Return the union of two dictionaries."""
    return set(first) | set(second)


def load_lines(path):
    """Return the lines of ``path`` with surrounding white space removed."""
    with open(path, encoding="utf-8") as handle:
        return [line.strip() for line in handle]


def filter_content(lines, dictionary, min_size):
    """Return the non-comment words of ``lines`` that are not in ``dictionary``."""
    return [
        word
        for word in lines
        if not _COMMENT.match(word)
        and word
        and _byte_length(word) >= min_size
        and word not in dictionary
    ]