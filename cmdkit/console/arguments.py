"""
Argument encoding normalization.

Arguments reach Python as `str` decoded with the filesystem encoding; bytes
that are not valid in it survive as surrogate escapes. Each argument is turned
back into its original bytes, its encoding is detected against an ordered
candidate list, and the value is re-decoded so command bodies always see
proper UTF-8 text.

Detection picks the first candidate that decodes the bytes strictly. Single
byte encodings accept almost any input, so ambiguous bytes may be
misclassified; the candidate order decides.
"""

import os
import codecs
import logging
from typing import Any, Dict, Iterable, Optional, Sequence, Union

from cmdkit.config import effective_settings as config
from cmdkit.output import LeveledOutput

log = logging.getLogger(__name__)


def _canonical(encoding: str) -> str:
    return codecs.lookup(encoding).name


def detect_encoding(raw: bytes, candidates: Optional[Sequence[str]] = None) -> Optional[str]:
    """
    Finds the first candidate encoding that decodes `raw` without errors.

    :param raw: The argument bytes.
    :param candidates: Encodings to try, in order; defaults to `ENCODING_CANDIDATES`.
    :return: The candidate name as given, or None if none matches.
    """
    if candidates is None:
        candidates = config.ENCODING_CANDIDATES
    for encoding in candidates:
        try:
            raw.decode(encoding, errors="strict")
        except (UnicodeDecodeError, LookupError):
            continue
        return encoding
    return None


def convert(raw: bytes, from_encoding: str, to_encoding: str = "utf-8") -> str:
    """Decodes `raw` from one encoding and returns it as text valid in `to_encoding`."""
    text = raw.decode(from_encoding)
    return text.encode(to_encoding).decode(to_encoding)


def _to_bytes(value: str) -> bytes:
    try:
        return os.fsencode(value)
    except UnicodeEncodeError:
        # Text not coming from the OS (lone surrogates outside the escape range)
        return value.encode("utf-8", errors="surrogatepass")


def normalize_value(value: str, output: Optional[LeveledOutput] = None,
                    candidates: Optional[Sequence[str]] = None) -> str:
    """
    Returns `value` as UTF-8 text.

    Unknown encodings leave the value untouched and write a DEBUG note.
    """
    output = output or LeveledOutput()
    target = config.TARGET_ENCODING
    raw = _to_bytes(value)

    encoding = detect_encoding(raw, candidates)
    if encoding is None:
        output.writeln_vvv(f"Unable to detect encoding of argument value '{value}', left as is")
        return value

    if _canonical(encoding) in (_canonical(target), "ascii"):
        return raw.decode(target)

    log.debug(f"Converting argument value from {encoding} to {target}")
    return convert(raw, encoding, target)


def normalize_arguments(arguments: Union[Dict[str, Any], Iterable[Any]],
                        output: Optional[LeveledOutput] = None,
                        candidates: Optional[Sequence[str]] = None):
    """
    Normalizes every string argument; lists are normalized element-wise.

    :param arguments: Mapping of name to value, or a sequence of values.
    :return: A new mapping or list of the same shape.
    """
    def _normalize(value):
        if isinstance(value, str):
            return normalize_value(value, output, candidates)
        if isinstance(value, (list, tuple)):
            return type(value)(_normalize(item) for item in value)
        return value

    if isinstance(arguments, dict):
        return {name: _normalize(value) for name, value in arguments.items()}
    return [_normalize(value) for value in arguments]
