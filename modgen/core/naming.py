"""
MODGEN Core - Naming Conventions

Converts raw collection identifiers (tm_barang, kode_group, HTTPServer2)
into the names used across generated files.
"""

import re

from modgen.config import Config
from .errors import InvalidIdentifierError


# Collection prefixes: master, transaction and history tables
KNOWN_PREFIXES = Config.Internal.KNOWN_PREFIXES

# Runs: acronym, word with trailing digits, single capital, digits
_RUN_PATTERN = re.compile(r"[A-Z]{2,}(?=[A-Z][a-z]+[0-9]*|\b)|[A-Z]?[a-z]+[0-9]*|[A-Z]|[0-9]+")


def split_runs(raw: str) -> list:
    """Split an identifier into word runs. Returns [] when nothing matches."""
    if not raw:
        return []
    return _RUN_PATTERN.findall(raw)


def to_canonical_name(raw: str) -> str:
    """
    Convert an identifier to its canonical (PascalCase) form.

    Examples:
        barang -> Barang
        kode_group -> KodeGroup
        nama_barang2 -> NamaBarang2
        HTTPServer -> HttpServer
        "" -> ""
    """
    return "".join(run[0].upper() + run[1:].lower() for run in split_runs(raw))


def strip_known_prefix(raw: str) -> str:
    """
    Remove the collection prefix from a raw identifier.

    Examples:
        tm_barang -> barang
        tt_jual -> jual
        tm_ -> ""

    Raises:
        InvalidIdentifierError: If raw does not start with a known prefix
    """
    for prefix in KNOWN_PREFIXES:
        if raw.startswith(prefix):
            return raw[len(prefix):]
    raise InvalidIdentifierError(raw)


def extract_module_name(raw: str) -> str:
    """Canonical module name of a prefixed collection (tm_barang -> Barang)."""
    return to_canonical_name(strip_known_prefix(raw))


def to_file_name(canonical: str) -> str:
    """
    File and path segment form of a canonical name.

    Examples:
        Barang -> barang
        KodeGroup -> kode-group
    """
    return "-".join(run.lower() for run in split_runs(canonical))


def to_variable_name(canonical: str) -> str:
    """Local variable form: only the first character is lower-cased."""
    return canonical[:1].lower() + canonical[1:]
