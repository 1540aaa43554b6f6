"""
Load a :class:`~idnadiff.snapshot.Snapshot` from the data files of one version.

Each version is a folder, named by its version label, containing:

- ``allcodepoints.txt``: derived property value and name of every code point,
  ``0041;PVALID;...;LATIN CAPITAL LETTER A``.
- ``DerivedGeneralCategory.txt``: General_Category, as published in the
  Unicode Character Database.  When missing, it may be fetched from
  unicode.org.
- ``nfk.txt``: normalization mapping of code points, ``U+00C0;0041;0300``.

Malformed records are skipped, and reported, without failing the data file.
"""
from __future__ import annotations

# std imports
import os
import datetime
import functools
from dataclasses import dataclass

from typing import Callable, Iterable, Iterator, NamedTuple, TypeVar

# 3rd party
import requests
import urllib3.util
import dateutil.parser

# local
from .exceptions import MissingDataset, MalformedRecord
from .reporter import NULL_REPORTER, Reporter
from .snapshot import MAX_UCS, Record, Snapshot

PATH_DATA = os.environ.get('IDNADIFF_DATA', os.curdir)

CONNECT_TIMEOUT = int(os.environ.get('CONNECT_TIMEOUT', '10'))
FETCH_BLOCKSIZE = int(os.environ.get('FETCH_BLOCKSIZE', '4096'))
MAX_RETRIES = int(os.environ.get('MAX_RETRIES', '6'))
BACKOFF_FACTOR = float(os.environ.get('BACKOFF_FACTOR', '0.1'))

FILENAME_CODEPOINTS = 'allcodepoints.txt'
FILENAME_CATEGORY = 'DerivedGeneralCategory.txt'
FILENAME_NFK = 'nfk.txt'

T = TypeVar('T')


def parse_ucs(text: str) -> int:
    """
    Parse hexadecimal code point, with or without leading ``U+``.

    >>> parse_ucs('U+00C0')
    192
    """
    hex_str = text.strip()
    if hex_str.startswith('U+'):
        hex_str = hex_str[2:]
    try:
        ucs = int(hex_str, base=16)
    except ValueError:
        raise MalformedRecord(f'invalid code point {text!r}') from None
    if not 0 <= ucs <= MAX_UCS:
        raise MalformedRecord(f'code point {text!r} out of range')
    return ucs


class CodepointEntry(NamedTuple):
    ucs: int
    derived: str
    name: str


@dataclass(frozen=True)
class TableEntry:
    """An entry of a unicode table, ``code_range`` is inclusive."""
    code_range: tuple[int, int] | None
    properties: tuple[str, ...]
    comment: str

    def codepoints(self) -> range:
        if self.code_range is None:
            return range(0)
        return range(self.code_range[0], self.code_range[1] + 1)


def parse_codepoint_line(line: str) -> CodepointEntry | None:
    """Parse line of allcodepoints.txt, ``None`` for lines without data."""
    data_fields = line.rstrip('\r\n').split(';')
    if len(data_fields) < 2:
        return None
    if len(data_fields) < 4:
        raise MalformedRecord(f'expected 4 fields, got {len(data_fields)}')
    return CodepointEntry(parse_ucs(data_fields[0]), data_fields[1].strip(), data_fields[3].strip())


def parse_unicode_table_line(line: str) -> TableEntry | None:
    """
    Parse line of unicode tables, such as DerivedGeneralCategory.txt.

    See details: https://www.unicode.org/reports/tr44/#Format_Conventions
    """
    data, _, comment = line.partition('#')
    data_fields = [field.strip() for field in data.split(';')]
    code_points_str, *properties = data_fields
    if not code_points_str:
        return None
    if not properties:
        raise MalformedRecord(f'missing property value for {code_points_str!r}')

    if '..' in code_points_str:
        start, end = code_points_str.split('..', 1)
    else:
        start = end = code_points_str
    code_range = (parse_ucs(start), parse_ucs(end))
    if code_range[0] > code_range[1]:
        raise MalformedRecord(f'invalid range {code_points_str!r}')
    return TableEntry(code_range, tuple(properties), comment)


def parse_nfk_line(line: str) -> tuple[int, tuple[str, ...]] | None:
    """Parse line of nfk.txt into code point and its tokens, ``None`` for lines without data."""
    parts = line.rstrip('\r\n').split(';')
    if len(parts) < 2:
        return None
    return parse_ucs(parts[0]), tuple(token.strip() for token in parts[1:])


def decode_line(raw_line: bytes) -> str:
    try:
        return raw_line.decode('utf-8')
    except UnicodeDecodeError as err:
        raise MalformedRecord(f'invalid utf-8: {err.reason} at position {err.start}') from None


def iter_records(fname: str, parse_line: Callable[[str], T | None],
                 reporter: Reporter = NULL_REPORTER) -> Iterator[T]:
    """
    Yield records of data file ``fname`` parsed by ``parse_line``.

    Lines that are not valid utf-8, or raising :class:`MalformedRecord`,
    are reported and skipped.

    :raises MissingDataset: when the file cannot be read.
    """
    try:
        with open(fname, 'rb') as fin:
            for lineno, raw_line in enumerate(fin, start=1):
                try:
                    record = parse_line(decode_line(raw_line))
                except MalformedRecord as err:
                    reporter.echo(f'skip {fname}:{lineno}: {err}')
                    continue
                if record is not None:
                    yield record
    except OSError as err:
        raise MissingDataset(f'Error reading {fname}: {err}') from err


def read_codepoints(fname: str, reporter: Reporter = NULL_REPORTER) -> list[CodepointEntry]:
    return list(iter_records(fname, parse_codepoint_line, reporter))


def read_general_category(fname: str, reporter: Reporter = NULL_REPORTER) -> dict[int, str]:
    """Return General_Category of every code point listed, ranges expanded."""
    return {ucs: entry.properties[0]
            for entry in iter_records(fname, parse_unicode_table_line, reporter)
            for ucs in entry.codepoints()}


def read_nfk(fname: str, reporter: Reporter = NULL_REPORTER) -> dict[int, tuple[str, ...]]:
    return dict(iter_records(fname, parse_nfk_line, reporter))


def build_snapshot(version: str,
                   codepoints: Iterable[CodepointEntry],
                   categories: dict[int, str],
                   decompositions: dict[int, tuple[str, ...]]) -> Snapshot:
    """Join records of the three data files by code point."""
    return Snapshot(version, {
        entry.ucs: Record(derived=entry.derived,
                          category=categories.get(entry.ucs, ''),
                          decomposition=decompositions.get(entry.ucs, ()),
                          name=entry.name)
        for entry in codepoints})


def load_snapshot(version: str, data_dir: str | None = None,
                  reporter: Reporter = NULL_REPORTER,
                  fetch: bool = False, check_last_modified: bool = True) -> Snapshot:
    """
    Load snapshot of ``version`` from folder ``data_dir/version``.

    :param fetch: retrieve DerivedGeneralCategory.txt from unicode.org when
        missing, or out-of-date unless ``check_last_modified`` is False.
    :raises MissingDataset: when any data file cannot be supplied.
    """
    folder = os.path.join(data_dir or PATH_DATA, version)
    fname_codepoints = os.path.join(folder, FILENAME_CODEPOINTS)
    fname_nfk = os.path.join(folder, FILENAME_NFK)
    for fname in (fname_codepoints, fname_nfk):
        if not os.path.exists(fname):
            raise MissingDataset(f'Error reading {fname}: no such file')

    if fetch:
        fname_category = UnicodeDataFile.DerivedGeneralCategory(
            version, folder, check_last_modified=check_last_modified, reporter=reporter)
    else:
        fname_category = os.path.join(folder, FILENAME_CATEGORY)

    with reporter.progress(f'parsing {fname_codepoints}'):
        codepoints = read_codepoints(fname_codepoints, reporter)
    with reporter.progress(f'parsing {fname_category}'):
        categories = read_general_category(fname_category, reporter)
    with reporter.progress(f'parsing {fname_nfk}'):
        decompositions = read_nfk(fname_nfk, reporter)
    return build_snapshot(version, codepoints, categories, decompositions)


@functools.cache
def get_http_session() -> requests.Session:
    session = requests.Session()
    retries = urllib3.util.Retry(total=MAX_RETRIES,
                                 backoff_factor=BACKOFF_FACTOR,
                                 status_forcelist=[500, 502, 503, 504])
    session.mount('https://', requests.adapters.HTTPAdapter(max_retries=retries))
    return session


class UnicodeDataFile:
    """
    Helper class for fetching Unicode Data Files.

    Methods like 'DerivedGeneralCategory' return a local filename, but have the
    side-effect of fetching those files from unicode.org first, if not existing
    or out-of-date.
    """
    URL_DERIVED_CATEGORY = 'https://www.unicode.org/Public/{version}/ucd/extracted/DerivedGeneralCategory.txt'

    @classmethod
    def DerivedGeneralCategory(cls, version: str, folder: str, check_last_modified: bool = True,
                               reporter: Reporter = NULL_REPORTER) -> str:
        fname = os.path.join(folder, FILENAME_CATEGORY)
        cls.do_retrieve(url=cls.URL_DERIVED_CATEGORY.format(version=version), fname=fname,
                        check_last_modified=check_last_modified, reporter=reporter)
        return fname

    @staticmethod
    def do_retrieve(url: str, fname: str, check_last_modified: bool = True,
                    reporter: Reporter = NULL_REPORTER) -> None:
        """
        Retrieve given url to target filepath fname.

        The download is saved as ``fname.part`` and renamed once complete,
        ``fname`` is never left truncated.

        :raises MissingDataset: when the url cannot be fetched.
        """
        folder = os.path.dirname(fname)
        fname_part = f'{fname}.part'
        try:
            if folder and not os.path.exists(folder):
                os.makedirs(folder)
            if not UnicodeDataFile.is_url_newer(url, fname, check_last_modified):
                return
            resp = get_http_session().get(url, timeout=CONNECT_TIMEOUT)
            resp.raise_for_status()
            with reporter.progress(f'saving {fname}'):
                with open(fname_part, 'wb') as fout:
                    for chunk in resp.iter_content(FETCH_BLOCKSIZE):
                        fout.write(chunk)
                os.replace(fname_part, fname)
        except (OSError, requests.RequestException) as err:
            if os.path.exists(fname_part):
                os.remove(fname_part)
            raise MissingDataset(f'Error fetching {url}: {err}') from err

    @staticmethod
    def is_url_newer(url: str, fname: str, check_last_modified: bool = True) -> bool:
        if not os.path.exists(fname):
            return True
        if not check_last_modified:
            return False
        resp = get_http_session().head(url, timeout=CONNECT_TIMEOUT)
        resp.raise_for_status()
        last_modified = resp.headers.get('Last-Modified')
        if last_modified is None:
            return False
        remote_url_dt = dateutil.parser.parse(last_modified).astimezone()
        local_file_dt = datetime.datetime.fromtimestamp(os.path.getmtime(fname)).astimezone()
        return remote_url_dt > local_file_dt
