"""Pytest configuration and fixtures."""
import pytest

from idnadiff import Reporter


class RecordingReporter(Reporter):
    """Reporter that keeps every message, rather than printing."""

    def __init__(self):
        super().__init__()
        self.messages = []

    def echo(self, message='', end='\n'):
        self.messages.append(message)


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def write_version(tmp_path):
    """Write data files of a version folder within ``tmp_path``, return folder."""
    def _write(version, codepoints='', categories='', nfk=''):
        folder = tmp_path / version
        folder.mkdir()
        for fname, text in (('allcodepoints.txt', codepoints),
                            ('DerivedGeneralCategory.txt', categories),
                            ('nfk.txt', nfk)):
            if text is not None:
                (folder / fname).write_text(text, encoding='utf-8')
        return folder
    return _write
