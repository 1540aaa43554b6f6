"""Progress and statistics messages for the operator running a comparison."""
# std imports
import sys
import contextlib


class Reporter:
    """
    Print progress messages, by default to standard error.

    The report itself is never written through a reporter, only the
    statistics and progress that accompany it.

    :param stream: file-like object, resolved to ``sys.stderr`` at the time
        of each message when ``None``.
    :param bool quiet: when True, nothing is printed.
    """

    def __init__(self, stream=None, quiet=False):
        self.stream = stream
        self.quiet = quiet

    def echo(self, message='', end='\n'):
        """Print one message, just like print()."""
        if self.quiet:
            return
        print(message, end=end, file=self.stream or sys.stderr, flush=True)

    @contextlib.contextmanager
    def progress(self, message):
        """Print ``message: `` before, and ``ok`` after the managed block succeeds."""
        self.echo(f'{message}: ', end='')
        yield self
        self.echo('ok')


#: reporter used when none is given, it prints nothing.
NULL_REPORTER = Reporter(quiet=True)
