"""
Command line interface, compare IDNA derived property values of two Unicode versions.

For example::

    $ idnadiff 15.1.0 16.0.0 --output changes-16.0.0.txt

Each version label names a folder, within ``--data-dir``, containing files
allcodepoints.txt, DerivedGeneralCategory.txt and nfk.txt.
"""
# std imports
import sys
import argparse

# 3rd party
import yaml

# local
from .exceptions import IdnaDiffError
from .loader import PATH_DATA, load_snapshot
from .report import compare_snapshots
from .reporter import Reporter
from .versions import parse_version_pair


def main(old_version, new_version, data_dir=PATH_DATA, output='-', stats=None,
         fetch=False, no_check_last_modified=False, quiet=False):
    """Program entry point, returns exit status."""
    reporter = Reporter(quiet=quiet)
    try:
        parse_version_pair(old_version, new_version)
        old, new = (load_snapshot(version, data_dir, reporter=reporter, fetch=fetch,
                                  check_last_modified=not no_check_last_modified)
                    for version in (old_version, new_version))
        report = compare_snapshots(old, new, reporter)
    except IdnaDiffError as err:
        print(f'{err}', file=sys.stderr)
        return 1

    text = report.render()
    if output == '-':
        sys.stdout.write(text)
        sys.stdout.flush()
    else:
        try:
            with open(output, 'w', encoding='utf-8', newline='\n') as fout:
                fout.write(text)
        except OSError as err:
            print(f'Error writing {output}: {err}', file=sys.stderr)
            return 1
        reporter.echo(f'write {output}: ok')

    if stats:
        try:
            with open(stats, 'w', encoding='utf-8') as fout:
                yaml.safe_dump(report.plan.to_dict(), fout, sort_keys=False)
        except OSError as err:
            print(f'Error writing {stats}: {err}', file=sys.stderr)
            return 1
        reporter.echo(f'write {stats}: ok')
    reporter.echo('===================')
    return 0


def parse_args(argv=None):
    """Parse command line arguments."""
    args = argparse.ArgumentParser(
        prog='idnadiff',
        description='Report changes of IDNA derived property values between Unicode versions.')
    args.add_argument('old_version',
                      help='Earlier Unicode version, such as 15.1.0.')
    args.add_argument('new_version',
                      help='Later Unicode version, such as 16.0.0.')
    args.add_argument('--data-dir', default=PATH_DATA,
                      help='Folder containing one folder of data files per version '
                           '(default: $IDNADIFF_DATA or current folder).')
    args.add_argument('--output', default='-',
                      help='Write report to file, default is standard output.')
    args.add_argument('--stats', default=None,
                      help='Write statistics as yaml to file.')
    args.add_argument('--fetch', action='store_true',
                      help='Fetch DerivedGeneralCategory.txt from unicode.org when missing '
                           'or out-of-date.')
    args.add_argument('--no-check-last-modified', action='store_true',
                      help='With --fetch, only fetch files that are missing.')
    args.add_argument('--quiet', action='store_true',
                      help='Do not display progress and statistics.')
    return vars(args.parse_args(argv))


def run():
    """Console script entry point."""
    sys.exit(main(**parse_args()))


if __name__ == '__main__':
    run()
