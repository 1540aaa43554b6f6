#!/usr/bin/env python
"""
Setup.py distribution file for idnadiff.
"""
# std imports
import os
import codecs

# 3rd party
import setuptools


def _get_here(fname):
    return os.path.join(os.path.dirname(__file__), fname)


def _get_version(fname, key='package'):
    import json
    with open(fname, 'r') as fin:
        return json.load(fin)[key]


def main():
    """Setup.py entry point."""
    setuptools.setup(
        name='idnadiff',
        version=_get_version(
            _get_here(os.path.join('idnadiff', 'version.json'))),
        description=(
            "Report changes of IDNA derived property values between Unicode versions"),
        long_description=codecs.open(
            _get_here('README.rst'), 'rb', 'utf8').read(),
        license='MIT',
        packages=['idnadiff'],
        python_requires='>=3.9',
        install_requires=[
            'jinja2',
            'requests',
            'urllib3',
            'python-dateutil',
            'PyYAML',
        ],
        extras_require={
            'test': ['pytest'],
        },
        package_data={
            'idnadiff': ['*.json', 'templates/*.j2'],
            '': ['*.rst'],
        },
        entry_points={
            'console_scripts': ['idnadiff=idnadiff.cli:run'],
        },
        zip_safe=False,
        classifiers=[
            'Intended Audience :: Developers',
            'Natural Language :: English',
            'Environment :: Console',
            'License :: OSI Approved :: MIT License',
            'Operating System :: POSIX',
            'Programming Language :: Python :: 3',
            'Topic :: Software Development :: Internationalization',
            'Topic :: Text Processing',
        ],
        keywords=[
            'idna',
            'idna2008',
            'rfc5892',
            'unicode',
        ],
    )


if __name__ == '__main__':
    main()
