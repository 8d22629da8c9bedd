#!/usr/bin/env python


import os
import sys
import unittest

from setuptools import Command, find_packages, setup
from setuptools.command import egg_info

with open("README.rst") as fp:
    LONG_DESCRIPTION = fp.read()

CLASSIFIERS = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "License :: OSI Approved :: MIT License",
    "Natural Language :: English",
    "Operating System :: OS Independent",
    "Programming Language :: Python",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3.8",
    "Programming Language :: Python :: 3.9",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Topic :: Software Development :: Build Tools",
    "Topic :: Software Development :: Debuggers",
]

TOPDIR = os.path.dirname(os.path.abspath(__file__))


def test_loader(test_pkg):
    test_dir = os.path.join(TOPDIR, test_pkg)
    test_modules = sorted(
        fn[:-3]
        for fn in os.listdir(test_dir)
        if fn.startswith("test_") and fn.endswith(".py")
    )

    # The tests import their helpers as top-level modules
    sys.path.insert(0, test_dir)
    sys.path.insert(0, os.path.join(TOPDIR, "src"))

    suites = []
    for mod_name in test_modules:
        try:
            module = __import__(mod_name)
        except ImportError as exc:
            print(f"SKIP {mod_name}: {exc}")
            continue

        suites.append(unittest.defaultTestLoader.loadTestsFromModule(module))

    return unittest.TestSuite(suites)


class my_egg_info(egg_info.egg_info):
    def run(self):
        egg_info.egg_info.run(self)

        path = os.path.join(self.egg_info, "PKG-INFO")
        with open(path) as fp:
            contents = fp.read()

        first, middle, last = contents.partition("\n\n")

        with open(path, "w") as fp:
            fp.write(first)
            fp.write(
                "Project-URL: Issue tracker, "
                "https://github.com/machodeps/machodeps/issues\n"
            )
            fp.write(
                "Project-URL: Repository, https://github.com/machodeps/machodeps\n"
            )
            fp.write(middle)
            fp.write(last)


class test(Command):
    description = "run test suite"
    user_options = [
        ("verbosity=", None, "print what tests are run"),
    ]

    def initialize_options(self):
        self.verbosity = "1"

    def finalize_options(self):
        if isinstance(self.verbosity, str):
            self.verbosity = int(self.verbosity)

    def run(self):
        old_path = sys.path[:]
        try:
            meta = self.distribution.metadata
            suite = test_loader(meta.get_name() + "_tests")

            runner = unittest.TextTestRunner(verbosity=self.verbosity)
            result = runner.run(suite)

            # Print out summary. This is a structured format that
            # should make it easy to use this information in scripts.
            summary = {
                "count": result.testsRun,
                "fails": len(result.failures),
                "errors": len(result.errors),
                "xfails": len(result.expectedFailures),
                "xpass": len(result.unexpectedSuccesses),
                "skip": len(result.skipped),
            }
            print(f"SUMMARY: {summary}")
            if summary["fails"] or summary["errors"]:
                sys.exit(1)

        finally:
            sys.path[:] = old_path


setup(
    # metadata
    name="machodeps",
    version="1.0",
    description="Show the linker dependencies of Mach-O binaries",
    license="MIT License",
    platforms=["any"],
    long_description=LONG_DESCRIPTION,
    long_description_content_type="text/x-rst; charset=UTF-8",
    classifiers=CLASSIFIERS,
    keywords=["macho", "dylib", "rpath", "otool"],
    python_requires=">=3.8",
    install_requires=[
        "macholib>=1.16",
        "rich",
        'tomli; python_version < "3.11"',
    ],
    cmdclass={"egg_info": my_egg_info, "test": test},
    package_dir={"": "src"},
    packages=find_packages("src"),
    entry_points={
        "console_scripts": ["machodeps = machodeps.__main__:main"],
    },
    zip_safe=True,
)
