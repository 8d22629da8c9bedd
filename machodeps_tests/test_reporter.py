import io
import json
import pathlib
from unittest import TestCase

from machodeps import _config, _reporter
from machodeps._errors import NotMachOError, TruncatedCommandError
from machodeps._magic import MagicKind
from machodeps._records import ArchitectureRecord, MachOFile


def make_reporter(**options):
    config = _config.ReportConfiguration({"color": False, **options})
    stdout = io.StringIO()
    stderr = io.StringIO()
    return _reporter.Reporter(config, stdout=stdout, stderr=stderr), stdout, stderr


SAMPLE = MachOFile(
    pathlib.Path("libFoo.dylib"),
    MagicKind.FAT32,
    records=(
        ArchitectureRecord(
            "x86_64",
            install_name="/usr/local/lib/libFoo.dylib",
            dependencies=("/usr/lib/libSystem.B.dylib",),
            rpaths=("@loader_path",),
        ),
        ArchitectureRecord(
            "arm64",
            dependencies=("/usr/lib/libSystem.B.dylib", "@rpath/libBar.dylib"),
            issues=(TruncatedCommandError("load command 3: only 4 bytes left"),),
        ),
    ),
    issues=(NotMachOError("architecture 2 is not a thin Mach-O image"),),
)


class TestTextOutput(TestCase):
    def test_report_file(self):
        reporter, stdout, stderr = make_reporter()
        reporter.report_file(SAMPLE)
        reporter.finish()

        self.assertEqual(
            stdout.getvalue().splitlines(),
            [
                "- filename: libFoo.dylib",
                "  info:",
                "  - arch: x86_64",
                "    dylib_id: /usr/local/lib/libFoo.dylib",
                "    deps:",
                "    - /usr/lib/libSystem.B.dylib",
                "    rpaths:",
                "    - @loader_path",
                "  - arch: arm64",
                "    deps:",
                "    - /usr/lib/libSystem.B.dylib",
                "    - @rpath/libBar.dylib",
                "    rpaths:",
                "    issues:",
                "    - load command 3: only 4 bytes left",
                "",
            ],
        )
        self.assertEqual(
            stderr.getvalue(),
            "warning: architecture 2 is not a thin Mach-O image\n",
        )
        self.assertFalse(reporter.have_error)

    def test_hide_issues(self):
        reporter, stdout, _ = make_reporter(**{"show-issues": False})
        reporter.report_file(SAMPLE)
        self.assertNotIn("issues:", stdout.getvalue())

    def test_markup_in_paths(self):
        reporter, stdout, _ = make_reporter()
        reporter.report_file(
            MachOFile(
                pathlib.Path("[red]odd[/red]"),
                MagicKind.THIN64,
                records=(ArchitectureRecord("arm64", rpaths=("[bold]x",)),),
            )
        )
        output = stdout.getvalue()
        self.assertIn("- filename: [red]odd[/red]", output)
        self.assertIn("    - [bold]x", output)

    def test_report_failure(self):
        reporter, stdout, stderr = make_reporter()
        reporter.report_failure(
            "script.sh", NotMachOError("script.sh: not a Mach-O file")
        )
        reporter.finish()

        self.assertEqual(stdout.getvalue(), "")
        self.assertEqual(stderr.getvalue(), "error: script.sh: not a Mach-O file\n")
        self.assertTrue(reporter.have_error)


class TestDiagnostics(TestCase):
    def test_trace(self):
        reporter, _, stderr = make_reporter()
        reporter.trace("hidden")
        self.assertEqual(stderr.getvalue(), "")

        reporter, _, stderr = make_reporter(verbose=True)
        reporter.trace("shown")
        self.assertEqual(stderr.getvalue(), "shown\n")

    def test_emoji_codes_are_literal(self):
        reporter, stdout, stderr = make_reporter()
        reporter.report_file(
            MachOFile(
                pathlib.Path(":rocket:.dylib"),
                MagicKind.THIN64,
                records=(
                    ArchitectureRecord(
                        "arm64",
                        install_name="@rpath/:thumbs_up:.dylib",
                        dependencies=("/usr/lib/:smile:.dylib",),
                        rpaths=("@loader_path/:heart:",),
                    ),
                ),
                issues=(NotMachOError("architecture 1 at :smile:"),),
            )
        )

        output = stdout.getvalue().splitlines()
        self.assertIn("- filename: :rocket:.dylib", output)
        self.assertIn("    dylib_id: @rpath/:thumbs_up:.dylib", output)
        self.assertIn("    - /usr/lib/:smile:.dylib", output)
        self.assertIn("    - @loader_path/:heart:", output)
        self.assertEqual(stderr.getvalue(), "warning: architecture 1 at :smile:\n")

    def test_empty_messages(self):
        reporter, _, stderr = make_reporter()
        reporter.warning("")
        self.assertEqual(stderr.getvalue(), "")
        self.assertFalse(reporter.have_error)

        reporter.error("")
        self.assertEqual(stderr.getvalue(), "")
        self.assertTrue(reporter.have_error)


class TestJSONOutput(TestCase):
    def test_report(self):
        reporter, stdout, stderr = make_reporter(format=_config.OutputFormat.JSON)
        reporter.report_file(SAMPLE)
        reporter.report_failure("missing", FileNotFoundError("no such file"))

        # Nothing is written until all files are processed
        self.assertEqual(stdout.getvalue(), "")
        reporter.finish()

        result = json.loads(stdout.getvalue())
        self.assertEqual(
            result,
            [
                {
                    "filename": "libFoo.dylib",
                    "kind": "fat-32",
                    "archs": [
                        {
                            "arch": "x86_64",
                            "dylib_id": "/usr/local/lib/libFoo.dylib",
                            "deps": ["/usr/lib/libSystem.B.dylib"],
                            "rpaths": ["@loader_path"],
                            "issues": [],
                        },
                        {
                            "arch": "arm64",
                            "dylib_id": None,
                            "deps": [
                                "/usr/lib/libSystem.B.dylib",
                                "@rpath/libBar.dylib",
                            ],
                            "rpaths": [],
                            "issues": ["load command 3: only 4 bytes left"],
                        },
                    ],
                    "issues": ["architecture 2 is not a thin Mach-O image"],
                },
                {"filename": "missing", "error": "no such file"},
            ],
        )
        self.assertIn("warning:", stderr.getvalue())
        self.assertIn("error: no such file", stderr.getvalue())

    def test_empty(self):
        reporter, stdout, _ = make_reporter(format=_config.OutputFormat.JSON)
        reporter.finish()
        self.assertEqual(json.loads(stdout.getvalue()), [])
