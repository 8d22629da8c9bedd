import textwrap
from unittest import TestCase

from machodeps import _config


class TestPropertyHelpers(TestCase):
    def test_local(self):
        class Holder:
            is_set = _config.local[bool]("is_set", False)
            path = _config.local[str]("path-value")

        value = Holder()
        value._local = {}

        self.assertEqual(value.is_set, False)
        with self.assertRaisesRegex(AttributeError, "path-value"):
            value.path

        value._local["is_set"] = True
        value._local["path-value"] = "hello"

        self.assertEqual(value.is_set, True)
        self.assertEqual(value.path, "hello")


class TestReportConfiguration(TestCase):
    def test_defaults(self):
        config = _config.ReportConfiguration()
        self.assertIs(config.output_format, _config.OutputFormat.TEXT)
        self.assertTrue(config.color)
        self.assertTrue(config.show_issues)
        self.assertFalse(config.verbose)

    def test_update(self):
        config = _config.ReportConfiguration({"color": False})
        config.update(format=_config.OutputFormat.JSON, verbose=True)
        self.assertIs(config.output_format, _config.OutputFormat.JSON)
        self.assertFalse(config.color)
        self.assertTrue(config.verbose)

    def test_repr(self):
        self.assertEqual(
            repr(_config.ReportConfiguration()),
            textwrap.dedent(
                """\
            <ReportConfiguration
              output_format = OutputFormat.TEXT
              color = True
              show_issues = True
              verbose = False
            >"""
            ),
        )


class TestParsePyproject(TestCase):
    def test_missing_table(self):
        config = _config.parse_pyproject({})
        self.assertIs(config.output_format, _config.OutputFormat.TEXT)

        config = _config.parse_pyproject({"tool": {"other": {}}})
        self.assertTrue(config.color)

    def test_valid(self):
        config = _config.parse_pyproject(
            {
                "tool": {
                    "machodeps": {
                        "format": "json",
                        "color": False,
                        "show-issues": False,
                        "verbose": True,
                    }
                }
            }
        )
        self.assertIs(config.output_format, _config.OutputFormat.JSON)
        self.assertFalse(config.color)
        self.assertFalse(config.show_issues)
        self.assertTrue(config.verbose)

    def test_invalid_format(self):
        with self.assertRaisesRegex(
            _config.ConfigurationError, "'tool.machodeps.format' has invalid value"
        ):
            _config.parse_pyproject({"tool": {"machodeps": {"format": "yaml"}}})

    def test_invalid_boolean(self):
        for key in ("color", "show-issues", "verbose"):
            with self.subTest(key=key):
                with self.assertRaisesRegex(
                    _config.ConfigurationError,
                    f"'tool.machodeps.{key}' is not a boolean",
                ):
                    _config.parse_pyproject({"tool": {"machodeps": {key: "yes"}}})

    def test_invalid_key(self):
        with self.assertRaisesRegex(
            _config.ConfigurationError, "invalid key 'tool.machodeps.colour'"
        ):
            _config.parse_pyproject({"tool": {"machodeps": {"colour": True}}})

    def test_not_a_table(self):
        with self.assertRaisesRegex(
            _config.ConfigurationError, "'tool.machodeps' is not a dictionary"
        ):
            _config.parse_pyproject({"tool": {"machodeps": 42}})
