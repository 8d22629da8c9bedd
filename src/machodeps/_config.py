"""
Representation of the machodeps configuration.

The configuration is read from the ``tool.machodeps`` table
of a TOML file (usually ``pyproject.toml``), command-line
options override the values from that file.
"""

import enum
import typing

T = typing.TypeVar("T")


class ConfigurationError(Exception):
    """
    Invalid configuration detected.
    """

    pass


class OutputFormat(enum.Enum):
    TEXT = "text"
    JSON = "json"


class _NoDefault:
    __slots__ = ()


NO_DEFAULT = _NoDefault()


class PropertyHolder(typing.Protocol):
    _local: typing.Dict[str, typing.Any]


class local(typing.Generic[T]):
    __slots__ = ("_key", "_default")

    def __init__(self, key: str, default: typing.Union[T, _NoDefault] = NO_DEFAULT):
        self._key = key
        self._default = default

    def __get__(self, instance: PropertyHolder, owner: type) -> T:
        try:
            return typing.cast(T, instance._local[self._key])
        except KeyError:
            if self._default is NO_DEFAULT:
                raise AttributeError(self._key) from None
            assert not isinstance(self._default, _NoDefault)
            return self._default


class ReportConfiguration:
    def __init__(self, options: typing.Optional[typing.Dict[str, typing.Any]] = None):
        self._local = dict(options) if options is not None else {}

    output_format = local[OutputFormat]("format", OutputFormat.TEXT)
    color = local[bool]("color", True)
    show_issues = local[bool]("show-issues", True)
    verbose = local[bool]("verbose", False)

    def update(self, **options: typing.Any) -> None:
        """
        Override configuration values, keys use the names from
        the configuration file.
        """
        self._local.update(options)

    def __repr__(self):
        result = []
        result.append("<ReportConfiguration\n")
        result.append(f"  output_format = {self.output_format}\n")
        result.append(f"  color = {self.color!r}\n")
        result.append(f"  show_issues = {self.show_issues!r}\n")
        result.append(f"  verbose = {self.verbose!r}\n")
        result.append(">")
        return "".join(result)


def parse_pyproject(file_contents: dict) -> ReportConfiguration:
    """
    Return the configuration in the ``tool.machodeps`` table of
    *file_contents*, the parsed contents of a TOML file. A missing
    table results in the default configuration.
    """
    config = file_contents.get("tool", {}).get("machodeps", {})
    if not isinstance(config, dict):
        raise ConfigurationError("'tool.machodeps' is not a dictionary")

    options: typing.Dict[str, typing.Any] = {}
    for key, value in config.items():
        if key == "format":
            try:
                options["format"] = OutputFormat(value)
            except ValueError:
                raise ConfigurationError(
                    "'tool.machodeps.format' has invalid value"
                ) from None

        elif key in {"color", "show-issues", "verbose"}:
            if not isinstance(value, bool):
                raise ConfigurationError(f"'tool.machodeps.{key}' is not a boolean")
            options[key] = value

        else:
            raise ConfigurationError(f"invalid key 'tool.machodeps.{key}'")

    return ReportConfiguration(options)
