"""
Output for the command-line tool: a listing of the linker
information per file, and diagnostics on stderr.
"""

__all__ = ("Reporter",)

import json
import sys
import typing

import rich.console
from rich.markup import escape

from ._config import OutputFormat, ReportConfiguration
from ._records import ArchitectureRecord, MachOFile


def _record_as_json(record: ArchitectureRecord) -> typing.Dict[str, typing.Any]:
    return {
        "arch": record.architecture,
        "dylib_id": record.install_name,
        "deps": list(record.dependencies),
        "rpaths": list(record.rpaths),
        "issues": [str(issue) for issue in record.issues],
    }


class Reporter:
    def __init__(
        self,
        config: typing.Optional[ReportConfiguration] = None,
        *,
        stdout: typing.Optional[typing.TextIO] = None,
        stderr: typing.Optional[typing.TextIO] = None,
    ) -> None:
        self._config = config if config is not None else ReportConfiguration()
        self._console = rich.console.Console(
            file=stdout if stdout is not None else sys.stdout,
            no_color=not self._config.color,
            emoji=False,
            highlight=False,
            soft_wrap=True,
        )
        self._diagnostics = rich.console.Console(
            file=stderr if stderr is not None else sys.stderr,
            no_color=not self._config.color,
            emoji=False,
            highlight=False,
            soft_wrap=True,
        )
        self._json: typing.List[typing.Dict[str, typing.Any]] = []
        self.have_error = False

    @property
    def is_json(self) -> bool:
        return self._config.output_format is OutputFormat.JSON

    def trace(self, message: str) -> None:
        if self._config.verbose:
            self._diagnostics.print(f"[dim]{escape(message)}[/dim]")

    def warning(self, message: str) -> None:
        if message:
            self._diagnostics.print(f"[yellow]warning:[/yellow] {escape(message)}")

    def error(self, message: str) -> None:
        if message:
            self._diagnostics.print(f"[red]error:[/red] {escape(message)}")
        self.have_error = True

    def report_file(self, macho: MachOFile) -> None:
        """
        Report the architectures in *macho*, and warn about
        the architectures that were skipped.
        """
        for issue in macho.issues:
            self.warning(str(issue))

        if self.is_json:
            self._json.append(
                {
                    "filename": str(macho.path),
                    "kind": macho.kind.value,
                    "archs": [_record_as_json(record) for record in macho.records],
                    "issues": [str(issue) for issue in macho.issues],
                }
            )
            return

        out = self._console.print
        out(f"[bold blue]- filename:[/bold blue] {escape(str(macho.path))}")
        out("[bold blue]  info:[/bold blue]")
        for record in macho.records:
            out(f"[bold green]  - arch:[/bold green] {escape(record.architecture)}")
            if record.install_name is not None:
                out(
                    "[bold green]    dylib_id:[/bold green] "
                    f"{escape(record.install_name)}"
                )
            out("[bold green]    deps:[/bold green]")
            for dependency in record.dependencies:
                out(f"    - {escape(dependency)}")
            out("[bold green]    rpaths:[/bold green]")
            for rpath in record.rpaths:
                out(f"    - {escape(rpath)}")
            if self._config.show_issues and record.issues:
                out("[bold yellow]    issues:[/bold yellow]")
                for issue in record.issues:
                    out(f"    - {escape(str(issue))}")
        out("")

    def report_failure(self, path: str, exc: Exception) -> None:
        """
        Report a file that could not be inspected at all
        """
        self.error(str(exc))
        if self.is_json:
            self._json.append({"filename": path, "error": str(exc)})

    def finish(self) -> None:
        """
        Write output that is collected until all files are processed
        """
        if self.is_json:
            self._console.out(json.dumps(self._json, indent=2), highlight=False)
