"""Execution of ImageMagick/GraphicsMagick commands."""

from __future__ import annotations

import logging
import ntpath
import os
import posixpath
from collections.abc import Sequence
from pathlib import Path

from magick_exec.application.ports import ArgumentMiddleware, DiagnosticSink, ProcessRunner
from magick_exec.application.results import (
    ExecutionResult,
    PathCheckResult,
    ProcessOutcome,
    ProcessStatus,
)
from magick_exec.arguments import ArgumentSet
from magick_exec.commandline import build_command_line
from magick_exec.escaping import EscapeContext, escape_shell_arg
from magick_exec.infrastructure.diagnostics import LoggingDiagnosticSink
from magick_exec.infrastructure.process import SubprocessRunner
from magick_exec.schemas import MagickSettings
from magick_exec.types import PACKAGE_LABELS, Package, Tool

logger = logging.getLogger(__name__)


class ExecManager:
    """Build, run and classify tool invocations.

    Parameters
    ----------
    settings : MagickSettings | None
        Host settings; defaults are used when omitted.
    runner : ProcessRunner | None
        Process adapter, :class:`SubprocessRunner` by default.
    diagnostics : DiagnosticSink | None
        Receives commands and output when ``settings.debug`` is on.
    middleware : Sequence[ArgumentMiddleware]
        Hooks run in order over a copy of the arguments before each build.
    is_windows : bool | None
        Override platform detection.
    """

    def __init__(
        self,
        settings: MagickSettings | None = None,
        *,
        runner: ProcessRunner | None = None,
        diagnostics: DiagnosticSink | None = None,
        middleware: Sequence[ArgumentMiddleware] = (),
        is_windows: bool | None = None,
    ) -> None:
        self.settings = settings or MagickSettings()
        self.runner = runner or SubprocessRunner(
            posix=None if is_windows is None else not is_windows
        )
        self.diagnostics = diagnostics or LoggingDiagnosticSink()
        self.middleware = list(middleware)
        self.is_windows = os.name == "nt" if is_windows is None else is_windows
        self.escape_context = EscapeContext(
            locale=self.settings.locale, windows=self.is_windows
        )

    # -----------------------------
    # Package / binary resolution
    # -----------------------------
    def get_package(self, package: Package | str | None = None) -> Package:
        return Package(package) if package is not None else self.settings.binaries

    def get_package_label(self, package: Package | str | None = None) -> str:
        return PACKAGE_LABELS[self.get_package(package)]

    def convert_tool(self, package: Package | str | None = None) -> Tool:
        """Tool used to convert images with the given package."""
        if self.get_package(package) is Package.GRAPHICSMAGICK:
            return Tool.GM
        return Tool.CONVERT

    def get_executable(self, tool: Tool | str, path: str | None = None) -> str:
        """Return the full path of the executable for ``tool``.

        ``path`` overrides the configured binaries directory; an empty
        directory leaves the bare executable name for a ``PATH`` lookup.
        """
        if path is None:
            path = self.settings.path_to_binaries
        executable = Tool(tool).value
        if self.is_windows:
            executable += ".exe"
        if not path:
            return executable
        join = ntpath.join if self.is_windows else posixpath.join
        return join(path, executable)

    @property
    def working_directory(self) -> Path:
        return self.settings.working_directory or Path.cwd()

    def escape_shell_arg(self, arg: str) -> str:
        """Escape ``arg`` for this platform's shell using the configured locale."""
        return escape_shell_arg(arg, self.escape_context)

    # -----------------------------
    # Execution
    # -----------------------------
    def execute(
        self,
        tool: Tool | str,
        arguments: ArgumentSet,
        path: str | None = None,
    ) -> ExecutionResult:
        """Run ``tool`` with ``arguments``.

        The caller's ``arguments`` are left untouched: middleware and the
        configured prepend arguments are applied to a copy.

        Parameters
        ----------
        tool : Tool | str
            ``identify``, ``convert`` or ``gm``.
        arguments : ArgumentSet
            Tokens and paths for this invocation.
        path : str | None, default=None
            Binaries directory override, used when verifying an installation.

        Returns
        -------
        ExecutionResult
            Classified outcome with the captured streams.

        Raises
        ------
        ConfigurationError
            If a path cannot be escaped under the configured locale.
        """
        tool = Tool(tool)
        prepared = arguments.copy()
        for hook in self.middleware:
            hook(prepared, tool)
        if self.settings.prepend:
            prepared.prepend(self.settings.prepend)

        cmdline = build_command_line(tool, prepared, self.escape_shell_arg)
        executable = self.get_executable(tool, path)
        label = self._label_for_tool(tool)
        outcome = self.run_os_shell(executable, cmdline, label)

        result = ExecutionResult(
            tool=tool.value,
            label=label,
            status=outcome.status,
            command_line=outcome.command_line,
            exit_code=outcome.exit_code,
            stdout=outcome.stdout,
            stderr=outcome.stderr,
            reason=outcome.reason,
        )
        self._log_failure(result)
        return result

    def run_os_shell(self, command: str, arguments: str, label: str) -> ProcessOutcome:
        """Run ``command`` with an already escaped argument string.

        On Windows the command goes through ``start /B`` so no console window
        opens, with ``/D`` naming the working directory explicitly.
        """
        if self.is_windows:
            prefix = (
                f'start "{label}" /D {self.escape_shell_arg(str(self.working_directory))}'
                f" /B /WAIT {self.escape_shell_arg(command)}"
            )
        else:
            prefix = self.escape_shell_arg(command)
        command_line = f"{prefix} {arguments}" if arguments else prefix

        outcome = self.runner.run(
            command_line, self.working_directory, timeout=self.settings.timeout
        )

        if self.settings.debug and self.diagnostics.is_authorized():
            self.diagnostics.emit(f"{label} command", command_line)
            if outcome.stdout:
                self.diagnostics.emit(f"{label} output", outcome.stdout)
            if outcome.stderr:
                self.diagnostics.emit(f"{label} error {outcome.exit_code}", outcome.stderr)
        return outcome

    def _label_for_tool(self, tool: Tool) -> str:
        if tool is Tool.GM:
            return PACKAGE_LABELS[Package.GRAPHICSMAGICK]
        return PACKAGE_LABELS[Package.IMAGEMAGICK]

    def _log_failure(self, result: ExecutionResult) -> None:
        extra = {
            "magick_tool": result.tool,
            "exit_code": result.exit_code,
            "command_line": result.command_line,
            "stderr": result.stderr,
        }
        if result.status is ProcessStatus.SPAWN_FAILED:
            logger.error(
                "%s could not be started: %s [command: %s]",
                result.label,
                result.reason,
                result.command_line,
                extra=extra,
            )
        elif result.status is ProcessStatus.TIMED_OUT:
            logger.error(
                "%s timed out: %s [command: %s]",
                result.label,
                result.reason,
                result.command_line,
                extra=extra,
            )
        elif result.exit_code and not result.stderr.strip():
            logger.warning(
                "%s returned with code %s [command: %s]",
                result.label,
                result.exit_code,
                result.command_line,
                extra=extra,
            )
        elif result.exit_code:
            logger.error(
                "%s error %s: %s [command: %s]",
                result.label,
                result.exit_code,
                result.stderr.strip(),
                result.command_line,
                extra=extra,
            )

    # -----------------------------
    # Installation checks
    # -----------------------------
    def check_path(
        self, path: str | None, package: Package | str | None = None
    ) -> PathCheckResult:
        """Verify a binaries directory by running ``-version``.

        Never raises: every failure becomes a diagnostic string.

        Parameters
        ----------
        path : str | None
            Candidate binaries directory. Empty means ``PATH`` lookup;
            ``None`` means the configured directory.
        package : Package | str | None, default=None
            Suite to check; defaults to the configured one.

        Returns
        -------
        PathCheckResult
            Version output, or the list of problems found.
        """
        if path is None:
            path = self.settings.path_to_binaries
        errors: list[str] = []
        output = ""
        try:
            label = self.get_package_label(package)
            tool = self.convert_tool(package)
        except ValueError as exc:
            return PathCheckResult(output="", errors=[f"Unknown graphics package: {exc}"])

        if path:
            executable = self.get_executable(tool, path)
            if not os.path.isfile(executable):
                errors.append(f"The {label} executable {executable} does not exist.")
            elif not os.access(executable, os.X_OK):
                errors.append(f"The {label} file {executable} is not executable.")

        if errors and self.settings.path_restriction:
            errors.append(
                f"The path restriction policy is set to {self.settings.path_restriction}, "
                f"which may prevent locating the {label} executable."
            )

        if not errors:
            try:
                result = self.execute(tool, ArgumentSet(tokens=["-version"]), path=path)
            except Exception as exc:
                logger.exception("%s version check failed", label)
                errors.append(f"{label} version check failed: {exc}")
            else:
                output = result.stdout
                if not result.succeeded:
                    errors.append(result.error_message)
                elif result.stderr.strip():
                    errors.append(result.stderr.strip())

        return PathCheckResult(output=output, errors=errors)

    def get_installed_locales(self) -> str:
        """List locales installed on the host (``locale -a``)."""
        if self.is_windows:
            return "List not available on Windows servers."
        outcome = self.run_os_shell("locale", "-a", "locale")
        return outcome.stdout
