"""
Transports that run the external store program and collect its output.

Each call spawns a fresh process, feeds it its input, waits for it to
exit and captures stdout/stderr.  The error stream is authoritative:
any text left on it after trimming one line terminator is a failure,
whatever the exit status or stdout say.

``DirectInvocation`` runs one CLI command per call.  ``FramedSession``
starts the program's JSON listener and sends it a single length-prefixed
request.
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from .chomp import chomp
from .config import DEFAULT_LISTEN_ARGS, DEFAULT_PROGRAM
from .errors import PassError, ProcessIOError
from .protocol import JsonValue, decode_message, decode_text, frame

logger = logging.getLogger(__name__)


@dataclass
class ProcessOutcome:
    """Captured streams and exit status of one finished process."""

    stdout: bytes
    stderr: bytes
    returncode: int


@dataclass
class Command:
    """A single CLI invocation: optional subcommand, positional args, optional input line."""

    subcommand: Optional[str] = None
    args: List[str] = field(default_factory=list)
    input: Optional[str] = None


class Transport(ABC):
    """Runs the store program once per request and returns its raw stdout."""

    def __init__(self, program: str = DEFAULT_PROGRAM):
        self.program = program

    @abstractmethod
    def execute(self, request) -> bytes:
        """Run ``request`` and return stdout, raising on any reported failure."""

    def _run(self, argv: Sequence[str], stdin: Optional[bytes] = None) -> ProcessOutcome:
        """Spawn ``argv``, write ``stdin``, and wait for exit with all output captured."""
        logger.debug("Running: %s", " ".join(argv))
        try:
            with subprocess.Popen(
                list(argv),
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            ) as proc:
                stdout, stderr = proc.communicate(stdin)
        except OSError as exc:
            raise ProcessIOError(exc) from exc
        return ProcessOutcome(stdout=stdout or b"", stderr=stderr or b"", returncode=proc.returncode)

    def _check(self, outcome: ProcessOutcome) -> bytes:
        """Raise ``PassError`` if the error stream has content, else return stdout."""
        message = chomp(decode_text(outcome.stderr, "stderr"))
        if message:
            logger.debug("%s reported an error (exit %s): %s", self.program, outcome.returncode, message)
            raise PassError(message)
        return outcome.stdout


class DirectInvocation(Transport):
    """One-shot CLI invocation with piped stdio."""

    def build_argv(self, command: Command) -> List[str]:
        argv = [self.program]
        if command.subcommand is not None and command.subcommand.strip():
            argv.append(command.subcommand)
        argv.extend(command.args)
        return argv

    def execute(self, command: Command) -> bytes:
        stdin = None
        if command.input is not None:
            stdin = (command.input + "\n").encode("utf-8")
        outcome = self._run(self.build_argv(command), stdin)
        return self._check(outcome)

    def invoke(
        self,
        subcommand: Optional[str],
        args: Sequence[str],
        input: Optional[str] = None,
    ) -> str:
        """
        Run the program and return its stdout as text, untrimmed.

        Args:
            subcommand: First argument, skipped when None or blank.
            args: Positional arguments, passed in order.
            input: A single line written to stdin followed by a newline.

        Raises:
            PassError: The program wrote to its error stream.
            ProcessIOError: The program could not be run.
            TextDecodeError: A stream was not valid UTF-8.
        """
        stdout = self.execute(Command(subcommand=subcommand, args=list(args), input=input))
        return decode_text(stdout, "stdout")


class FramedSession(Transport):
    """Single request/response exchange with the program's JSON listener."""

    def __init__(
        self,
        program: str = DEFAULT_PROGRAM,
        listen_args: Optional[Sequence[str]] = None,
    ):
        super().__init__(program)
        self.listen_args = list(listen_args) if listen_args is not None else list(DEFAULT_LISTEN_ARGS)

    def execute(self, payload: Dict[str, Any]) -> bytes:
        outcome = self._run([self.program, *self.listen_args], frame(payload))
        return self._check(outcome)

    def request(self, payload: Dict[str, Any]) -> JsonValue:
        """Send ``payload`` and return the decoded response.

        Raises JsonDecodeError when the output is not JSON, plus everything
        ``execute`` raises.
        """
        return decode_message(self.execute(payload))
