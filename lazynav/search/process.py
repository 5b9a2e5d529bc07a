"""Spawns search pipelines as argument vectors, never through a shell."""

from __future__ import annotations

import logging
import shutil
import subprocess
import tempfile
from collections.abc import Callable, Iterator, Sequence
from typing import IO

from ..errors import SearchProcessError

logger = logging.getLogger(__name__)


class PipelineProcess:
    """Stages connected stdout to stdin; the last stage's stdout is the result.

    Each stage writes stderr to its own temporary file, so a stage that warns a
    lot never blocks on a full pipe while stdout is still being read.
    """

    def __init__(self, procs: list[subprocess.Popen], stderr_files: Sequence[IO[bytes]] = ()) -> None:
        self.procs = procs
        self.stderr_files = list(stderr_files)

    @property
    def pids(self) -> list[int]:
        return [proc.pid for proc in self.procs]

    def stdout_lines(self) -> Iterator[str]:
        stdout = self.procs[-1].stdout
        assert stdout is not None
        for raw in stdout:
            yield raw.rstrip("\r\n")

    def wait(self) -> tuple[int, str]:
        stdout = self.procs[-1].stdout
        if stdout is not None and not stdout.closed:
            stdout.read()
            stdout.close()
        for proc in self.procs:
            proc.wait()
        stderr_text = "\n".join(part for part in (_drain(f) for f in self.stderr_files) if part)
        return self.procs[-1].returncode, stderr_text

    def terminate(self) -> None:
        for proc in self.procs:
            if proc.poll() is None:
                logger.debug("terminating search process %s", proc.pid)
                try:
                    proc.terminate()
                except OSError:
                    logger.debug("search process %s already gone", proc.pid)


def _drain(stderr_file: IO[bytes]) -> str:
    try:
        stderr_file.seek(0)
        return stderr_file.read().decode("utf-8", errors="replace").strip()
    finally:
        stderr_file.close()


class SubprocessRunner:
    def __init__(self, popen: Callable[..., subprocess.Popen] = subprocess.Popen) -> None:
        self.popen = popen

    def spawn(self, stages: Sequence[Sequence[str]], cwd: str) -> PipelineProcess:
        if not stages:
            raise SearchProcessError(cwd, "empty search command")
        for stage in stages:
            if shutil.which(stage[0]) is None:
                raise SearchProcessError(cwd, f"{stage[0]} is not installed.")

        procs: list[subprocess.Popen] = []
        stderr_files: list[IO[bytes]] = []
        previous_stdout = None
        try:
            for stage in stages:
                stderr_file = tempfile.TemporaryFile()
                stderr_files.append(stderr_file)
                proc = self.popen(
                    list(stage),
                    cwd=cwd,
                    stdin=previous_stdout if previous_stdout is not None else subprocess.DEVNULL,
                    stdout=subprocess.PIPE,
                    stderr=stderr_file,
                    text=True,
                    encoding="utf-8",
                    errors="replace",
                )
                if previous_stdout is not None:
                    # the next stage owns the pipe now
                    previous_stdout.close()
                previous_stdout = proc.stdout
                procs.append(proc)
        except OSError as exc:
            PipelineProcess(procs).terminate()
            for stderr_file in stderr_files:
                stderr_file.close()
            raise SearchProcessError(cwd, f"failed to run {stages[0][0]}: {exc}") from exc

        logger.debug("spawned %s in %s as %s", [list(stage) for stage in stages], cwd, [p.pid for p in procs])
        return PipelineProcess(procs, stderr_files)
