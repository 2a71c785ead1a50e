"""Argument vector construction for the secondary (javac-style) compiler."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Sequence


@dataclass(slots=True)
class CompilerArguments:
    """
    Build the command line handed to the secondary compiler.

    ``runtime_classpath`` lists the primary language's runtime library jars. Classes produced by
    the primary compiler link against them, so they are appended to the classpath whenever
    executable output is requested.
    """

    runtime_classpath: Sequence[Path] = field(default_factory=tuple)

    def __call__(
        self,
        sources: Iterable[Path],
        classpath: Iterable[Path],
        output_directory: Path,
        options: Sequence[str],
        generate_executables: bool,
    ) -> list[str]:
        entries = sorted(str(path) for path in classpath)
        if generate_executables:
            entries.extend(str(path) for path in self.runtime_classpath if str(path) not in entries)

        arguments = list(options)
        arguments.extend(["-d", str(output_directory)])
        if entries:
            arguments.extend(["-classpath", os.pathsep.join(entries)])
        arguments.extend(sorted(str(path) for path in sources))
        return arguments
