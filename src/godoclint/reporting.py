"""
godoclint reporting and output formatting.

Handles:
- Finding dataclass
- Issue counting and exit status
- Line output (`<anchor>: <message>`) as findings arrive
- JSON output
"""

from __future__ import annotations

import json
import sys
from dataclasses import asdict, dataclass
from typing import Optional, TextIO


@dataclass(frozen=True)
class Finding:
    """A single lint finding."""
    rule_id: str
    anchor: str  # "file:line:col", or a package path / file name
    message: str
    path: str
    line: int = 0
    col: int = 0
    symbol: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.anchor}: {self.message}"


class Reporter:
    """
    Collects findings, counts issues and writes each finding as one line.

    The reporter never stops a scan; the issue count only decides the
    exit status.
    """

    def __init__(self, stream: Optional[TextIO] = None, echo: bool = True) -> None:
        self.stream = stream
        self.echo = echo
        self.findings: list[Finding] = []
        self.issues = 0

    def report(self, finding: Finding) -> None:
        """Record a finding and write it out."""
        self.issues += 1
        self.findings.append(finding)
        if self.echo:
            stream = self.stream if self.stream is not None else sys.stderr
            stream.write(f"{finding}\n")

    def exit_status(self) -> int:
        """1 if anything was reported, else 0."""
        return 1 if self.issues > 0 else 0

    def render_json(self) -> str:
        """Render findings as JSON."""
        return json.dumps(
            [asdict(f) for f in self.findings],
            indent=2,
            default=str,
        )
