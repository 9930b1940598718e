"""Runtime diagnostics shown below the greeting form.

Collects a snapshot of the interpreter, the installed web stack, the
application config, the process environment and the current request,
grouped into titled sections of ``(key, value)`` rows.
"""

from __future__ import annotations

import os
import platform
import re
import sys
from dataclasses import dataclass, field
from importlib import metadata
from typing import Any, Mapping

from flask import Flask, Request

REDACTED = "********"
DEFAULT_REDACT_PATTERN = (
    r"(?i)secret|passw|token|key|credential|cookie|authorization"
)
PACKAGES = (
    "Flask",
    "Werkzeug",
    "Jinja2",
    "MarkupSafe",
    "itsdangerous",
    "click",
    "blinker",
)


@dataclass
class Section:
    title: str
    rows: list[tuple[str, str]] = field(default_factory=list)


def package_version(name: str) -> str:
    """Return the installed version of distribution ``name``."""
    try:
        return metadata.version(name)
    except metadata.PackageNotFoundError:
        return "not installed"


def redact(items: Mapping[str, Any], pattern: re.Pattern[str]) -> list[tuple[str, str]]:
    """Return rows sorted by key, masking values whose key matches ``pattern``."""
    rows = []
    for key in sorted(items, key=str):
        value = REDACTED if pattern.search(str(key)) else str(items[key])
        rows.append((str(key), value))
    return rows


def collect(app: Flask, request: Request) -> list[Section]:
    pattern = re.compile(app.config["DIAGNOSTICS_REDACT"])
    general = Section(
        "General",
        [
            ("Python", f"{platform.python_implementation()} {platform.python_version()}"),
            ("Executable", sys.executable),
            ("Platform", platform.platform()),
            ("Host", platform.node()),
            ("Process ID", str(os.getpid())),
            ("Working directory", os.getcwd()),
            ("Server software", request.environ.get("SERVER_SOFTWARE", "unknown")),
            ("Application", app.import_name),
        ],
    )
    packages = Section("Packages", [(name, package_version(name)) for name in PACKAGES])
    return [
        general,
        packages,
        Section("Configuration", redact(app.config, pattern)),
        Section("Environment", redact(os.environ, pattern)),
        Section("Request", redact(request.environ, pattern)),
        Section("Form", redact(request.form.to_dict(), pattern)),
    ]
