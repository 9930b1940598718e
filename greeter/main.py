"""Greeter application entry point.

This module exposes a tiny Flask application that renders a name form,
greets whoever submits it and dumps runtime diagnostics below the form.
Running it will start a development web server.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from flask import Flask, render_template_string, request
from markupsafe import Markup, escape

from greeter.diagnostics import DEFAULT_REDACT_PATTERN, collect

VALIDATION_MESSAGE = "Please enter your name."

PAGE = """<!DOCTYPE html>
<html>
<head>
    <title>Simple Greeting Form</title>
</head>
<body>
{%- if greeting %}
    <h2>{{ greeting }}</h2>
{%- elif error %}
    <p style="color:red;">{{ error }}</p>
{%- endif %}
    <form method="post" action="">
        <label for="name">Enter your name:</label>
        <input type="text" name="name" id="name" required>
        <button type="submit">Submit</button>
    </form>
    <div id="diagnostics">
    <h1>Diagnostics</h1>
    {%- for section in diagnostics %}
    <h2>{{ section.title }}</h2>
    <table>
        {%- for key, value in section.rows %}
        <tr><td>{{ key }}</td><td>{{ value }}</td></tr>
        {%- endfor %}
    </table>
    {%- endfor %}
    </div>
</body>
</html>
"""


def sanitize(raw: Optional[str]) -> Markup:
    """Trim ``raw`` and escape it for HTML output."""
    return escape((raw or "").strip())


def greet(name: str) -> Markup:
    """Return a friendly greeting for the provided ``name``."""
    return Markup("Hello, {}!").format(name)


def create_app(config: Optional[Mapping[str, Any]] = None) -> Flask:
    """Create and configure the greeter application."""

    app = Flask(__name__)
    app.config.from_mapping(
        HOST="127.0.0.1",
        PORT=5000,
        LOG_LEVEL="INFO",
        DIAGNOSTICS_REDACT=DEFAULT_REDACT_PATTERN,
    )
    app.config.from_prefixed_env()
    if config:
        app.config.update(config)

    @app.route("/", methods=["GET", "POST", "PUT", "PATCH", "DELETE"])
    def index():
        greeting = error = None
        if request.method == "POST":
            name = sanitize(request.form.get("name"))
            if name:
                greeting = greet(name)
                app.logger.info("Greeted submitted name (%d chars)", len(name))
            else:
                error = VALIDATION_MESSAGE
                app.logger.info("Rejected empty name submission")

        return render_template_string(
            PAGE,
            greeting=greeting,
            error=error,
            diagnostics=collect(app, request),
        )

    return app


def main() -> None:
    """Run the development server when executed as a script."""
    app = create_app()
    logging.basicConfig(level=app.config["LOG_LEVEL"])
    app.run(host=app.config["HOST"], port=int(app.config["PORT"]))


if __name__ == "__main__":  # pragma: no cover
    main()
