"""Sending HTML email over SMTP, with simple cached templates."""

from __future__ import annotations

import logging
import re
import smtplib
import ssl
from collections.abc import Iterable, Mapping
from email.message import EmailMessage
from pathlib import Path
from string import Template
from typing import Any

from .serialize import escape_html

logger = logging.getLogger(__name__)

SMTPS_PORT = 465

# Parsed templates keyed by the name of their first file.
_TEMPLATE_CACHE: dict[str, HTMLTemplate] = {}

_UNICODE_LETTERS = "\u00a0-\ud7ff\uf900-\ufdcf\ufdf0-\uffef"
_ATEXT = rf"[a-zA-Z0-9!#$%&'*+\-/=?^_`{{|}}~{_UNICODE_LETTERS}]"
_DOT_ATOM = rf"{_ATEXT}+(?:\.{_ATEXT}+)*"
_QUOTED_STRING = (
    rf'"(?:[ \t\x01-\x08\x0b\x0c\x0e-\x1f\x7f\x21\x23-\x5b\x5d-\x7e{_UNICODE_LETTERS}]'
    rf"|\\[\x01-\x09\x0b\x0c\x0d-\x7f{_UNICODE_LETTERS}])*\""
)
_LABEL = rf"[a-zA-Z0-9{_UNICODE_LETTERS}](?:[a-zA-Z0-9\-_~{_UNICODE_LETTERS}]*[a-zA-Z0-9{_UNICODE_LETTERS}])?"
_TOP_LABEL = rf"[a-zA-Z{_UNICODE_LETTERS}](?:[a-zA-Z0-9\-_~{_UNICODE_LETTERS}]*[a-zA-Z{_UNICODE_LETTERS}])?"
EMAIL_PATTERN = re.compile(rf"(?:{_DOT_ATOM}|{_QUOTED_STRING})@(?:{_LABEL}\.)+{_TOP_LABEL}\.?")


class HTMLTemplate(Template):
    """`string.Template` whose substituted values are HTML escaped."""

    def render(self, params: Mapping[str, Any]) -> str:
        escaped = {key: escape_html(str(value)) for key, value in params.items()}
        return self.safe_substitute(escaped)


def is_valid_email(address: str) -> bool:
    return EMAIL_PATTERN.fullmatch(address) is not None


def split_host_port(address: str) -> tuple[str, int]:
    """Split "host:port" (or "[v6]:port") into its host and numeric port."""
    host, sep, port = address.rpartition(":")
    if not sep or not host:
        logger.error("Error in email server config %r: missing port", address)
        raise ValueError(f"missing port in address {address!r}")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    if not port.isdigit():
        logger.error("Error in email server config: invalid port %r", port)
        raise ValueError(f"invalid port {port!r} in address {address!r}")
    return host, int(port)


def parse_template(*files: str | Path) -> HTMLTemplate:
    """Build one template from one or more files.

    The files are concatenated in order and rendered as a whole, so every
    file's text ends up in the output. There are no named partials.
    """
    if not files:
        raise ValueError("parse_template needs at least one file")
    source = "".join(Path(name).read_text(encoding="utf-8") for name in files)
    return HTMLTemplate(source)


def _tls_context(verify_tls: bool) -> ssl.SSLContext:
    context = ssl.create_default_context()
    if not verify_tls:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context


def build_message(sender: str, subject: str, body: str, to: Iterable[str]) -> EmailMessage:
    message = EmailMessage()
    message["From"] = sender
    message["To"] = ", ".join(to)
    message["Subject"] = subject
    message.set_content(body, subtype="html")
    return message


def send_email(
    server_address: str,
    password: str,
    sender: str,
    subject: str,
    body: str,
    *to: str,
    verify_tls: bool = True,
) -> None:
    """Send an HTML body to every address in `to`.

    Port 465 uses implicit TLS, other ports upgrade with STARTTLS when the
    server offers it. The sender address doubles as the login name.
    """
    host, port = split_host_port(server_address)
    message = build_message(sender, subject, body, to)
    context = _tls_context(verify_tls)

    try:
        if port == SMTPS_PORT:
            client = smtplib.SMTP_SSL(host, port, context=context)
        else:
            client = smtplib.SMTP(host, port)
        with client:
            if port != SMTPS_PORT:
                client.ehlo()
                if client.has_extn("starttls"):
                    client.starttls(context=context)
                    client.ehlo()
            if password:
                client.login(sender, password)
            client.send_message(message)
    except (smtplib.SMTPException, OSError) as exc:
        logger.error("Error sending email %r to %s: %s", subject, ", ".join(to), exc)
        raise


def send_html_email(
    server_address: str,
    password: str,
    sender: str,
    subject: str,
    templates: list[str],
    params: Mapping[str, Any],
    *to: str,
    verify_tls: bool = True,
) -> None:
    """Render the (cached) templates with params and send the result."""
    key = str(templates[0])
    template = _TEMPLATE_CACHE.get(key)
    if template is None:
        template = _TEMPLATE_CACHE[key] = parse_template(*templates)
    body = template.render(params)
    send_email(server_address, password, sender, subject, body, *to, verify_tls=verify_tls)
