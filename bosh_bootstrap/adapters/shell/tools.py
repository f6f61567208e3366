"""
External lookups — one-shot commands whose output the wizard keeps.

    mkpasswd -m sha-512 --stdin                     → salted password hash
    bosh public stemcells --tags micro,aws,stable   → latest stemcell name

Both raise CommandError when the tool is missing, fails, or prints
nothing useful. An empty answer is never accepted as a value.
"""

from __future__ import annotations

import logging
import subprocess

from bosh_bootstrap.core.errors import CommandError

logger = logging.getLogger(__name__)

STABLE_SCOPE = "stable"


def _run(cmd: list[str], *, input: str | None = None, timeout: int = 120) -> str:
    try:
        result = subprocess.run(
            cmd,
            input=input,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError as e:
        raise CommandError(
            f"'{cmd[0]}' is not installed",
            hint=f"Install {cmd[0]} and run again.",
        ) from e
    except subprocess.TimeoutExpired as e:
        raise CommandError(f"'{cmd[0]}' timed out after {timeout}s") from e

    if result.returncode != 0:
        stderr = result.stderr.strip()
        raise CommandError(
            f"'{' '.join(cmd[:3])}' failed (exit {result.returncode})"
            + (f": {stderr}" if stderr else ""),
        )
    return result.stdout


def salted_password(password: str) -> str:
    """Return a SHA-512 crypt hash of ``password`` with a fresh salt."""
    # password goes in on stdin so it never shows up in the process list
    output = _run(["mkpasswd", "-m", "sha-512", "--stdin"], input=password + "\n")
    hashed = output.strip()
    if not hashed:
        raise CommandError("mkpasswd returned an empty password hash")
    return hashed


def parse_stemcell_listing(output: str) -> str | None:
    """Pick the first micro stemcell name out of a stemcell listing.

    Handles both plain and table output, e.g.
    ``| micro-bosh-stemcell-aws-0.6.4.tgz | micro, aws, stable |``.
    """
    for line in output.splitlines():
        if "micro" not in line:
            continue
        fields = line.replace("|", " ").split()
        if fields:
            return fields[0]
    return None


def latest_micro_stemcell(bosh_provider: str, scope: str = STABLE_SCOPE) -> str:
    """Return the latest micro BOSH stemcell for a provider (aws, vsphere...)."""
    cmd = ["bosh", "public", "stemcells", "--tags", f"micro,{bosh_provider},{scope}"]
    logger.info("Locating micro-bosh stemcell, running '%s'", " ".join(cmd))
    name = parse_stemcell_listing(_run(cmd))
    if not name:
        raise CommandError(
            f"No {scope} micro-bosh stemcell found for {bosh_provider}",
            hint="Check 'bosh public stemcells' output and network access.",
        )
    return name
