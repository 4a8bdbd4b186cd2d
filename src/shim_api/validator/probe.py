"""
Out-of-process check that `auto` installs the shim.

Importing `auto` in the validator's own process can only show that it does not
throw: the process already has an unknown history of global installs. The
authoritative check runs a probe script in a fresh interpreter rooted at the
package directory and asserts on its exit status.
"""

import asyncio
import logging
import os
import sys
from pathlib import Path

import shim_api
from shim_api.validator.types import Assertion, Outcome

logger = logging.getLogger(__name__)

AUTO_PROBE = "shim_api.probes.auto"
MULTI_AUTO_PROBE = "shim_api.probes.multi_auto"

PROBE_DESCRIPTION = "auto invokes shim"


def probe_command(multi: bool) -> list[str]:
    """Build the command that runs the single or multi-package probe."""
    return [sys.executable, "-m", MULTI_AUTO_PROBE if multi else AUTO_PROBE]


def probe_environment() -> dict[str, str]:
    """Inherit the environment, making sure the child can import shim_api."""
    env = dict(os.environ)
    source_root = str(Path(shim_api.__file__).resolve().parent.parent)
    existing = env.get("PYTHONPATH")
    env["PYTHONPATH"] = os.pathsep.join([source_root, existing]) if existing else source_root
    return env


async def probe_auto(
    directory: Path,
    multi: bool = False,
    timeout: float | None = None,
    description: str = PROBE_DESCRIPTION,
) -> Assertion:
    """
    Run the auto-install probe for a package and wait for it to exit.

    The child inherits stdin/stdout/stderr so its diagnostics stay visible.
    There is no bound on the wait unless `timeout` is given; on expiry the
    child is killed and the assertion fails.

    Args:
        directory: Package directory, used as the child's working directory
        multi: Use the multi-package probe
        timeout: Seconds to wait before killing the child, or None to wait forever
        description: Assertion description

    Returns:
        A single assertion that the child exited with status 0
    """
    cmd = probe_command(multi)
    logger.info("Probing %s: %s", directory, " ".join(cmd))

    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            cwd=str(directory),
            env=probe_environment(),
        )
    except OSError as e:
        logger.warning("Could not start probe in %s: %s", directory, e)
        return Assertion(description, Outcome.FAIL, details=f"could not start probe: {e}")

    try:
        code = await asyncio.wait_for(process.wait(), timeout=timeout)
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        logger.warning("Probe in %s timed out after %ss", directory, timeout)
        return Assertion(description, Outcome.FAIL, details=f"probe timed out after {timeout}s")

    logger.info("Probe in %s exited with %s", directory, code)
    if code == 0:
        return Assertion(description, Outcome.PASS)
    return Assertion(description, Outcome.FAIL, details=f"expected exit status 0, got {code}")
