"""Single-package probe: importing `auto` must invoke the package's shim."""

import sys
from pathlib import Path

from shim_api.probes import (
    EXIT_NOT_INVOKED,
    EXIT_OK,
    import_auto,
    install_recorder,
    prepare_package,
)


def main() -> int:
    package = prepare_package(Path.cwd())
    recorder = install_recorder(f"{package}.shim")

    failed = import_auto(package)
    if failed is not None:
        return failed

    if not recorder.called:
        print(f"{package}.auto did not invoke {package}.shim", file=sys.stderr)
        return EXIT_NOT_INVOKED
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
