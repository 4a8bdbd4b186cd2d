"""Multi-package probe: the root's `auto` must invoke every sub-package shim."""

import sys
from pathlib import Path

from shim_api.probes import (
    EXIT_NOT_INVOKED,
    EXIT_OK,
    import_auto,
    install_recorder,
    prepare_package,
)
from shim_api.validator.multi import eligible_subdirectories


def main() -> int:
    directory = Path.cwd()
    package = prepare_package(directory)

    # Stand-ins go in before anything under the root is imported
    recorders = {
        name: install_recorder(f"{package}.{name}.shim")
        for name in eligible_subdirectories(directory)
    }

    failed = import_auto(package)
    if failed is not None:
        return failed

    declared = getattr(sys.modules.get(package), "__all__", None)
    if not isinstance(declared, (list, tuple)):
        print(f"{package} does not declare its sub-packages in __all__", file=sys.stderr)
        return EXIT_NOT_INVOKED

    missed = [
        name for name in declared
        if not isinstance(name, str) or name not in recorders or not recorders[name].called
    ]
    if missed:
        print(f"{package}.auto did not invoke shims of: {', '.join(map(str, missed))}", file=sys.stderr)
        return EXIT_NOT_INVOKED
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
