"""
Core contract checks for shim packages.
"""

import asyncio
import logging
from pathlib import Path
from typing import Any, Callable

from shim_api.config.settings import ValidationConfiguration
from shim_api.validator.loader import Failed, Loaded, LoadResult, ModuleLoader, describe_error
from shim_api.validator.multi import check_root, root_directory
from shim_api.validator.probe import PROBE_DESCRIPTION, probe_auto
from shim_api.validator.types import PackageReference, PackageTree, UnitReport

logger = logging.getLogger(__name__)

NO_ERROR = "expected no error"

NOT_BOUND = "module is NOT bound (pass `--bound` to skip this test)"
SHIM_RETURNS_POLYFILL = "shim returns polyfill (pass `--skip-shim-returns-polyfill` to skip this test)"
PROPERTY = "implementation is callable (pass `--property` to skip this test)"
AUTO_PRESENT = "auto is present (pass `--skip-auto-shim` to skip this test)"


def _call(fn: Callable[[], Any]) -> tuple[Any, str | None]:
    """Invoke a package callable, turning an exception into an error string."""
    try:
        return fn(), None
    except Exception as e:
        return None, describe_error(e)


def _export(result: LoadResult) -> Any:
    return result.module if isinstance(result, Loaded) else None


def _type_check(report: UnitReport, description: str, name: str, result: LoadResult) -> bool:
    """Assert that a companion loaded and is callable."""
    if isinstance(result, Failed):
        report.add_fail(description, details=f"{name} failed to load: {result.message}")
        return False
    return report.check(
        description,
        callable(result.module),
        details=f"{name} is {type(result.module).__name__}",
    )


def _linkage_check(
    report: UnitReport,
    description: str,
    module: Any,
    attribute: str,
    companion: LoadResult,
    linkage: bool,
) -> None:
    """Assert that `module.<attribute>` is the companion module's export."""
    if not linkage:
        report.add_skip(description, reason="not checked for sub packages of a multi-package root")
        return
    if isinstance(companion, Failed):
        report.add_fail(description, details=f"companion failed to load: {companion.message}")
        return
    actual = getattr(module, attribute, None)
    report.check(
        description,
        actual is companion.module,
        details=f"module.{attribute} is {type(actual).__name__}, not the companion module",
    )


async def _check_auto(
    report: UnitReport,
    directory: Path,
    config: ValidationConfiguration,
    loader: ModuleLoader,
    prefix: str = "",
    multi: bool = False,
) -> None:
    """In-process smoke load of `auto`, then the out-of-process probe."""
    description = f"{prefix}{AUTO_PRESENT}"
    if config.auto_shim_skip:
        # Loading auto would install the shim into this process
        report.add_skip(description, reason="auto-install check disabled")
        return

    auto = loader.load_companion(directory, "auto")
    if isinstance(auto, Loaded):
        report.add_pass(description)
    else:
        report.add_fail(description, details=f"auto failed to load: {auto.message}")

    report.add(await probe_auto(
        directory,
        multi=multi,
        timeout=config.probe_timeout,
        description=f"{prefix}{PROBE_DESCRIPTION}",
    ))


async def validate_package(
    reference: PackageReference,
    main: LoadResult,
    config: ValidationConfiguration,
    report: UnitReport,
    loader: ModuleLoader | None = None,
    prefix: str = "",
    linkage: bool = True,
) -> bool:
    """
    Run the single-package contract checks.

    Checks:
    1. Main export is callable
    2. Main export is get_polyfill() (skipped with --bound)
    3. module.implementation is the implementation module (skipped for sub packages)
    4. implementation is callable (skipped with --property)
    5. module.get_polyfill is the polyfill module (skipped for sub packages)
    6. get_polyfill is callable
    7. module.shim is the shim module (skipped for sub packages)
    8. shim is callable
    9. shim() returns get_polyfill() (skipped with --skip-shim-returns-polyfill)
    10. auto loads and installs the shim (skipped with --skip-auto-shim)

    Args:
        reference: Package being validated
        main: Result of loading the package's main module
        config: Resolved flags for this run
        report: Where assertions go
        loader: Loader for companion modules
        prefix: Prepended to every assertion description
        linkage: Check that module attributes are the companion modules

    Returns:
        False if the main module failed to load, True otherwise
    """
    loader = loader or ModuleLoader()
    if isinstance(main, Failed):
        report.add_fail(f"{prefix}{NO_ERROR}", details=main.message)
        return False

    module = main.module
    directory = reference.directory
    implementation = loader.load_companion(directory, "implementation")
    shim = loader.load_companion(directory, "shim")
    polyfill = loader.load_companion(directory, "polyfill")
    get_polyfill = _export(polyfill)
    polyfill_callable = callable(get_polyfill)

    # export
    report.check(
        f"{prefix}module is callable",
        callable(module),
        details=f"module is {type(module).__name__}",
    )
    if config.bound_skip:
        report.add_skip(f"{prefix}{NOT_BOUND}", reason="bound modules cannot be get_polyfill()")
    elif not polyfill_callable:
        report.add_fail(f"{prefix}{NOT_BOUND}", details="get_polyfill is not callable")
    else:
        value, error = _call(get_polyfill)
        report.check(
            f"{prefix}{NOT_BOUND}",
            error is None and module is value,
            details=error or "module is not get_polyfill()",
        )

    # implementation
    _linkage_check(
        report,
        f"{prefix}module.implementation is the implementation module",
        module, "implementation", implementation, linkage,
    )
    if config.property_skip:
        report.add_skip(
            f"{prefix}{PROPERTY}",
            reason="implementation that is a data property need not be callable",
        )
    else:
        _type_check(
            report,
            f"{prefix}{PROPERTY}",
            "implementation", implementation,
        )

    # polyfill
    _linkage_check(
        report,
        f"{prefix}module.get_polyfill is the polyfill module",
        module, "get_polyfill", polyfill, linkage,
    )
    _type_check(report, f"{prefix}get_polyfill is callable", "polyfill", polyfill)

    # shim
    _linkage_check(
        report,
        f"{prefix}module.shim is the shim module",
        module, "shim", shim, linkage,
    )
    if _type_check(report, f"{prefix}shim is callable", "shim", shim):
        if config.shim_returns_polyfill_skip:
            report.add_skip(f"{prefix}{SHIM_RETURNS_POLYFILL}", reason="shim return value not checked")
        elif not polyfill_callable:
            report.add_fail(f"{prefix}{SHIM_RETURNS_POLYFILL}", details="get_polyfill is not callable")
        else:
            shimmed, error = _call(shim.module)
            if error is None:
                expected, error = _call(get_polyfill)
            report.check(
                f"{prefix}{SHIM_RETURNS_POLYFILL}",
                error is None and shimmed is expected,
                details=error or "shim() is not get_polyfill()",
            )

    await _check_auto(report, directory, config, loader, prefix=prefix)
    return True


async def validate_tree(
    reference: PackageReference,
    config: ValidationConfiguration,
    report: UnitReport,
    loader: ModuleLoader | None = None,
    depth: int = 0,
) -> bool:
    """
    Validate a package, descending into sub-packages of a multi-package root.

    At depth 0 in multi mode the reference is a root: its structural checks
    run, then every declared sub-package is validated at depth 1 with the
    linkage checks turned off, and the root's auto check runs last.

    Returns:
        False if the module at this level failed to load
    """
    loader = loader or ModuleLoader()
    main = loader.load(reference.name)
    is_root = config.multi_mode and depth == 0

    if not is_root:
        prefix = f"{reference.directory.name}: " if depth > 0 else ""
        return await validate_package(
            reference, main, config, report,
            loader=loader,
            prefix=prefix,
            linkage=not config.multi_mode,
        )

    if isinstance(main, Failed):
        report.add_fail(NO_ERROR, details=main.message)
        return False

    directory = root_directory(main.module, reference.directory)
    tree = PackageTree(root=PackageReference(reference.name, directory, reference.label))
    check_root(tree, main.module, report, loader)

    for name in tree.children:
        child = tree.child_reference(name, directory)
        await validate_tree(child, config, report, loader=loader, depth=depth + 1)

    await _check_auto(report, directory, config, loader, prefix="root: ", multi=True)
    return True


async def validate_unit(
    reference: PackageReference,
    config: ValidationConfiguration,
    loader: ModuleLoader | None = None,
) -> UnitReport:
    """Validate one named module and close the unit with the load outcome."""
    report = UnitReport(reference=reference)
    logger.debug("Validating %s in %s", reference.display_name, reference.directory)

    loaded = await validate_tree(reference, config, report, loader=loader)
    if loaded:
        report.add_pass(NO_ERROR)
    return report


async def validate_all(
    references: list[PackageReference],
    config: ValidationConfiguration,
) -> list[UnitReport]:
    loader = ModuleLoader()
    return list(await asyncio.gather(
        *(validate_unit(ref, config, loader=loader) for ref in references)
    ))


def run_validation(
    references: list[PackageReference],
    config: ValidationConfiguration | None = None,
) -> list[UnitReport]:
    """
    Validate every referenced package.

    Units are scheduled together on one event loop; they only interleave
    while a probe child is running. Reports come back in input order.

    Args:
        references: Packages to validate
        config: Flags for this run (defaults to all checks enabled)

    Returns:
        One UnitReport per reference
    """
    return asyncio.run(validate_all(references, config or ValidationConfiguration()))

