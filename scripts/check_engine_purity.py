#!/usr/bin/env python3
"""CI guard: the table engine stays pure and synchronous.

Fails if an engine module imports I/O, process, network or concurrency
modules, or calls open()/print()/input(). Rendering, loading and the CLI
are outside the engine and are not checked.

Usage:
    python scripts/check_engine_purity.py [package_dir]

Arguments:
    package_dir: tablekit package directory (default: src/tablekit)

Exit codes:
    0: Engine modules are pure
    1: Forbidden imports or calls detected
    2: Error
"""

import ast
import sys
from pathlib import Path


ENGINE_MODULES = (
    "columns.py",
    "filtering.py",
    "sorting.py",
    "pagination.py",
    "controller.py",
)

# Top-level packages the engine must not import
FORBIDDEN_IMPORTS = {
    # I/O and processes
    "io",
    "os",
    "pathlib",
    "shutil",
    "subprocess",
    "tempfile",
    # Concurrency
    "asyncio",
    "concurrent",
    "multiprocessing",
    "threading",
    "queue",
    # Network
    "socket",
    "http",
    "urllib",
    "requests",
}

FORBIDDEN_CALLS = {"open", "print", "input"}


def check_file(filepath: Path) -> list[str]:
    """Check one engine module for forbidden imports and calls.

    Args:
        filepath: Path to a Python source file.

    Returns:
        Violation descriptions (empty if the module is pure).
    """
    try:
        content = filepath.read_text(encoding="utf-8")
    except OSError as e:
        return [f"Could not read file: {e}"]

    try:
        tree = ast.parse(content, filename=str(filepath))
    except SyntaxError as e:
        return [f"Syntax error: {e}"]

    violations = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                if alias.name.split(".")[0] in FORBIDDEN_IMPORTS:
                    violations.append(f"Line {node.lineno}: import {alias.name}")

        elif isinstance(node, ast.ImportFrom):
            module = node.module or ""
            if node.level == 0 and module.split(".")[0] in FORBIDDEN_IMPORTS:
                violations.append(f"Line {node.lineno}: from {module} import ...")

        elif isinstance(node, ast.Call):
            if isinstance(node.func, ast.Name) and node.func.id in FORBIDDEN_CALLS:
                violations.append(f"Line {node.lineno}: call {node.func.id}()")

    return violations


def check_package(package_dir: Path) -> dict[str, list[str]]:
    """Check every engine module in a package directory.

    Returns:
        Mapping of file path to violations, for files with violations.
        A missing engine module is reported as a violation.
    """
    results = {}
    for name in ENGINE_MODULES:
        filepath = package_dir / name
        if not filepath.exists():
            results[str(filepath)] = ["Engine module missing"]
            continue
        violations = check_file(filepath)
        if violations:
            results[str(filepath)] = violations
    return results


def main():
    package_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("src/tablekit")

    if not package_dir.is_dir():
        print(f"ERROR: Directory not found: {package_dir}")
        sys.exit(2)

    all_violations = check_package(package_dir)

    if all_violations:
        print("ERROR: Engine purity violations detected\n")
        for filepath, violations in sorted(all_violations.items()):
            print(f"{filepath}:")
            for v in violations:
                print(f"  {v}")
        print("\nEngine modules must be pure, synchronous computations:")
        print("  - No file, process or network I/O")
        print("  - No threads, processes or event loops")
        sys.exit(1)

    print(f"OK: Engine modules in {package_dir} are pure")
    sys.exit(0)


if __name__ == "__main__":
    main()
