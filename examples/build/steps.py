"""Order build steps with depsort.

Run with `python examples/build/steps.py`.
"""

from collections.abc import Callable

import depsort


def compile_sources() -> str:
    return "compiled"


def run_tests() -> str:
    return "tested"


def package() -> str:
    return "packaged"


def fetch_deps() -> str:
    return "fetched"


def lint() -> str:
    return "linted"


steps: list[depsort.Node[str, Callable[[], str]]] = [
    depsort.Node("package", ["compile", "test"], package),
    depsort.Node("test", ["compile"], run_tests),
    depsort.Node("compile", ["fetch"], compile_sources),
    depsort.Node("fetch", [], fetch_deps),
    # Not needed to package
    depsort.Node("lint", ["fetch"], lint),
]


if __name__ == "__main__":
    for step in depsort.sort_values(steps, "package"):
        print(f"{step.__name__}: {step()}")
