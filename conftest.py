import os
import sys

import pytest

# Ensure repo-local imports (e.g., `import nullshot`) resolve without installing.
repo_root = os.path.abspath(os.path.dirname(__file__))
if repo_root not in sys.path:
    sys.path.insert(0, repo_root)


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "-S",
        "--search",
        action="store_true",
        default=False,
        dest="run_search_slow",
        help="Run tests marked with @pytest.mark.search_slow (hard-depth searches)",
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    if config.getoption("run_search_slow"):
        return
    skip_slow = pytest.mark.skip(reason="use -S/--search to enable slow search tests")
    for item in items:
        if "search_slow" in item.keywords:
            item.add_marker(skip_slow)
