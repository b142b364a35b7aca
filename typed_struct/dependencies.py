import typing
from importlib.util import find_spec


def has_package(package_name: str) -> bool:
    """Check if a package is installed."""
    return find_spec(package_name) is not None


class DependencyRequired(Exception):
    """Raised when a required dependency is missing."""

    def __init__(self, *missing_dependencies: typing.Tuple[str, str]):
        message = "The following dependencies are required but missing:\n"
        for name, url_or_package in missing_dependencies:
            if not url_or_package:
                message += f"{name}: Install the package\n"
            elif url_or_package.startswith("http"):
                message += f"{name}: Visit {url_or_package} for installation.\n"
            else:
                message += f"{name}: Install by running `pip install {url_or_package}`.\n"
        super().__init__(message)
        self.missing_dependencies = missing_dependencies


def deps_required(dependencies: typing.Dict[str, str]) -> None:
    """
    Check that the packages required by a module are installed.

    :param dependencies: A dictionary of required dependencies where the key is the
        import name, and the value is the package URL or name on the package index.
    :raises DependencyRequired: If any of the required dependencies are missing.
    """
    missing = []
    for name, url_or_package in dict(dependencies).items():
        if not has_package(name):
            missing.append((name, url_or_package))

    if missing:
        raise DependencyRequired(*missing)
