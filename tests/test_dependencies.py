import pytest

from typed_struct.dependencies import DependencyRequired, deps_required, has_package


def test_has_package():
    assert has_package("orjson")
    assert not has_package("surely_not_an_installed_package")


def test_deps_required():
    deps_required({"yaml": "pyyaml"})
    with pytest.raises(DependencyRequired) as exc_info:
        deps_required(
            {
                "surely_not_an_installed_package": "surely-not-installed",
                "another_missing_package": "https://example.com/install",
            }
        )

    message = str(exc_info.value)
    assert "pip install surely-not-installed" in message
    assert "Visit https://example.com/install" in message
    assert len(exc_info.value.missing_dependencies) == 2
