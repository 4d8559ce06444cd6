from literally import __version__
from literally.versioning import VERSION, resolve_version


def test_version_matches_project_metadata() -> None:
    assert resolve_version() == "0.3.0"
    assert VERSION == __version__
