import pytest


@pytest.fixture(autouse=True)
def mistakes_file(settings, tmp_path):
    # Keep recorded mistakes out of the bundled data dir
    settings.STUDYGAMES_MISTAKES_PATH = str(tmp_path / "mistakes.json")
    settings.STUDYGAMES_PREMIUM = False
    return tmp_path / "mistakes.json"
