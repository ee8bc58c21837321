import pytest


@pytest.fixture
def sample_entries():
    return [
        {"id": "v1", "keywords": ["cell", "mitosis"], "videoURL": "https://v/1", "title": "Cell division"},
        {"id": "v2", "keywords": ["Newton", "force"], "videoURL": "https://v/2"},
        {"id": "broken", "keywords": ["cell"]},
    ]
