from tempfile import TemporaryDirectory

import pytest
from django.core.cache import caches
from django.conf import settings


@pytest.fixture(autouse=True)
def clear_all_caches():
    """Reset throttle history and any per-site cache before every test."""
    for alias in settings.CACHES.keys():
        caches[alias].clear()


@pytest.fixture(autouse=True)
def isolated_media_root(settings):
    """Uploaded files land in a throwaway MEDIA_ROOT per test."""
    with TemporaryDirectory() as tmpdir:
        settings.MEDIA_ROOT = tmpdir
        yield tmpdir
