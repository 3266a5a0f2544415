"""Small file helpers."""

import shutil
import urllib.request


def read_file(path):
    """Return the whole content of the file at ``path`` as text."""
    with open(path, encoding="utf-8") as handle:
        return handle.read()


def download_file(path, url):
    """Fetch ``url`` and write its body to ``path``."""
    with urllib.request.urlopen(url) as response:
        with open(path, "wb") as out:
            shutil.copyfileobj(response, out)