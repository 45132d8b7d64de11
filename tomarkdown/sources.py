"""
Reading HTML from files and URLs.

The conversion engine never touches the filesystem or the network; the
command line goes through these helpers to get markup in and Markdown out.
"""

import os
from urllib.parse import urlparse

import requests

from .errors import SourceError

DEFAULT_TIMEOUT = 30

HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    )
}


def is_url(source: str) -> bool:
    """Check if the source looks like an http(s) URL."""
    parsed = urlparse(source)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def fetch_url(url: str, timeout: float = DEFAULT_TIMEOUT) -> str:
    """
    Download a page and return its HTML.

    Raises:
        SourceError: If the request fails or the server answers with an
            error status.
    """
    try:
        response = requests.get(url, headers=HEADERS, timeout=timeout, allow_redirects=True)
        response.raise_for_status()
    except requests.RequestException as e:
        raise SourceError(f"Cannot fetch {url}: {e}") from e
    return response.text


def read_file(file_path: str) -> str:
    """Read an HTML file as UTF-8, replacing undecodable bytes."""
    try:
        with open(file_path, "r", encoding="utf-8", errors="replace") as f:
            return f.read()
    except OSError as e:
        raise SourceError(f"Cannot read {file_path}: {e.strerror or e}") from e


def read_source(source: str, timeout: float = DEFAULT_TIMEOUT) -> str:
    """Return the HTML behind a file path or URL."""
    source = source.strip()
    if is_url(source):
        return fetch_url(source, timeout=timeout)
    if os.path.isfile(source):
        return read_file(source)
    raise SourceError(
        f"Cannot handle source: {source}\n"
        f"Provide a valid file path or URL."
    )


def markdown_filename(source: str) -> str:
    """Generate a .md filename for a file path or URL."""
    source = source.strip()
    if is_url(source):
        parsed = urlparse(source)
        path = parsed.path.strip("/").replace("/", "_") or "index"
        domain = parsed.netloc.replace(".", "_")
        name = f"{domain}_{path}"
        safe_chars = "-_"
    else:
        name, _ = os.path.splitext(os.path.basename(source))
        safe_chars = "-_ "
    safe_name = "".join(c if c.isalnum() or c in safe_chars else "_" for c in name)
    return f"{safe_name}.md"


def save_markdown(md_text: str, source: str, output_dir: str) -> str:
    """Write ``md_text`` next to the others in ``output_dir`` and return the path."""
    os.makedirs(output_dir, exist_ok=True)
    out_path = os.path.join(output_dir, markdown_filename(source))
    with open(out_path, "w", encoding="utf-8") as f:
        f.write(md_text + "\n")
    return out_path
