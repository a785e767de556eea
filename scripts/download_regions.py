"""
Download the simplified France regions boundaries as a GeoJSON.

The source URL and destination come from the ``data`` section of the
project configuration (``regions_url`` and ``regions_path``).  The
destination directory is created if it does not exist.  Each feature carries
the region name in its ``nom`` property, which is the key used by the
baseline table.
"""

from pathlib import Path

import requests

from climatehealth.config import load_config
from climatehealth.paths import resolve


def download_file(url: str, dest: Path) -> None:
    """Download a file from `url` to `dest`. Overwrites existing file."""
    dest.parent.mkdir(parents=True, exist_ok=True)
    with requests.get(url, stream=True, timeout=120) as r:
        r.raise_for_status()
        with open(dest, "wb") as f:
            for chunk in r.iter_content(chunk_size=8192):
                if chunk:
                    f.write(chunk)


def main() -> None:
    cfg = load_config()
    url = cfg.data["regions_url"]
    dest = resolve(cfg.data.get("regions_path", "data/external/regions.geojson"))
    print(f"Downloading GeoJSON from {url[:80]}...")
    download_file(url, dest)
    print(f"Saved GeoJSON to {dest}")


if __name__ == "__main__":
    main()
