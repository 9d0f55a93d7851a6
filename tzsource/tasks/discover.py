"""List the tz data sources available to the updater."""
from __future__ import annotations

import logging
import sys

from tzsource.catalog.sources import VersionCatalog
from tzsource.config.settings import get_settings
from tzsource.ingest.discovery import SourceDiscovery
from tzsource.utils.logging import setup_logging


def render_catalog(catalog: VersionCatalog) -> list[str]:
    """Return one line per source: the local copy first, then remote versions."""
    local = catalog.local_copy
    lines = [f"{local.label}\t{local.location or '-'}"]
    lines.extend(f"{entry.identifier}\t{entry.location}" for entry in catalog.entries())
    return lines


def main() -> int:
    setup_logging()
    settings = get_settings()
    logger = logging.getLogger("tzsource.tasks.discover")

    logger.info("%s: listing tz data sources from %s", settings.app_name, settings.base_url)
    catalog = VersionCatalog()
    with SourceDiscovery(settings) as discovery:
        result = discovery.find_sources(catalog)

    for line in render_catalog(catalog):
        print(line)
    logger.info("Selected source: %s", catalog.selected_label())
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
