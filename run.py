#!/usr/bin/env python3
"""Run a compiled bundle against the global module registry."""

import logging
import logging.handlers
import sys
from pathlib import Path

# Add project to path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from globalesm.config import load_config, get
from globalesm.core import BundleLoader, install

logger = logging.getLogger(__name__)


def setup_logging():
    """Configure logging from the ``logging`` config section."""
    log_file = get("logging.file")
    log_level = get("logging.level", "INFO")
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    handlers = [logging.StreamHandler()]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)

        # Time-based rotating file handler
        file_handler = logging.handlers.TimedRotatingFileHandler(
            log_file,
            when='midnight',
            interval=1,
            backupCount=1
        )
        file_handler.setFormatter(logging.Formatter(log_format))
        handlers.append(file_handler)

    logging.basicConfig(
        level=getattr(logging, str(log_level).upper()),
        format=log_format,
        handlers=handlers,
    )


def main():
    """Load the bundle named in the configuration."""
    config_path = sys.argv[1] if len(sys.argv) > 1 else None
    load_config(config_path)
    setup_logging()

    install()

    loader = BundleLoader(get("bundle.manifest", "bundle.yaml"))
    loader.load_all_modules()

    status = loader.get_bundle_status()
    logger.info(f"Bundle status: {status['loaded_modules']}/{status['total_modules']} modules initialized")
    for module in status["modules"]:
        logger.info(f"  {module['id']}: {', '.join(module['exports']) or '(no exports)'}")


if __name__ == "__main__":
    main()
