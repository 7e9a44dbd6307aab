"""Standalone label export script: QR labels for assets from command line."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sams.app import main


if __name__ == "__main__":
    sys.exit(main())
