"""Allow running as ``python -m nielsen_dcr``."""

from nielsen_dcr.cli import main

if __name__ == "__main__":
    main()
