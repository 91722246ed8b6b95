import sys

from treatment_checklist.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
