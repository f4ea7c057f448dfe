import sys

from courtside.cli import main

if __name__ == "__main__":
    sys.exit(main())
