import sys

from .main_flow import main

if __name__ == "__main__":
    sys.exit(main())
