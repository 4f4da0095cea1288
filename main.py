import sys

from pong_xtreme.app import main

if __name__ == "__main__":
    sys.exit(main())
