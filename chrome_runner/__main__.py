import sys

from chrome_runner.main import main

if __name__ == "__main__":
    sys.exit(main())
