import sys

from streetgallery.app.main import main

if __name__ == "__main__":
    sys.exit(main())
