"""Allow ``python -m ptrcmp``."""

from ptrcmp.main import main

if __name__ == "__main__":
    raise SystemExit(main())
